# tests/test_power_connectors.py
from builders import make_gpu, make_psu
from compatibility.engine import check_compatibility
from compatibility.power_connectors import (
    ConnectorCounts, check_atx_standard, check_connector_supply, check_power_connectors, infer_pcie_connectors,
    parse_gpu_connectors,
)
from models import PSUConnectors, Build


def _ids(issues):
    return [i.id for i in issues]


def test_parse_free_form_connectors():
    assert parse_gpu_connectors(["2x8pin"]).pin_8 == 2
    counts = parse_gpu_connectors(["1x8pin+1x6pin"])
    assert (counts.pin_8, counts.pin_6) == (1, 1)
    assert parse_gpu_connectors(["16-pin"]).pin_16 == 1
    assert parse_gpu_connectors(["1x12VHPWR"]).pin_16 == 1
    assert parse_gpu_connectors(["8-pin", "8-pin"]).pin_8 == 2


def test_parse_hyphenated_counted_connectors():
    assert parse_gpu_connectors(["1x16-pin"]) == ConnectorCounts(pin_16=1)
    assert parse_gpu_connectors(["2x 16-pin"]) == ConnectorCounts(pin_16=2)
    assert parse_gpu_connectors(["2x8-pin"]) == ConnectorCounts(pin_8=2)
    assert parse_gpu_connectors(["1x12V-2x6"]) == ConnectorCounts(pin_16=1)
    assert parse_gpu_connectors(["2x 6+2-pin"]) == ConnectorCounts(pin_8=2)


def test_hyphenated_16pin_gpu_without_adapter_path_fails():
    build = Build(
        gpu=make_gpu(power_connectors=("1x16-pin",)),
        psu=make_psu(wattage_w=1000, connectors=PSUConnectors(pin_8_pcie=1)),
    )
    result = check_compatibility(build)
    assert [i.id for i in result.hard_fails] == ["missing-12vhpwr"]



def test_eight_pin_equivalent():
    counts = parse_gpu_connectors(["16-pin", "6-pin"])
    assert counts.eight_pin_equivalent == 2.5


def test_infer_pcie_connectors_by_wattage():
    assert infer_pcie_connectors(550) == 1
    assert infer_pcie_connectors(650) == 2
    assert infer_pcie_connectors(850) == 3
    assert infer_pcie_connectors(1000) == 4


def test_connector_supply_without_gpu_connectors():
    assert check_connector_supply(make_gpu(power_connectors=()), make_psu(connectors=None)) is None


def test_native_12vhpwr_passes():
    gpu = make_gpu(power_connectors=("16-pin",))
    assert check_power_connectors(gpu, make_psu()) == []


def test_adapter_warning_with_two_8pin():
    gpu = make_gpu(power_connectors=("16-pin",), tdp_w=200, peak_power_w=None)
    psu = make_psu(connectors=PSUConnectors(pin_8_pcie=2))
    issues = check_power_connectors(gpu, psu)
    assert _ids(issues) == ["missing-12vhpwr"]
    assert issues[0].severity == "warning"


def test_adapter_transient_risk_for_high_peak_gpu():
    gpu = make_gpu(power_connectors=("16-pin",), tdp_w=450)
    psu = make_psu(connectors=PSUConnectors(pin_8_pcie=3))
    issues = check_power_connectors(gpu, psu)
    assert _ids(issues) == ["missing-12vhpwr", "adapter-transient-risk"]
    assert "~675W" in issues[1].description


def test_no_adapter_possible_is_critical():
    gpu = make_gpu(power_connectors=("16-pin",))
    psu = make_psu(connectors=PSUConnectors(pin_8_pcie=1))
    issues = check_power_connectors(gpu, psu)
    assert issues[0].id == "missing-12vhpwr"
    assert issues[0].severity == "critical"


def test_not_enough_12vhpwr():
    gpu = make_gpu(power_connectors=("2x16pin",))
    psu = make_psu(connectors=PSUConnectors(pin_16_12vhpwr=1))
    assert _ids(check_power_connectors(gpu, psu)) == ["insufficient-12vhpwr"]


def test_not_enough_8pin():
    gpu = make_gpu(power_connectors=("3x8pin",))
    psu = make_psu(connectors=PSUConnectors(pin_8_pcie=2))
    issues = check_power_connectors(gpu, psu)
    assert _ids(issues) == ["insufficient-8pin"]
    assert issues[0].evidence.values["Shortage"] == "1 connectors"


def test_8pin_plugs_feed_6pin_sockets():
    gpu = make_gpu(power_connectors=("1x8pin+1x6pin",))
    assert check_power_connectors(gpu, make_psu(connectors=PSUConnectors(pin_8_pcie=2))) == []

    short = check_power_connectors(gpu, make_psu(connectors=PSUConnectors(pin_8_pcie=1)))
    assert _ids(short) == ["insufficient-6pin"]


def test_atx2_psu_with_16pin_gpu_note():
    gpu = make_gpu(power_connectors=("16-pin",))
    psu = make_psu(atx_standard="ATX2.x", connectors=PSUConnectors(pin_8_pcie=4))
    issue = check_atx_standard(gpu, psu)
    assert issue.id == "atx-2-with-modern-gpu"
    assert issue.severity == "info"


def test_atx3_psu_or_native_plug_needs_no_note():
    gpu = make_gpu(power_connectors=("16-pin",))
    assert check_atx_standard(gpu, make_psu()) is None
    assert check_atx_standard(gpu, make_psu(connectors=None, atx_standard="ATX3.1")) is None
    assert check_atx_standard(make_gpu(), make_psu(atx_standard="ATX2.x")) is None
