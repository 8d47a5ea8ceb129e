# tests/test_models.py
import pytest

from builders import make_build, make_cpu, make_gpu, make_storage
from models import (
    Build, ComponentDataError, CompatibilityResult, Issue, PSUSpecs, StorageSpecs, part_from_dict,
)


def test_part_from_dict_builds_typed_part():
    part = part_from_dict("cpu", {
        "id": "cpu-1",
        "name": "Ryzen 7 7700X",
        "price_usd": 299,
        "specs": {"socket": "AM5", "cores": 8, "tier": 7, "unknown_field": "ignored"},
    })
    assert part.category == "cpu"
    assert part.specs.socket == "AM5"
    assert part.specs.tier == 7
    assert part.price == 299


def test_part_from_dict_missing_discriminant_raises():
    with pytest.raises(ComponentDataError):
        part_from_dict("cpu", {"id": "cpu-1", "specs": {"cores": 8}})


def test_part_from_dict_unknown_category_raises():
    with pytest.raises(ComponentDataError):
        part_from_dict("monitor", {"id": "m-1", "specs": {}})


def test_part_from_dict_nested_connectors():
    psu = part_from_dict("psu", {
        "id": "psu-1",
        "specs": {"wattage_w": 850, "connectors": {"pin_8_pcie": 4, "pin_16_12vhpwr": 1}},
    })
    assert psu.specs.connectors.pin_8_pcie == 4
    assert psu.specs.connectors.pin_16_12vhpwr == 1


def test_missing_price_counts_as_zero():
    cpu = make_cpu(price=None)
    assert cpu.price == 0.0


def test_build_rejects_part_in_wrong_slot():
    with pytest.raises(ComponentDataError):
        Build(cpu=make_gpu())


def test_with_part_returns_new_build():
    build = make_build()
    faster = make_cpu(id="cpu-9950x", tier=10)
    updated = build.with_part("cpu", faster)
    assert updated.cpu.id == "cpu-9950x"
    assert build.cpu.id == "cpu-7700x"


def test_storage_helpers():
    build = make_build(storage=())
    assert not build.has("storage")
    assert build.get("storage") is None

    build = build.with_storage_added(make_storage(id="a"))
    build = build.with_storage_added(make_storage(id="b", interface="SATA", capacity_gb=2000))
    assert len(build.storage) == 2
    assert len(build.nvme_drives) == 1
    assert build.total_storage_gb == 3000


def test_total_price_and_round_trip():
    build = make_build()
    assert build.total_price() == pytest.approx(300 + 550 + 200 + 110 + 80 + 120 + 60 + 100)
    restored = Build.from_dict(build.to_dict())
    assert restored == build


def test_without_clears_slot():
    build = make_build().without("gpu")
    assert build.gpu is None
    assert "gpu" not in [p.category for p in build.parts()]


def test_psu_standard_from_legacy_version():
    assert PSUSpecs(wattage_w=750, atx_version="3.0").is_atx3
    assert PSUSpecs(wattage_w=750, atx_version="2.x").standard == "ATX2.x"
    assert PSUSpecs(wattage_w=750).standard is None


def test_storage_35_inch_detection():
    assert StorageSpecs(interface="SATA", form_factor='3.5" SATA').is_35_inch
    assert StorageSpecs(interface="SATA", physical_size="3.5").is_35_inch
    assert not StorageSpecs(interface="NVMe", form_factor="M.2 2280").is_35_inch


def test_issue_rejects_unknown_severity():
    with pytest.raises(ValueError):
        Issue(id="x", category="power", severity="fatal", title="x", description="x")


def test_issue_drops_empty_affected_parts():
    issue = Issue(id="x", category="power", severity="info", title="x", description="x",
                  affected_parts=("psu-1", "", None))
    assert issue.affected_parts == ("psu-1",)


def test_compatibility_result_issue_order():
    def issue(id, severity):
        return Issue(id=id, category="c", severity=severity, title=id, description=id)

    result = CompatibilityResult(
        is_compatible=False,
        hard_fails=(issue("a", "critical"),),
        warnings=(issue("b", "warning"),),
        notes=(issue("c", "info"),),
    )
    assert result.issue_ids() == ["a", "b", "c"]
