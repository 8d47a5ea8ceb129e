# tests/test_cooling.py
from builders import make_case, make_cooler, make_cpu, make_gpu, make_psu, make_storage
from compatibility.cooling import assess_cooling, check_cooling_adequacy
from compatibility.drive_clearance import check_35_drive_clearance


def _hdd(id="hdd"):
    return make_storage(id=id, interface="SATA", form_factor='3.5" SATA', capacity_gb=4000)


def test_assess_cooling_ratings():
    cpu = make_cpu(tdp_w=100)
    expected = {160: "excellent", 130: "good", 110: "adequate", 100: "marginal", 90: "insufficient"}
    for rating_w, rating in expected.items():
        assert assess_cooling(cpu, make_cooler(tdp_rating_w=rating_w)).rating == rating


def test_assess_cooling_needs_both_ratings():
    assert assess_cooling(make_cpu(tdp_w=None), make_cooler(tdp_rating_w=200)) is None
    assert assess_cooling(make_cpu(), make_cooler()) is None


def test_insufficient_cooler_is_critical():
    issue = check_cooling_adequacy(make_cpu(tdp_w=170), make_cooler(tdp_rating_w=150))
    assert issue.id == "cooling-insufficient"
    assert issue.severity == "critical"
    # 170 * 1.2 rounded up to the next 10W
    assert issue.suggested_fixes[0] == "Choose cooler with 210W+ TDP rating"


def test_marginal_cooler_is_warning():
    issue = check_cooling_adequacy(make_cpu(tdp_w=120), make_cooler(tdp_rating_w=125))
    assert issue.id == "cooling-marginal"
    assert issue.severity == "warning"


def test_good_cooler_is_info():
    issue = check_cooling_adequacy(make_cpu(tdp_w=100), make_cooler(tdp_rating_w=130))
    assert issue.id == "cooling-good"
    assert issue.severity == "info"
    assert issue.title == "Good Cooling"


def test_35_drive_without_cage_reduction_is_ignored():
    assert check_35_drive_clearance(make_case(), (_hdd(),), make_gpu()) is None


def test_35_drive_with_room_to_spare_is_info():
    case = make_case(max_gpu_length_mm=360, drive_35_reduces_gpu_length=30, drive_35_conflicts_with="gpu")
    issue = check_35_drive_clearance(case, (_hdd(),), make_gpu(length_mm=300))
    assert issue.id == "drive-35-clearance-info"
    assert "reduce GPU clearance by 30mm" in issue.description


def test_35_drive_tight_gpu_clearance_is_noted():
    case = make_case(max_gpu_length_mm=340, drive_35_reduces_gpu_length=35)
    issue = check_35_drive_clearance(case, (_hdd(),), make_gpu(length_mm=300))
    assert issue.severity == "info"
    assert "very tight" in issue.description


def test_35_drive_blocking_psu_is_critical():
    case = make_case(max_psu_length_mm=None, drive_35_reduces_psu_length=40)
    issue = check_35_drive_clearance(case, (_hdd(), _hdd("hdd2")), psu=make_psu(length_mm=160))
    assert issue.id == "drive-35-clearance-conflict"
    assert issue.severity == "critical"
    assert "drives" in issue.description
    assert "psu-850" in issue.affected_parts
