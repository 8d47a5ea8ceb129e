# tests/test_auto_fix.py
import pytest

from builders import (
    make_build, make_case, make_catalog, make_cpu, make_gpu, make_motherboard, make_psu,
)
from compatibility.engine import check_compatibility
from models import Build, Issue
from planner.auto_fix import find_fix, generate_auto_fix_plan, performance_rank


def _plan(build, catalog, strategy="cheapest"):
    return generate_auto_fix_plan(build, check_compatibility(build).issues, strategy, catalog)


def _socket_catalog():
    return make_catalog(
        cpus=(make_cpu(id="cpu-14700", socket="LGA1700", tier=7, price=280.0),),
        motherboards=(
            make_motherboard(id="mb-am5-basic", price=150.0),
            make_motherboard(id="mb-am5-premium", price=300.0),
        ),
    )


def _psu_catalog():
    return make_catalog(psus=(
        make_psu(id="psu-750", wattage_w=750, price=90.0),
        make_psu(id="psu-1000", wattage_w=1000, price=180.0),
    ))


def test_unknown_strategy_raises():
    with pytest.raises(ValueError):
        generate_auto_fix_plan(make_build(), [], "fastest", make_catalog())


def test_socket_mismatch_cheapest_fix():
    build = make_build(motherboard=make_motherboard(id="mb-lga", socket="LGA1700"))
    plan = _plan(build, _socket_catalog())
    assert plan.issues_fixed == ("socketMismatch",)
    fix = plan.fixes[0]
    assert fix.action == "replace"
    assert fix.new_part.id == "mb-am5-basic"
    assert fix.price_impact == -50.0
    assert plan.new_compat_result.is_compatible
    assert plan.fixed_build.motherboard.id == "mb-am5-basic"


def test_socket_mismatch_performance_fix():
    build = make_build(motherboard=make_motherboard(id="mb-lga", socket="LGA1700"))
    plan = _plan(build, _socket_catalog(), strategy="performance")
    assert plan.fixes[0].new_part.id == "mb-am5-premium"
    assert plan.fixes[0].performance_impact == "better"
    assert plan.total_price_impact == 100.0


def test_psu_fix_by_strategy():
    build = make_build(psu=make_psu(wattage_w=500))
    cheapest = _plan(build, _psu_catalog())
    assert cheapest.fixes[0].new_part.id == "psu-750"
    performance = _plan(build, _psu_catalog(), strategy="performance")
    assert performance.fixes[0].new_part.id == "psu-1000"
    assert cheapest.new_compat_result.is_compatible
    assert performance.new_compat_result.is_compatible


def test_plan_converges_on_multiple_issues():
    build = make_build(
        motherboard=make_motherboard(id="mb-lga", socket="LGA1700"),
        psu=make_psu(wattage_w=500),
    )
    catalog = make_catalog(
        cpus=_socket_catalog().cpus,
        motherboards=_socket_catalog().motherboards,
        psus=_psu_catalog().psus,
    )
    plan = _plan(build, catalog)
    assert set(plan.issues_fixed) == {"socketMismatch", "insufficientPower"}
    assert plan.issues_remaining == ()
    assert plan.new_compat_result.hard_fails == ()
    assert plan.total_price_impact == sum(f.price_impact for f in plan.fixes)


def test_one_fix_can_resolve_several_issues():
    build = make_build(case=make_case(max_gpu_length_mm=280, max_gpu_thickness_slots=2.0))
    catalog = make_catalog(cases=(make_case(id="case-big", price=130.0),))
    plan = _plan(build, catalog)
    assert len(plan.fixes) == 1
    assert plan.fixes[0].new_part.id == "case-big"
    assert plan.issues_fixed == ("gpuTooLong", "gpuTooThick")


def test_unfixable_issue_stays_remaining():
    build = make_build(psu=make_psu(wattage_w=500))
    plan = _plan(build, make_catalog())
    assert plan.fixes == ()
    assert plan.issues_remaining == ("insufficientPower",)
    assert plan.fixed_build == build
    assert not plan.new_compat_result.is_compatible


def test_fix_must_not_introduce_new_critical():
    build = make_build(psu=make_psu(wattage_w=500))
    # big enough, but too long for the case
    catalog = make_catalog(psus=(make_psu(id="psu-long", wattage_w=1000, length_mm=220),))
    assert _plan(build, catalog).issues_remaining == ("insufficientPower",)


def test_info_notes_are_not_fixed():
    build = Build(cpu=make_cpu(tdp_w=65), gpu=make_gpu(tdp_w=200, power_connectors=()),
                  psu=make_psu(wattage_w=1200, connectors=None))
    plan = _plan(build, _psu_catalog())
    assert plan.fixes == ()
    assert plan.issues_fixed == ()
    assert plan.issues_remaining == ()


def test_find_fix_unknown_issue_id():
    build = make_build()
    unknown = Issue(id="mystery", category="x", severity="critical", title="x", description="x")
    assert find_fix(unknown, build, _psu_catalog(), "cheapest") is None


def test_plan_does_not_modify_build():
    build = make_build(psu=make_psu(wattage_w=500))
    _plan(build, _psu_catalog())
    assert build.psu.specs.wattage_w == 500


def test_performance_rank_orders_psus():
    assert performance_rank(make_psu(wattage_w=1000)) > performance_rank(make_psu(wattage_w=750))
    assert performance_rank(make_psu(atx_standard="ATX2.x", wattage_w=1200)) < performance_rank(make_psu())
