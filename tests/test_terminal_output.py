# tests/test_terminal_output.py
from builders import make_build, make_catalog, make_cpu, make_motherboard, make_psu
from compatibility.engine import check_compatibility
from models import Build
from output.terminal import render_report
from planner.auto_fix import generate_auto_fix_plan
from planner.recommendations import get_recommendations
from planner.upgrade_path import generate_upgrade_path
from scoring.engine import calculate_scores


def _evaluate(build):
    compat = check_compatibility(build)
    return compat, calculate_scores(build, compat)


def test_render_report_returns_string():
    build = make_build()
    compat, scores = _evaluate(build)
    output = render_report(build, compat, scores)
    assert "CPU cpu-7700x" in output
    assert "Compatible" in output
    assert "No issues found." in output
    assert f"Overall: {scores.overall}" in output


def test_render_report_lists_issues_and_fixes():
    build = make_build(psu=make_psu(wattage_w=500))
    compat, scores = _evaluate(build)
    catalog = make_catalog(psus=(make_psu(id="psu-750", name="Gold 750W", wattage_w=750, price=90.0),))
    plan = generate_auto_fix_plan(build, compat.issues, "cheapest", catalog)
    output = render_report(build, compat, scores, plan=plan)
    assert "Not compatible" in output
    assert "Insufficient PSU wattage" in output
    assert "Auto-fix plan (cheapest)" in output
    assert "Gold 750W" in output
    assert "Fixed build: compatible" in output


def test_render_report_upgrades():
    build = make_build()
    compat, scores = _evaluate(build)
    catalog = make_catalog(cpus=(make_cpu(id="cpu-9900x", name="Ryzen 9 9900X", tier=9, price=450.0),))
    upgrades = generate_upgrade_path(build, scores, 1000, catalog)
    output = render_report(build, compat, scores, upgrades=upgrades)
    assert "Upgrade path" in output
    assert "Ryzen 9 9900X" in output


def test_render_report_no_upgrades():
    build = make_build()
    compat, scores = _evaluate(build)
    output = render_report(build, compat, scores, upgrades=[])
    assert "No upgrades found within budget." in output


def test_render_empty_build():
    build = Build()
    compat, scores = _evaluate(build)
    output = render_report(build, compat, scores)
    assert "No parts selected" in output


def test_render_incompatible_build_overall():
    build = make_build(motherboard=make_motherboard(socket="LGA1700"))
    compat, scores = _evaluate(build)
    output = render_report(build, compat, scores)
    assert "Socket mismatch" in output
    assert "Overall: 0" in output


def test_render_report_recommendations():
    build = make_build(psu=make_psu(wattage_w=500))
    compat, scores = _evaluate(build)
    catalog = make_catalog(
        psus=(make_psu(id="psu-750", name="Gold 750W", wattage_w=750, price=90.0),),
        cpus=(make_cpu(id="cpu-9900x", name="Ryzen 9 9900X", tier=9, price=450.0),),
    )
    recs = get_recommendations(build, compat, catalog)
    output = render_report(build, compat, scores, recommendations=recs)
    assert "Suggestions" in output
    assert "750W for better headroom" in output
    assert "Alternative: Switch to Ryzen 9 9900X" in output
