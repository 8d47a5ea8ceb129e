import os
from builders import make_build, make_catalog, make_psu
from compatibility.engine import check_compatibility
from output.html import render_html_report, update_index
from planner.auto_fix import generate_auto_fix_plan
from planner.recommendations import get_recommendations
from scoring.engine import calculate_scores


def test_render_html_report_creates_file(tmp_path):
    build = make_build(psu=make_psu(wattage_w=500))
    compat = check_compatibility(build)
    scores = calculate_scores(build, compat)
    filepath = render_html_report(build, compat, scores, preset="gaming-1440p", output_dir=str(tmp_path))
    assert os.path.exists(filepath)
    assert os.path.basename(filepath).startswith("build_report_")
    with open(filepath) as f:
        content = f.read()
    assert "CPU cpu-7700x" in content
    assert "Insufficient PSU wattage" in content
    assert "gaming-1440p" in content
    assert "PSU wattage: 500W" in content
    assert "-100 Insufficient PSU wattage" in content
    assert "sortTable" in content


def test_render_html_report_with_plan_and_upgrades(tmp_path):
    build = make_build(psu=make_psu(wattage_w=500))
    compat = check_compatibility(build)
    scores = calculate_scores(build, compat)
    catalog = make_catalog(psus=(make_psu(id="psu-750", name="Gold 750W", wattage_w=750, price=90.0),))
    plan = generate_auto_fix_plan(build, compat.issues, "cheapest", catalog)
    filepath = render_html_report(build, compat, scores, upgrades=[], plan=plan, output_dir=str(tmp_path))
    with open(filepath) as f:
        content = f.read()
    assert "Auto-fix Plan (cheapest)" in content
    assert "Gold 750W" in content
    assert "No upgrades found within budget." in content


def test_render_html_report_clean_build(tmp_path):
    build = make_build()
    compat = check_compatibility(build)
    filepath = render_html_report(build, compat, calculate_scores(build, compat), output_dir=str(tmp_path))
    with open(filepath) as f:
        content = f.read()
    assert "No issues found." in content
    assert "Upgrade Path" not in content


def test_update_index(tmp_path):
    report = tmp_path / "build_report_2026-02-15_140000.html"
    report.write_text("<html></html>")
    (tmp_path / "notes.html").write_text("<html></html>")
    update_index(str(tmp_path))
    index = tmp_path / "index.html"
    assert index.exists()
    assert "build_report_2026-02-15_140000.html" in index.read_text()
    assert "notes.html" not in index.read_text()


def test_render_html_report_with_recommendations(tmp_path):
    build = make_build(psu=make_psu(wattage_w=500))
    compat = check_compatibility(build)
    catalog = make_catalog(psus=(make_psu(id="psu-750", name="Gold 750W", wattage_w=750, price=90.0),))
    recs = get_recommendations(build, compat, catalog)
    filepath = render_html_report(
        build, compat, calculate_scores(build, compat), recommendations=recs, output_dir=str(tmp_path),
    )
    with open(filepath) as f:
        content = f.read()
    assert "suggestionsTable" in content
    assert "750W for better headroom" in content
