# tests/test_integration.py
"""End-to-end run over JSON build and catalog files."""
import json
import sys

from builders import make_build, make_catalog, make_cpu, make_psu
from catalog import load_build, load_catalog
from compatibility.engine import CheckOptions, check_compatibility
from planner.auto_fix import generate_auto_fix_plan
from planner.upgrade_path import generate_upgrade_path
from scoring.engine import calculate_scores


def _write_inputs(tmp_path):
    build = make_build(psu=make_psu(wattage_w=500))
    catalog = make_catalog(
        cpus=(make_cpu(id="cpu-9900x", name="Ryzen 9 9900X", tier=9, price=450.0),),
        psus=(
            make_psu(id="psu-750", name="Gold 750W", wattage_w=750, price=90.0),
            make_psu(id="psu-1000", name="Platinum 1000W", wattage_w=1000, price=180.0),
        ),
    )
    build_path = tmp_path / "build.json"
    build_path.write_text(json.dumps(build.to_dict()))
    catalog_path = tmp_path / "catalog.json"
    catalog_path.write_text(json.dumps({
        "cpus": [p.to_dict() for p in catalog.cpus],
        "psus": [p.to_dict() for p in catalog.psus],
    }))
    return str(build_path), str(catalog_path)


def test_full_pipeline(tmp_path):
    build_path, catalog_path = _write_inputs(tmp_path)
    build = load_build(build_path)
    catalog = load_catalog(catalog_path)

    compat = check_compatibility(build, CheckOptions(preset="gaming-1440p"))
    assert not compat.is_compatible

    scores = calculate_scores(build, compat, preset="gaming-1440p")
    assert scores.overall == 0

    plan = generate_auto_fix_plan(build, compat.issues, "cheapest", catalog, preset="gaming-1440p")
    assert plan.new_compat_result.is_compatible
    assert plan.fixed_build.psu.id == "psu-750"

    fixed_compat = plan.new_compat_result
    fixed_scores = calculate_scores(plan.fixed_build, fixed_compat, preset="gaming-1440p")
    upgrades = generate_upgrade_path(plan.fixed_build, fixed_scores, 1000, catalog, preset="gaming-1440p")
    assert all(o.total_cost <= 1200 for o in upgrades)
    assert fixed_scores.overall > scores.overall


def test_main_writes_report(tmp_path, monkeypatch, capsys):
    build_path, catalog_path = _write_inputs(tmp_path)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", [
        "main.py", f"--build={build_path}", f"--catalog={catalog_path}", "--preset=gaming-1440p",
        "--strategy=performance", "--budget=800", "--html",
    ])
    import main

    assert main.main() == 0
    out = capsys.readouterr().out
    assert "Auto-fix plan (performance)" in out
    assert "Platinum 1000W" in out
    assert "Yearly energy cost" in out
    assert "Suggestions" in out
    assert (tmp_path / "results" / "index.html").exists()


def test_main_missing_build(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", ["main.py", f"--build={tmp_path / 'none.json'}"])
    import main

    assert main.main() == 1
