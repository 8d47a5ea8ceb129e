# tests/test_scoring.py
import json

import pytest

from builders import make_build, make_case, make_cpu, make_gpu, make_motherboard, make_psu
from compatibility.engine import check_compatibility
from models import Build, CompatibilityResult, Issue
from scoring.compatibility_score import calculate_compatibility_score
from scoring.engine import calculate_overall, calculate_scores
from scoring.performance_score import calculate_performance_score, tier_to_score
from scoring.usability_score import calculate_usability_score
from scoring.value_score import calculate_value_score, tier_mid_price
from presets import get_target_by_id


def _issue(id, severity):
    return Issue(id=id, category="test", severity=severity, title=id, description=f"{id} description")


def test_two_warnings_cost_30_points():
    compat = CompatibilityResult(
        is_compatible=True, warnings=(_issue("a", "warning"), _issue("b", "warning")), confidence=90,
    )
    score = calculate_compatibility_score(compat)
    assert score.value == 70
    assert score.confidence == 90
    assert [item.impact for item in score.breakdown] == [-15, -15]
    assert "because: a, b" in score.summary


def test_notes_cost_5_points():
    compat = CompatibilityResult(is_compatible=True, notes=(_issue("n", "info"),))
    assert calculate_compatibility_score(compat).value == 95


def test_hard_fail_zeroes_compatibility():
    compat = CompatibilityResult(is_compatible=False, hard_fails=(_issue("x", "critical"),))
    score = calculate_compatibility_score(compat)
    assert score.value == 0
    assert score.breakdown[0].impact == -100
    assert "1 critical" in score.summary


def test_clean_build_scores():
    build = make_build()
    scores = calculate_scores(build, check_compatibility(build))
    assert scores.compatibility.value == 100
    assert scores.performance.value == 72
    assert scores.value.value == 48
    assert scores.usability.value == 100
    # 100*0.4 + 72*0.3 + 48*0.15 + 100*0.15
    assert scores.overall == 84


def test_incompatible_build_overall_is_half_compat():
    build = make_build(motherboard=make_motherboard(socket="LGA1700"))
    compat = check_compatibility(build)
    scores = calculate_scores(build, compat)
    assert scores.compatibility.value == 0
    assert scores.overall == 0


def test_overall_override_below_50():
    assert calculate_overall(45, 100, 100, 100) == 23
    assert calculate_overall(49, 100, 100, 100) == 25
    assert calculate_overall(50, 100, 100, 100) == 80


def test_tier_to_score():
    assert tier_to_score(1) == 0
    assert tier_to_score(10) == 100


def test_performance_without_gpu():
    build = Build(cpu=make_cpu(tier=7))
    score = calculate_performance_score(build)
    assert score.value == 47
    assert score.confidence == 80
    assert any(item.factor == "No dedicated GPU" and item.impact == -20 for item in score.breakdown)


def test_performance_gaming_imbalance_penalty():
    build = make_build(cpu=make_cpu(tier=10), gpu=make_gpu(tier=5))
    score = calculate_performance_score(build, "gaming-1080p")
    assert score.value == 51
    assert "Consider upgrading the GPU" in score.summary


def test_performance_target_met():
    score = calculate_performance_score(make_build(), target=get_target_by_id("1080p-60"))
    assert score.value == 95
    assert score.target_evaluation.meets_target
    assert any(item.factor == "Estimated FPS" for item in score.breakdown)


def test_performance_target_gpu_short():
    score = calculate_performance_score(make_build(), target=get_target_by_id("1440p-165"))
    # 50 base, -20 GPU below, +5 RAM headroom
    assert score.value == 35
    assert score.target_evaluation.bottleneck == "gpu"
    assert "Bottleneck: GPU" in score.summary


def test_unknown_target_falls_back_to_preset():
    build = make_build()
    scores = calculate_scores(build, check_compatibility(build), target_id="8k-240")
    assert scores.performance.target_evaluation is None
    assert scores.performance.value == 72


def test_value_estimates_missing_prices():
    assert tier_mid_price(7, "cpu") == pytest.approx(500)
    score = calculate_value_score(make_build(cpu=make_cpu(price=None)))
    assert score.confidence == 40
    assert "estimated" in score.summary


def test_value_gaming_imbalance_penalty():
    balanced = calculate_value_score(make_build(), "gaming-1440p")
    lopsided = calculate_value_score(
        make_build(cpu=make_cpu(tier=10), gpu=make_gpu(tier=5)), "gaming-1440p",
    )
    assert any(item.factor == "Balanced components" for item in balanced.breakdown)
    assert any(item.factor == "Component imbalance" for item in lopsided.breakdown)


def test_usability_low_headroom():
    score = calculate_usability_score(make_build(psu=make_psu(wattage_w=600)))
    # 80 - 15 (headroom) - 10 (noise) + 10 (RAM slots) + 5 (M.2)
    assert score.value == 70


def test_usability_compact_case_thermals():
    build = Build(
        cpu=make_cpu(tdp_w=150), gpu=make_gpu(tdp_w=320), case=make_case(form_factor="Mini-ITX"),
    )
    score = calculate_usability_score(build)
    # no PSU (0) and high TDP in Mini-ITX (-10)
    assert score.value == 70
    assert score.breakdown[0].factor == "PSU headroom"
    assert score.breakdown[0].impact == 0


def test_results_serialise_to_json():
    build = make_build(psu=make_psu(wattage_w=500))
    compat = check_compatibility(build)
    scores = calculate_scores(build, compat)
    assert json.loads(json.dumps(compat.to_dict()))["hard_fails"][0]["id"] == "insufficientPower"
    assert json.loads(json.dumps(scores.to_dict()))["overall"] == 0
