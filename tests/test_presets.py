# tests/test_presets.py
from builders import make_case, make_cpu, make_gpu, make_ram
from presets import (
    estimate_fps, evaluate_target_fit, filter_by_preset, get_preset, get_target_by_id, is_gaming,
    score_part_for_preset,
)


def test_get_preset_unknown_falls_back_to_custom():
    assert get_preset("nonexistent").id == "custom"
    assert get_preset("gaming-1440p").gpu_weight == 0.7


def test_is_gaming():
    assert is_gaming("gaming-4k")
    assert not is_gaming("creator")
    assert not is_gaming("custom")


def test_get_target_by_id():
    assert get_target_by_id("1440p-165").min_gpu_tier == 8
    assert get_target_by_id("video-4k").ram_min == 64
    assert get_target_by_id("8k-240") is None


def test_game_target_met_and_exceeded():
    target = get_target_by_id("1080p-60")
    evaluation = evaluate_target_fit(target, cpu_tier=7, gpu_tier=8, ram_gb=32)
    assert evaluation.meets_target
    assert evaluation.cpu_fit == "exceeds"
    assert evaluation.gpu_fit == "exceeds"
    assert evaluation.ram_fit == "exceeds"
    assert evaluation.bottleneck == "none"


def test_game_target_gpu_bottleneck():
    target = get_target_by_id("4k-60")
    evaluation = evaluate_target_fit(target, cpu_tier=7, gpu_tier=6, ram_gb=16)
    assert not evaluation.meets_target
    assert evaluation.gpu_fit == "below"
    assert evaluation.bottleneck == "gpu"
    assert "GPU" in evaluation.recommendation


def test_high_refresh_target_wants_32gb():
    target = get_target_by_id("1080p-144")
    evaluation = evaluate_target_fit(target, cpu_tier=7, gpu_tier=7, ram_gb=16)
    assert evaluation.ram_fit == "below"
    assert evaluation.meets_target
    assert evaluation.bottleneck == "ram"


def test_creator_target_ram_shortfall():
    target = get_target_by_id("video-4k")
    evaluation = evaluate_target_fit(target, cpu_tier=9, gpu_tier=8, ram_gb=32)
    assert not evaluation.meets_target
    assert evaluation.ram_fit == "below"
    assert evaluation.cpu_fit == "exceeds"


def test_filter_by_preset_sff_keeps_compact_parts():
    small = make_case(id="itx", form_factor="Mini-ITX", max_gpu_length_mm=300)
    big = make_case(id="atx")
    assert filter_by_preset("sff", "case", [small, big]) == [small]
    assert filter_by_preset("custom", "case", [small, big]) == [small, big]


def test_filter_by_preset_gaming_gpu_tiers():
    gpus = [make_gpu(id="low", tier=3), make_gpu(id="mid", tier=8), make_gpu(id="top", tier=10)]
    kept = [g.id for g in filter_by_preset("gaming-1440p", "gpu", gpus)]
    assert kept == ["mid"]


def test_score_part_for_preset():
    assert score_part_for_preset("creator", "cpu", make_cpu(tier=8, cores=12)) == 125
    assert score_part_for_preset("creator", "cpu", make_cpu(tier=5, cores=6)) == 70
    assert score_part_for_preset("gaming-4k", "gpu", make_gpu(tier=9)) == 110
    assert score_part_for_preset("gaming-4k", "ram", make_ram(capacity_gb=32)) == 115
    assert score_part_for_preset("custom", "gpu", make_gpu()) == 100


def test_estimate_fps_1080p_60():
    fps = estimate_fps(make_cpu(tier=7), make_gpu(tier=7), get_target_by_id("1080p-60"))
    assert fps.likely == 100
    assert fps.min == 85
    assert fps.min <= fps.likely <= fps.max
    assert fps.settings_quality == "Ultra"
    assert fps.confidence == "high"


def test_estimate_fps_needs_cpu_and_gpu():
    assert estimate_fps(None, make_gpu(), get_target_by_id("1080p-60")) is None
