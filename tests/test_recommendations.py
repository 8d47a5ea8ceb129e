# tests/test_recommendations.py
from builders import make_build, make_case, make_catalog, make_cpu, make_gpu, make_psu
from compatibility.engine import check_compatibility
from models import Build
from planner.recommendations import get_recommendations


def _recommend(build, catalog, **kwargs):
    return get_recommendations(build, check_compatibility(build), catalog, **kwargs)


def _ids(suggestions):
    return [s.suggested_part.id for s in suggestions]


def _gpu_catalog():
    return make_catalog(gpus=(
        make_gpu(id="gpu-short", length_mm=270, tier=7),
        make_gpu(id="gpu-short-slow", length_mm=260, tier=5),
        make_gpu(id="gpu-long-fast", length_mm=340, tier=9),
    ))


def test_gpu_too_long_suggests_gpus_that_fit():
    build = make_build(case=make_case(max_gpu_length_mm=280))
    recs = _recommend(build, _gpu_catalog())
    first = recs.upgrades[0]
    assert first.suggested_part.id == "gpu-short"
    assert first.reason == "Fits case (270mm <= 280mm)"
    assert first.price_delta == 0.0
    assert first.score_delta > 0
    assert "gpu-short-slow" not in _ids(recs.upgrades)


def test_too_long_gpu_is_not_a_fallback_suggestion():
    build = make_build(case=make_case(max_gpu_length_mm=280))
    assert "gpu-long-fast" not in _ids(_recommend(build, _gpu_catalog()).upgrades)


def test_insufficient_power_suggests_bigger_psus_smallest_first():
    build = make_build(psu=make_psu(wattage_w=500))
    catalog = make_catalog(psus=(
        make_psu(id="psu-1600", wattage_w=1600, price=400.0),
        make_psu(id="psu-650", wattage_w=650, price=70.0),
        make_psu(id="psu-1000", wattage_w=1000, price=180.0),
        make_psu(id="psu-750", wattage_w=750, price=90.0),
        make_psu(id="psu-1200", wattage_w=1200, price=250.0),
    ))
    recs = _recommend(build, catalog)
    assert _ids(recs.upgrades) == ["psu-750", "psu-1000", "psu-1200"]
    assert recs.upgrades[0].price_delta == -30.0
    assert recs.upgrades[0].reason == "750W for better headroom"


def test_weak_cpu_gets_same_socket_suggestions():
    build = make_build(cpu=make_cpu(tier=4), gpu=make_gpu(tier=9))
    catalog = make_catalog(cpus=(
        make_cpu(id="cpu-9700x", tier=8),
        make_cpu(id="cpu-7600", tier=6),
        make_cpu(id="cpu-14900k", socket="LGA1700", tier=9),
        make_cpu(id="cpu-9950x", tier=10),
    ))
    recs = _recommend(build, catalog)
    assert _ids(recs.upgrades) == ["cpu-9950x", "cpu-9700x"]
    assert all(s.reason == "Better CPU/GPU balance" for s in recs.upgrades)


def test_healthy_build_falls_back_to_next_tier_gpu():
    build = make_build()
    catalog = make_catalog(gpus=(
        make_gpu(id="gpu-huge", length_mm=400, tier=9),
        make_gpu(id="gpu-5080", length_mm=320, tier=9),
    ))
    recs = _recommend(build, catalog)
    assert _ids(recs.upgrades) == ["gpu-5080"]
    assert recs.upgrades[0].reason == "Higher tier (9 vs 7)"


def test_alternatives():
    build = make_build()
    catalog = make_catalog(
        cpus=(
            make_cpu(id="cpu-7600", name="Ryzen 5 7600", tier=5),
            make_cpu(id="cpu-9900x", name="Ryzen 9 9900X", tier=9),
        ),
        gpus=(
            make_gpu(id="gpu-huge", name="Huge GPU", length_mm=400, tier=9),
            make_gpu(id="gpu-5080", name="RTX 5080", length_mm=320, tier=9),
        ),
    )
    alternatives = _recommend(build, catalog).alternatives
    assert [a.label for a in alternatives] == ["Switch to Ryzen 5 7600", "Upgrade to RTX 5080"]
    assert alternatives[0].score_impact == "Better value"
    assert alternatives[1].score_impact == "+6 performance"
    assert alternatives[1].swaps[0].from_name == build.gpu.name


def test_upgrades_are_capped():
    build = make_build(
        cpu=make_cpu(tier=4),
        gpu=make_gpu(tier=9),
        psu=make_psu(wattage_w=500),
        case=make_case(max_gpu_length_mm=280),
    )
    catalog = make_catalog(
        gpus=(make_gpu(id="gpu-a", length_mm=270, tier=9), make_gpu(id="gpu-b", length_mm=260, tier=8)),
        psus=tuple(make_psu(id=f"psu-{w}", wattage_w=w) for w in (750, 1000, 1200)),
        cpus=(make_cpu(id="cpu-a", tier=10), make_cpu(id="cpu-b", tier=9)),
    )
    recs = _recommend(build, catalog)
    assert [s.category for s in recs.upgrades] == ["gpu", "gpu", "psu", "psu", "psu", "cpu"]
    assert recs.upgrades[-1].suggested_part.id == "cpu-a"


def test_preset_filters_candidates():
    build = make_build(case=make_case(max_gpu_length_mm=280))
    # gaming-4k wants tier 9+ GPUs; the only one is too long
    recs = _recommend(build, _gpu_catalog(), preset="gaming-4k")
    assert recs.upgrades == ()


def test_empty_build_and_catalog():
    recs = _recommend(Build(), make_catalog())
    assert recs.upgrades == ()
    assert recs.alternatives == ()


def test_to_dict():
    build = make_build(psu=make_psu(wattage_w=500))
    data = _recommend(build, make_catalog(psus=(make_psu(id="psu-750", wattage_w=750),))).to_dict()
    assert data["upgrades"][0]["suggested_part"]["id"] == "psu-750"
    assert len(data["alternatives"]) == 0
