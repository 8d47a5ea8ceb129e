"""Issue-driven part suggestions and quick swap alternatives.

Suggestions answer a specific problem on the current build: a GPU that does
not fit the case, a PSU without enough headroom, or a CPU that holds back the
GPU. Each suggestion is installed into a copy of the build and scored, so its
score delta is measured rather than guessed. Alternatives are single-part
swaps worth a look even when nothing is wrong.

Candidates are drawn from the catalog after preset filtering; ties in tier
are broken by how well a part matches the preset.
"""
import logging
import math

from catalog import Catalog
from models import (
    AlternativeBuild, Build, CompatibilityResult, Part, PartSuggestion, PartSwap, Recommendations,
)
from planner.simulation import evaluate
from power import RECOMMENDED_HEADROOM, estimate_load
from presets import filter_by_preset, score_part_for_preset

logger = logging.getLogger(__name__)

MAX_UPGRADES = 6
MAX_ALTERNATIVES = 3
MIN_UPGRADES = 2
# CPU tiers below the GPU before the CPU counts as a bottleneck
IMBALANCE_TIERS = 2
DEFAULT_TIER = 5


def _tier(part: Part) -> int:
    return part.specs.tier if part.specs.tier is not None else DEFAULT_TIER


def _fits_case(gpu, build: Build) -> bool:
    max_len = build.case.specs.max_gpu_length_mm if build.case else None
    return max_len is None or gpu.specs.length_mm is None or gpu.specs.length_mm <= max_len


class _Suggester:
    def __init__(self, build: Build, catalog: Catalog, preset: str, target_id: str | None):
        self.build = build
        self.catalog = catalog
        self.preset = preset
        self.target_id = target_id
        self.base_overall = evaluate(build, preset, target_id).scores.overall

    def candidates(self, category: str) -> list:
        return filter_by_preset(self.preset, category, self.catalog.parts(category))

    def strongest_first(self, parts: list) -> list:
        return sorted(
            parts,
            key=lambda p: (_tier(p), score_part_for_preset(self.preset, p.category, p)),
            reverse=True,
        )

    def suggest(self, part: Part, reason: str) -> PartSuggestion:
        current = self.build.get(part.category)
        after = evaluate(self.build.with_part(part.category, part), self.preset, self.target_id)
        return PartSuggestion(
            category=part.category,
            current_part=current,
            suggested_part=part,
            reason=reason,
            score_delta=after.scores.overall - self.base_overall,
            price_delta=part.price - current.price,
        )


def _gpus_that_fit(s: _Suggester) -> list[PartSuggestion]:
    gpu, max_len = s.build.gpu, s.build.case.specs.max_gpu_length_mm
    fits = [
        g for g in s.candidates("gpu")
        if g.id != gpu.id
        and g.specs.length_mm is not None and g.specs.length_mm <= max_len
        and _tier(g) >= _tier(gpu) - 1
    ]
    return [
        s.suggest(g, f"Fits case ({g.specs.length_mm}mm <= {max_len}mm)")
        for g in s.strongest_first(fits)[:2]
    ]


def _bigger_psus(s: _Suggester) -> list[PartSuggestion]:
    psu = s.build.psu
    min_wattage = math.ceil(estimate_load(s.build) * RECOMMENDED_HEADROOM)
    better = sorted(
        (p for p in s.candidates("psu")
         if p.specs.wattage_w >= min_wattage and p.specs.wattage_w > psu.specs.wattage_w),
        key=lambda p: p.specs.wattage_w,
    )
    return [s.suggest(p, f"{p.specs.wattage_w}W for better headroom") for p in better[:3]]


def _balancing_cpus(s: _Suggester) -> list[PartSuggestion]:
    cpu, gpu = s.build.cpu, s.build.gpu
    socket = s.build.motherboard.specs.socket
    better = [
        c for c in s.candidates("cpu")
        if c.id != cpu.id and c.specs.socket == socket and _tier(c) >= _tier(gpu) - 1
    ]
    return [s.suggest(c, "Better CPU/GPU balance") for c in s.strongest_first(better)[:2]]


def _next_tier_gpu(s: _Suggester, taken: set[str]) -> list[PartSuggestion]:
    gpu = s.build.gpu
    better = sorted(
        (g for g in s.candidates("gpu")
         if _tier(g) > _tier(gpu) and g.id not in taken and _fits_case(g, s.build)),
        key=_tier,
    )
    return [s.suggest(g, f"Higher tier ({_tier(g)} vs {_tier(gpu)})") for g in better[:1]]


def _alternatives(s: _Suggester) -> list[AlternativeBuild]:
    build = s.build
    alternatives = []

    if build.cpu:
        cpu = build.cpu
        alt = next((
            c for c in s.candidates("cpu")
            if c.id != cpu.id and c.specs.socket == cpu.specs.socket and _tier(c) != _tier(cpu)
        ), None)
        if alt:
            alternatives.append(AlternativeBuild(
                label=f"Switch to {alt.name}",
                swaps=(PartSwap("cpu", cpu.name, alt.name),),
                score_impact="+5-10 performance" if _tier(alt) > _tier(cpu) else "Better value",
            ))

    if build.gpu:
        gpu = build.gpu
        alt = next((
            g for g in s.candidates("gpu")
            if g.id != gpu.id and _tier(g) > _tier(gpu) and _fits_case(g, build)
        ), None)
        if alt:
            alternatives.append(AlternativeBuild(
                label=f"Upgrade to {alt.name}",
                swaps=(PartSwap("gpu", gpu.name, alt.name),),
                score_impact=f"+{min(15, (_tier(alt) - _tier(gpu)) * 3)} performance",
            ))

    return alternatives


def get_recommendations(
    build: Build,
    compat: CompatibilityResult,
    catalog: Catalog,
    *,
    preset: str = "custom",
    target_id: str | None = None,
) -> Recommendations:
    s = _Suggester(build, catalog, preset, target_id)
    critical = {i.id for i in compat.hard_fails}
    warned = {i.id for i in compat.warnings}
    upgrades: list[PartSuggestion] = []

    if "gpuTooLong" in critical and build.gpu and build.case:
        upgrades += _gpus_that_fit(s)
    if ("insufficientPower" in critical or "lowPsuHeadroom" in warned) and build.psu:
        upgrades += _bigger_psus(s)
    if build.cpu and build.gpu and build.motherboard and _tier(build.gpu) - _tier(build.cpu) > IMBALANCE_TIERS:
        upgrades += _balancing_cpus(s)
    if len(upgrades) < MIN_UPGRADES and build.gpu:
        upgrades += _next_tier_gpu(s, {u.suggested_part.id for u in upgrades})

    alternatives = _alternatives(s)
    logger.info(f"Recommendations: {len(upgrades)} suggestions, {len(alternatives)} alternatives")
    return Recommendations(
        upgrades=tuple(upgrades[:MAX_UPGRADES]),
        alternatives=tuple(alternatives[:MAX_ALTERNATIVES]),
    )
