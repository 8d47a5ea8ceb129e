"""Combines the four scores into an overall rating."""
import logging

from models import Build, CompatibilityResult, ScoreResult
from power import clamp_score
from presets import get_target_by_id
from scoring.compatibility_score import calculate_compatibility_score
from scoring.performance_score import calculate_performance_score
from scoring.usability_score import calculate_usability_score
from scoring.value_score import calculate_value_score

logger = logging.getLogger(__name__)

COMPAT_WEIGHT = 0.4
PERF_WEIGHT = 0.3
VALUE_WEIGHT = 0.15
USABILITY_WEIGHT = 0.15

# Below this compatibility score, the other scores can't lift the overall
COMPAT_OVERRIDE_THRESHOLD = 50


def calculate_overall(compatibility: int, performance: int, value: int, usability: int) -> int:
    if compatibility < COMPAT_OVERRIDE_THRESHOLD:
        return clamp_score(compatibility * 0.5)
    return clamp_score(
        compatibility * COMPAT_WEIGHT
        + performance * PERF_WEIGHT
        + value * VALUE_WEIGHT
        + usability * USABILITY_WEIGHT
    )


def calculate_scores(
    build: Build,
    compat: CompatibilityResult,
    preset: str = "custom",
    target_id: str | None = None,
) -> ScoreResult:
    target = None
    if target_id:
        target = get_target_by_id(target_id)
        if target is None:
            logger.warning(f"Unknown target {target_id!r}, scoring by preset {preset!r}")

    compatibility = calculate_compatibility_score(compat)
    performance = calculate_performance_score(build, preset, target)
    value = calculate_value_score(build, preset)
    usability = calculate_usability_score(build)

    overall = calculate_overall(compatibility.value, performance.value, value.value, usability.value)
    logger.debug(
        f"Scores: overall={overall} compat={compatibility.value} perf={performance.value} "
        f"value={value.value} usability={usability.value}"
    )
    return ScoreResult(
        overall=overall,
        compatibility=compatibility,
        performance=performance,
        value=value,
        usability=usability,
    )
