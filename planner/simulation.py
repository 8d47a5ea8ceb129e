"""Re-run the checker and scorers on a hypothetical build."""
from dataclasses import dataclass

from compatibility.engine import CheckOptions, check_compatibility
from models import Build, CompatibilityResult, Part, ScoreResult
from scoring.engine import calculate_scores


@dataclass(frozen=True)
class Evaluation:
    build: Build
    compat: CompatibilityResult
    scores: ScoreResult

    def critical_ids(self) -> set[str]:
        return {issue.id for issue in self.compat.hard_fails}


def evaluate(build: Build, preset: str = "custom", target_id: str | None = None) -> Evaluation:
    compat = check_compatibility(build, CheckOptions(preset=preset))
    scores = calculate_scores(build, compat, preset=preset, target_id=target_id)
    return Evaluation(build=build, compat=compat, scores=scores)


def apply_parts(build: Build, parts: dict[str, Part | None]) -> Build:
    """Swap several slots at once. Returns a new build."""
    for category, part in parts.items():
        build = build.with_part(category, part)
    return build
