"""Compatibility score: critical issues zero it, everything else costs points."""
from models import CompatibilityResult, Score, ScoreBreakdownItem
from power import clamp_score

WEIGHT = 0.4

SEVERITY_PENALTY = {"critical": -25, "warning": -15, "info": -5}
NOTE_PENALTY = -5


def calculate_compatibility_score(compat: CompatibilityResult) -> Score:
    if compat.hard_fails:
        return Score(
            value=0,
            confidence=compat.confidence,
            weight=WEIGHT,
            breakdown=tuple(
                ScoreBreakdownItem(issue.title, -100, issue.description) for issue in compat.hard_fails
            ),
            summary=(
                f"Build has {len(compat.hard_fails)} critical compatibility issue(s). "
                "Fix these before proceeding."
            ),
        )

    score = 100
    breakdown = []
    for issue in compat.warnings:
        penalty = SEVERITY_PENALTY.get(issue.severity, -10)
        score += penalty
        breakdown.append(ScoreBreakdownItem(issue.title, penalty, issue.description))
    for issue in compat.notes:
        score += NOTE_PENALTY
        breakdown.append(ScoreBreakdownItem(issue.title, NOTE_PENALTY, issue.description))

    value = clamp_score(score)
    if breakdown:
        top = ", ".join(item.factor for item in breakdown[:2])
        summary = f"Your compatibility score is {value} because: {top}. See breakdown for details."
    else:
        summary = f"Your compatibility score is {value}. No compatibility issues detected."

    return Score(
        value=value,
        confidence=compat.confidence,
        weight=WEIGHT,
        breakdown=tuple(breakdown),
        summary=summary,
    )
