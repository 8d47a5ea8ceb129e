"""Cooler capacity vs CPU TDP."""
import math
from dataclasses import dataclass

from models import CPU, CRITICAL, INFO, WARNING, Cooler, Issue, IssueEvidence

_RECOMMENDATIONS = {
    "excellent": "Excellent cooling headroom. Can handle sustained loads and overclocking.",
    "good": "Good cooling capacity. Comfortable for stock speeds.",
    "adequate": "Adequate cooling. May run warm under heavy load.",
    "marginal": "Marginal cooling. Will run hot under sustained load. Not recommended for overclocking.",
    "insufficient": "Insufficient cooling capacity. CPU will thermal throttle under load.",
}

_EXPECTED_TEMPS = {
    "excellent": "60-70°C under load",
    "good": "70-80°C under load",
    "adequate": "75-85°C under load",
}


@dataclass(frozen=True)
class CoolingAssessment:
    adequate: bool
    headroom: float  # percent above CPU TDP
    rating: str  # "excellent" | "good" | "adequate" | "marginal" | "insufficient"
    recommendation: str


def _rate(headroom: float) -> str:
    if headroom >= 50:
        return "excellent"
    if headroom >= 25:
        return "good"
    if headroom >= 10:
        return "adequate"
    if headroom >= 0:
        return "marginal"
    return "insufficient"


def assess_cooling(cpu: CPU, cooler: Cooler) -> CoolingAssessment | None:
    tdp = cpu.specs.tdp_w or 0
    rating_w = cooler.specs.tdp_rating_w or 0
    if tdp <= 0 or rating_w <= 0:
        return None
    headroom = (rating_w - tdp) / tdp * 100
    rating = _rate(headroom)
    return CoolingAssessment(
        adequate=rating != "insufficient",
        headroom=headroom,
        rating=rating,
        recommendation=_RECOMMENDATIONS[rating],
    )


def check_cooling_adequacy(cpu: CPU, cooler: Cooler) -> Issue | None:
    assessment = assess_cooling(cpu, cooler)
    if assessment is None:
        return None

    tdp = cpu.specs.tdp_w
    rating_w = cooler.specs.tdp_rating_w
    parts = (cpu.id, cooler.id)
    headroom = f"{assessment.headroom:.0f}%"

    if assessment.rating == "insufficient":
        return Issue(
            id="cooling-insufficient",
            category="cooling",
            severity=CRITICAL,
            title="Cooler Insufficient for CPU",
            description=(
                f"Your cooler ({rating_w}W TDP rating) cannot adequately cool your CPU ({tdp}W TDP). "
                "CPU will thermal throttle and lose performance."
            ),
            affected_parts=parts,
            suggested_fixes=(f"Choose cooler with {math.ceil(tdp * 1.2 / 10) * 10}W+ TDP rating",),
            evidence=IssueEvidence(
                values={
                    "CPU TDP": f"{tdp}W",
                    "Cooler rating": f"{rating_w}W",
                    "Shortfall": f"{tdp - rating_w}W",
                    "Headroom": headroom,
                },
                comparison=f"{rating_w}W < {tdp}W (insufficient)",
                calculation=f"Cooler needs {tdp - rating_w}W more capacity",
            ),
        )

    if assessment.rating == "marginal":
        return Issue(
            id="cooling-marginal",
            category="cooling",
            severity=WARNING,
            title="Cooler Barely Adequate",
            description=(
                f"Your cooler ({rating_w}W) is marginally adequate for your CPU ({tdp}W). "
                "Will work but run hot (80-90°C) under sustained load."
            ),
            affected_parts=parts,
            suggested_fixes=(
                f"Upgrade to cooler with {math.ceil(tdp * 1.25 / 10) * 10}W+ rating for comfort",
                "Avoid overclocking",
                "Ensure good case airflow",
            ),
            evidence=IssueEvidence(
                values={"CPU TDP": f"{tdp}W", "Cooler rating": f"{rating_w}W", "Headroom": headroom},
                comparison=f"{rating_w}W ≈ {tdp}W (tight)",
                calculation=f"Only {headroom} cooling headroom",
            ),
        )

    return Issue(
        id="cooling-good",
        category="cooling",
        severity=INFO,
        title=f"{assessment.rating.capitalize()} Cooling",
        description=assessment.recommendation,
        affected_parts=parts,
        evidence=IssueEvidence(values={
            "CPU TDP": f"{tdp}W",
            "Cooler rating": f"{rating_w}W",
            "Headroom": headroom,
            "Expected temps": _EXPECTED_TEMPS[assessment.rating],
        }),
    )
