"""Usability score: PSU headroom, upgrade room and small-case thermals."""
from models import Build, Score, ScoreBreakdownItem
from power import clamp_score, estimate_load, get_headroom

WEIGHT = 0.15
BASE = 80
CONFIDENCE = 70

NOISE_HEADROOM = 1.33
COMFORTABLE_HEADROOM = 1.4
COMPACT_CASE_TDP_W = 400


def calculate_usability_score(build: Build) -> Score:
    score = BASE
    breakdown: list[ScoreBreakdownItem] = []

    def add(factor: str, impact: int, explanation: str):
        nonlocal score
        score += impact
        breakdown.append(ScoreBreakdownItem(factor, impact, explanation))

    load = estimate_load(build)
    if build.psu and load > 0:
        headroom = get_headroom(build.psu.specs.wattage_w, load)
        pct = f"{headroom * 100:.0f}%"
        if headroom < 1.25:
            add("PSU headroom", -15, f"PSU headroom ({pct}) is below 125%. System may be unstable under peak loads.")
        elif headroom < COMFORTABLE_HEADROOM:
            add("PSU headroom", -5, f"PSU headroom is {pct}. Adequate but consider more for safety margin.")
        else:
            add("PSU headroom", 5, f"PSU headroom is {pct}. Good safety margin for peak loads.")
        if headroom < NOISE_HEADROOM:
            add("PSU load / noise", -10, "PSU may run near capacity, potentially increasing fan noise.")
    elif not build.psu:
        add("PSU headroom", 0, "No PSU selected. Select a PSU to assess headroom.")

    if build.motherboard:
        modules = build.ram.specs.modules if build.ram else 0
        ram_free = build.motherboard.specs.ram_slots - modules
        m2_free = build.motherboard.specs.m2_slots - len(build.nvme_drives)
        if ram_free >= 2:
            add("RAM upgrade room", 10, f"You have {ram_free} RAM slots free for future upgrades.")
        elif ram_free >= 1:
            add("RAM upgrade room", 5, f"{ram_free} RAM slot(s) free.")
        if m2_free >= 1:
            add("M.2 upgrade room", 5, f"{m2_free} M.2 slot(s) free for additional storage.")

    total_tdp = sum((part.specs.tdp_w or 0) for part in (build.cpu, build.gpu) if part)
    if total_tdp > COMPACT_CASE_TDP_W and build.case and build.case.specs.form_factor == "Mini-ITX":
        add("Thermal consideration", -10, "High TDP build in compact case. Ensure adequate cooling and airflow.")

    value = clamp_score(score)
    top = ", ".join(item.factor for item in breakdown[:2]) or "No major usability concerns"
    return Score(
        value=value,
        confidence=CONFIDENCE,
        weight=WEIGHT,
        breakdown=tuple(breakdown),
        summary=f"Usability score is {value}. {top}. See breakdown for details.",
    )
