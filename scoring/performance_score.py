"""Performance score, either against a named target or from preset-weighted tiers."""
from models import Build, Score, ScoreBreakdownItem
from power import clamp_score, round_half_up
from presets import GameTarget, CreatorTarget, estimate_fps, evaluate_target_fit, get_preset, is_gaming

WEIGHT = 0.3
DEFAULT_TIER = 5
MISSING_TIER_CONFIDENCE = 20

TARGET_BASE = 50
TARGET_MET_BONUS = 35
EXCEEDS_BONUS = 5
BELOW_PENALTY = -20


def tier_to_score(tier: int) -> float:
    """Map a 1-10 tier linearly onto 0-100."""
    return (tier - 1) / 9 * 100


def _tiers(build: Build) -> tuple[int | None, int | None, int]:
    cpu_tier = build.cpu.specs.tier if build.cpu else None
    gpu_tier = build.gpu.specs.tier if build.gpu else None
    confidence = 100
    if cpu_tier is None:
        confidence -= MISSING_TIER_CONFIDENCE
    if gpu_tier is None:
        confidence -= MISSING_TIER_CONFIDENCE
    return cpu_tier, gpu_tier, confidence


def calculate_performance_score(
    build: Build,
    preset: str = "custom",
    target: GameTarget | CreatorTarget | None = None,
) -> Score:
    if target is not None:
        return _target_score(build, target)
    return _preset_score(build, preset)


def _preset_score(build: Build, preset: str) -> Score:
    definition = get_preset(preset)
    gaming = is_gaming(preset)
    cpu_tier, gpu_tier, confidence = _tiers(build)

    cpu_used = cpu_tier if cpu_tier is not None else DEFAULT_TIER
    if gpu_tier is not None:
        gpu_used = gpu_tier
    else:
        gpu_used = DEFAULT_TIER if build.gpu else 1

    cpu_score = tier_to_score(cpu_used)
    gpu_score = tier_to_score(gpu_used)
    combined = cpu_score * definition.cpu_weight + gpu_score * definition.gpu_weight

    breakdown = [ScoreBreakdownItem(
        "CPU contribution",
        round_half_up(cpu_score * definition.cpu_weight),
        f"CPU tier {cpu_used}/10 contributes {definition.cpu_weight * 100:.0f}% to performance.",
    )]
    if build.gpu:
        breakdown.append(ScoreBreakdownItem(
            "GPU contribution",
            round_half_up(gpu_score * definition.gpu_weight),
            f"GPU tier {gpu_used}/10 contributes {definition.gpu_weight * 100:.0f}% to performance.",
        ))
    else:
        combined = cpu_score * 0.7
        breakdown.append(ScoreBreakdownItem(
            "No dedicated GPU", -20, "No dedicated GPU selected. Performance assumes integrated graphics.",
        ))

    if cpu_tier is not None and gpu_tier is not None:
        diff = cpu_tier - gpu_tier
        if gaming and diff > 3:
            combined -= 10
            breakdown.append(ScoreBreakdownItem(
                "CPU/GPU balance", -10,
                f"CPU (tier {cpu_tier}) significantly outpaces GPU (tier {gpu_tier}). "
                "Consider a stronger GPU for gaming.",
            ))
        elif abs(diff) <= 1:
            combined = min(100, combined + 5)
            breakdown.append(ScoreBreakdownItem(
                "Balanced build", 5, "CPU and GPU are well-matched for your use case.",
            ))

    value = clamp_score(combined)
    if build.gpu:
        strength = "GPU" if gpu_used >= cpu_used else "CPU"
        summary = f"Performance score is {value}, suitable for {preset}. {strength} is the strength."
        if gaming and cpu_tier is not None and gpu_tier is not None and cpu_tier - gpu_tier > 3:
            summary += " Consider upgrading the GPU for better gaming performance."
    else:
        summary = f"Performance score is {value}. No dedicated GPU; suitable for light workloads."

    return Score(value=value, confidence=confidence, weight=WEIGHT, breakdown=tuple(breakdown), summary=summary)


def _target_score(build: Build, target: GameTarget | CreatorTarget) -> Score:
    cpu_tier, gpu_tier, confidence = _tiers(build)
    cpu_used = cpu_tier if cpu_tier is not None else DEFAULT_TIER
    gpu_used = gpu_tier if gpu_tier is not None else (DEFAULT_TIER if build.gpu else 1)
    ram_gb = build.ram.specs.capacity_gb if build.ram else 0

    evaluation = evaluate_target_fit(target, cpu_used, gpu_used, ram_gb)

    score = TARGET_BASE
    breakdown = []
    if evaluation.meets_target:
        score += TARGET_MET_BONUS
        breakdown.append(ScoreBreakdownItem(
            "Target met", TARGET_MET_BONUS, f"Build meets the minimum requirements for {target.name}.",
        ))
    for label, fit in (("CPU", evaluation.cpu_fit), ("GPU", evaluation.gpu_fit), ("RAM", evaluation.ram_fit)):
        if fit == "exceeds":
            score += EXCEEDS_BONUS
            breakdown.append(ScoreBreakdownItem(
                f"{label} headroom", EXCEEDS_BONUS, f"{label} exceeds what {target.name} needs.",
            ))
        elif fit == "below":
            score += BELOW_PENALTY
            breakdown.append(ScoreBreakdownItem(
                f"{label} below target", BELOW_PENALTY, f"{label} falls short of {target.name}.",
            ))

    if isinstance(target, GameTarget):
        fps = estimate_fps(build.cpu, build.gpu, target)
        if fps is not None:
            breakdown.append(ScoreBreakdownItem(
                "Estimated FPS", 0,
                f"~{fps.likely} FPS ({fps.min}-{fps.max}) at {fps.settings_quality} settings, "
                f"{fps.confidence} confidence.",
            ))

    value = clamp_score(score)
    summary = f"Performance score is {value} for {target.name}. {evaluation.recommendation}."
    if evaluation.bottleneck != "none":
        summary += f" Bottleneck: {evaluation.bottleneck.upper()}."

    return Score(
        value=value,
        confidence=confidence,
        weight=WEIGHT,
        breakdown=tuple(breakdown),
        summary=summary,
        target_evaluation=evaluation,
    )
