"""Build presets, performance targets and target fit evaluation.

Presets tune scoring weights and drive part filtering. Targets are either a
resolution + refresh rate for gaming or a creator workload, each with
minimum CPU/GPU tiers and a RAM floor.
"""
import logging
import math
from dataclasses import dataclass, field

from models import CPU, GPU, TargetEvaluation

logger = logging.getLogger(__name__)

GAMING_PRESETS = ("gaming-1080p", "gaming-1440p", "gaming-4k")


@dataclass(frozen=True, kw_only=True)
class RecommendedSpecs:
    cpu_tier_min: int | None = None
    cpu_tier_max: int | None = None
    gpu_tier_min: int | None = None
    gpu_tier_max: int | None = None
    ram_gb_min: int | None = None
    storage_gb_min: int | None = None
    storage_interface: str | None = None
    cpu_cores_min: int | None = None
    form_factors: tuple[str, ...] = ()
    max_gpu_length_mm: int | None = None
    max_tdp_target: int | None = None


@dataclass(frozen=True, kw_only=True)
class PresetDefinition:
    id: str
    name: str
    description: str
    budget_range: str  # "low" | "mid" | "high"
    cpu_weight: float = 0.5
    gpu_weight: float = 0.5
    target_resolution: str | None = None
    recommended: RecommendedSpecs = field(default_factory=RecommendedSpecs)


@dataclass(frozen=True, kw_only=True)
class GameTarget:
    id: str
    name: str
    resolution: str  # "1080p" | "1440p" | "4K"
    refresh_rate: int
    min_gpu_tier: int
    min_cpu_tier: int
    description: str = ""

    @property
    def min_ram_gb(self) -> int:
        return 32 if self.refresh_rate >= 144 else 16


@dataclass(frozen=True, kw_only=True)
class CreatorTarget:
    id: str
    name: str
    primary_apps: tuple[str, ...]
    cpu_weight: float
    gpu_weight: float
    ram_min: int
    storage_min: int
    description: str = ""


@dataclass(frozen=True, kw_only=True)
class FPSEstimate:
    min: int
    max: int
    likely: int
    confidence: str  # "low" | "medium" | "high"
    settings_quality: str
    caveats: tuple[str, ...] = ()


PRESET_DEFINITIONS: dict[str, PresetDefinition] = {p.id: p for p in (
    PresetDefinition(
        id="gaming-1080p", name="Gaming 1080p", description="Smooth 1080p gaming, value-focused",
        budget_range="mid", cpu_weight=0.3, gpu_weight=0.7, target_resolution="1080p",
        recommended=RecommendedSpecs(cpu_tier_min=5, cpu_tier_max=7, gpu_tier_min=5, gpu_tier_max=7,
                                     ram_gb_min=16, storage_gb_min=500),
    ),
    PresetDefinition(
        id="gaming-1440p", name="Gaming 1440p", description="High refresh 1440p, strong GPU",
        budget_range="mid", cpu_weight=0.3, gpu_weight=0.7, target_resolution="1440p",
        recommended=RecommendedSpecs(cpu_tier_min=6, cpu_tier_max=8, gpu_tier_min=7, gpu_tier_max=9,
                                     ram_gb_min=16, storage_gb_min=1000),
    ),
    PresetDefinition(
        id="gaming-4k", name="Gaming 4K", description="Ultimate 4K experience",
        budget_range="high", cpu_weight=0.3, gpu_weight=0.7, target_resolution="4k",
        recommended=RecommendedSpecs(cpu_tier_min=7, cpu_tier_max=10, gpu_tier_min=9, gpu_tier_max=10,
                                     ram_gb_min=32, storage_gb_min=1000),
    ),
    PresetDefinition(
        id="creator", name="Creator", description="Video, 3D, and content creation",
        budget_range="high", cpu_weight=0.6, gpu_weight=0.4,
        recommended=RecommendedSpecs(cpu_tier_min=7, cpu_tier_max=10, gpu_tier_min=6, gpu_tier_max=9,
                                     ram_gb_min=32, storage_gb_min=1000, storage_interface="NVMe",
                                     cpu_cores_min=8),
    ),
    PresetDefinition(
        id="quiet", name="Quiet Build", description="Low noise, low TDP focus",
        budget_range="mid",
        recommended=RecommendedSpecs(cpu_tier_min=4, cpu_tier_max=7, gpu_tier_min=4, gpu_tier_max=7,
                                     ram_gb_min=16, storage_gb_min=500, max_tdp_target=150),
    ),
    PresetDefinition(
        id="sff", name="SFF", description="Small form factor, compact builds",
        budget_range="mid",
        recommended=RecommendedSpecs(form_factors=("Mini-ITX",), max_gpu_length_mm=250,
                                     cpu_tier_min=4, gpu_tier_min=4, ram_gb_min=16, storage_gb_min=500),
    ),
    PresetDefinition(
        id="budget", name="Budget", description="Maximum value, lower tiers OK",
        budget_range="low",
        recommended=RecommendedSpecs(cpu_tier_min=3, cpu_tier_max=6, gpu_tier_min=3, gpu_tier_max=6,
                                     ram_gb_min=16, storage_gb_min=500),
    ),
    PresetDefinition(
        id="custom", name="Custom", description="No constraints, full control",
        budget_range="mid",
    ),
)}

GAME_TARGETS: tuple[GameTarget, ...] = (
    GameTarget(id="1080p-60", name="1080p 60Hz", resolution="1080p", refresh_rate=60,
               min_gpu_tier=5, min_cpu_tier=4, description="Entry-level gaming, esports on medium settings"),
    GameTarget(id="1080p-144", name="1080p 144Hz", resolution="1080p", refresh_rate=144,
               min_gpu_tier=6, min_cpu_tier=6, description="Competitive esports, high refresh rate gaming"),
    GameTarget(id="1440p-60", name="1440p 60Hz", resolution="1440p", refresh_rate=60,
               min_gpu_tier=6, min_cpu_tier=5, description="Balanced 1440p gaming, AAA titles at high settings"),
    GameTarget(id="1440p-165", name="1440p 165Hz", resolution="1440p", refresh_rate=165,
               min_gpu_tier=8, min_cpu_tier=7, description="High-end gaming, AAA at ultra + competitive esports"),
    GameTarget(id="4k-60", name="4K 60Hz", resolution="4K", refresh_rate=60,
               min_gpu_tier=8, min_cpu_tier=6, description="Cinematic 4K gaming"),
    GameTarget(id="4k-120", name="4K 120Hz", resolution="4K", refresh_rate=120,
               min_gpu_tier=10, min_cpu_tier=8, description="Enthusiast 4K high refresh"),
)

CREATOR_TARGETS: tuple[CreatorTarget, ...] = (
    CreatorTarget(id="photo-editing", name="Photo Editing", primary_apps=("Photoshop", "Lightroom"),
                  cpu_weight=0.6, gpu_weight=0.4, ram_min=16, storage_min=500),
    CreatorTarget(id="video-1080p", name="1080p Video Editing",
                  primary_apps=("Premiere Pro", "DaVinci Resolve"),
                  cpu_weight=0.7, gpu_weight=0.3, ram_min=32, storage_min=1000),
    CreatorTarget(id="video-4k", name="4K Video Editing",
                  primary_apps=("Premiere Pro", "DaVinci Resolve", "After Effects"),
                  cpu_weight=0.6, gpu_weight=0.4, ram_min=64, storage_min=2000),
    CreatorTarget(id="3d-rendering", name="3D Rendering", primary_apps=("Blender", "Cinema 4D", "3ds Max"),
                  cpu_weight=0.5, gpu_weight=0.5, ram_min=32, storage_min=1000),
    CreatorTarget(id="game-dev", name="Game Development", primary_apps=("Unreal Engine", "Unity"),
                  cpu_weight=0.5, gpu_weight=0.5, ram_min=32, storage_min=1000),
    CreatorTarget(id="streaming", name="Streaming + Gaming", primary_apps=("OBS", "Streamlabs"),
                  cpu_weight=0.7, gpu_weight=0.3, ram_min=32, storage_min=500),
)

CREATOR_MIN_CPU_TIER = 7


def get_preset(preset_id: str) -> PresetDefinition:
    """Look up a preset; unknown ids fall back to custom."""
    preset = PRESET_DEFINITIONS.get(preset_id)
    if preset is None:
        logger.warning(f"Unknown preset {preset_id!r}, using custom")
        return PRESET_DEFINITIONS["custom"]
    return preset


def is_gaming(preset_id: str) -> bool:
    return preset_id in GAMING_PRESETS


def get_target_by_id(target_id: str) -> GameTarget | CreatorTarget | None:
    for target in (*GAME_TARGETS, *CREATOR_TARGETS):
        if target.id == target_id:
            return target
    return None


def evaluate_target_fit(
    target: GameTarget | CreatorTarget,
    cpu_tier: int,
    gpu_tier: int,
    ram_gb: int,
) -> TargetEvaluation:
    """Grade CPU, GPU and RAM as below/meets/exceeds the target's minimums."""
    if isinstance(target, GameTarget):
        return _evaluate_game_target(target, cpu_tier, gpu_tier, ram_gb)
    return _evaluate_creator_target(target, cpu_tier, gpu_tier, ram_gb)


def _evaluate_game_target(target: GameTarget, cpu_tier: int, gpu_tier: int, ram_gb: int) -> TargetEvaluation:
    meets = True
    cpu_fit = gpu_fit = ram_fit = "meets"
    recommendation = ""

    if cpu_tier < target.min_cpu_tier:
        cpu_fit = "below"
        meets = False
        recommendation = f"Upgrade to tier {target.min_cpu_tier}+ CPU for smooth {target.name} gaming"
    elif cpu_tier > target.min_cpu_tier + 2:
        cpu_fit = "exceeds"

    if gpu_tier < target.min_gpu_tier:
        gpu_fit = "below"
        meets = False
        recommendation = f"Upgrade to tier {target.min_gpu_tier}+ GPU for {target.name} gaming"
    elif gpu_tier > target.min_gpu_tier + 2:
        gpu_fit = "exceeds"

    if ram_gb < target.min_ram_gb:
        ram_fit = "below"
        if meets:
            recommendation = f"Consider {target.min_ram_gb}GB RAM for optimal {target.name} performance"
    elif ram_gb >= 32:
        ram_fit = "exceeds"

    return TargetEvaluation(
        target_id=target.id,
        target_name=target.name,
        meets_target=meets,
        cpu_fit=cpu_fit,
        gpu_fit=gpu_fit,
        ram_fit=ram_fit,
        bottleneck=_bottleneck(cpu_fit, gpu_fit, ram_fit),
        recommendation=recommendation or f"Build meets {target.name} requirements",
    )


def _evaluate_creator_target(target: CreatorTarget, cpu_tier: int, gpu_tier: int, ram_gb: int) -> TargetEvaluation:
    meets = True
    cpu_fit = gpu_fit = ram_fit = "meets"
    recommendation = ""

    if cpu_tier < CREATOR_MIN_CPU_TIER:
        cpu_fit = "below"
        meets = False
        recommendation = f"Upgrade to tier {CREATOR_MIN_CPU_TIER}+ CPU for {target.name}"
    elif cpu_tier >= 9:
        cpu_fit = "exceeds"

    gpu_heavy = target.gpu_weight > 0.4
    min_gpu_tier = 6 if gpu_heavy else 5
    if gpu_tier < min_gpu_tier:
        gpu_fit = "below"
        if gpu_heavy:
            meets = False
        recommendation = (
            f"Consider tier {min_gpu_tier}+ GPU for GPU-accelerated {', '.join(target.primary_apps)}"
        )
    elif gpu_tier >= 8:
        gpu_fit = "exceeds"

    if ram_gb < target.ram_min:
        ram_fit = "below"
        meets = False
        recommendation = f"Upgrade to {target.ram_min}GB+ RAM for {target.name}"
    elif ram_gb >= target.ram_min * 1.5:
        ram_fit = "exceeds"

    return TargetEvaluation(
        target_id=target.id,
        target_name=target.name,
        meets_target=meets,
        cpu_fit=cpu_fit,
        gpu_fit=gpu_fit,
        ram_fit=ram_fit,
        bottleneck=_bottleneck(cpu_fit, gpu_fit, ram_fit),
        recommendation=recommendation or f"Build meets {target.name} requirements",
    )


def _bottleneck(cpu_fit: str, gpu_fit: str, ram_fit: str) -> str:
    # Only a single limiting CPU/GPU dimension counts as a bottleneck
    cpu_below = cpu_fit == "below"
    gpu_below = gpu_fit == "below"
    if cpu_below and not gpu_below:
        return "cpu"
    if gpu_below and not cpu_below:
        return "gpu"
    if not cpu_below and not gpu_below and ram_fit == "below":
        return "ram"
    return "none"


# ============ Part filtering ============


def filter_by_preset(preset_id: str, category: str, parts: list) -> list:
    """Keep parts that fall inside the preset's recommended ranges."""
    if preset_id == "custom":
        return list(parts)
    spec = get_preset(preset_id).recommended
    return [p for p in parts if _part_matches(spec, category, p)]


def _part_matches(spec: RecommendedSpecs, category: str, part) -> bool:
    s = part.specs
    if category == "cpu":
        tier = s.tier or 0
        if spec.cpu_tier_min is not None and tier < spec.cpu_tier_min:
            return False
        if spec.cpu_tier_max is not None and tier > spec.cpu_tier_max:
            return False
        if spec.cpu_cores_min is not None and s.cores < spec.cpu_cores_min:
            return False
        if spec.max_tdp_target is not None and (s.tdp_w or 0) > spec.max_tdp_target:
            return False
        return True
    if category == "gpu":
        tier = s.tier or 0
        if spec.gpu_tier_min is not None and tier < spec.gpu_tier_min:
            return False
        if spec.gpu_tier_max is not None and tier > spec.gpu_tier_max:
            return False
        if spec.max_gpu_length_mm is not None and (s.length_mm or 0) > spec.max_gpu_length_mm:
            return False
        return True
    if category == "motherboard":
        return not spec.form_factors or s.form_factor in spec.form_factors
    if category == "ram":
        return spec.ram_gb_min is None or s.capacity_gb >= spec.ram_gb_min
    if category == "storage":
        if spec.storage_gb_min is not None and s.capacity_gb < spec.storage_gb_min:
            return False
        if spec.storage_interface and s.interface != spec.storage_interface:
            return False
        return True
    if category == "case":
        if spec.form_factors and s.form_factor not in spec.form_factors:
            return False
        if spec.max_gpu_length_mm is not None and (s.max_gpu_length_mm or 0) < spec.max_gpu_length_mm:
            return False
        return True
    return True


def score_part_for_preset(preset_id: str, category: str, part) -> int:
    """How well a part matches the preset; higher is better, 100 is neutral."""
    spec = get_preset(preset_id).recommended
    s = part.specs
    score = 100
    if category == "cpu":
        if spec.cpu_tier_min is not None:
            score += 10 if (s.tier or 0) >= spec.cpu_tier_min else -30
        if spec.cpu_cores_min is not None and s.cores >= spec.cpu_cores_min:
            score += 15
    elif category == "gpu":
        if spec.gpu_tier_min is not None and (s.tier or 0) >= spec.gpu_tier_min:
            score += 10
    elif category == "ram":
        if spec.ram_gb_min is not None and s.capacity_gb >= spec.ram_gb_min:
            score += 15
    return score


# ============ FPS estimate ============

# Likely AAA FPS by GPU tier at each resolution
_BASE_FPS = {
    "1080p": {3: 30, 4: 45, 5: 60, 6: 80, 7: 100, 8: 120, 9: 140, 10: 160},
    "1440p": {3: 20, 4: 30, 5: 40, 6: 55, 7: 70, 8: 85, 9: 100, 10: 120},
    "4K": {3: 10, 4: 15, 5: 20, 6: 30, 7: 40, 8: 50, 9: 65, 10: 80},
}


def _base_fps(gpu_tier: int, resolution: str) -> int:
    return _BASE_FPS.get(resolution, {}).get(gpu_tier, 30)


def _cpu_factor(cpu_tier: int, resolution: str, refresh_rate: int) -> float:
    if resolution == "4K":
        steps = ((6, 1.0), (4, 0.95))
        floor = 0.9
    elif resolution == "1440p" and refresh_rate >= 144:
        steps = ((8, 1.0), (6, 0.95), (4, 0.85))
        floor = 0.75
    elif resolution == "1440p":
        steps = ((6, 1.0), (4, 0.95))
        floor = 0.9
    elif refresh_rate >= 144:
        steps = ((8, 1.0), (7, 0.95), (6, 0.85), (5, 0.75))
        floor = 0.65
    else:
        steps = ((6, 1.0), (5, 0.95), (4, 0.9))
        floor = 0.85
    for min_tier, factor in steps:
        if cpu_tier >= min_tier:
            return factor
    return floor


def _settings_quality(gpu_tier: int, target: GameTarget) -> str:
    ratio = _base_fps(gpu_tier, target.resolution) / target.refresh_rate
    if ratio >= 1.5:
        return "Ultra"
    if ratio >= 1.2:
        return "High"
    if ratio >= 1.0:
        return "Medium"
    if ratio >= 0.8:
        return "Mixed"
    return "Low"


def estimate_fps(cpu: CPU | None, gpu: GPU | None, target: GameTarget) -> FPSEstimate | None:
    """Rough tier-based AAA FPS range for a gaming target. Not benchmark data."""
    if cpu is None or gpu is None:
        return None
    cpu_tier = cpu.specs.tier or 5
    gpu_tier = gpu.specs.tier or 5

    fps = _base_fps(gpu_tier, target.resolution) * _cpu_factor(cpu_tier, target.resolution, target.refresh_rate)
    quality = _settings_quality(gpu_tier, target)

    if target.resolution == "1080p" and target.refresh_rate <= 144 and gpu_tier >= 6 and cpu_tier >= 6:
        confidence = "high"
    elif target.resolution == "1440p" and target.refresh_rate <= 60 and gpu_tier >= 7:
        confidence = "high"
    elif gpu_tier >= 5 and cpu_tier >= 5:
        confidence = "medium"
    else:
        confidence = "low"

    caveats = [
        "Estimates based on demanding AAA games",
        "Performance varies significantly by game optimization",
        f"Assumes {quality} settings without ray tracing",
    ]
    if target.resolution == "1080p" and target.refresh_rate >= 144 and cpu_tier < 7:
        caveats.append("CPU may limit FPS in competitive titles")
    if target.refresh_rate >= 144:
        caveats.append("Esports titles often run much higher (200-300+ FPS)")
    if target.resolution == "4K":
        caveats.append("DLSS/FSR upscaling can significantly improve FPS")
    if gpu_tier < 6 or cpu_tier < 5:
        caveats.append("May struggle with the newest AAA titles")

    return FPSEstimate(
        min=math.floor(fps * 0.85),
        max=math.floor(fps * 1.15),
        likely=math.floor(fps),
        confidence=confidence,
        settings_quality=quality,
        caveats=tuple(caveats),
    )
