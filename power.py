"""System power estimation and running-cost helpers."""
import math

from models import PSU, Build

BASE_LOAD_W = 60
CPU_MULTIPLIER = 1.2
GPU_MULTIPLIER = 1.3
RAM_W_PER_8GB = 5
STORAGE_W_PER_DRIVE = 10

RECOMMENDED_HEADROOM = 1.25

# Nominal lengths when a PSU does not list its own
DEFAULT_PSU_LENGTH_MM = {"ATX": 160, "SFX": 130, "SFX-L": 130}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def estimate_load(build: Build) -> int:
    """Estimated system draw in watts.

    60W base + CPU TDP x1.2 + GPU TDP x1.3 + 5W per 8GB of RAM + 10W per drive.
    """
    total = float(BASE_LOAD_W)
    if build.cpu and build.cpu.specs.tdp_w is not None:
        total += build.cpu.specs.tdp_w * CPU_MULTIPLIER
    if build.gpu and build.gpu.specs.tdp_w is not None:
        total += build.gpu.specs.tdp_w * GPU_MULTIPLIER
    if build.ram and build.ram.specs.capacity_gb:
        total += math.ceil(build.ram.specs.capacity_gb / 8) * RAM_W_PER_8GB
    total += len(build.storage) * STORAGE_W_PER_DRIVE
    return round_half_up(total)


def get_headroom(psu_wattage: float, estimated_load: float) -> float:
    """PSU wattage over estimated load, e.g. 1.5 for 50% headroom."""
    if estimated_load <= 0:
        return math.inf
    return psu_wattage / estimated_load


def recommended_psu_wattage(estimated_load: float) -> int:
    """Smallest 50W step giving 30% headroom over the load."""
    return math.ceil(estimated_load * 1.3 / 50) * 50


def psu_length_mm(psu: PSU, override: int | None = None) -> int:
    if override is not None:
        return override
    if psu.specs.length_mm is not None:
        return psu.specs.length_mm
    return DEFAULT_PSU_LENGTH_MM.get(psu.specs.form_factor, 160)


def wall_draw_watts(system_load_w: float, efficiency_multiplier: float) -> int:
    return round_half_up(system_load_w * efficiency_multiplier)


def calculate_energy_cost(wall_draw_w: float, hours_per_day: float, rate_per_kwh: float) -> float:
    kwh_per_year = (wall_draw_w / 1000) * hours_per_day * 365
    return kwh_per_year * rate_per_kwh


def calculate_tco(
    system_load_w: float,
    efficiency_multiplier: float,
    rate_per_kwh: float,
    hours_per_day: float = 4.0,
) -> dict:
    """Wall draw and yearly energy cost for a system load."""
    wall_draw = wall_draw_watts(system_load_w, efficiency_multiplier)
    return {
        "wall_draw_w": wall_draw,
        "yearly_cost": round(calculate_energy_cost(wall_draw, hours_per_day, rate_per_kwh), 2),
    }
