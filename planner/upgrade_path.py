"""Budget-constrained upgrade suggestions ranked by score gained per $100.

Each candidate is installed into a copy of the build, together with any
parts its platform change forces (new motherboard, RAM or PSU), then
checked and scored again. The score delta over the current build is
the candidate's impact.
"""
import logging
from dataclasses import replace

from catalog import Catalog
from models import (
    CPU, GPU, RAM, AdditionalCost, Build, PlatformChange, ScoreImpact, ScoreResult, Storage,
    UpgradeOption,
)
from planner.simulation import apply_parts, evaluate
from power import RECOMMENDED_HEADROOM, estimate_load, recommended_psu_wattage

logger = logging.getLogger(__name__)

DEFAULT_TIER = 5
NEW_RAM_ESTIMATE_USD = 100
GPU_PRICE_STRETCH = 1.3  # GPUs are considered up to 30% over budget before cascades
MIN_STORAGE_UPGRADE_GB = 1000


def _cheapest(parts):
    return min(parts, key=lambda p: p.price, default=None)


def _tier(part) -> int:
    return part.specs.tier if part.specs.tier is not None else DEFAULT_TIER


def find_cpu_upgrades(build: Build, budget: float, catalog: Catalog) -> list[UpgradeOption]:
    cpu = build.cpu
    board = build.motherboard
    current_tier = _tier(cpu)
    socket = board.specs.socket if board else cpu.specs.socket
    options = []

    for candidate in catalog.cpus:
        if candidate.specs.socket != socket or (candidate.specs.tier or 0) <= current_tier:
            continue
        if candidate.price > budget:
            continue
        gain = candidate.specs.tier - current_tier
        options.append(UpgradeOption(
            category="cpu",
            current_part=cpu,
            suggested_part=candidate,
            cost=candidate.price,
            reason=f"{gain} tier upgrade, same socket",
            priority="high" if gain >= 2 else "medium",
        ))

    if board is None:
        return options

    for candidate in catalog.cpus:
        if candidate.specs.socket == socket or (candidate.specs.tier or 0) <= current_tier + 1:
            continue
        new_board = _cheapest(
            mb for mb in catalog.motherboards
            if mb.specs.socket == candidate.specs.socket and mb.specs.form_factor == board.specs.form_factor
        )
        if new_board is None:
            continue

        costs = [AdditionalCost("Motherboard", new_board.price)]
        cascade = [new_board]
        new_memory = new_board.specs.memory_type
        ram_change = board.specs.memory_type != new_memory
        if ram_change:
            costs.append(AdditionalCost("RAM (new type)", NEW_RAM_ESTIMATE_USD))
            new_ram = _cheapest(r for r in catalog.ram if r.specs.memory_type == new_memory)
            if new_ram is not None:
                cascade.append(new_ram)

        change = PlatformChange(
            type="ram_type" if ram_change else "cpu_socket",
            from_platform=f"{cpu.specs.socket} / {board.specs.memory_type or '?'}",
            to_platform=f"{candidate.specs.socket} / {new_memory or '?'}",
            additional_costs=tuple(costs),
            total_cost=sum(c.estimated_cost for c in costs),
            warning=(
                f"Requires new motherboard AND RAM ({board.specs.memory_type} → {new_memory})"
                if ram_change else "Requires new motherboard"
            ),
        )
        options.append(UpgradeOption(
            category="cpu",
            current_part=cpu,
            suggested_part=candidate,
            cost=candidate.price,
            reason=f"Major {candidate.specs.tier - current_tier} tier upgrade",
            priority="high",
            platform_change=change,
            platform_change_parts=tuple(cascade),
        ))

    return options


def find_gpu_upgrades(build: Build, budget: float, catalog: Catalog) -> list[UpgradeOption]:
    gpu = build.gpu
    current_tier = _tier(gpu)
    case = build.case
    max_length = case.specs.max_gpu_length_mm if case and case.specs.max_gpu_length_mm is not None else 999
    max_slots = case.specs.max_gpu_thickness_slots if case and case.specs.max_gpu_thickness_slots is not None else 4
    options = []

    for candidate in catalog.gpus:
        if (candidate.specs.tier or 0) <= current_tier:
            continue
        if (candidate.specs.length_mm or 0) > max_length or (candidate.specs.thickness_slots or 0) > max_slots:
            continue
        if candidate.price > budget * GPU_PRICE_STRETCH:
            continue

        change = None
        cascade = ()
        psu = build.psu
        if psu is not None:
            load = estimate_load(build.with_part("gpu", candidate))
            if psu.specs.wattage_w < load * RECOMMENDED_HEADROOM:
                wattage = recommended_psu_wattage(load)
                new_psu = _cheapest(p for p in catalog.psus if p.specs.wattage_w >= wattage)
                if new_psu is None:
                    continue
                change = PlatformChange(
                    type="psu_wattage",
                    from_platform=f"{psu.specs.wattage_w}W PSU",
                    to_platform=f"{new_psu.specs.wattage_w}W PSU",
                    additional_costs=(AdditionalCost("PSU", new_psu.price),),
                    total_cost=new_psu.price,
                    warning=f"Current PSU insufficient - recommend {wattage}W+",
                )
                cascade = (new_psu,)

        gain = candidate.specs.tier - current_tier
        options.append(UpgradeOption(
            category="gpu",
            current_part=gpu,
            suggested_part=candidate,
            cost=candidate.price,
            reason=f"{gain} tier GPU upgrade",
            priority="high" if gain >= 2 else "medium",
            platform_change=change,
            platform_change_parts=cascade,
        ))

    return options


def find_ram_upgrades(build: Build, budget: float, catalog: Catalog) -> list[UpgradeOption]:
    ram = build.ram
    capacity = ram.specs.capacity_gb
    memory_type = build.motherboard.specs.memory_type if build.motherboard else None
    memory_type = memory_type or ram.specs.memory_type
    options = []
    for candidate in catalog.ram:
        if candidate.specs.memory_type != memory_type or candidate.specs.capacity_gb <= capacity:
            continue
        if candidate.price > budget:
            continue
        options.append(UpgradeOption(
            category="ram",
            current_part=ram,
            suggested_part=candidate,
            cost=candidate.price,
            reason=f"{candidate.specs.capacity_gb}GB upgrade from {capacity}GB",
            priority="high" if candidate.specs.capacity_gb >= capacity * 2 else "low",
        ))
    return options


def find_storage_upgrades(build: Build, budget: float, catalog: Catalog) -> list[UpgradeOption]:
    current_gb = build.total_storage_gb
    options = []
    for drive in catalog.storage:
        capacity = drive.specs.capacity_gb
        if drive.specs.interface != "NVMe" or capacity < MIN_STORAGE_UPGRADE_GB or capacity <= current_gb:
            continue
        if drive.price > budget:
            continue
        options.append(UpgradeOption(
            category="storage",
            current_part=None,
            suggested_part=drive,
            cost=drive.price,
            reason=f"Add {capacity}GB NVMe storage",
            priority="low",
        ))
    return options


def simulate_upgrade(build: Build, option: UpgradeOption) -> Build:
    if isinstance(option.suggested_part, Storage):
        return build.with_storage_added(option.suggested_part)
    swaps = {option.category: option.suggested_part}
    for part in option.platform_change_parts:
        swaps[part.category] = part
    if isinstance(option.suggested_part, CPU) and option.platform_change and option.platform_change.type == "ram_type":
        # New memory type: the old kit cannot carry over
        swaps.setdefault("ram", None)
    return apply_parts(build, swaps)


def generate_upgrade_path(
    build: Build,
    current_scores: ScoreResult,
    budget: float,
    catalog: Catalog,
    *,
    preset: str = "custom",
    target_id: str | None = None,
    tolerance: float = 1.2,
    limit: int = 10,
) -> list[UpgradeOption]:
    candidates: list[UpgradeOption] = []
    if isinstance(build.cpu, CPU):
        candidates += find_cpu_upgrades(build, budget, catalog)
    if isinstance(build.gpu, GPU):
        candidates += find_gpu_upgrades(build, budget, catalog)
    if isinstance(build.ram, RAM):
        candidates += find_ram_upgrades(build, budget, catalog)
    candidates += find_storage_upgrades(build, budget, catalog)
    logger.debug(f"{len(candidates)} upgrade candidates before scoring")

    scored = []
    for option in candidates:
        result = evaluate(simulate_upgrade(build, option), preset, target_id).scores
        impact = ScoreImpact(
            overall=result.overall - current_scores.overall,
            performance=result.performance.value - current_scores.performance.value,
            value=result.value.value - current_scores.value.value,
            compatibility=result.compatibility.value - current_scores.compatibility.value,
        )
        total = option.total_cost
        rating = impact.overall / total * 100 if total > 0 else 0.0
        scored.append(replace(option, score_impact=impact, value_rating=rating))

    scored.sort(key=lambda o: o.value_rating, reverse=True)
    affordable = [o for o in scored if o.total_cost <= budget * tolerance]
    logger.info(f"Upgrade path: {len(affordable)} affordable of {len(scored)} candidates (budget ${budget:,.0f})")
    return affordable[:limit]

