"""Auto-fix plans: swap parts from the catalog until compatibility issues go away.

Critical issues are handled first, then warnings. For each issue a finder
proposes catalog parts; every proposal is installed into the working build
and re-checked. A proposal is accepted only when the issue disappears and no
new critical issue appears. Among accepted proposals, "cheapest" takes the
smallest price change and "performance" the strongest part.
"""
import logging
from dataclasses import dataclass
from typing import Callable

from catalog import Catalog
from compatibility.engine import CheckOptions, check_compatibility
from compatibility.rules import case_supports_board
from models import (
    CRITICAL, SEVERITY_ORDER, WARNING, AutoFix, AutoFixPlan, Build, CompatibilityResult, Issue, Part,
)
from power import estimate_load, recommended_psu_wattage

logger = logging.getLogger(__name__)

STRATEGIES = ("cheapest", "performance")
FIXABLE_SEVERITIES = (CRITICAL, WARNING)
_IMPACT_ORDER = {"worse": 0, "same": 1, "better": 2}


@dataclass(frozen=True)
class _Proposal:
    category: str
    part: Part
    reason: str


Finder = Callable[[Build, Catalog], list[_Proposal]]


# ============ Ranking ============


def performance_rank(part: Part) -> tuple:
    """Higher is stronger. Ranks are only meaningful between parts of one category."""
    specs = part.specs
    match part.category:
        case "cpu" | "gpu":
            return (specs.tier or 0, part.price)
        case "psu":
            return (specs.is_atx3, specs.wattage_w)
        case "ram":
            return (specs.speed_mhz or 0, specs.capacity_gb)
        case "cooler":
            return (specs.tdp_rating_w or 0,)
        case "case":
            return (specs.max_gpu_length_mm or 0, specs.max_cooler_height_mm or 0)
        case "storage":
            return (specs.capacity_gb,)
    return (part.price,)


def _performance_impact(old: Part | None, new: Part) -> str:
    if old is None:
        return "better"
    before, after = performance_rank(old), performance_rank(new)
    if after > before:
        return "better"
    if after < before:
        return "worse"
    return "same"


# ============ Finders ============


def _others(parts, current: Part | None) -> list:
    return [p for p in parts if current is None or p.id != current.id]


def _fits_board(case_part, build: Build) -> bool:
    return build.motherboard is None or case_supports_board(case_part, build.motherboard.specs.form_factor)


def _gpu_fit(build: Build, catalog: Catalog) -> list[_Proposal]:
    gpu, case = build.gpu, build.case
    proposals = []
    for c in _others(catalog.cases, case):
        if _fits_board(c, build):
            proposals.append(_Proposal("case", c, f"Case clears your GPU ({c.specs.max_gpu_length_mm or '?'}mm)"))
    current_tier = gpu.specs.tier or 5
    for g in _others(catalog.gpus, gpu):
        if (g.specs.tier or 5) >= current_tier - 1:
            proposals.append(_Proposal("gpu", g, f"{g.name} fits the case"))
    return proposals


def _socket(build: Build, catalog: Catalog) -> list[_Proposal]:
    cpu, board = build.cpu, build.motherboard
    proposals = [
        _Proposal("cpu", c, f"Compatible with {board.specs.socket} motherboard")
        for c in _others(catalog.cpus, cpu)
        if c.specs.socket == board.specs.socket and (c.specs.tier or 5) >= (cpu.specs.tier or 5) - 1
    ]
    proposals += [
        _Proposal("motherboard", m, f"Compatible with {cpu.specs.socket} CPU")
        for m in _others(catalog.motherboards, board)
        if m.specs.socket == cpu.specs.socket and m.specs.form_factor == board.specs.form_factor
    ]
    return proposals


def _psu_wattage(build: Build, catalog: Catalog) -> list[_Proposal]:
    wattage = recommended_psu_wattage(estimate_load(build))
    return [
        _Proposal("psu", p, f"{p.specs.wattage_w}W provides adequate headroom")
        for p in _others(catalog.psus, build.psu) if p.specs.wattage_w >= wattage
    ]


def _psu_connectors(build: Build, catalog: Catalog) -> list[_Proposal]:
    floor = estimate_load(build) * 1.2
    return [
        _Proposal("psu", p, f"PCIe power connectors for {build.gpu.name}")
        for p in _others(catalog.psus, build.psu) if p.specs.wattage_w >= floor
    ]


def _psu_fit(build: Build, catalog: Catalog) -> list[_Proposal]:
    wattage = build.psu.specs.wattage_w
    proposals = [
        _Proposal("psu", p, f"{p.specs.form_factor} PSU fits the case")
        for p in _others(catalog.psus, build.psu) if p.specs.wattage_w >= wattage
    ]
    proposals += [
        _Proposal("case", c, "Case fits your PSU") for c in _others(catalog.cases, build.case) if _fits_board(c, build)
    ]
    return proposals


def _ram_for_board(build: Build, catalog: Catalog) -> list[_Proposal]:
    board = build.motherboard
    return [
        _Proposal("ram", r, f"{r.specs.memory_type} compatible with motherboard")
        for r in _others(catalog.ram, build.ram)
        if r.specs.memory_type == board.specs.memory_type
        and r.specs.modules <= board.specs.ram_slots
        and not (r.specs.is_ecc and not (board.specs.supports_ecc and build.cpu and build.cpu.specs.supports_ecc))
    ]


def _cooler(build: Build, catalog: Catalog) -> list[_Proposal]:
    return [
        _Proposal("cooler", c, f"{c.specs.tdp_rating_w or '?'}W rated cooler")
        for c in _others(catalog.coolers, build.cooler)
    ]


def _cooler_or_case(build: Build, catalog: Catalog) -> list[_Proposal]:
    return _cooler(build, catalog) + [
        _Proposal("case", c, "Case fits your cooler") for c in _others(catalog.cases, build.case) if _fits_board(c, build)
    ]


def _board_or_case(build: Build, catalog: Catalog) -> list[_Proposal]:
    board = build.motherboard
    proposals = [
        _Proposal("case", c, f"Case supports {board.specs.form_factor} boards")
        for c in _others(catalog.cases, build.case) if _fits_board(c, build)
    ]
    proposals += [
        _Proposal("motherboard", m, f"{m.specs.form_factor} board fits the case")
        for m in _others(catalog.motherboards, board)
        if m.specs.socket == board.specs.socket and m.specs.memory_type == board.specs.memory_type
    ]
    return proposals


def _board_slots(build: Build, catalog: Catalog) -> list[_Proposal]:
    board = build.motherboard
    return [
        _Proposal("motherboard", m, f"{m.specs.m2_slots} M.2 slots")
        for m in _others(catalog.motherboards, board)
        if m.specs.socket == board.specs.socket and m.specs.memory_type == board.specs.memory_type
    ]


def _case(build: Build, catalog: Catalog) -> list[_Proposal]:
    return [
        _Proposal("case", c, "Case clears your components")
        for c in _others(catalog.cases, build.case) if _fits_board(c, build)
    ]


FINDERS: dict[str, Finder] = {
    "gpuTooLong": _gpu_fit,
    "gpuTooThick": _gpu_fit,
    "gpuThicknessRisk": _gpu_fit,
    "socketMismatch": _socket,
    "insufficientPower": _psu_wattage,
    "lowPsuHeadroom": _psu_wattage,
    "ramTypeMismatch": _ram_for_board,
    "tooManyRamModules": _ram_for_board,
    "ramExceedsMotherboard": _ram_for_board,
    "ecc-not-supported": _ram_for_board,
    "insufficientPsuConnectors": _psu_connectors,
    "missing-12vhpwr": _psu_connectors,
    "insufficient-12vhpwr": _psu_connectors,
    "insufficient-8pin": _psu_connectors,
    "insufficient-6pin": _psu_connectors,
    "adapter-transient-risk": _psu_connectors,
    "cooling-insufficient": _cooler,
    "cooling-marginal": _cooler,
    "coolerSocketUnsupported": _cooler,
    "coolerTooTall": _cooler_or_case,
    "radiatorUnsupported": _cooler_or_case,
    "radiatorTooThick": _cooler_or_case,
    "formFactorIncompatible": _board_or_case,
    "noM2Slots": _board_slots,
    "insufficientSataPorts": _board_slots,
    "psuTooLong": _psu_fit,
    "psuFormFactorIncompatible": _psu_fit,
    "drive-35-clearance-conflict": _case,
}


# ============ Plan ============


def _check(build: Build, preset: str) -> CompatibilityResult:
    return check_compatibility(build, CheckOptions(preset=preset))


def _pick(accepted: list[tuple[_Proposal, float]], strategy: str, build: Build) -> tuple[_Proposal, float]:
    if strategy == "performance":
        return max(accepted, key=lambda a: (
            _IMPACT_ORDER[_performance_impact(build.get(a[0].category), a[0].part)],
            performance_rank(a[0].part),
            -a[1],
        ))
    return min(accepted, key=lambda a: (a[1], [-x for x in performance_rank(a[0].part)]))


def find_fix(issue: Issue, build: Build, catalog: Catalog, strategy: str, preset: str = "custom") -> AutoFix | None:
    """Best validated replacement for one issue on the given build, or None."""
    finder = FINDERS.get(issue.id)
    if finder is None:
        return None
    proposals = finder(build, catalog)

    critical_before = {i.id for i in _check(build, preset).hard_fails}
    accepted = []
    for proposal in proposals:
        trial = build.with_part(proposal.category, proposal.part)
        result = _check(trial, preset)
        if issue.id in result.issue_ids():
            continue
        if {i.id for i in result.hard_fails} - critical_before:
            continue
        old = build.get(proposal.category)
        accepted.append((proposal, proposal.part.price - (old.price if old else 0.0)))

    if not accepted:
        return None

    proposal, delta = _pick(accepted, strategy, build)
    old = build.get(proposal.category)
    return AutoFix(
        issue_id=issue.id,
        action="replace" if old else "add",
        category=proposal.category,
        old_part=old,
        new_part=proposal.part,
        reason=proposal.reason,
        price_impact=delta,
        performance_impact=_performance_impact(old, proposal.part),
    )


def generate_auto_fix_plan(
    build: Build,
    issues,
    strategy: str,
    catalog: Catalog,
    *,
    preset: str = "custom",
) -> AutoFixPlan:
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown fix strategy: {strategy!r}")

    ordered = sorted(
        (i for i in issues if i.severity in FIXABLE_SEVERITIES),
        key=lambda i: SEVERITY_ORDER[i.severity],
    )

    working = build
    fixes: list[AutoFix] = []
    fixed: list[str] = []
    remaining: list[str] = []

    for issue in ordered:
        if issue.id not in _check(working, preset).issue_ids():
            # Resolved by an earlier fix
            fixed.append(issue.id)
            continue
        fix = find_fix(issue, working, catalog, strategy, preset)
        if fix is None:
            remaining.append(issue.id)
            continue
        fixes.append(fix)
        fixed.append(issue.id)
        working = working.with_part(fix.category, fix.new_part)
        logger.debug(f"{issue.id}: {fix.action} {fix.category} -> {fix.new_part.name}")

    new_result = _check(working, preset)
    total = sum(f.price_impact for f in fixes)
    logger.info(
        f"Auto-fix ({strategy}): {len(fixes)} fixes, {len(fixed)} issues fixed, "
        f"{len(remaining)} remaining, price impact ${total:+,.0f}"
    )
    return AutoFixPlan(
        strategy=strategy,
        fixes=tuple(fixes),
        total_price_impact=total,
        issues_fixed=tuple(fixed),
        issues_remaining=tuple(remaining),
        fixed_build=working,
        new_compat_result=new_result,
    )
