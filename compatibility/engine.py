"""Compatibility engine: runs every applicable rule over a build."""
import logging
from dataclasses import dataclass
from typing import Callable

from compatibility import efficiency, headers, rules
from compatibility.cooling import check_cooling_adequacy
from compatibility.drive_clearance import check_35_drive_clearance
from compatibility.ecc import check_ecc_support
from compatibility.power_connectors import (
    check_atx_standard, check_connector_supply, check_power_connectors, psu_connector_counts,
)
from models import CRITICAL, INFO, WARNING, Build, CompatibilityResult, Issue
from power import estimate_load

logger = logging.getLogger(__name__)

MAX_OVERRIDE_PENALTY = 20


@dataclass(frozen=True, kw_only=True)
class CheckOptions:
    psu_pcie_connectors: int | None = None  # 8-pin equivalents, when the user knows them
    psu_length_mm: int | None = None
    manual_override_count: int = 0
    preset: str = "custom"


@dataclass(frozen=True)
class _Context:
    build: Build
    options: CheckOptions
    load: int


@dataclass(frozen=True)
class Rule:
    name: str
    requires: tuple[str, ...]
    check: Callable[[_Context], Issue | list[Issue] | None]


def _power_connectors(ctx: _Context) -> Issue | list[Issue] | None:
    gpu, psu = ctx.build.gpu, ctx.build.psu
    if psu_connector_counts(psu) is not None:
        return check_power_connectors(gpu, psu)
    return check_connector_supply(gpu, psu, ctx.options.psu_pcie_connectors)


def _b(ctx: _Context) -> Build:
    return ctx.build


RULES: tuple[Rule, ...] = (
    # Hard fit
    Rule("socket", ("cpu", "motherboard"), lambda c: rules.socket_mismatch(_b(c).cpu, _b(c).motherboard)),
    Rule("ram_type", ("ram", "motherboard"), lambda c: rules.ram_type_mismatch(_b(c).ram, _b(c).motherboard)),
    Rule("form_factor", ("motherboard", "case"),
         lambda c: rules.form_factor_incompatible(_b(c).motherboard, _b(c).case)),
    Rule("gpu_length", ("gpu", "case"), lambda c: rules.gpu_too_long(_b(c).gpu, _b(c).case)),
    Rule("gpu_thickness", ("gpu", "case"), lambda c: rules.gpu_thickness(_b(c).gpu, _b(c).case)),
    Rule("cooler_height", ("cooler", "case"), lambda c: rules.cooler_too_tall(_b(c).cooler, _b(c).case)),
    Rule("radiator", ("cooler", "case"), lambda c: rules.radiator_fit(_b(c).cooler, _b(c).case)),
    Rule("cooler_socket", ("cpu", "cooler"), lambda c: rules.cooler_socket_unsupported(_b(c).cpu, _b(c).cooler)),
    Rule("psu_length", ("psu", "case"),
         lambda c: rules.psu_too_long(_b(c).psu, _b(c).case, c.options.psu_length_mm)),
    Rule("psu_form_factor", ("psu", "case"),
         lambda c: rules.psu_form_factor_incompatible(_b(c).psu, _b(c).case)),
    Rule("power", ("psu",), lambda c: rules.insufficient_power(_b(c).psu, c.load)),
    Rule("power_connectors", ("gpu", "psu"), _power_connectors),
    Rule("m2_slots", ("motherboard", "storage"), lambda c: rules.no_m2_slots(_b(c).storage, _b(c).motherboard)),
    Rule("sata_ports", ("motherboard", "storage"),
         lambda c: rules.insufficient_sata_ports(_b(c).storage, _b(c).motherboard)),
    Rule("ram_capacity", ("ram", "motherboard"),
         lambda c: rules.ram_exceeds_motherboard(_b(c).ram, _b(c).motherboard)),
    Rule("ram_modules", ("ram", "motherboard"),
         lambda c: rules.too_many_ram_modules(_b(c).ram, _b(c).motherboard)),
    Rule("cooling", ("cpu", "cooler"), lambda c: check_cooling_adequacy(_b(c).cpu, _b(c).cooler)),
    Rule("drive_clearance", ("case", "storage"),
         lambda c: check_35_drive_clearance(_b(c).case, _b(c).storage, _b(c).gpu, _b(c).psu)),
    Rule("ecc", ("ram", "motherboard", "cpu"),
         lambda c: check_ecc_support(_b(c).ram, _b(c).motherboard, _b(c).cpu)),
    # Warnings
    Rule("psu_headroom", ("psu",), lambda c: rules.low_psu_headroom(_b(c).psu, c.load)),
    Rule("bios", ("cpu", "motherboard"), lambda c: rules.bios_update_needed(_b(c).cpu, _b(c).motherboard)),
    Rule("ram_speed", ("ram", "cpu"), lambda c: rules.ram_speed_risk(_b(c).ram, _b(c).cpu)),
    Rule("atx_standard", ("gpu", "psu"), lambda c: check_atx_standard(_b(c).gpu, _b(c).psu)),
    Rule("fan_headers", ("motherboard",),
         lambda c: headers.check_fan_headers(_b(c).motherboard, _b(c).case, _b(c).cooler)),
    Rule("rgb_headers", ("motherboard", "cooler"),
         lambda c: headers.check_rgb_headers(_b(c).motherboard, _b(c).cooler)),
    Rule("usb_c_header", ("motherboard", "case"),
         lambda c: headers.check_usb_c_header(_b(c).motherboard, _b(c).case)),
    # Efficiency
    Rule("cpu_gpu_balance", ("cpu", "gpu"),
         lambda c: efficiency.check_cpu_gpu_balance(_b(c).cpu, _b(c).gpu, c.options.preset)),
    Rule("psu_overkill", ("psu",), lambda c: efficiency.check_psu_overkill(_b(c).psu, c.load)),
    Rule("ram_speed_value", ("ram", "cpu"),
         lambda c: efficiency.check_ram_speed_value(_b(c).ram, _b(c).cpu, c.options.preset, _b(c).motherboard)),
    Rule("motherboard_value", ("motherboard", "cpu"),
         lambda c: efficiency.check_motherboard_value(_b(c).motherboard, _b(c).cpu, c.options.preset)),
    Rule("storage_value", ("storage",), lambda c: efficiency.check_storage_value(_b(c).storage, c.options.preset)),
    # Notes
    Rule("upgrade_room", ("motherboard",),
         lambda c: rules.no_upgrade_room(_b(c).motherboard, _b(c).ram, _b(c).storage)),
)


def calculate_confidence(build: Build, options: CheckOptions | None = None) -> int:
    """How much of the data the rules needed was present, 0-100."""
    options = options or CheckOptions()
    confidence = 100

    if build.case:
        case_specs = build.case.specs
        for value in (case_specs.max_gpu_length_mm, case_specs.max_cooler_height_mm,
                      case_specs.max_psu_length_mm):
            if value is None:
                confidence -= 10

    if build.gpu:
        if build.gpu.specs.length_mm is None:
            confidence -= 10
        if build.gpu.specs.thickness_slots is None:
            confidence -= 15

    if build.psu and build.psu.specs.connectors is None and options.psu_pcie_connectors is None:
        confidence -= 10

    if (build.cooler and build.case and build.cooler.specs.type == "AIO"
            and build.case.specs.supports_radiator_mm is None):
        confidence -= 10

    confidence -= min(MAX_OVERRIDE_PENALTY, max(0, options.manual_override_count) * 5)
    return max(0, min(100, confidence))


def check_compatibility(build: Build, options: CheckOptions | None = None) -> CompatibilityResult:
    options = options or CheckOptions()
    ctx = _Context(build=build, options=options, load=estimate_load(build))

    buckets: dict[str, list[Issue]] = {CRITICAL: [], WARNING: [], INFO: []}
    checks_run = 0
    for rule in RULES:
        if not all(build.has(category) for category in rule.requires):
            continue
        checks_run += 1
        result = rule.check(ctx)
        if result is None:
            continue
        for issue in result if isinstance(result, list) else [result]:
            buckets[issue.severity].append(issue)

    confidence = calculate_confidence(build, options)
    logger.debug(
        f"{checks_run} checks run: {len(buckets[CRITICAL])} critical, "
        f"{len(buckets[WARNING])} warnings, {len(buckets[INFO])} notes, confidence {confidence}"
    )
    return CompatibilityResult(
        is_compatible=not buckets[CRITICAL],
        hard_fails=tuple(buckets[CRITICAL]),
        warnings=tuple(buckets[WARNING]),
        notes=tuple(buckets[INFO]),
        confidence=confidence,
        checks_run=checks_run,
    )
