"""Data models for the PC build advisor."""
import logging
from dataclasses import asdict, dataclass, field, fields, replace
from typing import ClassVar

logger = logging.getLogger(__name__)

CRITICAL = "critical"
WARNING = "warning"
INFO = "info"

SEVERITY_ORDER = {CRITICAL: 0, WARNING: 1, INFO: 2}

# Single-valued build slots, in display order. Storage is the only multi-valued slot.
PART_SLOTS = ("cpu", "gpu", "motherboard", "ram", "psu", "cooler", "case")
CATEGORIES = ("cpu", "gpu", "motherboard", "ram", "storage", "psu", "cooler", "case")


class ComponentDataError(ValueError):
    """A component record or build slot violates the data contract."""


# ============ Specs ============


@dataclass(frozen=True, kw_only=True)
class CPUSpecs:
    socket: str
    brand: str = ""
    cores: int = 0
    threads: int = 0
    base_clock_ghz: float | None = None
    boost_clock_ghz: float | None = None
    tdp_w: int | None = None
    max_mem_speed_mhz: int | None = None
    memory_type: str | None = None  # "DDR4" | "DDR5"
    pcie_version: str | None = None
    has_igpu: bool = False
    tier: int | None = None  # 1-10
    supports_ecc: bool = False


@dataclass(frozen=True, kw_only=True)
class GPUSpecs:
    brand: str = ""
    length_mm: int | None = None
    thickness_slots: float | None = None
    tdp_w: int | None = None
    # Free-form: "16-pin", "8-pin", "2x8pin", "1x8pin+1x6pin", "1x12vhpwr"
    power_connectors: tuple[str, ...] = ()
    pcie_version: str | None = None
    vram_gb: int | None = None
    tier: int | None = None  # 1-10
    peak_power_w: int | None = None


@dataclass(frozen=True, kw_only=True)
class MotherboardHeaders:
    fan_4pin: int = 0
    fan_3pin: int = 0
    rgb_12v: int = 0
    argb_5v: int = 0
    usb2_internal: int = 0
    usb3_internal: int = 0
    usb_c_internal: int = 0  # Type-E


@dataclass(frozen=True, kw_only=True)
class MotherboardSpecs:
    socket: str
    chipset: str = ""
    form_factor: str | None = None  # "E-ATX" | "ATX" | "Micro-ATX" | "Mini-ITX"
    memory_type: str | None = None
    ram_slots: int = 4
    max_ram_gb: int | None = None
    m2_slots: int = 0
    sata_ports: int | None = None
    pcie_version: str | None = None
    has_bios_flashback: bool = False
    supports_ecc: bool = False
    supports_xmp: bool = False
    supports_expo: bool = False
    max_memory_speed_oc_mhz: int | None = None
    max_memory_speed_stock_mhz: int | None = None
    headers: MotherboardHeaders | None = None


@dataclass(frozen=True, kw_only=True)
class RAMSpecs:
    memory_type: str
    capacity_gb: int = 0  # whole kit
    speed_mhz: int | None = None
    modules: int = 1
    latency: str = ""
    voltage_v: float | None = None
    is_ecc: bool = False


@dataclass(frozen=True, kw_only=True)
class StorageSpecs:
    interface: str  # "NVMe" | "SATA"
    form_factor: str = ""  # "M.2 2280" | '2.5" SATA' | '3.5" SATA'
    capacity_gb: int = 0
    read_speed_mb_s: int | None = None
    write_speed_mb_s: int | None = None
    tbw: int | None = None
    pcie_version: int | None = None
    physical_size: str | None = None

    @property
    def is_35_inch(self) -> bool:
        return self.physical_size == "3.5" or self.form_factor == '3.5" SATA'


@dataclass(frozen=True, kw_only=True)
class PSUConnectors:
    pin_24_main: int = 1
    pin_8_cpu: int = 1
    pin_8_pcie: int = 0
    pin_6_pcie: int = 0
    pin_16_12vhpwr: int = 0
    sata: int = 0
    molex: int = 0


@dataclass(frozen=True, kw_only=True)
class PSUSpecs:
    wattage_w: int
    efficiency: str = ""
    form_factor: str = "ATX"  # "ATX" | "SFX" | "SFX-L"
    modular: str = ""
    atx_version: str | None = None  # legacy "2.x" | "3.0"
    atx_standard: str | None = None  # "ATX2.x" | "ATX3.0" | "ATX3.1"
    pcie_5_ready: bool = False
    length_mm: int | None = None
    connectors: PSUConnectors | None = None

    @property
    def standard(self) -> str | None:
        if self.atx_standard:
            return self.atx_standard
        if self.atx_version == "3.0":
            return "ATX3.0"
        if self.atx_version == "2.x":
            return "ATX2.x"
        return None

    @property
    def is_atx3(self) -> bool:
        return self.standard in ("ATX3.0", "ATX3.1")


@dataclass(frozen=True, kw_only=True)
class CoolerSpecs:
    type: str  # "Air" | "AIO"
    tdp_rating_w: int | None = None
    radiator_size_mm: int | None = None
    fan_size_mm: int | None = None
    height_mm: int | None = None
    sockets: tuple[str, ...] = ()
    radiator_fan_thickness_mm: int | None = None
    fan_count: int = 0
    rgb_type: str = "none"  # "none" | "12v_rgb" | "5v_argb"


@dataclass(frozen=True, kw_only=True)
class CaseFrontPanel:
    usb_a: int = 0
    usb_c: int = 0
    audio_jack: bool = True


@dataclass(frozen=True, kw_only=True)
class CaseSpecs:
    form_factor: str
    max_gpu_length_mm: int | None = None
    max_cooler_height_mm: int | None = None
    max_psu_length_mm: int | None = None
    max_gpu_thickness_slots: float | None = None
    drive_bays_2_5: int = 0
    drive_bays_3_5: int = 0
    expansion_slots: int | None = None
    supports_radiator_mm: tuple[int, ...] | None = None
    max_radiator_thickness_mm: int | None = None
    max_psu_form_factor: str | None = None
    front_panel: CaseFrontPanel | None = None
    preinstalled_fans: int = 0
    max_fans: int | None = None
    # Clearance lost when a 3.5" drive cage is populated
    drive_35_reduces_gpu_length: int = 0
    drive_35_reduces_psu_length: int = 0
    drive_35_conflicts_with: str | None = None  # "gpu" | "psu" | "both"


# ============ Components ============


@dataclass(frozen=True, kw_only=True)
class Part:
    category: ClassVar[str] = ""
    discriminant: ClassVar[str] = ""
    specs_type: ClassVar[type] = object

    id: str
    name: str
    manufacturer: str = ""
    price_usd: float | None = None

    @property
    def price(self) -> float:
        return self.price_usd or 0.0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["category"] = self.category
        return data


@dataclass(frozen=True, kw_only=True)
class CPU(Part):
    category: ClassVar[str] = "cpu"
    discriminant: ClassVar[str] = "socket"
    specs_type: ClassVar[type] = CPUSpecs
    specs: CPUSpecs


@dataclass(frozen=True, kw_only=True)
class GPU(Part):
    category: ClassVar[str] = "gpu"
    discriminant: ClassVar[str] = ""
    specs_type: ClassVar[type] = GPUSpecs
    specs: GPUSpecs


@dataclass(frozen=True, kw_only=True)
class Motherboard(Part):
    category: ClassVar[str] = "motherboard"
    discriminant: ClassVar[str] = "socket"
    specs_type: ClassVar[type] = MotherboardSpecs
    specs: MotherboardSpecs


@dataclass(frozen=True, kw_only=True)
class RAM(Part):
    category: ClassVar[str] = "ram"
    discriminant: ClassVar[str] = "memory_type"
    specs_type: ClassVar[type] = RAMSpecs
    specs: RAMSpecs


@dataclass(frozen=True, kw_only=True)
class Storage(Part):
    category: ClassVar[str] = "storage"
    discriminant: ClassVar[str] = "interface"
    specs_type: ClassVar[type] = StorageSpecs
    specs: StorageSpecs


@dataclass(frozen=True, kw_only=True)
class PSU(Part):
    category: ClassVar[str] = "psu"
    discriminant: ClassVar[str] = "wattage_w"
    specs_type: ClassVar[type] = PSUSpecs
    specs: PSUSpecs


@dataclass(frozen=True, kw_only=True)
class Cooler(Part):
    category: ClassVar[str] = "cooler"
    discriminant: ClassVar[str] = "type"
    specs_type: ClassVar[type] = CoolerSpecs
    specs: CoolerSpecs


@dataclass(frozen=True, kw_only=True)
class Case(Part):
    category: ClassVar[str] = "case"
    discriminant: ClassVar[str] = "form_factor"
    specs_type: ClassVar[type] = CaseSpecs
    specs: CaseSpecs


PART_TYPES: dict[str, type[Part]] = {
    cls.category: cls for cls in (CPU, GPU, Motherboard, RAM, Storage, PSU, Cooler, Case)
}

_NESTED_SPECS = {
    "headers": MotherboardHeaders,
    "connectors": PSUConnectors,
    "front_panel": CaseFrontPanel,
}


def _build_specs(specs_type: type, raw: dict):
    known = {f.name for f in fields(specs_type)}
    kwargs = {}
    for key, value in raw.items():
        if key not in known:
            logger.debug(f"Ignoring unknown {specs_type.__name__} field: {key}")
            continue
        if key in _NESTED_SPECS and isinstance(value, dict):
            value = _build_specs(_NESTED_SPECS[key], value)
        elif isinstance(value, list):
            value = tuple(value)
        kwargs[key] = value
    return specs_type(**kwargs)


def part_from_dict(category: str, data: dict) -> Part:
    """Build a typed component from a plain record.

    Raises ComponentDataError for an unknown category, a missing id, or a
    missing discriminant field (e.g. a CPU without a socket).
    """
    part_cls = PART_TYPES.get(category)
    if part_cls is None:
        raise ComponentDataError(f"Unknown component category: {category!r}")
    if not data.get("id"):
        raise ComponentDataError(f"{category} record has no id: {data.get('name', '?')}")

    raw_specs = dict(data.get("specs") or {})
    key = part_cls.discriminant
    if key and raw_specs.get(key) in (None, ""):
        raise ComponentDataError(f"{category} {data['id']} is missing specs.{key}")

    try:
        specs = _build_specs(part_cls.specs_type, raw_specs)
    except TypeError as e:
        raise ComponentDataError(f"{category} {data['id']} has invalid specs: {e}") from e

    return part_cls(
        id=str(data["id"]),
        name=data.get("name", ""),
        manufacturer=data.get("manufacturer", ""),
        price_usd=data.get("price_usd"),
        specs=specs,
    )


# ============ Build ============


@dataclass(frozen=True, kw_only=True)
class Build:
    """The selected parts. Every change returns a new Build."""
    cpu: CPU | None = None
    gpu: GPU | None = None
    motherboard: Motherboard | None = None
    ram: RAM | None = None
    storage: tuple[Storage, ...] = ()
    psu: PSU | None = None
    cooler: Cooler | None = None
    case: Case | None = None

    def __post_init__(self):
        for slot in PART_SLOTS:
            part = getattr(self, slot)
            if part is not None and part.category != slot:
                raise ComponentDataError(f"Build slot {slot!r} cannot hold a {part.category} part")
        drives = tuple(self.storage)
        for drive in drives:
            if drive.category != "storage":
                raise ComponentDataError(f"Build storage cannot hold a {drive.category} part")
        object.__setattr__(self, "storage", drives)

    def get(self, category: str):
        """Return the part in a slot. Storage returns the tuple, or None when empty."""
        if category == "storage":
            return self.storage or None
        return getattr(self, category)

    def has(self, category: str) -> bool:
        return bool(self.get(category))

    def with_part(self, category: str, part: Part | None) -> "Build":
        if category == "storage":
            return self.with_storage(*([part] if part else []))
        return replace(self, **{category: part})

    def with_storage(self, *drives: Storage) -> "Build":
        return replace(self, storage=tuple(drives))

    def with_storage_added(self, drive: Storage) -> "Build":
        return replace(self, storage=self.storage + (drive,))

    def without(self, category: str) -> "Build":
        return self.with_part(category, None)

    def parts(self) -> list[Part]:
        result = []
        for slot in PART_SLOTS:
            part = getattr(self, slot)
            if part is not None:
                result.append(part)
        result.extend(self.storage)
        return result

    def total_price(self) -> float:
        return sum(p.price for p in self.parts())

    @property
    def nvme_drives(self) -> tuple[Storage, ...]:
        return tuple(d for d in self.storage if d.specs.interface == "NVMe")

    @property
    def total_storage_gb(self) -> int:
        return sum(d.specs.capacity_gb for d in self.storage)

    def to_dict(self) -> dict:
        data = {slot: (getattr(self, slot).to_dict() if getattr(self, slot) else None)
                for slot in PART_SLOTS}
        data["storage"] = [d.to_dict() for d in self.storage]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Build":
        kwargs = {}
        for slot in PART_SLOTS:
            record = data.get(slot)
            if record:
                kwargs[slot] = part_from_dict(slot, record)
        kwargs["storage"] = tuple(part_from_dict("storage", r) for r in data.get("storage") or [])
        return cls(**kwargs)


# ============ Compatibility results ============


@dataclass(frozen=True)
class IssueEvidence:
    values: dict[str, str] = field(default_factory=dict)
    comparison: str | None = None
    calculation: str | None = None


@dataclass(frozen=True, kw_only=True)
class Issue:
    id: str
    category: str
    severity: str  # "critical" | "warning" | "info"
    title: str
    description: str
    affected_parts: tuple[str, ...] = ()
    suggested_fixes: tuple[str, ...] = ()
    evidence: IssueEvidence | None = None

    def __post_init__(self):
        if self.severity not in SEVERITY_ORDER:
            raise ValueError(f"Unknown severity: {self.severity}")
        object.__setattr__(self, "affected_parts", tuple(p for p in self.affected_parts if p))
        object.__setattr__(self, "suggested_fixes", tuple(self.suggested_fixes))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, kw_only=True)
class CompatibilityResult:
    is_compatible: bool
    hard_fails: tuple[Issue, ...] = ()
    warnings: tuple[Issue, ...] = ()
    notes: tuple[Issue, ...] = ()
    confidence: int = 100
    checks_run: int = 0

    @property
    def issues(self) -> list[Issue]:
        return [*self.hard_fails, *self.warnings, *self.notes]

    def issue_ids(self) -> list[str]:
        return [i.id for i in self.issues]

    def to_dict(self) -> dict:
        return asdict(self)


# ============ Scores ============


@dataclass(frozen=True)
class ScoreBreakdownItem:
    factor: str
    impact: int
    explanation: str


@dataclass(frozen=True, kw_only=True)
class TargetEvaluation:
    target_id: str
    target_name: str
    meets_target: bool
    cpu_fit: str  # "below" | "meets" | "exceeds"
    gpu_fit: str
    ram_fit: str
    bottleneck: str  # "cpu" | "gpu" | "ram" | "none"
    recommendation: str


@dataclass(frozen=True, kw_only=True)
class Score:
    value: int
    confidence: int
    weight: float
    breakdown: tuple[ScoreBreakdownItem, ...] = ()
    summary: str = ""
    target_evaluation: TargetEvaluation | None = None


@dataclass(frozen=True, kw_only=True)
class ScoreResult:
    overall: int
    compatibility: Score
    performance: Score
    value: Score
    usability: Score

    def to_dict(self) -> dict:
        return asdict(self)


# ============ Planner results ============


@dataclass(frozen=True)
class AdditionalCost:
    part: str
    estimated_cost: float


@dataclass(frozen=True, kw_only=True)
class PlatformChange:
    type: str  # "cpu_socket" | "ram_type" | "psu_wattage"
    from_platform: str
    to_platform: str
    additional_costs: tuple[AdditionalCost, ...] = ()
    total_cost: float = 0.0
    warning: str = ""


@dataclass(frozen=True)
class ScoreImpact:
    overall: int = 0
    performance: int = 0
    value: int = 0
    compatibility: int = 0


@dataclass(frozen=True, kw_only=True)
class UpgradeOption:
    category: str
    current_part: Part | None
    suggested_part: Part
    cost: float
    reason: str
    priority: str  # "high" | "medium" | "low"
    score_impact: ScoreImpact = field(default_factory=ScoreImpact)
    value_rating: float = 0.0
    platform_change: PlatformChange | None = None
    # Parts the cascade installs alongside the suggested part
    platform_change_parts: tuple[Part, ...] = ()

    @property
    def total_cost(self) -> float:
        return self.cost + (self.platform_change.total_cost if self.platform_change else 0.0)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total_cost"] = self.total_cost
        return data


@dataclass(frozen=True, kw_only=True)
class PartSuggestion:
    """A catalog part proposed for one slot, in response to an issue or an imbalance."""
    category: str
    current_part: Part
    suggested_part: Part
    reason: str
    score_delta: int = 0
    price_delta: float = 0.0


@dataclass(frozen=True)
class PartSwap:
    category: str
    from_name: str
    to_name: str


@dataclass(frozen=True, kw_only=True)
class AlternativeBuild:
    label: str
    swaps: tuple[PartSwap, ...]
    score_impact: str


@dataclass(frozen=True, kw_only=True)
class Recommendations:
    upgrades: tuple[PartSuggestion, ...] = ()
    alternatives: tuple[AlternativeBuild, ...] = ()

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, kw_only=True)
class AutoFix:
    issue_id: str
    action: str  # "replace" | "add" | "remove"
    category: str
    old_part: Part | None
    new_part: Part | None
    reason: str
    price_impact: float = 0.0
    performance_impact: str = "same"  # "better" | "same" | "worse"


@dataclass(frozen=True, kw_only=True)
class AutoFixPlan:
    strategy: str  # "cheapest" | "performance"
    fixes: tuple[AutoFix, ...] = ()
    total_price_impact: float = 0.0
    issues_fixed: tuple[str, ...] = ()
    issues_remaining: tuple[str, ...] = ()
    fixed_build: Build | None = None
    new_compat_result: CompatibilityResult | None = None

    def to_dict(self) -> dict:
        return asdict(self)
