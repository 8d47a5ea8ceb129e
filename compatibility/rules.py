"""Core compatibility rules.

Each rule takes the parts it needs and returns an Issue, or None when the
rule passes or lacks the data to decide.
"""
from models import (
    CPU, CRITICAL, GPU, INFO, PSU, RAM, WARNING, Case, Cooler, Issue, IssueEvidence, Motherboard,
    Storage,
)
from power import RECOMMENDED_HEADROOM, get_headroom, psu_length_mm

# A case supports its own board size and every smaller one
FORM_FACTOR_HIERARCHY = {
    "E-ATX": ("E-ATX", "ATX", "Micro-ATX", "Mini-ITX"),
    "ATX": ("ATX", "Micro-ATX", "Mini-ITX"),
    "Micro-ATX": ("Micro-ATX", "Mini-ITX"),
    "Mini-ITX": ("Mini-ITX",),
}

PSU_FORM_FACTOR_SIZE = {"SFX": 0, "SFX-L": 1, "ATX": 2}

# Older chipsets that commonly need a BIOS update for newer CPUs
CHIPSETS_MAY_NEED_UPDATE = ("B450", "X470", "A520", "B550", "X570", "B650", "X670")

GPU_THICKNESS_RISK_SLOTS = 2.5
RAM_SPEED_RISK_RATIO = 1.25
LARGE_RADIATOR_MM = 280


def case_supports_board(case: Case, board_form_factor: str | None) -> bool:
    return board_form_factor in FORM_FACTOR_HIERARCHY.get(case.specs.form_factor, ())


# ============ Hard fit ============


def socket_mismatch(cpu: CPU, motherboard: Motherboard) -> Issue | None:
    if cpu.specs.socket == motherboard.specs.socket:
        return None
    return Issue(
        id="socketMismatch",
        category="compatibility",
        severity=CRITICAL,
        title="Socket mismatch",
        description=(
            f"CPU socket ({cpu.specs.socket}) does not match motherboard socket ({motherboard.specs.socket})."
        ),
        affected_parts=(cpu.id, motherboard.id),
        suggested_fixes=("Select a CPU with the correct socket for your motherboard.",),
        evidence=IssueEvidence(
            values={"CPU socket": cpu.specs.socket, "Motherboard socket": motherboard.specs.socket},
            comparison=f"{cpu.specs.socket} != {motherboard.specs.socket}",
        ),
    )


def ram_type_mismatch(ram: RAM, motherboard: Motherboard) -> Issue | None:
    if motherboard.specs.memory_type is None or ram.specs.memory_type == motherboard.specs.memory_type:
        return None
    return Issue(
        id="ramTypeMismatch",
        category="compatibility",
        severity=CRITICAL,
        title="RAM type mismatch",
        description=(
            f"RAM is {ram.specs.memory_type} but motherboard supports {motherboard.specs.memory_type}."
        ),
        affected_parts=(ram.id, motherboard.id),
        suggested_fixes=("Select RAM that matches the motherboard's memory type.",),
        evidence=IssueEvidence(
            values={"RAM": ram.specs.memory_type, "Motherboard": motherboard.specs.memory_type},
            comparison=f"{ram.specs.memory_type} != {motherboard.specs.memory_type}",
        ),
    )


def form_factor_incompatible(motherboard: Motherboard, case: Case) -> Issue | None:
    board = motherboard.specs.form_factor
    if board is None or case_supports_board(case, board):
        return None
    return Issue(
        id="formFactorIncompatible",
        category="compatibility",
        severity=CRITICAL,
        title="Form factor incompatible",
        description=f"Motherboard ({board}) does not fit in case ({case.specs.form_factor}).",
        affected_parts=(motherboard.id, case.id),
        suggested_fixes=("Select a motherboard that fits the case form factor.",),
        evidence=IssueEvidence(
            values={
                "Motherboard": board,
                "Case": case.specs.form_factor,
                "Case supports": ", ".join(FORM_FACTOR_HIERARCHY.get(case.specs.form_factor, ())) or "Unknown",
            },
        ),
    )


def gpu_too_long(gpu: GPU, case: Case) -> Issue | None:
    length = gpu.specs.length_mm
    max_length = case.specs.max_gpu_length_mm
    if length is None or max_length is None or length <= max_length:
        return None
    return Issue(
        id="gpuTooLong",
        category="clearance",
        severity=CRITICAL,
        title="GPU too long for case",
        description=f"GPU length ({length}mm) exceeds case maximum ({max_length}mm).",
        affected_parts=(gpu.id, case.id),
        suggested_fixes=("Select a shorter GPU or a case with more clearance.",),
        evidence=IssueEvidence(
            values={"GPU length": f"{length}mm", "Case max": f"{max_length}mm"},
            comparison=f"{length}mm > {max_length}mm",
            calculation=f"Short by {length - max_length}mm",
        ),
    )


def gpu_thickness(gpu: GPU, case: Case) -> Issue | None:
    """Critical when the case slot limit is known and exceeded, a risk warning when unknown."""
    slots = gpu.specs.thickness_slots
    if slots is None:
        return None
    max_slots = case.specs.max_gpu_thickness_slots
    if max_slots is not None:
        if slots <= max_slots:
            return None
        return Issue(
            id="gpuTooThick",
            category="clearance",
            severity=CRITICAL,
            title="GPU too thick for case",
            description=f"GPU is {slots:g} slots thick but the case fits at most {max_slots:g}.",
            affected_parts=(gpu.id, case.id),
            suggested_fixes=("Select a slimmer GPU or a case with more expansion slot clearance.",),
            evidence=IssueEvidence(
                values={"GPU thickness": f"{slots:g} slots", "Case max": f"{max_slots:g} slots"},
                comparison=f"{slots:g} > {max_slots:g}",
            ),
        )
    if slots > GPU_THICKNESS_RISK_SLOTS:
        return Issue(
            id="gpuThicknessRisk",
            category="clearance",
            severity=WARNING,
            title="GPU thickness may cause clearance issues",
            description=f"GPU is {slots:g} slots thick. Verify case has adequate expansion slot clearance.",
            affected_parts=(gpu.id, case.id),
            suggested_fixes=("Check case specifications for multi-slot GPU clearance.",),
        )
    return None


def cooler_too_tall(cooler: Cooler, case: Case) -> Issue | None:
    height = cooler.specs.height_mm
    max_height = case.specs.max_cooler_height_mm
    if cooler.specs.type != "Air" or height is None or max_height is None or height <= max_height:
        return None
    return Issue(
        id="coolerTooTall",
        category="clearance",
        severity=CRITICAL,
        title="Cooler too tall for case",
        description=f"Cooler height ({height}mm) exceeds case maximum ({max_height}mm).",
        affected_parts=(cooler.id, case.id),
        suggested_fixes=("Select a shorter cooler or a case with more clearance.",),
        evidence=IssueEvidence(
            values={"Cooler height": f"{height}mm", "Case max": f"{max_height}mm"},
            comparison=f"{height}mm > {max_height}mm",
        ),
    )


def radiator_fit(cooler: Cooler, case: Case) -> Issue | None:
    """AIO radiator size and thickness vs the case's radiator mounts."""
    size = cooler.specs.radiator_size_mm
    if cooler.specs.type != "AIO" or not size:
        return None
    supported = case.specs.supports_radiator_mm
    if supported is not None and size not in supported:
        return Issue(
            id="radiatorUnsupported",
            category="clearance",
            severity=CRITICAL,
            title="Radiator size not supported",
            description=f"Case does not list a mount for a {size}mm radiator.",
            affected_parts=(cooler.id, case.id),
            suggested_fixes=("Select an AIO with a supported radiator size, or a different case.",),
            evidence=IssueEvidence(values={
                "Radiator": f"{size}mm",
                "Case supports": ", ".join(f"{s}mm" for s in supported) or "None",
            }),
        )
    thickness = cooler.specs.radiator_fan_thickness_mm
    max_thickness = case.specs.max_radiator_thickness_mm
    if thickness is not None and max_thickness is not None and thickness > max_thickness:
        return Issue(
            id="radiatorTooThick",
            category="clearance",
            severity=CRITICAL,
            title="Radiator too thick for case",
            description=(
                f"Radiator with fans is {thickness}mm thick but the case allows {max_thickness}mm."
            ),
            affected_parts=(cooler.id, case.id),
            suggested_fixes=("Select a slimmer radiator or a case with more mounting clearance.",),
            evidence=IssueEvidence(
                values={"Radiator + fans": f"{thickness}mm", "Case max": f"{max_thickness}mm"},
                comparison=f"{thickness}mm > {max_thickness}mm",
            ),
        )
    if size >= LARGE_RADIATOR_MM:
        return Issue(
            id="radiatorConflict",
            category="clearance",
            severity=WARNING,
            title="AIO radiator may reduce GPU clearance",
            description=f"Front-mounting a {size}mm radiator can reduce available GPU length.",
            affected_parts=(cooler.id, case.id),
            suggested_fixes=("Consider top-mounting the radiator if possible.",),
        )
    return None


def cooler_socket_unsupported(cpu: CPU, cooler: Cooler) -> Issue | None:
    sockets = cooler.specs.sockets
    if not sockets or cpu.specs.socket in sockets:
        return None
    return Issue(
        id="coolerSocketUnsupported",
        category="compatibility",
        severity=CRITICAL,
        title="Cooler does not support CPU socket",
        description=f"Cooler mounts for {', '.join(sockets)} but the CPU uses {cpu.specs.socket}.",
        affected_parts=(cpu.id, cooler.id),
        suggested_fixes=("Select a cooler with a mounting kit for your socket.",),
        evidence=IssueEvidence(values={"CPU socket": cpu.specs.socket, "Cooler sockets": ", ".join(sockets)}),
    )


def psu_too_long(psu: PSU, case: Case, length_override: int | None = None) -> Issue | None:
    max_length = case.specs.max_psu_length_mm
    if max_length is None:
        return None
    length = psu_length_mm(psu, length_override)
    if length <= max_length:
        return None
    estimated = length_override is None and psu.specs.length_mm is None
    approx = "~" if estimated else ""
    return Issue(
        id="psuTooLong",
        category="clearance",
        severity=CRITICAL,
        title="PSU too long for case",
        description=f"PSU length ({approx}{length}mm) exceeds case maximum ({max_length}mm).",
        affected_parts=(psu.id, case.id),
        suggested_fixes=("Select a shorter PSU or a case with more clearance.",),
        evidence=IssueEvidence(
            values={"PSU length": f"{approx}{length}mm", "Case max": f"{max_length}mm"},
            comparison=f"{length}mm > {max_length}mm",
            calculation=f"{psu.specs.form_factor} default length" if estimated else None,
        ),
    )


def psu_form_factor_incompatible(psu: PSU, case: Case) -> Issue | None:
    max_ff = case.specs.max_psu_form_factor
    if max_ff is None or psu.specs.form_factor not in PSU_FORM_FACTOR_SIZE:
        return None
    if PSU_FORM_FACTOR_SIZE[psu.specs.form_factor] <= PSU_FORM_FACTOR_SIZE.get(max_ff, 2):
        return None
    return Issue(
        id="psuFormFactorIncompatible",
        category="compatibility",
        severity=CRITICAL,
        title="PSU form factor too large",
        description=f"{psu.specs.form_factor} PSU does not fit a case that takes up to {max_ff}.",
        affected_parts=(psu.id, case.id),
        suggested_fixes=(f"Select an {max_ff} PSU.",),
    )


# ============ Power ============


def insufficient_power(psu: PSU, estimated_load: int) -> Issue | None:
    wattage = psu.specs.wattage_w
    if wattage >= estimated_load:
        return None
    return Issue(
        id="insufficientPower",
        category="power",
        severity=CRITICAL,
        title="Insufficient PSU wattage",
        description=f"Estimated load (~{estimated_load}W) exceeds PSU capacity ({wattage}W).",
        affected_parts=(psu.id,),
        suggested_fixes=("Select a higher wattage PSU.",),
        evidence=IssueEvidence(
            values={"PSU wattage": f"{wattage}W", "Estimated load": f"{estimated_load}W"},
            comparison=f"{wattage}W < {estimated_load}W",
            calculation="60W base + CPU TDP x1.2 + GPU TDP x1.3 + RAM + drives",
        ),
    )


def low_psu_headroom(psu: PSU, estimated_load: int) -> Issue | None:
    """Warns below 125% headroom; an outright shortfall is left to insufficient_power."""
    wattage = psu.specs.wattage_w
    headroom = get_headroom(wattage, estimated_load)
    if estimated_load <= 0 or wattage < estimated_load or headroom >= RECOMMENDED_HEADROOM:
        return None
    return Issue(
        id="lowPsuHeadroom",
        category="power",
        severity=WARNING,
        title="Low PSU headroom",
        description=(
            f"PSU headroom ({headroom * 100:.0f}%) is below recommended 125%. "
            "System may be unstable under peak loads."
        ),
        affected_parts=(psu.id,),
        suggested_fixes=("Consider a higher wattage PSU for headroom.",),
        evidence=IssueEvidence(
            values={"PSU wattage": f"{wattage}W", "Estimated load": f"{estimated_load}W"},
            comparison=f"{headroom * 100:.0f}% < 125%",
            calculation=f"{wattage}W / {estimated_load}W",
        ),
    )


# ============ Slots & capacity ============


def no_m2_slots(storage: tuple[Storage, ...], motherboard: Motherboard) -> Issue | None:
    nvme = [d for d in storage if d.specs.interface == "NVMe"]
    slots = motherboard.specs.m2_slots
    if not nvme or len(nvme) <= slots:
        return None
    return Issue(
        id="noM2Slots",
        category="compatibility",
        severity=CRITICAL,
        title="Not enough M.2 slots",
        description=f"You have {len(nvme)} NVMe drive(s) but motherboard has {slots} M.2 slot(s).",
        affected_parts=(motherboard.id, *(d.id for d in nvme)),
        suggested_fixes=("Use fewer NVMe drives, or select a motherboard with more M.2 slots.",),
        evidence=IssueEvidence(
            values={"NVMe drives": str(len(nvme)), "M.2 slots": str(slots)},
            comparison=f"{len(nvme)} > {slots}",
        ),
    )


def insufficient_sata_ports(storage: tuple[Storage, ...], motherboard: Motherboard) -> Issue | None:
    sata = [d for d in storage if d.specs.interface == "SATA"]
    ports = motherboard.specs.sata_ports
    if not sata or ports is None or len(sata) <= ports:
        return None
    return Issue(
        id="insufficientSataPorts",
        category="compatibility",
        severity=CRITICAL,
        title="Not enough SATA ports",
        description=f"You have {len(sata)} SATA drive(s) but motherboard has {ports} SATA port(s).",
        affected_parts=(motherboard.id, *(d.id for d in sata)),
        suggested_fixes=("Use fewer SATA drives, or add a SATA expansion card.",),
    )


def ram_exceeds_motherboard(ram: RAM, motherboard: Motherboard) -> Issue | None:
    max_gb = motherboard.specs.max_ram_gb
    if max_gb is None or ram.specs.capacity_gb <= max_gb:
        return None
    return Issue(
        id="ramExceedsMotherboard",
        category="memory",
        severity=CRITICAL,
        title="RAM capacity exceeds motherboard maximum",
        description=f"{ram.specs.capacity_gb}GB kit exceeds the motherboard's {max_gb}GB maximum.",
        affected_parts=(ram.id, motherboard.id),
        suggested_fixes=(f"Select a kit of {max_gb}GB or less.",),
    )


def too_many_ram_modules(ram: RAM, motherboard: Motherboard) -> Issue | None:
    slots = motherboard.specs.ram_slots
    if ram.specs.modules <= slots:
        return None
    return Issue(
        id="tooManyRamModules",
        category="memory",
        severity=CRITICAL,
        title="Not enough RAM slots",
        description=f"Kit has {ram.specs.modules} modules but motherboard has {slots} slots.",
        affected_parts=(ram.id, motherboard.id),
        suggested_fixes=(f"Select a kit with {slots} or fewer modules.",),
    )


# ============ Warnings ============


def bios_update_needed(cpu: CPU, motherboard: Motherboard) -> Issue | None:
    chipset = "".join(ch for ch in motherboard.specs.chipset.upper() if ch.isalnum())
    if motherboard.specs.has_bios_flashback or not any(c in chipset for c in CHIPSETS_MAY_NEED_UPDATE):
        return None
    return Issue(
        id="biosUpdateNeeded",
        category="compatibility",
        severity=WARNING,
        title="BIOS update may be required",
        description=(
            "This CPU may require a BIOS update to work with the motherboard. "
            "Without BIOS flashback, you'd need an older CPU to update."
        ),
        affected_parts=(cpu.id, motherboard.id),
        suggested_fixes=("Verify compatibility or choose a motherboard with BIOS flashback.",),
        evidence=IssueEvidence(values={"Chipset": motherboard.specs.chipset, "BIOS flashback": "No"}),
    )


def ram_speed_risk(ram: RAM, cpu: CPU) -> Issue | None:
    speed = ram.specs.speed_mhz
    max_speed = cpu.specs.max_mem_speed_mhz
    if not speed or not max_speed or speed <= max_speed * RAM_SPEED_RISK_RATIO:
        return None
    return Issue(
        id="ramSpeedRisk",
        category="memory",
        severity=WARNING,
        title="RAM speed far exceeds CPU specification",
        description=(
            f"RAM is rated {speed}MHz but the CPU officially supports {max_speed}MHz. "
            "Stability at rated speed is not guaranteed."
        ),
        affected_parts=(ram.id, cpu.id),
        suggested_fixes=("Enable XMP (Intel) or EXPO (AMD) and test stability, or choose slower RAM.",),
        evidence=IssueEvidence(
            values={"RAM speed": f"{speed}MHz", "CPU max": f"{max_speed}MHz"},
            comparison=f"{speed} > {max_speed} x {RAM_SPEED_RISK_RATIO}",
        ),
    )


def no_upgrade_room(motherboard: Motherboard, ram: RAM | None, storage: tuple[Storage, ...]) -> Issue | None:
    reasons = []
    if ram and ram.specs.modules >= motherboard.specs.ram_slots:
        reasons.append("All RAM slots are filled.")
    nvme_count = sum(1 for d in storage if d.specs.interface == "NVMe")
    if motherboard.specs.m2_slots > 0 and nvme_count >= motherboard.specs.m2_slots:
        reasons.append("All M.2 slots are used.")
    if not reasons:
        return None
    return Issue(
        id="noUpgradeRoom",
        category="compatibility",
        severity=INFO,
        title="Limited upgrade room",
        description=" ".join(reasons) + " Consider future expansion when selecting parts.",
        affected_parts=(motherboard.id,),
    )
