"""Value checks: overkill parts and budget spent where it won't show up."""
import math

from models import CPU, GPU, INFO, PSU, RAM, WARNING, Issue, IssueEvidence, Motherboard, Storage
from power import round_half_up

DEFAULT_TIER = 5
HIGH_END_CHIPSETS = ("z7", "z6", "x670")
GAMING_RAM_SWEET_SPOT_MHZ = 6400
# Best-value gaming speed per memory generation
GAMING_RAM_VALUE_SPEED_MHZ = {"DDR4": 3600, "DDR5": 6000}
PCIE5_READ_SPEED_MB_S = 10000


def check_cpu_gpu_balance(cpu: CPU, gpu: GPU, preset: str) -> Issue | None:
    cpu_tier = cpu.specs.tier or DEFAULT_TIER
    gpu_tier = gpu.specs.tier or DEFAULT_TIER
    diff = cpu_tier - gpu_tier
    parts = (cpu.id, gpu.id)

    if "gaming" in preset:
        if diff >= 3:
            savings = f"~${round_half_up(cpu.price * 0.3)}" if cpu.price > 0 else "Unknown"
            return Issue(
                id="cpu-overkill-gaming",
                category="efficiency",
                severity=WARNING,
                title="CPU Overkill for Gaming",
                description=(
                    f"Your CPU (tier {cpu_tier}) is much more powerful than your GPU (tier {gpu_tier}) for gaming. "
                    "In most games you're GPU-limited, so this CPU power goes unused."
                ),
                affected_parts=parts,
                suggested_fixes=(
                    f"Downgrade to tier {gpu_tier + 1} CPU and invest savings into better GPU",
                    f"Upgrade GPU to tier {cpu_tier - 1} to match CPU capability",
                    "Keep CPU if planning non-gaming workloads (streaming, productivity)",
                ),
                evidence=IssueEvidence(
                    values={
                        "CPU tier": str(cpu_tier),
                        "GPU tier": str(gpu_tier),
                        "Imbalance": f"CPU {diff} tiers higher",
                        "Use case": preset,
                        "Estimated potential savings": savings,
                    },
                    comparison=f"{cpu_tier} >> {gpu_tier} (GPU is bottleneck)",
                ),
            )
        if diff <= -3 and gpu_tier >= 8:
            return Issue(
                id="cpu-bottleneck-gaming",
                category="efficiency",
                severity=WARNING,
                title="Potential CPU Bottleneck",
                description=(
                    f"Your GPU (tier {gpu_tier}) is very powerful but your CPU (tier {cpu_tier}) may bottleneck it, "
                    "especially at 1080p or in CPU-heavy games."
                ),
                affected_parts=parts,
                suggested_fixes=(
                    f"Upgrade CPU to tier {gpu_tier - 2} for balanced performance",
                    "Acceptable if playing at 4K (less CPU demand)",
                ),
                evidence=IssueEvidence(values={
                    "CPU tier": str(cpu_tier),
                    "GPU tier": str(gpu_tier),
                    "Imbalance": f"GPU {abs(diff)} tiers higher",
                    "Bottleneck risk": "High" if diff <= -4 else "Moderate",
                }),
            )

    if "creator" in preset and diff <= -2:
        return Issue(
            id="gpu-overkill-creator",
            category="efficiency",
            severity=INFO,
            title="GPU May Be Overkill for Workload",
            description=(
                f"For creator workloads, your GPU (tier {gpu_tier}) is more powerful than your CPU "
                f"(tier {cpu_tier}). Most creative apps are CPU-bound."
            ),
            affected_parts=parts,
            suggested_fixes=(
                "If doing 3D/rendering, current balance is fine",
                "If mostly editing, could save on GPU and invest in faster CPU",
            ),
            evidence=IssueEvidence(values={
                "CPU tier": str(cpu_tier),
                "GPU tier": str(gpu_tier),
                "Workload": preset,
            }),
        )

    return None


def check_psu_overkill(psu: PSU, estimated_load: int) -> Issue | None:
    wattage = psu.specs.wattage_w
    if not estimated_load or not wattage:
        return None
    ratio = wattage / estimated_load
    if ratio <= 2.0:
        return None

    recommended = math.ceil(estimated_load * 1.4 / 50) * 50
    load_pct = round_half_up(estimated_load / wattage * 100)
    headroom_pct = round_half_up((ratio - 1) * 100)
    return Issue(
        id="psu-excessive",
        category="efficiency",
        severity=INFO,
        title="PSU Wattage May Be Excessive",
        description=(
            f"Your {wattage}W PSU provides {headroom_pct}% headroom over the {estimated_load}W "
            "estimated load. Recommended headroom is 25-50%."
        ),
        affected_parts=(psu.id,),
        suggested_fixes=(
            f"Consider {recommended}W PSU for better efficiency",
            "Keep current PSU if planning major future upgrades",
        ),
        evidence=IssueEvidence(
            values={
                "PSU wattage": f"{wattage}W",
                "Estimated load": f"{estimated_load}W",
                "Headroom": f"{headroom_pct}%",
                "Recommended": f"{recommended}W",
                "Excess capacity": f"{round_half_up(wattage - estimated_load * 1.5)}W unused",
            },
            comparison=f"{wattage}W >> {round_half_up(estimated_load * 1.5)}W recommended",
            calculation=f"PSU efficiency sweet spot is 50-80% load. You're at {load_pct}%.",
        ),
    )


def check_ram_speed_value(
    ram: RAM, cpu: CPU, preset: str, motherboard: Motherboard | None = None
) -> Issue | None:
    speed = ram.specs.speed_mhz
    cpu_max = cpu.specs.max_mem_speed_mhz
    if not speed or not cpu_max:
        return None

    if motherboard is None:
        if speed > cpu_max + 400:
            return Issue(
                id="ram-speed-waste",
                category="efficiency",
                severity=WARNING,
                title="RAM Speed Exceeds CPU Support",
                description=(
                    f"Your RAM is {speed}MT/s but your CPU officially supports up to {cpu_max}MT/s. "
                    "You may not achieve rated speeds without overclocking."
                ),
                affected_parts=(ram.id, cpu.id),
                suggested_fixes=(
                    f"Choose {cpu_max}MT/s RAM for guaranteed compatibility",
                    "If overclocking, current RAM is fine",
                ),
                evidence=IssueEvidence(values={
                    "RAM speed": f"{speed}MT/s",
                    "CPU max official": f"{cpu_max}MT/s",
                    "Overspeed": f"{speed - cpu_max}MT/s",
                }),
            )
    elif speed > cpu_max:
        board = motherboard.specs
        board_oc = board.max_memory_speed_oc_mhz
        profile = "XMP" if board.supports_xmp else "EXPO" if board.supports_expo else None
        parts = (ram.id, cpu.id, motherboard.id)

        if board_oc and speed <= board_oc and profile:
            return Issue(
                id="ram-speed-xmp",
                category="efficiency",
                severity=INFO,
                title="RAM Requires XMP/EXPO",
                description=(
                    f"Your RAM ({speed}MT/s) runs faster than the CPU's official spec ({cpu_max}MT/s), "
                    f"but the motherboard supports {profile} profiles up to {board_oc}MT/s. "
                    f"Enable {profile} in BIOS to reach the rated speed."
                ),
                affected_parts=parts,
                suggested_fixes=(f"Enable {profile} in BIOS after installation",),
                evidence=IssueEvidence(
                    values={
                        "RAM speed": f"{speed}MT/s",
                        "CPU max (JEDEC)": f"{cpu_max}MT/s",
                        "Motherboard max (OC)": f"{board_oc}MT/s",
                        "XMP/EXPO support": profile,
                    },
                    comparison=f"{speed}MT/s within motherboard's {board_oc}MT/s OC capability",
                ),
            )

        if board_oc and speed > board_oc:
            return Issue(
                id="ram-speed-waste",
                category="efficiency",
                severity=WARNING,
                title="RAM Speed Underutilized",
                description=(
                    f"Your RAM ({speed}MT/s) exceeds both the CPU spec ({cpu_max}MT/s) and the motherboard's "
                    f"maximum XMP/EXPO capability ({board_oc}MT/s). You're paying for speed you can't use."
                ),
                affected_parts=parts,
                suggested_fixes=(
                    f"Choose {board_oc}MT/s RAM to match motherboard capability",
                    f"Upgrade motherboard to one supporting {speed}MT/s+",
                ),
                evidence=IssueEvidence(
                    values={
                        "RAM rated speed": f"{speed}MT/s",
                        "CPU max": f"{cpu_max}MT/s",
                        "Motherboard max (OC)": f"{board_oc}MT/s",
                        "Wasted speed": f"{speed - board_oc}MT/s",
                    },
                    comparison=f"{speed}MT/s > {board_oc}MT/s (motherboard limit)",
                ),
            )

        if profile is None:
            return Issue(
                id="ram-speed-no-xmp",
                category="efficiency",
                severity=WARNING,
                title="RAM Speed Not Achievable",
                description=(
                    f"Your RAM ({speed}MT/s) exceeds the CPU spec ({cpu_max}MT/s) but the motherboard doesn't "
                    f"advertise XMP/EXPO support. RAM will typically run at {cpu_max}MT/s."
                ),
                affected_parts=parts,
                suggested_fixes=(
                    "Choose a motherboard with XMP/EXPO support",
                    f"Choose {cpu_max}MT/s RAM to match the CPU's official spec",
                ),
                evidence=IssueEvidence(values={
                    "RAM rated speed": f"{speed}MT/s",
                    "CPU max": f"{cpu_max}MT/s",
                    "Motherboard XMP/EXPO": "Not supported",
                    "Likely speed": f"{board.max_memory_speed_stock_mhz or cpu_max}MT/s",
                }),
            )

    if "gaming" in preset and speed >= GAMING_RAM_SWEET_SPOT_MHZ and ram.price_usd:
        mem = ram.specs.memory_type
        value_speed = GAMING_RAM_VALUE_SPEED_MHZ.get(mem, 6000)
        return Issue(
            id="ram-speed-gaming-waste",
            category="efficiency",
            severity=INFO,
            title="Diminishing Returns on RAM Speed",
            description=(
                f"{mem}-{speed} provides minimal gaming benefit over {mem}-{value_speed}. "
                "The price premium rarely translates to noticeable FPS gains."
            ),
            affected_parts=(ram.id,),
            suggested_fixes=(f"{mem}-{value_speed} offers best value/performance for gaming",),
            evidence=IssueEvidence(values={
                "Current speed": f"{speed}MT/s",
                "Sweet spot": f"{value_speed}MT/s for gaming",
                "Use case": preset,
            }),
        )

    return None


def check_motherboard_value(motherboard: Motherboard, cpu: CPU, preset: str) -> Issue | None:
    chipset = motherboard.specs.chipset.lower()
    price = motherboard.price_usd
    if not price or not chipset:
        return None
    cpu_tier = cpu.specs.tier or DEFAULT_TIER
    if not any(c in chipset for c in HIGH_END_CHIPSETS) or cpu_tier >= 7 or price <= 250:
        return None
    return Issue(
        id="motherboard-overkill",
        category="efficiency",
        severity=INFO,
        title="Premium Motherboard with Mid-Range CPU",
        description=(
            f"Your {motherboard.specs.chipset} motherboard has overclocking and premium features that your "
            f"tier {cpu_tier} CPU may not fully utilize."
        ),
        affected_parts=(motherboard.id, cpu.id),
        suggested_fixes=(
            "B-series chipset would save $50-100 with similar performance",
            "Keep if planning CPU upgrade to K/X series",
        ),
        evidence=IssueEvidence(values={
            "Motherboard chipset": motherboard.specs.chipset,
            "Motherboard price": f"${price:g}",
            "CPU tier": str(cpu_tier),
            "Use case": preset,
        }),
    )


def _is_pcie5(drive: Storage) -> bool:
    return drive.specs.pcie_version == 5 or (drive.specs.read_speed_mb_s or 0) > PCIE5_READ_SPEED_MB_S


def check_storage_value(storage: tuple[Storage, ...], preset: str) -> Issue | None:
    if not storage:
        return None

    pcie5 = [d for d in storage if _is_pcie5(d)]
    if "gaming" in preset and pcie5:
        return Issue(
            id="pcie5-gaming-waste",
            category="efficiency",
            severity=INFO,
            title="PCIe 5.0 SSD Overkill for Gaming",
            description=(
                "PCIe 5.0 SSDs provide no gaming benefit over PCIe 4.0. Game load times are similar. "
                "The price premium isn't justified for gaming-only builds."
            ),
            affected_parts=tuple(d.id for d in pcie5),
            suggested_fixes=("PCIe 4.0 NVMe offers identical gaming performance",),
            evidence=IssueEvidence(values={
                "Storage type": "PCIe 5.0",
                "Gaming benefit": "0% vs PCIe 4.0",
                "Use case": preset,
            }),
        )

    total_gb = sum(d.specs.capacity_gb for d in storage)
    if "budget" in preset and total_gb > 2000:
        tb = round_half_up(total_gb / 1000)
        return Issue(
            id="storage-excessive-budget",
            category="efficiency",
            severity=INFO,
            title="High Storage Capacity for Budget Build",
            description=(
                f"You have {tb}TB of storage. For budget builds, starting with 500GB-1TB and "
                "expanding later often provides better value."
            ),
            affected_parts=tuple(d.id for d in storage),
            suggested_fixes=(
                "Start with 1TB NVMe, add storage later when needed",
                "Invest savings in better GPU or CPU",
            ),
            evidence=IssueEvidence(values={
                "Total storage": f"{tb}TB",
                "Recommended for budget": "500GB-1TB initially",
            }),
        )

    return None
