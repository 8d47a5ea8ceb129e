"""3.5" drive cages that eat into GPU/PSU clearance in compact cases."""
from models import CRITICAL, GPU, INFO, PSU, Case, Issue, IssueEvidence, Storage
from power import psu_length_mm

# Assumed case limits when a case only declares the drive-cage reduction
FALLBACK_MAX_GPU_LENGTH_MM = 350
FALLBACK_MAX_PSU_LENGTH_MM = 180
TIGHT_MARGIN_MM = 10


def check_35_drive_clearance(
    case: Case,
    storage: tuple[Storage, ...],
    gpu: GPU | None = None,
    psu: PSU | None = None,
) -> Issue | None:
    drives = [d for d in storage if d.specs.is_35_inch]
    if not drives:
        return None
    gpu_reduction = case.specs.drive_35_reduces_gpu_length
    psu_reduction = case.specs.drive_35_reduces_psu_length
    if gpu_reduction <= 0 and psu_reduction <= 0:
        return None

    affected = [case.id, *(d.id for d in drives)]
    conflicts = []
    tight = []

    max_gpu = case.specs.max_gpu_length_mm or FALLBACK_MAX_GPU_LENGTH_MM
    effective_gpu = max_gpu - gpu_reduction
    if gpu_reduction > 0 and gpu is not None and gpu.specs.length_mm is not None:
        length = gpu.specs.length_mm
        if length > effective_gpu:
            conflicts.append(f"GPU ({length}mm) won't fit with 3.5\" drive installed ({effective_gpu}mm clearance)")
            affected.append(gpu.id)
        elif length > effective_gpu - TIGHT_MARGIN_MM:
            tight.append(f"GPU clearance becomes very tight with 3.5\" drive ({effective_gpu}mm available)")
            affected.append(gpu.id)

    max_psu = case.specs.max_psu_length_mm or FALLBACK_MAX_PSU_LENGTH_MM
    effective_psu = max_psu - psu_reduction
    if psu_reduction > 0 and psu is not None:
        length = psu_length_mm(psu)
        if length > effective_psu:
            conflicts.append(f"PSU ({length}mm) won't fit with 3.5\" drive installed ({effective_psu}mm clearance)")
            affected.append(psu.id)
        elif length > effective_psu - TIGHT_MARGIN_MM:
            tight.append(f"PSU clearance becomes very tight with 3.5\" drive ({effective_psu}mm available)")
            affected.append(psu.id)

    plural = "s" if len(drives) > 1 else ""

    if conflicts:
        return Issue(
            id="drive-35-clearance-conflict",
            category="clearance",
            severity=CRITICAL,
            title="3.5\" Drive Blocks Components",
            description=(
                f"Installing 3.5\" drive{plural} in this case causes clearance conflicts: {'; '.join(conflicts)}"
            ),
            affected_parts=tuple(affected),
            suggested_fixes=(
                "Remove 3.5\" drive and use 2.5\" SSD/HDD instead",
                "Choose shorter GPU or PSU",
                "Choose larger case that accommodates 3.5\" drives",
            ),
            evidence=IssueEvidence(
                values={
                    "3.5\" drives installed": str(len(drives)),
                    "Case": case.name,
                    "GPU clearance with drive": f"{effective_gpu}mm",
                    "PSU clearance with drive": f"{effective_psu}mm",
                },
                comparison="3.5\" drive occupies space needed by other components",
                calculation="Case clearances reduced by drive bay cage",
            ),
        )

    reduced = {"both": "GPU and PSU", "gpu": "GPU", "psu": "PSU"}.get(
        case.specs.drive_35_conflicts_with or "", "GPU" if gpu_reduction else "PSU"
    )
    description = (
        f"Your 3.5\" drive{plural} will reduce {reduced} clearance by {gpu_reduction or psu_reduction}mm. "
        "Current components still fit."
    )
    if tight:
        description += " " + "; ".join(tight) + "."
    return Issue(
        id="drive-35-clearance-info",
        category="clearance",
        severity=INFO,
        title="3.5\" Drive Reduces Clearance",
        description=description,
        affected_parts=tuple(affected),
        suggested_fixes=("Consider 2.5\" SSD instead for better clearance",),
        evidence=IssueEvidence(values={
            "3.5\" drives": str(len(drives)),
            "GPU clearance reduction": f"{gpu_reduction}mm" if gpu_reduction else "None",
            "PSU clearance reduction": f"{psu_reduction}mm" if psu_reduction else "None",
        }),
    )
