"""Motherboard header capacity: fans, RGB/ARGB and front-panel USB-C."""
from models import WARNING, Case, Cooler, Issue, IssueEvidence, Motherboard


def check_fan_headers(motherboard: Motherboard, case: Case | None = None, cooler: Cooler | None = None) -> Issue | None:
    headers = motherboard.specs.headers
    if headers is None:
        return None

    needed = 0
    sources = []
    if case and case.specs.preinstalled_fans > 0:
        needed += case.specs.preinstalled_fans
        sources.append(f"{case.specs.preinstalled_fans}x case fans")
    if cooler and cooler.specs.fan_count > 0:
        needed += cooler.specs.fan_count
        sources.append(f"{cooler.specs.fan_count}x cooler fans")

    # One header stays reserved for CPU_FAN
    available = max(0, headers.fan_4pin - 1)
    if needed <= available:
        return None

    shortage = needed - available
    return Issue(
        id="insufficient-fan-headers",
        category="headers",
        severity=WARNING,
        title="Not Enough Fan Headers",
        description=(
            f"Your build needs {needed} fan headers but motherboard only has {available} available "
            f"({headers.fan_4pin} total, 1 reserved for CPU). You'll need a fan splitter or hub."
        ),
        affected_parts=(motherboard.id, case.id if case else "", cooler.id if cooler else ""),
        suggested_fixes=(
            f"Use {shortage}x PWM fan splitter cable",
            f"Use powered fan hub for {shortage}+ fans",
            "Choose motherboard with more fan headers",
        ),
        evidence=IssueEvidence(
            values={
                "Fan headers needed": str(needed),
                "Sources": ", ".join(sources),
                "Motherboard total": f"{headers.fan_4pin} (1 CPU + {available} SYS)",
                "Shortage": str(shortage),
            },
            comparison=f"{needed} needed > {available} available",
        ),
    )


def check_rgb_headers(motherboard: Motherboard, cooler: Cooler) -> Issue | None:
    headers = motherboard.specs.headers
    rgb = cooler.specs.rgb_type
    if headers is None or rgb in ("", "none"):
        return None

    if rgb == "12v_rgb" and headers.rgb_12v <= 0:
        return Issue(
            id="rgb-header-missing",
            category="headers",
            severity=WARNING,
            title="No 12V RGB Header",
            description=(
                "Your cooler uses 12V RGB but motherboard doesn't have a 12V RGB header. "
                "RGB lighting won't work without an adapter or controller."
            ),
            affected_parts=(motherboard.id, cooler.id),
            suggested_fixes=("Choose motherboard with 12V RGB header", "Use external RGB controller"),
            evidence=IssueEvidence(
                values={
                    "Cooler RGB type": "12V RGB (4-pin)",
                    "Motherboard 12V RGB headers": "0",
                    "Motherboard 5V ARGB headers": str(headers.argb_5v),
                },
                comparison="12V RGB cooler, but no 12V RGB header on motherboard",
            ),
        )

    if rgb == "5v_argb" and headers.argb_5v <= 0:
        return Issue(
            id="argb-header-missing",
            category="headers",
            severity=WARNING,
            title="No 5V ARGB Header",
            description=(
                "Your cooler uses 5V ARGB but motherboard doesn't have a 5V ARGB header. "
                "RGB lighting won't work without a controller."
            ),
            affected_parts=(motherboard.id, cooler.id),
            suggested_fixes=("Choose motherboard with 5V ARGB header", "Use external ARGB controller"),
            evidence=IssueEvidence(
                values={
                    "Cooler RGB type": "5V ARGB (3-pin)",
                    "Motherboard 5V ARGB headers": "0",
                    "Motherboard 12V RGB headers": str(headers.rgb_12v),
                },
                comparison="5V ARGB cooler, but no 5V ARGB header on motherboard",
            ),
        )

    return None


def check_usb_c_header(motherboard: Motherboard, case: Case) -> Issue | None:
    headers = motherboard.specs.headers
    panel = case.specs.front_panel
    if headers is None or panel is None:
        return None
    if panel.usb_c <= 0 or headers.usb_c_internal > 0:
        return None
    return Issue(
        id="usbc-header-missing",
        category="headers",
        severity=WARNING,
        title="Case USB-C Port Unusable",
        description=(
            "Your case has a front USB-C port but motherboard doesn't have an internal USB-C "
            "header (Type-E). The front USB-C port won't work."
        ),
        affected_parts=(motherboard.id, case.id),
        suggested_fixes=(
            "Choose motherboard with USB-C internal header (Type-E, 20-pin)",
            "Use rear motherboard USB-C ports instead",
        ),
        evidence=IssueEvidence(
            values={
                "Case USB-C ports": str(panel.usb_c),
                "Motherboard USB-C header": "No (Type-E missing)",
                "Motherboard USB 3.0 headers": str(headers.usb3_internal),
            },
            comparison="Case has USB-C, but motherboard lacks USB-C internal header",
        ),
    )
