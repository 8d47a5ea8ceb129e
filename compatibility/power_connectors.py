"""GPU power connector validation: 12VHPWR, 8-pin and 6-pin PCIe, ATX 3.x."""
import logging
import re
from dataclasses import dataclass

from models import CRITICAL, GPU, INFO, PSU, WARNING, Issue, IssueEvidence

logger = logging.getLogger(__name__)

# 2x 8-pin to 12VHPWR adapters are rated for ~450W of transient load
ADAPTER_SAFE_PEAK_W = 450

_CONNECTOR_RE = re.compile(r"^(?:(\d+)x)?(16pin|12pin|12vhpwr|12v2x6|8pin|6pin)$")
_16_PIN_NAMES = ("16pin", "12pin", "12vhpwr", "12v2x6")
_LEADING_COUNT_RE = re.compile(r"^(\d+)x")


@dataclass(frozen=True)
class ConnectorCounts:
    pin_8: int = 0
    pin_6: int = 0
    pin_16: int = 0

    @property
    def eight_pin_equivalent(self) -> float:
        return self.pin_16 * 2 + self.pin_8 + self.pin_6 * 0.5


def _tokens(conn) -> list[str]:
    # "6+2pin" is an 8-pin plug, not a separator
    text = str(conn).lower().replace(" ", "").replace("-", "").replace("6+2pin", "8pin")
    return [t for t in re.split(r"[+,/]", text) if t]


def parse_gpu_connectors(connectors) -> ConnectorCounts:
    """Turn free-form connector strings ("2x8pin", "1x8pin+1x6pin", "1x16-pin") into counts."""
    pin_8 = pin_6 = pin_16 = 0
    for conn in connectors:
        for token in _tokens(conn):
            match = _CONNECTOR_RE.match(token)
            if match is None:
                if any(name in token for name in _16_PIN_NAMES):
                    lead = _LEADING_COUNT_RE.match(token)
                    pin_16 += int(lead.group(1)) if lead else 1
                else:
                    logger.debug(f"Unrecognised GPU power connector: {conn}")
                continue
            count = int(match.group(1)) if match.group(1) else 1
            kind = match.group(2)
            if kind in _16_PIN_NAMES:
                pin_16 += count
            elif kind == "8pin":
                pin_8 += count
            else:
                pin_6 += count
    return ConnectorCounts(pin_8=pin_8, pin_6=pin_6, pin_16=pin_16)


def psu_connector_counts(psu: PSU) -> ConnectorCounts | None:
    c = psu.specs.connectors
    if c is None:
        return None
    return ConnectorCounts(pin_8=c.pin_8_pcie, pin_6=c.pin_6_pcie, pin_16=c.pin_16_12vhpwr)


def infer_pcie_connectors(wattage: int) -> int:
    """8-pin equivalent PCIe connectors typical for a PSU of this wattage."""
    if wattage >= 1000:
        return 4
    if wattage >= 850:
        return 3
    if wattage >= 650:
        return 2
    return 1


def gpu_needs_12vhpwr(gpu: GPU) -> bool:
    return parse_gpu_connectors(gpu.specs.power_connectors).pin_16 > 0


def check_connector_supply(gpu: GPU, psu: PSU, explicit_count: int | None = None) -> Issue | None:
    """8-pin equivalent demand vs supply, for PSUs without a connector inventory."""
    if not gpu.specs.power_connectors:
        return None
    demand = parse_gpu_connectors(gpu.specs.power_connectors).eight_pin_equivalent
    inferred = explicit_count is None
    available = infer_pcie_connectors(psu.specs.wattage_w) if inferred else explicit_count
    if demand <= available:
        return None
    approx = "~" if inferred else ""
    return Issue(
        id="insufficientPsuConnectors",
        category="power",
        severity=CRITICAL,
        title="Insufficient PSU power connectors",
        description=(
            f"GPU requires {demand:g} PCIe power connector(s) (8-pin equivalent) "
            f"but PSU provides {approx}{available}."
        ),
        affected_parts=(gpu.id, psu.id),
        suggested_fixes=("Select a PSU with more PCIe power connectors.",),
        evidence=IssueEvidence(
            values={
                "GPU requires": " + ".join(gpu.specs.power_connectors),
                "PSU provides": f"{approx}{available} (8-pin equivalent)",
                "Source": f"inferred from {psu.specs.wattage_w}W" if inferred else "specified",
            },
            comparison=f"{demand:g} > {available}",
        ),
    )


def check_power_connectors(gpu: GPU, psu: PSU) -> list[Issue]:
    """Compare the GPU's connectors with the PSU's declared inventory."""
    available = psu_connector_counts(psu)
    if not gpu.specs.power_connectors or available is None:
        return []
    required = parse_gpu_connectors(gpu.specs.power_connectors)
    parts = (gpu.id, psu.id)
    issues = []

    if required.pin_16 > 0 and available.pin_16 == 0:
        adapter_ok = available.pin_8 >= 2
        if adapter_ok:
            issues.append(Issue(
                id="missing-12vhpwr",
                category="power",
                severity=WARNING,
                title="No Native 12VHPWR - Adapter Required",
                description=(
                    "Your GPU needs 12VHPWR (16-pin) but the PSU only has 8-pin connectors. "
                    "The included 2x 8-pin to 12VHPWR adapter works but limits transient power handling."
                ),
                affected_parts=parts,
                suggested_fixes=(
                    "Use included GPU adapter (2x 8-pin to 12VHPWR)",
                    "Upgrade to ATX 3.0 PSU with native 12VHPWR for better power delivery",
                ),
                evidence=IssueEvidence(
                    values={
                        "GPU requires": "1x 12VHPWR (16-pin)",
                        "PSU has 16-pin": "0",
                        "PSU has 8-pin": str(available.pin_8),
                        "Adapter viable": "Yes (2x 8-pin available)",
                    },
                    comparison="0 native 12VHPWR connectors",
                    calculation="Can use adapter: 2x 8-pin -> 1x 12VHPWR",
                ),
            ))
            peak = gpu.specs.peak_power_w or (gpu.specs.tdp_w or 0) * 1.5
            if peak > ADAPTER_SAFE_PEAK_W:
                issues.append(Issue(
                    id="adapter-transient-risk",
                    category="power",
                    severity=WARNING,
                    title="High Transient Power with Adapter",
                    description=(
                        f"Your GPU can spike to ~{round(peak)}W but the adapter limits peak power delivery. "
                        "May cause instability under load."
                    ),
                    affected_parts=parts,
                    suggested_fixes=(
                        "Strongly recommend ATX 3.0 PSU with native 12VHPWR",
                        "Limit power target in GPU settings to avoid spikes",
                    ),
                    evidence=IssueEvidence(values={
                        "GPU peak power": f"~{round(peak)}W",
                        "Adapter safe limit": f"~{ADAPTER_SAFE_PEAK_W}W",
                        "Risk level": "High" if peak > 500 else "Moderate",
                    }),
                ))
        else:
            issues.append(Issue(
                id="missing-12vhpwr",
                category="power",
                severity=CRITICAL,
                title="Insufficient Power Connectors",
                description=(
                    "Your GPU needs 12VHPWR (16-pin) but the PSU has neither the connector "
                    "nor enough 8-pin connectors for an adapter."
                ),
                affected_parts=parts,
                suggested_fixes=(
                    "Choose PSU with native 12VHPWR connector",
                    "Choose PSU with at least 2x 8-pin PCIe connectors for adapter",
                ),
                evidence=IssueEvidence(
                    values={
                        "GPU requires": "1x 12VHPWR (16-pin)",
                        "PSU has 16-pin": "0",
                        "PSU has 8-pin": str(available.pin_8),
                        "Adapter viable": "No",
                    },
                    comparison="0 native 12VHPWR connectors",
                    calculation="Insufficient connectors for adapter",
                ),
            ))

    if required.pin_16 > 0 and 0 < available.pin_16 < required.pin_16:
        issues.append(Issue(
            id="insufficient-12vhpwr",
            category="power",
            severity=CRITICAL,
            title="Not Enough 12VHPWR Connectors",
            description=(
                f"Your GPU needs {required.pin_16}x 12VHPWR connectors "
                f"but PSU only has {available.pin_16}."
            ),
            affected_parts=parts,
            suggested_fixes=(f"Choose PSU with {required.pin_16}+ 12VHPWR connectors", "Choose different GPU"),
            evidence=IssueEvidence(
                values={"Required": f"{required.pin_16}x 12VHPWR", "Available": f"{available.pin_16}x 12VHPWR"},
                comparison=f"{available.pin_16} < {required.pin_16}",
            ),
        ))

    if required.pin_8 > 0 and available.pin_8 < required.pin_8:
        issues.append(Issue(
            id="insufficient-8pin",
            category="power",
            severity=CRITICAL,
            title="Not Enough 8-Pin PCIe Connectors",
            description=(
                f"Your GPU needs {required.pin_8}x 8-pin (6+2) connectors "
                f"but PSU only has {available.pin_8}."
            ),
            affected_parts=parts,
            suggested_fixes=(
                f"Choose PSU with {required.pin_8}+ 8-pin PCIe connectors",
                "Choose different GPU with lower power requirements",
            ),
            evidence=IssueEvidence(
                values={
                    "Required": f"{required.pin_8}x 8-pin PCIe",
                    "Available": f"{available.pin_8}x 8-pin PCIe",
                    "Shortage": f"{required.pin_8 - available.pin_8} connectors",
                },
                comparison=f"{available.pin_8} < {required.pin_8}",
            ),
        ))

    # 8-pin plugs can feed 6-pin sockets
    if required.pin_6 > 0:
        total_available = available.pin_6 + available.pin_8
        total_required = required.pin_6 + required.pin_8
        if total_available < total_required:
            issues.append(Issue(
                id="insufficient-6pin",
                category="power",
                severity=CRITICAL,
                title="Not Enough 6-Pin PCIe Connectors",
                description=(
                    f"Your GPU needs {required.pin_6}x 6-pin and {required.pin_8}x 8-pin. "
                    f"PSU has {available.pin_6}x 6-pin and {available.pin_8}x 8-pin."
                ),
                affected_parts=parts,
                suggested_fixes=("Choose PSU with more PCIe power connectors",),
                evidence=IssueEvidence(values={
                    "Required total": f"{total_required} PCIe (6+8 pin)",
                    "Total available": str(total_available),
                }),
            ))

    return issues


def check_atx_standard(gpu: GPU, psu: PSU) -> Issue | None:
    """Informational note for a 16-pin GPU on a PSU without a native 12VHPWR plug."""
    if not gpu_needs_12vhpwr(gpu):
        return None
    counts = psu_connector_counts(psu)
    if counts is not None and counts.pin_16 > 0:
        return None
    standard = psu.specs.standard
    if standard not in ("ATX2.x", None):
        return None
    return Issue(
        id="atx-2-with-modern-gpu",
        category="power",
        severity=INFO,
        title="ATX 2.x PSU with Modern GPU",
        description=(
            "Your GPU uses 12VHPWR (16-pin) power but your PSU is ATX 2.x. "
            "An adapter works, while ATX 3.0 PSUs are designed for modern GPU power spikes."
        ),
        affected_parts=(gpu.id, psu.id),
        suggested_fixes=(
            "Current setup works with adapter but consider ATX 3.0 upgrade",
            "If experiencing instability, upgrade to ATX 3.0 PSU",
        ),
        evidence=IssueEvidence(values={
            "PSU standard": standard or "Unknown",
            "GPU connector": "12VHPWR (ATX 3.0 native)",
        }),
    )
