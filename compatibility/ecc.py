"""ECC memory support across RAM, motherboard and CPU."""
from models import CPU, CRITICAL, INFO, RAM, Issue, IssueEvidence, Motherboard


def check_ecc_support(ram: RAM, motherboard: Motherboard, cpu: CPU) -> Issue | None:
    if not ram.specs.is_ecc:
        return None

    board_ok = motherboard.specs.supports_ecc
    cpu_ok = cpu.specs.supports_ecc
    evidence = IssueEvidence(values={
        "RAM type": "ECC",
        "Motherboard ECC support": "Yes" if board_ok else "No",
        "CPU ECC support": "Yes" if cpu_ok else "No",
    })

    if board_ok and cpu_ok:
        return Issue(
            id="ecc-info",
            category="memory",
            severity=INFO,
            title="ECC RAM Enabled",
            description="Your build supports ECC memory for improved data integrity.",
            affected_parts=(ram.id,),
            evidence=evidence,
        )

    description = ["Your ECC RAM requires both motherboard and CPU ECC support."]
    fixes = []
    if not board_ok:
        description.append("This motherboard does not support ECC.")
        fixes.append("Choose a workstation/server motherboard with ECC support")
    if not cpu_ok:
        description.append("This CPU does not support ECC.")
        fixes.append("Choose Xeon, EPYC, or Ryzen Pro CPU with ECC support")
    fixes.append("Or choose non-ECC RAM for consumer platforms")

    return Issue(
        id="ecc-not-supported",
        category="memory",
        severity=CRITICAL,
        title="ECC RAM Not Supported",
        description=" ".join(description),
        affected_parts=(ram.id, motherboard.id, cpu.id),
        suggested_fixes=tuple(fixes),
        evidence=evidence,
    )
