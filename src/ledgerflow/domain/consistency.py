"""Consistency checks over a line set."""

from decimal import Decimal
from typing import Sequence

from ledgerflow.domain.entities import Finding, Line, Severity
from ledgerflow.utils.amount_parser import ZERO

BALANCE_TOLERANCE = Decimal("1")
BALANCE_MISMATCH_ID = "balance-mismatch"


def check(lines: Sequence[Line]) -> list[Finding]:
    """Check that the detail lines net to zero.

    The sum of balances over all non-group lines, whatever their section,
    must stay within an absolute tolerance of one currency unit.

    Args:
        lines: Current line set

    Returns:
        Findings, empty when the line set is consistent
    """
    findings = []
    grand_total = sum((line.balance for line in lines if not line.is_group), ZERO)

    if abs(grand_total) > BALANCE_TOLERANCE:
        findings.append(
            Finding(
                id=BALANCE_MISMATCH_ID,
                severity=Severity.HIGH,
                message=(
                    f"Balance does not net to zero (difference: {grand_total:.2f}). "
                    "Review the entries."
                ),
                related_line_ids=(),
            )
        )

    return findings
