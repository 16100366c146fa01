"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Used for amounts typed by a user. Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def round_to_cents(amount: Decimal) -> Decimal:
    """Round an amount to cents, half away from zero.

    Raises:
        ValueError: If the amount is too large to round
    """
    try:
        rounded = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Amount out of range '{amount}'") from e
    # Adding zero turns -0.00 into 0.00
    return rounded + ZERO


def parse_lenient_amount(value: Any) -> Decimal:
    """Parse a spreadsheet cell into a Decimal, treating garbage as zero.

    Numeric cells are taken as they are. Anything else is stripped of every
    character other than digits, "." and "-", and the longest leading number
    is parsed; if there is none the amount is zero. The result is rounded
    to cents, so a balance derived from it is stored exactly.

    Examples:
        "$ 1,234.50" -> 1234.50
        "(75)"       -> 75.00
        "12-31"      -> 12.00
        "0.006"      -> 0.01
        "n/a"        -> 0.00
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return ZERO
    else:
        cleaned = _NON_NUMERIC.sub("", str(value))
        match = _LEADING_NUMBER.match(cleaned)
        if match is None:
            return ZERO
        amount = Decimal(match.group(0))

    if not amount.is_finite():
        return ZERO
    try:
        return round_to_cents(amount)
    except ValueError:
        return ZERO
