"""Conversion between human readable token amounts and their on-chain representation.

The RealDigital token stores amounts as integers scaled by ``10 ** 18``. Conversion
is done with integer arithmetic only, so no amount is ever rounded: an amount that
cannot be represented exactly is rejected instead of truncated.
"""
import re
from decimal import Decimal
from typing import Union

from rifa_service.constants import TOKEN_DECIMALS
from rifa_service.exceptions import InvalidInput

DECIMAL_PATTERN = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")


def parse_decimal(amount: Union[str, int, Decimal], field: str = "amount") -> Decimal:
    """Parse `amount` into a :class:`Decimal`, accepting plain decimal notation only.

    Either side of the decimal point may be omitted, as in `".5"` or `"1."`.

    :raises InvalidInput: if `amount` is empty, not a number or uses exponent notation.
    """
    if isinstance(amount, bool) or amount is None:
        raise InvalidInput(f"{field} must be a decimal number")

    if isinstance(amount, Decimal):
        if not amount.is_finite():
            raise InvalidInput(f"{field} must be a finite decimal number")
        return amount

    text = str(amount).strip()
    if not DECIMAL_PATTERN.match(text):
        raise InvalidInput(f"{field} must be a decimal number, got {amount!r}")
    return Decimal(text)


def to_fixed_point(
    amount: Union[str, int, Decimal], decimals: int = TOKEN_DECIMALS, field: str = "amount"
) -> int:
    """Scale `amount` by ``10 ** decimals`` and return it as an :class:`int`.

    :raises InvalidInput:
        if `amount` is not a decimal number, or has more significant fractional
        digits than `decimals`.
    """
    value = parse_decimal(amount, field)
    sign, digits, exponent = value.as_tuple()
    coefficient = int("".join(str(d) for d in digits) or "0")

    shift = exponent + decimals
    if shift >= 0:
        raw = coefficient * 10 ** shift
    else:
        divisor = 10 ** -shift
        if coefficient % divisor:
            raise InvalidInput(f"{field} has more than {decimals} fractional digits")
        raw = coefficient // divisor

    return -raw if sign else raw


def from_fixed_point(raw: int, decimals: int = TOKEN_DECIMALS) -> str:
    """Format the on-chain integer `raw` as a decimal string.

    Trailing zeros of the fractional part are dropped, but at least one
    fractional digit is kept::

        >>> from_fixed_point(1500000000000000000)
        '1.5'
        >>> from_fixed_point(0)
        '0.0'
    """
    raw = int(raw)
    sign = "-" if raw < 0 else ""
    whole, fraction = divmod(abs(raw), 10 ** decimals)
    fraction_digits = str(fraction).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_digits}"
