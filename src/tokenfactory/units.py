"""Conversion between human-facing amounts and the contract's base unit.

The TokenFactory contract counts native currency and tokens in 18-decimal
fixed point. Every amount handed to a contract call goes through
``to_base_units`` first; nothing is ever sent as a decimal string.
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from typing import Union

DECIMALS = 18
BASE_UNIT = 10**DECIMALS
MAX_UINT256 = 2**256 - 1

# uint256 values have at most 78 digits.
MAX_UINT256_DIGITS = 78

# Large enough that no uint256 amount is ever rounded by the context.
_PRECISION = 999

AmountLike = Union[str, int, Decimal]


class InvalidAmountError(ValueError):
    """Raised when an amount cannot be expressed exactly in base units."""


def _to_decimal(value: AmountLike, field: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmountError(f"{field} must be a number, got {value!r}")
    if isinstance(value, float):
        # floats already lost precision before reaching us
        value = repr(value)
    try:
        number = Decimal(value.strip()) if isinstance(value, str) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"{field} is not a decimal number: {value!r}")

    if not number.is_finite():
        raise InvalidAmountError(f"{field} must be finite, got {value!r}")
    if number < 0:
        raise InvalidAmountError(f"{field} must not be negative, got {value!r}")
    return number


def _exact_parts(number: Decimal) -> tuple[str, int]:
    """Split a non-negative finite Decimal into (digits, exponent).

    Trailing zeros are folded into the exponent; zero is ``("", 0)``.
    Only the digit tuple is inspected, so no decimal context can round,
    overflow or underflow on extreme exponents.
    """
    _, digits, exponent = number.as_tuple()
    coefficient = "".join(map(str, digits)).lstrip("0")
    if not coefficient:
        return "", 0
    stripped = coefficient.rstrip("0")
    return stripped, exponent + len(coefficient) - len(stripped)


def to_base_units(value: AmountLike, field: str = "amount") -> int:
    """Convert a decimal amount (e.g. ``"2.5"``) to base units.

    Args:
        value: Decimal string, int or Decimal in whole units
        field: Name used in error messages

    Returns:
        Integer amount in base units (``value * 10**18``)

    Raises:
        InvalidAmountError: If the value is not a non-negative number, has
            more than 18 fractional digits, or overflows uint256
    """
    digits, exponent = _exact_parts(_to_decimal(value, field))
    if not digits:
        return 0

    if exponent < -DECIMALS:
        raise InvalidAmountError(
            f"{field} has more than {DECIMALS} decimal places: {value!r}"
        )
    # bound the digit count before building the integer
    if len(digits) + exponent + DECIMALS > MAX_UINT256_DIGITS:
        raise InvalidAmountError(f"{field} does not fit in uint256: {value!r}")

    result = int(digits) * 10 ** (exponent + DECIMALS)
    if result > MAX_UINT256:
        raise InvalidAmountError(f"{field} does not fit in uint256: {value!r}")
    return result


def from_base_units(amount: int) -> Decimal:
    """Convert a base-unit integer back to whole units."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(f"base-unit amount must be an integer, got {amount!r}")
    if amount < 0:
        raise InvalidAmountError(f"base-unit amount must not be negative, got {amount}")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(amount).scaleb(-DECIMALS)


def apply_ratio(amount: int, ratio: Decimal) -> int:
    """Return ``amount * ratio`` in base units, rounded toward zero."""
    if ratio < 0:
        raise InvalidAmountError(f"ratio must not be negative, got {ratio}")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        product = Decimal(amount) * Decimal(ratio)
        return int(product.to_integral_value(rounding=ROUND_DOWN))


def parse_uint(value: AmountLike, field: str = "value") -> int:
    """Parse a whole number such as a request id or a token count.

    Accepts ints and integer strings; ``"5.0"`` is accepted, ``"5.5"`` is not.
    """
    digits, exponent = _exact_parts(_to_decimal(value, field))
    if not digits:
        return 0

    if exponent < 0:
        raise InvalidAmountError(f"{field} must be a whole number, got {value!r}")
    if len(digits) + exponent > MAX_UINT256_DIGITS:
        raise InvalidAmountError(f"{field} does not fit in uint256: {value!r}")

    result = int(digits) * 10**exponent
    if result > MAX_UINT256:
        raise InvalidAmountError(f"{field} does not fit in uint256: {value!r}")
    return result
