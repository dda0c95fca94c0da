"""Arbitrary-precision decimal and hex helpers for amounts and gas quantities."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from .constants import DECIMAL_PRECISION, ZERO_HEX
from .exceptions import ValidationError

Numeric = int | float | str | Decimal


def to_decimal(value: Numeric | None, field: str = "value") -> Decimal:
    """Convert ``value`` to a Decimal without passing through binary floats.

    Accepts ints, Decimals, floats (via ``str``), decimal strings and ``0x`` hex strings.
    ``None`` and the empty string read as zero.
    """
    if value is None:
        return Decimal(0)

    if isinstance(value, bool):
        raise ValidationError("Boolean is not a numeric quantity", field=field, value=value)

    if isinstance(value, Decimal):
        return value

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        value = str(value)

    if not isinstance(value, str):
        raise ValidationError(
            f"Unsupported numeric type: {type(value).__name__}", field=field, value=value
        )

    text = value.strip()
    if not text:
        return Decimal(0)

    if text.lower().startswith("0x"):
        try:
            return Decimal(int(text, 16))
        except ValueError:
            raise ValidationError("Invalid hex quantity", field=field, value=value)

    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        try:
            result = Decimal(text)
        except InvalidOperation:
            raise ValidationError("Invalid decimal quantity", field=field, value=value)

    if not result.is_finite():
        raise ValidationError("Quantity must be finite", field=field, value=value)
    return result


def integral_precision(value: Decimal) -> int:
    """Context precision that keeps every integer digit of ``value``."""
    return max(DECIMAL_PRECISION, value.adjusted() + 2)


def to_integral(value: Numeric | None, field: str = "value") -> Decimal:
    """Round ``value`` half-up to zero fractional digits."""
    decimal_value = to_decimal(value, field)
    with localcontext() as ctx:
        ctx.prec = integral_precision(decimal_value)
        return decimal_value.quantize(Decimal(1), rounding=ROUND_HALF_UP)


def to_int(value: Numeric | None, field: str = "value") -> int:
    """Convert ``value`` to an unsigned integer, rejecting fractions and negatives."""
    decimal_value = to_decimal(value, field)

    if decimal_value < 0:
        raise ValidationError("Quantity cannot be negative", field=field, value=value)

    if decimal_value != decimal_value.to_integral_value():
        raise ValidationError("Quantity must be a whole number", field=field, value=value)

    return int(decimal_value)


def to_hex(value: Numeric | None, field: str = "value") -> str:
    """Encode ``value`` as a minimal big-endian ``0x`` hex string.

    Zero, ``None`` and the empty string all yield exactly ``"0x0"``.
    """
    integer = to_int(value, field)
    if integer == 0:
        return ZERO_HEX
    return hex(integer)
