"""Fee-rate resolution from a total fee budget.

Callers state how much they are willing to spend in total. The chain wants a per-unit
gas price, so the relation

    fee = gasPrice * gasBaseFee + gasPrice * gasDataFee
        = gasPrice * (gasBaseFee + gasDataFee)

is inverted to ``gasPrice = fee / (gasBaseFee + gasDataFee)``.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, localcontext

from .constants import DECIMAL_PRECISION
from .exceptions import InvalidFeeInputs
from .utils import Numeric, integral_precision, to_decimal

logger = logging.getLogger(__name__)


def resolve_fee_rate(
    total_fee: Numeric | None,
    gas_base_fee: Numeric,
    gas_data_fee: Numeric | None = 0,
) -> Decimal:
    """Back-solve the integral gas price that spends ``total_fee`` over the declared gas.

    Args:
        total_fee: Total fee budget in the chain's smallest unit.
        gas_base_fee: Base gas units charged for any transaction.
        gas_data_fee: Additional gas units for the payload.

    Returns:
        Gas price rounded half-up to a whole unit.

    Raises:
        InvalidFeeInputs: If an operand is negative or the gas total is zero.
    """
    fee = to_decimal(total_fee, "fee")
    base = to_decimal(gas_base_fee, "gasBaseFee")
    data = to_decimal(gas_data_fee, "gasDataFee")

    for field, value in (("fee", fee), ("gasBaseFee", base), ("gasDataFee", data)):
        if value < 0:
            raise InvalidFeeInputs(f"{field} cannot be negative", field=field, value=value)

    with localcontext() as ctx:
        ctx.prec = max(DECIMAL_PRECISION, base.adjusted() + 2, data.adjusted() + 2)
        gas_units = base + data
        if gas_units == 0:
            raise InvalidFeeInputs(
                "gasBaseFee + gasDataFee must be positive",
                field="gasBaseFee",
                value=gas_units,
                details={"gasBaseFee": str(base), "gasDataFee": str(data)},
            )
        # Keep DECIMAL_PRECISION digits beyond the integer part of the quotient.
        ctx.prec = max(
            DECIMAL_PRECISION, fee.adjusted() - gas_units.adjusted() + DECIMAL_PRECISION + 1
        )
        quotient = fee / gas_units
        ctx.prec = integral_precision(quotient)
        rate = quotient.quantize(Decimal(1), rounding=ROUND_HALF_UP)

    logger.debug("Resolved fee rate %s from fee=%s over %s gas units", rate, fee, gas_units)
    return rate
