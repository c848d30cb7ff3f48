from decimal import Decimal, getcontext

from .errors import YIsZeroError

# Set high precision for Decimal operations
getcontext().prec = 50

U128_MAX = 2 ** 128 - 1

# Pre-compute 2^64 as Decimal for Q64.64 conversions
Q64 = Decimal(2 ** 64)


def div_uu(x: int, y: int) -> int:
    """
    Divide two unsigned integers into a Q64.64 fixed point number.

    result = floor(x * 2^64 / y)

    Args:
        x: Numerator
        y: Denominator

    Returns:
        Q64.64 value, or 0 if it does not fit in 128 bits

    Raises:
        YIsZeroError: if y is zero
    """
    if y == 0:
        raise YIsZeroError("Y is zero")
    answer = (x << 64) // y
    if answer > U128_MAX:
        return 0
    return answer


def q64_to_float(x: int) -> float:
    """Convert a Q64.64 fixed point number to float."""
    return float(Decimal(x) / Q64)


def fee_multiplier(fee: int) -> int:
    """
    Convert a pool fee to the per-mille amount kept by the swap.

    Fee of 300 => (10,000 - 30) / 10 = 997
    """
    return (10000 - fee // 10) // 10


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int, fee: int) -> int:
    """
    Constant-product output amount for `amount_in` after fees.

    amount_out = a * f * R_out / (R_in * 1000 + a * f)
    """
    if amount_in == 0 or reserve_in == 0 or reserve_out == 0:
        return 0
    amount_in_with_fee = amount_in * fee_multiplier(fee)
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * 1000 + amount_in_with_fee
    return numerator // denominator
