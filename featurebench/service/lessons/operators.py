"""
Operators chapter: arithmetic, fixed-width integer overflow, bitwise and
comparison operators.

Python integers never overflow, so fixed-width behaviour is spelled out
explicitly: ``checked_*`` raise OverflowError, ``wrapping_add`` wraps around
like unchecked two's complement arithmetic.
"""
from typing import Any, Dict, Optional

from featurebench.util.log_config import setup_logger

logger = setup_logger(__name__)


def int_range(bits: int = 32) -> tuple[int, int]:
    """Inclusive (min, max) of a signed integer with ``bits`` bits"""
    if bits <= 0:
        raise ValueError("bits must be positive")
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def _ensure_in_range(value: int, bits: int) -> int:
    low, high = int_range(bits)
    if not low <= value <= high:
        raise OverflowError(f"{value} does not fit in a signed {bits}-bit integer")
    return value


def checked_add(a: int, b: int, bits: int = 32) -> int:
    return _ensure_in_range(a + b, bits)


def checked_multiply(a: int, b: int, bits: int = 32) -> int:
    return _ensure_in_range(a * b, bits)


def wrapping_add(a: int, b: int, bits: int = 32) -> int:
    mask = (1 << bits) - 1
    result = (a + b) & mask
    if result >> (bits - 1):
        result -= 1 << bits
    return result


def truncated_divmod(a: int, b: int) -> tuple[int, int]:
    """
    Division rounding toward zero, remainder taking the sign of the dividend.

    Python's own ``//`` and ``%`` floor instead: ``-7 // 2 == -4`` while
    ``truncated_divmod(-7, 2) == (-3, -1)``.
    """
    if b == 0:
        raise ZeroDivisionError("integer division by zero")
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient, a - quotient * b


def coalesce(*values: Optional[Any]) -> Optional[Any]:
    """Return the first value that is not None"""
    for value in values:
        if value is not None:
            return value
    return None


def bitwise_table(a: int, b: int) -> Dict[str, int]:
    return {
        "a & b": a & b,
        "a | b": a | b,
        "a ^ b": a ^ b,
        "~a": ~a,
        "a << 1": a << 1,
        "a >> 1": a >> 1,
    }


def run() -> None:
    print("7 / 2 =", 7 / 2)
    print("7 // 2 =", 7 // 2, " -7 // 2 =", -7 // 2)
    print("7 % 3 =", 7 % 3, " -7 % 3 =", -7 % 3)
    print("truncated_divmod(-7, 2) =", truncated_divmod(-7, 2))
    print("2 ** 10 =", 2 ** 10)

    low, high = int_range(32)
    print(f"int32 range: [{low:,}, {high:,}]")
    print(f"wrapping_add({high:,}, 1) = {wrapping_add(high, 1):,}")
    try:
        checked_add(high, 1)
    except OverflowError as e:
        print("checked_add overflow:", e)

    for name, value in bitwise_table(0b1100, 0b1010).items():
        print(f"{name:>7} = {value:5d}  {value & 0xFF:08b}")

    print("coalesce(None, 0, 5) =", coalesce(None, 0, 5))
    print("1 < 2 < 3 =", 1 < 2 < 3, " 'abc' == 'ab' + 'c' =", "abc" == "ab" + "c")
    logger.debug("Operators chapter finished")
