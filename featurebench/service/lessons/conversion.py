"""
Type conversion chapter.

``parse_int`` separates malformed text (ValueError) from well-formed numbers
that do not fit the target width (OverflowError); ``try_parse_int`` wraps it
into a ``(ok, value)`` pair that never raises.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Tuple

from featurebench.service.lessons.operators import int_range
from featurebench.util.log_config import setup_logger

logger = setup_logger(__name__)

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")


def parse_int(text: str, bits: int = 32) -> int:
    """
    Parse a decimal integer that must fit a signed ``bits``-bit integer.

    Raises:
        ValueError: If ``text`` is not a decimal integer
        OverflowError: If the number is outside the signed range
    """
    if text is None or not _INTEGER_PATTERN.match(text):
        raise ValueError(f"Input string was not in a correct format: {text!r}")
    value = int(text)
    low, high = int_range(bits)
    if not low <= value <= high:
        raise OverflowError(f"Value was either too large or too small for a {bits}-bit integer: {text.strip()}")
    return value


def try_parse_int(text: str, bits: int = 32) -> Tuple[bool, int]:
    try:
        return True, parse_int(text, bits)
    except (ValueError, OverflowError):
        return False, 0


def parse_decimal(text: str) -> Decimal:
    try:
        return Decimal(text.strip())
    except (InvalidOperation, AttributeError) as e:
        raise ValueError(f"Not a decimal number: {text!r}") from e


def parse_bool(text: str) -> bool:
    normalized = text.strip().lower()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    raise ValueError(f"Not a boolean: {text!r}")


def describe_parse_failure(text: str, bits: int = 32) -> str:
    """Parse ``text`` and report which kind of failure happened, if any"""
    try:
        value = parse_int(text, bits)
    except OverflowError as e:
        return f"range error: {e}"
    except ValueError as e:
        return f"format error: {e}"
    else:
        return f"ok: {value}"
    finally:
        logger.debug(f"Parsed {text!r} as int{bits}")


def run() -> None:
    samples = ["42", "  -17 ", "3.5", "abc", "", "2147483647", "2147483648", "-2147483649"]
    for text in samples:
        ok, value = try_parse_int(text)
        print(f"try_parse_int({text!r:>15}) -> ({ok}, {value})   {describe_parse_failure(text)}")

    print("int('ff', 16) =", int("ff", 16), " int(3.99) =", int(3.99), " round(2.5) =", round(2.5))
    print("float('1e3') =", float("1e3"), " str(0.1 + 0.2) =", str(0.1 + 0.2))
    print("parse_decimal('0.1') + parse_decimal('0.2') =", parse_decimal("0.1") + parse_decimal("0.2"))
    print("parse_bool('Yes') =", parse_bool("Yes"))
