"""
Control flow chapter: branching, structural pattern matching and loops.
"""
from typing import Any, Iterable, List

from featurebench.util.log_config import setup_logger

logger = setup_logger(__name__)


def describe(value: Any) -> str:
    """Describe a value with a match statement (type, guard and shape patterns)"""
    match value:
        case None:
            return "nothing"
        case bool():
            return "yes" if value else "no"
        case int() if value < 0:
            return "negative integer"
        case 0:
            return "zero"
        case int():
            return "positive integer"
        case float():
            return f"float {value:.2f}"
        case str() if not value:
            return "empty string"
        case str():
            return f"text of length {len(value)}"
        case [] | ():
            return "empty sequence"
        case [first, *rest]:
            return f"sequence starting with {first!r} and {len(rest)} more"
        case {"name": str(name), **rest}:
            return f"record named {name}"
        case _:
            return f"unknown {type(value).__name__}"


def grade(score: float) -> str:
    if score < 0 or score > 100:
        raise ValueError(f"score out of range: {score}")
    if score >= 90:
        return "A"
    elif score >= 80:
        return "B"
    elif score >= 70:
        return "C"
    elif score >= 60:
        return "D"
    return "F"


def fizzbuzz(limit: int) -> List[str]:
    out = []
    for n in range(1, limit + 1):
        if n % 15 == 0:
            out.append("FizzBuzz")
        elif n % 3 == 0:
            out.append("Fizz")
        elif n % 5 == 0:
            out.append("Buzz")
        else:
            out.append(str(n))
    return out


def first_negative(values: Iterable[int]) -> int:
    """Index of the first negative value, -1 if there is none (for/else)"""
    for idx, value in enumerate(values):
        if value < 0:
            break
    else:
        return -1
    return idx


def countdown(start: int) -> List[int]:
    seen = []
    n = start
    while n > 0:
        seen.append(n)
        n -= 1
    return seen


def run() -> None:
    for value in (None, True, -3, 0, 42, 3.14159, "", "hello", [], [1, 2, 3], {"name": "ada"}, object()):
        print(f"{value!r:>30} -> {describe(value)}")
    print("grades:", [grade(s) for s in (95, 85, 75, 65, 10)])
    print("fizzbuzz(15):", " ".join(fizzbuzz(15)))
    print("first_negative([3, 1, -2, 5]) =", first_negative([3, 1, -2, 5]))
    print("countdown(5) =", countdown(5))
    logger.debug("Control flow chapter finished")
