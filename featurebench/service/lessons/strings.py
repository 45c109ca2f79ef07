"""
String building chapter.

Three ways to build the same text: repeated concatenation, ``str.join`` and
an ``io.StringIO`` buffer. The comparison runner times them with the
Recorder.
"""
import io
from typing import Callable, Dict

from featurebench.util.log_config import setup_logger

logger = setup_logger(__name__)


def build_by_concatenation(parts: int) -> str:
    text = ""
    for i in range(parts):
        text += str(i) + ","
    return text


def build_by_join(parts: int) -> str:
    return "".join(f"{i}," for i in range(parts))


def build_by_buffer(parts: int) -> str:
    buffer = io.StringIO()
    for i in range(parts):
        buffer.write(str(i))
        buffer.write(",")
    return buffer.getvalue()


STRING_BUILDERS: Dict[str, Callable[[int], str]] = {
    "concatenation": build_by_concatenation,
    "join": build_by_join,
    "string_io": build_by_buffer,
}


def format_examples(name: str, amount: float) -> Dict[str, str]:
    return {
        "f-string": f"{name} owes {amount:,.2f}",
        "format": "{} owes {:,.2f}".format(name, amount),
        "percent": "%s owes %.2f" % (name, amount),
        "padded": f"[{name:<8}][{amount:>10.1f}]",
    }


def run() -> None:
    for style, text in format_examples("Ada", 1234.5).items():
        print(f"{style:>9}: {text}")
    sample = {name: builder(10) for name, builder in STRING_BUILDERS.items()}
    for name, text in sample.items():
        print(f"{name:>13}: {text}")
    if len(set(sample.values())) != 1:
        logger.error("String builders disagree on the same input")
        raise RuntimeError("String builders produced different text")
    print("'-'.join(['a', 'b', 'c']) =", "-".join(["a", "b", "c"]))
    print("'Hello'[::-1] =", "Hello"[::-1], " 'a,b,,c'.split(',') =", "a,b,,c".split(","))
