from enum import Enum


class ChapterType(Enum):
    OPERATORS = "operators"
    CONTROL_FLOW = "control_flow"
    CONVERSION = "conversion"
    STRINGS = "strings"
    CONCURRENCY = "concurrency"
    COMPARISON = "comparison"
