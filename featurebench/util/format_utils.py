"""
Presentation helpers for recorder output.

Byte counts are printed with thousands separators and durations as
``hh:mm:ss.fffffff`` (seven fractional digits, 100 ns ticks).
"""

TICKS_PER_SECOND = 10_000_000


def format_bytes(value: int) -> str:
    """Format a byte count (or delta) with thousands separators, e.g. ``-1,024``."""
    return f"{int(value):,}"


def format_megabytes(value: float) -> str:
    return f"{value / 1024 / 1024:.1f} MB"


def format_timespan(seconds: float) -> str:
    """
    Format a duration in seconds as ``hh:mm:ss.fffffff``.

    Hours are not wrapped at 24; a negative duration gets a leading ``-``.

    Examples:
        >>> format_timespan(0.2001234)
        '00:00:00.2001234'
        >>> format_timespan(3725.5)
        '01:02:05.5000000'
    """
    ticks = round(seconds * TICKS_PER_SECOND)
    sign = "-" if ticks < 0 else ""
    ticks = abs(ticks)

    total_seconds, fraction = divmod(ticks, TICKS_PER_SECOND)
    minutes, secs = divmod(total_seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d}.{fraction:07d}"


def format_milliseconds(seconds: float) -> str:
    return f"{seconds * 1000:,.3f}"
