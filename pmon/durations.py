"""
Duration helpers.

pmon accepts and prints durations in the compact unit-suffixed notation used
by Go tooling ("10s", "1m30s", "250ms"), and serialises them as integer
nanoseconds in JSON reports.

Supported units: ns, us (also µs), ms, s, m, h. A bare "0" is accepted.
"""

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation

from pmon.exceptions import ConfigError

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

UNIT_NANOSECONDS: dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_COMPONENT_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def to_nanoseconds(value: timedelta) -> int:
    """Convert a timedelta to whole nanoseconds."""
    return (value // timedelta(microseconds=1)) * MICROSECOND


def from_nanoseconds(value: int) -> timedelta:
    """Convert whole nanoseconds to a timedelta (microsecond resolution)."""
    return timedelta(microseconds=value / MICROSECOND)


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration string such as "10s", "1m30s" or "1.5h".

    Args:
        text: The duration string

    Returns:
        The parsed duration

    Raises:
        ConfigError: If the string is not a valid duration
    """
    raw = text.strip()
    if not raw:
        raise ConfigError("invalid duration: empty string")

    sign = 1
    body = raw
    if body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]

    if body == "0":
        return timedelta(0)

    total = Decimal(0)
    position = 0
    while position < len(body):
        match = _COMPONENT_RE.match(body, position)
        if match is None:
            raise ConfigError(f"invalid duration: {text!r}")
        number, unit = match.groups()
        try:
            total += Decimal(number) * UNIT_NANOSECONDS[unit]
        except InvalidOperation:
            raise ConfigError(f"invalid duration: {text!r}")
        position = match.end()

    if position == 0:
        raise ConfigError(f"invalid duration: {text!r}")

    return from_nanoseconds(sign * int(total))


def _with_fraction(value: int, digits: int) -> str:
    whole, frac = divmod(value, 10 ** digits)
    if not frac:
        return str(whole)
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(value: timedelta) -> str:
    """
    Format a duration the way Go prints time.Duration values.

    Examples:
        >>> format_duration(timedelta(seconds=5))
        '5s'
        >>> format_duration(timedelta(seconds=90))
        '1m30s'
        >>> format_duration(timedelta(milliseconds=250))
        '250ms'
    """
    ns = to_nanoseconds(value)
    if ns == 0:
        return "0s"

    prefix = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < SECOND:
        if ns < MICROSECOND:
            return f"{prefix}{ns}ns"
        if ns < MILLISECOND:
            return f"{prefix}{_with_fraction(ns, 3)}µs"
        return f"{prefix}{_with_fraction(ns, 6)}ms"

    hours, rest = divmod(ns, HOUR)
    minutes, rest = divmod(rest, MINUTE)
    seconds = f"{_with_fraction(rest, 9)}s"

    if hours:
        return f"{prefix}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{prefix}{minutes}m{seconds}"
    return f"{prefix}{seconds}"
