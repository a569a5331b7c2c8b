"""Duration parsing and scene counting.

Turns free-form duration text such as ``"2m 30s"``, ``"1 phút"`` or ``"45"``
into seconds, and seconds into the number of fixed-length scenes needed to
cover them.
"""

import logging
import math
import re
import unicodedata

from .errors import InvalidDurationError

logger = logging.getLogger(__name__)

# Native clip length of the downstream text-to-video model.
SCENE_WINDOW_SECONDS = 8

MINUTE_UNITS = frozenset({"m", "min", "mins", "minute", "minutes", "phút", "phut"})
SECOND_UNITS = frozenset({"s", "sec", "secs", "second", "seconds", "giây", "giay"})

# Longest alternatives first so "minutes" never stops at "m".
_UNIT_PATTERN = "|".join(
    re.escape(unit)
    for unit in sorted(MINUTE_UNITS | SECOND_UNITS, key=len, reverse=True)
)

# A unit may not run into further letters ("5 mango" is not five minutes),
# but may run straight into the next number ("1m30s").
_TOKEN_RE = re.compile(
    rf"(?P<value>[-+]?(?:\d+(?:\.\d+)?|\.\d+))\s*(?P<unit>{_UNIT_PATTERN})(?![^\W\d_])",
    re.IGNORECASE,
)


def _normalize(expression: str) -> str:
    text = unicodedata.normalize("NFC", expression)
    return text.strip().lower().replace(",", ".")


def parse_duration(expression: str) -> float:
    """Parse a duration expression into seconds.

    Minute tokens count sixty seconds per unit and second tokens one. All
    tokens in the string are summed regardless of order, so ``"1m 30s"`` and
    ``"30s 1m"`` both give 90. A string with no unit-tagged token is read as a
    bare number of seconds.

    Args:
        expression: Raw text entered by the user.

    Returns:
        Duration in seconds, always finite and greater than zero.

    Raises:
        InvalidDurationError: If no positive, finite duration can be read.
    """
    if expression is None:
        raise InvalidDurationError("", "no duration given")

    normalized = _normalize(expression)
    total = 0.0
    matched = 0

    for match in _TOKEN_RE.finditer(normalized):
        value = float(match.group("value"))
        unit = match.group("unit")
        if unit in MINUTE_UNITS:
            total += value * 60
        else:
            total += value
        matched += 1

    if matched == 0:
        try:
            total = float(normalized)
        except ValueError:
            raise InvalidDurationError(expression, "no number with a known unit")

    if not math.isfinite(total) or total <= 0:
        raise InvalidDurationError(expression, "duration must be greater than zero")

    logger.debug(f"Parsed duration {expression!r} -> {total}s ({matched} token(s))")
    return total


def scene_count(seconds: float) -> int:
    """Return how many scene windows are needed to cover ``seconds``.

    Raises:
        InvalidDurationError: If ``seconds`` is not positive and finite.
    """
    if not math.isfinite(seconds) or seconds <= 0:
        raise InvalidDurationError(str(seconds), "duration must be greater than zero")
    return max(1, math.ceil(seconds / SCENE_WINDOW_SECONDS))


def format_duration(seconds: float) -> str:
    """Format seconds for display, e.g. ``135`` -> ``"2m 15s"``."""
    minutes, rest = divmod(seconds, 60)
    rest_text = f"{rest:g}s"
    if minutes == 0:
        return rest_text
    if rest == 0:
        return f"{int(minutes)}m"
    return f"{int(minutes)}m {rest_text}"
