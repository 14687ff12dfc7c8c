"""Segment-wildcard matching for event types.

Event types and patterns are split on a single separator character:

- ``**`` matches zero or more whole segments
- ``*`` matches any run of characters inside one segment, so a segment that
  is exactly ``*`` matches exactly one segment
- ``?`` matches a single character inside one segment
- anything else must match literally

Example:
    match("user.created", "user.*")       # True
    match("user.created.v2", "user.*")    # False
    match("user.created.v2", "user.**")   # True
"""

import re
from functools import lru_cache

DEFAULT_SEPARATOR = "."
GLOBSTAR = "**"


@lru_cache(maxsize=1024)
def _compile_segment(segment: str) -> re.Pattern[str]:
    parts = []
    for char in segment:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str, separator: str = DEFAULT_SEPARATOR) -> tuple:
    """Split a pattern once into matchers.

    Returns:
        A tuple whose items are either GLOBSTAR or a compiled segment regex.
        Consecutive globstars are collapsed.
    """
    compiled: list = []
    for segment in pattern.split(separator):
        if segment == GLOBSTAR:
            if not compiled or compiled[-1] is not GLOBSTAR:
                compiled.append(GLOBSTAR)
        else:
            compiled.append(_compile_segment(segment))
    return tuple(compiled)


def _match_segments(segments: list[str], matchers: tuple) -> bool:
    # Iterative glob matching with a single backtrack point per globstar.
    s = m = 0
    star_m = star_s = -1

    while s < len(segments):
        if m < len(matchers) and matchers[m] is GLOBSTAR:
            star_m, star_s = m, s
            m += 1
        elif m < len(matchers) and matchers[m].fullmatch(segments[s]):
            s += 1
            m += 1
        elif star_m != -1:
            star_s += 1
            s = star_s
            m = star_m + 1
        else:
            return False

    while m < len(matchers) and matchers[m] is GLOBSTAR:
        m += 1

    return m == len(matchers)


def match(event_type: str, pattern: str, separator: str = DEFAULT_SEPARATOR) -> bool:
    """Check whether a concrete event type matches a wildcard pattern.

    Args:
        event_type: The concrete event type, e.g. "user.created".
        pattern: The stored pattern, e.g. "user.*".
        separator: Segment separator character.

    Returns:
        True if the pattern matches the whole event type.
    """
    if event_type == pattern:
        return True
    return _match_segments(event_type.split(separator), compile_pattern(pattern, separator))
