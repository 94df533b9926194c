"""Position list parsing for cutr.

Turns a user list such as ``"1,7,3-5"`` into zero-based indices. Pure functions only: no I/O and no knowledge of
what the indices will be applied to.
"""

import re
from typing import List, Optional

from cutr.exceptions import SelectionError

PositionList = List[int]

_RANGE_RE = re.compile(r"([0-9]+)?-([0-9]+)?")
_VALUE_RE = re.compile(r"[0-9]+")


def _illegal(token: str) -> SelectionError:
    return SelectionError(f'illegal list value: "{token}"')


def _parse_value(token: str) -> int:
    """Parse a bare 1-based position, rejecting anything that is not a positive integer."""
    if not _VALUE_RE.fullmatch(token):
        raise _illegal(token)
    value = int(token)
    if value < 1:
        raise _illegal(token)
    return value


def _parse_range(token: str, start: Optional[str], end: Optional[str]) -> range:
    """Expand an ``A-B`` token into the inclusive 1-based range it names."""
    # Open ranges ("-5", "5-") are not supported
    if start is None or end is None:
        raise _illegal(token)

    first = int(start)
    second = int(end)
    if first >= second:
        raise SelectionError(f"First number in range ({first}) must be lower than second number ({second})")
    if first < 1:
        raise _illegal(token)
    return range(first, second + 1)


def parse_pos(spec: str) -> PositionList:
    """Parse a comma-separated list of positions and closed ranges.

    Tokens are handled left to right and their values appended in that order, so the result is neither sorted
    nor deduplicated: ``"2,1"`` selects the second element before the first and ``"1,1"`` selects the first
    element twice.

    Args:
        spec: Position list using 1-based numbers, e.g. ``"1,7,3-5"``

    Returns:
        Zero-based indices in the order requested

    Raises:
        SelectionError: On an empty list, a token that is neither a positive integer nor an ``A-B`` range, or a
            range whose first number is not strictly lower than its second

    Examples:
        >>> parse_pos("1,7,3-5")  # [0, 6, 2, 3, 4]
        >>> parse_pos("2,1")      # [1, 0]
    """
    positions: PositionList = []
    for token in spec.split(","):
        range_match = _RANGE_RE.fullmatch(token)
        if range_match:
            values = _parse_range(token, *range_match.groups())
            positions.extend(value - 1 for value in values)
        else:
            positions.append(_parse_value(token) - 1)
    return positions


def format_pos(positions: PositionList) -> str:
    """Render zero-based indices back into the list syntax accepted by :func:`parse_pos`.

    Runs of consecutive ascending indices become ``A-B`` ranges; everything else is written as a single value, so
    ``parse_pos(format_pos(p)) == p`` holds for any non-empty list.

    Examples:
        >>> format_pos([0, 6, 2, 3, 4])  # "1,7,3-5"
        >>> format_pos([1, 0, 0])        # "2,1,1"
    """
    tokens = []
    i = 0
    while i < len(positions):
        j = i
        while j + 1 < len(positions) and positions[j + 1] == positions[j] + 1:
            j += 1
        if j > i:
            tokens.append(f"{positions[i] + 1}-{positions[j] + 1}")
        else:
            tokens.append(str(positions[i] + 1))
        i = j + 1
    return ",".join(tokens)
