"""Element extraction helpers for byte, character, and field selection.

Contains pure functions that pick elements out of one line or record. No I/O, no parsing of position lists, and no
output formatting should be included here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, TypeVar, Union

T = TypeVar("T")


class Mode(Enum):
    """Element domain a position list indexes into."""

    FIELDS = "fields"
    BYTES = "bytes"
    CHARS = "chars"


@dataclass(frozen=True)
class Extract:
    """Extraction mode together with the zero-based positions it selects."""

    mode: Mode
    positions: tuple[int, ...]


def get_element(elements: Sequence[T], index: int) -> Optional[T]:
    """Return ``elements[index]``, or None when the index is out of bounds.

    Negative indices are treated as out of bounds rather than counted from the end.
    """
    if 0 <= index < len(elements):
        return elements[index]
    return None


def _select(elements: Sequence[T], positions: Iterable[int]) -> List[T]:
    """Look up every position in order, dropping the ones the sequence does not have."""
    selected = (get_element(elements, i) for i in positions)
    return [element for element in selected if element is not None]


def extract_bytes(line: Union[bytes, str], positions: Iterable[int]) -> str:
    """Extract bytes at the given offsets and decode them.

    Similar to the shell command: ``cut -b<list>``, except that the offsets are used in the order given and may
    repeat. The selected bytes are decoded as UTF-8 with invalid sequences replaced, so picking half of a multi-byte
    character yields U+FFFD rather than an error.

    Args:
        line: Line content without its terminator; text is encoded as UTF-8 first
        positions: Zero-based byte offsets

    Returns:
        Decoded selection, empty string if no offset falls inside the line

    Examples:
        >>> extract_bytes(b"abc", [2, 0])    # "ca"
        >>> extract_bytes("á", [0, 1])       # "á"
        >>> extract_bytes("á", [1])          # "�"
    """
    if isinstance(line, str):
        line = line.encode("utf-8")
    return bytes(_select(line, positions)).decode("utf-8", errors="replace")


def extract_chars(line: str, positions: Iterable[int]) -> str:
    """Extract characters at the given positions.

    Examples:
        >>> extract_chars("ábc", [2, 1])     # "cb"
        >>> extract_chars("ábc", [0, 1, 4])  # "áb"
    """
    return "".join(_select(line, positions))


def extract_fields(record: Sequence[str], positions: Iterable[int]) -> List[str]:
    """Extract fields of an already split record, in the order given."""
    return _select(record, positions)


def extract(spec: Extract, element: Union[bytes, str, Sequence[str]]) -> Union[str, List[str]]:
    """Apply the strategy matching ``spec.mode`` to one line or record.

    Args:
        spec: Mode and positions built once per run
        element: Raw line for BYTES, decoded line for CHARS, split record for FIELDS

    Returns:
        A string for BYTES and CHARS, a list of fields for FIELDS
    """
    if spec.mode is Mode.BYTES:
        return extract_bytes(element, spec.positions)  # type: ignore[arg-type]
    elif spec.mode is Mode.CHARS:
        return extract_chars(element, spec.positions)  # type: ignore[arg-type]
    elif spec.mode is Mode.FIELDS:
        return extract_fields(element, spec.positions)  # type: ignore[arg-type]
    raise ValueError(f"Unknown extraction mode: {spec.mode}")
