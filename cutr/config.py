import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from cutr.exceptions import ConfigError, DelimiterError, UsageError
from cutr.extractors import Extract, Mode
from cutr.selection import parse_pos

# Try to import yaml
try:
    from ruamel.yaml import YAML
    from ruamel.yaml.error import YAMLError

    yaml = YAML(typ="safe", pure=True)
except ImportError as e:
    raise ImportError("ruamel.yaml not available. Install with: pip install ruamel.yaml") from e

DEFAULT_DELIMITER = "\t"

CONFIG_KEYS = {
    "delimiter",
    "fields",
    "bytes",
    "chars",
}


def parse_delimiter(delimiter: str) -> str:
    """Check that *delimiter* encodes to exactly one byte and return it"""
    if len(delimiter.encode("utf-8")) != 1:
        raise DelimiterError(f'--delim "{delimiter}" must be a single byte')
    return delimiter


def _check_csv_delimiter(delimiter: str) -> None:
    """Reject single-byte delimiters the csv dialect cannot use, such as a quote or a line break"""
    try:
        csv.reader([], delimiter=delimiter)
        csv.writer(io.StringIO(), delimiter=delimiter, lineterminator="\n")
    except (TypeError, ValueError, csv.Error) as e:
        raise DelimiterError(f'--delim "{delimiter}" cannot be used as a field delimiter: {e}') from e


@dataclass(frozen=True)
class Config:
    """Validated settings for one run, shared read-only by every line"""

    extract: Extract
    delimiter: str = DEFAULT_DELIMITER
    files: List[str] = field(default_factory=lambda: ["-"])


def build_config(
    files: Optional[List[str]] = None,
    delimiter: str = DEFAULT_DELIMITER,
    fields: Optional[str] = None,
    bytes_: Optional[str] = None,
    chars: Optional[str] = None,
) -> Config:
    """Validate raw option values and build a Config

    The delimiter is checked before the position list so that both errors surface before any input is read.
    """
    delimiter = parse_delimiter(delimiter)

    candidates = ((Mode.FIELDS, fields), (Mode.BYTES, bytes_), (Mode.CHARS, chars))
    given = [(mode, spec) for mode, spec in candidates if spec is not None]
    if not given:
        raise UsageError("Must have --fields, --bytes, or --chars")
    if len(given) > 1:
        raise UsageError("Only one of --fields, --bytes, or --chars may be given")

    mode, spec = given[0]
    if mode is Mode.FIELDS:
        _check_csv_delimiter(delimiter)
    positions = parse_pos(spec)
    logging.debug(f"Selected {mode.value} {positions} with delimiter {delimiter!r}")

    return Config(extract=Extract(mode, tuple(positions)), delimiter=delimiter, files=list(files or ["-"]))


def load_defaults(file: Path) -> Dict[str, Any]:
    """Load option defaults from a YAML file"""

    if not file.is_file():
        raise ConfigError(f"Config file not found: {file}")
    try:
        with file.open() as f:
            data = yaml.load(f)
    except YAMLError as e:
        raise ConfigError(f"Failed to load config file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {file} must contain a mapping")

    unknown = set(data) - CONFIG_KEYS
    if unknown:
        raise ConfigError(f"Unknown keys in config file {file}: {', '.join(sorted(map(str, unknown)))}")

    # Lists such as 1,3 may have been read as numbers
    return {key: str(value) for key, value in data.items() if value is not None}
