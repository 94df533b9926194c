"""Shared fixtures for cutr tests.

Provides factory fixtures for writing input files into the test's tmp_path and for invoking the CLI entry point
programmatically.
"""

from __future__ import annotations

import io
import sys
import textwrap
from pathlib import Path

import pytest

from cutr.cli import run

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_input(tmp_path: Path):
    """Factory fixture: write an input file (text or raw bytes) into tmp_path."""

    def _factory(content: str | bytes, name: str = "input.txt") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path

    return _factory


@pytest.fixture
def make_yaml(tmp_path: Path):
    """Factory fixture: write a YAML defaults file into tmp_path."""

    def _factory(yaml_text: str, name: str = "cutr.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(yaml_text))
        return path

    return _factory


@pytest.fixture
def fake_stdin(monkeypatch):
    """Factory fixture: replace standard input with the given bytes."""

    def _factory(data: bytes) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))

    return _factory


@pytest.fixture
def run_cutr(monkeypatch):
    """Factory fixture: invoke ``cutr.cli.run()`` and return its exit code."""
    monkeypatch.delenv("CUTR_CONFIG", raising=False)

    def _factory(*args: str | Path) -> int:
        return run([str(arg) for arg in args])

    return _factory
