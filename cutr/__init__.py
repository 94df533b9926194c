"""
cutr - select bytes, characters, or fields from each line of a file

A Python take on ``cut(1)`` whose position lists keep the order and repetition they were written with.
"""

from typing import List, Optional

__version__ = "0.1.0"

from cutr.cli import run  # noqa: E402

__all__ = ["main", "__version__"]


def main(command_line_args: Optional[List[str]] = None) -> int:
    """Main entry point for the cutr command"""
    return run(command_line_args)
