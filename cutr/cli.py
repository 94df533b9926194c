"""Command-line interface for cutr.

CLI argument parsing, logging configuration, and the ``main()`` entry point live here. Position lists and delimiters
are validated by the config module before any input is opened, and the per-line work is delegated to the runner
module. Errors are reported once, through logging, using the custom exceptions defined in the exceptions module.
"""

import argparse
import logging
import os
import sys
import traceback
from pathlib import Path
from typing import Any, Dict, Optional

from cutr import __version__
from cutr.config import DEFAULT_DELIMITER, Config, build_config, load_defaults
from cutr.exceptions import CliError, ExitCode, RuntimeError
from cutr.runner import CutRunner

CONFIG_ENV_VAR = "CUTR_CONFIG"


def setup_logging(verbosity_level: int) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbosity_level: 0=WARNING, 1=INFO, 2+=DEBUG
    """
    if verbosity_level == 0:
        level = logging.WARNING
    elif verbosity_level == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(
        prog="cutr",
        description="Print selected bytes, characters, or fields from each line of FILES",
        exit_on_error=True,
    )
    argument_parser.add_argument("files", nargs="*", default=["-"], metavar="FILE", help="Input file(s), - for stdin")
    argument_parser.add_argument(
        "-d",
        "--delim",
        "--delimiter",
        dest="delimiter",
        default=None,
        help="Field delimiter, a single byte (default: tab)",
    )

    mode_group = argument_parser.add_mutually_exclusive_group()
    mode_group.add_argument("-f", "--fields", metavar="LIST", help="Selected fields")
    mode_group.add_argument("-b", "--bytes", metavar="LIST", help="Selected bytes")
    mode_group.add_argument("-c", "--chars", metavar="LIST", help="Selected characters")

    argument_parser.add_argument(
        "--config",
        default=None,
        metavar="FILE",
        help=f"YAML file with default options (default: ${CONFIG_ENV_VAR} if set)",
    )
    argument_parser.add_argument(
        "-o",
        "--output",
        default=None,
        metavar="FILE",
        help="Write output to FILE instead of stdout",
    )
    argument_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    argument_parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return argument_parser


def resolve_config(parsed_args: argparse.Namespace) -> Config:
    """Merge command line values over the optional defaults file and validate the result.

    A position list given on the command line replaces any list from the defaults file, so the two never count as
    conflicting modes.
    """
    config_path = parsed_args.config or os.environ.get(CONFIG_ENV_VAR)
    defaults: Dict[str, Any] = load_defaults(Path(config_path)) if config_path else {}
    if config_path:
        logging.debug(f"Loaded defaults from {config_path}: {defaults}")

    lists = {"fields": parsed_args.fields, "bytes_": parsed_args.bytes, "chars": parsed_args.chars}
    if all(value is None for value in lists.values()):
        lists = {"fields": defaults.get("fields"), "bytes_": defaults.get("bytes"), "chars": defaults.get("chars")}

    delimiter = parsed_args.delimiter
    if delimiter is None:
        delimiter = defaults.get("delimiter", DEFAULT_DELIMITER)

    return build_config(files=parsed_args.files, delimiter=delimiter, **lists)


def main(command_line_args: Optional[list[str]] = None) -> int:
    """Main entry point for command line execution.

    Args:
        command_line_args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code for the process
    """
    parsed_args = build_parser().parse_args(command_line_args)

    setup_logging(parsed_args.verbose)
    config = resolve_config(parsed_args)

    if parsed_args.output is None:
        return CutRunner(config).run()

    try:
        output = open(parsed_args.output, "w", encoding="utf-8", newline="")
    except OSError as e:
        raise RuntimeError(f"Cannot open output file {parsed_args.output}: {e}") from e
    with output:
        return CutRunner(config, output).run()


def _silence_stdout() -> None:
    """Point stdout at /dev/null so the interpreter's final flush cannot hit the closed pipe again."""
    if sys.stdout is not sys.__stdout__:
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def run(command_line_args: Optional[list[str]] = None) -> int:
    """Run :func:`main`, turning errors into a diagnostic and an exit code."""
    try:
        return main(command_line_args)
    except BrokenPipeError:
        # The reader went away (e.g. ``cutr ... | head``); nothing more can be written
        logging.debug("Output pipe closed, stopping")
        _silence_stdout()
        return ExitCode.OK
    except CliError as e:
        logging.error(e)
        return e.exit_code
    except Exception:
        logging.error("internal error (use -vv for traceback)")
        if logging.getLogger().isEnabledFor(logging.DEBUG):
            traceback.print_exc()
        return ExitCode.INTERNAL


if __name__ == "__main__":
    sys.exit(run())
