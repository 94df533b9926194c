"""Exception classes and exit codes for cutr."""


class ExitCode:
    """Standard exit codes for the cutr application."""

    OK = 0  # Success
    USAGE = 2  # Command line usage error
    CONFIG = 3  # Configuration file error
    RUNTIME = 4  # One or more inputs could not be processed
    INTERNAL = 99  # Internal/unexpected error


class CliError(Exception):
    """Base class for command line interface errors."""

    exit_code = ExitCode.RUNTIME


class UsageError(CliError):
    """Error in command line usage or invalid parameters."""

    exit_code = ExitCode.USAGE


class SelectionError(UsageError):
    """Malformed position list (bad token, non-positive value or inverted range)."""


class DelimiterError(UsageError):
    """Field delimiter that does not encode to exactly one byte."""


class ConfigError(CliError):
    """Error in defaults file format or content."""

    exit_code = ExitCode.CONFIG


class RuntimeError(CliError):
    """Runtime error while reading input or writing output."""

    exit_code = ExitCode.RUNTIME
