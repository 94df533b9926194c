"""Input iteration for cutr.

Opens each input in turn, feeds its lines (or, in field mode, its delimited records) to the extractors and writes
the results. Inputs that cannot be opened are reported and skipped so the remaining ones are still processed.
"""

import csv
import io
import logging
import sys
from typing import BinaryIO, Iterator, Optional, TextIO

from cutr.config import Config
from cutr.exceptions import ExitCode
from cutr.extractors import Mode, extract


def open_input(filename: str) -> BinaryIO:
    """Open *filename* for binary reading, ``-`` meaning standard input."""
    if filename == "-":
        return sys.stdin.buffer
    return open(filename, "rb")


def iter_lines(stream: BinaryIO) -> Iterator[bytes]:
    """Yield the lines of *stream* without their ``\\n`` or ``\\r\\n`` terminator."""
    for line in stream:
        if line.endswith(b"\n"):
            line = line[:-1]
            if line.endswith(b"\r"):
                line = line[:-1]
        yield line


class CutRunner:
    """Run one extraction over every configured input.

    Args:
        config: Validated settings for the run
        output: Text stream receiving the extracted lines (defaults to stdout)
    """

    def __init__(self, config: Config, output: Optional[TextIO] = None):
        self.config = config
        self.output = output or sys.stdout
        self.failed_inputs = 0

    def run(self) -> int:
        """Process all inputs in order and return the exit code."""
        for filename in self.config.files:
            try:
                stream = open_input(filename)
            except OSError as e:
                logging.error(f"{filename}: {e}")
                self.failed_inputs += 1
                continue

            logging.info(f"Processing {filename}")
            try:
                self.process(stream)
            except BrokenPipeError:
                raise
            except (OSError, csv.Error) as e:
                logging.error(f"{filename}: {e}")
                self.failed_inputs += 1
            finally:
                if filename != "-":
                    stream.close()

        if self.failed_inputs:
            logging.info(f"{self.failed_inputs} input(s) could not be processed")
            return ExitCode.RUNTIME
        return ExitCode.OK

    def process(self, stream: BinaryIO) -> None:
        """Extract from a single opened input."""
        if self.config.extract.mode is Mode.FIELDS:
            self._process_records(stream)
        else:
            self._process_lines(stream)

    def _process_lines(self, stream: BinaryIO) -> None:
        spec = self.config.extract
        for line in iter_lines(stream):
            if spec.mode is Mode.CHARS:
                selected = extract(spec, line.decode("utf-8", errors="replace"))
            else:
                selected = extract(spec, line)
            self.output.write(f"{selected}\n")

    def _process_records(self, stream: BinaryIO) -> None:
        # newline="" lets the csv module handle line breaks inside quoted fields
        text = io.TextIOWrapper(stream, encoding="utf-8", errors="replace", newline="")
        # A "\r\n" terminator makes the writer quote fields holding either character; rows end in "\n" on output
        row_buffer = io.StringIO()
        try:
            reader = csv.reader(text, delimiter=self.config.delimiter)
            writer = csv.writer(row_buffer, delimiter=self.config.delimiter, lineterminator="\r\n")
            for record in reader:
                # Blank lines hold no record
                if not record:
                    continue
                writer.writerow(extract(self.config.extract, record))
                row = row_buffer.getvalue()
                row_buffer.seek(0)
                row_buffer.truncate()
                self.output.write(f"{row[:-2]}\n")
        finally:
            # Leave the underlying stream open; its owner closes it
            text.detach()
