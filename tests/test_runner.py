"""Unit tests for cutr.runner."""

import csv
import io

import pytest

from cutr.config import build_config
from cutr.exceptions import ExitCode
from cutr.runner import CutRunner, iter_lines, open_input


def run_on(data: bytes, **options) -> str:
    """Run a CutRunner over *data* and return what it wrote."""
    output = io.StringIO()
    runner = CutRunner(build_config(**options), output)
    runner.process(io.BytesIO(data))
    return output.getvalue()


class TestIterLines:
    def test_strips_terminators(self):
        assert list(iter_lines(io.BytesIO(b"a\nb\r\nc"))) == [b"a", b"b", b"c"]

    def test_keeps_empty_lines(self):
        assert list(iter_lines(io.BytesIO(b"\n\n"))) == [b"", b""]

    def test_lone_carriage_return_is_content(self):
        assert list(iter_lines(io.BytesIO(b"a\rb\n"))) == [b"a\rb"]


class TestOpenInput:
    def test_dash_is_stdin(self, fake_stdin):
        fake_stdin(b"from stdin\n")
        assert open_input("-").read() == b"from stdin\n"

    def test_file(self, make_input):
        path = make_input(b"\xff\xfe")
        with open_input(str(path)) as stream:
            assert stream.read() == b"\xff\xfe"


class TestLineModes:
    def test_chars(self):
        assert run_on("ábc\nxyz\n".encode(), chars="3,1") == "cá\nzx\n"

    def test_bytes(self):
        assert run_on(b"abc\nxyz\n", bytes_="2-3") == "bc\nyz\n"

    def test_bytes_split_character(self):
        assert run_on("á\n".encode(), bytes_="1") == "�\n"

    def test_short_lines_still_emitted(self):
        assert run_on(b"abcdef\na\n\n", chars="2-3") == "bc\n\n\n"

    def test_invalid_utf8_in_chars_mode(self):
        assert run_on(b"a\xffb\n", chars="1-3") == "a�b\n"

    def test_crlf(self):
        assert run_on(b"abc\r\n", chars="3") == "c\n"


class TestFieldMode:
    def test_tab_delimited(self):
        assert run_on(b"a\tb\tc\n1\t2\t3\n", fields="3,1") == "c\ta\n3\t1\n"

    def test_comma_with_quotes(self):
        data = b'name,note\nAlice,"x, y"\n'
        assert run_on(data, fields="2,1", delimiter=",") == 'note,name\n"x, y",Alice\n'

    def test_quoted_newline_is_one_record(self):
        data = b'1,"two\nlines",3\n'
        assert run_on(data, fields="2", delimiter=",") == '"two\nlines"\n'

    def test_repeated_field(self):
        assert run_on(b"a,b\n", fields="1,1,2", delimiter=",") == "a,a,b\n"

    def test_missing_fields_are_skipped(self):
        assert run_on(b"a,b,c\nx\n", fields="3,2", delimiter=",") == "c,b\n\n"

    def test_carriage_return_field_stays_quoted(self):
        assert run_on(b'"a\rb",c\n', fields="1", delimiter=",") == '"a\rb"\n'

    def test_carriage_return_field_reads_back_as_one_field(self):
        out = run_on(b'"a\rb",c\n', fields="2,1", delimiter=",")
        assert list(csv.reader(io.StringIO(out, newline=""))) == [["c", "a\rb"]]

    def test_only_fields_needing_quotes_are_quoted(self):
        assert run_on(b'x,"y\nz"\n', fields="1,2", delimiter=",") == 'x,"y\nz"\n'

    def test_blank_lines_are_skipped(self):
        assert run_on(b"a,b\n\nc,d\n", fields="2", delimiter=",") == "b\nd\n"

    def test_stream_left_open(self):
        stream = io.BytesIO(b"a,b\n")
        CutRunner(build_config(fields="1", delimiter=","), io.StringIO()).process(stream)
        assert not stream.closed


class TestRun:
    def test_multiple_files(self, make_input):
        first = make_input("one\n", "first.txt")
        second = make_input("two\n", "second.txt")
        output = io.StringIO()
        config = build_config(files=[str(first), str(second)], chars="1")
        assert CutRunner(config, output).run() == ExitCode.OK
        assert output.getvalue() == "o\nt\n"

    def test_missing_file_does_not_stop_run(self, make_input, tmp_path, caplog):
        good = make_input("hello\n")
        missing = tmp_path / "missing.txt"
        output = io.StringIO()
        config = build_config(files=[str(missing), str(good)], chars="1")
        runner = CutRunner(config, output)
        assert runner.run() == ExitCode.RUNTIME
        assert runner.failed_inputs == 1
        assert output.getvalue() == "h\n"
        assert f"{missing}: " in caplog.text

    def test_stdin(self, fake_stdin):
        fake_stdin(b"a:b\n")
        output = io.StringIO()
        config = build_config(fields="2", delimiter=":")
        assert CutRunner(config, output).run() == ExitCode.OK
        assert output.getvalue() == "b\n"

    def test_broken_pipe_stops_the_run(self, make_input):
        class ClosedPipe(io.StringIO):
            def write(self, s):
                raise BrokenPipeError(32, "Broken pipe")

        first = make_input("one\n", "first.txt")
        second = make_input("two\n", "second.txt")
        runner = CutRunner(build_config(files=[str(first), str(second)], chars="1"), ClosedPipe())
        with pytest.raises(BrokenPipeError):
            runner.run()
        assert runner.failed_inputs == 0
