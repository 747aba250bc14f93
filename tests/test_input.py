import io

import pytest

from idsource.input import iterStreamLines, readIdsFromStream, resolveIds, shouldReadStream


class FailingStream:
    """Отдаёт заданные строки, затем падает с ошибкой чтения."""

    def __init__(self, lines, error):
        self.lines = list(lines)
        self.error = error
        self.reads = 0

    def readline(self):
        self.reads += 1
        if self.lines:
            return self.lines.pop(0)
        raise self.error


class UntouchedStream:
    def readline(self):
        raise AssertionError("stream must not be read")


@pytest.mark.parametrize(
    "explicit",
    [
        ["a"],
        ["a", "b", "a"],
        ["", "  x  "],
        ["-", "a"],
        ["a", "-"],
        ["--"],
    ],
)
def test_explicit_ids_returned_unchanged(explicit):
    result = resolveIds(explicit, stream=UntouchedStream())
    assert result == explicit


def test_explicit_ids_returned_as_new_list():
    explicit = ["a", "b"]
    result = resolveIds(explicit, stream=UntouchedStream())
    result.append("c")
    assert explicit == ["a", "b"]


def test_tuple_input_returns_list():
    assert resolveIds(("x", "y"), stream=UntouchedStream()) == ["x", "y"]


def test_empty_explicit_reads_stream():
    stream = io.StringIO("  abc \n\ndef\n   \nghi")
    assert resolveIds([], stream=stream) == ["abc", "def", "ghi"]


def test_placeholder_behaves_like_empty():
    text = "  abc \n\ndef\n   \nghi"
    assert resolveIds(["-"], stream=io.StringIO(text)) == resolveIds([], stream=io.StringIO(text))


def test_empty_stream_returns_empty_list():
    assert resolveIds([], stream=io.StringIO("")) == []


def test_read_error_keeps_partial_result():
    stream = FailingStream(["abc\n"], OSError("broken pipe"))
    assert resolveIds([], stream=stream) == ["abc"]
    assert stream.reads == 2


def test_decode_error_treated_as_eof():
    error = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
    stream = FailingStream(["LIN-1\n", "LIN-2\n"], error)
    assert readIdsFromStream(stream) == ["LIN-1", "LIN-2"]


def test_invalid_utf8_line_keeps_earlier_lines():
    stream = io.TextIOWrapper(io.BytesIO(b"abc\n\xff\nxyz\n"), encoding="utf-8")
    assert resolveIds([], stream=stream) == ["abc"]


def test_stdin_with_invalid_utf8_stops_at_bad_line(monkeypatch):
    stdin = io.TextIOWrapper(io.BytesIO(b" LIN-1 \r\n\nLIN-2\nbad\xfe\nLIN-3\n"), encoding="utf-8")
    monkeypatch.setattr("sys.stdin", stdin)
    assert resolveIds(["-"]) == ["LIN-1", "LIN-2"]


def test_stdin_bytes_decoded_as_utf8(monkeypatch):
    stdin = io.TextIOWrapper(io.BytesIO("ИД-1\nид-2\n".encode("utf-8")), encoding="latin-1")
    monkeypatch.setattr("sys.stdin", stdin)
    assert resolveIds([]) == ["ИД-1", "ид-2"]


def test_closed_stream_returns_empty():
    stream = io.StringIO("abc\n")
    stream.close()
    assert resolveIds(["-"], stream=stream) == []


def test_duplicates_and_order_preserved_from_stream():
    stream = io.StringIO("b\na\r\nb\n\t\n a \n")
    assert readIdsFromStream(stream) == ["b", "a", "b", "a"]


def test_iter_stream_lines_is_lazy():
    stream = FailingStream(["first\n", "second\n"], OSError("late"))
    lines = iterStreamLines(stream)
    assert next(lines) == "first\n"
    assert stream.reads == 1


def test_defaults_to_sys_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("x\ny\n"))
    assert resolveIds([]) == ["x", "y"]


def test_should_read_stream_rule():
    assert shouldReadStream([]) is True
    assert shouldReadStream(["-"]) is True
    assert shouldReadStream(["-", "-"]) is False
    assert shouldReadStream(["a"]) is False
    assert shouldReadStream([" - "]) is False
