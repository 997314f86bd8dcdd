"""Tests for cvtailor.runners.pipeline: line framing and JSON line decoding."""

from cvtailor.runners.pipeline import LineBuffer, parse_json_line, scan_last


class TestLineBuffer:
    def _collect(self, *chunks):
        lines = []
        buf = LineBuffer(lines.append)
        for chunk in chunks:
            buf.feed(chunk)
        return lines, buf

    def test_partial_tail_is_held(self):
        lines, buf = self._collect("ab", "c\nde\nf")
        assert lines == ["abc", "de"]
        assert buf.pending == "f"

    def test_tail_emitted_once_terminated(self):
        lines, _ = self._collect("ab", "c\nde\nf", "g\n")
        assert lines == ["abc", "de", "fg"]

    def test_blank_lines_skipped_and_lines_trimmed(self):
        lines, _ = self._collect('  {"a": 1}\r\n', "\n   \n", "x \n")
        assert lines == ['{"a": 1}', "x"]

    def test_chunking_does_not_matter(self):
        text = 'first\n{"k": "v"}\n\nlast line\ntrailing'
        whole, _ = self._collect(text)
        by_char, buf = self._collect(*text)
        assert by_char == whole == ["first", '{"k": "v"}', "last line"]
        assert buf.pending == "trailing"


class TestParseJsonLine:
    def test_object(self):
        assert parse_json_line('{"type": "result", "result": "ok"}') == {
            "type": "result",
            "result": "ok",
        }

    def test_scalar(self):
        assert parse_json_line("42") == 42

    def test_malformed_returns_none(self):
        assert parse_json_line('{"type": "resu') is None
        assert parse_json_line("Reading prompt from stdin...") is None
        assert parse_json_line("") is None


class TestScanLast:
    @staticmethod
    def _pick(event):
        value = event.get("text")
        return value if isinstance(value, str) else None

    def test_prefers_last_matching_line(self):
        stdout = '{"text": "first"}\n{"text": "second"}\n{"other": 1}\n'
        assert scan_last(stdout, self._pick) == "second"

    def test_skips_non_json_and_non_objects(self):
        stdout = '{"text": "only"}\n[1, 2]\nnoise\n'
        assert scan_last(stdout, self._pick) == "only"

    def test_no_match(self):
        assert scan_last("noise\n{}\n", self._pick) is None

    def test_empty_text_keeps_scanning(self):
        stdout = '{"text": "earlier"}\n{"text": ""}\n'
        assert scan_last(stdout, self._pick) == "earlier"
