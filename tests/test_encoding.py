"""Tests for the quoted-printable and base64 transfer encodings."""

import base64
import quopri

import pytest

from mailforge.mime import EncodingError, encode_binary, encode_quoted_printable


def _lines(data: bytes) -> list[bytes]:
    return data.split(b"\r\n")


class TestQuotedPrintable:
    def test_plain_ascii_passes_through(self):
        assert encode_quoted_printable("hello") == b"hello"

    def test_equals_sign_is_escaped(self):
        assert encode_quoted_printable("a=b") == b"a=3Db"

    def test_non_ascii_is_escaped_as_utf8(self):
        assert encode_quoted_printable("café") == b"caf=C3=A9"

    def test_inner_whitespace_is_literal(self):
        assert encode_quoted_printable("a b\tc") == b"a b\tc"

    def test_trailing_whitespace_is_escaped(self):
        assert encode_quoted_printable("end \nnext") == b"end=20\r\nnext"
        assert encode_quoted_printable("x\t") == b"x=09"

    def test_line_breaks_become_crlf(self):
        assert encode_quoted_printable("a\nb\r\nc\rd") == b"a\r\nb\r\nc\r\nd"

    def test_trailing_newline_is_kept(self):
        assert encode_quoted_printable("a\n") == b"a\r\n"

    def test_long_line_gets_soft_breaks(self):
        encoded = encode_quoted_printable("x" * 200)
        lines = _lines(encoded)

        assert lines[0] == b"x" * 75 + b"="
        assert all(len(line) <= 76 for line in lines)
        assert all(line.endswith(b"=") for line in lines[:-1])
        assert b"".join(line.rstrip(b"=") for line in lines) == b"x" * 200

    def test_escapes_are_never_split(self):
        encoded = encode_quoted_printable("é" * 60)

        for line in _lines(encoded):
            assert len(line) <= 76
            content = line[:-1] if line.endswith(b"=") else line
            # Every line is made of whole =XX triplets
            assert len(content) % 3 == 0

    def test_round_trip(self):
        body = "Olá,\nlinha com = sinal\ttab \n" + "palavra " * 30 + "\núltima linha"
        encoded = encode_quoted_printable(body)

        assert all(len(line) <= 76 for line in _lines(encoded))
        assert max(encoded) < 128
        assert quopri.decodestring(encoded).decode("utf-8") == body

    def test_unencodable_text_raises(self):
        with pytest.raises(EncodingError):
            encode_quoted_printable("broken \ud800 surrogate")


class TestBinary:
    def test_empty_input(self):
        assert encode_binary(b"") == b""

    def test_short_input_ends_with_crlf(self):
        assert encode_binary(b"hi") == b"aGk=\r\n"

    def test_exact_line(self):
        # 57 bytes encode to exactly 76 characters
        encoded = encode_binary(bytes(57))
        assert encoded.count(b"\r\n") == 1
        assert len(encoded) == 78

    def test_wraps_at_76(self):
        data = bytes(range(256)) * 4
        encoded = encode_binary(data)
        lines = _lines(encoded)

        assert encoded.endswith(b"\r\n")
        assert lines[-1] == b""
        assert all(len(line) == 76 for line in lines[:-2])
        assert 0 < len(lines[-2]) <= 76

    def test_round_trip(self):
        data = bytes(range(256)) * 3 + b"tail"
        encoded = encode_binary(data)
        assert base64.b64decode(encoded.replace(b"\r\n", b"")) == data

    def test_rejects_text(self):
        with pytest.raises(EncodingError):
            encode_binary("not bytes")
