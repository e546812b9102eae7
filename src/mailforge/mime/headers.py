# =============================================================================
# Top-Level Header Formatting
# =============================================================================
# Renders the four headers every assembled message starts with:
#
#   From: <address>
#   To: <address>, <address>, ...
#   Subject: <raw or RFC 2047 encoded>
#   MIME-Version: 1.0
#
# Date, Message-ID and friends are left to the transport if it wants them.
# =============================================================================

from typing import TYPE_CHECKING

from mailforge.mime.errors import EncodingError

if TYPE_CHECKING:
    from mailforge.core import Message

CHARSET = "utf-8"

# RFC 2047: an encoded word may not be longer than 75 characters
MAX_ENCODED_WORD_LENGTH = 75

_WORD_PREFIX = f"=?{CHARSET}?q?"
_WORD_SUFFIX = "?="
_MAX_WORD_CONTENT = MAX_ENCODED_WORD_LENGTH - len(_WORD_PREFIX) - len(_WORD_SUFFIX)


def _needs_encoding(text: str) -> bool:
    """True if `text` has anything besides printable ASCII and tabs."""
    return any((ch < " " or ch > "~") and ch != "\t" for ch in text)


def _q_encode_char(ch: str) -> str:
    """Q-encode one character (all of its UTF-8 octets)."""
    if ch == " ":
        return "_"
    if "!" <= ch <= "~" and ch not in "=?_":
        return ch
    return "".join(f"={octet:02X}" for octet in ch.encode(CHARSET))


def encode_subject(subject: str) -> str:
    """
    Encode a subject line for the Subject header.

    Plain ASCII subjects are returned unchanged. Anything else is written
    as one or more RFC 2047 "Q" encoded words, separated by a space. A
    character's octets are never split across two words.

    Raises:
        EncodingError: If the subject cannot be encoded as UTF-8.

    Example:
        >>> encode_subject("Hello")
        'Hello'
        >>> encode_subject("Olá mundo")
        '=?utf-8?q?Ol=C3=A1_mundo?='
    """
    if not _needs_encoding(subject):
        return subject

    words = []
    current = ""
    try:
        for ch in subject:
            encoded = _q_encode_char(ch)
            if current and len(current) + len(encoded) > _MAX_WORD_CONTENT:
                words.append(current)
                current = ""
            current += encoded
    except UnicodeEncodeError as e:
        raise EncodingError(f"cannot encode subject as UTF-8: {e}") from e
    words.append(current)

    return " ".join(f"{_WORD_PREFIX}{word}{_WORD_SUFFIX}" for word in words)


def quote_parameter(value: str) -> str:
    """
    Render a header parameter value as an RFC 2045 quoted-string.

    Backslashes and double quotes inside the value are backslash-escaped.

    Example:
        >>> quote_parameter("report.pdf")
        '"report.pdf"'
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def encode_header_lines(lines: list[str]) -> bytes:
    """
    Encode header lines, each terminated by CRLF.

    Raises:
        EncodingError: If a line contains CR or LF, or cannot be encoded
                       as UTF-8.
    """
    for line in lines:
        if "\r" in line or "\n" in line:
            raise EncodingError(f"line break in header: {line!r}")
    try:
        return "".join(line + "\r\n" for line in lines).encode(CHARSET)
    except UnicodeEncodeError as e:
        raise EncodingError(f"cannot encode header as UTF-8: {e}") from e


def format_headers(message: "Message") -> bytes:
    """
    Render the top-level headers of `message`.

    Returns:
        CRLF-terminated From, To, Subject and MIME-Version lines.
    """
    return encode_header_lines([
        f"From: {message.from_addr}",
        f"To: {', '.join(message.to)}",
        f"Subject: {encode_subject(message.subject)}",
        "MIME-Version: 1.0",
    ])
