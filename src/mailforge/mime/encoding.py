# =============================================================================
# Content-Transfer-Encodings
# =============================================================================
# The two transfer encodings used in assembled messages:
#   - quoted-printable for the text body (RFC 2045 section 6.7)
#   - base64 wrapped at 76 columns for every binary part (RFC 2045 6.8)
#
# Both produce 7-bit output with CRLF line endings and no line longer than
# 76 characters.
# =============================================================================

import base64
import re

from mailforge.mime.errors import EncodingError

CRLF = b"\r\n"

# RFC 2045 limit on encoded line length (excluding CRLF)
MAX_LINE_LENGTH = 76

# Any of CRLF, lone CR or lone LF ends a source line
_LINE_BREAK = re.compile(rb"\r\n|\r|\n")

# Octets that pass through quoted-printable unchanged
_QP_SAFE = frozenset(range(ord("!"), ord("~") + 1)) - {ord("=")}
_QP_WHITESPACE = frozenset(b" \t")


# =============================================================================
# Quoted-Printable
# =============================================================================

def _qp_tokens(line: bytes) -> list[bytes]:
    """Split one source line into literal or =XX tokens."""
    tokens = []
    last = len(line) - 1
    for i, octet in enumerate(line):
        if octet in _QP_SAFE:
            tokens.append(bytes((octet,)))
        elif octet in _QP_WHITESPACE and i != last:
            # Whitespace is only significant at the end of a line
            tokens.append(bytes((octet,)))
        else:
            tokens.append(b"=%02X" % octet)
    return tokens


def _qp_wrap(tokens: list[bytes]) -> bytes:
    """Join tokens, inserting soft line breaks to respect the length limit."""
    # Leave room for the trailing "=" of a soft break
    limit = MAX_LINE_LENGTH - 1
    out = bytearray()
    width = 0
    for token in tokens:
        if width + len(token) > limit:
            out += b"=" + CRLF
            width = 0
        out += token
        width += len(token)
    return bytes(out)


def encode_quoted_printable(text: str) -> bytes:
    """
    Encode a text body as quoted-printable.

    The text is encoded as UTF-8 first. Line breaks of any style are
    written as CRLF, and no CRLF is added after the last line.

    Args:
        text: The body text.

    Returns:
        The encoded body.

    Raises:
        EncodingError: If the text cannot be encoded as UTF-8
                       (e.g. it contains lone surrogates).

    Example:
        >>> encode_quoted_printable("café = ok")
        b'caf=C3=A9 =3D ok'
    """
    try:
        data = text.encode("utf-8")
    except (UnicodeEncodeError, AttributeError) as e:
        raise EncodingError(f"cannot encode body as UTF-8: {e}") from e

    lines = _LINE_BREAK.split(data)
    return CRLF.join(_qp_wrap(_qp_tokens(line)) for line in lines)


# =============================================================================
# Base64
# =============================================================================

def encode_binary(data: bytes) -> bytes:
    """
    Encode binary content as base64, wrapped at 76 columns.

    Every line, including the last one, ends with CRLF. Empty input
    produces empty output.

    Raises:
        EncodingError: If `data` is not bytes-like.
    """
    try:
        encoded = base64.b64encode(data)
    except TypeError as e:
        raise EncodingError(f"cannot base64-encode {type(data).__name__}: {e}") from e

    return b"".join(
        encoded[i:i + MAX_LINE_LENGTH] + CRLF
        for i in range(0, len(encoded), MAX_LINE_LENGTH)
    )
