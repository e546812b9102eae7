# =============================================================================
# MIME Module
# =============================================================================
# Builds RFC 5322 / MIME message bytes from Message objects.
#
# Features:
#   - Address validation
#   - multipart/mixed and multipart/related nesting
#   - RFC 2047 subject encoding
#   - quoted-printable bodies and 76-column base64 parts
# =============================================================================

from mailforge.mime.address import is_valid_address
from mailforge.mime.assembler import MessageAssembler, Structure, assemble, structure_of
from mailforge.mime.boundary import BoundaryGenerator
from mailforge.mime.encoding import encode_binary, encode_quoted_printable
from mailforge.mime.errors import (
    AttachmentReadError,
    EmptyBodyError,
    EmptyRecipientsError,
    EncodingError,
    InvalidAddressError,
    MailError,
    RandomnessError,
)
from mailforge.mime.headers import (
    encode_header_lines,
    encode_subject,
    format_headers,
    quote_parameter,
)

__all__ = [
    "AttachmentReadError",
    "BoundaryGenerator",
    "EmptyBodyError",
    "EmptyRecipientsError",
    "EncodingError",
    "InvalidAddressError",
    "MailError",
    "MessageAssembler",
    "RandomnessError",
    "Structure",
    "assemble",
    "encode_binary",
    "encode_header_lines",
    "encode_quoted_printable",
    "encode_subject",
    "format_headers",
    "is_valid_address",
    "quote_parameter",
    "structure_of",
]
