# =============================================================================
# mailforge: MIME Message Assembly and Delivery
# =============================================================================
#
# mailforge turns a structured email description into the exact bytes of a
# MIME message and, optionally, delivers them over SMTP.
#
# Features:
#   - Plain text or HTML bodies (quoted-printable)
#   - Inline images in multipart/related, referenced via cid: URIs
#   - Attachments from memory or from disk (base64)
#   - RFC 2047 encoding of non-ASCII subjects
#   - Async SMTP delivery with AUTH LOGIN and keyring-stored passwords
#   - XDG Base Directory compliant configuration
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "mailforge"

from mailforge.core import AttachmentPart, InlineResourcePart, MailType, Message
from mailforge.mime import MailError, MessageAssembler, assemble

# Main entry point - this is what gets called by the 'mailforge' command
from mailforge.app import main

__all__ = [
    "AttachmentPart",
    "InlineResourcePart",
    "MailError",
    "MailType",
    "Message",
    "MessageAssembler",
    "assemble",
    "main",
    "__version__",
    "__app_name__",
]
