# =============================================================================
# Message Model
# =============================================================================
# Describes an outgoing email before it is turned into MIME bytes:
#   - Headers (From, To, Subject)
#   - A single text body, either plain text or HTML
#   - Attachments (offered for download)
#   - Inline resources (images referenced from the HTML via cid: URIs)
#
# These are frozen dataclasses. The assembler only reads them; anything it
# derives (content-type defaults, structure) is computed, never written back.
# =============================================================================

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum


# Content type used when a part does not declare one
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def default_content_type(declared: str) -> str:
    """
    Return the content type to emit for a part.

    Empty declarations fall back to application/octet-stream.

    Example:
        >>> default_content_type("")
        'application/octet-stream'
        >>> default_content_type("image/png")
        'image/png'
    """
    return declared or DEFAULT_CONTENT_TYPE


class MailType(Enum):
    """
    Format of the message body.

    The value doubles as the MIME type written on the body part.
    """
    PLAIN_TEXT = "text/plain"
    HTML = "text/html"

    @property
    def mime_type(self) -> str:
        """The MIME type for the body part (e.g. "text/html")."""
        return self.value


@dataclass(frozen=True)
class AttachmentPart:
    """
    A file attached to the message (Content-Disposition: attachment).

    The content source is either the bytes themselves or a reference to a
    file on disk:
        - body is bytes: those bytes are the content, even if empty.
        - body is None: the assembler reads the file whose path is `name`.

    Attributes:
        name: Filename label, also the path for file references.
        content_type: MIME type. Empty means application/octet-stream.
        body: Raw content, or None for a file reference.

    Example:
        >>> AttachmentPart("notes.txt", "text/plain", b"hello")
        >>> AttachmentPart.from_file("reports/q3.pdf", "application/pdf")
    """
    name: str
    content_type: str = ""
    body: bytes | None = None

    @classmethod
    def from_file(cls, path: str, content_type: str = "") -> "AttachmentPart":
        """Create an attachment whose content is read from `path` at assembly time."""
        return cls(name=path, content_type=content_type, body=None)

    @property
    def is_file_reference(self) -> bool:
        """True if the content must be read from disk."""
        return self.body is None


@dataclass(frozen=True)
class InlineResourcePart:
    """
    A resource embedded in the HTML body (Content-Disposition: inline).

    The HTML refers to it as <img src="cid:{content_id}">. Inline parts
    always carry their own bytes; there is no file fallback.

    Attributes:
        content_id: Token used in the cid: URI (without angle brackets).
        name: Filename label.
        content_type: MIME type. Empty means application/octet-stream.
        body: Raw content.
    """
    content_id: str
    name: str
    content_type: str = ""
    body: bytes = b""


@dataclass(frozen=True)
class Message:
    """
    An outgoing email message.

    Validation (non-empty recipients and body, well-formed addresses) is
    done by the assembler, not here, so a Message can be built up freely
    and checked once at assembly time.

    Attributes:
        from_addr: Sender address.
        to: Recipient addresses, in the order they appear in the To header.
        subject: Subject line. Non-ASCII text is RFC 2047 encoded.
        body: Text body (plain or HTML depending on `kind`).
        kind: Body format.
        attachments: Files attached to the message.
        inline: Resources referenced from the HTML body.

    Example:
        >>> msg = Message(
        ...     from_addr="me@example.com",
        ...     to=["you@example.com"],
        ...     subject="Hello",
        ...     body="Hi there!",
        ... )
    """
    from_addr: str
    to: Sequence[str]
    subject: str = ""
    body: str = ""
    kind: MailType = MailType.PLAIN_TEXT
    attachments: Sequence[AttachmentPart] = field(default_factory=tuple)
    inline: Sequence[InlineResourcePart] = field(default_factory=tuple)

    @property
    def has_attachments(self) -> bool:
        """Returns True if the message carries attachments."""
        return len(self.attachments) > 0

    @property
    def has_inline(self) -> bool:
        """Returns True if the message carries inline resources."""
        return len(self.inline) > 0

    def __repr__(self) -> str:
        return (
            f"Message(from={self.from_addr!r}, to={list(self.to)!r}, "
            f"subject={self.subject!r}, kind={self.kind.name}, "
            f"attachments={len(self.attachments)}, inline={len(self.inline)})"
        )
