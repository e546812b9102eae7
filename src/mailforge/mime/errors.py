# =============================================================================
# MIME Assembly Errors
# =============================================================================
# Every failure while turning a Message into bytes is a MailError subclass.
# All of them abort the current assembly; nothing is retried.
# =============================================================================


class MailError(Exception):
    """Base exception for message assembly."""
    pass


class EmptyRecipientsError(MailError):
    """Raised when the To list is empty."""

    def __init__(self) -> None:
        super().__init__("recipient list is empty")


class EmptyBodyError(MailError):
    """Raised when the message body is empty."""

    def __init__(self) -> None:
        super().__init__("email body is empty")


class InvalidAddressError(MailError):
    """
    Raised when a From or To address fails the syntactic check.

    Attributes:
        address: The offending address.
        field: Header the address came from ("From" or "To").
    """

    def __init__(self, address: str, field: str) -> None:
        self.address = address
        self.field = field
        super().__init__(f"invalid {field} email address: {address}")


class EncodingError(MailError):
    """Raised when a body or part cannot be transfer-encoded."""
    pass


class AttachmentReadError(MailError):
    """
    Raised when an attachment's file cannot be read.

    The underlying OSError is available as __cause__.
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(f"failed to read attachment {name!r}: {reason}")


class RandomnessError(MailError):
    """Raised when the random source cannot supply a usable boundary."""
    pass
