# =============================================================================
# Message Assembler
# =============================================================================
# Turns a Message into the bytes of a MIME message, ready to hand to an SMTP
# session as the DATA payload.
#
# Structure depends on what the message carries:
#
#   SIMPLE          text body only, no multipart wrapper
#   MIXED           multipart/mixed
#                     ├── text body
#                     └── attachments...
#   MIXED_RELATED   multipart/mixed
#                     ├── multipart/related
#                     │     ├── text body
#                     │     └── inline resources...
#                     └── attachments...
#
# The body is always quoted-printable; every other part is base64.
# =============================================================================

import logging
from collections.abc import Callable
from enum import Enum, auto
from pathlib import Path

from mailforge.core import (
    AttachmentPart,
    InlineResourcePart,
    Message,
    default_content_type,
)
from mailforge.mime.address import is_valid_address
from mailforge.mime.boundary import BoundaryGenerator
from mailforge.mime.encoding import encode_binary, encode_quoted_printable
from mailforge.mime.errors import (
    AttachmentReadError,
    EmptyBodyError,
    EmptyRecipientsError,
    InvalidAddressError,
    RandomnessError,
)
from mailforge.mime.headers import encode_header_lines, format_headers, quote_parameter

logger = logging.getLogger(__name__)

BODY_CHARSET = "UTF-8"


class Structure(Enum):
    """Part layout of an assembled message."""
    SIMPLE = auto()         # Body only
    MIXED = auto()          # Body + attachments
    MIXED_RELATED = auto()  # Body + inline resources (+ attachments)


def structure_of(message: Message) -> Structure:
    """Decide the part layout for `message`."""
    if message.has_inline:
        return Structure.MIXED_RELATED
    if message.has_attachments:
        return Structure.MIXED
    return Structure.SIMPLE


def validate(message: Message) -> None:
    """
    Check the preconditions for assembly, in order.

    Raises:
        EmptyRecipientsError: If there are no recipients.
        EmptyBodyError: If the body is empty.
        InvalidAddressError: For the first malformed From/To address.
    """
    if not message.to:
        raise EmptyRecipientsError()
    if not message.body:
        raise EmptyBodyError()
    if not is_valid_address(message.from_addr):
        raise InvalidAddressError(message.from_addr, "From")
    for address in message.to:
        if not is_valid_address(address):
            raise InvalidAddressError(address, "To")


def _read_file(path: str) -> bytes:
    return Path(path).read_bytes()


class MessageAssembler:
    """
    Builds MIME bytes from Message objects.

    The assembler holds no per-message state, so one instance can be shared
    between threads.

    Usage:
        >>> assembler = MessageAssembler()
        >>> payload = assembler.assemble(message)

    Attributes:
        boundaries: Source of multipart boundary tokens.
        read_file: Reads attachment content for file-reference attachments.
    """

    def __init__(
        self,
        boundaries: BoundaryGenerator | None = None,
        read_file: Callable[[str], bytes] | None = None,
    ) -> None:
        self.boundaries = boundaries or BoundaryGenerator()
        self.read_file = read_file or _read_file

    def assemble(self, message: Message) -> bytes:
        """
        Assemble `message` into MIME bytes.

        Args:
            message: The message to render. It is not modified.

        Returns:
            The complete message, CRLF line endings throughout.

        Raises:
            MailError: Any validation, encoding, randomness or attachment
                       read failure. No partial output is returned.
        """
        validate(message)

        structure = structure_of(message)
        logger.debug(
            f"Assembling {structure.name} message: "
            f"{len(message.attachments)} attachments, {len(message.inline)} inline"
        )

        out = bytearray(format_headers(message))

        if structure is Structure.SIMPLE:
            self._write_body(out, message)
            return bytes(out)

        outer = self.boundaries.new_boundary()
        self._open_container(out, "multipart/mixed", outer)

        if structure is Structure.MIXED_RELATED:
            related = self.boundaries.new_boundary()
            if related == outer:
                raise RandomnessError("random source produced a repeated boundary")

            self._open_container(out, "multipart/related", related)
            self._write_body(out, message)
            for resource in message.inline:
                self._write_inline(out, related, resource)
            out += f"\r\n--{related}--\r\n".encode()
        else:
            self._write_body(out, message)

        for attachment in message.attachments:
            self._write_attachment(out, outer, attachment)

        out += f"\r\n--{outer}--\r\n".encode()
        return bytes(out)

    # -------------------------------------------------------------------------
    # Part Writers
    # -------------------------------------------------------------------------

    @staticmethod
    def _open_container(out: bytearray, content_type: str, boundary: str) -> None:
        out += f"Content-Type: {content_type}; boundary={boundary}\r\n\r\n".encode()
        out += f"--{boundary}\r\n".encode()

    @staticmethod
    def _write_body(out: bytearray, message: Message) -> None:
        out += (
            f"Content-Type: {message.kind.mime_type}; charset={BODY_CHARSET}\r\n"
            "Content-Transfer-Encoding: quoted-printable\r\n"
            "\r\n"
        ).encode()
        out += encode_quoted_printable(message.body)

    @staticmethod
    def _write_inline(out: bytearray, boundary: str, resource: InlineResourcePart) -> None:
        content_type = default_content_type(resource.content_type)
        name = quote_parameter(resource.name)
        out += f"\r\n--{boundary}\r\n".encode()
        out += encode_header_lines([
            f"Content-Type: {content_type}; name={name}",
            "Content-Transfer-Encoding: base64",
            f"Content-ID: <{resource.content_id}>",
            f"Content-Disposition: inline; filename={name}",
            "",
        ])
        out += encode_binary(resource.body)

    def _write_attachment(self, out: bytearray, boundary: str, attachment: AttachmentPart) -> None:
        content_type = default_content_type(attachment.content_type)
        name = quote_parameter(attachment.name)
        content = self._attachment_content(attachment)
        out += f"\r\n--{boundary}\r\n".encode()
        out += encode_header_lines([
            f"Content-Type: {content_type}; name={name}",
            "Content-Transfer-Encoding: base64",
            f"Content-Disposition: attachment; filename={name}",
            "",
        ])
        out += encode_binary(content)

    def _attachment_content(self, attachment: AttachmentPart) -> bytes:
        """Return the attachment's bytes, reading the file for file references."""
        if not attachment.is_file_reference:
            return attachment.body

        logger.debug(f"Reading attachment from {attachment.name}")
        try:
            return self.read_file(attachment.name)
        except OSError as e:
            raise AttachmentReadError(attachment.name, str(e)) from e


def assemble(message: Message) -> bytes:
    """Assemble `message` with a default MessageAssembler."""
    return MessageAssembler().assemble(message)
