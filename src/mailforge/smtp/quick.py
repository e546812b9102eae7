# =============================================================================
# Quick Sender
# =============================================================================
# One-call sending of short plain-text notifications to a fixed recipient
# list. Each send opens its own SMTP session and closes it afterwards.
# =============================================================================

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from mailforge.core import MailType, Message
from mailforge.smtp.client import SMTPClient

if TYPE_CHECKING:
    from mailforge.core import Account

logger = logging.getLogger(__name__)


class QuickSender:
    """
    Sends plain-text messages from a fixed sender to fixed recipients.

    Usage:
        >>> sender = QuickSender(account, "alerts@example.com", ["ops@example.com"])
        >>> await sender.send("Disk almost full", "/var is at 95%")
    """

    def __init__(
        self,
        account: "Account",
        from_addr: str,
        to: Sequence[str],
        password: str | None = None,
        client_factory: Callable[..., SMTPClient] = SMTPClient,
    ) -> None:
        self.account = account
        self.from_addr = from_addr
        self.to = tuple(to)
        self._password = password
        self._client_factory = client_factory

    def build(self, subject: str, body: str) -> Message:
        """Build the plain-text message that send() would deliver."""
        return Message(
            from_addr=self.from_addr,
            to=self.to,
            subject=subject,
            body=body,
            kind=MailType.PLAIN_TEXT,
        )

    async def send(self, subject: str, body: str) -> bytes:
        """
        Send a plain-text message in a fresh SMTP session.

        Returns:
            The payload that was sent.

        Raises:
            MailError: If the message is invalid.
            SMTPError: If connecting or sending fails.
        """
        message = self.build(subject, body)
        client = self._client_factory(self.account, password=self._password)

        await client.connect()
        try:
            return await client.send(message)
        finally:
            await client.disconnect()
