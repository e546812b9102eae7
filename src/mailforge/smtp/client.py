# =============================================================================
# SMTP Client
# =============================================================================
# Provides async SMTP client for sending assembled messages.
#
# Key responsibilities:
#   - Connection management with SSL/STARTTLS
#   - AUTH LOGIN with credentials from the system keyring
#   - Handing the assembled MIME bytes to the server
#
# Message building itself lives in mailforge.mime; this module treats the
# assembled bytes as an opaque payload.
#
# Uses aiosmtplib for async operations.
# =============================================================================

import logging
from typing import TYPE_CHECKING

import aiosmtplib
import keyring

from mailforge.mime import MessageAssembler

if TYPE_CHECKING:
    from mailforge.core import Account, Message

logger = logging.getLogger(__name__)


class SMTPClient:
    """
    Async SMTP client for sending emails.

    Usage:
        >>> client = SMTPClient(account)
        >>> await client.connect()
        >>> await client.send(message)
        >>> await client.disconnect()

    Attributes:
        account: Account configuration with SMTP server details.
        assembler: Builds the MIME payload for each message.
    """

    # Timeout for SMTP operations (seconds)
    TIMEOUT = 30

    def __init__(
        self,
        account: "Account",
        password: str | None = None,
        assembler: MessageAssembler | None = None,
    ) -> None:
        """
        Initialize the SMTP client.

        Args:
            account: Account configuration with SMTP server details.
            password: Password to log in with. If omitted, it is looked up
                      in the system keyring when connecting.
            assembler: Assembler used to build payloads.
        """
        self.account = account
        self.assembler = assembler or MessageAssembler()
        self._password = password
        self._client: aiosmtplib.SMTP | None = None

    @property
    def is_connected(self) -> bool:
        """Check if client is connected."""
        return self._client is not None and self._client.is_connected

    async def connect(self) -> bool:
        """
        Connect to the SMTP server and log in.

        Returns:
            True if connection succeeded.

        Raises:
            SMTPConnectionError: If unable to connect.
            SMTPAuthenticationError: If authentication fails.
        """
        logger.info(f"Connecting to SMTP {self.account.smtp_host}:{self.account.smtp_port}")

        try:
            use_tls = self.account.smtp_security == "ssl"
            start_tls = self.account.smtp_security == "starttls"

            self._client = aiosmtplib.SMTP(
                hostname=self.account.smtp_host,
                port=self.account.smtp_port,
                use_tls=use_tls,
                start_tls=start_tls,
                timeout=self.TIMEOUT,
            )

            await self._client.connect()
            logger.debug("SMTP connection established")

            await self._authenticate()

            logger.info(f"Successfully connected to SMTP {self.account.smtp_host}")
            return True

        except SMTPAuthenticationError:
            self._drop()
            raise
        except aiosmtplib.SMTPAuthenticationError as e:
            self._drop()
            raise SMTPAuthenticationError(
                f"SMTP authentication failed for {self.account.username}: {e}"
            ) from e
        except Exception as e:
            self._drop()
            raise SMTPConnectionError(
                f"Failed to connect to SMTP {self.account.smtp_host}:{self.account.smtp_port}: {e}"
            ) from e

    async def _authenticate(self) -> None:
        """
        Authenticate with the AUTH LOGIN mechanism.

        Raises:
            SMTPAuthenticationError: If login fails or password not found.
        """
        password = self._password
        if password is None:
            password = keyring.get_password(
                self.account.keyring_service,
                self.account.username,
            )

        if not password:
            raise SMTPAuthenticationError(
                f"No password found in keyring for {self.account.username}. "
                f"Set it with: keyring set {self.account.keyring_service} {self.account.username}"
            )

        # AUTH is only advertised in the EHLO response
        if not self._client.esmtp_extensions:
            await self._client.ehlo()

        logger.debug(f"Authenticating as {self.account.username}")

        try:
            await self._client.auth_login(self.account.username, password)
            logger.debug("SMTP authentication successful")
        except aiosmtplib.SMTPAuthenticationError as e:
            raise SMTPAuthenticationError(
                f"SMTP authentication failed for {self.account.username}: {e}"
            ) from e

    def _drop(self) -> None:
        """Close a half-open connection after a failed connect."""
        if self._client is not None and self._client.is_connected:
            self._client.close()
        self._client = None

    async def disconnect(self) -> None:
        """Disconnect from the SMTP server."""
        if self._client and self._client.is_connected:
            try:
                logger.debug("Disconnecting from SMTP")
                await self._client.quit()
            except Exception as e:
                logger.warning(f"Error during SMTP disconnect: {e}")
            finally:
                self._client = None

    async def send(self, message: "Message") -> bytes:
        """
        Assemble and send a message.

        Args:
            message: The message to send. Envelope sender and recipients
                     are taken from its From and To fields.

        Returns:
            The payload that was sent.

        Raises:
            MailError: If the message cannot be assembled.
            SendError: If sending fails.
        """
        if not self.is_connected:
            raise SendError("Not connected to SMTP server")

        payload = self.assembler.assemble(message)

        try:
            logger.info(f"Sending email to {', '.join(message.to)}")
            errors, response = await self._client.sendmail(
                message.from_addr, list(message.to), payload
            )
        except Exception as e:
            logger.error(f"Failed to send email: {e}")
            raise SendError(f"Failed to send email: {e}") from e

        if errors:
            # Some recipients were refused; the server accepted the rest
            logger.warning(f"Recipients refused: {', '.join(errors)}")
        logger.info(f"Email sent successfully: {response}")

        return payload


class SMTPError(Exception):
    """Base exception for SMTP operations."""
    pass


class SMTPConnectionError(SMTPError):
    """Raised when unable to connect to SMTP server."""
    pass


class SMTPAuthenticationError(SMTPError):
    """Raised when SMTP authentication fails."""
    pass


class SendError(SMTPError):
    """Raised when email sending fails."""
    pass
