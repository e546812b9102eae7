"""Tests for the SMTP transport and the quick sender (no network)."""

from unittest.mock import AsyncMock, MagicMock, patch

import aiosmtplib
import pytest

from mailforge.core import MailType, Message
from mailforge.mime import EmptyRecipientsError
from mailforge.smtp import (
    QuickSender,
    SendError,
    SMTPAuthenticationError,
    SMTPClient,
    SMTPConnectionError,
)


@pytest.fixture
def fake_smtp():
    """Patch aiosmtplib.SMTP with a connected mock server session."""
    session = MagicMock()
    session.is_connected = True
    session.esmtp_extensions = {"auth": "LOGIN PLAIN"}
    session.connect = AsyncMock()
    session.ehlo = AsyncMock()
    session.auth_login = AsyncMock()
    session.sendmail = AsyncMock(return_value=({}, "250 OK queued"))
    session.quit = AsyncMock()

    with patch("mailforge.smtp.client.aiosmtplib.SMTP", return_value=session) as factory:
        session.factory = factory
        yield session


@pytest.fixture
def keyring_password():
    with patch("mailforge.smtp.client.keyring.get_password", return_value="secret") as getter:
        yield getter


# =============================================================================
# Connecting
# =============================================================================

class TestConnect:
    @pytest.mark.asyncio
    async def test_starttls_login_with_keyring(self, sample_account, fake_smtp, keyring_password):
        client = SMTPClient(sample_account)

        assert await client.connect()
        assert client.is_connected

        fake_smtp.factory.assert_called_once_with(
            hostname="smtp.example.com",
            port=587,
            use_tls=False,
            start_tls=True,
            timeout=SMTPClient.TIMEOUT,
        )
        keyring_password.assert_called_once_with("mailforge:test", "test@example.com")
        fake_smtp.auth_login.assert_awaited_once_with("test@example.com", "secret")
        fake_smtp.ehlo.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ssl_mode(self, sample_account, fake_smtp, keyring_password):
        sample_account.smtp_security = "ssl"
        sample_account.smtp_port = 465

        await SMTPClient(sample_account).connect()

        kwargs = fake_smtp.factory.call_args.kwargs
        assert kwargs["use_tls"] is True
        assert kwargs["start_tls"] is False

    @pytest.mark.asyncio
    async def test_ehlo_before_auth_when_needed(self, sample_account, fake_smtp, keyring_password):
        fake_smtp.esmtp_extensions = {}
        await SMTPClient(sample_account).connect()
        fake_smtp.ehlo.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_explicit_password_skips_keyring(self, sample_account, fake_smtp, keyring_password):
        sample_account.username = "EXAMPLE\\test"

        await SMTPClient(sample_account, password="given").connect()

        keyring_password.assert_not_called()
        fake_smtp.auth_login.assert_awaited_once_with("EXAMPLE\\test", "given")

    @pytest.mark.asyncio
    async def test_missing_password(self, sample_account, fake_smtp):
        client = SMTPClient(sample_account)

        with patch("mailforge.smtp.client.keyring.get_password", return_value=None):
            with pytest.raises(SMTPAuthenticationError, match="No password found"):
                await client.connect()

        assert not client.is_connected
        fake_smtp.auth_login.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejected_login(self, sample_account, fake_smtp, keyring_password):
        fake_smtp.auth_login.side_effect = aiosmtplib.SMTPAuthenticationError(535, "bad credentials")
        client = SMTPClient(sample_account)

        with pytest.raises(SMTPAuthenticationError):
            await client.connect()
        assert not client.is_connected

    @pytest.mark.asyncio
    async def test_unreachable_server(self, sample_account, fake_smtp, keyring_password):
        fake_smtp.connect.side_effect = OSError("connection refused")

        with pytest.raises(SMTPConnectionError, match="smtp.example.com:587"):
            await SMTPClient(sample_account).connect()


# =============================================================================
# Sending
# =============================================================================

class TestSend:
    @pytest.mark.asyncio
    async def test_sends_assembled_payload(self, sample_account, fake_smtp, assembler):
        client = SMTPClient(sample_account, password="secret", assembler=assembler)
        await client.connect()

        message = Message(
            from_addr="test@example.com",
            to=("x@y.com", "z@y.com"),
            subject="Report",
            body="see attached",
        )
        payload = await client.send(message)

        fake_smtp.sendmail.assert_awaited_once_with(
            "test@example.com", ["x@y.com", "z@y.com"], payload
        )
        assert payload.startswith(b"From: test@example.com\r\nTo: x@y.com, z@y.com\r\n")

    @pytest.mark.asyncio
    async def test_requires_connection(self, sample_account, plain_message):
        with pytest.raises(SendError, match="Not connected"):
            await SMTPClient(sample_account).send(plain_message)

    @pytest.mark.asyncio
    async def test_invalid_message_is_not_sent(self, sample_account, fake_smtp):
        client = SMTPClient(sample_account, password="secret")
        await client.connect()

        with pytest.raises(EmptyRecipientsError):
            await client.send(Message(from_addr="a@b.com", to=(), body="x"))
        fake_smtp.sendmail.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transport_failure(self, sample_account, fake_smtp, plain_message):
        fake_smtp.sendmail.side_effect = aiosmtplib.SMTPServerDisconnected("gone")
        client = SMTPClient(sample_account, password="secret")
        await client.connect()

        with pytest.raises(SendError, match="gone"):
            await client.send(plain_message)

    @pytest.mark.asyncio
    async def test_disconnect_swallows_quit_errors(self, sample_account, fake_smtp):
        fake_smtp.quit.side_effect = aiosmtplib.SMTPServerDisconnected("already closed")
        client = SMTPClient(sample_account, password="secret")
        await client.connect()

        await client.disconnect()
        assert not client.is_connected


# =============================================================================
# Quick Sender
# =============================================================================

def _fake_client(send_result=b"payload"):
    client = MagicMock()
    client.connect = AsyncMock(return_value=True)
    client.send = AsyncMock(return_value=send_result)
    client.disconnect = AsyncMock()
    return client


class TestQuickSender:
    def test_builds_plain_text_message(self, sample_account):
        sender = QuickSender(sample_account, "alerts@example.com", ["ops@example.com"])
        message = sender.build("Disk full", "/var at 95%")

        assert message.kind is MailType.PLAIN_TEXT
        assert message.from_addr == "alerts@example.com"
        assert message.to == ("ops@example.com",)
        assert message.attachments == () and message.inline == ()

    @pytest.mark.asyncio
    async def test_send_round_trip(self, sample_account):
        client = _fake_client()
        factory = MagicMock(return_value=client)
        sender = QuickSender(
            sample_account, "alerts@example.com", ["ops@example.com"],
            password="pw", client_factory=factory,
        )

        assert await sender.send("Disk full", "/var at 95%") == b"payload"

        factory.assert_called_once_with(sample_account, password="pw")
        client.connect.assert_awaited_once()
        sent = client.send.await_args.args[0]
        assert sent.subject == "Disk full"
        assert sent.body == "/var at 95%"
        client.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_disconnects_after_failure(self, sample_account):
        client = _fake_client()
        client.send.side_effect = SendError("boom")
        sender = QuickSender(
            sample_account, "alerts@example.com", ["ops@example.com"],
            client_factory=MagicMock(return_value=client),
        )

        with pytest.raises(SendError):
            await sender.send("s", "b")
        client.disconnect.assert_awaited_once()
