# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the mailforge test suite.
# =============================================================================

import itertools
import tempfile
from pathlib import Path

import pytest

from mailforge.core import Account, AttachmentPart, InlineResourcePart, MailType, Message
from mailforge.mime import BoundaryGenerator, MessageAssembler


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def counting_random():
    """
    Deterministic random source: each call returns a fresh run of bytes
    (00 00 .. 00, then 01 01 .. 01, ...).
    """
    counter = itertools.count()

    def random_bytes(n: int) -> bytes:
        return bytes([next(counter) % 256]) * n

    return random_bytes


@pytest.fixture
def assembler(counting_random):
    """MessageAssembler with predictable boundaries and no disk access."""
    def no_disk(path: str) -> bytes:
        raise AssertionError(f"unexpected file read: {path}")

    return MessageAssembler(
        boundaries=BoundaryGenerator(counting_random),
        read_file=no_disk,
    )


@pytest.fixture
def sample_account():
    """Create a sample Account for testing."""
    return Account(
        name="test",
        email="test@example.com",
        smtp_host="smtp.example.com",
        smtp_port=587,
        smtp_security="starttls",
    )


@pytest.fixture
def plain_message():
    """A minimal plain-text message."""
    return Message(
        from_addr="a@b.com",
        to=("c@d.com",),
        subject="Hi",
        body="hello",
    )


@pytest.fixture
def sample_logo():
    """Bytes standing in for a small PNG."""
    return b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 2


@pytest.fixture
def newsletter_message(sample_logo):
    """HTML message with an inline image and an attachment."""
    return Message(
        from_addr="news@example.com",
        to=("reader@example.com", "other@example.org"),
        subject="Monthly update",
        body='<html><body><img src="cid:logo"><p>Hello!</p></body></html>',
        kind=MailType.HTML,
        attachments=(
            AttachmentPart("testfile.txt", body=b"This is the content of the file."),
        ),
        inline=(
            InlineResourcePart("logo", "logo.png", "image/png", sample_logo),
        ),
    )
