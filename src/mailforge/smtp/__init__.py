# =============================================================================
# SMTP Module
# =============================================================================
# Handles sending assembled messages via SMTP (Simple Mail Transfer Protocol).
#
# Features:
#   - Connection with SSL/STARTTLS
#   - AUTH LOGIN using keyring-stored passwords
#   - QuickSender for one-line plain-text notifications
# =============================================================================

from mailforge.smtp.client import (
    SMTPClient,
    SMTPError,
    SMTPConnectionError,
    SMTPAuthenticationError,
    SendError,
)
from mailforge.smtp.quick import QuickSender

__all__ = [
    "SMTPClient",
    "QuickSender",
    "SMTPError",
    "SMTPConnectionError",
    "SMTPAuthenticationError",
    "SendError",
]
