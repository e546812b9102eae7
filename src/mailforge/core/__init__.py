# =============================================================================
# mailforge Core Module
# =============================================================================
# Domain models for mailforge. These are pure Python dataclasses with no
# external dependencies, so they can be imported anywhere without causing
# circular imports.
#
#   - Account: An SMTP sending account
#   - Message: An outgoing email message
#   - AttachmentPart / InlineResourcePart: Binary parts of a message
# =============================================================================

from mailforge.core.account import Account
from mailforge.core.message import (
    DEFAULT_CONTENT_TYPE,
    AttachmentPart,
    InlineResourcePart,
    MailType,
    Message,
    default_content_type,
)

__all__ = [
    "Account",
    "AttachmentPart",
    "DEFAULT_CONTENT_TYPE",
    "InlineResourcePart",
    "MailType",
    "Message",
    "default_content_type",
]
