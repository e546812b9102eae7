# =============================================================================
# Account Model
# =============================================================================
# Represents a sending account: which SMTP server to talk to and which
# identity to log in with.
#
# IMPORTANT: Passwords are NOT stored here. They are retrieved from the system
# keyring at runtime using the 'keyring' library. This keeps credentials secure
# and out of config files.
# =============================================================================

from dataclasses import dataclass

# Accepted values for Account.smtp_security
SMTP_SECURITY_MODES = ("ssl", "starttls", "none")


@dataclass
class Account:
    """
    Represents an SMTP sending account.

    Attributes:
        name: A unique identifier for this account (e.g., "personal", "work").
              Used as the key in config files and for keyring lookups.
        email: The email address associated with this account.
        username: Login name for SMTP authentication. Defaults to the email
                  address (Exchange setups often use DOMAIN\\user instead).

        smtp_host: Hostname of the SMTP server (e.g., "smtp.office365.com").
        smtp_port: Port for SMTP connection. Standard ports:
                   - 465 for SMTP with SSL (implicit TLS)
                   - 587 for SMTP with STARTTLS (recommended)
                   - 25 for plain relay on trusted networks
        smtp_security: Connection security method ("ssl", "starttls" or "none").

        enabled: Whether this account may be used for sending.

    Example:
        >>> account = Account(
        ...     name="work",
        ...     email="user@example.com",
        ...     smtp_host="smtp.example.com",
        ...     smtp_port=587,
        ... )
    """

    # Account identification
    name: str                           # Unique account identifier
    email: str                          # Email address
    username: str = ""                  # SMTP login name

    # SMTP configuration
    smtp_host: str = ""
    smtp_port: int = 587                # Default to STARTTLS port
    smtp_security: str = "starttls"     # "ssl", "starttls" or "none"

    enabled: bool = True

    def __post_init__(self) -> None:
        """Sets username to email if not provided."""
        if not self.username:
            self.username = self.email

    @property
    def keyring_service(self) -> str:
        """
        Returns the service name used for keyring password storage.

        Passwords can be managed via the keyring CLI:
            keyring set mailforge:work user@example.com
        """
        return f"mailforge:{self.name}"

    def __str__(self) -> str:
        """Human-readable representation showing account name and email."""
        return f"{self.name} <{self.email}>"

    def __repr__(self) -> str:
        return (
            f"Account(name={self.name!r}, email={self.email!r}, "
            f"smtp={self.smtp_host}:{self.smtp_port}/{self.smtp_security})"
        )
