# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating mailforge configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/mailforge/  (default: ~/.config/mailforge/)
#
# Files:
#   - config.toml: Sending accounts and compose defaults
#
# Example config.toml:
#
#   [general]
#   default_account = "work"
#
#   [compose]
#   mail_type = "html"
#   guess_content_types = true
#
#   [accounts.work]
#   email = "me@example.com"
#   username = "EXAMPLE\\me"
#   smtp_host = "mail.example.com"
#   smtp_port = 587
#   smtp_security = "starttls"
#
# Passwords never go in this file; see Account.keyring_service.
# =============================================================================

import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)

from mailforge.core import Account, MailType
from mailforge.core.account import SMTP_SECURITY_MODES


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "mailforge"


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for mailforge.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/mailforge/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


# =============================================================================
# Configuration Data Structures
# =============================================================================

# Names accepted for compose.mail_type
MAIL_TYPES = {
    "plain": MailType.PLAIN_TEXT,
    "html": MailType.HTML,
}


@dataclass
class ComposeConfig:
    """
    Defaults applied when composing messages from the command line.

    Attributes:
        mail_type: Body format when --html is not given ("plain" or "html").
        guess_content_types: Guess attachment content types from file
                             extensions. When False, attachments are sent
                             as application/octet-stream.
    """
    mail_type: str = "plain"
    guess_content_types: bool = True

    @property
    def kind(self) -> MailType:
        """The configured body format as a MailType."""
        return MAIL_TYPES[self.mail_type]


@dataclass
class Config:
    """
    Main configuration container for mailforge.

    Attributes:
        default_account: Name of the account used when none is given.
        accounts: Dictionary of configured sending accounts, keyed by name.
        compose: Compose defaults.

    Usage:
        >>> config = Config.load()
        >>> config.get_account().smtp_host
        'smtp.example.com'
    """
    default_account: str = ""
    accounts: dict[str, Account] = field(default_factory=dict)
    compose: ComposeConfig = field(default_factory=ComposeConfig)

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from a config file.

        If the file doesn't exist, returns default configuration.

        Args:
            path: Config file to read. Defaults to the XDG location.

        Returns:
            Loaded Config object.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e

        return cls._from_dict(data)

    def save(self, path: Path | None = None) -> None:
        """
        Save configuration to a config file.

        Creates the parent directory if it doesn't exist.
        """
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

    def get_account(self, name: str | None = None) -> Account:
        """
        Look up a sending account.

        Without a name, uses default_account, or the only configured
        account if there is exactly one.

        Raises:
            ConfigError: If no matching enabled account exists.
        """
        name = name or self.default_account
        if not name:
            if len(self.accounts) != 1:
                raise ConfigError(
                    "No account specified and no default_account configured"
                )
            name = next(iter(self.accounts))

        account = self.accounts.get(name)
        if account is None:
            raise ConfigError(f"Unknown account: {name}")
        if not account.enabled:
            raise ConfigError(f"Account is disabled: {name}")
        return account

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).

        Raises:
            ConfigError: If a value is out of range.
        """
        config = cls()

        general = data.get("general", {})
        config.default_account = general.get("default_account", "")

        compose = data.get("compose", {})
        config.compose = ComposeConfig(
            mail_type=compose.get("mail_type", "plain"),
            guess_content_types=compose.get("guess_content_types", True),
        )
        if config.compose.mail_type not in MAIL_TYPES:
            raise ConfigError(
                f"Invalid compose.mail_type {config.compose.mail_type!r}, "
                f"expected one of: {', '.join(MAIL_TYPES)}"
            )

        # Each key under [accounts] is an account name
        accounts_data = data.get("accounts", {})
        for name, acct_data in accounts_data.items():
            account = Account(
                name=name,
                email=acct_data.get("email", ""),
                username=acct_data.get("username", ""),
                smtp_host=acct_data.get("smtp_host", ""),
                smtp_port=acct_data.get("smtp_port", 587),
                smtp_security=acct_data.get("smtp_security", "starttls"),
                enabled=acct_data.get("enabled", True),
            )
            if account.smtp_security not in SMTP_SECURITY_MODES:
                raise ConfigError(
                    f"Invalid smtp_security {account.smtp_security!r} for account {name}, "
                    f"expected one of: {', '.join(SMTP_SECURITY_MODES)}"
                )
            config.accounts[name] = account

        if config.default_account and config.default_account not in config.accounts:
            raise ConfigError(f"default_account {config.default_account!r} is not configured")

        return config

    def _to_dict(self) -> dict[str, Any]:
        """
        Convert Config to a dictionary for TOML serialization.
        """
        data: dict[str, Any] = {}

        data["general"] = {
            "default_account": self.default_account,
        }

        data["compose"] = {
            "mail_type": self.compose.mail_type,
            "guess_content_types": self.compose.guess_content_types,
        }

        data["accounts"] = {}
        for name, account in self.accounts.items():
            data["accounts"][name] = {
                "email": account.email,
                "username": account.username,
                "smtp_host": account.smtp_host,
                "smtp_port": account.smtp_port,
                "smtp_security": account.smtp_security,
                "enabled": account.enabled,
            }

        return data


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths() -> None:
    """Print the config locations, for users wondering where things live."""
    print(f"Config:       {get_xdg_config_home()}")
    print(f"Config file:  {Config.config_file_path()}")
