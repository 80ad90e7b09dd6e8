"""Configuration via pydantic-settings with .env support."""

from __future__ import annotations

import tempfile
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from gmailfilters.core.exceptions import ConfigurationError


class GmailFiltersSettings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="GMAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OAuth credentials
    credential_file: Path | None = None
    token_file: Path = Path(tempfile.gettempdir()) / "token.json"

    # Local declarations
    filters_file: Path | None = None
    labels_file: Path | None = None

    # Gmail API settings
    user_id: str = "me"

    # Logging
    log_level: str = "INFO"

    def require_paths(self) -> None:
        """Check every path needed before contacting Gmail.

        Raises:
            ConfigurationError: If a required path is unset or the credential
                file does not exist.
        """
        if self.credential_file is None:
            raise ConfigurationError("the Gmail credential file cannot be empty")
        if not self.credential_file.exists():
            raise ConfigurationError(
                f"credential file {self.credential_file} does not exist"
            )
        if self.filters_file is None:
            raise ConfigurationError(
                "must set filters file location with --filters-file"
            )
        if self.labels_file is None:
            raise ConfigurationError("must set labels file location with --labels-file")
