"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- .env files
- Environment variables (JIRA_URL, JIRA_USER, JIRA_API_TOKEN, ...)
- Command line argument overrides

Later sources win over earlier ones.
"""

import os
from pathlib import Path
from typing import Any, Optional

from ...core.exceptions import ConfigError
from ...core.ports.config_provider import (
    AppConfig,
    ConfigProviderPort,
    FieldConfig,
    TrackerConfig,
)
from ...core.ports.transport import CredentialProviderPort


class EnvironmentConfigProvider(ConfigProviderPort, CredentialProviderPort):
    """
    Configuration and credential provider backed by environment variables
    and .env files.
    """

    ENV_MAPPING = {
        "JIRA_URL": "jira_url",
        "JIRA_USER": "jira_user",
        "JIRA_API_TOKEN": "jira_api_token",
        "JIRA_PROJECT": "project_key",
        "JIRA_ISSUE_TYPE": "issue_type",
        "JIRA_STORY_POINTS_FIELD": "story_points_field",
        "JIRA_EPIC_LINK_FIELD": "epic_link_field",
        "JIRA_SPRINT_FIELD": "sprint_field",
        "ORG2JIRA_VERBOSE": "verbose",
    }

    CLI_MAPPING = {
        "file": "org_path",
        "project": "project_key",
        "issue_type": "issue_type",
        "jira_url": "jira_url",
        "execute": "execute",
        "verbose": "verbose",
    }

    def __init__(
        self,
        env_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
        environ: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (auto-detected if not specified)
            cli_overrides: Command line argument overrides
            environ: Environment to read (defaults to os.environ)
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._cli_overrides = cli_overrides or {}
        self._environ = os.environ if environ is None else environ

        self._load_env_file()
        self._load_environment()
        self._apply_cli_overrides()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        defaults = FieldConfig()
        fields = FieldConfig(
            story_points=self.get("story_points_field", defaults.story_points),
            epic_link=self.get("epic_link_field", defaults.epic_link),
            sprint=self.get("sprint_field", defaults.sprint),
        )

        tracker = TrackerConfig(
            url=self.get("jira_url", ""),
            project_key=self.get("project_key"),
            issue_type=self.get("issue_type", "Task"),
            fields=fields,
        )

        return AppConfig(
            tracker=tracker,
            dry_run=not self.get("execute", False),
            verbose=bool(self.get("verbose", False)),
            org_path=self.get("org_path"),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        key = key.lower().replace("-", "_")
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value

    def validate(self) -> list[str]:
        """Validate configuration."""
        errors = []

        if not self.get("jira_url"):
            errors.append("Missing JIRA_URL - set in environment or .env file")
        if not self.get("jira_user"):
            errors.append("Missing JIRA_USER - set in environment or .env file")
        if not self.get("jira_api_token"):
            errors.append("Missing JIRA_API_TOKEN - set in environment or .env file")

        return errors

    # -------------------------------------------------------------------------
    # CredentialProviderPort Implementation
    # -------------------------------------------------------------------------

    def get_credentials(self) -> tuple[str, str]:
        user = self.get("jira_user")
        token = self.get("jira_api_token")
        missing = [
            name for name, value in (("JIRA_USER", user), ("JIRA_API_TOKEN", token))
            if not value
        ]
        if missing:
            raise ConfigError([f"Missing {name}" for name in missing])
        return user, token

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text().splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")

            config_key = self.ENV_MAPPING.get(key.upper(), key.lower())
            self._values[config_key] = self._coerce(value)

    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file:
            return self._env_file if self._env_file.exists() else None

        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, config_key in self.ENV_MAPPING.items():
            raw_value = self._environ.get(env_key)
            if raw_value is not None:
                self._values[config_key] = self._coerce(raw_value)

    def _apply_cli_overrides(self) -> None:
        """Apply CLI argument overrides."""
        for cli_key, config_key in self.CLI_MAPPING.items():
            if self._cli_overrides.get(cli_key) is not None:
                self._values[config_key] = self._cli_overrides[cli_key]

    @staticmethod
    def _coerce(raw_value: str) -> Any:
        """Convert boolean-ish values."""
        if raw_value.lower() in ("true", "1", "yes"):
            return True
        if raw_value.lower() in ("false", "0", "no"):
            return False
        return raw_value
