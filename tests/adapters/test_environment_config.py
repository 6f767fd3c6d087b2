"""Tests for the environment configuration provider."""

import pytest

from org2jira.adapters.config import EnvironmentConfigProvider
from org2jira.core.exceptions import ConfigError


@pytest.fixture
def environ():
    return {
        "JIRA_URL": "https://jira.example.com",
        "JIRA_USER": "alice",
        "JIRA_API_TOKEN": "secret",
        "JIRA_PROJECT": "PROJ",
    }


@pytest.fixture
def no_env_file(tmp_path):
    return tmp_path / "missing.env"


class TestEnvironmentConfigProvider:

    def test_load_from_environment(self, environ, no_env_file):
        provider = EnvironmentConfigProvider(env_file=no_env_file, environ=environ)

        config = provider.load()

        assert config.tracker.url == "https://jira.example.com"
        assert config.tracker.project_key == "PROJ"
        assert config.tracker.issue_type == "Task"
        assert config.dry_run is True
        assert provider.validate() == []

    def test_field_ids_default(self, environ, no_env_file):
        fields = EnvironmentConfigProvider(env_file=no_env_file, environ=environ).load().tracker.fields

        assert fields.story_points == "customfield_10002"
        assert fields.epic_link == "customfield_10008"
        assert fields.sprint == "customfield_10007"

    def test_field_ids_from_environment(self, environ, no_env_file):
        environ["JIRA_STORY_POINTS_FIELD"] = "customfield_10016"
        environ["JIRA_SPRINT_FIELD"] = "customfield_10020"

        fields = EnvironmentConfigProvider(env_file=no_env_file, environ=environ).load().tracker.fields

        assert fields.story_points == "customfield_10016"
        assert fields.sprint == "customfield_10020"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# Jira\n"
            "JIRA_URL=https://file.example.com\n"
            'JIRA_USER="bob"\n'
            "JIRA_API_TOKEN='token'\n"
            "JIRA_EPIC_LINK_FIELD=customfield_10014\n"
        )

        provider = EnvironmentConfigProvider(env_file=env_file, environ={})
        config = provider.load()

        assert config.tracker.url == "https://file.example.com"
        assert config.tracker.fields.epic_link == "customfield_10014"
        assert provider.get_credentials() == ("bob", "token")

    def test_environment_overrides_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("JIRA_URL=https://file.example.com\n")

        provider = EnvironmentConfigProvider(
            env_file=env_file, environ={"JIRA_URL": "https://env.example.com"}
        )

        assert provider.get("jira_url") == "https://env.example.com"

    def test_cli_overrides(self, environ, no_env_file):
        provider = EnvironmentConfigProvider(
            env_file=no_env_file,
            environ=environ,
            cli_overrides={"project": "OPS", "execute": True, "file": "plan.org", "verbose": None},
        )

        config = provider.load()

        assert config.tracker.project_key == "OPS"
        assert config.dry_run is False
        assert config.org_path == "plan.org"
        assert config.verbose is False

    def test_validate_missing(self, no_env_file):
        errors = EnvironmentConfigProvider(env_file=no_env_file, environ={}).validate()

        assert len(errors) == 3
        assert any("JIRA_URL" in e for e in errors)

    def test_credentials(self, environ, no_env_file):
        provider = EnvironmentConfigProvider(env_file=no_env_file, environ=environ)
        assert provider.get_credentials() == ("alice", "secret")

    def test_missing_credentials(self, no_env_file):
        provider = EnvironmentConfigProvider(env_file=no_env_file, environ={"JIRA_USER": "alice"})

        with pytest.raises(ConfigError, match="JIRA_API_TOKEN"):
            provider.get_credentials()

    def test_boolean_coercion(self, environ, no_env_file):
        environ["ORG2JIRA_VERBOSE"] = "true"
        config = EnvironmentConfigProvider(env_file=no_env_file, environ=environ).load()
        assert config.verbose is True

    @pytest.mark.parametrize("raw,expected", [
        ("1", True),
        ("0", False),
        ("yes", True),
        ("No", False),
    ])
    def test_numeric_and_word_booleans(self, environ, no_env_file, raw, expected):
        environ["ORG2JIRA_VERBOSE"] = raw
        config = EnvironmentConfigProvider(env_file=no_env_file, environ=environ).load()
        assert config.verbose is expected
