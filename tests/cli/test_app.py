"""Tests for the org2jira command line."""

from textwrap import dedent
from unittest.mock import Mock

import pytest

from org2jira.adapters.config import EnvironmentConfigProvider
from org2jira.adapters.outline import OrgDocument
from org2jira.cli import ExitCode, main
from org2jira.cli import app as app_module


ORG_TEXT = dedent("""\
* TODO Write importer
  :PROPERTIES:
  :COMPONENT: Backend
  :END:
  Parse the CSV export.
* STARTED Review importer
  :PROPERTIES:
  :JIRA_ID: PROJ-3
  :END:
  :LOGBOOK:
  CLOCK: [2024-03-04 Mon 09:00]--[2024-03-04 Mon 10:30] =>  1:30
  :END:
""")


@pytest.fixture(autouse=True)
def jira_env(monkeypatch, tmp_path):
    for key in EnvironmentConfigProvider.ENV_MAPPING:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("JIRA_URL", "https://jira.example.com")
    monkeypatch.setenv("JIRA_USER", "alice")
    monkeypatch.setenv("JIRA_API_TOKEN", "secret")
    monkeypatch.setenv("JIRA_PROJECT", "PROJ")


@pytest.fixture
def transport(monkeypatch):
    transport = Mock()
    monkeypatch.setattr(app_module, "JiraApiClient", lambda **kwargs: transport)
    return transport


@pytest.fixture
def org_file(tmp_path):
    path = tmp_path / "plan.org"
    path.write_text(ORG_TEXT)
    return path


class TestConfiguration:

    def test_missing_credentials(self, monkeypatch, transport, capsys):
        monkeypatch.delenv("JIRA_API_TOKEN")

        assert main(["sprints", "PROJ-1"]) == ExitCode.CONFIG_ERROR
        assert "JIRA_API_TOKEN" in capsys.readouterr().out

    def test_missing_org_file_option(self, transport):
        assert main(["refresh"]) == ExitCode.CONFIG_ERROR

    def test_org_file_not_found(self, transport, tmp_path):
        assert main(["-f", str(tmp_path / "nope.org"), "refresh"]) == ExitCode.NOT_FOUND


class TestCreate:

    def test_dry_run_does_not_write(self, transport, org_file):
        code = main(["-f", str(org_file), "create", "--heading", "Write importer"])

        assert code == ExitCode.SUCCESS
        transport.request.assert_not_called()
        assert org_file.read_text() == ORG_TEXT

    def test_execute_links_heading(self, transport, org_file):
        transport.request.return_value = {"key": "PROJ-5"}

        code = main([
            "-f", str(org_file), "--execute", "--no-confirm",
            "create", "--heading", "Write importer", "--issue-type", "Story",
        ])

        assert code == ExitCode.SUCCESS
        payload = transport.request.call_args[0][2]
        assert payload["fields"]["issuetype"] == {"name": "Story"}
        assert payload["fields"]["components"] == [{"name": "Backend"}]
        assert OrgDocument.from_file(org_file).find("Write importer").issue_key == "PROJ-5"

    def test_execute_reports_event(self, transport, org_file, capsys):
        transport.request.return_value = {"key": "PROJ-5"}

        main([
            "-f", str(org_file), "--execute", "--no-confirm",
            "create", "--heading", "Write importer",
        ])

        assert "IssueCreated PROJ-5" in capsys.readouterr().out

    def test_dry_run_reports_no_event(self, transport, org_file, capsys):
        main(["-f", str(org_file), "create", "--heading", "Write importer"])

        assert "IssueCreated" not in capsys.readouterr().out

    def test_already_linked(self, transport, org_file):
        code = main([
            "-f", str(org_file), "--execute", "--no-confirm",
            "create", "--heading", "Review importer",
        ])

        assert code == ExitCode.PRECONDITION_FAILED
        transport.request.assert_not_called()

    def test_unknown_heading(self, transport, org_file):
        code = main(["-f", str(org_file), "create", "--heading", "Nothing"])
        assert code == ExitCode.NOT_FOUND


class TestRefresh:

    def test_refresh_linked_headings(self, transport, org_file):
        transport.request.return_value = {
            "key": "PROJ-3",
            "fields": {
                "customfield_10002": 3,
                "timetracking": {"originalEstimateSeconds": 7200},
                "customfield_10007": None,
            },
        }

        code = main(["-f", str(org_file), "--execute", "refresh"])

        assert code == ExitCode.SUCCESS
        assert transport.request.call_count == 1
        heading = OrgDocument.from_file(org_file).find("Review importer")
        assert heading.get_property("StoryPoints") == "3"
        assert heading.get_property("Effort") == "2h"

    def test_dry_run_keeps_file(self, transport, org_file):
        transport.request.return_value = {
            "key": "PROJ-3",
            "fields": {"customfield_10002": 3, "customfield_10007": None},
        }

        assert main(["-f", str(org_file), "refresh"]) == ExitCode.SUCCESS
        assert org_file.read_text() == ORG_TEXT


class TestLogWork:

    def test_clocked_time_is_logged(self, transport, org_file):
        transport.request.return_value = {"id": "9"}

        code = main([
            "-f", str(org_file), "--execute",
            "log-work", "--heading", "Review importer",
        ])

        assert code == ExitCode.SUCCESS
        transport.request.assert_called_once_with(
            "POST", "issue/PROJ-3/worklog", {"timeSpentSeconds": 5400}
        )

    def test_explicit_minutes(self, transport, org_file):
        transport.request.return_value = {"id": "9"}

        main([
            "-f", str(org_file), "--execute",
            "log-work", "--heading", "Review importer", "--minutes", "20",
        ])

        assert transport.request.call_args[0][2] == {"timeSpentSeconds": 1200}

    def test_worklog_event_reported(self, transport, org_file, capsys):
        transport.request.return_value = {"id": "9"}

        main([
            "-f", str(org_file), "--execute",
            "log-work", "--heading", "Review importer",
        ])

        assert "WorklogAdded PROJ-3" in capsys.readouterr().out

    def test_unlinked_heading(self, transport, org_file):
        code = main([
            "-f", str(org_file), "--execute",
            "log-work", "--heading", "Write importer", "--minutes", "20",
        ])

        assert code == ExitCode.PRECONDITION_FAILED
        transport.request.assert_not_called()


class TestQueries:

    def test_sprints(self, transport, capsys):
        transport.request.return_value = {
            "fields": {
                "customfield_10007": [
                    "com.atlassian.greenhopper.service.sprint.Sprint@1[id=37,name=Sprint 5,state=ACTIVE]"
                ]
            }
        }

        assert main(["sprints", "PROJ-1"]) == ExitCode.SUCCESS

        out = capsys.readouterr().out
        assert "Sprint 5" in out
        assert "ACTIVE" in out

    def test_fields(self, transport, capsys):
        transport.request.return_value = {
            "projects": [{"key": "PROJ", "issuetypes": [{"name": "Story", "fields": {
                "customfield_10008": {"name": "Epic Link"},
            }}]}]
        }

        assert main(["fields"]) == ExitCode.SUCCESS
        assert "Epic Link (customfield_10008)" in capsys.readouterr().out

    def test_fields_unknown_project(self, transport):
        transport.request.return_value = {"projects": []}

        assert main(["-p", "NOPE", "fields"]) == ExitCode.NOT_FOUND
