"""Tests for the greenhopper sprint parser."""

import pytest

from org2jira.core.domain.sprint import (
    active_sprint,
    parse_segment,
    parse_sprint_string,
    parse_sprints,
)
from org2jira.core.exceptions import MalformedSprintSegmentError


GREENHOPPER_PREFIX = "com.atlassian.greenhopper.service.sprint.Sprint@6a1f2c"


class TestParseSprints:

    def test_single_segment(self):
        raw = f"{GREENHOPPER_PREFIX}[id=37,name=Sprint 5,state=ACTIVE]"

        sprints = parse_sprints([raw])

        assert sprints == [{"id": "37", "name": "Sprint 5", "state": "ACTIVE"}]

    def test_two_segments_in_source_order(self):
        raw = (
            f"{GREENHOPPER_PREFIX}[id=36,name=Sprint 4,state=CLOSED]"
            f"{GREENHOPPER_PREFIX}[id=37,name=Sprint 5,state=ACTIVE]"
        )

        sprints = parse_sprints([raw])

        assert [s["id"] for s in sprints] == ["36", "37"]
        assert sprints[0]["state"] == "CLOSED"

    def test_no_brackets(self):
        assert parse_sprints(["no sprint data here"]) == []

    def test_null_and_empty_field(self):
        assert parse_sprints(None) == []
        assert parse_sprints([]) == []

    def test_plain_string_value(self):
        assert parse_sprints("[id=1,state=FUTURE]") == [{"id": "1", "state": "FUTURE"}]

    def test_leading_bracket_is_equivalent(self):
        """Strings starting with '[' parse the same as tagged ones."""
        tagged = f"{GREENHOPPER_PREFIX}[id=37,name=Sprint 5]"
        bracketed = "[" + tagged
        bare = "[id=37,name=Sprint 5]"

        assert parse_sprints([tagged]) == parse_sprints([bracketed]) == parse_sprints([bare])

    def test_each_list_entry_is_parsed(self):
        sprints = parse_sprints([
            f"{GREENHOPPER_PREFIX}[id=36,state=CLOSED]",
            f"{GREENHOPPER_PREFIX}[id=37,state=ACTIVE]",
        ])
        assert [s["id"] for s in sprints] == ["36", "37"]

    def test_sprint_objects(self):
        """Newer JIRA versions return sprints as JSON objects."""
        sprints = parse_sprints([
            {"id": 37, "name": "Sprint 5", "state": "active", "boardId": 4},
        ])

        assert sprints == [{"id": "37", "name": "Sprint 5", "state": "active", "boardId": "4"}]
        assert active_sprint(sprints)["id"] == "37"

    def test_mixed_strings_and_objects_keep_order(self):
        sprints = parse_sprints([
            "[id=36,state=CLOSED]",
            {"id": 37, "state": "ACTIVE"},
        ])
        assert [s["id"] for s in sprints] == ["36", "37"]

    @pytest.mark.parametrize("entry", [None, 37, ["id=1"]])
    def test_other_entries_are_errors(self, entry):
        with pytest.raises(MalformedSprintSegmentError):
            parse_sprints([entry, "[id=2,state=ACTIVE]"])

    def test_full_greenhopper_record(self):
        raw = (
            f"{GREENHOPPER_PREFIX}[id=37,rapidViewId=4,state=ACTIVE,name=Sprint 5,"
            "goal=,startDate=2024-03-04T09:00:00.000+01:00,"
            "endDate=2024-03-18T09:00:00.000+01:00,completeDate=<null>,sequence=37]"
        )

        sprint = parse_sprints([raw])[0]

        assert sprint["rapidViewId"] == "4"
        assert sprint["goal"] == ""
        assert sprint["startDate"] == "2024-03-04T09:00:00.000+01:00"
        assert sprint["completeDate"] == "<null>"


class TestParseSegment:

    def test_value_split_at_first_equals_only(self):
        assert parse_segment("id=1,goal=a=b") == {"id": "1", "goal": "a=b"}

    def test_token_without_equals_is_error(self):
        with pytest.raises(MalformedSprintSegmentError) as exc_info:
            parse_segment("id=1,garbage")

        assert exc_info.value.token == "garbage"
        assert exc_info.value.segment == "id=1,garbage"

    def test_malformed_segment_propagates(self):
        with pytest.raises(MalformedSprintSegmentError):
            parse_sprint_string("[id=1][oops]")

    def test_empty_key_is_error(self):
        with pytest.raises(MalformedSprintSegmentError):
            parse_segment("=value")


class TestActiveSprint:

    def test_finds_active(self):
        sprints = [
            {"id": "1", "state": "CLOSED"},
            {"id": "2", "state": "ACTIVE"},
        ]
        assert active_sprint(sprints)["id"] == "2"

    def test_none_when_no_active(self):
        assert active_sprint([{"id": "1", "state": "CLOSED"}]) is None
        assert active_sprint([]) is None
