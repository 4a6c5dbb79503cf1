"""
Tests for event listing, search, editing and event-type lookups.
"""

from datetime import date, datetime, timezone

import pytest

from conftest import make_event_row
from teamcal.domain import Event
from teamcal.services import EventService, EventValidationError, search_events


@pytest.fixture
def service(context):
    return EventService(context)


def _utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestListing:
    def test_list_between_includes_events_overlapping_the_start(self, service, seed_events):
        seed_events(
            make_event_row("spanning", start="2026-09-28T09:00:00+00:00", end="2026-10-02T17:00:00+00:00"),
            make_event_row("inside", start="2026-10-10T09:00:00+00:00"),
            make_event_row("before", start="2026-09-01T09:00:00+00:00", end="2026-09-02T09:00:00+00:00"),
            make_event_row("after", start="2026-11-01T00:00:00+00:00"),
        )

        events = service.list_between(_utc(2026, 10, 1), _utc(2026, 11, 1))

        assert [event.id for event in events] == ["spanning", "inside"]

    def test_list_between_applies_filters(self, service, seed_events):
        seed_events(
            make_event_row("a", start="2026-10-10T09:00:00+00:00", team_id="team-a"),
            make_event_row("b", start="2026-10-11T09:00:00+00:00", team_id="team-b"),
        )

        events = service.list_between(_utc(2026, 10, 1), _utc(2026, 11, 1), team_id="team-b")

        assert [event.id for event in events] == ["b"]

    def test_relations_are_parsed(self, service, seed_events):
        seed_events(make_event_row("a", start="2026-10-10T09:00:00Z"))

        (event,) = service.list_between(_utc(2026, 10, 1), _utc(2026, 11, 1))

        assert event.team.name == "Team-A"
        assert event.event_type.color == "#4F46E5"
        assert event.start_time == _utc(2026, 10, 10, 9)

    def test_list_event_types_for_organisation_sorted_by_name(self, service, fake_client):
        fake_client.tables["event_types"] = [
            {"id": "t2", "name": "Workshop", "color": "#10B981", "organisation_id": "org-1"},
            {"id": "t1", "name": "Holiday", "color": "#F59E0B", "organisation_id": "org-1"},
            {"id": "t3", "name": "Audit", "color": "#EF4444", "organisation_id": "org-2"},
        ]

        event_types = service.list_event_types("org-1")

        assert [item.name for item in event_types] == ["Holiday", "Workshop"]


class TestSearch:
    @pytest.fixture
    def events(self):
        start = _utc(2026, 10, 1, 9)
        return [
            Event(id="1", title="Sprint Review", start_time=start, end_time=start),
            Event(id="2", title="Lunch", description="Team REVIEW of menus", start_time=start, end_time=start),
            Event(id="3", title="Offsite", location="Review Hall", start_time=start, end_time=start),
            Event(id="4", title="Standup", start_time=start, end_time=start),
        ]

    def test_matches_title_description_and_location(self, events):
        assert [event.id for event in search_events(events, "review")] == ["1", "2", "3"]

    def test_blank_term_returns_everything(self, events):
        assert search_events(events, "  ") == events


class TestSaving:
    def test_create_inserts_a_row(self, service, fake_client):
        saved = service.save_event(
            event_id=None,
            title="Kickoff",
            start_time=_utc(2026, 11, 2, 9),
            end_time=_utc(2026, 11, 2, 10),
            team_id="team-a",
            event_type_id="type-meeting",
            location="Room 1",
        )

        assert saved is not None
        assert fake_client.count("events", "insert") == 1
        row = fake_client.tables["events"][0]
        assert row["title"] == "Kickoff"
        assert row["start_time"] == "2026-11-02T09:00:00+00:00"
        assert row["id"] == saved.id == "events-1"

    def test_update_targets_the_given_id(self, service, seed_events, fake_client):
        seed_events(make_event_row("evt-1", start="2026-10-10T09:00:00+00:00"))

        saved = service.save_event(
            event_id="evt-1",
            title="Renamed",
            start_time=_utc(2026, 10, 10, 9),
            end_time=_utc(2026, 10, 10, 11),
            team_id="team-a",
            event_type_id="type-meeting",
        )

        assert saved.title == "Renamed"
        assert fake_client.count("events", "update") == 1
        assert fake_client.tables["events"][0]["end_time"] == "2026-10-10T11:00:00+00:00"

    def test_end_before_start_is_rejected(self, service, fake_client):
        with pytest.raises(EventValidationError, match="End time must be after start time"):
            service.save_event(
                event_id=None,
                title="Backwards",
                start_time=_utc(2026, 10, 10, 11),
                end_time=_utc(2026, 10, 10, 9),
                team_id="team-a",
                event_type_id="type-meeting",
            )
        assert fake_client.calls == []

    def test_team_and_event_type_are_required(self, service):
        with pytest.raises(EventValidationError):
            service.save_event(
                event_id=None,
                title="Orphan",
                start_time=_utc(2026, 10, 10, 9),
                end_time=_utc(2026, 10, 10, 10),
                team_id="",
                event_type_id="type-meeting",
            )


class TestMovingAndDeleting:
    def test_move_shifts_by_whole_days(self, service, seed_events, fake_client):
        seed_events(
            make_event_row("evt-1", start="2026-10-10T09:00:00+00:00", end="2026-10-11T17:30:00+00:00")
        )

        moved = service.move_event("evt-1", date(2026, 10, 10), date(2026, 10, 13))

        assert moved.start_time == _utc(2026, 10, 13, 9)
        assert moved.end_time == _utc(2026, 10, 14, 17, 30)

    def test_move_to_the_same_day_is_a_no_op(self, service, seed_events, fake_client):
        seed_events(make_event_row("evt-1", start="2026-10-10T09:00:00+00:00"))

        service.move_event("evt-1", date(2026, 10, 10), date(2026, 10, 10))

        assert fake_client.count("events", "update") == 0

    def test_move_unknown_event_returns_none(self, service):
        assert service.move_event("missing", date(2026, 10, 10), date(2026, 10, 12)) is None

    def test_delete(self, service, seed_events, fake_client):
        seed_events(make_event_row("evt-1", start="2026-10-10T09:00:00+00:00"))

        assert service.delete_event("evt-1") is True
        assert service.delete_event("evt-1") is False
        assert fake_client.tables["events"] == []
