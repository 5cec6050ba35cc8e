"""
Unit tests for the timeline aggregator.
"""

from datetime import date

from patient_vault.core.timeline import build_timeline, group_by_day, sort_events
from patient_vault.models import Importance


def _dates(events):
    return [event.date for event in events]


class TestBuildTimeline:

    def test_empty(self):
        assert build_timeline() == []

    def test_no_loss_no_duplication(self, make_record, make_prescription, make_checkup, make_medication):
        records = [make_record() for _ in range(3)]
        prescriptions = [make_prescription() for _ in range(2)]
        checkups = [make_checkup()]
        medications = [make_medication() for _ in range(4)]

        events = build_timeline(records, prescriptions, checkups, medications)

        assert len(events) == 10
        expected_ids = (
            {f"record-{r.id}" for r in records}
            | {f"prescription-{p.id}" for p in prescriptions}
            | {f"checkup-{c.id}" for c in checkups}
            | {f"medication-{m.id}" for m in medications}
        )
        assert {event.id for event in events} == expected_ids

    def test_sorted_newest_first(self, make_record, make_prescription, make_checkup):
        events = build_timeline(
            records=[make_record(uploaded_at="2024-01-05T00:00:00Z"), make_record(uploaded_at="2024-03-01T00:00:00Z")],
            prescriptions=[make_prescription(uploaded_at="2024-02-10T00:00:00Z")],
            checkups=[make_checkup(date="2024-04-01")],
        )
        assert _dates(events) == [date(2024, 4, 1), date(2024, 3, 1), date(2024, 2, 10), date(2024, 1, 5)]

    def test_ties_keep_input_order(self, make_record, make_medication):
        same_day = "2024-02-02T00:00:00Z"
        records = [make_record(id="a", uploaded_at=same_day), make_record(id="b", uploaded_at=same_day)]
        medications = [make_medication(id="m", prescribed_date="2024-02-02")]

        events = build_timeline(records=records, medications=medications)

        assert [event.id for event in events] == ["record-a", "record-b", "medication-m"]

    def test_record_importance_setting(self, make_record):
        events = build_timeline(records=[make_record()], record_importance=Importance.LOW)
        assert events[0].importance == Importance.LOW

    def test_dates_come_from_inputs(self, make_record, make_medication):
        events = build_timeline(
            records=[make_record(uploaded_at="2023-12-31T23:00:00Z")],
            medications=[make_medication(prescribed_date="2024-01-15")],
        )
        assert set(_dates(events)) == {date(2023, 12, 31), date(2024, 1, 15)}


class TestGroupByDay:

    def test_groups_descending(self, make_record, make_checkup):
        events = build_timeline(
            records=[
                make_record(id="a", uploaded_at="2024-01-01T08:00:00Z"),
                make_record(id="b", uploaded_at="2024-01-03T08:00:00Z"),
                make_record(id="c", uploaded_at="2024-01-01T18:00:00Z"),
            ],
            checkups=[make_checkup(id="x", date="2024-01-03")],
        )
        days = group_by_day(events)

        assert [day.date for day in days] == [date(2024, 1, 3), date(2024, 1, 1)]
        assert [event.id for event in days[0].events] == ["record-b", "checkup-x"]
        assert [event.id for event in days[1].events] == ["record-a", "record-c"]

    def test_empty(self):
        assert group_by_day([]) == []

    def test_unsorted_input_is_sorted_first(self, make_record):
        events = [
            build_timeline(records=[make_record(uploaded_at="2024-01-01T00:00:00Z")])[0],
            build_timeline(records=[make_record(uploaded_at="2024-02-01T00:00:00Z")])[0],
            build_timeline(records=[make_record(uploaded_at="2024-01-01T00:00:00Z")])[0],
        ]
        days = group_by_day(events)
        assert [day.date for day in days] == [date(2024, 2, 1), date(2024, 1, 1)]
        assert len(days[1].events) == 2

    def test_sort_events_is_idempotent(self, make_record):
        events = build_timeline(records=[make_record(uploaded_at=f"2024-0{m}-01T00:00:00Z") for m in (3, 1, 2)])
        assert sort_events(events) == events
