"""Tests for deriving calendar events from orders."""

from datetime import date, datetime

import pytest

from app.domain.calendar.errors import EventNotFoundError, OrderNotFoundError
from app.domain.calendar.events import (
    derive_events,
    events_between,
    events_on,
    find_event,
    resolve_order,
)


class TestArchivedOrders:
    def test_archived_order_has_no_events(self, make_order):
        order = make_order(status="archived", wedding_date="2024-09-15")
        assert derive_events([order]) == []

    def test_archived_order_does_not_hide_others(self, make_order):
        archived = make_order(order_id="gone", status="archived")
        active = make_order(order_id="kept")
        events = derive_events([archived, active])
        assert [e.orderId for e in events] == ["kept"]


class TestPickupEvents:
    def test_bare_date_gets_six_pm(self, make_order):
        events = derive_events([make_order(due_date="2024-06-01")])
        assert len(events) == 1
        assert events[0].date == datetime(2024, 6, 1, 18, 0)

    def test_explicit_midnight_is_treated_as_unset(self, make_order):
        events = derive_events([make_order(due_date="2024-06-01T00:00:00")])
        assert events[0].date == datetime(2024, 6, 1, 18, 0)

    def test_explicit_time_is_preserved(self, make_order):
        events = derive_events([make_order(due_date="2024-06-01T09:45:00")])
        assert events[0].date == datetime(2024, 6, 1, 9, 45)

    def test_pickup_fields(self, make_order):
        order = make_order(order_id="abc", garment_types=("Pants", "Jacket"), status="in-progress")
        event = derive_events([order])[0]
        assert event.id == "pickup-abc"
        assert event.type == "pickup"
        assert event.title == "Pickup: Pants, Jacket"
        assert event.clientName == "Jane Doe"
        assert event.status == "in-progress"
        assert event.orderId == "abc"
        assert event.fittingSessionId is None


class TestWeddingEvents:
    def test_bare_wedding_date_gets_noon(self, make_order):
        order = make_order(wedding_date="2024-09-15")
        wedding = [e for e in derive_events([order]) if e.type == "wedding"]
        assert len(wedding) == 1
        assert wedding[0].date == datetime(2024, 9, 15, 12, 0)
        assert wedding[0].id == f"wedding-{order.id}"
        assert wedding[0].title == "Wedding Day"

    def test_wedding_time_is_preserved(self, make_order):
        order = make_order(wedding_date="2024-09-15T16:00:00")
        wedding = [e for e in derive_events([order]) if e.type == "wedding"]
        assert wedding[0].date == datetime(2024, 9, 15, 16, 0)

    def test_blank_wedding_date_yields_no_event(self, make_order):
        order = make_order(wedding_date="", fittings=[])
        assert [e.type for e in derive_events([order])] == ["pickup"]

    def test_one_wedding_event_per_bridal_garment(self, make_order):
        order = make_order(
            garment_types=("Wedding Dress", "Veil"), wedding_date="2024-09-15", bridal_garments=2
        )
        wedding = [e for e in derive_events([order]) if e.type == "wedding"]
        assert len(wedding) == 2


class TestFittingEvents:
    def test_fitting_date_is_not_defaulted(self, make_order):
        order = make_order(fittings=[{"id": "f1", "date": "2024-08-01T00:00:00", "type": "Initial"}])
        fitting = [e for e in derive_events([order]) if e.type == "fitting"]
        assert fitting[0].date == datetime(2024, 8, 1, 0, 0)

    def test_fitting_fields_and_status(self, bridal_order):
        fittings = [e for e in derive_events([bridal_order]) if e.type == "fitting"]
        assert [e.id for e in fittings] == ["fitting-bride-0", "fitting-bride-1"]
        assert [e.fittingSessionId for e in fittings] == ["f1", "f2"]
        assert [e.status for e in fittings] == ["completed", "pending"]
        assert [e.title for e in fittings] == ["Initial Fitting", "Final Fitting"]

    def test_unscheduled_session_is_skipped(self, make_order):
        order = make_order(
            fittings=[
                {"id": "f1", "date": "", "type": "Initial"},
                {"id": "f2", "date": "2024-08-20T15:30:00", "type": "Muslin"},
            ]
        )
        fittings = [e for e in derive_events([order]) if e.type == "fitting"]
        # index follows the session's position in the list
        assert [e.id for e in fittings] == [f"fitting-{order.id}-1"]

    def test_ids_unique_across_bridal_garments(self, two_dress_order):
        fittings = [e for e in derive_events([two_dress_order]) if e.type == "fitting"]
        assert [(e.id, e.fittingSessionId) for e in fittings] == [
            ("fitting-pair-0", "a"),
            ("fitting-pair-1", "b"),
        ]

    def test_custom_type_label_used_in_title(self, make_order):
        order = make_order(
            fittings=[
                {"id": "f1", "date": "2024-08-20T15:30:00", "type": "Custom", "customType": "Sleeve"}
            ]
        )
        fitting = [e for e in derive_events([order]) if e.type == "fitting"][0]
        assert fitting.title == "Sleeve Fitting"


class TestDerivation:
    def test_bridal_example_yields_four_sorted_events(self, bridal_order):
        events = derive_events([bridal_order])
        assert len(events) == 4
        assert [e.type for e in events] == ["fitting", "fitting", "pickup", "wedding"]
        assert [e.date for e in events] == sorted(e.date for e in events)

    def test_sorted_across_orders(self, make_order, bridal_order):
        orders = [
            make_order(order_id="late", due_date="2024-12-01"),
            bridal_order,
            make_order(order_id="early", due_date="2024-01-15T08:00:00"),
        ]
        events = derive_events(orders)
        dates = [e.date for e in events]
        assert all(a <= b for a, b in zip(dates, dates[1:]))
        assert events[0].orderId == "early"
        assert events[-1].orderId == "late"

    def test_none_order_list_is_empty(self):
        assert derive_events(None) == []

    def test_bad_due_date_skips_only_that_event(self, make_order, bridal_order):
        broken = make_order(order_id="broken", due_date="next tuesday")
        events = derive_events([broken, bridal_order])
        assert len(events) == 4
        assert all(e.orderId == "bride" for e in events)

    def test_bad_fitting_date_keeps_rest_of_order(self, make_order):
        order = make_order(
            wedding_date="2024-09-15",
            fittings=[{"id": "f1", "date": "not a date", "type": "Initial"}],
        )
        assert sorted(e.type for e in derive_events([order])) == ["pickup", "wedding"]

    def test_utc_timestamp_converted_to_shop_zone(self, make_order, monkeypatch):
        monkeypatch.setattr("app.shared.dates.SHOP_TIMEZONE", "America/New_York")
        order = make_order(
            fittings=[{"id": "f1", "date": "2024-08-01T18:00:00.000Z", "type": "Initial"}]
        )
        fitting = [e for e in derive_events([order]) if e.type == "fitting"][0]
        assert fitting.date == datetime(2024, 8, 1, 14, 0)
        assert fitting.date.tzinfo is None


class TestLookups:
    def test_find_event(self, bridal_order):
        events = derive_events([bridal_order])
        assert find_event(events, "wedding-bride").type == "wedding"

    def test_find_missing_event(self, bridal_order):
        with pytest.raises(EventNotFoundError):
            find_event(derive_events([bridal_order]), "pickup-nope")

    def test_events_on_ignores_time(self, bridal_order):
        events = derive_events([bridal_order])
        assert [e.id for e in events_on(events, date(2024, 8, 20))] == ["fitting-bride-1"]

    def test_events_between_is_inclusive(self, bridal_order):
        events = derive_events([bridal_order])
        selected = events_between(events, date(2024, 8, 20), date(2024, 9, 10))
        assert [e.type for e in selected] == ["fitting", "pickup"]

    def test_resolve_order(self, bridal_order, make_order):
        other = make_order(order_id="other")
        event = derive_events([bridal_order])[0]
        assert resolve_order(event, [other, bridal_order]) is bridal_order

    def test_resolve_order_missing(self, bridal_order):
        event = derive_events([bridal_order])[0]
        with pytest.raises(OrderNotFoundError):
            resolve_order(event, [])
