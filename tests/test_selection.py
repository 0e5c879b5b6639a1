"""Tests for the standard slot selection."""

from datetime import datetime, timedelta

import pytest

from src.booking.state_machine import InvalidTransitionError, SelectionState
from src.schemas.booking_schema import BookingError, DurationClass
from tests.conftest import NOW, SCENARIO_TEMPLATES, TODAY, make_template


@pytest.fixture
def short_today(selection):
    selection.set_date(TODAY, NOW)
    selection.set_duration(DurationClass.SHORT, NOW)
    return selection


class TestRecompute:
    def test_date_alone_lists_nothing(self, selection):
        assert selection.set_date(TODAY, NOW) == []
        assert selection.state == SelectionState.DATE_CHOSEN

    def test_duration_lists_slots(self, short_today):
        assert [s.label for s in short_today.available] == ["18:29-18:59"]
        assert short_today.state == SelectionState.DURATION_CHOSEN

    def test_duration_before_date_raises(self, selection):
        with pytest.raises(InvalidTransitionError):
            selection.set_duration(DurationClass.SHORT, NOW)

    def test_date_change_clears_slot(self, short_today):
        short_today.select_slot(short_today.available[0])
        slots = short_today.set_date(TODAY + timedelta(days=1), NOW)
        assert short_today.chosen_slot is None
        assert len(slots) == 2
        assert short_today.state == SelectionState.DURATION_CHOSEN

    def test_duration_change_clears_slot(self, short_today):
        short_today.select_slot(short_today.available[0])
        slots = short_today.set_duration(DurationClass.LONG, NOW)
        assert short_today.chosen_slot is None
        assert [s.label for s in slots] == ["19:59-20:59"]

    def test_returned_list_is_a_copy(self, short_today):
        slots = short_today.set_duration(DurationClass.SHORT, NOW)
        slots.clear()
        assert len(short_today.available) == 1


class TestSelectSlot:
    def test_select_listed_slot(self, short_today):
        result = short_today.select_slot(short_today.available[0])
        assert result.passed
        assert short_today.state == SelectionState.SLOT_CHOSEN

    def test_unlisted_slot_is_stale(self, short_today):
        gone = SCENARIO_TEMPLATES[0]
        result = short_today.select_slot(gone)
        assert not result.passed
        assert result.error == BookingError.STALE_SLOT
        assert short_today.chosen_slot is None
        assert short_today.state == SelectionState.DURATION_CHOSEN

    def test_equal_template_matches_by_value(self, short_today):
        assert short_today.select_slot(make_template("18:29", "18:59")).passed


class TestConfirm:
    def test_confirm_without_slot(self, short_today):
        result = short_today.confirm(NOW)
        assert not result.passed
        assert result.error == BookingError.NO_SLOT_SELECTED
        assert result.message
        assert short_today.state == SelectionState.DURATION_CHOSEN

    def test_confirm_on_fresh_selection(self, selection):
        assert selection.confirm(NOW).error == BookingError.NO_SLOT_SELECTED

    def test_confirm_in_time(self, short_today):
        short_today.select_slot(short_today.available[0])
        result = short_today.confirm(datetime(2026, 3, 10, 18, 13))
        assert result.passed
        assert short_today.is_confirmed

    def test_confirm_after_slot_went_stale(self, short_today):
        short_today.select_slot(short_today.available[0])
        result = short_today.confirm(datetime(2026, 3, 10, 18, 14))
        assert not result.passed
        assert result.error == BookingError.STALE_SLOT
        assert short_today.chosen_slot is None
        assert short_today.available == []
        assert short_today.state == SelectionState.DURATION_CHOSEN

    def test_stale_confirm_recomputes_with_new_now(self, selection):
        selection.set_date(TODAY, NOW)
        selection.set_duration(DurationClass.LONG, NOW)
        selection.select_slot(selection.available[0])
        result = selection.confirm(datetime(2026, 3, 10, 19, 50))
        assert result.error == BookingError.STALE_SLOT
        assert selection.available == []

    def test_reselect_after_stale(self, selection):
        tomorrow = TODAY + timedelta(days=1)
        selection.set_date(TODAY, NOW)
        selection.set_duration(DurationClass.SHORT, NOW)
        selection.select_slot(selection.available[0])
        later = datetime(2026, 3, 10, 18, 20)
        selection.confirm(later)
        slots = selection.set_date(tomorrow, later)
        selection.select_slot(slots[0])
        assert selection.confirm(later).passed

    def test_future_date_confirms(self, selection):
        selection.set_date(TODAY + timedelta(days=1), NOW)
        slots = selection.set_duration(DurationClass.SHORT, NOW)
        selection.select_slot(slots[0])
        assert selection.confirm(NOW).passed


class TestAfterConfirm:
    @pytest.fixture
    def confirmed(self, selection):
        selection.set_date(TODAY + timedelta(days=1), NOW)
        slots = selection.set_duration(DurationClass.SHORT, NOW)
        selection.select_slot(slots[0])
        selection.confirm(NOW)
        return selection

    def test_confirm_twice(self, confirmed):
        assert confirmed.confirm(NOW).passed
        assert confirmed.is_confirmed

    def test_confirm_again_after_slot_went_stale(self, short_today):
        short_today.select_slot(short_today.available[0])
        short_today.confirm(NOW)

        result = short_today.confirm(datetime(2026, 3, 10, 18, 50))

        assert result.error == BookingError.STALE_SLOT
        assert short_today.chosen_slot is None
        assert short_today.state == SelectionState.DURATION_CHOSEN

    def test_pick_other_slot(self, confirmed):
        other = confirmed.available[1]
        assert confirmed.select_slot(other).passed
        assert confirmed.chosen_slot == other
        assert confirmed.state == SelectionState.SLOT_CHOSEN

    def test_pick_same_slot_stays_confirmed(self, confirmed):
        assert confirmed.select_slot(confirmed.chosen_slot).passed
        assert confirmed.is_confirmed

    def test_unlisted_slot_keeps_confirmation(self, confirmed):
        result = confirmed.select_slot(make_template("09:00", "09:30"))
        assert result.error == BookingError.STALE_SLOT
        assert confirmed.is_confirmed

    def test_new_date_reopens(self, confirmed):
        slots = confirmed.set_date(TODAY + timedelta(days=2), NOW)
        assert confirmed.state == SelectionState.DURATION_CHOSEN
        assert confirmed.chosen_slot is None
        assert len(slots) == 2


class TestResetAndExport:
    def test_reset(self, short_today):
        short_today.reset()
        assert short_today.state == SelectionState.IDLE
        assert short_today.date is None
        assert short_today.available == []

    def test_reset_when_idle(self, selection):
        selection.reset()
        assert selection.state == SelectionState.IDLE

    def test_to_dict(self, short_today):
        short_today.select_slot(short_today.available[0])
        data = short_today.to_dict()
        assert data["state"] == "slot_chosen"
        assert data["date"] == "2026-03-10"
        assert data["duration_class"] == "short"
        assert data["chosen_slot"] == "18:29-18:59"
