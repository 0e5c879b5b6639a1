"""Tests for the fee table."""

import pytest

from src.schemas.booking_schema import DurationClass, RequestClass
from src.tools.pricing import FEE_TABLE, IMMEDIATE_FEE, fee, get_fee_table


class TestFee:
    def test_short_standard(self):
        assert fee(DurationClass.SHORT, RequestClass.STANDARD) == 120

    def test_long_standard(self):
        assert fee(DurationClass.LONG, RequestClass.STANDARD) == 220

    def test_short_custom(self):
        assert fee(DurationClass.SHORT, RequestClass.CUSTOM) == 150

    def test_long_custom(self):
        assert fee(DurationClass.LONG, RequestClass.CUSTOM) == 260

    def test_immediate_ignores_duration(self):
        assert fee(DurationClass.SHORT, RequestClass.IMMEDIATE) == IMMEDIATE_FEE
        assert fee(DurationClass.LONG, RequestClass.IMMEDIATE) == IMMEDIATE_FEE

    def test_every_fee_is_non_negative(self):
        assert all(amount >= 0 for amount in FEE_TABLE.values())
        assert IMMEDIATE_FEE >= 0

    def test_long_costs_more_than_short(self):
        for request_class in (RequestClass.STANDARD, RequestClass.CUSTOM):
            assert fee(DurationClass.LONG, request_class) > fee(DurationClass.SHORT, request_class)

    def test_unknown_combination_raises(self):
        with pytest.raises(KeyError):
            fee("medium", RequestClass.STANDARD)


class TestFeeTableDisplay:
    def test_keys(self):
        assert set(get_fee_table()) == {
            "short/standard", "long/standard", "short/custom", "long/custom", "immediate",
        }

    def test_display_copy_is_detached(self):
        table = get_fee_table()
        table["short/standard"] = 0
        assert fee(DurationClass.SHORT, RequestClass.STANDARD) == 120
