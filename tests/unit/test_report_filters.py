from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from goods_transport.core.exceptions import ValidationError
from goods_transport.models.shared.enums import ShipmentPaymentStatus
from goods_transport.utils.date_time_serializer import serialize_report_row
from goods_transport.utils.report_filters import (
    day_bounds, extract_payment_status, format_timestamp, non_empty_or_none,
    parse_calendar_date, parse_day_bounds, positive_int_or_none, with_payment_status
)


class TestDayBounds:

    def test_both_bounds(self):
        start, end = parse_day_bounds("2024-03-01", "2024-03-31")
        assert start == datetime(2024, 3, 1, 0, 0, 0, 0, tzinfo=timezone.utc)
        assert end == datetime(2024, 3, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)

    @pytest.mark.parametrize("start_date, end_date", [(None, None), ("", "  ")])
    def test_missing_values_leave_range_open(self, start_date, end_date):
        assert parse_day_bounds(start_date, end_date) == (None, None)

    def test_single_day(self):
        start, end = day_bounds(date(2024, 2, 29))
        assert format_timestamp(start) == "2024-02-29T00:00:00.000Z"
        assert format_timestamp(end) == "2024-02-29T23:59:59.999Z"

    @pytest.mark.parametrize("value", ["15-03-2024", "2024/03/15", "2024-3-5", "yesterday"])
    def test_malformed_date_is_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_day_bounds(value, None)
        assert exc_info.value.status_code == 400
        assert "startDate" in exc_info.value.detail

    def test_impossible_calendar_date_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_day_bounds(None, "2024-02-30")
        assert "endDate" in exc_info.value.detail

    def test_parse_calendar_date(self):
        assert parse_calendar_date(" 2024-12-01 ", "date") == date(2024, 12, 1)


class TestIdFilters:

    @pytest.mark.parametrize("value, expected", [
        ("7", 7), (" 12 ", 12), (3, 3), ("0", None), ("-4", None), ("abc", None), ("", None), (None, None),
    ])
    def test_positive_int_or_none(self, value, expected):
        assert positive_int_or_none(value) == expected

    def test_non_empty_or_none(self):
        assert non_empty_or_none("  ") is None
        assert non_empty_or_none(None) is None
        assert non_empty_or_none(" 202403-001 ") == "202403-001"


class TestPaymentStatusMarker:

    def test_marker_is_prefixed(self):
        remarks = with_payment_status("fragile", ShipmentPaymentStatus.ALREADY_PAID)
        assert remarks == "PAYMENT_STATUS:ALREADY_PAID fragile"
        assert extract_payment_status(remarks) == "ALREADY_PAID"

    def test_marker_without_remarks(self):
        assert extract_payment_status(with_payment_status(None, ShipmentPaymentStatus.FREE)) == "FREE"

    @pytest.mark.parametrize("remarks", [None, "", "fragile", "note PAYMENT_STATUS:FREE"])
    def test_defaults_to_pending(self, remarks):
        assert extract_payment_status(remarks) == "PENDING"


class TestSerialization:

    def test_timestamps_are_utc_with_milliseconds(self):
        value = datetime(2024, 3, 15, 10, 30, 5, 123456, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-03-15T10:30:05.123Z"

    def test_plain_date_is_midnight(self):
        assert format_timestamp(date(2024, 3, 15)) == "2024-03-15T00:00:00.000Z"

    def test_report_row_is_json_ready(self):
        row = serialize_report_row({
            "amount": Decimal("12.50"),
            "status": ShipmentPaymentStatus.FREE,
            "nested": {"day": date(2024, 1, 2)},
            "items": [Decimal("1"), None],
        })
        assert row == {
            "amount": 12.5,
            "status": "FREE",
            "nested": {"day": "2024-01-02T00:00:00.000Z"},
            "items": [1.0, None],
        }
