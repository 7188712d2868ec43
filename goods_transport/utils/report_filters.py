import re
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Optional, Tuple, Union

from goods_transport.core.exceptions import ValidationError
from goods_transport.models.shared.enums import ShipmentPaymentStatus

PAYMENT_STATUS_MARKER = "PAYMENT_STATUS:"
ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

DAY_START = time(0, 0, 0, 0, tzinfo=timezone.utc)
DAY_END = time(23, 59, 59, 999000, tzinfo=timezone.utc)


def parse_calendar_date(value: str, field_name: str) -> date:
    """Parse a YYYY-MM-DD query value, raising a 400 on anything else"""
    if not ISO_DATE_PATTERN.match(value.strip()):
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format.")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a valid calendar date.")


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """First and last millisecond of a calendar day in UTC"""
    return datetime.combine(day, DAY_START), datetime.combine(day, DAY_END)


def parse_day_bounds(
    start_date: Optional[str], end_date: Optional[str]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Turn optional startDate/endDate query values into UTC bounds.

    startDate becomes 00:00:00.000Z of that day and endDate 23:59:59.999Z.
    A missing or blank value leaves that side unbounded.
    """
    start = None
    end = None
    if start_date and start_date.strip():
        start = datetime.combine(parse_calendar_date(start_date, "startDate"), DAY_START)
    if end_date and end_date.strip():
        end = datetime.combine(parse_calendar_date(end_date, "endDate"), DAY_END)
    return start, end


def apply_date_bounds(conditions: list, column, start: Optional[datetime], end: Optional[datetime], is_date_column: bool = False):
    """Append range conditions for a column; Date columns compare on the calendar day"""
    if start is not None:
        conditions.append(column >= (start.date() if is_date_column else start))
    if end is not None:
        conditions.append(column <= (end.date() if is_date_column else end))
    return conditions


def positive_int_or_none(value: Optional[Union[str, int]]) -> Optional[int]:
    """Foreign-key filters only apply for positive integers"""
    if value is None:
        return None
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return None
    return parsed if parsed > 0 else None


def non_empty_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def extract_payment_status(remarks: Optional[str]) -> str:
    """Read the payment status token that prefixes shipment remarks"""
    if not remarks or not remarks.startswith(PAYMENT_STATUS_MARKER):
        return ShipmentPaymentStatus.PENDING.value
    token = remarks.split(" ")[0][len(PAYMENT_STATUS_MARKER):]
    return token or ShipmentPaymentStatus.PENDING.value


def with_payment_status(remarks: Optional[str], payment_status: ShipmentPaymentStatus) -> str:
    """Prefix remarks with the payment status marker"""
    prefix = f"{PAYMENT_STATUS_MARKER}{payment_status.value} "
    return prefix + (remarks or "")


def to_number(value: Optional[Decimal]) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def format_timestamp(value: Optional[Union[date, datetime]]) -> Optional[str]:
    """Render a date or datetime as YYYY-MM-DDTHH:MM:SS.mmmZ in UTC"""
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.combine(value, time(0, 0))
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
