from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from goods_transport.utils.report_filters import format_timestamp


def serialize_report_row(data: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively convert decimals to numbers and dates to timestamp strings"""
    def convert_value(value: Any) -> Any:
        if isinstance(value, (datetime, date)):
            return format_timestamp(value)
        elif isinstance(value, Decimal):
            return float(value)
        elif isinstance(value, Enum):
            return value.value
        elif isinstance(value, dict):
            return serialize_report_row(value)
        elif isinstance(value, list):
            return [convert_value(item) for item in value]
        return value

    serialized = {}
    for key, value in data.items():
        serialized[key] = convert_value(value)
    return serialized


def model_to_dict(instance: Any) -> Dict[str, Any]:
    """Column values of an ORM instance keyed by column name"""
    return {
        column.key: getattr(instance, column.key)
        for column in instance.__table__.columns
    }
