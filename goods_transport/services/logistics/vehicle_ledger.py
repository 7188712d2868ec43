"""Running-balance ledger for a vehicle's credit/debit history."""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple

from goods_transport.models.shared.enums import FarePaymentStatus

CENTS = Decimal("0.01")


@dataclass
class LedgerSummary:
    current_balance: Decimal
    fare_payment_status: FarePaymentStatus
    trip_to_settle_id: Optional[int]


def _as_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def running_balances(transactions: Iterable) -> List[Tuple[object, Decimal]]:
    """
    Pair each transaction with the balance after applying it.

    Transactions must already be in ascending transaction_date order. The
    balance is carried as an unrounded Decimal.
    """
    balance = Decimal("0")
    rows = []
    for transaction in transactions:
        balance += _as_decimal(transaction.credit_amount) - _as_decimal(transaction.debit_amount)
        rows.append((transaction, balance))
    return rows


def fare_payment_status(latest_trip) -> Tuple[FarePaymentStatus, Optional[int]]:
    """PAID/UNPAID from the most recent trip, N/A when the vehicle has none"""
    if latest_trip is None:
        return FarePaymentStatus.NOT_AVAILABLE, None
    if latest_trip.fare_is_paid:
        return FarePaymentStatus.PAID, None
    return FarePaymentStatus.UNPAID, latest_trip.id


def summarize(final_balance: Decimal, latest_trip) -> LedgerSummary:
    status, trip_id = fare_payment_status(latest_trip)
    return LedgerSummary(
        current_balance=final_balance.quantize(CENTS, rounding=ROUND_HALF_UP),
        fare_payment_status=status,
        trip_to_settle_id=trip_id,
    )


def build_ledger(transactions: Iterable, latest_trip) -> Tuple[List[Tuple[object, Decimal]], LedgerSummary]:
    rows = running_balances(transactions)
    final_balance = rows[-1][1] if rows else Decimal("0")
    return rows, summarize(final_balance, latest_trip)
