from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from goods_transport.models.shared.enums import FarePaymentStatus
from goods_transport.services.logistics.vehicle_ledger import (
    build_ledger, fare_payment_status, running_balances, summarize
)


def txn(credit="0", debit="0"):
    return SimpleNamespace(credit_amount=Decimal(credit), debit_amount=Decimal(debit))


def trip(trip_id, fare_is_paid):
    return SimpleNamespace(id=trip_id, fare_is_paid=fare_is_paid, date=date(2024, 3, 1))


class TestRunningBalances:

    def test_balance_after_each_entry(self):
        rows = running_balances([txn(credit="100"), txn(debit="30"), txn(credit="50")])
        assert [balance for _, balance in rows] == [Decimal("100"), Decimal("70"), Decimal("120")]

    def test_rows_keep_transaction_order(self):
        first, second = txn(credit="10"), txn(debit="5")
        rows = running_balances([first, second])
        assert [t for t, _ in rows] == [first, second]

    def test_missing_amounts_count_as_zero(self):
        entry = SimpleNamespace(credit_amount=None, debit_amount=Decimal("12.50"))
        assert running_balances([entry])[0][1] == Decimal("-12.50")

    def test_float_amounts_do_not_drift(self):
        entries = [SimpleNamespace(credit_amount=0.1, debit_amount=0) for _ in range(3)]
        assert running_balances(entries)[-1][1] == Decimal("0.3")


class TestFareStatus:

    def test_no_trip_is_not_available(self):
        assert fare_payment_status(None) == (FarePaymentStatus.NOT_AVAILABLE, None)

    def test_paid_trip_has_nothing_to_settle(self):
        assert fare_payment_status(trip(4, True)) == (FarePaymentStatus.PAID, None)

    def test_unpaid_trip_is_the_one_to_settle(self):
        assert fare_payment_status(trip(9, False)) == (FarePaymentStatus.UNPAID, 9)


class TestBuildLedger:

    def test_summary_uses_final_balance(self):
        rows, summary = build_ledger([txn(credit="100"), txn(debit="30"), txn(credit="50")], trip(2, False))
        assert len(rows) == 3
        assert summary.current_balance == Decimal("120.00")
        assert summary.fare_payment_status == FarePaymentStatus.UNPAID
        assert summary.trip_to_settle_id == 2

    def test_empty_ledger(self):
        rows, summary = build_ledger([], None)
        assert rows == []
        assert summary.current_balance == Decimal("0.00")
        assert summary.fare_payment_status == FarePaymentStatus.NOT_AVAILABLE
        assert summary.trip_to_settle_id is None

    def test_current_balance_rounds_half_up(self):
        summary = summarize(Decimal("10.005"), None)
        assert summary.current_balance == Decimal("10.01")
