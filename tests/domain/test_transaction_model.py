"""Tests for the transaction domain model."""

from datetime import date
from decimal import Decimal

import pytest

from src.domain.models import (
    AssetType,
    Platform,
    Transaction,
    TransactionType,
)


def test_amount_is_quantity_times_price(txn):
    buy = txn(TransactionType.BUY, quantity="10", price="12.5")

    assert buy.amount == Decimal("125.0")


def test_amount_is_not_an_init_argument():
    with pytest.raises(TypeError):
        Transaction(
            id="1",
            member_id="m1",
            asset_name="INFY",
            asset_type=AssetType.STOCK,
            transaction_type=TransactionType.BUY,
            date=date(2024, 1, 1),
            quantity=Decimal("1"),
            price=Decimal("1"),
            amount=Decimal("99"),
        )


def test_with_changes_recomputes_amount(txn):
    buy = txn(TransactionType.BUY, quantity="10", price="100")

    updated = buy.with_changes(quantity=Decimal("4"))

    assert updated.amount == Decimal("400")
    assert buy.amount == Decimal("1000")


def test_with_changes_rejects_explicit_amount(txn):
    buy = txn(TransactionType.BUY, quantity="10", price="100")

    with pytest.raises(ValueError):
        buy.with_changes(amount=Decimal("5"))


@pytest.mark.parametrize(
    ("transaction_type", "inflow", "outflow", "cashflow"),
    [
        (TransactionType.BUY, True, False, False),
        (TransactionType.SIP, True, False, False),
        (TransactionType.DEPOSIT, True, False, False),
        (TransactionType.SELL, False, True, False),
        (TransactionType.WITHDRAW, False, True, False),
        (TransactionType.INCOME, False, False, True),
        (TransactionType.EXPENSE, False, False, True),
    ],
)
def test_classification(txn, transaction_type, inflow, outflow, cashflow):
    record = txn(transaction_type)

    assert record.is_inflow is inflow
    assert record.is_outflow is outflow
    assert record.is_cashflow is cashflow
    assert record.is_investment is not cashflow


def test_sip_group_key_falls_back_to_asset_name(txn):
    assert txn(TransactionType.SIP, asset_name="Fund").sip_group_key == "Fund"
    assert (
        txn(TransactionType.SIP, asset_name="Fund", sip_id="F-1").sip_group_key
        == "F-1"
    )


def test_from_record_parses_strings_and_defaults_cashflow_quantity():
    record = {
        "id": "abc",
        "member_id": "m1",
        "asset_name": "Income",
        "asset_type": "Cash",
        "transaction_type": "Income",
        "date": "2024-03-05",
        "quantity": None,
        "price": "5000",
        "category": "Salary",
        "platform": "Cash",
        "notes": None,
        "family_group_id": "fam",
    }

    parsed = Transaction.from_record(record)

    assert parsed.date == date(2024, 3, 5)
    assert parsed.quantity == Decimal("1")
    assert parsed.amount == Decimal("5000")
    assert parsed.platform == Platform.CASH
    assert parsed.notes == ""
    assert parsed.sip_id is None


def test_to_record_round_trips_through_from_record(txn):
    original = txn(
        TransactionType.SIP,
        asset_name="Fund",
        quantity="2.5",
        price="40.10",
        sip_id="Fund-SIP",
        asset_type=AssetType.MUTUAL_FUND,
    )

    record = original.to_record()

    assert record["amount"] == "100.250"
    assert record["date"] == "2024-01-01"
    assert Transaction.from_record(record) == original
