"""Tests for the holdings aggregator."""

from datetime import date
from decimal import Decimal
import random
from unittest.mock import MagicMock

from src.domain.models import AssetType, TransactionType
from src.domain.services.holdings import (
    compute_holdings,
    sort_chronologically,
)


def test_two_buys_average_the_cost(txn):
    transactions = [
        txn(TransactionType.BUY, quantity="10", price="100",
            on=date(2024, 1, 1)),
        txn(TransactionType.BUY, quantity="10", price="120",
            on=date(2024, 2, 1)),
    ]

    [holding] = compute_holdings(transactions, {})

    assert holding.quantity == Decimal("20")
    assert holding.total_invested == Decimal("2200")
    assert holding.avg_price == Decimal("110")


def test_sell_removes_cost_at_average_price(txn):
    transactions = [
        txn(TransactionType.BUY, quantity="10", price="100",
            on=date(2024, 1, 1)),
        txn(TransactionType.BUY, quantity="10", price="120",
            on=date(2024, 2, 1)),
        txn(TransactionType.SELL, quantity="5", price="150",
            on=date(2024, 3, 1)),
    ]

    [holding] = compute_holdings(transactions, {})

    assert holding.quantity == Decimal("15")
    assert holding.total_invested == Decimal("1650")
    assert holding.avg_price == Decimal("110")
    assert holding.current_price == Decimal("110")
    assert holding.gain_loss == Decimal("0")


def test_sell_price_does_not_change_average(txn):
    transactions = [
        txn(TransactionType.BUY, quantity="10", price="100",
            on=date(2024, 1, 1)),
        txn(TransactionType.SELL, quantity="4", price="999",
            on=date(2024, 1, 2)),
    ]

    [holding] = compute_holdings(transactions, {})

    assert holding.quantity == Decimal("6")
    assert holding.total_invested == Decimal("600")
    assert holding.avg_price == Decimal("100")


def test_manual_price_drives_value_and_gain(txn):
    transactions = [
        txn(TransactionType.BUY, quantity="10", price="100"),
    ]

    [holding] = compute_holdings(transactions, {"INFY": Decimal("130")})

    assert holding.current_value == Decimal("1300")
    assert holding.gain_loss == Decimal("300")
    assert holding.gain_loss_percent == Decimal("30")


def test_fully_sold_asset_is_excluded(txn):
    transactions = [
        txn(TransactionType.BUY, quantity="10", price="100",
            on=date(2024, 1, 1)),
        txn(TransactionType.SELL, quantity="10", price="150",
            on=date(2024, 1, 2)),
    ]

    assert compute_holdings(transactions, {}) == []


def test_dust_quantity_is_excluded(txn):
    transactions = [
        txn(TransactionType.BUY, quantity="1", price="100",
            on=date(2024, 1, 1)),
        txn(TransactionType.SELL, quantity="0.99995", price="100",
            on=date(2024, 1, 2)),
    ]

    assert compute_holdings(transactions, {}) == []


def test_oversell_logs_warning_and_drops_holding(txn):
    logger = MagicMock()
    transactions = [
        txn(TransactionType.BUY, quantity="5", price="100",
            on=date(2024, 1, 1)),
        txn(TransactionType.SELL, quantity="8", price="100",
            on=date(2024, 1, 2)),
    ]

    holdings = compute_holdings(transactions, {}, logger=logger)

    assert holdings == []
    logger.warning.assert_called_once()
    assert "INFY" in logger.warning.call_args.args[0]


def test_sell_without_prior_buy_has_zero_average(txn):
    transactions = [
        txn(TransactionType.SELL, quantity="3", price="100"),
        txn(TransactionType.BUY, quantity="5", price="10",
            on=date(2024, 2, 1)),
    ]

    [holding] = compute_holdings(transactions, {})

    assert holding.quantity == Decimal("2")
    assert holding.total_invested == Decimal("50")
    assert holding.avg_price == Decimal("25")


def test_cashflow_transactions_are_ignored(txn):
    transactions = [
        txn(TransactionType.INCOME, asset_name="Income", price="5000"),
        txn(TransactionType.EXPENSE, asset_name="Expense", price="200"),
    ]

    assert compute_holdings(transactions, {}) == []


def test_deposit_and_withdraw_move_quantity(txn):
    transactions = [
        txn(TransactionType.DEPOSIT, asset_name="FD", quantity="1",
            price="10000", asset_type=AssetType.FD, on=date(2024, 1, 1)),
        txn(TransactionType.DEPOSIT, asset_name="FD", quantity="1",
            price="5000", asset_type=AssetType.FD, on=date(2024, 2, 1)),
        txn(TransactionType.WITHDRAW, asset_name="FD", quantity="1",
            price="7500", asset_type=AssetType.FD, on=date(2024, 3, 1)),
    ]

    [holding] = compute_holdings(transactions, {})

    assert holding.asset_type == AssetType.FD
    assert holding.quantity == Decimal("1")
    assert holding.total_invested == Decimal("7500")


def test_result_does_not_depend_on_input_order(txn):
    transactions = [
        txn(TransactionType.BUY, quantity="10", price="100",
            on=date(2024, 1, 1)),
        txn(TransactionType.BUY, asset_name="TCS", quantity="2",
            price="3000", on=date(2024, 1, 5)),
        txn(TransactionType.BUY, quantity="10", price="120",
            on=date(2024, 2, 1)),
        txn(TransactionType.SELL, quantity="5", price="150",
            on=date(2024, 3, 1)),
    ]
    shuffled = list(transactions)
    random.Random(7).shuffle(shuffled)

    expected = compute_holdings(transactions, {})

    assert compute_holdings(shuffled, {}) == expected
    assert compute_holdings(transactions, {}) == expected


def test_sort_chronologically_is_stable_on_ties(txn):
    first = txn(TransactionType.BUY, txn_id="a")
    second = txn(TransactionType.SELL, txn_id="b")
    earlier = txn(TransactionType.BUY, txn_id="c", on=date(2023, 12, 31))

    ordered = sort_chronologically([first, second, earlier])

    assert [item.id for item in ordered] == ["c", "a", "b"]
