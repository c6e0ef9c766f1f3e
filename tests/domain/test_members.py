"""Tests for member selection, scoping and access policies."""

from datetime import date
from decimal import Decimal

import pytest

from src.domain.models import (
    Member,
    MemberRole,
    MemberSelection,
    SIPSchedule,
    TransactionType,
    Viewer,
)
from src.domain.policies import (
    can_manage_schedule,
    can_modify_transaction,
    resolve_member_selection,
    resolve_owner,
    visible_members,
)
from src.domain.services.members import filter_transactions_for_member


ADMIN = Viewer(user_id="admin", role=MemberRole.ADMIN)
MEMBER = Viewer(user_id="m2")


@pytest.mark.parametrize("raw", [None, "", "  ", "all", "ALL"])
def test_parse_all_members(raw):
    selection = MemberSelection.parse(raw)

    assert selection.is_all
    assert selection.to_token() == "all"


def test_parse_single_member():
    selection = MemberSelection.parse(" m1 ")

    assert selection == MemberSelection.for_member("m1")
    assert selection.includes("m1")
    assert not selection.includes("m2")


def test_filter_all_returns_everything(txn):
    transactions = [
        txn(TransactionType.BUY, member_id="m1"),
        txn(TransactionType.BUY, member_id="m2"),
    ]

    result = filter_transactions_for_member(
        transactions,
        MemberSelection.all_members(),
    )

    assert result == transactions


def test_filter_single_member_keeps_order(txn):
    transactions = [
        txn(TransactionType.BUY, member_id="m1", txn_id="a"),
        txn(TransactionType.BUY, member_id="m2", txn_id="b"),
        txn(TransactionType.SELL, member_id="m1", txn_id="c"),
    ]

    result = filter_transactions_for_member(
        transactions,
        MemberSelection.for_member("m1"),
    )

    assert [item.id for item in result] == ["a", "c"]


def test_filter_unknown_member_is_empty(txn):
    transactions = [txn(TransactionType.BUY, member_id="m1")]

    assert filter_transactions_for_member(
        transactions,
        MemberSelection.for_member("ghost"),
    ) == []


def test_admin_keeps_requested_selection():
    requested = MemberSelection.for_member("m1")

    assert resolve_member_selection(ADMIN, requested) == requested
    assert resolve_member_selection(
        ADMIN,
        MemberSelection.all_members(),
    ).is_all


def test_member_is_scoped_to_self():
    resolved = resolve_member_selection(
        MEMBER,
        MemberSelection.all_members(),
    )

    assert resolved == MemberSelection.for_member("m2")


def test_visible_members():
    members = [
        Member(id="m1", family_group_id="fam", name="Asha", relation="Self"),
        Member(id="m2", family_group_id="fam", name="Ravi", relation="Son"),
    ]

    assert visible_members(ADMIN, members) == members
    assert [m.id for m in visible_members(MEMBER, members)] == ["m2"]


def test_can_modify_transaction(txn):
    own = txn(TransactionType.BUY, member_id="m2")
    other = txn(TransactionType.BUY, member_id="m1")

    assert can_modify_transaction(MEMBER, own)
    assert not can_modify_transaction(MEMBER, other)
    assert can_modify_transaction(ADMIN, other)


def test_resolve_owner():
    assert resolve_owner(ADMIN, "m1") == "m1"
    assert resolve_owner(ADMIN, None) == "admin"
    assert resolve_owner(MEMBER, "m1") == "m2"


def test_schedule_management_is_author_or_admin_only():
    schedule = SIPSchedule(
        id="s1",
        member_id="m2",
        asset_name="Axis Bluechip",
        amount=Decimal("5000"),
        day_of_month=5,
        start_date=date(2024, 1, 1),
    )

    assert can_manage_schedule(MEMBER, schedule)
    assert can_manage_schedule(ADMIN, schedule)
    assert not can_manage_schedule(Viewer(user_id="m3"), schedule)
