"""Access rules deciding what a viewer may see and change."""

from collections.abc import Iterable

from src.domain.models import (
    Member,
    MemberSelection,
    SIPSchedule,
    Transaction,
    Viewer,
)


def resolve_member_selection(
    viewer: Viewer,
    requested: MemberSelection,
) -> MemberSelection:
    """Return the selection a viewer is allowed to use.

    Admins keep whatever they asked for. Other members are always scoped to
    their own transactions.
    """
    if viewer.is_admin:
        return requested
    return MemberSelection.for_member(viewer.user_id)


def visible_members(viewer: Viewer, members: Iterable[Member]) -> list[Member]:
    """Return the members a viewer may pick in the member selector."""
    if viewer.is_admin:
        return list(members)
    return [member for member in members if member.id == viewer.user_id]


def can_modify_transaction(viewer: Viewer, transaction: Transaction) -> bool:
    """Return True when the viewer owns the transaction or is an admin."""
    return viewer.is_admin or transaction.member_id == viewer.user_id


def can_manage_schedule(viewer: Viewer, schedule: SIPSchedule) -> bool:
    """Return True when the viewer authored the schedule or is an admin."""
    return viewer.is_admin or schedule.member_id == viewer.user_id


def resolve_owner(viewer: Viewer, requested_member_id: str | None) -> str:
    """Return the member a new transaction is recorded for.

    Admins may record on behalf of any member; everyone else records for
    themselves.
    """
    if viewer.is_admin and requested_member_id:
        return requested_member_id
    return viewer.user_id


__all__ = [
    "resolve_member_selection",
    "visible_members",
    "can_modify_transaction",
    "can_manage_schedule",
    "resolve_owner",
]
