"""Domain policies package."""

from .member_access import (
    can_manage_schedule,
    can_modify_transaction,
    resolve_member_selection,
    resolve_owner,
    visible_members,
)

__all__ = [
    "can_manage_schedule",
    "can_modify_transaction",
    "resolve_member_selection",
    "resolve_owner",
    "visible_members",
]
