"""Domain models for family members, viewers and SIP schedules."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from src.domain.constants import ALL_MEMBERS_TOKEN


class MemberRole(str, Enum):
    """Role of a user inside a family group."""

    ADMIN = "admin"
    MEMBER = "member"


@dataclass(frozen=True)
class Member:
    """Family member used as a filter dimension and display label."""

    id: str
    family_group_id: str
    name: str
    relation: str


@dataclass(frozen=True)
class Viewer:
    """The signed-in user looking at the dashboard."""

    user_id: str
    role: MemberRole = MemberRole.MEMBER
    family_group_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN


@dataclass(frozen=True)
class MemberSelection:
    """Which members' transactions a view covers.

    ``member_id`` is ``None`` for the whole family, otherwise the id of the
    single member selected.
    """

    member_id: str | None = None

    @classmethod
    def all_members(cls) -> "MemberSelection":
        return cls(member_id=None)

    @classmethod
    def for_member(cls, member_id: str) -> "MemberSelection":
        return cls(member_id=member_id)

    @classmethod
    def parse(cls, raw: str | None) -> "MemberSelection":
        """Parse a selector value where ``"all"`` or blank means everyone."""
        if raw is None:
            return cls.all_members()
        cleaned = raw.strip()
        if not cleaned or cleaned.lower() == ALL_MEMBERS_TOKEN:
            return cls.all_members()
        return cls.for_member(cleaned)

    @property
    def is_all(self) -> bool:
        return self.member_id is None

    def includes(self, member_id: str) -> bool:
        return self.is_all or self.member_id == member_id

    def to_token(self) -> str:
        return ALL_MEMBERS_TOKEN if self.member_id is None else self.member_id


@dataclass(frozen=True)
class SIPSchedule:
    """User-authored recurring SIP declaration.

    Schedules only feed the upcoming-due projection; they never change
    holdings math.
    """

    id: str
    member_id: str
    asset_name: str
    amount: Decimal
    day_of_month: int
    start_date: date
    active: bool = True
    frequency: str = "Monthly"
    family_group_id: str | None = None


@dataclass(frozen=True)
class UpcomingSIP:
    """Active schedule with its next due date."""

    schedule: SIPSchedule
    due_date: date


__all__ = [
    "MemberRole",
    "Member",
    "Viewer",
    "MemberSelection",
    "SIPSchedule",
    "UpcomingSIP",
]
