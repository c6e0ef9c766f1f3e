"""Port for user-authored SIP schedules."""

from typing import Protocol

from src.domain.models import SIPSchedule


class SIPSchedulesRepositoryPort(Protocol):
    """Port exposing SIP schedules."""

    def fetch_schedules(self, family_group_id: str) -> list[SIPSchedule]:
        """Return the SIP schedules of a family group."""

    def add_schedule(self, schedule: SIPSchedule) -> SIPSchedule:
        """Store a schedule and return it with its assigned id."""

    def get_schedule(self, schedule_id: str) -> SIPSchedule | None:
        """Return one schedule, or None when it does not exist."""

    def delete_schedule(self, schedule_id: str) -> None:
        """Remove a schedule."""


__all__ = ["SIPSchedulesRepositoryPort"]
