"""SQLAlchemy-backed repository for SIP schedules."""

from dataclasses import replace
from datetime import date
import uuid

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.sip_schedules_repository import (
    SIPSchedulesRepositoryPort,
)
from src.domain.models import SIPSchedule
from src.utils.decimal_utils import coerce_decimal


CREATE_SIP_SCHEDULES_SQL = """
CREATE TABLE IF NOT EXISTS sip_schedules (
    id TEXT PRIMARY KEY,
    family_group_id TEXT,
    member_id TEXT NOT NULL,
    asset_name TEXT NOT NULL,
    amount TEXT NOT NULL,
    day_of_month INTEGER NOT NULL,
    start_date TEXT NOT NULL,
    active INTEGER NOT NULL DEFAULT 1,
    frequency TEXT NOT NULL DEFAULT 'Monthly'
)
"""

_SCHEDULE_COLUMNS = """
    id, family_group_id, member_id, asset_name, amount, day_of_month,
    start_date, active, frequency
"""

SELECT_SCHEDULES_SQL = text(
    f"""
    SELECT {_SCHEDULE_COLUMNS}
    FROM sip_schedules
    WHERE family_group_id = :family_group_id
    ORDER BY asset_name
    """
)

SELECT_SCHEDULE_SQL = text(
    f"SELECT {_SCHEDULE_COLUMNS} FROM sip_schedules WHERE id = :id"
)

INSERT_SCHEDULE_SQL = text(
    """
    INSERT INTO sip_schedules (
        id, family_group_id, member_id, asset_name, amount, day_of_month,
        start_date, active, frequency
    )
    VALUES (
        :id, :family_group_id, :member_id, :asset_name, :amount,
        :day_of_month, :start_date, :active, :frequency
    )
    """
)

DELETE_SCHEDULE_SQL = text("DELETE FROM sip_schedules WHERE id = :id")


def _schedule_from_row(row) -> SIPSchedule:
    return SIPSchedule(
        id=row.id,
        family_group_id=row.family_group_id,
        member_id=row.member_id,
        asset_name=row.asset_name,
        amount=coerce_decimal(row.amount),
        day_of_month=int(row.day_of_month),
        start_date=date.fromisoformat(str(row.start_date)[:10]),
        active=bool(row.active),
        frequency=row.frequency,
    )


class SqlAlchemySIPSchedulesRepository(SIPSchedulesRepositoryPort):
    """Repository backed by SQLAlchemy for SIP schedules."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
        """
        self._db_port = db_port

    def prepare_storage(self) -> None:
        """Ensure the sip_schedules table exists."""
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_SIP_SCHEDULES_SQL)

    def fetch_schedules(self, family_group_id: str) -> list[SIPSchedule]:
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_SCHEDULES_SQL,
                {"family_group_id": family_group_id},
            ).all()
        return [_schedule_from_row(row) for row in rows]

    def get_schedule(self, schedule_id: str) -> SIPSchedule | None:
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_SCHEDULE_SQL,
                {"id": schedule_id},
            ).first()
        return None if row is None else _schedule_from_row(row)

    def add_schedule(self, schedule: SIPSchedule) -> SIPSchedule:
        stored = (
            schedule
            if schedule.id
            else replace(schedule, id=uuid.uuid4().hex)
        )
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.execute(
                INSERT_SCHEDULE_SQL,
                {
                    "id": stored.id,
                    "family_group_id": stored.family_group_id,
                    "member_id": stored.member_id,
                    "asset_name": stored.asset_name,
                    "amount": str(stored.amount),
                    "day_of_month": stored.day_of_month,
                    "start_date": stored.start_date.isoformat(),
                    "active": 1 if stored.active else 0,
                    "frequency": stored.frequency,
                },
            )
        return stored

    def delete_schedule(self, schedule_id: str) -> None:
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.execute(DELETE_SCHEDULE_SQL, {"id": schedule_id})


__all__ = [
    "SqlAlchemySIPSchedulesRepository",
    "CREATE_SIP_SCHEDULES_SQL",
]
