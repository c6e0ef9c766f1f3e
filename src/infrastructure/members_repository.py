"""SQLAlchemy-backed repository for family members."""

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.members_repository import MembersRepositoryPort
from src.domain.models import Member


CREATE_MEMBERS_SQL = """
CREATE TABLE IF NOT EXISTS members (
    id TEXT PRIMARY KEY,
    family_group_id TEXT NOT NULL,
    name TEXT NOT NULL,
    relation TEXT
)
"""


class SqlAlchemyMembersRepository(MembersRepositoryPort):
    """Repository backed by SQLAlchemy for family members."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
        """
        self._db_port = db_port

    def prepare_storage(self) -> None:
        """Ensure the members table exists."""
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_MEMBERS_SQL)

    def fetch_members(self, family_group_id: str) -> list[Member]:
        """Return the family members ordered by name."""
        query = text(
            """
            SELECT id, family_group_id, name, relation
            FROM members
            WHERE family_group_id = :family_group_id
            ORDER BY name
            """
        )
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                query,
                {"family_group_id": family_group_id},
            ).all()
        return [
            Member(
                id=row.id,
                family_group_id=row.family_group_id,
                name=row.name,
                relation=row.relation or "Member",
            )
            for row in rows
        ]


__all__ = ["SqlAlchemyMembersRepository", "CREATE_MEMBERS_SQL"]
