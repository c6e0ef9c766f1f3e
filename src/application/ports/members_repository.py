"""Port for reading family members."""

from typing import Protocol

from src.domain.models import Member


class MembersRepositoryPort(Protocol):
    """Port exposing read access to family members."""

    def fetch_members(self, family_group_id: str) -> list[Member]:
        """Return the members of a family group."""


__all__ = ["MembersRepositoryPort"]
