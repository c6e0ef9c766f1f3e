"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

from src.domain.models import MemberRole, Viewer
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class FinanceSettings:
    """Runtime settings for the family finance dashboard.

    Attributes:
        currency_code: Display currency for amounts.
        family_group_id: Family group whose ledger is loaded.
        user_id: Signed-in user id, supplied by the auth collaborator.
        user_role: Role of the signed-in user within the family group.
    """

    currency_code: str = "INR"
    family_group_id: str = "default"
    user_id: str = "self"
    user_role: MemberRole = MemberRole.MEMBER

    @classmethod
    def from_env(cls) -> "FinanceSettings":
        """Build settings from environment variables.

        Returns:
            FinanceSettings: Settings sourced from environment variables.
        """
        currency = os.getenv("FINANCE_CURRENCY", "INR").strip().upper()
        family_group_id = (
            os.getenv("FINANCE_FAMILY_GROUP_ID", "default").strip()
            or "default"
        )
        user_id = os.getenv("FINANCE_USER_ID", "self").strip() or "self"
        user_role = cls._parse_role(os.getenv("FINANCE_USER_ROLE", "member"))
        return cls(
            currency_code=currency or "INR",
            family_group_id=family_group_id,
            user_id=user_id,
            user_role=user_role,
        )

    @staticmethod
    def _parse_role(raw_role: str) -> MemberRole:
        """Parse a role name, falling back to a plain member.

        Args:
            raw_role: Raw role value from the environment.

        Returns:
            MemberRole: Parsed role.
        """
        cleaned = raw_role.strip().lower()
        try:
            return MemberRole(cleaned)
        except ValueError:
            get_app_logger().warning(
                f"Unknown FINANCE_USER_ROLE '{raw_role}', using member."
            )
            return MemberRole.MEMBER

    def viewer(self) -> Viewer:
        """Return the viewer described by these settings."""
        return Viewer(
            user_id=self.user_id,
            role=self.user_role,
            family_group_id=self.family_group_id,
        )


__all__ = ["FinanceSettings"]
