"""Use case for SIP schedules: authoring, projections and payments."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from src.application.ports.sip_schedules_repository import (
    SIPSchedulesRepositoryPort,
)
from src.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from src.domain.models import (
    AssetType,
    Holding,
    Platform,
    SIPSchedule,
    Transaction,
    UpcomingSIP,
    Viewer,
)
from src.domain.policies import can_manage_schedule
from src.domain.services import build_sip_payment, project_upcoming_sips
from src.infrastructure.logging.logger import get_app_logger


class ManageSIPSchedulesUseCase:
    """Author SIP schedules and log their payments."""

    def __init__(
        self,
        schedules_repository: SIPSchedulesRepositoryPort,
        record_transaction: RecordTransactionUseCase,
        family_group_id: str,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            schedules_repository: Port storing SIP schedules.
            record_transaction: Use case storing logged payments.
            family_group_id: Family group the schedules belong to.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._schedules_repository = schedules_repository
        self._record_transaction = record_transaction
        self._family_group_id = family_group_id
        self._logger = logger or get_app_logger()

    def add(
        self,
        viewer: Viewer,
        asset_name: str,
        amount: Decimal,
        day_of_month: int,
        start_date: date,
    ) -> SIPSchedule:
        """Create an active monthly schedule for the viewer.

        Raises:
            ValueError: If the name is blank, the amount not positive or the
                day outside 1..31.
        """
        cleaned = asset_name.strip()
        if not cleaned:
            raise ValueError("asset name is required")
        if not amount > 0:
            raise ValueError(f"amount must be greater than zero, got {amount}")
        if not 1 <= day_of_month <= 31:
            raise ValueError(
                f"day of month must be between 1 and 31, got {day_of_month}"
            )
        schedule = self._schedules_repository.add_schedule(
            SIPSchedule(
                id="",
                member_id=viewer.user_id,
                asset_name=cleaned,
                amount=amount,
                day_of_month=day_of_month,
                start_date=start_date,
                family_group_id=self._family_group_id,
            )
        )
        self._logger.info(
            f"SIP schedule added for {cleaned}: amount={amount}, "
            f"day={day_of_month}"
        )
        return schedule

    def delete(self, viewer: Viewer, schedule_id: str) -> None:
        """Remove a schedule the viewer authored, or any when admin.

        Raises:
            LookupError: If the schedule is not in this family group.
            PermissionError: If the viewer may not remove it.
        """
        schedule = self._schedules_repository.get_schedule(schedule_id)
        if (
            schedule is None
            or schedule.family_group_id != self._family_group_id
        ):
            raise LookupError(f"Unknown SIP schedule: {schedule_id}")
        if not can_manage_schedule(viewer, schedule):
            raise PermissionError(
                f"User {viewer.user_id} cannot delete SIP schedule "
                f"{schedule_id}"
            )
        self._schedules_repository.delete_schedule(schedule_id)
        self._logger.info(f"SIP schedule deleted: {schedule_id}")

    def list_schedules(self) -> list[SIPSchedule]:
        return self._schedules_repository.fetch_schedules(
            self._family_group_id
        )

    def upcoming(self, today: date) -> list[UpcomingSIP]:
        """Return active schedules ordered by their next due date."""
        return project_upcoming_sips(self.list_schedules(), today)

    def log_payment(
        self,
        viewer: Viewer,
        schedule: SIPSchedule,
        nav: Decimal,
        payment_date: date,
        holdings: Sequence[Holding] = (),
    ) -> Transaction:
        """Record one scheduled payment as a SIP transaction.

        The asset type is taken from an existing holding of the same asset,
        defaulting to a mutual fund.

        Raises:
            ValueError: If ``nav`` is not positive.
        """
        existing = next(
            (h for h in holdings if h.asset_name == schedule.asset_name),
            None,
        )
        payment = build_sip_payment(
            schedule,
            nav,
            payment_date,
            asset_type=(
                existing.asset_type if existing else AssetType.MUTUAL_FUND
            ),
            platform=Platform.GROWW,
        )
        return self._record_transaction.save(viewer, payment)


__all__ = ["ManageSIPSchedulesUseCase"]
