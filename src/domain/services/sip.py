"""SIP aggregation and schedule projections."""

import calendar
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.domain.constants import SIP_ID_SUFFIX
from src.domain.models import (
    AssetType,
    Platform,
    SIPSchedule,
    SIPSummary,
    Transaction,
    TransactionType,
    UpcomingSIP,
)
from src.domain.services.validation import validate_positive_price
from src.utils.decimal_utils import ZERO, percent_or_zero, ratio_or_zero


@dataclass
class _SIPGroup:
    asset_name: str
    last_date: date
    invested: Decimal = ZERO
    units: Decimal = ZERO


def compute_sip_summaries(
    transactions: Iterable[Transaction],
    manual_prices: Mapping[str, Decimal],
) -> list[SIPSummary]:
    """Summarize SIP contributions per SIP group.

    Contributions are purely additive, so no chronological fold is needed.

    Args:
        transactions: Ledger entries; only SIP transactions are used.
        manual_prices: Latest quoted NAV per asset name.

    Returns:
        list[SIPSummary]: One summary per group, in first-seen order.
    """
    groups: dict[str, _SIPGroup] = {}
    for txn in transactions:
        if txn.transaction_type != TransactionType.SIP:
            continue
        key = txn.sip_group_key
        group = groups.get(key)
        if group is None:
            group = _SIPGroup(asset_name=txn.asset_name, last_date=txn.date)
            groups[key] = group
        group.invested += txn.amount
        group.units += txn.quantity
        if txn.date > group.last_date:
            group.last_date = txn.date

    summaries: list[SIPSummary] = []
    for sip_id, group in groups.items():
        avg_nav = ratio_or_zero(group.invested, group.units)
        latest_nav = manual_prices.get(group.asset_name)
        if latest_nav is None:
            latest_nav = avg_nav
        current_value = group.units * latest_nav
        gain_loss = current_value - group.invested
        summaries.append(
            SIPSummary(
                sip_id=sip_id,
                asset_name=group.asset_name,
                total_invested=group.invested,
                total_units=group.units,
                avg_nav=avg_nav,
                latest_nav=latest_nav,
                current_value=current_value,
                gain_loss=gain_loss,
                gain_percent=percent_or_zero(gain_loss, group.invested),
                last_date=group.last_date,
            )
        )
    return summaries


def next_due_date(day_of_month: int, today: date) -> date:
    """Return the next occurrence of ``day_of_month`` on or after today.

    Days past the end of a short month are clamped to its last day.
    """
    candidate = _clamped_date(today.year, today.month, day_of_month)
    if candidate >= today:
        return candidate
    year, month = (
        (today.year + 1, 1) if today.month == 12
        else (today.year, today.month + 1)
    )
    return _clamped_date(year, month, day_of_month)


def _clamped_date(year: int, month: int, day: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(day, last_day)))


def project_upcoming_sips(
    schedules: Iterable[SIPSchedule],
    today: date,
) -> list[UpcomingSIP]:
    """Project the next due date of every active schedule.

    Args:
        schedules: User-authored SIP schedules.
        today: Reference date for the projection.

    Returns:
        list[UpcomingSIP]: Active schedules sorted by due date.
    """
    upcoming = [
        UpcomingSIP(
            schedule=schedule,
            due_date=next_due_date(schedule.day_of_month, today),
        )
        for schedule in schedules
        if schedule.active
    ]
    return sorted(upcoming, key=lambda item: item.due_date)


def build_sip_payment(
    schedule: SIPSchedule,
    nav: Decimal,
    payment_date: date,
    *,
    asset_type: AssetType = AssetType.MUTUAL_FUND,
    platform: Platform = Platform.GROWW,
    transaction_id: str = "",
) -> Transaction:
    """Build the SIP transaction recording one scheduled payment.

    Args:
        schedule: Schedule being paid.
        nav: Unit price on the payment date.
        payment_date: Date of the payment.
        asset_type: Instrument family, usually taken from the holding.
        platform: Custodian label.
        transaction_id: Identifier to assign, empty for new records.

    Returns:
        Transaction: SIP transaction buying ``amount / nav`` units.

    Raises:
        ValueError: If ``nav`` is not positive.
    """
    validate_positive_price(nav, label="NAV")
    return Transaction(
        id=transaction_id,
        member_id=schedule.member_id,
        asset_name=schedule.asset_name,
        asset_type=asset_type,
        transaction_type=TransactionType.SIP,
        date=payment_date,
        quantity=schedule.amount / nav,
        price=nav,
        sip_id=f"{schedule.asset_name}{SIP_ID_SUFFIX}",
        platform=platform,
        notes="SIP Schedule Auto-log",
        family_group_id=schedule.family_group_id,
    )


__all__ = [
    "compute_sip_summaries",
    "next_due_date",
    "project_upcoming_sips",
    "build_sip_payment",
]
