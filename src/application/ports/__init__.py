"""Application ports package."""

from .database import DatabaseEnginePort
from .members_repository import MembersRepositoryPort
from .price_overrides_repository import PriceOverridesRepositoryPort
from .sip_schedules_repository import SIPSchedulesRepositoryPort
from .transactions_repository import TransactionsRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "MembersRepositoryPort",
    "PriceOverridesRepositoryPort",
    "SIPSchedulesRepositoryPort",
    "TransactionsRepositoryPort",
]
