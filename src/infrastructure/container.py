"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.members_repository import MembersRepositoryPort
from src.application.ports.price_overrides_repository import (
    PriceOverridesRepositoryPort,
)
from src.application.ports.sip_schedules_repository import (
    SIPSchedulesRepositoryPort,
)
from src.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from src.application.use_cases.get_portfolio_snapshot import (
    GetPortfolioSnapshotUseCase,
)
from src.application.use_cases.manage_sip_schedules import (
    ManageSIPSchedulesUseCase,
)
from src.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from src.application.use_cases.update_price import UpdatePriceUseCase
from src.application.use_cases.update_transaction import (
    DeleteTransactionUseCase,
    UpdateTransactionUseCase,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.members_repository import SqlAlchemyMembersRepository
from src.infrastructure.price_overrides_repository import (
    SqlAlchemyPriceOverridesRepository,
)
from src.infrastructure.settings import FinanceSettings
from src.infrastructure.sip_schedules_repository import (
    SqlAlchemySIPSchedulesRepository,
)
from src.infrastructure.transactions_repository import (
    SqlAlchemyTransactionsRepository,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_transactions_repository(
    db_port: DatabaseEnginePort | None = None,
) -> TransactionsRepositoryPort:
    """Return the ledger repository."""
    return SqlAlchemyTransactionsRepository(
        db_port or build_database_adapter()
    )


def build_price_repository(
    db_port: DatabaseEnginePort | None = None,
) -> PriceOverridesRepositoryPort:
    """Return the manual price repository."""
    return SqlAlchemyPriceOverridesRepository(
        db_port or build_database_adapter()
    )


def build_sip_schedules_repository(
    db_port: DatabaseEnginePort | None = None,
) -> SIPSchedulesRepositoryPort:
    """Return the SIP schedules repository."""
    return SqlAlchemySIPSchedulesRepository(
        db_port or build_database_adapter()
    )


def build_members_repository(
    db_port: DatabaseEnginePort | None = None,
) -> MembersRepositoryPort:
    """Return the family members repository."""
    return SqlAlchemyMembersRepository(db_port or build_database_adapter())


def prepare_storage(db_port: DatabaseEnginePort | None = None) -> None:
    """Create the ledger tables when they do not exist yet."""
    resolved_db = db_port or build_database_adapter()
    for repository in (
        SqlAlchemyTransactionsRepository(resolved_db),
        SqlAlchemyPriceOverridesRepository(resolved_db),
        SqlAlchemySIPSchedulesRepository(resolved_db),
        SqlAlchemyMembersRepository(resolved_db),
    ):
        repository.prepare_storage()
    get_app_logger().info("Ledger storage ready")


def build_portfolio_snapshot_use_case(
    settings: FinanceSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> GetPortfolioSnapshotUseCase:
    """Return the snapshot use case wired to SQL repositories."""
    resolved_settings = settings or FinanceSettings.from_env()
    resolved_db = db_port or build_database_adapter()
    return GetPortfolioSnapshotUseCase(
        transactions_repository=build_transactions_repository(resolved_db),
        price_repository=build_price_repository(resolved_db),
        family_group_id=resolved_settings.family_group_id,
        currency_code=resolved_settings.currency_code,
    )


def build_record_transaction_use_case(
    settings: FinanceSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> RecordTransactionUseCase:
    """Return the use case recording new transactions."""
    resolved_settings = settings or FinanceSettings.from_env()
    resolved_db = db_port or build_database_adapter()
    return RecordTransactionUseCase(
        transactions_repository=build_transactions_repository(resolved_db),
        price_repository=build_price_repository(resolved_db),
        family_group_id=resolved_settings.family_group_id,
    )


def build_update_price_use_case(
    settings: FinanceSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> UpdatePriceUseCase:
    """Return the use case storing manual quotes."""
    resolved_settings = settings or FinanceSettings.from_env()
    return UpdatePriceUseCase(
        price_repository=build_price_repository(db_port),
        family_group_id=resolved_settings.family_group_id,
    )


def build_update_transaction_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> UpdateTransactionUseCase:
    """Return the use case editing stored transactions."""
    return UpdateTransactionUseCase(
        transactions_repository=build_transactions_repository(db_port),
    )


def build_delete_transaction_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> DeleteTransactionUseCase:
    """Return the use case removing stored transactions."""
    return DeleteTransactionUseCase(
        transactions_repository=build_transactions_repository(db_port),
    )


def build_sip_schedules_use_case(
    settings: FinanceSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> ManageSIPSchedulesUseCase:
    """Return the SIP schedules use case."""
    resolved_settings = settings or FinanceSettings.from_env()
    resolved_db = db_port or build_database_adapter()
    return ManageSIPSchedulesUseCase(
        schedules_repository=build_sip_schedules_repository(resolved_db),
        record_transaction=build_record_transaction_use_case(
            resolved_settings,
            resolved_db,
        ),
        family_group_id=resolved_settings.family_group_id,
    )


__all__ = [
    "build_database_adapter",
    "build_transactions_repository",
    "build_price_repository",
    "build_sip_schedules_repository",
    "build_members_repository",
    "prepare_storage",
    "build_portfolio_snapshot_use_case",
    "build_record_transaction_use_case",
    "build_update_price_use_case",
    "build_update_transaction_use_case",
    "build_delete_transaction_use_case",
    "build_sip_schedules_use_case",
]
