"""
Fixtures for integration tests.

Provides:
- In-memory database with SAVEPOINT support
- A user with two active connected accounts
- Repositories and services bound to the test session
- Test client for FastAPI app
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Callable, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.application.services import (
    ExplanationService,
    IngestionService,
    ScoringService,
)
from src.core.dependencies import (
    get_account_repository,
    get_score_repository,
    get_transaction_repository,
)
from src.domain.entities import Account, AccountType
from src.infrastructure.database import Base, enable_sqlite_savepoints
from src.infrastructure.repositories import (
    PostgresAccountRepository,
    PostgresScoreRepository,
    PostgresTransactionRepository,
)

USER_ID = "user_good"

# (description, direction, base amount)
RECORD_TEMPLATES = [
    ("SALARY ACME CORP", "credit", 42_000),
    ("Swiggy order", "debit", 450),
    ("Uber trip", "debit", 220),
    ("Electricity bill", "debit", 1_800),
    ("Amazon order", "debit", 1_250),
]


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_savepoints(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# Repository and Service Fixtures
# =============================================================================

@pytest.fixture
def transaction_repository(test_session: AsyncSession) -> PostgresTransactionRepository:
    return PostgresTransactionRepository(test_session)


@pytest.fixture
def account_repository(test_session: AsyncSession) -> PostgresAccountRepository:
    return PostgresAccountRepository(test_session)


@pytest.fixture
def score_repository(test_session: AsyncSession) -> PostgresScoreRepository:
    return PostgresScoreRepository(test_session)


@pytest_asyncio.fixture
async def accounts(account_repository: PostgresAccountRepository) -> List[Account]:
    """Two active accounts for USER_ID and an inactive one."""
    created = [
        Account(user_id=USER_ID, account_type=AccountType.SAVINGS, institution_name="HDFC"),
        Account(user_id=USER_ID, account_type=AccountType.CURRENT, institution_name="ICICI"),
        Account(
            user_id=USER_ID,
            account_type=AccountType.CREDIT,
            institution_name="Axis",
            is_active=False,
        ),
    ]
    for account in created:
        await account_repository.save(account)
    return created


@pytest.fixture
def account_ids(accounts: List[Account]) -> List[str]:
    """Ids of the active accounts."""
    return [str(a.id) for a in accounts if a.is_active]


@pytest.fixture
def ingestion_service(
    transaction_repository: PostgresTransactionRepository,
    account_repository: PostgresAccountRepository,
) -> IngestionService:
    return IngestionService(
        transaction_repository=transaction_repository,
        account_repository=account_repository,
    )


@pytest.fixture
def scoring_service(
    transaction_repository: PostgresTransactionRepository,
    account_repository: PostgresAccountRepository,
    score_repository: PostgresScoreRepository,
) -> ScoringService:
    return ScoringService(
        transaction_repository=transaction_repository,
        account_repository=account_repository,
        score_repository=score_repository,
    )


@pytest.fixture
def explanation_service(score_repository: PostgresScoreRepository) -> ExplanationService:
    return ExplanationService(score_repository=score_repository)


# =============================================================================
# Test Data
# =============================================================================

@pytest.fixture
def make_records(account_ids: List[str]) -> Callable[..., List[dict]]:
    """
    Factory for raw provider records.

    Records alternate between the active accounts, rotate through salary,
    food, transport, utilities and shopping descriptions, and are spread
    two days apart ending yesterday.
    """
    now = datetime.now(timezone.utc).replace(microsecond=0)

    def _make(count: int = 60) -> List[dict]:
        records = []
        for i in range(count):
            description, direction, base = RECORD_TEMPLATES[i % len(RECORD_TEMPLATES)]
            records.append({
                "account_id": account_ids[i % len(account_ids)],
                "amount": f"{base + i}.00",
                "direction": direction,
                "occurred_at": (now - timedelta(days=1 + 2 * i)).isoformat(),
                "description": description,
                "balance": "25000.00",
            })
        return records

    return _make


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(test_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client bound to the in-memory database.

    All repositories share the test session, so data seeded through
    fixtures is visible to requests.
    """
    async def override_get_transaction_repository():
        return PostgresTransactionRepository(test_session)

    async def override_get_account_repository():
        return PostgresAccountRepository(test_session)

    async def override_get_score_repository():
        return PostgresScoreRepository(test_session)

    app.dependency_overrides[get_transaction_repository] = override_get_transaction_repository
    app.dependency_overrides[get_account_repository] = override_get_account_repository
    app.dependency_overrides[get_score_repository] = override_get_score_repository

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
