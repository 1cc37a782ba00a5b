import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from message_processor.infrastructure.database import SQLAlchemyUnitOfWork, create_async_db_and_tables


@pytest_asyncio.fixture
async def engine():
    """Private in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_async_db_and_tables(bind=engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def sql_uow(db_session):
    # SQLite has no READ COMMITTED level
    return SQLAlchemyUnitOfWork(db_session, isolation_level=None)
