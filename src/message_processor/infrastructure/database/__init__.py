from .async_db import (
    AsyncSessionFactory,
    check_database_health,
    create_async_db_and_tables,
    engine,
    get_async_db,
)
from .unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    "AsyncSessionFactory",
    "SQLAlchemyUnitOfWork",
    "check_database_health",
    "create_async_db_and_tables",
    "engine",
    "get_async_db",
]
