from agilesync.shared.database.base_model import Base
from agilesync.shared.database.base_repository import Mapper, Repository, SqlAlchemyRepository
from agilesync.shared.database.engine import (
    check_connection,
    close_database_engine,
    create_database_engine,
    create_schema,
    create_session_factory,
)

__all__ = [
    "Base",
    "Mapper",
    "Repository",
    "SqlAlchemyRepository",
    "check_connection",
    "close_database_engine",
    "create_database_engine",
    "create_schema",
    "create_session_factory",
]
