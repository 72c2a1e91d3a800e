# File: clipwork/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from clipwork.core.config.settings import settings

# check_same_thread=False is needed only for SQLite
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}
    settings.ensure_dirs()

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Creates the ledger tables if they don't exist."""
    from clipwork.core.database.base import Base
    import clipwork.core.jobs.models  # noqa: F401  (registers JobModel)

    Base.metadata.create_all(bind=engine)
