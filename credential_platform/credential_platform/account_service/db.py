from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str, timeout_seconds: int = 5) -> Engine:
    if database_url.startswith("sqlite"):
        # SQLite waits on a locked database for `timeout` seconds before failing
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": timeout_seconds},
        )
    return create_engine(database_url, pool_pre_ping=True, pool_timeout=timeout_seconds)


def build_session_factory(engine: Engine) -> sessionmaker:
    # expire_on_commit=False keeps returned Account rows readable after the session closes
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """
    Create the accounts table and its unique indexes if they do not exist.
    Should be called on application startup.
    """
    from .models import Account  # noqa: F401  registers the table on Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized: tables=%s", sorted(Base.metadata.tables))
