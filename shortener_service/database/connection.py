"""
Database engine and session setup.

The engine owns the connection pool. It is created once at startup
and handed to the mapping store; nothing else reconfigures it.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from shortener_service.config import Settings

Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """
    Create the pooled engine for the configured database URL.
    
    SQLite connections are shared across the threadpool, so the
    same-thread check is disabled for them.
    """
    url = settings.database_url
    
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
        )
    
    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to the given engine"""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
