"""
Mapping store strategies using Strategy Pattern.
Allows switching between persistence backends (SQLAlchemy, In-Memory)
without changing the service layer.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shortener_service.database.connection import Base, create_session_factory
from shortener_service.exceptions import StoreBackendError, StoreConflictError
from shortener_service.models.url import UrlMappingRecord
from shortener_service.schemas.url import UrlMapping

logger = logging.getLogger(__name__)


class MappingStore(ABC):
    """
    Abstract base class for mapping stores.
    
    Contract shared by every implementation:
    - save() inserts a new mapping, or raises StoreConflictError if the
      code is taken (the existing mapping is left untouched), or
      StoreBackendError for any other persistence failure.
    - find() returns the mapping, None if the code is unknown, or raises
      StoreBackendError. It never modifies anything.
    
    All methods are async because store operations involve I/O.
    """
    
    @abstractmethod
    async def save(self, short_code: str, original_url: str) -> None:
        """
        Persist a new mapping.
        
        Args:
            short_code: Unique short code
            original_url: Target URL, stored verbatim
            
        Raises:
            StoreConflictError: short_code already exists
            StoreBackendError: any other persistence failure
        """
        pass
    
    @abstractmethod
    async def find(self, short_code: str) -> Optional[UrlMapping]:
        """
        Look up a mapping.
        
        Args:
            short_code: Short code to resolve
            
        Returns:
            The mapping, or None if the code is unknown
            
        Raises:
            StoreBackendError: persistence failure
        """
        pass
    
    async def create_schema(self) -> None:
        """Prepare the underlying storage (no-op by default)"""
    
    async def close(self) -> None:
        """Release resources held by the store (no-op by default)"""


class SQLAlchemyMappingStore(MappingStore):
    """
    Relational store backed by a pooled SQLAlchemy engine.
    
    Every operation opens a short-lived session, runs a single statement
    and returns the connection to the pool. The blocking database call
    runs in the threadpool so it never stalls the event loop.
    """
    
    def __init__(self, engine: Engine):
        """
        Initialize the store.
        
        Args:
            engine: Engine owning the connection pool (created at startup)
        """
        self.engine = engine
        self.session_factory = create_session_factory(engine)
    
    async def save(self, short_code: str, original_url: str) -> None:
        await run_in_threadpool(self._save_sync, short_code, original_url)
    
    async def find(self, short_code: str) -> Optional[UrlMapping]:
        return await run_in_threadpool(self._find_sync, short_code)
    
    async def create_schema(self) -> None:
        await run_in_threadpool(self._create_schema_sync)
    
    async def close(self) -> None:
        await run_in_threadpool(self.engine.dispose)
    
    def _save_sync(self, short_code: str, original_url: str) -> None:
        with self.session_factory() as session:
            session.add(UrlMappingRecord(short_code=short_code, original_url=original_url))
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise StoreConflictError(short_code, original_error=e) from e
            except SQLAlchemyError as e:
                session.rollback()
                raise StoreBackendError(f"insert of '{short_code}' failed", original_error=e) from e
    
    def _find_sync(self, short_code: str) -> Optional[UrlMapping]:
        try:
            with self.session_factory() as session:
                record = session.get(UrlMappingRecord, short_code)
                if record is None:
                    return None
                return UrlMapping.model_validate(record)
        except SQLAlchemyError as e:
            raise StoreBackendError(f"lookup of '{short_code}' failed", original_error=e) from e
    
    def _create_schema_sync(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StoreBackendError("schema creation failed", original_error=e) from e
        logger.info("Mapping table ready on %s", self.engine.url.render_as_string(hide_password=True))


class InMemoryMappingStore(MappingStore):
    """
    In-memory store using a Python dict.
    
    Pros:
    - No external dependencies
    - Good for development and testing
    
    Cons:
    - Lost on restart
    - Not shared between processes
    
    Note: Async for interface consistency, but operations are instant.
    The lock keeps check-and-insert atomic when called from several threads.
    """
    
    def __init__(self):
        self._mappings: Dict[str, str] = {}
        self._lock = threading.Lock()
    
    async def save(self, short_code: str, original_url: str) -> None:
        with self._lock:
            if short_code in self._mappings:
                raise StoreConflictError(short_code)
            self._mappings[short_code] = original_url
    
    async def find(self, short_code: str) -> Optional[UrlMapping]:
        original_url = self._mappings.get(short_code)
        if original_url is None:
            return None
        return UrlMapping(short_code=short_code, original_url=original_url)
    
    def __len__(self) -> int:
        return len(self._mappings)
