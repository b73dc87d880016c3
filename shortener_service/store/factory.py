"""
Factory for creating mapping store instances.
"""

import logging
from enum import Enum

from shortener_service.config import Settings
from shortener_service.database.connection import create_db_engine
from .strategies import InMemoryMappingStore, MappingStore, SQLAlchemyMappingStore

logger = logging.getLogger(__name__)


class StoreBackend(Enum):
    """Available mapping store backends"""
    SQLALCHEMY = "sqlalchemy"
    MEMORY = "memory"


class StoreFactory:
    """
    Simple factory for creating mapping stores.
    
    Unlike a module-level singleton, each call builds a fresh store; the
    application creates one at startup and injects it where it is needed.
    """
    
    @staticmethod
    def create(backend: StoreBackend, settings: Settings) -> MappingStore:
        """
        Create a store for the given backend.
        
        Args:
            backend: Type of store backend (from enum)
            settings: Application settings (database URL, pool sizing)
            
        Returns:
            New MappingStore instance
        """
        if backend == StoreBackend.SQLALCHEMY:
            store = SQLAlchemyMappingStore(create_db_engine(settings))
            logger.info("SQLAlchemy mapping store initialized")
            
        elif backend == StoreBackend.MEMORY:
            store = InMemoryMappingStore()
            logger.info("In-memory mapping store initialized")
            
        else:
            raise ValueError(f"Unknown store backend: {backend}")
        
        return store
