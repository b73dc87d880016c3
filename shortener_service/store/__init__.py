"""
Mapping store module for URL shortener.
Implements Strategy Pattern for flexible persistence backends.
"""

from .strategies import MappingStore, SQLAlchemyMappingStore, InMemoryMappingStore
from .factory import StoreFactory, StoreBackend

__all__ = [
    "MappingStore",
    "SQLAlchemyMappingStore",
    "InMemoryMappingStore",
    "StoreFactory",
    "StoreBackend",
]
