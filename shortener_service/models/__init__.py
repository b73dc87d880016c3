"""
Database models for the URL shortener.

A single table holds the write-once short code to URL mappings.
"""

from .url import UrlMappingRecord

__all__ = ["UrlMappingRecord"]
