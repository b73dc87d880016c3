"""
Custom exceptions for the URL shortener.

Absence of a short code is not an exception: lookups return None.
"""

from typing import Optional


class ShortenerError(Exception):
    """Base exception for the URL shortener service."""
    pass


class StoreError(ShortenerError):
    """Raised when a mapping store operation fails."""
    
    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message)


class StoreConflictError(StoreError):
    """Raised when a short code is already mapped (unique key violation)."""
    
    def __init__(self, short_code: str, original_error: Optional[Exception] = None):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' already exists", original_error)


class StoreBackendError(StoreError):
    """Raised on connectivity, disk or corruption failures of the store."""
    
    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(f"Store backend error: {message}", original_error)


class ShortCodeExhaustedError(ShortenerError):
    """Raised when every shorten attempt collided with an existing code."""
    
    def __init__(self, attempts: int, last_error: StoreConflictError):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Could not store a unique short code after {attempts} attempts"
        )
