import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from shortener_service.exceptions import (
    ShortCodeExhaustedError,
    StoreBackendError,
    StoreConflictError,
)
from shortener_service.schemas.url import ShortenResponse, UrlMapping
from shortener_service.services.short_code import generate_code
from shortener_service.store.strategies import MappingStore

logger = logging.getLogger(__name__)

NOT_FOUND_PATH = "/404"


class LookupStatus(Enum):
    """Outcome of resolving a short code"""
    FOUND = "found"
    ABSENT = "absent"
    BACKEND_ERROR = "backend_error"


@dataclass(frozen=True)
class LookupResult:
    status: LookupStatus
    mapping: Optional[UrlMapping] = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND


class URLService:
    """
    URL Service with the mapping store injected.
    
    The service holds no per-request state: a reference to the store,
    the public base URL and the code generator, all fixed at startup.
    Every read goes to the store.
    """
    
    def __init__(
        self,
        store: MappingStore,
        base_url: str,
        code_generator: Callable[[], str] = generate_code,
        max_attempts: int = 1
    ):
        """
        Initialize URL service with dependencies.
        
        Args:
            store: Mapping store (SQLAlchemy in production, in-memory in tests)
            base_url: Public base URL used to compose short URLs
            code_generator: Callable returning a fresh short code
            max_attempts: Codes tried when the store reports a conflict
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.base_url = base_url.rstrip("/")
        self.code_generator = code_generator
        self.max_attempts = max_attempts

    def compose_short_url(self, short_code: str) -> str:
        return f"{self.base_url}/{short_code}"

    async def shorten(self, original_url: str) -> ShortenResponse:
        """Create a new short URL
        
        Always creates a new mapping, even if the URL was shortened before.
        
        A conflict means the generated code is already taken. With the
        default max_attempts=1 this fails the request; higher values
        generate a new code and try again. Backend failures are never retried.
        
        Raises:
            ShortCodeExhaustedError: every attempt hit an existing code
            StoreBackendError: the store failed
        """
        last_conflict = None
        for attempt in range(1, self.max_attempts + 1):
            short_code = self.code_generator()
            try:
                await self.store.save(short_code, original_url)
            except StoreConflictError as e:
                logger.warning(
                    "Short code collision on '%s' (attempt %d/%d)",
                    short_code, attempt, self.max_attempts
                )
                last_conflict = e
                continue
            except StoreBackendError:
                logger.exception("Store failure while saving '%s'", short_code)
                raise
            
            logger.debug("Stored mapping %s -> %s", short_code, original_url)
            return ShortenResponse(
                short_code=short_code,
                short_url=self.compose_short_url(short_code)
            )
        
        raise ShortCodeExhaustedError(self.max_attempts, last_conflict)

    async def lookup(self, short_code: str) -> LookupResult:
        """
        Resolve a short code into a tagged result.
        
        Absence and backend failure are kept apart here (and logged
        differently) even though both endpoints answer them the same way.
        """
        try:
            mapping = await self.store.find(short_code)
        except StoreBackendError:
            logger.exception("Store failure while resolving '%s'", short_code)
            return LookupResult(LookupStatus.BACKEND_ERROR)
        
        if mapping is None:
            logger.debug("Short code '%s' not found", short_code)
            return LookupResult(LookupStatus.ABSENT)
        
        return LookupResult(LookupStatus.FOUND, mapping)


def resolve_payload(result: LookupResult) -> Optional[UrlMapping]:
    """Body of the lookup endpoint: the mapping, or None (JSON null)"""
    return result.mapping if result.found else None


def redirect_target(result: LookupResult) -> str:
    """Location of the redirect: the stored URL, or the not-found page"""
    return result.mapping.original_url if result.found else NOT_FOUND_PATH
