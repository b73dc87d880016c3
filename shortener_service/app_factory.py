"""
Application factory.

Builds the FastAPI app with its mapping store, service and routers.
The store (and the connection pool behind it) is created here once
and shared read-only by every request.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from shortener_service.api import redirect, urls
from shortener_service.config import Settings, get_settings
from shortener_service.logging_config import setup_logging
from shortener_service.middleware import LoggingMiddleware
from shortener_service.services.url_service import URLService
from shortener_service.store import MappingStore, StoreBackend, StoreFactory

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[MappingStore] = None
) -> FastAPI:
    """
    Create the FastAPI application.
    
    Args:
        settings: Application settings (defaults to the environment)
        store: Mapping store to use instead of the configured backend
        
    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    
    if store is None:
        store = StoreFactory.create(StoreBackend(settings.store_backend), settings)
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.create_schema()
        logger.info(
            "%s %s serving short URLs under %s",
            settings.app_name, settings.app_version, settings.public_base_url
        )
        yield
        await store.close()
    
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A URL shortener service built with FastAPI",
        debug=settings.debug,
        lifespan=lifespan
    )
    
    app.state.settings = settings
    app.state.url_service = URLService(
        store=store,
        base_url=settings.public_base_url,
        max_attempts=settings.shorten_max_attempts
    )
    
    app.add_middleware(LoggingMiddleware)
    
    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "environment": settings.environment}
    
    ######## Include routers
    # The catch-all redirect route goes last
    app.include_router(urls.router)
    app.include_router(redirect.router)
    
    return app
