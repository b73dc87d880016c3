"""
FastAPI dependencies for dependency injection.

The service is built once by the app factory and kept on app.state,
so routes receive it without touching module-level globals. Tests
swap the store by building the app with their own.
"""

from fastapi import Request

from shortener_service.services.url_service import URLService


def get_url_service(request: Request) -> URLService:
    """Get the URLService wired into this application"""
    return request.app.state.url_service
