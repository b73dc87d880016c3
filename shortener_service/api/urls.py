import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from typing import Optional

from shortener_service.exceptions import ShortCodeExhaustedError, StoreError
from shortener_service.schemas.url import ShortenRequest, ShortenResponse, UrlMapping
from shortener_service.services.url_service import URLService, resolve_payload
from shortener_service.dependencies import get_url_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["urls"])


@router.get("/", response_class=PlainTextResponse)
async def read_root():
    """Greeting"""
    return "Hello from the URL shortener!"


@router.get("/404", response_class=PlainTextResponse)
async def not_found_page():
    """Landing page for redirects of unknown short codes"""
    return "Short URL not found"


@router.post("/shorten", response_model=ShortenResponse)
async def shorten_url(
    payload: ShortenRequest,
    url_service: URLService = Depends(get_url_service)
):
    """Create a new short URL"""
    try:
        return await url_service.shorten(payload.url)
    except (StoreError, ShortCodeExhaustedError) as e:
        logger.error("Shorten request failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create short URL"
        )


@router.get("/get/{short_code}", response_model=Optional[UrlMapping])
async def get_url_mapping(
    short_code: str,
    url_service: URLService = Depends(get_url_service)
):
    """Get the mapping for a short code, or null if there is none"""
    result = await url_service.lookup(short_code)
    return resolve_payload(result)
