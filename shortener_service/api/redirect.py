from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from shortener_service.services.url_service import URLService, redirect_target
from shortener_service.dependencies import get_url_service

router = APIRouter(tags=["redirect"])


@router.get("/{short_code}")
async def redirect_to_original_url(
    short_code: str,
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.
    
    Unknown codes and store failures both redirect to /404; the
    service logs which of the two it was.
    """
    result = await url_service.lookup(short_code)
    return RedirectResponse(url=redirect_target(result), status_code=307)
