"""Redirect routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

from shortener.errors import NotFoundError, StoreUnavailableError, ValidationError

router = APIRouter()


@router.get("/{short_code}", include_in_schema=False)
async def redirect(request: Request, short_code: str):
    """Redirect a short code to its long URL."""
    service = request.app.state.service

    try:
        long_url = await service.resolve(short_code)
    except (NotFoundError, ValidationError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="URL not found")
    except StoreUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage temporarily unavailable",
        )

    return RedirectResponse(
        url=long_url,
        status_code=status.HTTP_302_FOUND,
        headers={"Cache-Control": "no-cache"},
    )
