from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from quotalink_app.exceptions import InvalidAliasError
from quotalink_app.services.shortener_engine import AccessStatus, ShortenerEngine
from quotalink_app.dependencies import get_engine

router = APIRouter(tags=["redirect"])


@router.get("/{alias}")
def redirect_to_long_url(
    alias: str,
    engine: ShortenerEngine = Depends(get_engine)
):
    """
    Redirect to the original URL.

    Flow:
    1. Malformed alias -> 400 (no lookup)
    2. Unknown alias -> 404
    3. Expired / over quota / inactive -> 410 with the reason code
    4. Otherwise the click is counted and we answer 302
    """
    try:
        result = engine.access(alias)
    except InvalidAliasError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if result.status is AccessStatus.NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )

    if result.status is AccessStatus.INACCESSIBLE:
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail={"alias": alias, "reason": result.reason.value}
        )

    return RedirectResponse(url=result.original_url, status_code=status.HTTP_302_FOUND)
