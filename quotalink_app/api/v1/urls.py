import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from quotalink_app.exceptions import InvalidAliasError, InvalidArgumentError
from quotalink_app.schemas.url import URLCreate, URLResponse
from quotalink_app.services.shortener_engine import ShortenerEngine
from quotalink_app.dependencies import get_engine

router = APIRouter(prefix="/urls", tags=["urls"])


@router.post("/", response_model=URLResponse, status_code=status.HTTP_201_CREATED)
def create_short_url(
    url_data: URLCreate,
    engine: ShortenerEngine = Depends(get_engine)
):
    """Create a new short URL (a new owner id is issued when none is given)"""
    # Saving the record registers the owner
    owner_id = url_data.owner_id or uuid.uuid4()
    try:
        return engine.create(
            url_data.long_url,
            owner_id,
            max_clicks=url_data.max_clicks,
            expiration_hours=url_data.expiration_hours,
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{alias}", response_model=URLResponse)
def get_url_info(
    alias: str,
    engine: ShortenerEngine = Depends(get_engine)
):
    """Get information about a short URL without counting a click"""
    try:
        record = engine.info(alias)
    except InvalidAliasError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return record
