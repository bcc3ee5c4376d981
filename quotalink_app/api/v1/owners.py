from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from quotalink_app.schemas.url import OwnerResponse, URLResponse
from quotalink_app.services.shortener_engine import ShortenerEngine
from quotalink_app.dependencies import get_engine

router = APIRouter(prefix="/owners", tags=["owners"])


@router.post("/", response_model=OwnerResponse, status_code=status.HTTP_201_CREATED)
def create_owner(engine: ShortenerEngine = Depends(get_engine)):
    """Allocate a new owner id"""
    return engine.get_owner(engine.create_owner())


@router.get("/{owner_id}", response_model=OwnerResponse)
def get_owner(owner_id: UUID, engine: ShortenerEngine = Depends(get_engine)):
    owner = engine.get_owner(owner_id)
    if not owner:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Owner not found"
        )
    return owner


@router.get("/{owner_id}/urls", response_model=List[URLResponse])
def list_owner_urls(owner_id: UUID, engine: ShortenerEngine = Depends(get_engine)):
    """All records of one owner, oldest first (expired ones included)"""
    if not engine.get_owner(owner_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Owner not found"
        )
    return engine.list_for_owner(owner_id)
