from fastapi import APIRouter, Depends
from quotalink_app.schemas.url import StatsResponse, SweepResponse
from quotalink_app.services.shortener_engine import ShortenerEngine
from quotalink_app.dependencies import get_engine

router = APIRouter(tags=["maintenance"])


@router.get("/stats", response_model=StatsResponse)
def get_stats(engine: ShortenerEngine = Depends(get_engine)):
    """Storage statistics"""
    return engine.stats()


@router.post("/maintenance/sweep", response_model=SweepResponse)
def run_sweep(engine: ShortenerEngine = Depends(get_engine)):
    """Run one expiry sweep now instead of waiting for the scheduler"""
    return SweepResponse(swept=engine.sweep())
