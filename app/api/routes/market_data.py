"""Market data API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.api.deps import get_current_actor
from app.core.database import get_db
from app.schemas.market_data import MarketDataResponse
from app.services import market_data as market_service

router = APIRouter(tags=["market data"])


@router.get("/market-data", response_model=list[MarketDataResponse])
def list_market_data(
    region: str | None = None,
    skip: int = 0,
    limit: int = 100,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> list[MarketDataResponse]:
    """Average prices per region and period."""
    rows = market_service.get_market_data(db, actor, region, skip, limit)
    return [MarketDataResponse.model_validate(r) for r in rows]
