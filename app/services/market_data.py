"""Regional market aggregates."""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.access.store import EntityStore
from app.models.enums import Action, Entity
from app.models.market_data import MarketData
from app.models.processing_log import ProcessingLog


def get_market_data(
    db: Session,
    actor: Actor,
    region: str | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[MarketData]:
    """Market aggregates, optionally for one region, latest period first."""
    filters = {"region": region} if region else None
    return EntityStore(db).read(
        Entity.MARKET_DATA,
        filters,
        actor,
        order_by=[MarketData.period.desc(), MarketData.region],
        skip=skip,
        limit=limit,
    )


def record_market_data(
    db: Session,
    actor: Actor,
    region: str,
    period: date,
    avg_price: Decimal | None,
    count_listings: int,
) -> MarketData:
    """Store an aggregate. Only the service actor is allowed to."""
    return EntityStore(db).write(
        Entity.MARKET_DATA,
        Action.INSERT,
        {
            "region": region,
            "period": period,
            "avg_price": avg_price,
            "count_listings": count_listings,
        },
        actor,
    )


def log_processing(
    db: Session,
    actor: Actor,
    photo_storage_path: str,
    status: str,
    error_message: str | None = None,
) -> ProcessingLog:
    """Record the outcome of processing an uploaded photo. Service actor only."""
    return EntityStore(db).write(
        Entity.PROCESSING_LOGS,
        Action.INSERT,
        {
            "photo_storage_path": photo_storage_path,
            "status": status,
            "error_message": error_message,
        },
        actor,
    )
