"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.routes import (
    auth,
    health,
    market_data,
    messages,
    photos,
    profiles,
    properties,
    saved,
    storage,
)
from app.core.config import settings
from app.core.database import Base, engine
from app.core.exceptions import AccessError, ValidationError
from app.core.logging_config import configure_logging

# Import models for Base.metadata.create_all - order matters for foreign keys
from app.models import (
    user,  # noqa: F401
    profile,  # noqa: F401
    property,  # noqa: F401
    property_photo,  # noqa: F401
    saved_property,  # noqa: F401
    message,  # noqa: F401
    market_data as market_data_model,  # noqa: F401
    processing_log,  # noqa: F401
)

configure_logging()

BUCKET_DIR = Path(settings.STORAGE_ROOT) / settings.STORAGE_BUCKET


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    # Startup: create database tables and the image bucket directory
    Base.metadata.create_all(bind=engine)
    BUCKET_DIR.mkdir(parents=True, exist_ok=True)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Real-estate marketplace API with row-level access control",
    lifespan=lifespan,
)


@app.exception_handler(AccessError)
async def access_error_handler(request: Request, exc: AccessError) -> JSONResponse:
    """Render access-layer errors as JSON with their status code."""
    content: dict = {"detail": exc.detail}
    if isinstance(exc, ValidationError):
        content["reasons"] = exc.reasons
    return JSONResponse(status_code=exc.status_code, content=content)


@app.get("/")
def root() -> dict[str, str]:
    """Service banner."""
    return {"message": f"{settings.PROJECT_NAME} API", "version": settings.VERSION}


# Public read access to uploaded images
app.mount(
    f"/storage/{settings.STORAGE_BUCKET}",
    StaticFiles(directory=str(BUCKET_DIR), check_dir=False),
    name="property-images",
)

# Include API routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(auth.router, prefix="/api")
app.include_router(profiles.router, prefix="/api")
app.include_router(properties.router, prefix="/api")
app.include_router(photos.router, prefix="/api")
app.include_router(saved.router, prefix="/api")
app.include_router(messages.router, prefix="/api")
app.include_router(market_data.router, prefix="/api")
app.include_router(storage.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
