"""StayHub: FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stayhub.api.v1.apartments import router as apartments_router
from stayhub.api.v1.auth import router as auth_router
from stayhub.api.v1.bookings import router as bookings_router
from stayhub.api.v1.owner import router as owner_router
from stayhub.api.v1.properties import router as properties_router
from stayhub.api.v1.search import router as search_router
from stayhub.config import settings
from stayhub.services.errors import BookingValidationError, NotFoundError

# Configure root logger so all stayhub.* loggers output to stderr.
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    yield
    # Shutdown: dispose engine connections
    from stayhub.database import engine

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Property booking platform: search, pricing, availability and guest bookings.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Domain error translation
# ---------------------------------------------------------------------------


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": f"{exc.entity} not found"})


@app.exception_handler(BookingValidationError)
async def booking_validation_handler(request: Request, exc: BookingValidationError) -> JSONResponse:
    logger.info("Booking rejected: %s", ", ".join(exc.kinds))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": [{"kind": issue.kind, "message": issue.message} for issue in exc.issues]},
    )


# Routers
app.include_router(auth_router)
app.include_router(search_router)
app.include_router(properties_router)
app.include_router(apartments_router)
app.include_router(owner_router)
app.include_router(bookings_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
