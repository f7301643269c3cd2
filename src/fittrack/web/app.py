"""FastAPI application for the fit-track REST API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import config
from ..db.engine import get_db_path, init_db
from .routers import activities, dashboard, nutrition, statistics, users, weight, workouts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    # Schema creation is idempotent, so run it on every start
    await init_db(app.state.db_path)
    logger.info("Serving database %s", app.state.db_path)
    yield


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{field}: {first['msg']}" if field else first["msg"]


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config.configure_logging()

    app = FastAPI(
        title=config.APP_NAME,
        description="Personal fitness tracker: weight, nutrition and workouts",
        version=config.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.db_path = Path(db_path) if db_path else get_db_path()

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": _validation_message(exc)})

    @app.exception_handler(ValueError)
    async def value_error(request: Request, exc: ValueError):
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

    app.include_router(users.router)
    app.include_router(weight.router)
    app.include_router(nutrition.router)
    app.include_router(workouts.router)
    app.include_router(dashboard.router)
    app.include_router(activities.router)
    app.include_router(statistics.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": config.APP_VERSION}

    return app
