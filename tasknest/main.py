"""
TASKNEST API - Main Application

Task management API with JWT bearer authentication and server-side
session records.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasknest.config import settings
from tasknest.database import database, get_database, ping
from tasknest.errors import AppError, AuthError
from tasknest.responses import ApiResponse, error_response
from tasknest.security import validate_security_config
from tasknest.auth.dependencies import get_token_codec
from tasknest.auth.guard import AuthGuardMiddleware, WWW_AUTHENTICATE
from tasknest.auth.router import router as auth_router
from tasknest.sessions.repository import MongoSessionRepository
from tasknest.sessions.router import router as sessions_router
from tasknest.tasks.repository import TaskRepository
from tasknest.tasks.router import router as tasks_router
from tasknest.users.repository import MongoUserRepository
from tasknest.users.router import router as users_router
from tasknest.dashboard.router import router as dashboard_router

import logging

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: refuse to run without a signing secret
    validate_security_config()
    get_token_codec()
    # Startup: Connect to MongoDB
    await database.connect()
    db = database.get_database()
    for repository in (MongoUserRepository(db), MongoSessionRepository(db), TaskRepository(db)):
        await repository.ensure_indexes()

    yield

    # Shutdown: Disconnect from MongoDB
    await database.disconnect()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Personal task management with bearer-token sessions",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# Route guard. Must be added before CORS so guard 401s still get CORS headers.
app.add_middleware(AuthGuardMiddleware, codec_provider=get_token_codec)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = WWW_AUTHENTICATE if isinstance(exc, AuthError) else None
    return error_response(exc.status_code, exc.message, headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first validation problem as a 400."""
    errors = exc.errors()
    message = "Invalid data"
    if errors:
        first = errors[0]
        field = next((str(part) for part in reversed(first.get("loc", ())) if isinstance(part, str)), None)
        message = f"{field}: {first['msg']}" if field and field != "body" else first["msg"]
    return error_response(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all for unexpected failures.

    The exception message is returned to the client; the traceback only goes
    to the log.
    """
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal server error")


@app.get("/health", tags=["Health"])
async def health_check(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)],
):
    """
    Health check endpoint.

    Pings MongoDB; used by Docker health checks and load balancers.
    """
    try:
        await ping(db)
    except Exception as e:
        logger.warning(f"Health check failed: {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database unreachable")

    return ApiResponse(
        data={
            "status": "ok",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "db": "ok",
        }
    )


@app.get("/", tags=["Root"])
async def root() -> ApiResponse[dict]:
    """Root endpoint with service information."""
    return ApiResponse(
        data={
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs" if settings.DEBUG else "disabled",
        }
    )


app.include_router(auth_router)
app.include_router(sessions_router)
app.include_router(users_router)
app.include_router(tasks_router)
app.include_router(dashboard_router)
