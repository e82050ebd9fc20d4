# /app/main.py

import logging

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

# --- Ambient Setup ---
from .core.config import get_settings
from .core.errors import AppError, InvalidRequestError
from .core.logging_config import setup_logging

# --- Application-specific Router Imports ---
from .routers import (
    auth_router,
    profile_router,
    generate_router,
    content_router,
)

# --- Service Imports for Startup Logic ---
from .db import database
from .services import auth_service

setup_logging()
logger = logging.getLogger(__name__)


def _log_session_event(event: auth_service.SessionEvent):
    user_id = event.identity.id if event.identity else None
    logger.info("Session event %s for user %s", event.type.value, user_id)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    database.init_db()
    unsubscribe = auth_service.on_session_change(_log_session_event)
    yield
    # This code runs ONCE when the application shuts down.
    unsubscribe()

# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Content Studio API",
    description="Generates viral social content with Gemini and keeps a per-user library of results.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Error Translation ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_code": exc.error_code},
        headers=headers,
    )

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Same body shape as AppError, keeping the per-field details.
    return JSONResponse(
        status_code=InvalidRequestError.status_code,
        content={"detail": jsonable_encoder(exc.errors()), "error_code": InvalidRequestError.error_code},
    )

# --- API Router Inclusion ---
app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(profile_router.router, prefix="/api/profile", tags=["Profile"])
app.include_router(generate_router.router, prefix="/api/generate", tags=["Generation"])
app.include_router(content_router.router, prefix="/api/content", tags=["Content Library"])

# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {
        "status": "Content Studio backend is running!",
        "version": app.version,
        "storage_configured": database.is_configured(),
    }
