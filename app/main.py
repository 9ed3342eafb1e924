"""
Main application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn app.main:app --reload
     or: python -m app.main
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request  # The FastAPI framework
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware  # Cross-Origin Resource Sharing
from fastapi.responses import JSONResponse, PlainTextResponse

from app.ai.monitoring import ai_logger  # noqa: F401  (installs the "pabrik" log handler)
from app.core.config import settings  # Application settings
from app.core.errors import AppError
from app.environments.google.auth import firebase_auth
from app.routers import deploy, landing  # Route handlers (endpoints)


logger = logging.getLogger("pabrik.main")


# ---------------------------------------------------------------------------
# LIFESPAN
# ---------------------------------------------------------------------------
# Firebase credentials are loaded in the background so the server starts
# serving immediately. Until they are READY, Firebase deploys answer with a
# configuration error; every other endpoint works regardless.
@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set. /api/generate and /api/edit will fail.")
    if not settings.NETLIFY_ACCESS_TOKEN:
        logger.warning("NETLIFY_ACCESS_TOKEN is not set. /api/deploy will fail.")

    auth_task = asyncio.create_task(firebase_auth.initialize())
    logger.info(f"{settings.APP_NAME} started. Allowed origins: {', '.join(settings.cors_origins())}")
    try:
        yield
    finally:
        if not auth_task.done():
            auth_task.cancel()


# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
# Only the frontend origins in the allow-list may call the API from a
# browser. Requests without an Origin header (curl, server-to-server) are
# not subject to CORS and are always served.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# ERROR HANDLERS
# ---------------------------------------------------------------------------
# Every error leaves the API as {"error": ..., "details": ...}.

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    level = logging.WARNING if exc.status_code < 500 else logging.ERROR
    logger.log(level, f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"{request.method} {request.url.path} -> 400: malformed body")
    return JSONResponse(
        status_code=400,
        content={"error": "Malformed request body.", "details": str(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error in {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error.", "details": str(exc)},
    )


# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# landing.router: /api/generate, /api/edit
# deploy.router: /api/deploy, /api/deploy-firebase
app.include_router(landing.router)
app.include_router(deploy.router)


# ---------------------------------------------------------------------------
# LIVENESS / HEALTH
# ---------------------------------------------------------------------------
@app.get("/", response_class=PlainTextResponse, tags=["health"])
def liveness():
    """Plain-text liveness message."""
    return f"{settings.APP_NAME} is up and running!"


@app.get("/health", tags=["health"])
def health_check():
    """
    Health check with the Firebase credential state.

    Returns:
        {"status": "ok", "firebase_auth": "ready" | "failed" | "uninitialized"}
    """
    return {"status": "ok", "firebase_auth": firebase_auth.state.value}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
