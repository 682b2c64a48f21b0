"""
Family Wishlist
FastAPI Application Entry Point

Run with:

    uvicorn api.main:app --host 0.0.0.0 --port 3000

or ``python -m api.main``, which reads host/port/log level from settings.
"""
# Load environment variables from .env file first, before any imports
from dotenv import load_dotenv
load_dotenv()

import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import wishlist, admin
from api.services.errors import WishlistError
from config.settings import settings

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    logger.info(f"Family Wishlist using data file {settings.data_path}")
    yield


app = FastAPI(
    title="Family Wishlist",
    description="Household gift wishlists with claims so nobody buys the same gift twice",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(wishlist.router)
app.include_router(admin.router)


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    content = {"success": False, "message": message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(WishlistError)
async def wishlist_exception_handler(request: Request, exc: WishlistError):
    """Render service errors with the status they carry."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail), detail=exc.detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert validation errors to 400 with clear messages."""
    errors = exc.errors()

    # Sanitize errors to ensure JSON serializability (bytes -> str)
    sanitized_errors = []
    for error in errors:
        sanitized = dict(error)
        if "input" in sanitized and isinstance(sanitized["input"], bytes):
            sanitized["input"] = sanitized["input"].decode("utf-8", errors="replace")
        sanitized.pop("ctx", None)
        sanitized_errors.append(sanitized)

    return _error_response(400, "Invalid request.", detail=sanitized_errors)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}\n{traceback.format_exc()}"
    )
    status_code = getattr(exc, "status_code", None) or getattr(exc, "status", None) or 500
    if not isinstance(status_code, int):
        status_code = 500
    # Exception text stays in the log; clients get a fixed message
    message = "Internal server error." if status_code >= 500 else "Request failed."
    return _error_response(status_code, message)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "family-wishlist",
        "dataPath": str(settings.data_path),
    }


# Anything else under /api is a JSON 404, never the front-end
@app.api_route(API_PREFIX + "/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
               include_in_schema=False)
def api_not_found(path: str):
    return _error_response(404, f"No API route for /{path}.")


# Front-end assets (must be mounted last so API routes win)
if settings.public_dir.exists():
    app.mount("/", StaticFiles(directory=str(settings.public_dir), html=True), name="static")


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info(f"Family Wishlist server running on http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
