"""
EventHub - FastAPI backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi_pagination import add_pagination
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventhub.config import settings
from eventhub.database import init_db
from eventhub.exceptions import EventHubError
from eventhub.responses import error_response
from eventhub.routes import auth, events, saved
from eventhub.utils import run_migrations

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

_LOCATION_ROOTS = ("body", "query", "path", "header", "cookie")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    if settings.RUN_MIGRATIONS:
        run_migrations()
        logger.info("Database migrated to head")
    else:
        init_db()
        logger.info("Database tables created")
    yield
    logger.info("Application shutdown")


app = FastAPI(
    title="EventHub API",
    description="Event listing backend: accounts, events and saved events",
    version="1.0.0",
    lifespan=lifespan,
)
add_pagination(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CLIENT_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EventHubError)
async def eventhub_error_handler(request: Request, exc: EventHubError):
    return error_response(exc.message, errors=exc.errors, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        parts = [str(p) for p in err.get("loc", ()) if p not in _LOCATION_ROOTS]
        field = ".".join(parts) or "body"
        message = err.get("msg", "Invalid value")
        if err.get("type") == "missing":
            message = f"{field} is required"
        elif message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": field, "message": message})
    return error_response(errors[0]["message"] if errors else "Invalid request", errors=errors, status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(str(exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response("Server error", status_code=500)


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(events.router, prefix="/api/events", tags=["events"])
app.include_router(saved.router, prefix="/api/saved", tags=["saved"])


@app.get("/")
def root():
    return {"success": True, "message": "API is running..."}


@app.get("/api/health")
def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    uvicorn.run(
        "eventhub.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.DEBUG
    )
