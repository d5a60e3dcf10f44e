"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from hirehive.api.limiter import limiter
from hirehive.config import settings
from hirehive.core.errors import HiveError
from hirehive.db.base import init_db
from hirehive.logging_config import configure_logging

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = settings.cors_origins.split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize logging and database on startup."""
    configure_logging()
    try:
        init_db()
    except ValueError:
        logger.warning("DATABASE_URL not configured; skipping table creation")
    yield


app = FastAPI(
    title="HireHive API",
    description="Job board with plan-metered postings and application tracking",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


@app.exception_handler(HiveError)
async def hive_error_handler(request: Request, exc: HiveError):
    """Typed engine errors become {"errorKind", "detail", ...} bodies."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-User-ID", "X-User-Role"],
)


# Import and include routers
from hirehive.api.routes import account, admin, employer, public, seeker  # noqa: E402

app.include_router(public.router, prefix="/public", tags=["Public"])
app.include_router(account.router, prefix="/account", tags=["Account"])
app.include_router(employer.router, prefix="/employer", tags=["Employer"])
app.include_router(seeker.router, prefix="/seeker", tags=["Seeker"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
