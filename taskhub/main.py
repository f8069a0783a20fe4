import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskhub.auth.router import router as auth_router
from taskhub.config import get_settings
from taskhub.database import create_all, dispose_db, init_db
from taskhub.rate_limit import limiter
from taskhub.shared.middleware.error_handler import (
    error_envelope_middleware,
    http_exception_envelope_handler,
)
from taskhub.shared.middleware.request_id import request_id_middleware
from taskhub.tasks.router import router as tasks_router

logger = logging.getLogger(__name__)


# ── OpenAPI metadata ──────────────────────────────────────────────────────────

_DESCRIPTION = """
## Task Management API

* **Authentication**: email/password registration and login, JWT access +
  refresh tokens (independently keyed and expiring), refresh-token rotation.
* **Roles**: `USER` or `ADMIN`, fixed at registration.
* **Tasks**: create, list (status / due-date filters, page + limit), read,
  partial update and delete.  Users work on their own tasks; admins on all.

### Authentication
All task endpoints require:
```
Authorization: Bearer <access_token>
```

### Error shape
All errors return a consistent JSON envelope:
```json
{ "error": { "code": "task_not_found", "message": "Human-readable message" }, "request_id": "..." }
```
Request validation errors (`422`) return the standard Pydantic error list under `detail`.
"""

_TAGS_METADATA = [
    {
        "name": "auth",
        "description": "Registration, login, token refresh and the token profile.",
    },
    {
        "name": "tasks",
        "description": (
            "Task CRUD. Non-admins are restricted to their own tasks; "
            "acting on another user's task returns 403."
        ),
    },
]


# ── Health schema ─────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    service: str


# ── App factory ───────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db(settings.database_url)
    if settings.db_create_all:
        logger.info("Creating database tables")
        await create_all()
    yield
    await dispose_db()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s:%(name)s: %(message)s",
    )

    app = FastAPI(
        title="Task Management API",
        version="1.0.0",
        description=_DESCRIPTION,
        openapi_tags=_TAGS_METADATA,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Attach rate limiter state before middleware
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_envelope_handler)

    # Middleware is applied in reverse-registration order (last added = outermost).
    # CORS must be outermost so ALL responses (including 429s) carry CORS headers.
    app.add_middleware(SlowAPIMiddleware)
    app.middleware("http")(error_envelope_middleware)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(tasks_router, prefix="/api/v1")

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="taskhub")

    return app


app = create_app()
