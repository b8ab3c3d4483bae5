"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount the storefront routers under the /api prefix
  - Expose health check and metrics endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: auth / orders / products / users endpoints

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - The Postgres pool is initialized once in lifespan; REPOSITORY_BACKEND=memory
    skips it entirely

Notes:
  - Middleware order matters: RequestContext -> CORS -> routes
  - /healthz and /readyz follow Kubernetes health check conventions
  - /metrics exposes Prometheus metrics (admin-only when METRICS_REQUIRE_ADMIN)
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_order_repository, get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import RequestContextMiddleware
from ..identity.dependencies import require_metrics_access
from ..identity.passwords import hash_password
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import build_router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()

    if settings.is_production():
        settings.validate_security_requirements()

    # Initialize DB pool (must happen before any repository usage)
    if not settings.uses_memory_store():
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        try:
            ensure_dev_admin(
                settings,
                user_repo=get_user_repository(),
                password_hasher=hash_password,
            )
        except Exception as e:
            logger.error("Startup failed", extra={"error": str(e)})
            raise

        logger.info(
            "Storefront API starting up",
            extra={
                "app_env": settings.app_env,
                "repository_backend": settings.repository_backend,
                "enforce_order_total": settings.enforce_order_total,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )

        yield

    finally:
        close_pool()
        logger.info("Storefront API shutting down")


def _store_status() -> str:
    try:
        if get_order_repository().ping():
            return "connected"
    except Exception as e:
        logger.warning("Health check: store unavailable", extra={"error": str(e)})
    return "disconnected"


def create_app() -> FastAPI:
    """Builds the ASGI app from the current Settings."""
    settings = get_settings()

    app = FastAPI(
        title="Storefront API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Signup, login and current user"},
            {"name": "orders", "description": "Checkout and order lifecycle"},
            {"name": "products", "description": "Catalog and admin products"},
            {"name": "users", "description": "User directory (admin)"},
        ],
    )

    # Middleware order (bottom = first to execute):
    # 1. CORSMiddleware - handles preflight
    # 2. RequestContextMiddleware - sets request_id
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Authorization",
            "X-Auth-Token",
            "X-Request-Id",
        ],
    )

    app.include_router(build_router(), prefix="/api")
    register_exception_handlers(app)

    @app.get("/healthz")
    def healthz(request: Request):
        """
        Liveness + store check.

        Returns:
            ok: True if the store answers
            db: "connected" or "disconnected"
            request_id: Correlation ID for this request
        """
        db_status = _store_status()
        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/readyz")
    def readyz(request: Request, response: Response):
        """Readiness: 503 while the store is unreachable."""
        db_status = _store_status()
        if db_status != "connected":
            response.status_code = 503
        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics")
    def metrics(_auth=Depends(require_metrics_access())):
        """Expose Prometheus metrics."""
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
