import os

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .config import settings
from .db import Base, engine
from .errors import register_exception_handlers
from .logging import setup_logging, RequestIdMiddleware
from .auth.router import router as auth_router
from .routes.audit import router as audit_router
from .routes.companies import router as companies_router
from .routes.employees import router as employees_router
from .routes.organization import router as organization_router
from .routes.terminations import router as terminations_router
from .routes.users import router as users_router
from .routes.vacations import router as vacations_router


logger = structlog.get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title=settings.app_name)

    # Middlewares
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        enabled=settings.rate_limit_enabled,
    )
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    register_exception_handlers(app)

    # Routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(companies_router)
    app.include_router(organization_router)
    app.include_router(employees_router)
    app.include_router(vacations_router)
    app.include_router(terminations_router)
    app.include_router(audit_router)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok"}

    # Metrics
    if settings.metrics_enabled:
        Instrumentator().instrument(app).expose(app, include_in_schema=False)

    @app.on_event("startup")
    def _startup():
        logger.info("startup", app=settings.app_name, environment=settings.environment)
        # Ensure local SQLite directory exists
        if settings.database_url.startswith("sqlite:///./"):
            os.makedirs("var", exist_ok=True)
        if settings.auto_create_db:
            Base.metadata.create_all(bind=engine)
            logger.info("tables_created", tables=sorted(Base.metadata.tables.keys()))

    return app


app = create_app()
