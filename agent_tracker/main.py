import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from sqlalchemy.orm import sessionmaker

from agent_tracker.audit import API_PREFIX, write_audit_record
from agent_tracker.config import ALLOWED_ORIGINS, AUDIT_ENABLED, LOG_LEVEL
from agent_tracker.database import SessionLocal, init_db
from agent_tracker.errors import StoreError, TrackerError
from agent_tracker.routes import (
    auth_router,
    users_router,
    activities_router,
    goals_router,
    commissions_router,
    dashboard_router,
    audit_log_router,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(session_factory: sessionmaker = SessionLocal, audit_enabled: bool = AUDIT_ENABLED) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Ensure the schema exists and the activity catalog is seeded."""
        init_db(app.state.session_factory)
        yield

    app = FastAPI(
        title="Agent Tracker",
        description="Sales activity goals and commission tracking for estate agents",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(activities_router, prefix=API_PREFIX)
    app.include_router(goals_router, prefix=API_PREFIX)
    app.include_router(commissions_router, prefix=API_PREFIX)
    app.include_router(dashboard_router, prefix=API_PREFIX)
    app.include_router(audit_log_router, prefix=API_PREFIX)

    @app.middleware("http")
    async def audit_mutations(request: Request, call_next):
        """Write an audit record for every non-GET request once it is handled."""
        response = await call_next(request)
        if audit_enabled:
            await run_in_threadpool(
                write_audit_record, app.state.session_factory, request, response.status_code
            )
        return response

    # Error handlers
    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        if isinstance(exc, StoreError):
            logger.error(f"Store failure on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            {"error": "Validation error", "errors": jsonable_encoder(exc.errors())},
            status_code=422,
        )

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    @app.get("/health")
    def health():
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("agent_tracker.main:app", host="0.0.0.0", port=8000, reload=True)
