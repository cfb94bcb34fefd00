"""
Dashboard Templates API — app factory.

Wires logging, request-ID middleware, envelope-shaped error handlers and
the dashboard template router.
"""
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .logging_config import setup_logging
from .routers import dashboard_templates
from .schemas.errors import ErrorResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables_on_startup:
        from .database import create_tables

        create_tables()
        logger.info("Tables created from model metadata")
    yield


def _error_json(status_code: int, *messages: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(errors=list(messages)).model_dump())


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    # ── Middleware ───────────────────────────────────────────────────

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        start = time.perf_counter()
        with logger.contextualize(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("{} {} failed", request.method, request.url.path)
                raise
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "{} {} → {} ({:.1f}ms)",
                request.method, request.url.path, response.status_code, elapsed_ms,
            )
        response.headers["X-Request-ID"] = request_id
        return response

    # ── Error envelopes ──────────────────────────────────────────────

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return _error_json(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        return _error_json(500, "internal server error")

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        messages = [
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        ]
        return _error_json(400, *(messages or ["invalid request"]))

    # ── Routes ───────────────────────────────────────────────────────

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(
        dashboard_templates.router,
        prefix=f"{settings.api_prefix}/dashboard-templates",
    )
    return app


app = create_app()
