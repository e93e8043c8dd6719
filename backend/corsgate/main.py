import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from corsgate.api.routes import connection, health, messages
from corsgate.core.config import Settings, get_settings
from corsgate.core.database import Base, engine, session_scope
from corsgate.core.errors import default_code_for_status
from corsgate.core.logging_config import setup_logging
from corsgate.cors.policy import normalize, policy_from_settings
from corsgate.middleware.cors_policy import DECISION_STATE_KEY, wrap_with_cors_policy
from corsgate.models import Message  # noqa: F401: registra el modelo en Base.metadata

SLOW_REQUEST_SECONDS = 0.5


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.environment)

    # Tablas y mensajes de demostración solo fuera de producción
    if not settings.is_production:
        Base.metadata.create_all(bind=engine)
        if settings.seed_demo_messages:
            from corsgate.services.message_service import seed_demo_messages

            with session_scope() as db:
                seed_demo_messages(db)

    yield


def error_response(request: Request, status_code: int, code: str, message: str, details=None) -> JSONResponse:
    """Sobre de error común: code, message, details y request_id."""
    return JSONResponse(
        status_code=status_code,
        content={
            "code": code,
            "message": message,
            "details": details,
            "request_id": getattr(request.state, "request_id", "unknown"),
        },
    )


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        detail = exc.detail
        if isinstance(detail, dict) and {"code", "message"} <= detail.keys():
            return error_response(request, exc.status_code, detail["code"], detail["message"], detail.get("details"))
        return error_response(request, exc.status_code, default_code_for_status(exc.status_code), str(detail or "Error"))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = [{k: v for k, v in err.items() if k in ("loc", "msg", "type")} for err in exc.errors()]
        return error_response(request, 422, "validation_error", "Solicitud inválida", {"errors": errors})

    @app.exception_handler(Exception)
    async def handle_500(request: Request, exc: Exception):
        logger.exception("Error interno del servidor")
        return error_response(request, 500, "internal_error", "Error interno del servidor")


def build_api(settings: Settings) -> FastAPI:
    app = FastAPI(
        title="CORS Gate",
        description="Servidor de demostración de la política de orígenes y del gate de autorización",
        version="1.0.0",
        lifespan=lifespan,
    )
    _register_error_handlers(app)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request.state.request_id = request_id = uuid.uuid4().hex[:8]
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        if elapsed > SLOW_REQUEST_SECONDS:
            decision = getattr(request.state, DECISION_STATE_KEY, None)
            cors_state = decision.state if decision is not None else "-"
            logger.info(f"[{request_id}] {request.method} {request.url.path} {elapsed:.2f}s cors={cors_state}")
        response.headers["X-Request-ID"] = request_id
        if settings.is_production:
            response.headers["X-Content-Type-Options"] = "nosniff"
        return response

    app.include_router(connection.router)
    app.include_router(health.router)
    app.include_router(messages.router)
    return app


def create_app(settings: Settings | None = None, policy=None):
    """Crea la app FastAPI envuelta con la política de orígenes.

    ``policy`` acepta cualquier valor que entienda ``normalize``; si se omite se
    construye desde la configuración. Un patrón inválido impide arrancar.
    """
    settings = settings or get_settings()
    cors_policy = policy_from_settings(settings) if policy is None else normalize(policy)
    return wrap_with_cors_policy(
        build_api(settings),
        cors_policy,
        resolve_timeout=settings.cors_resolve_timeout or None,
        log_origins=settings.cors_log_origins,
    )


app = create_app()
