import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from starlette.requests import Request

from certportal.api.v1.router import api_router
from certportal.core.config import Settings, get_settings
from certportal.core.errors import PortalError
from certportal.core.logging import setup_logging
from certportal.core.tokens import TokenService
from certportal.db.bootstrap import run_migrations_and_seed
from certportal.db.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)

# cabeçalhos de segurança básicos para uma API JSON
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """
    uvicorn certportal.main:create_app --factory
    Sem argumentos lê o ambiente; os testes passam Settings/engine prontos.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    engine = engine or build_engine(settings.DATABASE_URL)

    api = FastAPI(
        title="Portal de Certificados - API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
    )
    api.state.settings = settings
    api.state.engine = engine
    api.state.session_factory = build_session_factory(engine)
    api.state.token_service = TokenService(
        settings.JWT_SECRET, settings.access_token_ttl, algorithm=settings.JWT_ALGORITHM
    )

    api.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @api.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    # métricas /metrics (Prometheus)
    if settings.METRICS_ENABLED:
        Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

    api.include_router(api_router, prefix="/api")

    @api.get("/health", tags=["health"])
    def health():
        return {"status": "ok"}

    @api.on_event("startup")
    def startup():
        run_migrations_and_seed(api.state.engine, api.state.session_factory, settings)

    _register_exception_handlers(api)
    return api


def _register_exception_handlers(api: FastAPI) -> None:
    @api.exception_handler(PortalError)
    def handle_portal_error(request: Request, exc: PortalError):
        return JSONResponse(status_code=exc.status_code, content={"code": exc.code, "message": exc.message})

    @api.exception_handler(RequestValidationError)
    def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"code": "VALIDATION_ERROR", "message": "Dados invalidos.",
                     "details": jsonable_encoder(exc.errors(), exclude={"ctx", "input"})},
        )

    @api.exception_handler(IntegrityError)
    def handle_integrity_error(request: Request, exc: IntegrityError):
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, getattr(exc, "orig", exc))
        return JSONResponse(status_code=409, content={"code": "UNIQUE_VIOLATION", "message": "Registro duplicado."})

    @api.exception_handler(Exception)
    def handle_unexpected(request: Request, exc: Exception):
        # detalhes só no log, nunca na resposta
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"code": "INTERNAL_ERROR", "message": "Erro interno do servidor"})
