"""
Logistica Server - Main Application
Backend de fretes: frota, motoristas, fretes, custos, pagamentos e fazendas
"""
import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import DBAPIError, IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from logistica.core.cache import Cache
from logistica.core.config import Settings, get_settings
from logistica.core.exceptions import ConflictError, LogisticaError, SchemaDriftError, is_missing_column
from logistica.core.logs import configure_logging
from logistica.database import Database
from logistica.services import SequenceAllocator
from logistica.api import (
    frota_router,
    motoristas_router,
    fretes_router,
    custos_router,
    pagamentos_router,
    fazendas_router,
    dashboard_router,
    health_router
)

logger = logging.getLogger(__name__)

ENTITY_ROUTERS = (
    frota_router,
    motoristas_router,
    fretes_router,
    custos_router,
    pagamentos_router,
    fazendas_router,
    dashboard_router,
)

# Colunas únicas com mensagem amigável no 409
UNIQUE_MESSAGES = {
    "documento": "Documento já cadastrado",
    "placa": "Placa já cadastrada",
    "motorista_fixo_id": "Motorista já vinculado a outro veículo",
}


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Loga método, caminho, status e duração de cada request"""
    async def dispatch(self, request: Request, call_next):
        inicio = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - inicio) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.1f} ms)")
        return response


def _format_validation_errors(exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Valor inválido"),
            "code": error.get("type", "invalid"),
        })
    return errors


def _unique_message(exc: IntegrityError) -> str:
    text = str(exc.orig if exc.orig is not None else exc).lower()
    for column, message in UNIQUE_MESSAGES.items():
        if column in text:
            return message
    return "Registro duplicado ou em uso por outro registro"


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(LogisticaError)
    async def logistica_error_handler(request: Request, exc: LogisticaError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": "Dados inválidos",
                "code": "VALIDATION_ERROR",
                "errors": _format_validation_errors(exc),
            }
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(f"Violação de integridade em {request.method} {request.url.path}: {exc.orig}")
        error = ConflictError(_unique_message(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(DBAPIError)
    async def database_error_handler(request: Request, exc: DBAPIError):
        if is_missing_column(exc):
            logger.error(
                f"Banco desatualizado ({exc.orig}). Execute a migration antes de usar {request.url.path}"
            )
            error = SchemaDriftError(
                "Erro na estrutura do banco de dados. Execute a migration para criar as colunas ausentes."
            )
            return JSONResponse(status_code=error.status_code, content=error.to_dict())

        logger.exception(f"Erro de banco em {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Erro interno do servidor"}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Rota não encontrada" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": message}
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Erro não tratado em {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Erro interno do servidor"}
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle do aplicativo"""
        configure_logging(settings.LOG_LEVEL)
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Environment: {settings.ENVIRONMENT}")

        database = Database(settings.db_url, echo=settings.DB_ECHO, pool_pre_ping=settings.DB_POOL_PRE_PING)
        await database.connect()

        cache = Cache(settings.REDIS_URL, default_ttl=settings.CACHE_TTL_SECONDS)
        await cache.connect()

        app.state.db = database
        app.state.cache = cache

        yield

        logger.info("Shutting down...")
        await cache.close()
        await database.disconnect()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Controle de frota, fretes, custos e pagamentos de motoristas",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None
    )

    app.state.settings = settings
    app.state.sequencias = SequenceAllocator(settings.CODE_RETRY_ATTEMPTS)

    register_exception_handlers(app)

    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers em /api/<entidade> e também nos caminhos sem prefixo
    for router in ENTITY_ROUTERS:
        app.include_router(router, prefix="/api")
        app.include_router(router, include_in_schema=False)
    app.include_router(health_router)

    # Static files para uploads
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    _settings = get_settings()
    uvicorn.run(
        "logistica.main:app",
        host=_settings.HOST,
        port=_settings.PORT,
        reload=_settings.DEBUG
    )
