# backend/inventario/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

create_app() construye la aplicación completa:
- Configuración de logging
- Motor de base de datos, fábrica de sesiones y servicios (en app.state)
- Registro de routers de la API con prefijos
- Manejadores de errores que devuelven la respuesta estandarizada
- Middleware de registro de peticiones
- Publicación de las imágenes de producto bajo /images
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventario.api.v1.api_router import api_router_v1
from inventario.core.config import Settings, get_settings
from inventario.core.exceptions import AppError, InternalError
from inventario.core.logging_config import setup_logging
from inventario.db.database import build_engine, build_session_factory, create_tables
from inventario.schemas.response_schema import error_body
from inventario.services.category_service import CategoryService
from inventario.services.image_storage_service import ImageStorageService
from inventario.services.product_service import ProductService

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


# ========================================
# MANEJADORES DE ERRORES
# ========================================

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"[ERROR] {exc.status_code} - {exc.message} ({request.method} {request.url.path})")
    else:
        logger.info(f"{exc.status_code} - {exc.message} ({request.method} {request.url.path})")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("loc", ("",))[0] == "path" for err in errors):
        message = "id inválido o no proporcionado."
    else:
        parts = []
        for err in errors:
            field = ".".join(str(part) for part in err.get("loc", ())[1:]) or "body"
            parts.append(f"{field}: {err.get('msg')}")
        message = "Datos inválidos: " + "; ".join(parts)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # El detalle del fallo de almacenamiento queda en el log, nunca en la respuesta
    logger.error(f"Error de base de datos en {request.method} {request.url.path}", exc_info=exc)
    error = InternalError("Error al conectar con la base de datos. Por favor, inténtelo más tarde.")
    return JSONResponse(status_code=error.status_code, content=error_body(error.message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Error no controlado en {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(INTERNAL_ERROR_MESSAGE),
    )


# ========================================
# CONSTRUCCIÓN DE LA APLICACIÓN
# ========================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Crea la aplicación con todas sus dependencias.

    El motor de base de datos y los servicios se construyen una sola vez aquí
    y los endpoints los reciben a través de las dependencias de api/deps.py.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    engine = build_engine(settings)
    image_storage = ImageStorageService(settings)
    image_storage.ensure_images_dir()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await create_tables(engine)
        logger.info(f"✅ {settings.PROJECT_NAME} v{settings.PROJECT_VERSION} iniciada")
        yield
        await engine.dispose()
        logger.info("Conexiones de base de datos cerradas")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        version=settings.PROJECT_VERSION,
        description="API para la gestión de inventario de productos y categorías",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.product_service = ProductService(settings, image_storage)
    app.state.category_service = CategoryService()

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"[REQUEST] {request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
        return response

    app.include_router(api_router_v1, prefix=settings.API_V1_STR)
    app.mount(
        settings.IMAGES_PUBLIC_PATH,
        StaticFiles(directory=str(settings.IMAGES_DIR), check_dir=False),
        name="images",
    )

    @app.get("/health", tags=["Root"])
    async def health():
        return {"status": "ok"}

    @app.get("/", tags=["Root"])
    async def read_root():
        """Mensaje de bienvenida con nombre y versión del proyecto."""
        return {"message": f"Bienvenido a {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}

    return app
