# backend/inventario/schemas/response_schema.py
"""
Envoltorio estándar para todas las respuestas JSON de la API.

    {
        "success": true,
        "data": {...} | null,
        "message": "texto para el usuario",
        "timestamp": "2024-01-01T12:00:00.000Z"
    }
"""

from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


def utc_timestamp() -> str:
    """Fecha y hora actual en formato ISO 8601 (UTC, milisegundos)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    message: str
    timestamp: str


def success_response(data: Optional[T] = None, message: str = "OK") -> ApiResponse[T]:
    return ApiResponse[T](success=True, data=data, message=message, timestamp=utc_timestamp())


def error_body(message: str) -> dict:
    """Cuerpo de respuesta para errores (siempre data=null)."""
    return ApiResponse[None](
        success=False, data=None, message=message, timestamp=utc_timestamp()
    ).model_dump()
