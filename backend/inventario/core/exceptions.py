# backend/inventario/core/exceptions.py
"""
Excepciones de negocio de la aplicación.

Cada excepción lleva asociado el código HTTP con el que se devuelve al
cliente. Los manejadores registrados en main.py las transforman en la
respuesta estandarizada {success, data, message, timestamp}.
"""

from starlette import status


class AppError(Exception):
    """Error de aplicación con mensaje y código de estado HTTP."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Datos de entrada mal formados, incompletos o fuera de rango."""
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidOperationError(AppError):
    """Operación válida en forma pero imposible en el estado actual (p. ej. stock insuficiente)."""
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(AppError):
    """Fallo inesperado o de almacenamiento. El mensaje nunca incluye detalles internos."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
