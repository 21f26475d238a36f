# backend/inventario/core/security.py
"""
Verificación de access tokens JWT y control de roles.

Los tokens los emite un servicio de autenticación externo; aquí solo se
verifican la firma y la expiración, y se extrae el usuario del payload.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import jwt

from inventario.core.exceptions import ForbiddenError, UnauthenticatedError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "accessToken"


class UserType(str, enum.Enum):
    CLIENT = "cliente"
    EMPLOYEE = "empleado"
    ADMIN = "administrador"


@dataclass(frozen=True)
class CurrentUser:
    """Usuario autenticado extraído del payload del token."""
    user_id: Optional[int]
    user_type: UserType
    active: bool


def extract_token(cookie_token: Optional[str], authorization: Optional[str]) -> Optional[str]:
    """Obtiene el token de la cookie 'accessToken' o, en su defecto, del header Bearer."""
    if cookie_token:
        return cookie_token
    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip() or None
    return None


def decode_access_token(token: str, secret_key: str, algorithm: str) -> Dict[str, Any]:
    """Verifica firma y expiración del token y devuelve su payload."""
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        logger.info("Token expirado")
        raise UnauthenticatedError("Token inválido o expirado")
    except jwt.InvalidTokenError:
        logger.info("Token inválido")
        raise UnauthenticatedError("Token inválido o expirado")


def user_from_payload(payload: Dict[str, Any]) -> CurrentUser:
    try:
        user_type = UserType(payload.get("tipoUsuario"))
    except ValueError:
        raise UnauthenticatedError("Token inválido o expirado")
    return CurrentUser(
        user_id=payload.get("idUsuario"),
        user_type=user_type,
        active=bool(payload.get("activo", False)),
    )


def authenticate(token: Optional[str], secret_key: str, algorithm: str) -> CurrentUser:
    if not token:
        raise UnauthenticatedError("No se proporcionó access token")
    return user_from_payload(decode_access_token(token, secret_key, algorithm))


def require_roles(user: CurrentUser, allowed: Iterable[UserType]) -> CurrentUser:
    """
    Comprueba que el usuario esté activo y tenga uno de los roles permitidos.

    Raises:
        ForbiddenError: usuario inactivo o sin permisos.
    """
    if not user.active:
        raise ForbiddenError("Usuario no activo")
    if user.user_type not in set(allowed):
        raise ForbiddenError("No tiene permisos para esta operación")
    return user
