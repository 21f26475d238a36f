# backend/inventario/core/logging_config.py
"""
Configuración del logging de la aplicación a partir de Settings.
"""

import logging
import sys
from pathlib import Path

from inventario.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """
    Configura el logger raíz con el nivel y formato definidos en la configuración.

    Siempre escribe en stdout; si LOG_FILE_PATH está definido, también en fichero.
    Es idempotente: los handlers previos del logger raíz se reemplazan.
    """
    formatter = logging.Formatter(settings.LOG_FORMAT)

    handlers = []
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if settings.LOG_FILE_PATH:
        log_path = Path(settings.LOG_FILE_PATH)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # SQLAlchemy solo en modo verboso cuando se pide explícitamente
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.SQL_ECHO else logging.WARNING
    )
