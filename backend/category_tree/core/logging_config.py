# backend/category_tree/core/logging_config.py
"""
Configuración del logging de la aplicación.

Los módulos obtienen su logger con logging.getLogger(__name__); este módulo
solo se encarga de instalar los handlers del logger raíz una única vez,
a partir de LOG_LEVEL, LOG_FORMAT y LOG_FILE_PATH.
"""

import logging
import sys
from pathlib import Path

from category_tree.core.config import Settings


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Configura el logger raíz con salida por consola y, opcionalmente, a fichero.

    Args:
        settings: Configuración con nivel, formato y ruta del fichero de log

    Returns:
        El logger raíz ya configurado
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL.upper())

    # Limpiar handlers previos (por si se llama varias veces, p.ej. en tests)
    root_logger.handlers.clear()

    formatter = logging.Formatter(settings.LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if settings.LOG_FILE_PATH:
        log_path = Path(settings.LOG_FILE_PATH)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger
