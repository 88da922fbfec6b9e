# ============================================================
# src/core/logger_config.py: Configuración central del logger
# ------------------------------------------------------------
# Define init_logger(), que configura el logger global de Loguru
# según las variables del entorno (.env).
#
# El logger escribe en:
#   - Consola (colorizada, nivel configurable)
#   - Archivo de logs (rotación diaria en data/logs/)
#
# Los módulos de la librería solo hacen `from loguru import logger`;
# quien use la librería decide si llama a init_logger().
# ============================================================

from __future__ import annotations

import os
from pathlib import Path
import sys

from dotenv import load_dotenv
from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def init_logger(level: str | None = None, log_dir: Path | str | None = "data/logs") -> None:
    """
    Inicializa la configuración global del logger.

    Args:
        level: Nivel mínimo. Si es None se lee LOG_LEVEL del entorno (por
            defecto INFO).
        log_dir: Carpeta del archivo de logs rotado. None desactiva el
            archivo y deja solo la consola.
    """
    load_dotenv()
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    logger.remove()

    logger.add(
        sink=sys.stderr,
        level=log_level,
        colorize=True,
        format=LOG_FORMAT,
    )

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        log_file_path = log_path / "streams.log"

        logger.add(
            sink=log_file_path,
            level=log_level,
            rotation="1 day",  # crea un archivo nuevo cada día
            retention="7 days",  # mantiene 7 días de logs
            enqueue=True,  # thread-safe
            backtrace=True,
            diagnose=True,
            format=LOG_FORMAT,
        )
        logger.debug(f"Logs guardados en: {log_file_path}")

    logger.info(f"Logger inicializado (nivel {log_level})")
