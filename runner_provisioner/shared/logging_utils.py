"""
Utilitarios de configuración y manejo de logging.

Rol: Configurar logging centralizado para toda la aplicación.
Define formateadores, handlers y niveles de logging.
Provee funciones helper para logging de operaciones de registro.

Depende de: logging library, configuración de entorno.
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Retorna el logger estandarizado de un módulo.

    Handlers y formato los define setup_logging_config en la raíz; el logger
    sólo propaga, así que no se duplica la salida.

    Args:
        name: Nombre del logger
        level: Nivel propio del logger (opcional, por defecto hereda de la raíz)

    Returns:
        Logger configurado
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging_config(level: Optional[str] = None) -> None:
    """
    Configura el logging básico para toda la aplicación.
    Debe llamarse una sola vez al inicio.

    Args:
        level: Nivel de logging (opcional, por defecto LOG_LEVEL o INFO)
    """
    logging.basicConfig(
        level=getattr(logging, (level or os.getenv("LOG_LEVEL", "INFO")).upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def format_infrastructure_log(component: str, operation: str, details: str) -> str:
    """
    Formatea mensaje de log para componentes de infraestructura.

    Args:
        component: Componente (SSH, GitHub, etc.)
        operation: Operación realizada
        details: Detalles adicionales

    Returns:
        Mensaje formateado
    """
    return f"{component} | {operation} | {details}"


def mask_sensitive_data(data: Optional[str], mask_char: str = "*", visible_chars: int = 4) -> str:
    """
    Enmascara datos sensibles en logs.

    Args:
        data: Dato sensible (token, password, etc.)
        mask_char: Carácter para enmascarar
        visible_chars: Caracteres visibles al inicio

    Returns:
        Dato enmascarado
    """
    if not data or len(data) <= visible_chars:
        return mask_char * 8

    return data[:visible_chars] + mask_char * (len(data) - visible_chars)


def _format_context(**kwargs) -> str:
    return " | ".join([f"{k}={v}" for k, v in kwargs.items()])


def log_operation_start(logger: logging.Logger, operation: str, **kwargs) -> None:
    """Registra inicio de operación con contexto."""
    logger.info(f"INICIO | {operation} | {_format_context(**kwargs)}")


def log_operation_success(logger: logging.Logger, operation: str, **kwargs) -> None:
    """Registra éxito de operación con contexto."""
    logger.info(f"ÉXITO | {operation} | {_format_context(**kwargs)}")


def log_operation_error(logger: logging.Logger, operation: str, error: Exception, **kwargs) -> None:
    """
    Registra error de operación con contexto.

    Args:
        logger: Logger a usar
        operation: Descripción de operación
        error: Excepción capturada
        **kwargs: Contexto adicional
    """
    logger.error(f"ERROR | {operation} | {type(error).__name__}: {str(error)} | {_format_context(**kwargs)}")
