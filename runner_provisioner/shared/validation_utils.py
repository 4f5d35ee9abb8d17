"""
Utilitarios de validación reutilizables.

Rol: Proveer funciones de validación comunes para toda la aplicación.
Validar segmentos de URL, labels, niveles de log y valores de script.
Funciones puras sin dependencias externas.

Depende de: urllib.parse, tipos de datos.
"""

from typing import Optional
from urllib.parse import quote, urlparse

from .constants import VALID_LOG_LEVELS

# Caracteres que no sobreviven a una línea de shell ni a un heredoc
FORBIDDEN_SCRIPT_CHARS = ("\n", "\r", "\x00")


def is_valid_path_segment(segment: Optional[str]) -> bool:
    """
    Verifica si un valor puede usarse tal cual como segmento de ruta de URL.

    Args:
        segment: Valor a verificar

    Returns:
        True si no está vacío, no es "." ni ".." y no requiere percent-encoding
    """
    if not segment or segment in (".", ".."):
        return False

    return quote(segment, safe="") == segment


def validate_base_url(url: str) -> str:
    """
    Valida la URL base de la plataforma.

    Args:
        url: URL a validar

    Returns:
        URL sin barra final

    Raises:
        ValueError: Si no es una URL http(s) con host
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"URL base inválida: {url}")

    return url.rstrip("/")


def normalize_labels(labels: Optional[str]) -> str:
    """
    Normaliza una lista de labels separada por comas.

    Args:
        labels: Labels en formato "a, b,c"

    Returns:
        Labels sin espacios sobrantes ni entradas vacías ("a,b,c")
    """
    if not labels:
        return ""

    return ",".join(label.strip() for label in labels.split(",") if label.strip())


def validate_log_level(level: str) -> str:
    """
    Valida nivel de logging.

    Raises:
        ValueError: Si el nivel no es estándar
    """
    if level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"Log level debe ser uno de: {VALID_LOG_LEVELS}")
    return level.upper()


def contains_forbidden_script_chars(value: str) -> bool:
    """Verifica si el valor contiene saltos de línea o NUL."""
    return any(char in value for char in FORBIDDEN_SCRIPT_CHARS)
