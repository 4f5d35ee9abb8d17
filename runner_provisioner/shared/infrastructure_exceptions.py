"""
Excepciones específicas de infraestructura técnica.

Rol: Definir excepciones para errores técnicos propios del proceso.
Los errores de colaboradores externos (API, SSH) se propagan sin traducir.

Depende de: excepciones base de Python.
"""


# Excepciones base de infraestructura
class InfrastructureError(Exception):
    """Error base de infraestructura técnica."""
    pass


class ConfigurationError(InfrastructureError):
    """Error de configuración del sistema."""
    pass
