"""
Excepciones específicas del dominio de negocio.

Rol: Definir excepciones para errores de lógica de registro.
OrganizationNameUnavailable, InvalidRunnerURL, InvalidScriptValue.
Todas son terminales para el intento de registro actual.

Depende de: códigos y tabla de mensajes en constants.
"""

from typing import Optional

from .constants import ERROR_MESSAGES, RegistrationErrorCode


# Excepciones base del dominio
class DomainError(Exception):
    """Error base del dominio de negocio."""
    pass


class RunnerRegistrationError(DomainError):
    """Error terminal de un intento de registro de runner."""

    code: RegistrationErrorCode

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or ERROR_MESSAGES[self.code])


class OrganizationNameUnavailable(RunnerRegistrationError):
    """Falta el nombre de la organización para un scope de organización."""
    code = RegistrationErrorCode.ORGANIZATION_NAME_UNAVAILABLE


class InvalidRunnerURL(RunnerRegistrationError):
    """No se pudo construir la URL de registro para el scope resuelto."""
    code = RegistrationErrorCode.INVALID_RUNNER_URL


class InvalidScriptValue(RunnerRegistrationError):
    """Un valor dinámico no puede incrustarse de forma segura en el script."""
    code = RegistrationErrorCode.INVALID_SCRIPT_VALUE
