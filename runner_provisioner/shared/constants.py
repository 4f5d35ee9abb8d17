"""
Constantes globales de la aplicación.

Rol: Definir constantes usadas en todo el flujo de registro.
RunnerScope, rutas del runner en la VM, mensajes de error.
Centraliza valores mágicos y configuraciones fijas.

Depende de: enums para scopes y códigos de error.
"""

from enum import Enum
from typing import Dict


# Tipos de scope para runners
class RunnerScope(Enum):
    """Scope contra el que se registra un runner."""
    ORGANIZATION = "organization"
    REPOSITORY = "repo"


# Códigos de error del registro
class RegistrationErrorCode(Enum):
    """Códigos de error terminales para un intento de registro."""
    ORGANIZATION_NAME_UNAVAILABLE = "organization_name_unavailable"
    INVALID_RUNNER_URL = "invalid_runner_url"
    INVALID_SCRIPT_VALUE = "invalid_script_value"


# Plataforma
GITHUB_WEB_BASE = "https://github.com"

# Script de ciclo de vida en la VM
DEFAULT_SCRIPT_PATH = "~/start-runner.sh"
DEFAULT_SCRIPT_SHELL = "/bin/zsh"
# El script usa pipefail, `function` y `&>`: sólo bash o zsh
SUPPORTED_SCRIPT_SHELLS = ["bash", "zsh"]
SCRIPT_HEREDOC_DELIMITER = "START_RUNNER_SCRIPT_EOF"

# Layout del runner dentro de la VM
ACTIONS_RUNNER_ARCHIVE = "./actions-runner.tar.gz"
ACTIONS_RUNNER_DIRECTORY = "$HOME/actions-runner"
RUNNER_WORK_DIRECTORY = "_work"
RUNNER_ENV_FILE = ".env"

# Hooks opcionales presentes en la imagen de la VM
PRE_RUN_HOOK_PATH = "$HOME/.tartelet/pre-run.sh"
POST_RUN_HOOK_PATH = "$HOME/.tartelet/post-run.sh"
JOB_STARTED_HOOK_VARIABLE = "ACTIONS_RUNNER_HOOK_JOB_STARTED"
JOB_COMPLETED_HOOK_VARIABLE = "ACTIONS_RUNNER_HOOK_JOB_COMPLETED"

# Flags opcionales de config.sh
DISABLE_UPDATE_FLAG = "--disableupdate"
NO_DEFAULT_LABELS_FLAG = "--no-default-labels"

# Valores por defecto del runner
DEFAULT_RUNNER_GROUP = "Default"
DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Mensajes de error estándar
ERROR_MESSAGES: Dict[RegistrationErrorCode, str] = {
    RegistrationErrorCode.ORGANIZATION_NAME_UNAVAILABLE: "El nombre de la organización no está disponible",
    RegistrationErrorCode.INVALID_RUNNER_URL: "La URL del runner es inválida. Verifica el nombre de la organización o del repositorio",
    RegistrationErrorCode.INVALID_SCRIPT_VALUE: "Valor no permitido dentro del script del runner",
}
