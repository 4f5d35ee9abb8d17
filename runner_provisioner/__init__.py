"""
runner-provisioner - GitHub Actions Ephemeral VM Runners

Versión: 0.1.0
Arquitectura: Clean Architecture con DDD
Propósito: Registrar runners efímeros de GitHub Actions en VMs desechables
"""

__version__ = "0.1.0"
__author__ = "runner-provisioner Team"
__description__ = "GitHub Actions Ephemeral VM Runner Registration"

# Exportaciones principales del dominio
from .domain.entities import (
    AppAccessToken,
    GitHubCredentials,
    LifecycleScript,
    RunnerConfiguration,
    RunnerDownloadURL,
    RunnerRegistrationToken,
    RunnerTokens,
    VirtualMachine,
)
from .domain.contracts import GitHubClient, GitHubCredentialsStore, SSHConnection
from .domain.orchestration_service import ConnectionOrchestrator
from .domain.runner_name import resolve_runner_name
from .domain.scope_resolver import ScopeResolver
from .domain.script_composer import ScriptComposer, shell_quote
from .domain.token_acquirer import TokenAcquirer

# Exportaciones de casos de uso
from .use_cases.register_runner import RegisterRunner

# Exportaciones de infraestructura
from .infrastructure.config import Settings, get_config, reload_config
from .infrastructure.credentials_store import SettingsCredentialsStore

# Constantes y errores
from .shared.constants import RunnerScope
from .shared.domain_exceptions import (
    InvalidRunnerURL,
    InvalidScriptValue,
    OrganizationNameUnavailable,
    RunnerRegistrationError,
)

__all__ = [
    # Versión y metadata
    "__version__",
    "__author__",
    "__description__",

    # Entidades de dominio
    "AppAccessToken",
    "GitHubCredentials",
    "LifecycleScript",
    "RunnerConfiguration",
    "RunnerDownloadURL",
    "RunnerRegistrationToken",
    "RunnerTokens",
    "VirtualMachine",

    # Contratos
    "GitHubClient",
    "GitHubCredentialsStore",
    "SSHConnection",

    # Servicios principales
    "ConnectionOrchestrator",
    "ScopeResolver",
    "ScriptComposer",
    "TokenAcquirer",
    "resolve_runner_name",
    "shell_quote",

    # Casos de uso
    "RegisterRunner",

    # Infraestructura
    "Settings",
    "SettingsCredentialsStore",
    "get_config",
    "reload_config",

    # Constantes y errores
    "RunnerScope",
    "RunnerRegistrationError",
    "OrganizationNameUnavailable",
    "InvalidRunnerURL",
    "InvalidScriptValue",
]
