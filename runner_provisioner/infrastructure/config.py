"""
Configuración y validación centralizada de la aplicación.

Rol: Cargar variables de entorno, validar y proveer defaults.
Centraliza toda la configuración del registro de runners en un solo lugar.
Provee la RunnerConfiguration inmutable que consume el dominio.

Depende de: variables de entorno, pydantic y pydantic-settings para validación.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.entities import RunnerConfiguration
from ..shared.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_RUNNER_GROUP,
    DEFAULT_SCRIPT_PATH,
    DEFAULT_SCRIPT_SHELL,
    GITHUB_WEB_BASE,
    SUPPORTED_SCRIPT_SHELLS,
    RunnerScope,
)
from ..shared.infrastructure_exceptions import ConfigurationError
from ..shared.logging_utils import setup_logger
from ..shared.validation_utils import normalize_labels, validate_base_url, validate_log_level

logger = setup_logger(__name__)

# Rutas que se escriben sin quoting en los comandos remotos
SCRIPT_PATH_PATTERN = r"^~?[A-Za-z0-9_./-]+$"
SCOPE_ALIASES = {"org": "organization", "repository": "repo"}


class GitHubConfig(BaseModel):
    """Configuración relacionada con la plataforma GitHub."""

    web_base_url: str = Field(default=GITHUB_WEB_BASE, description="URL base de la plataforma")

    @field_validator("web_base_url")
    @classmethod
    def check_web_base_url(cls, v):
        """Valida la URL base."""
        return validate_base_url(v)


class RunnerConfig(BaseModel):
    """Opciones del runner que se registra en cada VM."""

    scope: RunnerScope = Field(default=RunnerScope.REPOSITORY, description="Scope: organization o repo")
    labels: str = Field(default="", description="Labels separados por comas")
    group: str = Field(default=DEFAULT_RUNNER_GROUP, description="Grupo del runner")
    name: str = Field(default="", description="Nombre base del runner")
    disable_updates: bool = Field(default=False, description="Desactivar auto-actualización")
    disable_default_labels: bool = Field(default=False, description="Omitir labels por defecto")

    @field_validator("scope", mode="before")
    @classmethod
    def validate_scope(cls, v):
        """Acepta alias comunes del scope."""
        if isinstance(v, str):
            v = v.strip().lower()
            return SCOPE_ALIASES.get(v, v)
        return v

    @field_validator("labels")
    @classmethod
    def check_labels(cls, v):
        """Normaliza la lista de labels."""
        return normalize_labels(v)


class CredentialsConfig(BaseModel):
    """Identificadores de organización y repositorio."""

    organization_name: Optional[str] = Field(default=None, description="Organización de GitHub")
    owner_name: Optional[str] = Field(default=None, description="Dueño del repositorio")
    repository_name: Optional[str] = Field(default=None, description="Nombre del repositorio")


class ScriptConfig(BaseModel):
    """Ubicación e intérprete del script de ciclo de vida en la VM."""

    path: str = Field(default=DEFAULT_SCRIPT_PATH, description="Ruta del script en la VM")
    shell: str = Field(default=DEFAULT_SCRIPT_SHELL, description="Intérprete del script")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v):
        """Valida que la ruta no necesite quoting."""
        if not re.match(SCRIPT_PATH_PATTERN, v):
            raise ValueError(f"Ruta de script inválida: {v}")
        return v

    @field_validator("shell")
    @classmethod
    def validate_shell(cls, v):
        """Valida que el intérprete sea una ruta absoluta a bash o zsh."""
        if not v.startswith("/") or not re.match(SCRIPT_PATH_PATTERN, v):
            raise ValueError(f"Intérprete inválido: {v}")
        if v.rsplit("/", 1)[-1] not in SUPPORTED_SCRIPT_SHELLS:
            raise ValueError(f"Intérprete no soportado: {v}. Use: {', '.join(SUPPORTED_SCRIPT_SHELLS)}")
        return v


class Settings(BaseSettings):
    """Configuración centralizada de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="RUNNER_PROVISIONER_",
        env_nested_delimiter="__",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    github: GitHubConfig = Field(default_factory=GitHubConfig, description="Configuración de GitHub")
    runner: RunnerConfig = Field(default_factory=RunnerConfig, description="Configuración del runner")
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig, description="Credenciales")
    script: ScriptConfig = Field(default_factory=ScriptConfig, description="Script de ciclo de vida")
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Nivel de logging")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v):
        """Valida nivel de logging."""
        return validate_log_level(v)

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """
        Carga configuración desde variables de entorno.

        Raises:
            ConfigurationError: Si algún valor es inválido
        """
        try:
            return cls(**overrides)
        except ValidationError as e:
            logger.error(f"Error cargando configuración: {e}")
            raise ConfigurationError(f"Error en configuración: {e}") from e

    def runner_configuration(self) -> RunnerConfiguration:
        """Construye la configuración inmutable que consume el dominio."""
        return RunnerConfiguration(
            runner_scope=self.runner.scope,
            runner_labels=self.runner.labels,
            runner_group=self.runner.group,
            runner_name=self.runner.name,
            runner_disable_updates=self.runner.disable_updates,
            runner_disable_default_labels=self.runner.disable_default_labels,
        )


# Instancia global de configuración
_config: Optional[Settings] = None


def get_config() -> Settings:
    """Obtiene instancia de configuración (singleton)."""
    global _config

    if _config is None:
        _config = Settings.from_env()

    return _config


def reload_config() -> Settings:
    """Recarga la configuración desde variables de entorno."""
    global _config
    _config = None
    return get_config()
