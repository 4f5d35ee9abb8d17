"""
Entidades de dominio del registro de runners.

Rol: Definir los valores que fluyen por el registro de un runner efímero.
Contiene VirtualMachine, GitHubCredentials, tokens, RunnerConfiguration y LifecycleScript.
Estas entidades no tienen dependencias externas y representan el modelo de dominio puro.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..shared.constants import DEFAULT_RUNNER_GROUP, RunnerScope
from ..shared.logging_utils import mask_sensitive_data


def _present(value: Optional[str]) -> Optional[str]:
    """Trata cadenas vacías o sólo con espacios como ausentes."""
    if value is None or not value.strip():
        return None
    return value


@dataclass(frozen=True)
class VirtualMachine:
    """Entidad: máquina virtual efímera destino del runner."""

    name: str


@dataclass(frozen=True)
class GitHubCredentials:
    """Snapshot de credenciales tomado una vez por intento de registro."""

    organization_name: Optional[str] = None
    owner_name: Optional[str] = None
    repository_name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "organization_name", _present(self.organization_name))
        object.__setattr__(self, "owner_name", _present(self.owner_name))
        object.__setattr__(self, "repository_name", _present(self.repository_name))

    @classmethod
    def from_store(cls, store) -> "GitHubCredentials":
        """
        Lee el almacén de credenciales una sola vez.

        Args:
            store: Implementación de GitHubCredentialsStore

        Returns:
            Snapshot inmutable de credenciales
        """
        return cls(
            organization_name=store.organization_name,
            owner_name=store.owner_name,
            repository_name=store.repository_name,
        )


@dataclass(frozen=True)
class AppAccessToken:
    """Token de acceso de la app, opaco para el dominio."""

    raw_value: str = field(repr=False)

    def __repr__(self) -> str:
        return f"AppAccessToken({mask_sensitive_data(self.raw_value)})"


@dataclass(frozen=True)
class RunnerRegistrationToken:
    """Token de registro de un solo uso, se incrusta tal cual en el script."""

    raw_value: str = field(repr=False)

    def __repr__(self) -> str:
        return f"RunnerRegistrationToken({mask_sensitive_data(self.raw_value)})"


@dataclass(frozen=True)
class RunnerDownloadURL:
    """Ubicación del archivo comprimido del runner."""

    url: str

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class RunnerTokens:
    """Resultado completo de la adquisición de tokens."""

    registration_token: RunnerRegistrationToken
    download_url: RunnerDownloadURL


@dataclass(frozen=True)
class RunnerConfiguration:
    """Opciones reconocidas del runner, inmutables durante el registro."""

    runner_scope: RunnerScope = RunnerScope.REPOSITORY
    runner_labels: str = ""
    runner_group: str = DEFAULT_RUNNER_GROUP
    runner_name: str = ""
    runner_disable_updates: bool = False
    runner_disable_default_labels: bool = False


@dataclass(frozen=True)
class LifecycleScript:
    """Script de ciclo de vida renderizado, listo para subir a la VM."""

    path: str
    content: str = field(repr=False)

    def __repr__(self) -> str:
        # El contenido lleva el token de registro
        return f"LifecycleScript(path={self.path!r}, length={len(self.content)})"
