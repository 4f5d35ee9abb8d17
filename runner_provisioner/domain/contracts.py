"""
Contratos/interfaces para dependencias externas del dominio.

Rol: Definir las interfaces que el dominio necesita del mundo exterior.
Permite que el dominio permanezca aislado de implementaciones técnicas.
Usa ABC para definir contratos que deben cumplir las implementaciones.

Implementado por: el cliente GitHub, el transporte SSH y el almacén de credenciales
del host que administra las VMs; SettingsCredentialsStore en infrastructure.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..shared.constants import RunnerScope
from .entities import AppAccessToken, RunnerDownloadURL, RunnerRegistrationToken


class GitHubCredentialsStore(ABC):
    """Contrato de sólo lectura para las credenciales de GitHub."""

    @property
    @abstractmethod
    def organization_name(self) -> Optional[str]:
        """Nombre de la organización, si existe."""
        pass

    @property
    @abstractmethod
    def owner_name(self) -> Optional[str]:
        """Dueño del repositorio, si existe."""
        pass

    @property
    @abstractmethod
    def repository_name(self) -> Optional[str]:
        """Nombre del repositorio, si existe."""
        pass


class GitHubClient(ABC):
    """
    Contrato para el cliente de la API de GitHub.

    Los errores propios del cliente se propagan sin traducir. Reintentos y
    timeouts son responsabilidad de la implementación.
    """

    @abstractmethod
    async def get_app_access_token(self, runner_scope: RunnerScope) -> AppAccessToken:
        """Autentica la app para el scope dado."""
        pass

    @abstractmethod
    async def get_runner_registration_token(
        self, app_access_token: AppAccessToken, runner_scope: RunnerScope
    ) -> RunnerRegistrationToken:
        """Obtiene un token de registro de runner."""
        pass

    @abstractmethod
    async def get_runner_download_url(
        self, app_access_token: AppAccessToken, runner_scope: RunnerScope
    ) -> RunnerDownloadURL:
        """Obtiene la URL de descarga del runner."""
        pass


class SSHConnection(ABC):
    """Contrato para el transporte de comandos remotos hacia la VM."""

    @abstractmethod
    async def execute_command(self, command: str) -> str:
        """Ejecuta un comando y espera a que termine."""
        pass

    @abstractmethod
    async def launch_detached(self, command: str) -> None:
        """Lanza un comando sin esperar su finalización."""
        pass
