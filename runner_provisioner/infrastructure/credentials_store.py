"""
Almacén de credenciales respaldado por la configuración.

Rol: Exponer organización, dueño y repositorio configurados a través del
contrato GitHubCredentialsStore. Sólo lectura: no persiste ni refresca nada.

Depende de: Settings.
"""

from typing import Optional

from ..domain.contracts import GitHubCredentialsStore
from .config import Settings


class SettingsCredentialsStore(GitHubCredentialsStore):
    """Credenciales leídas de Settings en cada acceso."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def organization_name(self) -> Optional[str]:
        return self.settings.credentials.organization_name

    @property
    def owner_name(self) -> Optional[str]:
        return self.settings.credentials.owner_name

    @property
    def repository_name(self) -> Optional[str]:
        return self.settings.credentials.repository_name
