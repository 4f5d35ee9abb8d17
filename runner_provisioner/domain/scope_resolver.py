"""
Resolución del scope y de la URL de registro del runner.

Rol: Decidir si el runner se registra contra una organización o un repositorio
y construir la URL canónica de registro.
Lógica pura: no hay reintentos ni llamadas externas.

Depende de: GitHubCredentials (snapshot), validation_utils.
"""

import logging
from typing import Optional

from ..shared.constants import GITHUB_WEB_BASE, RunnerScope
from ..shared.domain_exceptions import InvalidRunnerURL, OrganizationNameUnavailable
from ..shared.logging_utils import setup_logger
from ..shared.validation_utils import is_valid_path_segment
from .entities import GitHubCredentials


class ScopeResolver:
    """Construye la URL de registro según el scope configurado."""

    def __init__(self, web_base_url: str = GITHUB_WEB_BASE, logger: Optional[logging.Logger] = None):
        """
        Args:
            web_base_url: URL base de la plataforma (sin barra final)
            logger: Logger para diagnósticos (opcional)
        """
        self.web_base_url = web_base_url.rstrip("/")
        self.logger = logger or setup_logger(__name__)

    def resolve_registration_url(self, scope: RunnerScope, credentials: GitHubCredentials) -> str:
        """
        Resuelve la URL de registro del runner.

        Args:
            scope: Scope del runner
            credentials: Snapshot de credenciales

        Returns:
            URL de registro

        Raises:
            OrganizationNameUnavailable: Si falta la organización en scope de organización
            InvalidRunnerURL: Si faltan datos del repositorio o la URL no es construible
        """
        if scope == RunnerScope.ORGANIZATION:
            organization_name = self._get_organization_name(credentials)
            if not is_valid_path_segment(organization_name):
                self.logger.info(f"URL de runner inválida para la organización {organization_name}")
                raise InvalidRunnerURL()
            return f"{self.web_base_url}/{organization_name}"

        owner_name = credentials.owner_name
        repository_name = credentials.repository_name
        if not (is_valid_path_segment(owner_name) and is_valid_path_segment(repository_name)):
            self.logger.info("URL de runner inválida para el repositorio")
            raise InvalidRunnerURL()
        return f"{self.web_base_url}/{owner_name}/{repository_name}"

    def _get_organization_name(self, credentials: GitHubCredentials) -> str:
        if credentials.organization_name is None:
            self.logger.info("El nombre de la organización de GitHub no está disponible")
            raise OrganizationNameUnavailable()
        return credentials.organization_name
