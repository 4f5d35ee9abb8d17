"""
Adquisición de tokens para registrar un runner.

Rol: Encadenar las tres llamadas a la API de GitHub necesarias antes de
componer el script: token de la app, token de registro y URL de descarga.
Cada paso depende del anterior; cualquier error aborta el registro.

Depende de: GitHubClient (interface).
"""

from ..shared.constants import RunnerScope
from ..shared.logging_utils import setup_logger
from .contracts import GitHubClient
from .entities import RunnerTokens

logger = setup_logger(__name__)


class TokenAcquirer:
    """Obtiene los tokens de un registro sin política de reintentos propia."""

    def __init__(self, client: GitHubClient):
        self.client = client

    async def acquire(self, runner_scope: RunnerScope) -> RunnerTokens:
        """
        Ejecuta la secuencia completa de tokens.

        Args:
            runner_scope: Scope del runner

        Returns:
            Token de registro y URL de descarga

        Raises:
            Cualquier error del cliente, sin traducir
        """
        app_access_token = await self.client.get_app_access_token(runner_scope)
        logger.debug(f"Token de app obtenido para scope {runner_scope.value}")

        registration_token = await self.client.get_runner_registration_token(app_access_token, runner_scope)
        download_url = await self.client.get_runner_download_url(app_access_token, runner_scope)
        logger.debug(f"URL de descarga del runner: {download_url}")

        return RunnerTokens(registration_token=registration_token, download_url=download_url)
