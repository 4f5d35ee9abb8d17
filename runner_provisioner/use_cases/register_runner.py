"""
Caso de uso para el registro de un runner efímero en una VM.

Rol: Punto de entrada que llama el pool de VMs al establecer la conexión SSH.
Registra inicio, éxito o error de la operación y delega en ConnectionOrchestrator.
Los errores se propagan sin traducir: reintentar la conexión es decisión del llamador.

Depende de: ConnectionOrchestrator, Settings, GitHubClient.
"""

from typing import Optional

from ..domain.contracts import GitHubClient, GitHubCredentialsStore, SSHConnection
from ..domain.entities import VirtualMachine
from ..domain.orchestration_service import ConnectionOrchestrator
from ..domain.scope_resolver import ScopeResolver
from ..domain.script_composer import ScriptComposer
from ..infrastructure.config import Settings
from ..infrastructure.credentials_store import SettingsCredentialsStore
from ..shared.logging_utils import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
    setup_logger,
    setup_logging_config,
)

logger = setup_logger(__name__)


class RegisterRunner:
    """Caso de uso para registrar un runner al conectar con una VM."""

    def __init__(self, orchestrator: ConnectionOrchestrator):
        """
        Inicializa caso de uso.

        Args:
            orchestrator: Orquestador de la conexión
        """
        self.orchestrator = orchestrator

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: GitHubClient,
        credentials_store: Optional[GitHubCredentialsStore] = None,
    ) -> "RegisterRunner":
        """
        Construye el caso de uso a partir de la configuración.

        Args:
            settings: Configuración cargada
            client: Cliente de la API de GitHub
            credentials_store: Almacén de credenciales (opcional, por defecto el de Settings)

        Returns:
            Caso de uso listo para usar
        """
        setup_logging_config(settings.log_level)

        orchestrator = ConnectionOrchestrator(
            client=client,
            credentials_store=credentials_store or SettingsCredentialsStore(settings),
            configuration=settings.runner_configuration(),
            scope_resolver=ScopeResolver(web_base_url=settings.github.web_base_url),
            script_composer=ScriptComposer(
                script_path=settings.script.path,
                shell=settings.script.shell,
                web_base_url=settings.github.web_base_url,
            ),
        )
        return cls(orchestrator)

    async def execute(self, virtual_machine: VirtualMachine, connection: SSHConnection) -> None:
        """
        Registra y lanza el runner en la VM.

        Args:
            virtual_machine: VM recién conectada
            connection: Conexión SSH hacia la VM

        Raises:
            RunnerRegistrationError: Si no se puede resolver la URL o componer el script
            Cualquier error del cliente o del transporte, sin traducir
        """
        operation = "register_runner"
        scope = self.orchestrator.configuration.runner_scope.value
        log_operation_start(logger, operation, vm=virtual_machine.name, scope=scope)

        try:
            await self.orchestrator.on_connected(virtual_machine, connection)
        except Exception as e:
            log_operation_error(logger, operation, e, vm=virtual_machine.name, scope=scope)
            raise

        log_operation_success(logger, operation, vm=virtual_machine.name, scope=scope)
