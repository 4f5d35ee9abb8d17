"""
Servicio principal de orquestación del registro de un runner.

Rol: Secuenciar resolución de URL, adquisición de tokens, nombre del runner
y composición del script, y emitir los comandos remotos resultantes.
No mantiene estado mutable compartido: una instancia sirve a varias VMs a la vez.

Depende de: GitHubClient, GitHubCredentialsStore, SSHConnection (interfaces).
"""

import logging
from typing import List, Optional, Tuple

from ..shared.constants import SCRIPT_HEREDOC_DELIMITER
from ..shared.logging_utils import format_infrastructure_log, setup_logger
from .contracts import GitHubClient, GitHubCredentialsStore, SSHConnection
from .entities import GitHubCredentials, LifecycleScript, RunnerConfiguration, VirtualMachine
from .runner_name import resolve_runner_name
from .scope_resolver import ScopeResolver
from .script_composer import ScriptComposer
from .token_acquirer import TokenAcquirer


class ConnectionOrchestrator:
    """Registra un runner efímero en una VM recién conectada."""

    def __init__(
        self,
        client: GitHubClient,
        credentials_store: GitHubCredentialsStore,
        configuration: RunnerConfiguration,
        scope_resolver: Optional[ScopeResolver] = None,
        script_composer: Optional[ScriptComposer] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Inicializa el orquestador.

        Args:
            client: Cliente de la API de GitHub
            credentials_store: Almacén de credenciales (sólo lectura)
            configuration: Configuración del runner
            scope_resolver: Resolvedor de URL (opcional, se crea si no se proporciona)
            script_composer: Compositor del script (opcional, se crea si no se proporciona)
            logger: Logger de diagnóstico (opcional)
        """
        self.logger = logger or setup_logger(__name__)
        self.credentials_store = credentials_store
        self.configuration = configuration
        self.token_acquirer = TokenAcquirer(client)
        self.scope_resolver = scope_resolver or ScopeResolver(logger=self.logger)
        self.script_composer = script_composer or ScriptComposer()

    async def on_connected(self, virtual_machine: VirtualMachine, connection: SSHConnection) -> None:
        """
        Prepara y lanza el runner en la VM.

        Ningún comando remoto se emite hasta tener el script completo. Los
        errores del cliente y del transporte se propagan sin traducir.

        Args:
            virtual_machine: VM destino
            connection: Conexión SSH abierta hacia la VM
        """
        runner_scope = self.configuration.runner_scope
        credentials = GitHubCredentials.from_store(self.credentials_store)
        runner_url = self.scope_resolver.resolve_registration_url(runner_scope, credentials)

        # La URL resuelta no se pasa al cliente: sólo comparten el scope
        tokens = await self.token_acquirer.acquire(runner_scope)

        runner_name = resolve_runner_name(self.configuration.runner_name, virtual_machine)
        script = self.script_composer.compose(
            runner_url,
            tokens.registration_token,
            tokens.download_url,
            runner_name,
            self.configuration,
        )
        self.logger.info(f"Script del runner {runner_name} listo para {virtual_machine.name} ({runner_url})")

        await self._upload_and_launch(script, connection)

    async def _upload_and_launch(self, script: LifecycleScript, connection: SSHConnection) -> None:
        for step, command in self.upload_commands(script):
            self.logger.debug(format_infrastructure_log("SSH", "execute_command", step))
            await connection.execute_command(command)

        self.logger.debug(format_infrastructure_log("SSH", "launch_detached", script.path))
        await connection.launch_detached(script.path)

    @staticmethod
    def upload_commands(script: LifecycleScript) -> List[Tuple[str, str]]:
        """
        Comandos que crean el script en la VM, en orden.

        El heredoc va con delimitador entre comillas para que la shell
        remota no expanda nada del contenido.

        Returns:
            Lista de tuplas (paso, comando)
        """
        content = script.content if script.content.endswith("\n") else script.content + "\n"
        return [
            ("touch", f"touch {script.path}"),
            ("write", f"cat > {script.path} << '{SCRIPT_HEREDOC_DELIMITER}'\n{content}{SCRIPT_HEREDOC_DELIMITER}"),
            ("chmod", f"chmod +x {script.path}"),
        ]
