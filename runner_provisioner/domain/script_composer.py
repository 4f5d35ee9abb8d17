"""
Composición del script de ciclo de vida del runner.

Rol: Renderizar el script que descarga, configura y ejecuta el runner dentro
de la VM y que apaga la máquina al terminar.
Centraliza las reglas de quoting para todo valor dinámico del script.

Depende de: shlex para quoting POSIX, constantes del layout del runner.
"""

import shlex
import textwrap
from typing import List

from ..shared.constants import (
    ACTIONS_RUNNER_ARCHIVE,
    ACTIONS_RUNNER_DIRECTORY,
    DEFAULT_SCRIPT_PATH,
    DEFAULT_SCRIPT_SHELL,
    DISABLE_UPDATE_FLAG,
    GITHUB_WEB_BASE,
    JOB_COMPLETED_HOOK_VARIABLE,
    JOB_STARTED_HOOK_VARIABLE,
    NO_DEFAULT_LABELS_FLAG,
    POST_RUN_HOOK_PATH,
    PRE_RUN_HOOK_PATH,
    RUNNER_ENV_FILE,
    RUNNER_WORK_DIRECTORY,
)
from ..shared.domain_exceptions import InvalidScriptValue
from ..shared.validation_utils import contains_forbidden_script_chars
from .entities import LifecycleScript, RunnerConfiguration, RunnerDownloadURL, RunnerRegistrationToken


def shell_quote(value: str) -> str:
    """
    Quoting POSIX para incrustar un valor en una línea del script.

    Args:
        value: Valor dinámico (URL, token, nombre, labels)

    Returns:
        Valor seguro para bash y zsh

    Raises:
        InvalidScriptValue: Si contiene saltos de línea o NUL
    """
    if contains_forbidden_script_chars(value):
        raise InvalidScriptValue()
    return shlex.quote(value)


_PRELUDE = textwrap.dedent(
    f"""\
    ACTIONS_RUNNER_ARCHIVE={ACTIONS_RUNNER_ARCHIVE}
    ACTIONS_RUNNER_DIRECTORY="{ACTIONS_RUNNER_DIRECTORY}"

    # Apaga la VM cuando el job termina, con o sin error.
    # El trap va antes de cualquier comando que pueda abortar el script.
    function onexit {{
      sudo shutdown -h now
    }}
    trap onexit EXIT
    set -eo pipefail
    """
)

_DOWNLOAD = textwrap.dedent(
    """\
    # Descarga el runner si no existen ni el directorio ni el archivo.
    if [ ! -d "$ACTIONS_RUNNER_DIRECTORY" ]; then
      if [ ! -f "$ACTIONS_RUNNER_ARCHIVE" ]; then
        curl -o "$ACTIONS_RUNNER_ARCHIVE" -L {download_url}
        mkdir -p "$ACTIONS_RUNNER_DIRECTORY"
        tar xzf "$ACTIONS_RUNNER_ARCHIVE" --directory "$ACTIONS_RUNNER_DIRECTORY"
      fi
    fi
    """
)

_HOOKS = textwrap.dedent(
    f"""\
    # Entorno que recibe el runner.
    RUNNER_ENV=""

    PRE_RUN_SCRIPT_PATH="{PRE_RUN_HOOK_PATH}"
    if [ -f "$PRE_RUN_SCRIPT_PATH" ]; then
      RUNNER_ENV="${{RUNNER_ENV}}{JOB_STARTED_HOOK_VARIABLE}=${{PRE_RUN_SCRIPT_PATH}}\\n"
    fi

    POST_RUN_SCRIPT_PATH="{POST_RUN_HOOK_PATH}"
    if [ -f "$POST_RUN_SCRIPT_PATH" ]; then
      RUNNER_ENV="${{RUNNER_ENV}}{JOB_COMPLETED_HOOK_VARIABLE}=${{POST_RUN_SCRIPT_PATH}}\\n"
    fi

    if [ -n "$RUNNER_ENV" ]; then
      printf '%b' "$RUNNER_ENV" > "$ACTIONS_RUNNER_DIRECTORY/{RUNNER_ENV_FILE}"
    fi
    """
)


class ScriptComposer:
    """Renderiza el script de ciclo de vida de un runner efímero."""

    def __init__(
        self,
        script_path: str = DEFAULT_SCRIPT_PATH,
        shell: str = DEFAULT_SCRIPT_SHELL,
        web_base_url: str = GITHUB_WEB_BASE,
    ):
        """
        Args:
            script_path: Ruta del script en la VM
            shell: Intérprete del shebang
            web_base_url: URL usada para esperar conectividad
        """
        self.script_path = script_path
        self.shell = shell
        self.web_base_url = web_base_url.rstrip("/")

    def compose(
        self,
        runner_url: str,
        runner_token: RunnerRegistrationToken,
        runner_download_url: RunnerDownloadURL,
        runner_name: str,
        configuration: RunnerConfiguration,
    ) -> LifecycleScript:
        """
        Renderiza el script completo.

        Args:
            runner_url: URL de registro (organización o repositorio)
            runner_token: Token de registro
            runner_download_url: URL del archivo del runner
            runner_name: Nombre anunciado del runner
            configuration: Configuración del runner

        Returns:
            Script listo para subir

        Raises:
            InvalidScriptValue: Si algún valor no puede incrustarse
        """
        sections = [
            f"#!{self.shell}\n" + _PRELUDE,
            "# Espera hasta poder conectar con GitHub.\n"
            f"until curl -Is {shell_quote(self.web_base_url)} &>/dev/null; do sleep 1; done\n",
            _DOWNLOAD.format(download_url=shell_quote(str(runner_download_url))),
            _HOOKS,
            self._configure_and_run(runner_url, runner_token, runner_name, configuration),
        ]
        return LifecycleScript(path=self.script_path, content="\n".join(sections))

    def _configure_and_run(
        self,
        runner_url: str,
        runner_token: RunnerRegistrationToken,
        runner_name: str,
        configuration: RunnerConfiguration,
    ) -> str:
        arguments = self.config_arguments(runner_url, runner_token, runner_name, configuration)
        lines: List[str] = ["# Configura y ejecuta el runner.", 'cd "$ACTIONS_RUNNER_DIRECTORY"', "./config.sh \\"]
        for index, argument in enumerate(arguments):
            continuation = " \\" if index < len(arguments) - 1 else ""
            lines.append(f"  {argument}{continuation}")
        lines.append("./run.sh")
        return "\n".join(lines) + "\n"

    def config_arguments(
        self,
        runner_url: str,
        runner_token: RunnerRegistrationToken,
        runner_name: str,
        configuration: RunnerConfiguration,
    ) -> List[str]:
        """
        Argumentos de config.sh, uno por línea y ya quoteados.

        Returns:
            Lista de argumentos en el orden que espera config.sh
        """
        arguments = [
            f"--url {shell_quote(runner_url)}",
            "--unattended",
            "--ephemeral",
            "--replace",
            f"--labels {shell_quote(configuration.runner_labels)}",
            f"--name {shell_quote(runner_name)}",
            f"--runnergroup {shell_quote(configuration.runner_group)}",
            f"--work {RUNNER_WORK_DIRECTORY}",
            f"--token {shell_quote(runner_token.raw_value)}",
        ]
        if configuration.runner_disable_updates:
            arguments.append(DISABLE_UPDATE_FLAG)
        if configuration.runner_disable_default_labels:
            arguments.append(NO_DEFAULT_LABELS_FLAG)
        return arguments
