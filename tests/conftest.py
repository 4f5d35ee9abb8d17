"""Fakes en memoria para los colaboradores externos."""

import asyncio
from typing import List, Optional

import pytest

from runner_provisioner.domain.contracts import GitHubClient, GitHubCredentialsStore, SSHConnection
from runner_provisioner.domain.entities import (
    AppAccessToken,
    RunnerConfiguration,
    RunnerDownloadURL,
    RunnerRegistrationToken,
)
from runner_provisioner.shared.constants import RunnerScope

REGISTRATION_TOKEN = "AABBCCDDEEFF-registration"
DOWNLOAD_URL = "https://github.com/actions/runner/releases/download/v2.317.0/actions-runner-osx-arm64-2.317.0.tar.gz"


class FakeCredentialsStore(GitHubCredentialsStore):
    def __init__(self, organization_name=None, owner_name=None, repository_name=None):
        self._organization_name = organization_name
        self._owner_name = owner_name
        self._repository_name = repository_name
        self.reads = 0

    @property
    def organization_name(self) -> Optional[str]:
        self.reads += 1
        return self._organization_name

    @property
    def owner_name(self) -> Optional[str]:
        return self._owner_name

    @property
    def repository_name(self) -> Optional[str]:
        return self._repository_name


class FakeGitHubClient(GitHubClient):
    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.calls: List[tuple] = []

    def _maybe_fail(self, step: str):
        if self.fail_on == step:
            raise RuntimeError(f"{step} failed")

    async def get_app_access_token(self, runner_scope):
        self.calls.append(("app_token", runner_scope))
        self._maybe_fail("app_token")
        return AppAccessToken("app-token-value")

    async def get_runner_registration_token(self, app_access_token, runner_scope):
        self.calls.append(("registration_token", app_access_token, runner_scope))
        self._maybe_fail("registration_token")
        return RunnerRegistrationToken(REGISTRATION_TOKEN)

    async def get_runner_download_url(self, app_access_token, runner_scope):
        self.calls.append(("download_url", app_access_token, runner_scope))
        self._maybe_fail("download_url")
        return RunnerDownloadURL(DOWNLOAD_URL)


class FakeSSHConnection(SSHConnection):
    def __init__(self, fail_on_command: Optional[str] = None):
        self.fail_on_command = fail_on_command
        self.commands: List[str] = []
        self.detached: List[str] = []

    async def execute_command(self, command: str) -> str:
        self.commands.append(command)
        if self.fail_on_command and command.startswith(self.fail_on_command):
            raise ConnectionError("connection lost")
        return ""

    async def launch_detached(self, command: str) -> None:
        self.detached.append(command)


@pytest.fixture
def repo_credentials():
    return FakeCredentialsStore(owner_name="octo-org", repository_name="hello-world")


@pytest.fixture
def org_credentials():
    return FakeCredentialsStore(organization_name="octo-org")


@pytest.fixture
def repo_configuration():
    return RunnerConfiguration(
        runner_scope=RunnerScope.REPOSITORY,
        runner_labels="macos,arm64",
        runner_group="Default",
        runner_name="CI Runner",
    )


@pytest.fixture
def github_client():
    return FakeGitHubClient()


@pytest.fixture
def connection():
    return FakeSSHConnection()


class StalledGitHubClient(FakeGitHubClient):
    """Se queda esperando en la URL de descarga; avisa con `stalled` al llegar."""

    def __init__(self, stalled: asyncio.Event):
        super().__init__()
        self.stalled = stalled

    async def get_runner_download_url(self, app_access_token, runner_scope):
        self.calls.append(("download_url", app_access_token, runner_scope))
        self.stalled.set()
        await asyncio.Event().wait()
