import asyncio
import logging

import pytest

from runner_provisioner.domain.entities import LifecycleScript, RunnerConfiguration, VirtualMachine
from runner_provisioner.domain.orchestration_service import ConnectionOrchestrator
from runner_provisioner.shared.constants import RunnerScope
from runner_provisioner.shared.domain_exceptions import InvalidRunnerURL, OrganizationNameUnavailable

from conftest import (
    REGISTRATION_TOKEN,
    FakeCredentialsStore,
    FakeGitHubClient,
    FakeSSHConnection,
    StalledGitHubClient,
)

VM = VirtualMachine(name="baseVM-3")


def run(orchestrator, connection, vm=VM):
    asyncio.run(orchestrator.on_connected(vm, connection))


def test_commands_are_issued_in_order(github_client, repo_credentials, repo_configuration, connection):
    orchestrator = ConnectionOrchestrator(github_client, repo_credentials, repo_configuration)

    run(orchestrator, connection)

    assert len(connection.commands) == 3
    touch, write, chmod = connection.commands
    assert touch == "touch ~/start-runner.sh"
    assert write.startswith("cat > ~/start-runner.sh << 'START_RUNNER_SCRIPT_EOF'\n#!/bin/zsh\n")
    assert write.endswith("./run.sh\nSTART_RUNNER_SCRIPT_EOF")
    assert chmod == "chmod +x ~/start-runner.sh"
    assert connection.detached == ["~/start-runner.sh"]


def test_script_carries_resolved_values(github_client, repo_credentials, repo_configuration, connection):
    run(ConnectionOrchestrator(github_client, repo_credentials, repo_configuration), connection)

    script = connection.commands[1]
    assert "--url https://github.com/octo-org/hello-world \\" in script
    assert "--name 'CI Runner 3' \\" in script
    assert "--labels macos,arm64 \\" in script
    assert f"--token {REGISTRATION_TOKEN}" in script


def test_organization_scope(github_client, org_credentials, connection):
    configuration = RunnerConfiguration(runner_scope=RunnerScope.ORGANIZATION)

    run(ConnectionOrchestrator(github_client, org_credentials, configuration), connection)

    assert "--url https://github.com/octo-org \\" in connection.commands[1]
    assert "--name baseVM-3 \\" in connection.commands[1]
    assert all(call[-1] is RunnerScope.ORGANIZATION for call in github_client.calls)


def test_credentials_are_read_once(github_client, org_credentials, connection):
    configuration = RunnerConfiguration(runner_scope=RunnerScope.ORGANIZATION)

    run(ConnectionOrchestrator(github_client, org_credentials, configuration), connection)

    assert org_credentials.reads == 1


def test_missing_organization_aborts_before_any_call(github_client, connection):
    configuration = RunnerConfiguration(runner_scope=RunnerScope.ORGANIZATION)
    orchestrator = ConnectionOrchestrator(github_client, FakeCredentialsStore(), configuration)

    with pytest.raises(OrganizationNameUnavailable):
        run(orchestrator, connection)

    assert github_client.calls == []
    assert connection.commands == []
    assert connection.detached == []


def test_missing_repository_aborts(github_client, repo_configuration, connection):
    orchestrator = ConnectionOrchestrator(
        github_client, FakeCredentialsStore(owner_name="octo-org"), repo_configuration
    )

    with pytest.raises(InvalidRunnerURL):
        run(orchestrator, connection)

    assert connection.commands == []


@pytest.mark.parametrize("fail_on", ["app_token", "registration_token", "download_url"])
def test_token_failure_issues_no_commands(fail_on, repo_credentials, repo_configuration, connection):
    orchestrator = ConnectionOrchestrator(FakeGitHubClient(fail_on=fail_on), repo_credentials, repo_configuration)

    with pytest.raises(RuntimeError):
        run(orchestrator, connection)

    assert connection.commands == []
    assert connection.detached == []


def test_transport_failure_propagates_and_stops(github_client, repo_credentials, repo_configuration):
    connection = FakeSSHConnection(fail_on_command="cat >")
    orchestrator = ConnectionOrchestrator(github_client, repo_credentials, repo_configuration)

    with pytest.raises(ConnectionError, match="connection lost"):
        run(orchestrator, connection)

    assert len(connection.commands) == 2
    assert connection.detached == []


def test_token_is_never_logged(github_client, repo_credentials, repo_configuration, connection, caplog):
    with caplog.at_level(logging.DEBUG):
        run(ConnectionOrchestrator(github_client, repo_credentials, repo_configuration), connection)

    assert caplog.records
    assert REGISTRATION_TOKEN not in caplog.text


def test_concurrent_registrations_are_independent(github_client, repo_credentials, repo_configuration):
    orchestrator = ConnectionOrchestrator(github_client, repo_credentials, repo_configuration)
    connections = [FakeSSHConnection() for _ in range(3)]

    async def register_all():
        await asyncio.gather(*[
            orchestrator.on_connected(VirtualMachine(name=f"baseVM-{index}"), connection)
            for index, connection in enumerate(connections, start=1)
        ])

    asyncio.run(register_all())

    for index, connection in enumerate(connections, start=1):
        assert f"--name 'CI Runner {index}' \\" in connection.commands[1]


def test_upload_commands_add_trailing_newline():
    commands = ConnectionOrchestrator.upload_commands(LifecycleScript(path="/tmp/s.sh", content="echo hi"))

    assert commands[1] == ("write", "cat > /tmp/s.sh << 'START_RUNNER_SCRIPT_EOF'\necho hi\nSTART_RUNNER_SCRIPT_EOF")


def test_cancellation_during_token_acquisition_uploads_nothing(repo_credentials, repo_configuration, connection):
    async def cancel_while_stalled():
        client = StalledGitHubClient(stalled=asyncio.Event())
        orchestrator = ConnectionOrchestrator(client, repo_credentials, repo_configuration)
        task = asyncio.ensure_future(orchestrator.on_connected(VM, connection))

        await client.stalled.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        return client

    client = asyncio.run(cancel_while_stalled())

    assert [call[0] for call in client.calls] == ["app_token", "registration_token", "download_url"]
    assert connection.commands == []
    assert connection.detached == []
