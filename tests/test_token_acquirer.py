import asyncio

import pytest

from runner_provisioner.domain.entities import AppAccessToken
from runner_provisioner.domain.token_acquirer import TokenAcquirer
from runner_provisioner.shared.constants import RunnerScope

from conftest import DOWNLOAD_URL, REGISTRATION_TOKEN, FakeGitHubClient


def test_acquire_runs_the_three_calls_in_order(github_client):
    tokens = asyncio.run(TokenAcquirer(github_client).acquire(RunnerScope.ORGANIZATION))

    assert tokens.registration_token.raw_value == REGISTRATION_TOKEN
    assert tokens.download_url.url == DOWNLOAD_URL
    assert [call[0] for call in github_client.calls] == ["app_token", "registration_token", "download_url"]
    assert all(call[-1] is RunnerScope.ORGANIZATION for call in github_client.calls)
    assert github_client.calls[1][1] == AppAccessToken("app-token-value")
    assert github_client.calls[2][1] == AppAccessToken("app-token-value")


@pytest.mark.parametrize(
    "fail_on, expected_calls",
    [
        ("app_token", ["app_token"]),
        ("registration_token", ["app_token", "registration_token"]),
        ("download_url", ["app_token", "registration_token", "download_url"]),
    ],
)
def test_client_errors_propagate_unchanged(fail_on, expected_calls):
    client = FakeGitHubClient(fail_on=fail_on)

    with pytest.raises(RuntimeError, match=f"{fail_on} failed"):
        asyncio.run(TokenAcquirer(client).acquire(RunnerScope.REPOSITORY))

    assert [call[0] for call in client.calls] == expected_calls
