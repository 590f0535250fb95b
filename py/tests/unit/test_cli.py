from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

import ddbcodegen_py
from ddbcodegen_py import cli as cli_module
from ddbcodegen_py.cli import cli
from ddbcodegen_py.mocks import FakeDynamoDBClient
from ddbcodegen_py.runtime import ClientSettings
from ddbcodegen_py.testkit import client_error


@pytest.fixture()
def fake_client(monkeypatch: pytest.MonkeyPatch) -> tuple[FakeDynamoDBClient, list[ClientSettings]]:
    client = FakeDynamoDBClient()
    seen: list[ClientSettings] = []

    def factory(settings: ClientSettings, **kwargs: object) -> FakeDynamoDBClient:
        _ = kwargs
        seen.append(settings)
        return client

    monkeypatch.setattr(cli_module, "create_dynamodb_client", factory)
    for name in ("AWS_REGION", "AWS_DEFAULT_REGION", "DYNAMODB_ENDPOINT", "AWS_PROFILE"):
        monkeypatch.delenv(name, raising=False)
    return client, seen


def test_list_prints_slugs() -> None:
    result = CliRunner().invoke(cli, ["list"])
    assert result.exit_code == 0
    assert "create-table\tCreateTable" in result.output
    assert "execute-statement\tExecuteStatement" in result.output


def test_show_prints_payload_without_calling_aws() -> None:
    result = CliRunner().invoke(cli, ["show", "execute-statement"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "Statement": "select data from test_table where pk = 'p1' and hk = 'h1'",
        "ConsistentRead": True,
    }


def test_unknown_operation_is_a_usage_error() -> None:
    result = CliRunner().invoke(cli, ["show", "scan"])
    assert result.exit_code == 1
    assert "unknown operation: scan" in result.output


def test_version_option() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == ddbcodegen_py.__version__


def test_run_uses_sample_defaults(fake_client, caplog: pytest.LogCaptureFixture) -> None:
    client, seen = fake_client
    client.expect("batch_execute_statement", response={"Responses": []})

    result = CliRunner().invoke(cli, ["run", "batch-execute-statement"])

    assert result.exit_code == 0
    client.assert_no_pending()
    assert seen == [ClientSettings(region="eu-west-1", endpoint_url="http://127.0.0.1:8080")]
    assert "BatchExecuteStatement executed successfully." in caplog.messages


def test_run_flags_override_defaults(fake_client) -> None:
    client, seen = fake_client
    client.expect("create_table", response={})

    result = CliRunner().invoke(
        cli, ["run", "create-table", "--region", "us-west-2", "--profile", "dev", "--log-level", "debug"]
    )

    assert result.exit_code == 0
    assert seen == [ClientSettings(region="us-west-2", profile="dev")]


def test_run_local_targets_dynamodb_local(fake_client) -> None:
    client, seen = fake_client
    client.expect("execute_statement", response={"Items": []})

    result = CliRunner().invoke(cli, ["run", "execute-statement", "--local"])

    assert result.exit_code == 0
    assert seen == [ClientSettings.local()]


def test_run_reports_failures_without_failing(fake_client, caplog: pytest.LogCaptureFixture) -> None:
    client, _ = fake_client
    client.expect("execute_transaction", error=client_error("TransactionInProgressException", "busy"))

    result = CliRunner().invoke(cli, ["run", "execute-transaction"])

    assert result.exit_code == 0
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].startswith("The transaction with the given request token is already in progress")
    assert errors[0].endswith("Error: busy")


def test_run_with_unknown_profile_is_reported(
    monkeypatch: pytest.MonkeyPatch, tmp_path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "config").write_text("[default]\nregion = us-east-1\n", encoding="utf-8")
    (tmp_path / "credentials").write_text("", encoding="utf-8")
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
    monkeypatch.delenv("AWS_PROFILE", raising=False)

    result = CliRunner().invoke(cli, ["run", "execute-statement", "--profile", "nope"])

    assert result.exit_code == 0
    assert result.exception is None
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].startswith("An exception occurred, investigate and configure retry strategy.")
    assert "ProfileNotFound" in errors[0]
    assert "ExecuteStatement API call has been executed." in caplog.messages


@pytest.mark.parametrize("extra", [["--region", "us-west-2"], ["--profile", "dev"]])
def test_run_local_rejects_region_and_profile(fake_client, extra: list[str]) -> None:
    _, seen = fake_client

    result = CliRunner().invoke(cli, ["run", "execute-statement", "--local", *extra])

    assert result.exit_code == 2
    assert "--local cannot be combined with --region or --profile" in result.output
    assert seen == []
