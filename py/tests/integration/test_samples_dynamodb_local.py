from __future__ import annotations

import logging
import os

import pytest
from botocore.exceptions import ClientError

from ddbcodegen_py.operations import CREATE_TABLE, EXECUTE_STATEMENT, execute
from ddbcodegen_py.remediation import INVESTIGATE_HINT
from ddbcodegen_py.runtime import ClientSettings, create_dynamodb_client

pytestmark = pytest.mark.skipif(
    not os.environ.get("DYNAMODB_ENDPOINT"), reason="DYNAMODB_ENDPOINT not set (DynamoDB Local required)"
)


@pytest.fixture()
def client():
    client = create_dynamodb_client(ClientSettings.local(os.environ["DYNAMODB_ENDPOINT"]))
    yield client
    try:
        client.delete_table(TableName="Employee")
    except ClientError:
        pass


def test_create_table_sample_against_dynamodb_local(client, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    outcome = execute(CREATE_TABLE, client)

    assert outcome.ok
    assert outcome.response["TableDescription"]["TableName"] == "Employee"

    again = execute(CREATE_TABLE, client)
    assert not again.ok
    assert again.remediation is not None
    assert again.remediation.code == "ResourceInUseException"


def test_statement_on_missing_table_is_reported(client, caplog: pytest.LogCaptureFixture) -> None:
    outcome = execute(
        EXECUTE_STATEMENT, client, {"Statement": "select * from missing_table_for_samples where pk = 'p1'"}
    )

    assert not outcome.ok
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert INVESTIGATE_HINT not in errors[0]
