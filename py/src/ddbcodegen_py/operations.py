"""The four one-shot DynamoDB samples and the call that runs them.

Each sample builds a static request, issues exactly one call and reports the
outcome through the log. Failures are classified by error code and reported
with a remediation hint; nothing is retried or re-raised.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from botocore.exceptions import ClientError

from . import payloads
from .aws_errors import map_client_error
from .errors import AwsError, ConfigurationError
from .remediation import (
    BATCH_EXECUTE_STATEMENT_REMEDIATIONS,
    CREATE_TABLE_REMEDIATIONS,
    EXECUTE_STATEMENT_REMEDIATIONS,
    EXECUTE_TRANSACTION_REMEDIATIONS,
    Remediation,
    handle_error,
)

LOG = logging.getLogger(__name__)

LOCAL_PARTIQL_ENDPOINT = "http://127.0.0.1:8080"


@dataclass(frozen=True)
class Operation:
    name: str
    method: str
    build_input: Callable[[], dict[str, Any]]
    overrides: Mapping[str, Remediation] = field(default_factory=dict)
    success_message: str = ""
    echo_output: bool = True
    default_region: str | None = None
    default_endpoint_url: str | None = None

    @property
    def slug(self) -> str:
        out = []
        for i, ch in enumerate(self.name):
            if ch.isupper() and i:
                out.append("-")
            out.append(ch.lower())
        return "".join(out)


@dataclass(frozen=True)
class Outcome:
    operation: str
    response: Mapping[str, Any] | None = None
    error: AwsError | None = None
    remediation: Remediation | None = None

    @property
    def ok(self) -> bool:
        return self.response is not None


CREATE_TABLE = Operation(
    name="CreateTable",
    method="create_table",
    build_input=payloads.build_create_table_input,
    overrides=CREATE_TABLE_REMEDIATIONS,
    success_message="Successfully created table.",
    echo_output=False,
    default_region="us-east-1",
)

BATCH_EXECUTE_STATEMENT = Operation(
    name="BatchExecuteStatement",
    method="batch_execute_statement",
    build_input=payloads.build_batch_execute_statement_input,
    overrides=BATCH_EXECUTE_STATEMENT_REMEDIATIONS,
    default_region="eu-west-1",
    default_endpoint_url=LOCAL_PARTIQL_ENDPOINT,
)

EXECUTE_TRANSACTION = Operation(
    name="ExecuteTransaction",
    method="execute_transaction",
    build_input=payloads.build_execute_transaction_input,
    overrides=EXECUTE_TRANSACTION_REMEDIATIONS,
    default_region="eu-west-1",
    default_endpoint_url=LOCAL_PARTIQL_ENDPOINT,
)

EXECUTE_STATEMENT = Operation(
    name="ExecuteStatement",
    method="execute_statement",
    build_input=payloads.build_execute_statement_input,
    overrides=EXECUTE_STATEMENT_REMEDIATIONS,
    default_region="eu-west-1",
    default_endpoint_url=LOCAL_PARTIQL_ENDPOINT,
)

OPERATIONS: Mapping[str, Operation] = {
    op.slug: op for op in (CREATE_TABLE, BATCH_EXECUTE_STATEMENT, EXECUTE_TRANSACTION, EXECUTE_STATEMENT)
}


def get_operation(slug: str) -> Operation:
    op = OPERATIONS.get((slug or "").strip().lower())
    if op is None:
        raise ConfigurationError(f"unknown operation: {slug} (choose from {', '.join(sorted(OPERATIONS))})")
    return op


def dump_json(value: Any) -> str:
    return json.dumps(value, default=str)


def execute(
    operation: Operation,
    client: Any,
    request: Mapping[str, Any] | None = None,
    *,
    logger: logging.Logger | None = None,
) -> Outcome:
    log = logger or LOG
    req = dict(request) if request is not None else operation.build_input()

    outcome = _call(operation, client, req, log)
    log.info("%s API call has been executed.", operation.name)
    return outcome


def report_failure(operation: Operation, err: Exception, *, logger: logging.Logger | None = None) -> Outcome:
    """Report an error raised before the call could be made, e.g. while building the client."""
    log = logger or LOG
    remediation = handle_error(err, operation.overrides, logger=log)
    log.info("%s API call has been executed.", operation.name)
    return Outcome(operation=operation.name, remediation=remediation)


def _call(operation: Operation, client: Any, req: dict[str, Any], log: logging.Logger) -> Outcome:
    try:
        response = getattr(client, operation.method)(**req)
    except ClientError as err:
        remediation = handle_error(err, operation.overrides, logger=log)
        return Outcome(operation=operation.name, error=map_client_error(err), remediation=remediation)
    except Exception as err:
        # Anything without an error code is logged as-is and not re-raised.
        handle_error(err, operation.overrides, logger=log)
        return Outcome(operation=operation.name)

    log.info(operation.success_message or f"{operation.name} executed successfully.")
    response = dict(response or {})
    if operation.echo_output:
        log.info("%s", dump_json(response))
    return Outcome(operation=operation.name, response=response)
