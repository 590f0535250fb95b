"""Remediation hints for DynamoDB error codes.

Every sample resolves a failed call to exactly one log line. Operation-specific
codes are passed as ``overrides`` and take precedence over the codes that are
common to all DynamoDB APIs.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from botocore.exceptions import BotoCoreError

from .aws_errors import error_code, error_message

LOG = logging.getLogger(__name__)

EMPTY_ERROR_MESSAGE = "Encountered error object was empty"
INVESTIGATE_HINT = "An exception occurred, investigate and configure retry strategy."


class ErrorCategory(str, Enum):
    TRANSIENT = "transient"
    CAPACITY = "capacity"
    CLIENT = "client"
    AUTH = "auth"
    ACCOUNT_CAPACITY = "account_capacity"
    CONCURRENCY_LIMIT = "concurrency_limit"
    CONFLICT = "conflict"
    IDEMPOTENCY_CONFLICT = "idempotency_conflict"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Remediation:
    code: str
    category: ErrorCategory
    retryable: bool
    hint: str

    def render(self, message: str) -> str:
        return f"{self.hint} Error: {message}"


def _table(*entries: Remediation) -> dict[str, Remediation]:
    return {entry.code: entry for entry in entries}


COMMON_REMEDIATIONS: Mapping[str, Remediation] = _table(
    Remediation(
        "InternalServerError",
        ErrorCategory.TRANSIENT,
        True,
        "Internal Server Error, generally safe to retry with exponential back-off.",
    ),
    Remediation(
        "ProvisionedThroughputExceededException",
        ErrorCategory.CAPACITY,
        True,
        "Request rate is too high. If you're using a custom retry strategy make sure to retry with "
        "exponential back-off. Otherwise consider reducing frequency of requests or increasing "
        "provisioned capacity for your table or secondary index.",
    ),
    Remediation(
        "ResourceNotFoundException",
        ErrorCategory.CLIENT,
        False,
        "One of the tables was not found, verify table exists before retrying.",
    ),
    Remediation(
        "ServiceUnavailable",
        ErrorCategory.TRANSIENT,
        True,
        "Had trouble reaching DynamoDB. generally safe to retry with exponential back-off.",
    ),
    Remediation(
        "ThrottlingException",
        ErrorCategory.TRANSIENT,
        True,
        "Request denied due to throttling, generally safe to retry with exponential back-off.",
    ),
    Remediation(
        "UnrecognizedClientException",
        ErrorCategory.AUTH,
        False,
        "The request signature is incorrect most likely due to an invalid AWS access key ID or "
        "secret key, fix before retrying.",
    ),
    Remediation(
        "ValidationException",
        ErrorCategory.CLIENT,
        False,
        "The input fails to satisfy the constraints specified by DynamoDB, fix input before retrying.",
    ),
    Remediation(
        "RequestLimitExceeded",
        ErrorCategory.ACCOUNT_CAPACITY,
        True,
        "Throughput exceeds the current throughput limit for your account, increase account level "
        "throughput before retrying.",
    ),
)

CREATE_TABLE_REMEDIATIONS: Mapping[str, Remediation] = _table(
    Remediation(
        "LimitExceededException",
        ErrorCategory.CONCURRENCY_LIMIT,
        True,
        "Number of simultaneous table operations may exceed the limit. Up to 50 simultaneous table "
        "operations are allowed per account. You can have up to 25 such requests running at a time; "
        "however, if the table or index specifications are complex, DynamoDB might temporarily reduce "
        "the number of concurrent operations. Consider retry it later.",
    ),
    Remediation(
        "ResourceInUseException",
        ErrorCategory.CONFLICT,
        False,
        "Table is already existed. Change the table name before retrying.",
    ),
)

BATCH_EXECUTE_STATEMENT_REMEDIATIONS: Mapping[str, Remediation] = {}

EXECUTE_TRANSACTION_REMEDIATIONS: Mapping[str, Remediation] = _table(
    Remediation(
        "TransactionCanceledException",
        ErrorCategory.CLIENT,
        False,
        "Transaction Cancelled, implies a client issue, fix before retrying.",
    ),
    Remediation(
        "TransactionInProgressException",
        ErrorCategory.IDEMPOTENCY_CONFLICT,
        False,
        "The transaction with the given request token is already in progress, consider changing "
        "retry strategy for this type of error.",
    ),
    Remediation(
        "IdempotentParameterMismatchException",
        ErrorCategory.IDEMPOTENCY_CONFLICT,
        False,
        "Request rejected because it was retried with a different payload but with a request token "
        "that was already used, change request token for this payload to be accepted.",
    ),
)

EXECUTE_STATEMENT_REMEDIATIONS: Mapping[str, Remediation] = _table(
    Remediation(
        "ConditionalCheckFailedException",
        ErrorCategory.CLIENT,
        False,
        "Condition check specified in the operation failed, review and update the condition check "
        "before retrying.",
    ),
    Remediation(
        "TransactionConflictException",
        ErrorCategory.TRANSIENT,
        True,
        "Operation was rejected because there is an ongoing transaction for the item, generally safe "
        "to retry with exponential back-off.",
    ),
    Remediation(
        "ItemCollectionSizeLimitExceededException",
        ErrorCategory.CAPACITY,
        False,
        "An item collection is too large, you're using Local Secondary Index and exceeded size limit "
        "of items per partition key. Consider using Global Secondary Index instead.",
    ),
)


def lookup(code: str, overrides: Mapping[str, Remediation] | None = None) -> Remediation | None:
    if not code:
        return None
    if overrides and code in overrides:
        return overrides[code]
    return COMMON_REMEDIATIONS.get(code)


def categorize(code: str, overrides: Mapping[str, Remediation] | None = None) -> ErrorCategory:
    found = lookup(code, overrides)
    return found.category if found is not None else ErrorCategory.UNKNOWN


def _error_json(err: Any) -> str:
    payload: dict[str, Any] = {"type": type(err).__name__, "message": str(err)}
    if isinstance(err, BotoCoreError):
        payload.update(err.kwargs)
    response = getattr(err, "response", None)
    if isinstance(response, dict):
        payload["response"] = response
    return json.dumps(payload, default=str, sort_keys=True)


def describe_error(err: Any, overrides: Mapping[str, Remediation] | None = None) -> str:
    if err is None:
        return EMPTY_ERROR_MESSAGE

    code = error_code(err)
    if not code:
        return f"{INVESTIGATE_HINT} Error: {_error_json(err)}"

    found = lookup(code, overrides)
    if found is None:
        return f"{INVESTIGATE_HINT} Error: {error_message(err)}"
    return found.render(error_message(err))


def handle_error(
    err: Any,
    overrides: Mapping[str, Remediation] | None = None,
    *,
    logger: logging.Logger | None = None,
) -> Remediation | None:
    (logger or LOG).error(describe_error(err, overrides))
    if err is None:
        return None
    return lookup(error_code(err), overrides)
