from __future__ import annotations

import json
import re
from importlib.resources import files
from typing import TYPE_CHECKING, Any

from .errors import AwsError, ConfigurationError, DdbCodegenError, ValidationError
from .partiql import Statement, statement
from .remediation import (
    COMMON_REMEDIATIONS,
    ErrorCategory,
    Remediation,
    categorize,
    describe_error,
    handle_error,
    lookup,
)
from .schema import KeyAttribute, SecondaryIndex, TableDefinition, Throughput, build_create_table_request

if TYPE_CHECKING:
    from .operations import (
        BATCH_EXECUTE_STATEMENT,
        CREATE_TABLE,
        EXECUTE_STATEMENT,
        EXECUTE_TRANSACTION,
        OPERATIONS,
        Operation,
        Outcome,
        execute,
        get_operation,
    )
    from .runtime import AwsCallMetric, ClientSettings, create_boto3_config, create_dynamodb_client


def _read_repo_version() -> str:
    try:
        data = json.loads(files(__package__).joinpath("version.json").read_text(encoding="utf-8"))
    except Exception:
        return "0.0.0"

    version = data.get("version")
    return version if isinstance(version, str) and version else "0.0.0"


def _normalize_repo_version(repo_version: str) -> str:
    match = re.match(r"^(\d+\.\d+\.\d+)-rc\.?([0-9]+)$", repo_version)
    if match:
        return f"{match.group(1)}rc{match.group(2)}"
    return repo_version


__repo_version__ = _read_repo_version()
__version__ = _normalize_repo_version(__repo_version__)


def __getattr__(name: str) -> Any:
    if name in {
        "BATCH_EXECUTE_STATEMENT",
        "CREATE_TABLE",
        "EXECUTE_STATEMENT",
        "EXECUTE_TRANSACTION",
        "OPERATIONS",
        "Operation",
        "Outcome",
        "execute",
        "get_operation",
    }:
        from . import operations

        return getattr(operations, name)
    if name in {"AwsCallMetric", "ClientSettings", "create_boto3_config", "create_dynamodb_client"}:
        from . import runtime

        return getattr(runtime, name)
    raise AttributeError(name)


__all__ = [
    "AwsCallMetric",
    "AwsError",
    "BATCH_EXECUTE_STATEMENT",
    "build_create_table_request",
    "categorize",
    "ClientSettings",
    "COMMON_REMEDIATIONS",
    "ConfigurationError",
    "create_boto3_config",
    "create_dynamodb_client",
    "CREATE_TABLE",
    "DdbCodegenError",
    "describe_error",
    "ErrorCategory",
    "execute",
    "EXECUTE_STATEMENT",
    "EXECUTE_TRANSACTION",
    "get_operation",
    "handle_error",
    "KeyAttribute",
    "lookup",
    "Operation",
    "OPERATIONS",
    "Outcome",
    "Remediation",
    "SecondaryIndex",
    "Statement",
    "statement",
    "TableDefinition",
    "Throughput",
    "ValidationError",
    "__repo_version__",
    "__version__",
]
