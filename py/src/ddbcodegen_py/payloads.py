"""Static request payloads for the four samples."""

from __future__ import annotations

from typing import Any

from .partiql import statement, to_requests
from .schema import KeyAttribute, SecondaryIndex, TableDefinition, Throughput, build_create_table_request

EMPLOYEE_TABLE = TableDefinition(
    name="Employee",
    partition=KeyAttribute("LoginAlias"),
    sort=KeyAttribute("JoinDate"),
    billing_mode="PROVISIONED",
    throughput=Throughput(read=1, write=1),
    indexes=(
        SecondaryIndex(
            name="Name",
            partition=KeyAttribute("LastName"),
            sort=KeyAttribute("FirstName"),
            projection="ALL",
            throughput=Throughput(read=1, write=1),
        ),
    ),
)


def build_create_table_input() -> dict[str, Any]:
    return build_create_table_request(EMPLOYEE_TABLE)


def build_batch_execute_statement_input() -> dict[str, Any]:
    return {
        "Statements": to_requests(
            [
                statement("select d1 from test_table where pk = ? and hk = ?", "p1", "h5"),
                statement("select data from test_table where pk = ? and hk = ?", "p1", "h10"),
            ]
        )
    }


def build_execute_transaction_input() -> dict[str, Any]:
    return {
        "TransactStatements": to_requests(
            [
                statement("select s from test_table where pk = ? and hk = ?", "p1", "h1"),
                statement("select data from test_table where pk = ? and hk = ?", "p2", "h10"),
            ]
        )
    }


def build_execute_statement_input() -> dict[str, Any]:
    req = statement("select data from test_table where pk = 'p1' and hk = 'h1'").to_request()
    req["ConsistentRead"] = True
    return req
