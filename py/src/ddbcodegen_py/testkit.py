from __future__ import annotations

from botocore.exceptions import ClientError

from .mocks import ANY, FakeDynamoDBClient


def client_error(code: str, message: str = "", operation: str = "ExecuteStatement") -> ClientError:
    error: dict[str, str] = {"Message": message}
    if code:
        error["Code"] = code
    return ClientError({"Error": error, "ResponseMetadata": {"HTTPStatusCode": 400}}, operation)


__all__ = [
    "ANY",
    "FakeDynamoDBClient",
    "client_error",
]
