from __future__ import annotations

from typing import Any

from botocore.exceptions import ClientError

from .errors import AwsError


def _error_block(err: Any) -> dict[str, Any]:
    response = getattr(err, "response", None)
    if not isinstance(response, dict):
        return {}
    block = response.get("Error")
    return block if isinstance(block, dict) else {}


def error_code(err: Any) -> str:
    return str(_error_block(err).get("Code") or "")


def error_message(err: Any) -> str:
    message = _error_block(err).get("Message")
    if message:
        return str(message)
    return str(err)


def map_client_error(err: ClientError) -> AwsError:
    return AwsError(code=error_code(err) or "UnknownError", message=error_message(err))
