from __future__ import annotations

import logging
import os

from ddbcodegen_py.operations import EXECUTE_TRANSACTION, execute
from ddbcodegen_py.runtime import ClientSettings, create_dynamodb_client


def _client():
    # Set DYNAMODB_LOCAL=1 to run against DynamoDB Local instead.
    if os.environ.get("DYNAMODB_LOCAL"):
        settings = ClientSettings.local(os.environ.get("DYNAMODB_ENDPOINT", "http://localhost:8000"))
    else:
        settings = ClientSettings.from_env().with_defaults(
            region=EXECUTE_TRANSACTION.default_region,
            endpoint_url=EXECUTE_TRANSACTION.default_endpoint_url,
        )
    return create_dynamodb_client(settings)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    execute(EXECUTE_TRANSACTION, _client())


if __name__ == "__main__":
    main()
