from __future__ import annotations

import logging
import os

from ddbcodegen_py.operations import BATCH_EXECUTE_STATEMENT, execute
from ddbcodegen_py.runtime import ClientSettings, create_dynamodb_client


def _client():
    # Set DYNAMODB_LOCAL=1 to run against DynamoDB Local instead.
    if os.environ.get("DYNAMODB_LOCAL"):
        settings = ClientSettings.local(os.environ.get("DYNAMODB_ENDPOINT", "http://localhost:8000"))
    else:
        settings = ClientSettings.from_env().with_defaults(
            region=BATCH_EXECUTE_STATEMENT.default_region,
            endpoint_url=BATCH_EXECUTE_STATEMENT.default_endpoint_url,
        )
    return create_dynamodb_client(settings)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    execute(BATCH_EXECUTE_STATEMENT, _client())


if __name__ == "__main__":
    main()
