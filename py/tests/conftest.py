from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_package_log_level() -> Iterator[None]:
    yield
    logging.getLogger("ddbcodegen_py").setLevel(logging.NOTSET)
