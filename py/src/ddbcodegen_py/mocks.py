from __future__ import annotations

from collections import deque
from collections.abc import Callable, Mapping
from typing import Any, NamedTuple
from unittest.mock import ANY

Expectation = Mapping[str, Any] | Callable[[Mapping[str, Any]], None] | None


def _mismatch(expected: Any, actual: Any, path: str) -> str | None:
    if expected is ANY:
        return None
    if isinstance(expected, dict):
        if not isinstance(actual, dict):
            return f"{path}: expected dict, got {type(actual).__name__}"
        for key, value in expected.items():
            if key not in actual:
                return f"{path}: missing key {key!r}"
            found = _mismatch(value, actual[key], f"{path}.{key}")
            if found:
                return found
        return None
    if isinstance(expected, list):
        if not isinstance(actual, list):
            return f"{path}: expected list, got {type(actual).__name__}"
        if len(expected) != len(actual):
            return f"{path}: expected {len(expected)} items, got {len(actual)}"
        for i, pair in enumerate(zip(expected, actual, strict=True)):
            found = _mismatch(*pair, f"{path}[{i}]")
            if found:
                return found
        return None
    return None if expected == actual else f"{path}: expected {expected!r}, got {actual!r}"


class _Scripted(NamedTuple):
    method: str
    expected: Expectation
    response: Mapping[str, Any] | None
    error: Exception | None


class FakeDynamoDBClient:
    """Stands in for a boto3 DynamoDB client; each call consumes one scripted expectation."""

    def __init__(self) -> None:
        self._script: deque[_Scripted] = deque()
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def expect(
        self,
        method: str,
        expected: Expectation = None,
        *,
        response: Mapping[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._script.append(_Scripted(method, expected, response, error))

    def assert_no_pending(self) -> None:
        if self._script:
            raise AssertionError(f"pending expected calls: {[s.method for s in self._script]}")

    def _dispatch(self, method: str, req: dict[str, Any]) -> Mapping[str, Any]:
        self.calls.append((method, dict(req)))
        if not self._script:
            raise AssertionError(f"unexpected call: {method}")

        step = self._script.popleft()
        if step.method != method:
            raise AssertionError(f"expected {step.method}, got {method}")
        if callable(step.expected):
            step.expected(req)
        elif step.expected is not None:
            problem = _mismatch(dict(step.expected), req, method)
            if problem:
                raise AssertionError(problem)

        if step.error is not None:
            raise step.error
        return dict(step.response or {})

    def create_table(self, **kwargs: Any) -> Mapping[str, Any]:
        return self._dispatch("create_table", kwargs)

    def batch_execute_statement(self, **kwargs: Any) -> Mapping[str, Any]:
        return self._dispatch("batch_execute_statement", kwargs)

    def execute_transaction(self, **kwargs: Any) -> Mapping[str, Any]:
        return self._dispatch("execute_transaction", kwargs)

    def execute_statement(self, **kwargs: Any) -> Mapping[str, Any]:
        return self._dispatch("execute_statement", kwargs)
