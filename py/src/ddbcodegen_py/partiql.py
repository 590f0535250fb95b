from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from boto3.dynamodb.types import TypeSerializer

from .errors import ValidationError

_serializer = TypeSerializer()


def placeholder_count(text: str) -> int:
    count = 0
    quote: str | None = None
    for ch in text:
        if quote is not None:
            if ch == quote:
                quote = None
            continue
        if ch in {"'", '"'}:
            quote = ch
        elif ch == "?":
            count += 1
    return count


@dataclass(frozen=True)
class Statement:
    statement: str
    parameters: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if not self.statement.strip():
            raise ValidationError("statement must be non-empty")
        expected = placeholder_count(self.statement)
        if expected != len(self.parameters):
            raise ValidationError(
                f"statement expects {expected} parameter(s), got {len(self.parameters)}: {self.statement}"
            )

    def serialized_parameters(self) -> list[dict[str, Any]]:
        try:
            return [_serializer.serialize(value) for value in self.parameters]
        except TypeError as err:
            raise ValidationError(f"unsupported parameter value: {err}") from err

    def to_request(self) -> dict[str, Any]:
        req: dict[str, Any] = {"Statement": self.statement}
        if self.parameters:
            req["Parameters"] = self.serialized_parameters()
        return req


def statement(text: str, *params: Any) -> Statement:
    return Statement(statement=text, parameters=tuple(params))


def to_requests(statements: Sequence[Statement]) -> list[dict[str, Any]]:
    return [stmt.to_request() for stmt in statements]
