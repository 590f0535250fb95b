from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import ValidationError

BillingMode = str  # "PAY_PER_REQUEST" | "PROVISIONED"
ProjectionType = str  # "ALL" | "KEYS_ONLY" | "INCLUDE"

_SCALAR_TYPES = {"S", "N", "B"}


@dataclass(frozen=True)
class KeyAttribute:
    name: str
    type: str = "S"


@dataclass(frozen=True)
class Throughput:
    read: int = 1
    write: int = 1

    def to_request(self) -> dict[str, int]:
        return {"ReadCapacityUnits": self.read, "WriteCapacityUnits": self.write}


@dataclass(frozen=True)
class SecondaryIndex:
    name: str
    partition: KeyAttribute
    sort: KeyAttribute | None = None
    projection: ProjectionType = "ALL"
    non_key_attributes: tuple[str, ...] = ()
    throughput: Throughput | None = None


@dataclass(frozen=True)
class TableDefinition:
    name: str
    partition: KeyAttribute
    sort: KeyAttribute | None = None
    indexes: tuple[SecondaryIndex, ...] = ()
    billing_mode: BillingMode = "PROVISIONED"
    throughput: Throughput | None = None


def build_create_table_request(definition: TableDefinition) -> dict[str, Any]:
    if not definition.name:
        raise ValidationError("table name is required")

    billing_mode = (definition.billing_mode or "PAY_PER_REQUEST").strip() or "PAY_PER_REQUEST"
    if billing_mode not in {"PAY_PER_REQUEST", "PROVISIONED"}:
        raise ValidationError(f"unsupported billing_mode: {billing_mode}")

    if billing_mode == "PROVISIONED" and definition.throughput is None:
        raise ValidationError("throughput is required when billing_mode=PROVISIONED")

    attr_types: dict[str, str] = {}
    _declare(attr_types, definition.partition)
    if definition.sort is not None:
        _declare(attr_types, definition.sort)

    gsis: list[dict[str, Any]] = []
    for idx in definition.indexes:
        _declare(attr_types, idx.partition)
        if idx.sort is not None:
            _declare(attr_types, idx.sort)

        proj: dict[str, Any] = {"ProjectionType": idx.projection}
        if idx.projection == "INCLUDE":
            if not idx.non_key_attributes:
                raise ValidationError(f"INCLUDE projection requires non_key_attributes: {idx.name}")
            proj["NonKeyAttributes"] = list(idx.non_key_attributes)
        elif idx.projection not in {"ALL", "KEYS_ONLY"}:
            raise ValidationError(f"unsupported projection: {idx.projection}")

        gsi: dict[str, Any] = {
            "IndexName": idx.name,
            "KeySchema": _key_schema(idx.partition, idx.sort),
            "Projection": proj,
        }
        if billing_mode == "PROVISIONED":
            gsi["ProvisionedThroughput"] = (idx.throughput or definition.throughput or Throughput()).to_request()
        gsis.append(gsi)

    req: dict[str, Any] = {
        "TableName": definition.name,
        "KeySchema": _key_schema(definition.partition, definition.sort),
        "BillingMode": billing_mode,
        "AttributeDefinitions": [
            {"AttributeName": name, "AttributeType": attr_type} for name, attr_type in attr_types.items()
        ],
    }
    if billing_mode == "PROVISIONED" and definition.throughput is not None:
        req["ProvisionedThroughput"] = definition.throughput.to_request()
    if gsis:
        req["GlobalSecondaryIndexes"] = gsis

    return req


def _key_schema(partition: KeyAttribute, sort: KeyAttribute | None) -> list[dict[str, str]]:
    schema = [{"AttributeName": partition.name, "KeyType": "HASH"}]
    if sort is not None:
        schema.append({"AttributeName": sort.name, "KeyType": "RANGE"})
    return schema


def _declare(attr_types: dict[str, str], attr: KeyAttribute) -> None:
    if not attr.name:
        raise ValidationError("key attribute name is required")
    if attr.type not in _SCALAR_TYPES:
        raise ValidationError(f"key attribute must be S/N/B: {attr.name} (got {attr.type})")

    existing = attr_types.get(attr.name)
    if existing is not None and existing != attr.type:
        raise ValidationError(f"conflicting types for attribute {attr.name}: {existing} and {attr.type}")
    attr_types.setdefault(attr.name, attr.type)
