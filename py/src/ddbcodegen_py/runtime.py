from __future__ import annotations

import os
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any, cast

import boto3
from botocore.config import Config

DYNAMODB_LOCAL_ENDPOINT = "http://localhost:8000"


@dataclass(frozen=True)
class AwsCallMetric:
    service: str
    operation: str
    seconds: float
    ok: bool


@dataclass(frozen=True)
class ClientSettings:
    region: str | None = None
    endpoint_url: str | None = None
    profile: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] = os.environ,
        *,
        region: str | None = None,
        endpoint_url: str | None = None,
        profile: str | None = None,
    ) -> ClientSettings:
        return cls(
            region=region or environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION") or None,
            endpoint_url=endpoint_url or environ.get("DYNAMODB_ENDPOINT") or None,
            profile=profile or environ.get("AWS_PROFILE") or None,
        )

    @classmethod
    def local(cls, endpoint_url: str = DYNAMODB_LOCAL_ENDPOINT) -> ClientSettings:
        return cls(
            region="localhost",
            endpoint_url=endpoint_url,
            access_key_id="access_key_id",
            secret_access_key="secret_access_key",
        )

    def with_defaults(self, *, region: str | None, endpoint_url: str | None) -> ClientSettings:
        return replace(
            self,
            region=self.region or region,
            endpoint_url=self.endpoint_url or endpoint_url,
        )


def create_boto3_config(
    *,
    connect_timeout: float | None = None,
    read_timeout: float | None = None,
    max_attempts: int | None = None,
) -> Config:
    # Unset options keep botocore's defaults.
    options: dict[str, Any] = {}
    if connect_timeout is not None:
        options["connect_timeout"] = connect_timeout
    if read_timeout is not None:
        options["read_timeout"] = read_timeout
    if max_attempts is not None:
        options["retries"] = {"max_attempts": max_attempts, "mode": "standard"}
    return Config(**options)


class _InstrumentedClient:
    def __init__(self, client: Any, service: str, on_call: Callable[[AwsCallMetric], None]) -> None:
        self._client = client
        self._service = service
        self._on_call = on_call

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._client, name)
        if name.startswith("_") or not callable(attr):
            return attr

        def wrapped(*args: Any, **kwargs: Any) -> Any:
            start = time.monotonic()
            ok = False
            try:
                out = attr(*args, **kwargs)
                ok = True
                return out
            finally:
                self._on_call(
                    AwsCallMetric(
                        service=self._service,
                        operation=name,
                        seconds=time.monotonic() - start,
                        ok=ok,
                    )
                )

        return wrapped


def instrument_boto3_client(
    client: Any,
    *,
    service: str,
    on_call: Callable[[AwsCallMetric], None],
) -> Any:
    return _InstrumentedClient(client, service, on_call)


def create_dynamodb_client(
    settings: ClientSettings,
    *,
    config: Config | None = None,
    session: Any | None = None,
    metrics: Callable[[AwsCallMetric], None] | None = None,
) -> Any:
    # Credentials come from the shared profile file unless keys are given explicitly.
    sess = session or boto3.session.Session(profile_name=settings.profile, region_name=settings.region)

    kwargs: dict[str, Any] = {"region_name": settings.region}
    if config is not None:
        kwargs["config"] = config
    if settings.endpoint_url:
        kwargs["endpoint_url"] = settings.endpoint_url
    if settings.access_key_id and settings.secret_access_key:
        kwargs["aws_access_key_id"] = settings.access_key_id
        kwargs["aws_secret_access_key"] = settings.secret_access_key

    client = cast(Any, sess).client("dynamodb", **kwargs)
    if metrics is not None:
        client = instrument_boto3_client(client, service="dynamodb", on_call=metrics)
    return client
