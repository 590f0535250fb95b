from __future__ import annotations

import json
import logging

import click
from botocore.exceptions import BotoCoreError

from . import __version__
from .errors import ConfigurationError
from .operations import OPERATIONS, Operation, execute, get_operation, report_failure
from .runtime import AwsCallMetric, ClientSettings, create_dynamodb_client

LOG = logging.getLogger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def setup_logging(level: str) -> None:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ConfigurationError(f"unknown log level: {level}")
    logging.basicConfig(level=resolved, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("ddbcodegen_py").setLevel(resolved)


def _log_metric(metric: AwsCallMetric) -> None:
    LOG.debug(
        "%s.%s finished in %.3fs (ok=%s)", metric.service, metric.operation, metric.seconds, metric.ok
    )


def _resolve_operation(name: str) -> Operation:
    try:
        return get_operation(name)
    except ConfigurationError as err:
        raise click.ClickException(str(err)) from err


@click.group(name="ddbcodegen-py", help="Run one-shot DynamoDB sample requests")
@click.version_option(version=__version__, message="%(version)s")
def cli() -> None:
    pass


@cli.command(name="list", help="List the available sample operations")
def list_operations() -> None:
    for slug, op in OPERATIONS.items():
        click.echo(f"{slug}\t{op.name}")


@cli.command(name="show", help="Print the request payload of a sample without calling AWS")
@click.argument("operation")
def show(operation: str) -> None:
    op = _resolve_operation(operation)
    click.echo(json.dumps(op.build_input(), indent=2))


@cli.command(name="run", help="Execute a sample request and log the outcome")
@click.argument("operation")
@click.option("--region", default=None, help="AWS region (defaults to AWS_REGION or the sample's region)")
@click.option("--endpoint-url", default=None, help="Custom endpoint (defaults to DYNAMODB_ENDPOINT)")
@click.option("--profile", default=None, help="Credentials profile from the shared credentials file")
@click.option(
    "--local",
    is_flag=True,
    help="Target DynamoDB Local with dummy credentials (not combinable with --region or --profile)",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="INFO",
    show_default=True,
)
def run(
    operation: str,
    region: str | None,
    endpoint_url: str | None,
    profile: str | None,
    local: bool,
    log_level: str,
) -> None:
    setup_logging(log_level)
    op = _resolve_operation(operation)

    if local:
        if region or profile:
            raise click.UsageError("--local cannot be combined with --region or --profile")
        settings = ClientSettings.local(endpoint_url) if endpoint_url else ClientSettings.local()
    else:
        settings = ClientSettings.from_env(region=region, endpoint_url=endpoint_url, profile=profile)
        settings = settings.with_defaults(region=op.default_region, endpoint_url=op.default_endpoint_url)

    LOG.debug("running %s against region=%s endpoint=%s", op.name, settings.region, settings.endpoint_url)
    try:
        client = create_dynamodb_client(settings, metrics=_log_metric)
    except BotoCoreError as err:
        report_failure(op, err)
        return
    execute(op, client)
