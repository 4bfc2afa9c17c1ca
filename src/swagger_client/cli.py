"""CLI entry point for swagger-client."""

import json
import logging
from pathlib import Path

import click
import requests
import yaml

from swagger_client.client import SwaggerClient
from swagger_client.errors import SwaggerClientError
from swagger_client.request import BODY_KEY, SchemeCheck
from swagger_client.transport import DEFAULT_TIMEOUT, RequestsTransport


def _parse_params(values: tuple[str, ...], body: str | None) -> dict:
    """Turn repeated ``-p name=value`` options (and ``--body``) into a parameter bag."""
    params = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {item!r}", param_hint="-p/--param")
        params[name] = value

    if body is not None:
        try:
            params[BODY_KEY] = json.loads(body)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="--body") from e
    return params


def _make_client(spec_path: Path, escape: bool, scheme_check: str, **kwargs) -> SwaggerClient:
    try:
        return SwaggerClient.from_file(spec_path, escape=escape, scheme_check=SchemeCheck(scheme_check), **kwargs)
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Cannot load {spec_path}: {e}") from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def main(verbose: bool):
    """Swagger Client — call Swagger 2.0 operations by operationId or path."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, path_type=Path))
def operations(spec_path: Path):
    """List the operations of a Swagger document."""
    client = _make_client(spec_path, False, SchemeCheck.INDEX.value)
    for op in client.registry.operations():
        click.echo(f"{op.operation_id or '-'}\t{op.method}\t{op.path}")


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, path_type=Path))
@click.argument("operation")
@click.option("-p", "--param", "param_values", multiple=True, help="Parameter as name=value (repeatable).")
@click.option("--body", default=None, help="JSON request body.")
@click.option("--escape", is_flag=True, default=False, help="URL-encode path and query values.")
@click.option("--scheme-check", default="index", type=click.Choice(["index", "membership"]), help="How a 'schema' parameter is validated.")
def url(spec_path: Path, operation: str, param_values: tuple[str, ...], body: str | None, escape: bool, scheme_check: str):
    """Print the URL an operation would be sent to."""
    client = _make_client(spec_path, escape, scheme_check)
    params = _parse_params(param_values, body)
    try:
        click.echo(client.build_url(operation, params))
    except SwaggerClientError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, path_type=Path))
@click.argument("operation")
@click.option("-p", "--param", "param_values", multiple=True, help="Parameter as name=value (repeatable).")
@click.option("--body", default=None, help="JSON request body.")
@click.option("--escape", is_flag=True, default=False, help="URL-encode path and query values.")
@click.option("--scheme-check", default="index", type=click.Choice(["index", "membership"]), help="How a 'schema' parameter is validated.")
def prepare(spec_path: Path, operation: str, param_values: tuple[str, ...], body: str | None, escape: bool, scheme_check: str):
    """Print the materialized request (URL, method, headers, body) as JSON."""
    client = _make_client(spec_path, escape, scheme_check)
    params = _parse_params(param_values, body)
    try:
        prepared = client.prepare(operation, params)
    except SwaggerClientError as e:
        raise click.ClickException(str(e)) from e

    click.echo(json.dumps({"url": prepared.url, **prepared.options.model_dump()}, indent=2, default=str))


@main.command(name="exec")
@click.argument("spec_path", type=click.Path(exists=True, path_type=Path))
@click.argument("operation")
@click.option("-p", "--param", "param_values", multiple=True, help="Parameter as name=value (repeatable).")
@click.option("--body", default=None, help="JSON request body.")
@click.option("--escape", is_flag=True, default=False, help="URL-encode path and query values.")
@click.option("--scheme-check", default="index", type=click.Choice(["index", "membership"]), help="How a 'schema' parameter is validated.")
@click.option("--timeout", default=DEFAULT_TIMEOUT, type=float, show_default=True, help="Request timeout in seconds.")
def exec_(spec_path: Path, operation: str, param_values: tuple[str, ...], body: str | None, escape: bool, scheme_check: str, timeout: float):
    """Send an operation and print the response status and body."""
    client = _make_client(spec_path, escape, scheme_check, transport=RequestsTransport(timeout=timeout))
    params = _parse_params(param_values, body)
    try:
        response = client.exec(operation, params)
    except SwaggerClientError as e:
        raise click.ClickException(str(e)) from e
    except requests.RequestException as e:
        raise click.ClickException(f"Request failed: {e}") from e

    click.echo(f"{response.status_code} {response.reason}")
    click.echo(response.text)
