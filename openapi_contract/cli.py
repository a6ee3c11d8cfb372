"""Command-line interface for OpenAPI contract checks"""

import json
import sys
from typing import Optional, Tuple

import click
import structlog

from openapi_contract.config import settings
from openapi_contract.contracts.spec_store import SpecStore
from openapi_contract.coverage.tracker import declared_endpoints
from openapi_contract.exceptions import ConfigurationError
from openapi_contract.observability import configure_logging
from openapi_contract.validation.response_validator import ResponseValidator

logger = structlog.get_logger()

EXIT_CONTRACT_FAILURE = 1
EXIT_CONFIGURATION_ERROR = 2


@click.group()
@click.option('--spec-base-path', default=None, help='Directory holding the OpenAPI contracts')
@click.option('--strip-prefix', 'strip_prefixes', multiple=True, help='Request path prefix to strip (repeatable)')
@click.option('--log-level', default=None, help='Log level (DEBUG, INFO, WARNING, ...)')
@click.pass_context
def cli(ctx: click.Context, spec_base_path: Optional[str], strip_prefixes: Tuple[str, ...], log_level: Optional[str]):
    """OpenAPI contract testing CLI"""
    configure_logging(log_level or settings.log_level, settings.log_format)

    store = SpecStore.from_settings(settings) if settings.spec_base_path else SpecStore()
    if spec_base_path:
        store.configure(spec_base_path, strip_prefixes or store.strip_prefixes)
    elif strip_prefixes and store.configured:
        store.configure(store.base_path, strip_prefixes)

    ctx.obj = store


@cli.command()
@click.argument('spec')
@click.pass_obj
def endpoints(store: SpecStore, spec: str):
    """List the operations a contract declares"""
    try:
        document = store.load(spec)
    except ConfigurationError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(EXIT_CONFIGURATION_ERROR)

    for endpoint in declared_endpoints(document):
        click.echo(endpoint)


@cli.command()
@click.argument('spec')
@click.argument('method')
@click.argument('path')
@click.argument('status', type=int)
@click.option('--body', '-b', type=click.File('r'), default=None, help='JSON response body file, - for stdin')
@click.option('--content-type', '-t', default=None, help='Observed Content-Type header')
@click.option('--max-errors', type=click.IntRange(min=0), default=None, help='Violations to report (0 = unlimited)')
@click.pass_obj
def check(store: SpecStore, spec: str, method: str, path: str, status: int,
          body, content_type: Optional[str], max_errors: Optional[int]):
    """Check a saved response against a contract"""
    payload = None
    if body is not None:
        raw = body.read()
        if raw.strip():
            try:
                payload = json.loads(raw)
            except json.JSONDecodeError as e:
                click.echo(f"❌ Response body is not valid JSON: {e}", err=True)
                sys.exit(EXIT_CONFIGURATION_ERROR)

    validator = ResponseValidator(
        store,
        max_errors=settings.max_errors if max_errors is None else max_errors,
    )

    try:
        verdict = validator.validate(spec, method, path, status, payload, content_type)
    except ConfigurationError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(EXIT_CONFIGURATION_ERROR)

    if verdict.valid:
        click.echo(f"✅ OK {method.upper()} {verdict.matched_path}")
        return

    click.echo(f"❌ {method.upper()} {path} does not match '{spec}':")
    for error in verdict.errors:
        click.echo(f"  {error}")
    sys.exit(EXIT_CONTRACT_FAILURE)


if __name__ == '__main__':
    cli()
