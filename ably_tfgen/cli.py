"""
Command line interface for the Ably Terraform generator.

Commands:
    generate   Write one Terraform file per application of the account
    list-apps  Show the account's applications
"""

import json
import sys
from typing import Any, Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console

from .api import ControlApiClient
from .config_manager import create_config_from_env, setup_logging
from .emitters.terraform.context import RULE_BLOCK_STYLES
from .exceptions import AblyTerraformGeneratorError, ControlApiError
from .generator import AblyTerraformGenerator, build_apps_table

console = Console()


def _fail(error: Exception) -> None:
    """Print a fatal error (with any API error payload) and exit with code 1."""
    click.echo(f"❌ {error}", err=True)
    if isinstance(error, ControlApiError) and error.payload is not None:
        payload = error.payload
        if not isinstance(payload, str):
            payload = json.dumps(payload, indent=2, default=str)
        click.echo(payload, err=True)
    sys.exit(1)


def _load_config(ctx: click.Context, **overrides: Any) -> Any:
    try:
        config = create_config_from_env(log_level=ctx.obj.get("log_level"), **overrides)
    except AblyTerraformGeneratorError as e:
        _fail(e)
    setup_logging(config.logging)
    return config


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level (DEBUG, INFO, WARNING, ERROR); defaults to LOG_LEVEL or INFO",
)
@click.version_option(package_name="ably-tfgen")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """Generate Terraform configuration from an Ably account."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level.upper() if log_level else None


@cli.command()
@click.option(
    "--output-dir",
    default=None,
    help="Directory for generated files (defaults to ABLY_TF_OUTPUT_DIR or ./output)",
)
@click.option(
    "--app",
    "apps",
    multiple=True,
    help="Only generate this application (id or name); repeatable",
)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.option(
    "--dry-run", is_flag=True, help="Print the generated Terraform instead of writing files"
)
@click.option(
    "--rule-block-style",
    type=click.Choice(RULE_BLOCK_STYLES),
    default=None,
    help="generic: ably_rule with rule_type; typed: ably_rule_<kind>",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    help="Abort the run when fetching one application's resources fails",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Abort on unsupported rule types and invalid rule targets",
)
@click.pass_context
def generate(
    ctx: click.Context,
    output_dir: Optional[str],
    apps: Tuple[str, ...],
    yes: bool,
    dry_run: bool,
    rule_block_style: Optional[str],
    fail_fast: bool,
    strict: bool,
) -> None:
    """Generate one .tf file per Ably application."""
    config = _load_config(
        ctx,
        output_dir=output_dir,
        dry_run=dry_run,
        rule_block_style=rule_block_style,
        isolate_app_failures=False if fail_fast else None,
        strict_mode=True if strict else None,
        app_filter=list(apps),
    )
    config.log_configuration_summary()

    try:
        with ControlApiClient(config.control_api) as client:
            generator = AblyTerraformGenerator(
                config,
                client,
                confirm=click.confirm,
                console=console,
                assume_yes=yes,
            )
            report = generator.run()
    except (AblyTerraformGeneratorError, ValidationError) as e:
        _fail(e)

    console.print(report.format_report(), markup=False, highlight=False)


@cli.command("list-apps")
@click.pass_context
def list_apps(ctx: click.Context) -> None:
    """List the applications of the account."""
    config = _load_config(ctx)

    try:
        with ControlApiClient(config.control_api) as client:
            account_id = client.resolve_account_id()
            apps = client.list_apps(account_id)
    except AblyTerraformGeneratorError as e:
        _fail(e)

    console.print(build_apps_table(apps, title=f"Ably Applications ({account_id})"))


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
