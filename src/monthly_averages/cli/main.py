#!/usr/bin/env python3
"""
Main CLI Entry Point for Monthly Averages

Logs in, fetches the transaction history and prints the monthly averages
report as JSON.
"""

import logging
import os

import click

from ..analysis import ReportOptions, get_monthly_averages
from ..cofi import CofiClient, CofiTransactionSource
from ..core.config import get_config
from ..core.errors import MonthlyAveragesError
from ..core.json_utils import format_json, write_json

logger = logging.getLogger(__name__)


def credential_options(func):
    """Attach the mandatory --user/--pass options."""
    func = click.option(
        "--pass", "-p", "password", required=True, envvar="MONTHLY_AVERAGES_PASS", help="User's password"
    )(func)
    func = click.option("--user", "-u", required=True, envvar="MONTHLY_AVERAGES_USER", help="User's email address")(
        func
    )
    return func


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Monthly Averages - Monthly spending and income report

    Summarizes a transaction history into per-month totals and an overall
    monthly average.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["MONTHLY_AVERAGES_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = get_config()
    except MonthlyAveragesError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("monthly_averages").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}", err=True)
        click.echo(f"API url: {config.api.base_url}", err=True)


@main.command()
@credential_options
@click.option("--ignore-donuts", "-d", is_flag=True, help="Ignore donut related transactions.")
@click.option("--ignore-cc-payments", "-c", is_flag=True, help="Ignore credit card payment transactions.")
@click.option("--cents", is_flag=True, help="Report integer cents instead of currency strings")
@click.option("--output", type=click.Path(dir_okay=False), help="Write the report to a file instead of stdout")
@click.pass_context
def averages(
    ctx: click.Context,
    user: str,
    password: str,
    ignore_donuts: bool,
    ignore_cc_payments: bool,
    cents: bool,
    output: str | None,
) -> None:
    """
    Report monthly spending and income with an overall average.

    Examples:
      monthly-averages averages -u me@example.com -p secret
      monthly-averages averages -u me@example.com -p secret -d -c
    """
    config = ctx.obj["config"]

    options = ReportOptions(
        ignore_donuts=ignore_donuts,
        ignore_cc_payments=ignore_cc_payments,
        donut_merchants=config.report.donut_merchants,
        payment_window=config.report.payment_window,
    )

    try:
        with CofiClient.from_config(config.api) as client:
            credentials = client.login(user, password)
            result = get_monthly_averages(CofiTransactionSource(client, credentials), options)
    except MonthlyAveragesError as e:
        logger.debug("Report failed", exc_info=True)
        raise click.ClickException(str(e)) from e

    report = result.to_dict(formatted=not cents)
    if output:
        write_json(output, report)
        if ctx.obj.get("verbose", False):
            click.echo(f"Report saved to: {output}", err=True)
    else:
        click.echo(format_json(report))


@main.command()
@credential_options
@click.pass_context
def accounts(ctx: click.Context, user: str, password: str) -> None:
    """List the user's accounts as JSON."""
    config = ctx.obj["config"]

    try:
        with CofiClient.from_config(config.api) as client:
            credentials = client.login(user, password)
            user_accounts = client.fetch_accounts(credentials)
    except MonthlyAveragesError as e:
        raise click.ClickException(str(e)) from e

    click.echo(format_json([a.to_dict() for a in user_accounts]))


@main.command()
def version() -> None:
    """Show version information."""
    from monthly_averages import __version__

    click.echo(f"Monthly Averages v{__version__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Settings File: {config_obj.settings_file}")
    click.echo(format_json(config_obj.to_dict()))


if __name__ == "__main__":
    main()
