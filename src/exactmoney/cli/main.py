#!/usr/bin/env python3
"""
Main CLI Entry Point for exactmoney

Provides a command-line interface to create, split, convert and format
monetary amounts.
"""

import logging
import os

import click
from babel.core import UnknownLocaleError

from ..core.arithmetic import RoundingMode
from ..core.config import Config, get_config, reload_config
from ..core.context import CashContext, Context, DefaultContext, ExactContext, PrecisionContext
from ..core.errors import MoneyError
from ..core.money import Money
from ..core.report import allocation_frame, frame_total

ROUNDING_CHOICES = [mode.name for mode in RoundingMode]


def _rounding(config: Config, rounding: str | None) -> RoundingMode:
    if rounding is None:
        return config.default_rounding
    return RoundingMode.from_name(rounding)


def _build_context(context_name: str, step: int, scale: int | None) -> Context:
    if context_name in ("default", "exact") and step != 1:
        raise click.UsageError(f"--step cannot be used with --context {context_name}")
    if context_name == "default":
        return DefaultContext()
    if context_name == "cash":
        return CashContext(step)
    if context_name == "precision":
        if scale is None:
            raise click.UsageError("--scale is required with --context precision")
        return PrecisionContext(scale, step)
    return ExactContext()


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
    exactmoney - Exact Monetary Values

    Create, split, convert and format money amounts without ever losing
    or inventing a minor unit.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        os.environ["EXACTMONEY_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("exactmoney").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = reload_config() if (config_env or debug) else get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Locale: {ctx.obj['config'].locale}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from exactmoney import __version__

    click.echo(f"exactmoney v{__version__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Locale: {config_obj.locale}")
    click.echo(f"  Default Rounding: {config_obj.default_rounding.name}")
    click.echo(f"  Currency File: {config_obj.currency_file or '(ISO 4217 only)'}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


@main.command()
@click.argument("amount")
@click.argument("currency")
@click.option(
    "--context",
    "context_name",
    type=click.Choice(["default", "cash", "precision", "exact"]),
    default="default",
    help="Rounding context (default: default)",
)
@click.option("--step", type=click.IntRange(min=1), default=1, help="Cash or precision step in minor units")
@click.option("--scale", type=click.IntRange(min=0), help="Scale for --context precision")
@click.option("--rounding", type=click.Choice(ROUNDING_CHOICES, case_sensitive=False), help="Rounding mode")
@click.pass_context
def create(
    ctx: click.Context,
    amount: str,
    currency: str,
    context_name: str,
    step: int,
    scale: int | None,
    rounding: str | None,
) -> None:
    """
    Create a Money and print it.

    Examples:
      exactmoney create 1.2 JPY --rounding DOWN
      exactmoney create 12.37 CHF --context cash --step 5 --rounding HALF_UP
    """
    config_obj = ctx.obj["config"]
    context = _build_context(context_name, step, scale)

    try:
        money = Money.of(
            amount,
            currency,
            context,
            _rounding(config_obj, rounding),
            registry=config_obj.build_registry(),
        )
    except (MoneyError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(str(money))
    if ctx.obj.get("verbose", False):
        click.echo(f"Context: {money.context!r}")
        click.echo(f"Minor amount: {money.minor_amount}")


@main.command()
@click.argument("amount")
@click.argument("currency")
@click.argument("ratios", nargs=-1, required=True, type=int)
@click.pass_context
def allocate(ctx: click.Context, amount: str, currency: str, ratios: tuple[int, ...]) -> None:
    """
    Split an amount according to integer ratios.

    The parts always add up to the original amount.

    Example:
      exactmoney allocate 100 USD 30 20 40 40
    """
    config_obj = ctx.obj["config"]

    try:
        money = Money.of(amount, currency, registry=config_obj.build_registry())
        frame = allocation_frame(money, list(ratios))
        total = frame_total(frame, money)
    except (MoneyError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Allocating {money} across {len(ratios)} parts")
    click.echo(frame.to_string(index=False))
    click.echo(f"Total: {total}")


@main.command()
@click.argument("amount")
@click.argument("currency")
@click.argument("divisor")
@click.pass_context
def divide(ctx: click.Context, amount: str, currency: str, divisor: str) -> None:
    """
    Divide an amount by an integer into a quotient and a remainder.

    Example:
      exactmoney divide 10 USD 3
    """
    config_obj = ctx.obj["config"]

    try:
        money = Money.of(amount, currency, registry=config_obj.build_registry())
        quotient, remainder = money.quotient_and_remainder(divisor)
    except (MoneyError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Quotient: {quotient}")
    click.echo(f"Remainder: {remainder}")


@main.command()
@click.argument("amount")
@click.argument("from_currency", metavar="FROM")
@click.argument("to_currency", metavar="TO")
@click.argument("rate")
@click.option("--rounding", type=click.Choice(ROUNDING_CHOICES, case_sensitive=False), help="Rounding mode")
@click.pass_context
def convert(
    ctx: click.Context,
    amount: str,
    from_currency: str,
    to_currency: str,
    rate: str,
    rounding: str | None,
) -> None:
    """
    Convert an amount to another currency at an exchange rate.

    Example:
      exactmoney convert 1.23 USD JPY 125 --rounding DOWN
    """
    config_obj = ctx.obj["config"]
    registry = config_obj.build_registry()

    try:
        money = Money.of(amount, from_currency, registry=registry)
        converted = money.converted_to(
            to_currency,
            rate,
            rounding_mode=_rounding(config_obj, rounding),
            registry=registry,
        )
    except (MoneyError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(str(converted))


@main.command(name="format")
@click.argument("amount")
@click.argument("currency")
@click.option("--locale", help="Locale identifier (default: EXACTMONEY_LOCALE)")
@click.pass_context
def format_command(ctx: click.Context, amount: str, currency: str, locale: str | None) -> None:
    """
    Format an amount for a locale.

    Example:
      exactmoney format 1234.5 EUR --locale de_DE
    """
    config_obj = ctx.obj["config"]

    try:
        money = Money.of(amount, currency, registry=config_obj.build_registry())
        click.echo(money.format_to(locale or config_obj.locale))
    except (MoneyError, ValueError, UnknownLocaleError) as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
