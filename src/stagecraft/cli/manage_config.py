"""CLI for checking and migrating stagecraft pipeline configs.

Examples:
  # Verify stagecraft.yaml in the current directory uses the latest schema
  stagecraft check

  # Print a config upgraded to the latest schema
  stagecraft -f old.yaml fix

  # Upgrade in place, keeping old.yaml.backup
  stagecraft -f old.yaml fix --overwrite
"""

import sys
from typing import Any, NoReturn

import click

from stagecraft.config import ConfigError, ConfigManager, dump_config
from stagecraft.models.logging_config import LOG_LEVELS, LoggingConfig
from stagecraft.utils.structlog_configurator import configure_structlog, get_logger

logger = get_logger(__name__)


def _fail(error: Exception) -> NoReturn:
    """Report an error and exit with a failure status."""
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(1)


@click.group()
@click.option(
    "-f",
    "--filename",
    help="Config file path, http(s) URL, or '-' for stdin (default: ./stagecraft.yaml)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level (default: STAGECRAFT_LOG_LEVEL or WARNING)",
)
@click.pass_context
def cli(ctx: click.Context, filename: str | None, log_level: str | None) -> None:
    """stagecraft pipeline configuration tools."""
    logging_config = LoggingConfig.from_environment()
    if log_level:
        logging_config.level = log_level.upper()
    configure_structlog(logging_config)

    ctx.ensure_object(dict)
    ctx.obj["config_manager"] = ConfigManager(source=filename)


@cli.command()
@click.pass_obj
def check(obj: dict[str, Any]) -> None:
    """Check that the config is valid and uses the latest schema version."""
    manager: ConfigManager = obj["config_manager"]
    try:
        config = manager.load(apply_defaults=False)
        manager.check()
    except ConfigError as e:
        _fail(e)

    click.echo(click.style(f"Config is valid and up to date ({config.get_version()})", fg="green"))


@cli.command()
@click.option("--overwrite", is_flag=True, help="Write the upgraded config back, keeping a backup")
@click.pass_obj
def fix(obj: dict[str, Any], overwrite: bool) -> None:
    """Upgrade the config to the latest schema version."""
    manager: ConfigManager = obj["config_manager"]
    try:
        upgraded = manager.fix(overwrite=overwrite)
    except (ConfigError, OSError) as e:
        _fail(e)

    if overwrite:
        logger.info("Config upgraded in place", source=manager.source)
        click.echo(
            click.style(
                f"Config upgraded to {manager.latest_version}: {manager.source}", fg="green"
            )
        )
    else:
        click.echo(upgraded, nl=False)


@cli.command()
@click.option(
    "--upgrade/--no-upgrade", default=True, help="Upgrade to the latest schema before printing"
)
@click.option("--defaults/--no-defaults", default=True, help="Fill in default values")
@click.pass_obj
def show(obj: dict[str, Any], upgrade: bool, defaults: bool) -> None:
    """Print the resolved config."""
    manager: ConfigManager = obj["config_manager"]
    try:
        config = manager.load_latest(defaults) if upgrade else manager.load(defaults)
    except ConfigError as e:
        _fail(e)

    click.echo(dump_config(config), nl=False)


@cli.command()
@click.pass_obj
def versions(obj: dict[str, Any]) -> None:
    """List supported schema versions, oldest first."""
    manager: ConfigManager = obj["config_manager"]
    latest = manager.latest_version
    for version in manager.registry.versions:
        suffix = " (latest)" if version == latest else ""
        click.echo(f"{version}{suffix}")


def main() -> None:
    """Entry point for the stagecraft CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
