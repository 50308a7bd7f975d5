import asyncio
from pathlib import Path

import click
import toml
from loguru import logger

from ticsummit.config import (
    ALLOWED_LOG_LEVELS,
    ALLOWED_THEMES,
    CONFIG_FILE_PATH,
    TicConfig,
    load_config,
    merge_config_with_cli_args,
    save_config,
)
from ticsummit.exceptions import TicSummitError
from ticsummit.gateways.site_api import RESOURCE_PATHS, SiteAPI
from ticsummit.models import USER_ROLES
from ticsummit.services.content import ContentService


def setup_logging(config: TicConfig) -> None:
    """Send log records to the configured file; the terminal belongs to the UI."""
    logger.remove()
    logger.add(config.log_file, level=config.log_level, rotation="1 MB", retention=3)


def build_api(config: TicConfig) -> SiteAPI:
    return SiteAPI(base_url=config.base_url, api_token=config.api_token, timeout=config.timeout)


def run_admin_call(coro):
    """Run an admin coroutine, turning client errors into click errors."""
    try:
        return asyncio.run(coro)
    except TicSummitError as e:
        raise click.ClickException(str(e))


@click.group(invoke_without_command=True)
@click.pass_context
@click.option(
    "--base-url",
    type=str,
    help="Root URL of the TIC Summit site (e.g., https://ticsummit.org)",
    default=None,
    envvar="TICSUMMIT_BASE_URL",
)
@click.option(
    "--api-token",
    type=str,
    help="Bearer token for admin endpoints",
    default=None,
    envvar="TICSUMMIT_API_TOKEN",
)
@click.option(
    "--timeout",
    type=float,
    help="Request timeout in seconds",
    default=None,
)
@click.option(
    "--theme",
    type=click.Choice(ALLOWED_THEMES, case_sensitive=False),
    help="Theme to use for the UI",
    default=None,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=str),
    help="File that receives log output (default: ~/.ticsummit.log)",
    default=None,
)
@click.option(
    "--config",
    type=click.Path(exists=True, readable=True, path_type=str),
    help="Path to configuration file (default: ~/.ticsummit.config)",
    default=None,
)
def cli(
    ctx,
    base_url: str | None = None,
    api_token: str | None = None,
    timeout: float | None = None,
    theme: str | None = None,
    log_file: str | None = None,
    config: str | None = None,
):
    """TIC Summit - Browse the Hall of Fame and manage site content."""
    if ctx.invoked_subcommand == "configure":
        return

    try:
        config_obj = load_config(config)
        config_obj = merge_config_with_cli_args(
            config_obj,
            base_url=base_url,
            api_token=api_token,
            timeout=timeout,
            theme=theme,
            log_file=log_file,
        )
    except ValueError as e:
        raise click.ClickException(str(e))

    setup_logging(config_obj)
    ctx.obj = config_obj

    if ctx.invoked_subcommand is None:
        main(config_obj)


@cli.command()
@click.option(
    "--config",
    type=click.Path(path_type=str),
    help="Path to configuration file (default: ~/.ticsummit.config)",
    default=None,
)
def configure(config: str | None = None):
    """Interactive configuration setup"""
    config_path = CONFIG_FILE_PATH
    if config:
        config_path = Path(config)

    click.echo("TIC Summit Configuration Setup")
    click.echo("=" * 30)
    click.echo("Leave fields empty to use defaults or skip optional settings.")
    click.echo()

    existing_config = {}
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                existing_config = toml.load(f)
            click.echo(f"Found existing configuration at {config_path}")
            click.echo()
        except (OSError, toml.TomlDecodeError) as e:
            click.echo(f"Ignoring unreadable configuration at {config_path}: {e}")

    new_config = {}

    click.echo("Site Configuration:")
    click.echo("-" * 19)

    current = existing_config.get("base_url", TicConfig.base_url)
    new_config["base_url"] = click.prompt("Site URL", default=current, type=str).strip()

    current = existing_config.get("api_token", "")
    api_token = click.prompt(
        "Admin API token (optional)", default=current, show_default=False, hide_input=True, type=str
    ).strip()
    if api_token:
        new_config["api_token"] = api_token

    current = existing_config.get("timeout", TicConfig.timeout)
    new_config["timeout"] = click.prompt("Request timeout (seconds)", default=current, type=float)

    click.echo()
    click.echo("Display Configuration:")
    click.echo("-" * 22)

    current_theme = existing_config.get("theme", TicConfig.theme)
    click.echo("Available themes:")
    for i, theme in enumerate(ALLOWED_THEMES, 1):
        marker = " (current)" if theme == current_theme else ""
        click.echo(f"  {i}. {theme}{marker}")

    theme_choice = click.prompt(
        f"Select theme (1-{len(ALLOWED_THEMES)})",
        default=ALLOWED_THEMES.index(current_theme) + 1 if current_theme in ALLOWED_THEMES else 1,
        type=click.IntRange(1, len(ALLOWED_THEMES)),
    )
    new_config["theme"] = ALLOWED_THEMES[theme_choice - 1]

    new_config["log_level"] = click.prompt(
        "Log level",
        default=existing_config.get("log_level", TicConfig.log_level),
        type=click.Choice(ALLOWED_LOG_LEVELS, case_sensitive=False),
    ).upper()

    click.echo()
    try:
        TicConfig(**new_config)
        click.echo("✓ Configuration validated successfully!")
    except ValueError as e:
        click.echo(f"✗ Configuration validation failed: {e}")
        if not click.confirm("Save configuration anyway?"):
            click.echo("Configuration cancelled.")
            return

    click.echo()
    try:
        save_config(new_config, config_path)
        click.echo(f"✓ Configuration saved to {config_path}")
    except OSError as e:
        raise click.ClickException(f"Failed to save configuration: {e}")


@cli.command("set-role")
@click.argument("user_id")
@click.argument("role", type=click.Choice(USER_ROLES, case_sensitive=False))
@click.pass_obj
def set_role(config: TicConfig, user_id: str, role: str):
    """Change the role of a site user."""
    service = ContentService(build_api(config))
    user = run_admin_call(service.set_user_role(user_id, role))
    click.echo(f"✓ {user.get('email', user_id)} is now {user.get('role', role.upper())}")


@cli.command()
@click.pass_obj
def stats(config: TicConfig):
    """Print the admin dashboard counts."""
    service = ContentService(build_api(config))
    data = run_admin_call(service.stats())
    counts = data.get("counts", data)
    if not counts:
        click.echo("No statistics available.")
        return
    width = max(len(name) for name in counts)
    for name, value in counts.items():
        click.echo(f"{name.ljust(width)}  {value}")


@cli.command()
@click.argument("resource", type=click.Choice(sorted(RESOURCE_PATHS)))
@click.argument("record_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def delete(config: TicConfig, resource: str, record_id: str, yes: bool):
    """Delete a record of a content resource."""
    if not yes:
        click.confirm(f"Permanently delete {resource}/{record_id}?", abort=True)
    service = ContentService(build_api(config))
    run_admin_call(service.delete(resource, record_id))
    click.echo(f"✓ Deleted {resource}/{record_id}")


def main(config: TicConfig):
    """Run the Hall of Fame browser."""
    from ticsummit.ui.app import HallOfFameApp

    app = HallOfFameApp(api=build_api(config), initial_theme=config.theme)
    app.run()


if __name__ == "__main__":
    cli()
