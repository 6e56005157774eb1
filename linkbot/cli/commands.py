"""CLI commands for linkbot."""

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from linkbot import __logo__, __version__

app = typer.Typer(
    name="linkbot",
    help=f"{__logo__} linkbot - IRC link and lookup bot",
    no_args_is_help=True,
)

console = Console()

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config.json")


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} linkbot v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True
    ),
):
    """linkbot - IRC link and lookup bot."""


def _configure_logging(level: str, log_file: str = "") -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    if log_file:
        logger.add(log_file, level=level.upper(), rotation="10 MB", retention=5)


# ============================================================================
# Init
# ============================================================================


@app.command()
def init(config_path: Path = CONFIG_OPTION):
    """Write a default config.json."""
    from linkbot.config.loader import get_config_path, save_config
    from linkbot.config.schema import Config

    path = config_path or get_config_path()
    if path.exists():
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    save_config(Config(), path)
    console.print(f"[green]✓[/green] Created config at {path}")
    console.print("\nNext steps:")
    console.print("  1. Set [cyan]irc.server[/cyan], [cyan]irc.nickname[/cyan] and [cyan]irc.channels[/cyan]")
    console.print("  2. Put API keys in [cyan]youtube_api_key.txt[/cyan] / [cyan]weather_api_key.txt[/cyan]")
    console.print("  3. Start: [cyan]linkbot run[/cyan]")


# ============================================================================
# Run
# ============================================================================


@app.command()
def run(
    config_path: Path = CONFIG_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Connect to IRC and answer messages until the connection ends."""
    from linkbot.bot.loop import Bot
    from linkbot.channels.irc import IrcTransport
    from linkbot.config.loader import get_config_path, load_config
    from linkbot.errors import TransportError, UpstreamContractViolation
    from linkbot.handlers.factory import build_registry
    from linkbot.utils.http import HttpClient

    path = config_path or get_config_path()
    config = load_config(path)
    _configure_logging("DEBUG" if verbose else config.bot.log_level, config.bot.log_file)

    http = HttpClient(timeout=config.http.timeout, user_agent=config.http.user_agent)
    registry = build_registry(config, http, base_dir=path.parent)
    transport = IrcTransport(config.irc)
    bot = Bot(transport, [registry], relay_errors=config.bot.relay_errors)

    exit_code = 0
    try:
        transport.connect()
        bot.run_forever()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except TransportError as e:
        logger.error(f"Transport failed: {e}")
        exit_code = 1
    except UpstreamContractViolation as e:
        logger.critical(f"Upstream service broke its contract, stopping: {e}")
        exit_code = 1
    finally:
        transport.close()
        http.close()

    if exit_code:
        raise typer.Exit(exit_code)


# ============================================================================
# Status
# ============================================================================


@app.command()
def status(config_path: Path = CONFIG_OPTION):
    """Show configuration and which lookups are available."""
    from linkbot.config.loader import get_config_path, load_config, load_secret

    path = config_path or get_config_path()
    console.print(f"{__logo__} linkbot Status\n")
    console.print(f"Config: {path} {'[green]✓[/green]' if path.exists() else '[red]✗[/red]'}")

    config = load_config(path)
    irc = config.irc
    console.print(f"Server: {irc.server}:{irc.port}{' (TLS)' if irc.use_ssl else ''}")
    console.print(f"Nickname: {irc.nickname}")
    console.print(f"Channels: {', '.join(irc.channels) if irc.channels else '[dim]none[/dim]'}")

    def key_status(api_key: str, api_key_file: str) -> str:
        if api_key:
            return "[green]✓[/green]"
        if load_secret(api_key_file, path.parent):
            return f"[green]✓[/green] ({api_key_file})"
        return f"[yellow]no key[/yellow] ({api_key_file})"

    services = config.services
    console.print("\n[bold]Lookups:[/bold]")
    rows = [
        ("YouTube", services.youtube.enabled, key_status(services.youtube.api_key, services.youtube.api_key_file)),
        ("XKCD", services.xkcd.enabled, "[green]✓[/green]"),
        ("Weather", services.weather.enabled, key_status(services.weather.api_key, services.weather.api_key_file)),
        ("Gfycat", services.gfycat.enabled, "[green]✓[/green]"),
    ]
    for label, enabled, detail in rows:
        console.print(f"  {label}: {detail if enabled else '[dim]disabled[/dim]'}")
