"""
BreachGuard CLI - Main entry point for the command-line interface.
"""

import logging

import click
from rich.console import Console
from rich.table import Table

from breachguard import __version__
from breachguard.config import GatewayConfig
from breachguard.exceptions import ConfigurationError

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="breachguard")
@click.option("--log-level", envvar="BREACHGUARD_LOG_LEVEL", default="INFO", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging verbosity")
@click.pass_context
def main(ctx: click.Context, log_level: str) -> None:
    """BreachGuard - credential hygiene checks

    Serves a JSON API that scores passwords, counts their appearances in
    the Pwned Passwords corpus using k-anonymity, and looks up email
    addresses in Have I Been Pwned.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


def _load_config() -> GatewayConfig:
    try:
        return GatewayConfig.from_env()
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


@main.command("serve")
@click.option("--host", default=None, help="Host to bind to (default: HOST or 0.0.0.0)")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on (default: PORT or 3000)")
@click.option("--debug", is_flag=True, help="Enable debug mode")
def serve(host: str | None, port: int | None, debug: bool) -> None:
    """Run the BreachGuard API server.

    Refuses to start without HIBP_API_KEY.

    Examples:
        breachguard serve
        breachguard serve --port 8080
    """
    from breachguard.server.gateway import RequestGateway

    config = _load_config()
    gateway = RequestGateway(config)

    console.print(
        f"[green]Starting BreachGuard on {host or config.host}:{port or config.port}[/green]"
    )
    if not config.allowed_origins:
        console.print("[yellow]No ALLOWED_ORIGINS set: cross-origin requests will be rejected[/yellow]")

    gateway.run(host=host, port=port, debug=debug)


@main.command("config")
def show_config() -> None:
    """Show the effective configuration (API key masked)."""
    try:
        config = GatewayConfig.from_env()
    except ConfigurationError as e:
        for problem in e.problems:
            console.print(f"[red]{problem}[/red]")
        raise SystemExit(1)

    table = Table(title="BreachGuard Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for key, value in config.to_dict().items():
        table.add_row(key, str(value))

    console.print(table)


# Import and register subcommand groups
from breachguard.hibp.cli import hibp

main.add_command(hibp)


if __name__ == "__main__":
    main()
