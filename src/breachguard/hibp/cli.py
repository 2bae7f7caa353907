"""
CLI commands for one-off password and email checks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from breachguard.exceptions import BreachGuardError, InvalidInput
from breachguard.hibp.client import HIBPClient
from breachguard.hibp.models import RiskLevel
from breachguard.services import BreachLookupService, PasswordExposureChecker

console = Console()

STRENGTH_LABELS = ["Very weak", "Weak", "Fair", "Strong", "Very strong"]


def risk_color(risk: RiskLevel) -> str:
    """Get color for risk level."""
    colors = {
        RiskLevel.SAFE: "green",
        RiskLevel.LOW: "yellow",
        RiskLevel.MEDIUM: "orange3",
        RiskLevel.HIGH: "red",
        RiskLevel.CRITICAL: "bold red",
    }
    return colors.get(risk, "white")


def _run_with_spinner(description: str, coro):
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(description, total=None)
        return asyncio.run(coro)


@click.group()
@click.pass_context
def hibp(ctx: click.Context) -> None:
    """Have I Been Pwned - one-off credential checks.

    Password checks use k-anonymity and don't require an API key.
    For email lookups, set HIBP_API_KEY environment variable.
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


# =============================================================================
# Password Checking
# =============================================================================

@hibp.command("password")
@click.option("--password", "-p", help="Password to check (or prompts securely)")
@click.option("--hash", "password_hash", help="SHA-1 hash to check instead")
@click.option("--timeout", type=float, default=HIBPClient.DEFAULT_TIMEOUT, show_default=True,
              help="Upstream request timeout in seconds")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def check_password(
    ctx: click.Context,
    password: str | None,
    password_hash: str | None,
    timeout: float,
    json_output: bool,
) -> None:
    """Check a password's strength and whether it appears in breaches.

    Uses k-anonymity - only the first 5 characters of the SHA-1 hash
    are sent to the API. Your password never leaves your system.

    Example:
        breachguard hibp password
        breachguard hibp password --hash 5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8
    """
    if not password and not password_hash:
        password = click.prompt("Password to check", hide_input=True)

    async def _check():
        async with HIBPClient(timeout=timeout) as client:
            checker = PasswordExposureChecker(client)
            if password_hash:
                return None, await checker.check_hash(password_hash)
            result = await checker.check(password)
            return result.strength, result.exposure

    try:
        strength, exposure = _run_with_spinner("Checking password...", _check())
    except BreachGuardError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(2 if isinstance(e, InvalidInput) else 1)

    if json_output:
        output = {"pwnedCount": exposure.occurrences, "exposure": exposure.to_dict()}
        if strength is not None:
            output["strength"] = strength.to_dict()
        click.echo(json.dumps(output, indent=2))
        return

    color = risk_color(exposure.risk_level)
    lines = []

    if strength is not None:
        lines.append(f"Strength: [bold]{STRENGTH_LABELS[strength.score]}[/bold] ({strength.score}/4)")
        if strength.warning:
            lines.append(f"[yellow]{strength.warning}[/yellow]")
        for suggestion in strength.suggestions:
            lines.append(f"  - {suggestion}")
        lines.append("")

    if exposure.is_pwned:
        lines.append(
            f"[red]Warning![/red] This password has been seen "
            f"[bold]{exposure.occurrences:,}[/bold] times in data breaches!"
        )
    else:
        lines.append("[green]Good news![/green] This password has NOT been found in any known data breaches.")
    lines.append(f"\nRisk Level: [{color}]{exposure.risk_level.value.upper()}[/{color}]")
    if exposure.is_pwned:
        lines.append(f"\n{exposure.risk_description}")

    console.print(Panel("\n".join(lines), title="Password Check Result"))


# =============================================================================
# Email Breach Checking
# =============================================================================

@hibp.command("email")
@click.argument("email")
@click.option("--api-key", "-k", envvar="HIBP_API_KEY", help="HIBP API key")
@click.option("--timeout", type=float, default=HIBPClient.DEFAULT_TIMEOUT, show_default=True,
              help="Upstream request timeout in seconds")
@click.option("--json", "json_output", is_flag=True, help="Output the raw breach records as JSON")
@click.pass_context
def check_email(
    ctx: click.Context,
    email: str,
    api_key: str | None,
    timeout: float,
    json_output: bool,
) -> None:
    """Check if an email has been in any data breaches.

    Requires HIBP API key (set HIBP_API_KEY or use --api-key).

    Example:
        breachguard hibp email user@example.com
    """
    if not api_key:
        console.print("[red]HIBP API key required. Set HIBP_API_KEY or use --api-key[/red]")
        console.print("Get a key at: https://haveibeenpwned.com/API/Key")
        raise SystemExit(1)

    async def _check():
        async with HIBPClient(api_key=api_key, timeout=timeout) as client:
            return await BreachLookupService(client).lookup(email)

    try:
        breaches = _run_with_spinner(f"Checking {email}...", _check())
    except BreachGuardError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(2 if isinstance(e, InvalidInput) else 1)

    if json_output:
        click.echo(json.dumps(breaches, indent=2))
        return

    if not breaches:
        console.print(Panel(
            f"[green]Good news![/green] No breaches found for [cyan]{email}[/cyan]",
            title="Breach Check Result"
        ))
        return

    console.print(Panel(
        f"[red]Oh no![/red] [cyan]{email}[/cyan] found in "
        f"[bold red]{len(breaches)}[/bold red] breach(es)",
        title="Breach Check Result"
    ))

    table = Table(title="\nBreach Details")
    table.add_column("Breach", style="cyan")
    table.add_column("Date", style="yellow")
    table.add_column("Accounts", justify="right")
    table.add_column("Data Exposed")

    for breach in breaches:
        data_classes = breach.get("DataClasses") or []
        data_types = ", ".join(data_classes[:3])
        if len(data_classes) > 3:
            data_types += f" (+{len(data_classes) - 3})"
        pwn_count = breach.get("PwnCount")

        table.add_row(
            str(breach.get("Title") or breach.get("Name") or "Unknown"),
            str(breach.get("BreachDate") or "Unknown"),
            f"{pwn_count:,}" if isinstance(pwn_count, int) else "-",
            data_types,
        )

    console.print(table)
