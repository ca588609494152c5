"""Command-line interface for appliance usage and savings."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .analysis import daily, savings, usage
from .config import load_config
from .errors import ProfileError
from .profiles import load_profile

console = Console()


def format_minutes(minutes: int) -> str:
    """Render minutes as e.g. '733 min (12h 13m)'."""
    hours, mins = divmod(minutes, 60)
    return f"{minutes} min ({hours}h {mins:02d}m)"


@click.group()
@click.option("--config", "config_path", type=click.Path(exists=True), help="Path to calendar.yaml")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Appliance usage analysis - minutes powered and minutes saved by auto-off."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(Path(config_path) if config_path else None)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        ctx.exit(1)


@cli.command("usage")
@click.argument("profile_path", type=click.Path(exists=True))
@click.pass_context
def usage_cmd(ctx, profile_path):
    """Minutes the appliance was on over a single day."""
    try:
        profile = load_profile(Path(profile_path))
        minutes = usage.usage(profile, ctx.obj["config"])
    except ProfileError as e:
        console.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)
    console.print(f"[green]Usage: {format_minutes(minutes)}[/green]")


@cli.command("savings")
@click.argument("profile_path", type=click.Path(exists=True))
@click.pass_context
def savings_cmd(ctx, profile_path):
    """Minutes saved by automatic shutoffs over a single day."""
    try:
        profile = load_profile(Path(profile_path))
        minutes = savings.savings(profile, ctx.obj["config"])
    except ProfileError as e:
        console.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)
    console.print(f"[green]Saved: {format_minutes(minutes)}[/green]")


@cli.command("day")
@click.argument("profile_path", type=click.Path(exists=True))
@click.argument("day", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def day_cmd(ctx, profile_path, day, as_json):
    """Minutes the appliance was on during DAY of a month profile."""
    try:
        profile = load_profile(Path(profile_path))
        minutes = daily.usage_for_day(profile, day, ctx.obj["config"])
    except ProfileError as e:
        console.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps({"day": day, "minutes": minutes}))
    else:
        console.print(f"[green]Day {day}: {format_minutes(minutes)}[/green]")


@cli.command("days")
@click.argument("profile_path", type=click.Path(exists=True))
@click.option("--from", "from_day", type=int, help="First day (default: first calendar day)")
@click.option("--to", "to_day", type=int, help="Last day (default: last calendar day)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def days_cmd(ctx, profile_path, from_day, to_day, as_json):
    """Per-day usage breakdown of a month profile."""
    try:
        profile = load_profile(Path(profile_path))
        rows = daily.usage_for_days(profile, from_day, to_day, ctx.obj["config"])
    except ProfileError as e:
        console.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)

    total = sum(r.minutes for r in rows)

    if as_json:
        data = {
            "days": [{"day": r.day, "minutes": r.minutes} for r in rows],
            "total_minutes": total,
        }
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title=f"Appliance Usage (days {rows[0].day}-{rows[-1].day})" if rows else "Appliance Usage")
    table.add_column("Day", style="cyan", justify="right")
    table.add_column("Minutes", justify="right")
    table.add_column("Hours", justify="right")

    for r in rows:
        table.add_row(str(r.day), str(r.minutes), f"{r.hours:.2f}")

    table.add_row("[bold]Total[/bold]", f"[bold]{total}[/bold]", f"[bold]{total / 60:.2f}[/bold]")
    console.print(table)


if __name__ == "__main__":
    cli()
