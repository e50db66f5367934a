"""
Trendkart CLI

Command-line interface for running trend cycles and the API server.
"""

import logging

# Load .env file
from dotenv import load_dotenv

load_dotenv()

import click
from rich.console import Console
from rich.table import Table

from trendkart.core.config import get_settings
from trendkart.services.signal_sources import RandomSignalSource
from trendkart.services.trend_cycle import TrendCycle
from trendkart.services.trend_store import TrendStore, seed_demo_products

console = Console()


@click.group()
@click.option("--verbose", is_flag=True, help="Log at DEBUG level")
def cli(verbose: bool):
    """Trendkart CLI - Score trending products"""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level.upper()),
        format=settings.log_format,
    )


@cli.command()
@click.option("--count", default=5, show_default=True, help="Number of cycles to run")
@click.option("--seed", type=int, default=None, help="Seed for simulated signals")
@click.option("--region", default=None, help="Only show products in this region")
def cycle(count: int, seed: int, region: str):
    """Run trend cycles against the demo catalogue with simulated signals"""
    settings = get_settings()
    console.print("[bold blue]Trendkart Trend Cycle[/bold blue]")
    console.print("=" * 60)

    store = TrendStore.from_settings(settings)
    seed_demo_products(store)

    if seed is not None:
        settings = settings.model_copy(update={"signal_seed": seed})
    source = RandomSignalSource.from_settings(settings)
    trend_cycle = TrendCycle.from_settings(settings, store, source)

    with console.status("[bold green]Scoring products..."):
        reports = [trend_cycle.run() for _ in range(count)]

    console.print()
    console.print(f"[bold green]✓ {len(reports)} cycles complete[/bold green]")
    console.print()

    featured = store.snapshot().featured_ids
    table = Table(title="Products")
    table.add_column("Name", style="cyan")
    table.add_column("Region")
    table.add_column("Score", style="magenta")
    table.add_column("Featured Score", style="magenta")
    table.add_column("Inventory")
    table.add_column("Featured", style="green")

    for product in store.list_products(region=region):
        table.add_row(
            product.name,
            product.region,
            f"{product.score:.3f}" if product.score is not None else "-",
            f"{product.featured_score:.3f}" if product.featured_score is not None else "-",
            f"{product.inventory}/{product.reorder_point}",
            "★" if product.id in featured else "",
        )
    console.print(table)

    alerts = store.list_alerts(only_active=True)
    if alerts:
        console.print()
        alert_table = Table(title=f"Active Alerts ({len(alerts)})")
        alert_table.add_column("Type", style="yellow")
        alert_table.add_column("Message")
        for alert in alerts:
            alert_table.add_row(alert.type.value, alert.message)
        console.print(alert_table)


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", default=8000, show_default=True)
def serve(host: str, port: int):
    """Run the API server"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "trendkart.main:app",
        host=host,
        port=port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
