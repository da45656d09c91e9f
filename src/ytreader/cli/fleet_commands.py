"""
Fleet CLI commands for ytreader.

- `plan`: Show how the channel catalog would be split across worker groups

Launching groups needs a concrete container API client and is done through
``FleetOrchestrator`` by the deployment tooling that provides one.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ytreader.cli.errors import run_command
from ytreader.config.settings import get_settings
from ytreader.models.fleet import CatalogChannel
from ytreader.services.catalog import CsvChannelCatalog
from ytreader.services.fleet.batch_planner import plan_batches

console = Console()

fleet_app = typer.Typer(
    help="Crawl fleet planning",
    no_args_is_help=True,
)


@fleet_app.command()
def plan(
    catalog: Optional[Path] = typer.Option(
        None,
        "--catalog",
        "-c",
        help="Channel catalog CSV with an 'id' column (default: YTREADER_CATALOG_PATH)",
    ),
    size: Optional[int] = typer.Option(
        None,
        "--size",
        "-s",
        min=1,
        help="Target channels per worker group (default: YTREADER_CHANNELS_PER_CONTAINER)",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Seed the shuffle for a reproducible plan"
    ),
) -> None:
    """
    Show the worker batches a fleet launch would create.

    Examples:
        ytreader fleet plan --catalog channels.csv --seed 42
    """
    settings = get_settings()
    catalog_path = catalog or settings.catalog_path

    async def load_async() -> list[CatalogChannel]:
        return await CsvChannelCatalog(catalog_path).list_channels()

    channels = run_command(load_async, title="Catalog Failed")

    batches = plan_batches(
        [c.id for c in channels],
        target_size=size or settings.channels_per_container,
        name_prefix=settings.container_name,
        rng=random.Random(seed),
    )

    table = Table(title=f"Fleet plan for {catalog_path}")
    table.add_column("Group", style="cyan")
    table.add_column("Region")
    table.add_column("Channels", justify="right")
    for batch in batches:
        table.add_row(batch.name, batch.region.value, str(len(batch.channel_ids)))
    console.print(table)
    console.print(
        f"[dim]{len(channels)} channel(s) across {len(batches)} group(s)[/dim]"
    )
