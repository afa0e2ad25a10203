# src/cli/runner.py

"""Headless export runner: collect, save, report."""

import logging
from datetime import tzinfo
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.models.product import Product
from src.scrapers.base_scraper import PageFetcher
from src.scrapers.errors import RecommendationError
from src.scrapers.recommendation_scraper import RecommendationFetcher
from src.services.recommendation_collector import RecommendationCollector
from src.storage.file_manager import FileManager, format_timestamp

logger = logging.getLogger("ali_recommend.cli")

# Stderr console for status messages so stdout stays clean for the preview
_err = Console(stderr=True)


def _print_table(products: list[Product]) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title="Recommended Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Discount", justify="right")
    table.add_column("Rating", justify="center")
    table.add_column("Orders", justify="right")
    table.add_column("Promotion ends", style="dim")

    for idx, p in enumerate(products, 1):
        price_str = (
            f"{p.min_price:,.2f}"
            if p.min_price == p.max_price
            else f"{p.min_price:,.2f}–{p.max_price:,.2f}"
        )
        table.add_row(
            str(idx),
            p.title[:60],
            price_str,
            f"{p.discount:g}%",
            f"{p.product_average_star:.1f}",
            str(p.total_orders),
            format_timestamp(p.end_promotion),
        )

    Console().print(table)


def run_export(
    quantity: int,
    output_path: Path | None = None,
    tz: tzinfo | None = None,
    keep_offset: bool = False,
    preview: bool = False,
    fetcher: PageFetcher | None = None,
) -> int:
    """Run one export and return an exit code (0=ok, 1=fail)."""
    page_source = fetcher or RecommendationFetcher()
    collector = RecommendationCollector(page_source, tz=tz)
    file_manager = FileManager(output_path)

    _err.print(
        f"[bold]Fetching:[/bold] {quantity} recommended products  "
        f"[dim]→ {file_manager.output_path}[/dim]"
    )

    try:
        result = collector.collect(quantity)
        path = file_manager.save(result.products, keep_offset)
    except RecommendationError as exc:
        logger.error("Export failed: %s", exc, exc_info=True)
        _err.print(f"[red]Export failed: {exc}[/red]")
        return 1
    finally:
        page_source.close()

    detail = (
        f" ({result.empty_pages} empty page(s))"
        if result.empty_pages
        else ""
    )
    _err.print(
        f"[green]✓ {len(result.products)} products"
        f" from {result.pages_fetched} page(s){detail}[/green]"
    )
    _err.print(f"[dim]Saved → {path}[/dim]")

    if preview:
        _print_table(result.products)
    return 0
