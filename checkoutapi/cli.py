"""Checkout API CLI.

Commands:
- serve: Run the HTTP API with uvicorn
- validate: Parse a pricing file and show its rules
- price: Total a list of SKUs against a pricing file
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from checkoutapi.checkout import CheckoutSession
from checkoutapi.config import get_config
from checkoutapi.errors import CatalogLoadError, UnknownSKUError
from checkoutapi.pricing import FilePricingSource, PricingCatalog

app = typer.Typer(
    name="checkoutapi",
    help="Checkout API - multi-buy pricing for checkout sessions",
    no_args_is_help=True,
)

console = Console()


def _load_catalog(pricing_file: Path | None) -> PricingCatalog:
    path = pricing_file or get_config().pricing.file
    try:
        return PricingCatalog(FilePricingSource(path))
    except CatalogLoadError as e:
        console.print(f"[bold red]✗[/bold red] {e}")
        raise typer.Exit(code=1) from e


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind (default: HOST or 0.0.0.0)"),
    port: int | None = typer.Option(None, help="Port to bind (default: PORT or 8080)"),
    reload: bool = typer.Option(False, help="Enable autoreload (dev only)"),
):
    """Run the checkout HTTP API."""
    import uvicorn

    config = get_config()
    host = host or config.server.host
    port = port or config.server.port

    typer.echo(f"Starting server on http://{host}:{port}")
    uvicorn.run(
        "checkoutapi.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=1,
    )


@app.command()
def validate(
    pricing_file: Path = typer.Argument(..., help="Pricing file (JSON or YAML)"),
):
    """Check that a pricing file parses and list its rules."""
    catalog = _load_catalog(pricing_file)
    rules = catalog.get_rules()

    table = Table(title=f"Pricing rules: {pricing_file}")
    table.add_column("SKU", style="cyan")
    table.add_column("Unit price", justify="right")
    table.add_column("Offer", justify="right")

    for sku in sorted(rules):
        rule = rules[sku]
        offer = rule.special_price
        offer_text = f"{offer.quantity} for {offer.price}" if offer else "-"
        if not rule.offer_is_discount:
            offer_text = f"[yellow]{offer_text}[/yellow]"
        table.add_row(sku, str(rule.unit_price), offer_text)

    console.print(table)
    console.print(f"[bold green]✓[/bold green] {len(rules)} rules loaded")


@app.command()
def price(
    skus: list[str] = typer.Argument(..., help="SKUs in scan order"),
    pricing_file: Path | None = typer.Option(
        None, "--pricing-file", "-p", help="Pricing file (default: PRICING_FILE)"
    ),
):
    """Scan SKUs into a throwaway session and print the total."""
    catalog = _load_catalog(pricing_file)
    session = CheckoutSession(catalog)

    for sku in skus:
        try:
            session.scan(sku)
        except UnknownSKUError as e:
            console.print(f"[bold red]✗[/bold red] {e}")
            raise typer.Exit(code=1) from e

    rules = catalog.get_rules()
    table = Table()
    table.add_column("SKU", style="cyan")
    table.add_column("Qty", justify="right")
    table.add_column("Subtotal", justify="right")
    for sku, count in sorted(session.scanned_items().items()):
        table.add_row(sku, str(count), str(rules[sku].price_for(count)))

    console.print(table)
    console.print(f"[bold]Total:[/bold] {session.get_total_price()}")


if __name__ == "__main__":
    app()
