"""CLI command for the desk status summary."""

from __future__ import annotations

import click

from servicedesk.application.status_summary import StatusSummaryHandler
from servicedesk.infrastructure.bootstrap import order_repository, product_repository


@click.command("summary")
def summary() -> None:
    """Show order counts per status and stock alerts."""
    handler = StatusSummaryHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )
    dto = handler.handle()

    click.echo(f"{'Status':<14} {'Orders':>6}")
    click.echo("-" * 21)
    for status, count in dto.orders_by_status.items():
        click.echo(f"{status:<14} {count:>6}")

    click.echo()
    click.echo(f"Open queue: {dto.open_queue_length}")

    if not dto.stock_alerts:
        click.echo("No stock alerts.")
        return

    click.echo("Stock alerts:")
    for alert in dto.stock_alerts:
        click.echo(f"  {alert.product_name}: {alert.qty} on hand (minimum {alert.min_qty})")
