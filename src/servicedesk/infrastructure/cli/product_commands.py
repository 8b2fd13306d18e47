"""CLI commands for parts stock."""

from __future__ import annotations

import click

from servicedesk.infrastructure.bootstrap import product_repository


@click.command("list")
def product_list() -> None:
    """List parts with their stock on hand."""
    repo = product_repository()
    products = repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Reference':<16} {'Qty':>5} {'Cost':>12}")
    click.echo("-" * 71)
    for p in products:
        marker = "  (low)" if p.is_below_minimum else ""
        click.echo(
            f"{p.id:<6} {p.name:<28} {p.reference:<16} {p.qty:>5} {str(p.cost):>12}{marker}"
        )
