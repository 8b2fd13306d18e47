"""CLI commands for the ServiceOrder aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from servicedesk.application.assign_order import AssignOrderHandler
from servicedesk.application.attach_product import AttachProductHandler
from servicedesk.application.attach_service import AttachServiceHandler
from servicedesk.application.create_order import CreateOrderHandler
from servicedesk.application.dto import PhotoSpec, ServiceOrderDTO
from servicedesk.application.list_open_orders import ListOpenOrdersHandler
from servicedesk.application.list_technician_orders import (
    ListTechnicianOrdersHandler,
)
from servicedesk.application.set_order_status import SetOrderStatusHandler
from servicedesk.application.show_order import ShowOrderHandler
from servicedesk.domain.exceptions import DomainException
from servicedesk.domain.model.service_order import SETTABLE_STATUSES
from servicedesk.infrastructure.bootstrap import (
    client_directory,
    order_repository,
    product_repository,
    service_catalog,
    technician_directory,
)


def _parse_photo(raw: str) -> PhotoSpec:
    """Parse 'URL' or 'URL|name' into a PhotoSpec."""
    url, _, name = raw.partition("|")
    url = url.strip()
    if not url:
        raise click.BadParameter(f"Invalid photo '{raw}'. Expected 'URL' or 'URL|name'.")
    return PhotoSpec(url=url, name=name.strip() or url.rsplit("/", 1)[-1])


def _display_order(dto: ServiceOrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"{dto.order_number}  (#{dto.id}, status={dto.status})")
    click.echo(f"Client:     {dto.client_name}")
    click.echo(f"Entry date: {dto.entry_date}")
    if dto.technician_name:
        click.echo(f"Technician: {dto.technician_name}")
    if dto.diagnosis_initial:
        click.echo(f"Diagnosis:  {dto.diagnosis_initial}")
    for url in dto.initial_photos:
        click.echo(f"Photo:      {url}")
    if dto.delivery_date:
        click.echo(f"Delivered:  {dto.delivery_date}")
    if dto.warranty_expires_at:
        click.echo(f"Warranty:   until {dto.warranty_expires_at}")

    if dto.products:
        click.echo()
        click.echo(f"  {'Part':<24} {'Ref':<16} {'Qty':>5} {'Cost':>12} {'Total':>12}")
        click.echo(f"  {'-'*73}")
        for item in dto.products:
            click.echo(
                f"  {item.product_name:<24} {item.product_reference:<16} "
                f"{item.quantity:>5} {item.unit_cost:>12} {item.line_total:>12}"
            )

    if dto.services:
        click.echo()
        click.echo(f"  {'Service':<47} {'Price':>25}")
        click.echo(f"  {'-'*73}")
        for charge in dto.services:
            click.echo(f"  {charge.service_name:<47} {charge.price:>25}")

    click.echo()
    click.echo(f"  {'Parts':<47} {dto.parts_total:>25}")
    click.echo(f"  {'Services':<47} {dto.services_total:>25}")
    click.echo(f"  {'Order Total':<47} {dto.total:>25}")


def _display_list(dtos: list[ServiceOrderDTO], empty: str) -> None:
    if not dtos:
        click.echo(empty)
        return

    click.echo(f"{'ID':<6} {'Number':<14} {'Entry':<12} {'Status':<14} {'Client':<20}")
    click.echo("-" * 70)
    for dto in dtos:
        click.echo(
            f"{dto.id:<6} {dto.order_number:<14} {dto.entry_date:<12} "
            f"{dto.status:<14} {dto.client_name:<20}"
        )


@click.command("create")
@click.option("--client", "client_id", required=True, help="Client ID.")
@click.option(
    "--entry-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date the equipment was received (default: today).",
)
@click.option("--diagnosis", default=None, help="Initial problem description.")
@click.option("--photo", "photos", multiple=True, help="Intake photo as 'URL' or 'URL|name'.")
@click.option("--warranty-days", type=click.IntRange(min=0), default=None, help="Warranty after delivery.")
def order_create(
    client_id: str,
    entry_date: datetime | None,
    diagnosis: str | None,
    photos: tuple[str, ...],
    warranty_days: int | None,
) -> None:
    """Open a new service order."""
    handler = CreateOrderHandler(
        order_repo=order_repository(),
        client_directory=client_directory(),
    )

    try:
        dto = handler.handle(
            client_id=client_id,
            entry_date=entry_date.date() if entry_date else None,
            diagnosis_initial=diagnosis,
            initial_photos=[_parse_photo(p) for p in photos],
            warranty_days=warranty_days,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} created  (#{dto.id}, status={dto.status})")
    click.echo(f"Client: {dto.client_name}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("assign")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to claim.")
@click.option("--technician", "technician_id", required=True, help="Technician ID.")
def order_assign(order_id: int, technician_id: str) -> None:
    """Claim an Open order for a technician."""
    handler = AssignOrderHandler(
        order_repo=order_repository(),
        technician_directory=technician_directory(),
    )

    try:
        dto = handler.handle(order_id, technician_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} assigned to {dto.technician_name}.")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--set",
    "status",
    required=True,
    type=click.Choice(sorted(s.value for s in SETTABLE_STATUSES)),
    help="New status.",
)
def order_status(order_id: int, status: str) -> None:
    """Move a claimed order to another status."""
    handler = SetOrderStatusHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is now {dto.status}.")


@click.command("add-product")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", required=True, type=int, help="Units consumed.")
def order_add_product(order_id: int, product_id: str, qty: int) -> None:
    """Consume parts from stock on an order."""
    handler = AttachProductHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(order_id, product_id, qty)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    line = dto.products[-1]
    click.echo(
        f"Added {line.quantity} x {line.product_name} to {dto.order_number} "
        f"({line.line_total})."
    )


@click.command("add-service")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--service", "service_id", required=True, help="Service ID.")
def order_add_service(order_id: int, service_id: str) -> None:
    """Bill a labour service on an order."""
    handler = AttachServiceHandler(
        order_repo=order_repository(),
        service_catalog=service_catalog(),
    )

    try:
        dto = handler.handle(order_id, service_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    charge = dto.services[-1]
    click.echo(f"Billed {charge.service_name} ({charge.price}) on {dto.order_number}.")


@click.command("queue")
def order_queue() -> None:
    """List Open orders, oldest first."""
    handler = ListOpenOrdersHandler(order_repo=order_repository())
    dtos = handler.handle()

    _display_list(dtos, empty="No open orders.")
    if dtos:
        click.echo()
        click.echo(f"Next to take: {dtos[0].order_number}")


@click.command("mine")
@click.option("--technician", "technician_id", required=True, help="Technician ID.")
def order_mine(technician_id: str) -> None:
    """List orders claimed by a technician."""
    handler = ListTechnicianOrdersHandler(order_repo=order_repository())
    _display_list(handler.handle(technician_id), empty="No orders assigned.")
