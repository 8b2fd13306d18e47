import logging

import click

from servicedesk.infrastructure.bootstrap import log_level
from servicedesk.infrastructure.cli.order_commands import (
    order_add_product,
    order_add_service,
    order_assign,
    order_create,
    order_mine,
    order_queue,
    order_show,
    order_status,
)
from servicedesk.infrastructure.cli.product_commands import product_list
from servicedesk.infrastructure.cli.summary_commands import summary


@click.group()
def cli() -> None:
    """Service Desk: repair service orders"""
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def order() -> None:
    """Manage service orders."""


@cli.group()
def product() -> None:
    """Inspect parts stock."""


# Register subcommands
order.add_command(order_add_product)
order.add_command(order_add_service)
order.add_command(order_assign)
order.add_command(order_create)
order.add_command(order_mine)
order.add_command(order_queue)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_list)
cli.add_command(summary)
