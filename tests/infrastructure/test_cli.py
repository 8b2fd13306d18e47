"""Tests for the click CLI, run against a temporary data directory."""

import json
import re

import pytest
from click.testing import CliRunner

from servicedesk.infrastructure.cli.main import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    (tmp_path / "clients.json").write_text(json.dumps([{"id": "1", "name": "John Doe"}]))
    (tmp_path / "technicians.json").write_text(
        json.dumps([{"id": "7", "name": "Ana Souza", "role": "technician"}])
    )
    (tmp_path / "services.json").write_text(
        json.dumps([{"id": "1", "name": "Diagnostico", "price": "80.00"}])
    )
    (tmp_path / "products.json").write_text(
        json.dumps([
            {"id": "1", "name": "SSD 512GB", "reference": "SSD-512-INT",
             "qty": 5, "cost": "50.00", "min_qty": None},
            {"id": "3", "name": "RAM 8GB", "reference": "RAM-8GB-DDR4",
             "qty": 1, "cost": "35.00", "min_qty": 2},
        ])
    )
    monkeypatch.setenv("SERVICEDESK_DATA_DIR", str(tmp_path))
    return CliRunner()


def _ok(runner, *args):
    result = runner.invoke(cli, list(args))
    assert result.exit_code == 0, result.output
    return result.output


def test_ticket_lifecycle(runner):
    out = _ok(runner, "order", "create", "--client", "1", "--diagnosis", "No video",
              "--entry-date", "2026-10-01", "--photo", "https://img/front.jpg")
    assert re.search(r"Order OS-\d{4}-001 created", out)

    out = _ok(runner, "order", "queue")
    assert "Next to take: OS-" in out

    assert "assigned to Ana Souza" in _ok(runner, "order", "assign", "--id", "1", "--technician", "7")
    assert "Added 3 x SSD 512GB" in _ok(runner, "order", "add-product", "--id", "1", "--product", "1", "--qty", "3")
    assert "Billed Diagnostico" in _ok(runner, "order", "add-service", "--id", "1", "--service", "1")
    assert "is now Resolved" in _ok(runner, "order", "status", "--id", "1", "--set", "Resolved")

    out = _ok(runner, "order", "show", "--id", "1")
    assert "Ana Souza" in out
    assert "R$ 230.00" in out
    assert "https://img/front.jpg" in out

    assert "OS-" in _ok(runner, "order", "mine", "--technician", "7")
    assert "No open orders." in _ok(runner, "order", "queue")


def test_domain_errors_become_click_errors(runner):
    _ok(runner, "order", "create", "--client", "1")

    result = runner.invoke(cli, ["order", "status", "--id", "1", "--set", "Resolved"])
    assert result.exit_code == 1
    assert "assign a technician" in result.output

    result = runner.invoke(cli, ["order", "add-product", "--id", "1", "--product", "1", "--qty", "9"])
    assert result.exit_code == 1
    assert "Insufficient stock" in result.output

    result = runner.invoke(cli, ["order", "create", "--client", "42"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_open_is_not_a_status_choice(runner):
    _ok(runner, "order", "create", "--client", "1")
    result = runner.invoke(cli, ["order", "status", "--id", "1", "--set", "Open"])
    assert result.exit_code == 2


def test_product_list_and_summary(runner):
    out = _ok(runner, "product", "list")
    assert "SSD 512GB" in out
    assert "RAM 8GB" in out and "(low)" in out

    _ok(runner, "order", "create", "--client", "1")
    out = _ok(runner, "summary")
    assert "Open queue: 1" in out
    assert "RAM 8GB: 1 on hand (minimum 2)" in out
