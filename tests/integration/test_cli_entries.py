"""Integration tests for the entry, codes and stats CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from spendo.cli.main import main
from spendo.exceptions import NetworkError, ValidationError


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    return CliRunner()


def _invoke(cli_runner, backend, args, **kwargs):
    return cli_runner.invoke(main, args, obj={"backend": backend}, **kwargs)


@pytest.mark.sit
class TestEntryCommands:
    def test_list(self, cli_runner, backend, coffee) -> None:
        result = _invoke(
            cli_runner,
            backend,
            ["entry", "list", "--start-date", "2024-05-01", "--end-date", "2024-05-01"],
        )

        assert result.exit_code == 0
        assert "Coffee" in result.output
        assert "4,500" in result.output
        assert "Credit card" in result.output

    def test_list_empty(self, cli_runner, backend, coffee) -> None:
        result = _invoke(
            cli_runner,
            backend,
            ["entry", "list", "--start-date", "2024-06-01", "--end-date", "2024-06-30"],
        )

        assert result.exit_code == 0
        assert "No entries found." in result.output

    def test_list_failure(self, cli_runner, backend) -> None:
        backend.failures["fetch_by_query"] = NetworkError("offline")

        result = _invoke(cli_runner, backend, ["entry", "list"])

        assert result.exit_code != 0
        assert "Could not load ledger entries." in result.output

    def test_get(self, cli_runner, backend, coffee) -> None:
        result = _invoke(cli_runner, backend, ["entry", "get", "1"])

        assert result.exit_code == 0
        assert "Title:   Coffee" in result.output
        assert "Type:    Expense" in result.output
        assert "Payment: Credit card" in result.output

    def test_get_missing(self, cli_runner, backend) -> None:
        result = _invoke(cli_runner, backend, ["entry", "get", "9"])

        assert result.exit_code != 0
        assert "no longer available" in result.output

    def test_add_uses_default_codes(self, cli_runner, backend) -> None:
        result = _invoke(
            cli_runner,
            backend,
            ["entry", "add", "--date", "2024-05-02", "--title", "Bagel", "--amount", "3,200"],
        )

        assert result.exit_code == 0
        assert "Added entry 1" in result.output
        created = backend.entries[1]
        assert created.amount == 3200
        assert (created.transaction_type, created.payment_type) == ("EXP", "CC01")

    def test_add_rejects_unknown_code(self, cli_runner, backend) -> None:
        result = _invoke(
            cli_runner,
            backend,
            ["entry", "add", "--title", "Bagel", "--amount", "3200", "--payment", "ZZ"],
        )

        assert result.exit_code != 0
        assert "Entry add failed" in result.output
        assert backend.writes == []

    def test_update(self, cli_runner, backend, coffee) -> None:
        result = _invoke(
            cli_runner, backend, ["entry", "update", "1", "--title", "Latte", "--amount", "5000"]
        )

        assert result.exit_code == 0
        assert backend.entries[1].title == "Latte"
        assert backend.entries[1].amount == 5000

    def test_update_requires_a_change(self, cli_runner, backend, coffee) -> None:
        result = _invoke(cli_runner, backend, ["entry", "update", "1"])

        assert result.exit_code != 0

    def test_update_zero_amount(self, cli_runner, backend, coffee) -> None:
        result = _invoke(cli_runner, backend, ["entry", "update", "1", "--amount", "0"])

        assert result.exit_code != 0
        assert "Entry update failed" in result.output
        assert backend.writes == []

    def test_delete_with_confirmation(self, cli_runner, backend, coffee) -> None:
        result = _invoke(cli_runner, backend, ["entry", "delete", "1"], input="y\n")

        assert result.exit_code == 0
        assert "Deleted entry 1" in result.output
        assert 1 not in backend.entries

    def test_delete_cancelled(self, cli_runner, backend, coffee) -> None:
        result = _invoke(cli_runner, backend, ["entry", "delete", "1"], input="n\n")

        assert result.exit_code == 0
        assert "Delete cancelled." in result.output
        assert backend.writes == []

    def test_delete_yes_flag(self, cli_runner, backend, coffee) -> None:
        result = _invoke(cli_runner, backend, ["entry", "delete", "1", "--yes"])

        assert result.exit_code == 0
        assert 1 not in backend.entries


@pytest.mark.sit
def test_codes_command(cli_runner, backend) -> None:
    result = _invoke(cli_runner, backend, ["codes"])

    assert result.exit_code == 0
    assert "EXP" in result.output
    assert "Cash" in result.output


@pytest.mark.sit
def test_codes_command_failure(cli_runner, backend) -> None:
    backend.failures["get_type_codes"] = NetworkError("offline")

    result = _invoke(cli_runner, backend, ["codes"])

    assert result.exit_code != 0
    assert "Could not load reference codes." in result.output


@pytest.mark.sit
def test_stats_command(cli_runner, backend, coffee) -> None:
    backend.seed(key=2, title="Coffee", amount=500)

    result = _invoke(
        cli_runner, backend, ["stats", "--start-date", "2024-05-01", "--end-date", "2024-05-31"]
    )

    assert result.exit_code == 0
    assert "Coffee" in result.output
    assert "Max: 5,000" in result.output


@pytest.mark.sit
@pytest.mark.parametrize(
    "args",
    [
        ["entry", "get", "1"],
        ["entry", "update", "1", "--title", "Latte"],
    ],
)
def test_rejected_detail_read_is_reported(cli_runner, backend, coffee, args) -> None:
    backend.failures["fetch_by_id"] = ValidationError("rejected by server")

    result = _invoke(cli_runner, backend, args)

    assert result.exit_code == 1
    assert "Could not load the entry details." in result.output
    assert not isinstance(result.exception, ValidationError)
    assert backend.writes == []


@pytest.mark.sit
def test_rejected_stats_read_is_reported(cli_runner, backend) -> None:
    backend.failures["fetch_expenditure"] = ValidationError("bad range")

    result = _invoke(cli_runner, backend, ["stats"])

    assert result.exit_code == 1
    assert "Statistics unavailable: bad range" in result.output
