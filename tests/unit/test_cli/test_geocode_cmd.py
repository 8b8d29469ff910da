"""Unit tests for the geocoding CLI commands."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from address_proximity.cli.app import app
from address_proximity.schemas.proximity import GeocodeMatch

runner = CliRunner()


@pytest.fixture(autouse=True)
def _database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _match() -> GeocodeMatch:
    return GeocodeMatch(
        latitude=41.8781,
        longitude=-87.6298,
        matched_address="Chicago, IL, USA",
        result_type="locality",
        subfields={"city": "Chicago", "state": "Illinois", "zip": None},
    )


class TestLookupCommand:
    """Tests for the `lookup` command."""

    def test_prints_match(self) -> None:
        with patch("address_proximity.cli.geocode_cmd._lookup", new_callable=AsyncMock, return_value=_match()):
            result = runner.invoke(app, ["lookup", "Chicago"])

        assert result.exit_code == 0, result.output
        assert "Match: Chicago, IL, USA" in result.output
        assert "41.8781, -87.6298" in result.output
        assert "city: Chicago" in result.output
        assert "zip:" not in result.output

    def test_json_output(self) -> None:
        with patch("address_proximity.cli.geocode_cmd._lookup", new_callable=AsyncMock, return_value=_match()):
            result = runner.invoke(app, ["lookup", "Chicago", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["result_type"] == "locality"

    def test_no_match_exits_nonzero(self) -> None:
        with patch("address_proximity.cli.geocode_cmd._lookup", new_callable=AsyncMock, return_value=None):
            result = runner.invoke(app, ["lookup", "Atlantis"])

        assert result.exit_code == 1
        assert "No match found." in result.output


class TestSaveAddressCommand:
    """Tests for the `save-address` command wiring."""

    def test_invokes_service(self) -> None:
        with patch("address_proximity.cli.geocode_cmd._save_address", new_callable=AsyncMock) as mock_save:
            result = runner.invoke(app, ["save-address", "Chicago", "--element-id", "3", "--field-id", "7"])

        assert result.exit_code == 0, result.output
        mock_save.assert_awaited_once_with("Chicago", 3, 7, 1, None)
