"""Integration tests for the validate CLI command."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from cratemaker.cli.main import app

runner = CliRunner()


class TestValidateCommand:
    """Tests for validate exit codes and messages."""

    def test_valid_config(self, write_config, minimal_config_data: dict[str, Any]) -> None:
        path = write_config(minimal_config_data)
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 0, result.output
        assert f"Validating {path}" in result.output
        assert "Validation passed. Configuration is valid." in result.output

    def test_warnings_exit_two(self, write_config, minimal_config_data: dict[str, Any]) -> None:
        minimal_config_data["materials"] = {"panel_thickness": 0.25}
        result = runner.invoke(app, ["validate", str(write_config(minimal_config_data))])

        assert result.exit_code == 2
        assert "WARNING materials.panel_thickness" in result.output
        assert "Suggestion:" in result.output
        assert "Validation passed with 0 error(s), 1 warning(s)" in result.output

    def test_advisory_error_exit_one(
        self, write_config, minimal_config_data: dict[str, Any]
    ) -> None:
        minimal_config_data["product"]["length"] = 0.1
        minimal_config_data["clearances"] = {"end": 0}
        result = runner.invoke(app, ["validate", str(write_config(minimal_config_data))])

        assert result.exit_code == 1
        assert "ERROR   product.length: No floorboards fit the crate floor" in result.output
        assert "Validation failed: 1 error(s)" in result.output

    def test_slot_overflow_warnings(self, write_config) -> None:
        data = {
            "schema_version": "1.0",
            "product": {"length": 135, "width": 135, "height": 135, "weight": 10000},
            "output": {"plywood_slots": 2},
        }
        result = runner.invoke(app, ["validate", str(write_config(data))])

        assert result.exit_code == 2
        assert "Validation passed with 0 error(s), 5 warning(s)" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Config file not found" in result.output
        assert "Validation failed: 1 error(s), 0 warning(s)" in result.output

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{ not json")
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
        assert "ERROR   line 1, column 3" in result.output

    def test_schema_error(self, write_config, minimal_config_data: dict[str, Any]) -> None:
        minimal_config_data["product"]["width"] = "wide"
        result = runner.invoke(app, ["validate", str(write_config(minimal_config_data))])

        assert result.exit_code == 1
        assert "product.width" in result.output
        assert "Value: 'wide'" in result.output
