"""Tests for the stockroom command-line interface."""

import json
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from typer.testing import CliRunner

from stockroom import app, describe_error
from repositories import DuplicateIdentityError, NotFoundError


runner = CliRunner()


class TestWarehouseCommand:
    def test_reports_each_failure(self, tmp_path):
        result = runner.invoke(app, ["warehouse", "--data-dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "Add failed" in result.output
        assert "Not found" in result.output
        assert "Invalid value" in result.output
        assert "Smartphone" in result.output

    def test_save(self, tmp_path):
        result = runner.invoke(app, ["warehouse", "--save", "--data-dir", str(tmp_path)])
        assert result.exit_code == 0
        data = json.loads((tmp_path / "groceries.json").read_text(encoding="utf-8"))
        assert {e["id"]: e["quantity"] for e in data["entities"]} == {101: 50, 102: 30, 103: 20}


class TestInventoryLogCommand:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "inventory_log.json"
        result = runner.invoke(app, ["inventory-log", "--file", str(path)])
        assert result.exit_code == 0
        assert path.exists()
        assert "Loaded 5 items" in result.output


class TestShowCommand:
    def test_show_snapshot(self, tmp_path):
        runner.invoke(app, ["warehouse", "--save", "--data-dir", str(tmp_path)])
        result = runner.invoke(app, ["show", str(tmp_path / "electronics.json"), "--type", "ElectronicItem"])
        assert result.exit_code == 0
        assert "Laptop" in result.output

    def test_show_corrupt_snapshot(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{", encoding="utf-8")
        result = runner.invoke(app, ["show", str(path), "--type", "GroceryItem"])
        assert result.exit_code == 1
        assert "Corrupt data" in result.output

    def test_show_unknown_type(self, tmp_path):
        result = runner.invoke(app, ["show", str(tmp_path / "x.json"), "--type", "Spaceship"])
        assert result.exit_code == 2


class TestOtherCommands:
    def test_health(self):
        result = runner.invoke(app, ["health", "--patient", "2"])
        assert result.exit_code == 0
        assert "Ibuprofen" in result.output

    def test_health_unknown_patient(self):
        result = runner.invoke(app, ["health", "--patient", "9"])
        assert result.exit_code == 0
        assert "No patient found" in result.output

    def test_students(self, tmp_path):
        source = tmp_path / "in.txt"
        source.write_text("1, Ama Serwaa, 85\n", encoding="utf-8")
        report = tmp_path / "out.txt"
        result = runner.invoke(app, ["students", str(source), "--report", str(report)])
        assert result.exit_code == 0
        assert report.read_text(encoding="utf-8").strip() == "Ama Serwaa (ID: 1): Score = 85, Grade = A"

    def test_students_bad_score(self, tmp_path):
        source = tmp_path / "in.txt"
        source.write_text("1, Ama Serwaa, 185\n", encoding="utf-8")
        result = runner.invoke(app, ["students", str(source), "--report", str(tmp_path / "out.txt")])
        assert result.exit_code == 1
        assert "Invalid score format" in result.output

    def test_students_missing_file(self, tmp_path):
        result = runner.invoke(app, ["students", str(tmp_path / "absent.txt")])
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_students_input_is_directory(self, tmp_path):
        result = runner.invoke(app, ["students", str(tmp_path), "--report", str(tmp_path / "out.txt")])
        assert result.exit_code == 1
        assert "File error" in result.output
        assert "Traceback" not in result.output

    def test_students_non_utf8_input(self, tmp_path):
        source = tmp_path / "in.txt"
        source.write_bytes(b"1, Ama Serwaa, 85\n2, \xff\xfe, 70\n")
        result = runner.invoke(app, ["students", str(source), "--report", str(tmp_path / "out.txt")])
        assert result.exit_code == 1
        assert "not valid UTF-8" in result.output

    def test_finance(self):
        result = runner.invoke(app, ["finance"])
        assert result.exit_code == 0
        assert "Crypto Wallet" in result.output


def test_describe_error_prefixes():
    assert describe_error(DuplicateIdentityError(5)).startswith("Add failed:")
    assert describe_error(NotFoundError(5)) == "Not found: Entity with ID 5 was not found."
