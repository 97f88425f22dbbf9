"""Tests for output reporters."""

import json

import yaml
from rich.console import Console

from diffreview.git.diff_parser import parse
from diffreview.git.models import ParsedDiff
from diffreview.output import json_report, terminal, yaml_report


class TestJsonReport:
    def test_valid_json(self, sample_diff_multiple):
        diff = parse(sample_diff_multiple).with_refs("main", "HEAD")
        data = json.loads(json_report.render(diff))
        assert data["version"] == "1.0"
        assert data["base_ref"] == "main"
        assert [f["path"] for f in data["files"]] == ["src/FileA.php", "src/FileB.php"]
        assert data["stats"]["files"] == 2

    def test_without_stats(self, sample_diff_added):
        data = json.loads(json_report.render(parse(sample_diff_added), include_stats=False))
        assert "stats" not in data

    def test_empty_result(self):
        data = json.loads(json_report.render(ParsedDiff()))
        assert data["files"] == []
        assert data["stats"]["files"] == 0


class TestYamlReport:
    def test_round_trips_through_safe_load(self, sample_diff_rename):
        diff = parse(sample_diff_rename)
        data = yaml.safe_load(yaml_report.render(diff))
        assert data == json_report.to_dict(diff)
        assert data["files"][0]["old_path"] == "src/OldName.php"


class TestTerminal:
    def _render(self, diff, **kwargs) -> str:
        console = Console(record=True, width=120)
        terminal.render(diff, console=console, **kwargs)
        return console.export_text()

    def test_lists_files(self, sample_diff_multiple):
        out = self._render(parse(sample_diff_multiple))
        assert "src/FileA.php" in out
        assert "ADDED" in out
        assert "Hunks:" in out

    def test_rename_shows_both_paths(self, sample_diff_rename):
        out = self._render(parse(sample_diff_rename), show_summary=False)
        assert "src/OldName.php → src/NewName.php" in out
        assert "Hunks:" not in out

    def test_empty(self):
        assert "No changes" in self._render(ParsedDiff())
