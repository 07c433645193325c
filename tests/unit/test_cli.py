"""Tests for CLI module."""

import json
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from litdedupe.cli.main import cli

WriteLines = Callable[[Path, Iterable[Any]], Path]


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test CLI runner."""
    return CliRunner()


@pytest.fixture
def records_file(
    tmp_path: Path, write_lines: WriteLines, sample_rows: list[dict[str, Any]]
) -> Path:
    """Sample collection written as JSONL."""
    return write_lines(tmp_path / "records.jsonl", sample_rows)


# ---------------------------------------------------------------------------
# Top-level CLI
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cli_version_flag(runner: CliRunner) -> None:
    """Test --version flag outputs version string."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "litdedupe" in result.output


@pytest.mark.unit
def test_cli_help(runner: CliRunner) -> None:
    """Test --help output lists commands."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("deduplicate", "match", "compare"):
        assert command in result.output


@pytest.mark.unit
def test_cli_invalid_command(runner: CliRunner) -> None:
    """Test invalid command returns non-zero exit code."""
    result = runner.invoke(cli, ["invalid-command"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# deduplicate command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_deduplicate_writes_outputs_and_events(
    runner: CliRunner, records_file: Path, tmp_path: Path
) -> None:
    """A successful run writes artifacts and an audit log."""
    out = tmp_path / "out"

    result = runner.invoke(cli, ["deduplicate", str(records_file), "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert "Processed 5 records" in result.output
    assert "2 duplicate groups" in result.output
    for name in (
        "detections.jsonl",
        "clusters.jsonl",
        "unique_records.jsonl",
        "merged_records.jsonl",
        "deduplicated_records.jsonl",
        "events.jsonl",
        "reports/summary.json",
    ):
        assert (out / name).exists(), name


@pytest.mark.unit
def test_deduplicate_verbose_and_no_merge(
    runner: CliRunner, records_file: Path, tmp_path: Path
) -> None:
    """Verbose mode lists counters and outputs."""
    out = tmp_path / "out"

    result = runner.invoke(
        cli,
        ["deduplicate", str(records_file), "-o", str(out), "--no-merge", "-w", "2", "-v"],
    )

    assert result.exit_code == 0, result.output
    assert "Duplicate groups: 2" in result.output
    assert "Merge: no" in result.output
    assert not (out / "merged_records.jsonl").exists()


@pytest.mark.unit
def test_deduplicate_threshold_out_of_range(runner: CliRunner, records_file: Path) -> None:
    """Thresholds outside [0, 1] are rejected by option parsing."""
    result = runner.invoke(cli, ["deduplicate", str(records_file), "--threshold", "1.5"])

    assert result.exit_code == 2


@pytest.mark.unit
def test_deduplicate_missing_input(runner: CliRunner, tmp_path: Path) -> None:
    """A missing input path is a usage error."""
    result = runner.invoke(cli, ["deduplicate", str(tmp_path / "missing.jsonl")])

    assert result.exit_code != 0


@pytest.mark.unit
def test_deduplicate_strict_failure(
    runner: CliRunner, tmp_path: Path, write_lines: WriteLines
) -> None:
    """Strict mode with an invalid line exits 1 with a message."""
    path = write_lines(tmp_path / "bad.jsonl", [{"id": "a"}, "{broken"])

    result = runner.invoke(
        cli, ["deduplicate", str(path), "-o", str(tmp_path / "out"), "--strict"]
    )

    assert result.exit_code == 1
    assert "Detection failed" in result.output


# ---------------------------------------------------------------------------
# match command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_match_command(
    runner: CliRunner, records_file: Path, tmp_path: Path, write_lines: WriteLines
) -> None:
    """New records are matched against the pool file."""
    new = write_lines(
        tmp_path / "new.jsonl",
        [
            {
                "id": "new_1",
                "title": "Machine learning for sepsis prediction",
                "doi": "10.1000/SEPSIS.42",
            }
        ],
    )
    out = tmp_path / "match_out"

    result = runner.invoke(cli, ["match", str(new), str(records_file), "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert "Found 2 potential duplicates for 1 of 1 new records" in result.output
    assert (out / "detections.jsonl").exists()


# ---------------------------------------------------------------------------
# compare command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_compare_prints_breakdown(runner: CliRunner, records_file: Path) -> None:
    """compare prints scores, matched fields and the strictest rule."""
    result = runner.invoke(cli, ["compare", str(records_file), "rec_3", "rec_4"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["record_a"] == "rec_3"
    assert payload["record_b"] == "rec_4"
    assert payload["score"] == 1.0
    assert payload["matched_fields"] == ["doi"]
    # DOIs differ in case: the scorer folds case, the exact rule does not
    assert payload["rule"] == "strong"


@pytest.mark.unit
def test_compare_unknown_id(runner: CliRunner, records_file: Path) -> None:
    """Unknown ids exit 1."""
    result = runner.invoke(cli, ["compare", str(records_file), "rec_1", "nope"])

    assert result.exit_code == 1
    assert "Unknown record id(s): nope" in result.output
