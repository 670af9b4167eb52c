"""Tests for the command-line interface."""

import polars as pl
import pytest

from rating_lifecycle.cli.main import build_parser, main


@pytest.fixture
def data_files(tmp_path):
    results = pl.DataFrame({
        "CycleId": [201901] * 4,
        "Day": [1, 1, 2, 2],
        "Sequence": [1, 2, 1, 2],
        "EastId": [1, 3, 1, 2],
        "WestId": [2, 4, 3, 4],
        "EastWin": [True, False, True, True],
        "WestWin": [False, True, False, False],
    })
    participants = pl.DataFrame({
        "id": [1, 2, 3, 4],
        "name": ["Hakuho", "Kakuryu", "Goeido", "Takayasu"],
        "rank": ["Y1e", "Y1w", "O1e", "O1w"],
        "rating": [1600.0, 1550.0, None, 1500.0],
    })
    results_path = tmp_path / "results.parquet"
    participants_path = tmp_path / "participants.parquet"
    results.write_parquet(results_path)
    participants.write_parquet(participants_path)
    return tmp_path, results_path, participants_path


def test_run_writes_ratings_and_outcomes(data_files, capsys):
    tmp_path, results_path, participants_path = data_files
    output = tmp_path / "ratings_out.parquet"
    outcomes = tmp_path / "outcomes"

    code = main([
        "run", str(results_path),
        "--ratings", str(participants_path),
        "--output", str(output),
        "--outcomes", str(outcomes),
        "--top", "2",
    ])

    assert code == 0
    assert pl.read_parquet(output).height == 4
    assert sorted(p.name for p in outcomes.iterdir()) == [
        "cycle-201901-day-001.parquet",
        "cycle-201901-day-002.parquet",
    ]
    assert pl.read_parquet(str(outcomes / "*.parquet")).height == 8
    captured = capsys.readouterr().out
    assert "ResultDataset(results=4" in captured
    assert "Top 2 participants" in captured


def test_top_and_movers(data_files, capsys):
    _, results_path, participants_path = data_files

    assert main(["top", str(results_path), "--ratings", str(participants_path), "-n", "3"]) == 0
    assert main(["movers", str(results_path), "--ratings", str(participants_path), "-k", "16"]) == 0
    out = capsys.readouterr().out
    assert "Top 3 participants" in out
    assert "Biggest movers" in out


def test_missing_participant_returns_error(tmp_path, data_files, capsys):
    _, results_path, _ = data_files
    partial = tmp_path / "partial.parquet"
    pl.DataFrame({"id": [1, 2], "name": ["Hakuho", "Kakuryu"]}).write_parquet(partial)

    assert main(["run", str(results_path), "--ratings", str(partial)]) == 1
    assert "Rating cycle failed" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "Rating Lifecycle CLI" in capsys.readouterr().out


def test_parser_defaults():
    args = build_parser().parse_args(["run", "r.parquet", "--ratings", "p.parquet"])
    assert args.k_factor == 32.0
    assert args.scale == 400.0
    assert args.top == 10
    assert args.outcomes is None


def test_verbose_run_reports_timing(data_files, capsys):
    _, results_path, participants_path = data_files

    assert main(["top", str(results_path), "--ratings", str(participants_path), "-v"]) == 0
    out = capsys.readouterr().out
    assert "INFO: Starting rating cycles" in out
    assert "INFO: Completed rating cycles in" in out


def test_failed_run_reports_timing(tmp_path, data_files, capsys):
    _, results_path, _ = data_files
    partial = tmp_path / "partial.parquet"
    pl.DataFrame({"id": [1], "name": ["Hakuho"]}).write_parquet(partial)

    assert main(["top", str(results_path), "--ratings", str(partial)]) == 1
    out = capsys.readouterr().out
    assert "ERROR: Failed rating cycles after" in out
    assert "Starting rating cycles" not in out
