"""Unit tests for the command-line interface."""

import json

import pytest

from sudoku_rater.cli import main

EASY = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
LAST_DIGIT = "006004700090000154408000000100090000070006001000040000000072635350461879007830412"


class TestSolveCommand:
    """Tests for `sudoku-rater solve`."""

    def test_solve(self, capsys):
        main(["solve", "--puzzle", EASY, "--steps"])
        out = capsys.readouterr().out
        assert "✓ Solved with human-like rules" in out
        assert "  1. " in out
        assert "Hidden Single" in out or "Obvious Single" in out

    def test_bad_puzzle(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["solve", "--puzzle", "123"])
        assert exc.value.code == 1
        assert "Error parsing puzzle" in capsys.readouterr().out

    def test_no_solution(self, capsys):
        with pytest.raises(SystemExit):
            main(["solve", "--puzzle", "55" + "0" * 79])
        assert "no solution" in capsys.readouterr().out

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit):
            main([])


class TestRateCommand:
    """Tests for `sudoku-rater rate`."""

    def test_rate_single(self, capsys, tmp_path):
        main(["rate", "--puzzle", EASY, "--output", str(tmp_path)])
        out = capsys.readouterr().out
        assert EASY in out

    def test_rate_file(self, capsys, tmp_path):
        puzzles = tmp_path / "puzzles.txt"
        puzzles.write_text(f"{EASY}\n\n  3.5 {LAST_DIGIT}\n")
        main(["rate", "--file", str(puzzles), "--output", str(tmp_path / "out")])
        out = capsys.readouterr().out
        assert "Solved: " in out and "/2 (" in out
        assert (tmp_path / "out" / "rating_report.json").exists()

    def test_rate_nothing(self, capsys):
        with pytest.raises(SystemExit):
            main(["rate"])
        assert "No puzzles given" in capsys.readouterr().out


class TestGenerateCommand:
    """Tests for `sudoku-rater generate`."""

    def test_generate(self, capsys, tmp_path):
        output = tmp_path / "puzzles.json"
        main([
            "generate", "--count", "2", "--threads", "1", "--algorithm", "diagonal",
            "--filled", "60", "--seed", "5", "--output", str(output),
        ])
        out = capsys.readouterr().out
        assert "Total puzzles generated: 2" in out
        data = json.loads(output.read_text())
        assert len(data) == 2
        assert all(len(p["puzzle"]) == 81 for p in data)

    def test_generate_with_config(self, capsys, tmp_path):
        config = tmp_path / "settings.json"
        config.write_text(json.dumps({"fill_algorithm": "diagonal", "max_filled_cells": 60, "num_threads": 1}))
        main(["generate", "--count", "1", "--config", str(config)])
        out = capsys.readouterr().out
        assert "(diagonal, mirrored, max 60 givens)" in out
        assert "Total puzzles generated: 1" in out

    def test_invalid_settings(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["generate", "--algorithm", "mask", "--mask", "0101", "--threads", "1"])
        assert exc.value.code == 1
        assert "Invalid settings" in capsys.readouterr().out

    def test_invalid_filled(self, capsys):
        with pytest.raises(SystemExit):
            main(["generate", "--filled", "10"])
        assert "Invalid settings" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
