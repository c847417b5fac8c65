"""Tests for the command-line entry point."""

from unittest.mock import patch

from rival_snake.cli import _build_parser, main
from rival_snake.config import GameConfig


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_serve_defaults(self):
        args = _build_parser().parse_args(["serve"])
        assert args.command == "serve"
        assert args.host == "127.0.0.1"
        assert args.port == 8000

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.grid_size == 15
        assert args.games == 100
        assert not args.solo
        assert not args.revive

    def test_simulate_flags(self):
        args = _build_parser().parse_args([
            "simulate", "--grid-size", "9", "--games", "3", "--solo",
        ])
        assert args.grid_size == 9
        assert args.games == 3
        assert args.solo


class TestCLISimulate:
    def test_short_run(self, capsys):
        assert main(["simulate", "--games", "2", "--max-ticks", "50"]) == 0
        assert "Simulation: 2 games" in capsys.readouterr().out

    def test_from_config_file(self, tmp_path, capsys):
        path = tmp_path / "game.json"
        GameConfig(grid_size=6, has_opponent=False).save(path)
        assert main([
            "simulate", "--config", str(path), "--games", "1",
        ]) == 0
        assert "Simulation: 1 games" in capsys.readouterr().out

    def test_invalid_config_returns_2(self):
        assert main(["simulate", "--grid-size", "1", "--games", "1"]) == 2

    def test_tiny_board(self, capsys):
        assert main(["simulate", "--grid-size", "3", "--solo", "--games", "20"]) == 0
        assert "Simulation: 20 games" in capsys.readouterr().out


class TestCLIServe:
    def test_serve_runs_uvicorn(self):
        with patch("uvicorn.run") as run:
            assert main(["serve", "--port", "9001"]) == 0
        run.assert_called_once()
        assert run.call_args.kwargs["port"] == 9001
