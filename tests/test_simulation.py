"""Tests for the headless simulator."""

import pytest

from rival_snake.config import GameConfig
from rival_snake.engine import GameState
from rival_snake.grid import Cell
from rival_snake.simulation import autopilot_direction, simulate
from rival_snake.snake import Direction, Snake


def _state(player, food):
    return GameState(
        tick=0, player=player, ai=None, food=food, score=0, ai_score=0,
        is_game_over=False, grid_size=10, revive_enabled=False,
    )


class TestAutopilot:
    def test_heads_for_food(self):
        state = _state(Snake.spawn(Cell(0, 5)), Cell(5, 5))
        assert autopilot_direction(state) == Direction.RIGHT

    def test_never_reverses(self):
        # Food is straight behind; the closest legal non-reversal wins.
        state = _state(Snake.spawn(Cell(5, 5), Direction.RIGHT), Cell(0, 5))
        assert autopilot_direction(state) == Direction.UP

    def test_keeps_heading_when_boxed_in(self):
        player = Snake((Cell(0, 0), Cell(0, 1), Cell(1, 1), Cell(1, 0)), Direction.UP)
        assert autopilot_direction(_state(player, Cell(5, 5))) == Direction.UP


class TestSimulate:
    def test_solo_batch(self):
        result = simulate(
            GameConfig(grid_size=8, has_opponent=False),
            num_games=5, max_ticks=200, seed=1,
        )
        assert result.total_games == 5
        assert result.total_ticks > 0
        assert result.mean_ai_score == 0.0
        assert result.ai_deaths == 0
        assert "Simulation: 5 games" in result.summary()

    def test_duel_batch_is_deterministic(self):
        config = GameConfig(grid_size=9, revive_enabled=True)
        a = simulate(config, num_games=3, max_ticks=100, seed=7)
        b = simulate(config, num_games=3, max_ticks=100, seed=7)
        assert (a.total_ticks, a.mean_score, a.mean_ai_score, a.ai_deaths) == (
            b.total_ticks, b.mean_score, b.mean_ai_score, b.ai_deaths,
        )

    def test_requires_games(self):
        with pytest.raises(ValueError, match="num_games"):
            simulate(GameConfig(), num_games=0)

    @pytest.mark.parametrize("grid_size", [2, 3])
    def test_board_filling_games_end_cleanly(self, grid_size):
        result = simulate(
            GameConfig(grid_size=grid_size, has_opponent=False),
            num_games=50, max_ticks=200, seed=1,
        )
        assert result.total_games == 50
        assert result.finished_games >= 1
        # A solo snake can grow at most until it covers the board.
        assert result.mean_score <= grid_size * grid_size - 1
