"""
Tests for snake_game.py - the game loop and state machine.

Ticks are driven by hand (game.tick() or scheduler.step()) so the tests
never wait on the clock.
"""

import json
import random
import sys
import os
from unittest.mock import Mock, patch

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig
from domain.constants import (
    DOWN, LEFT, RIGHT, UP,
    GAME_OVER, NOT_STARTED, RUNNING,
    KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_UP,
)
from domain.placement import PlacementError
from domain.snake import Snake
from players.scripted_player import ScriptedPlayer
from renderers.base import Renderer
from snake_game import SnakeGame


def make_game(obstacle_count=0, width=300, height=300, seed=1, **kwargs):
    config = GameConfig(width=width, height=height, obstacle_count=obstacle_count)
    kwargs.setdefault("renderer", Mock(spec=Renderer))
    kwargs.setdefault("play_eat_cue", Mock())
    kwargs.setdefault("on_game_over", Mock())
    return SnakeGame(config=config, rng=random.Random(seed), **kwargs)


def started_game(food=(0, 0), obstacles=None, **kwargs):
    """A running game with food and obstacles pinned to known cells."""
    game = make_game(**kwargs)
    game.start()
    game.state.food = food
    game.state.obstacles = list(obstacles or [])
    return game


class TestLifecycle:
    """Tests for start / reset / restart."""

    def test_new_game_is_not_started(self):
        game = make_game()
        assert game.status == NOT_STARTED
        assert game.tick_scheduled is False

    def test_start_sets_up_a_fresh_game(self):
        game = make_game(obstacle_count=10)
        game.start()
        state = game.state
        assert game.status == RUNNING
        assert list(state.snake.positions) == [(150, 150)]
        assert state.direction == RIGHT
        assert len(state.obstacles) == 10
        assert (150, 150) not in state.obstacles
        assert state.food not in state.obstacles
        assert state.food != (150, 150)
        assert game.tick_scheduled is True
        assert game.scheduler.pending_jobs == 1

    def test_start_draws_first_frame(self):
        game = make_game()
        game.start()
        game.renderer.draw_clear.assert_called()
        game.renderer.draw_snake_segment.assert_called_with((150, 150))

    def test_start_while_running_is_a_no_op(self):
        game = started_game(food=(10, 0), obstacles=[(0, 0)])
        obstacles = list(game.state.obstacles)
        food = game.state.food
        game.tick()
        game.start()
        assert game.state.obstacles == obstacles
        assert game.state.food == food
        assert game.state.tick_number == 1
        assert game.scheduler.pending_jobs == 1

    def test_reset_cancels_ticks(self):
        game = make_game()
        game.start()
        game.reset()
        assert game.status == NOT_STARTED
        assert game.tick_scheduled is False
        assert game.scheduler.pending_jobs == 0
        assert list(game.state.snake.positions) == [(150, 150)]
        assert game.state.food is None

    def test_reset_then_start_runs_a_single_loop(self):
        game = make_game()
        game.start()
        game.scheduler.step()
        game.restart()
        assert game.status == RUNNING
        assert game.state.tick_number == 0
        assert list(game.state.snake.positions) == [(150, 150)]
        assert game.scheduler.pending_jobs == 1

    def test_start_after_game_over_begins_new_game(self):
        game = started_game(obstacles=[(160, 150)])
        game.tick()
        assert game.status == GAME_OVER
        game.start()
        assert game.status == RUNNING
        assert list(game.state.snake.positions) == [(150, 150)]
        assert game.state.snake.alive is True
        assert game.scheduler.pending_jobs == 1

    def test_start_on_saturated_board_raises(self):
        """A one-cell board has no room for food."""
        game = make_game(width=10, height=10)
        with pytest.raises(PlacementError):
            game.start()
        assert game.status == NOT_STARTED
        assert game.scheduler.pending_jobs == 0


class TestTick:
    """Tests for the tick protocol."""

    def test_tick_moves_snake_right(self):
        game = started_game()
        game.tick()
        assert list(game.state.snake.positions) == [(160, 150)]
        assert game.state.tick_number == 1
        game.play_eat_cue.assert_not_called()

    def test_tick_onto_food_grows(self):
        game = started_game(food=(160, 150))
        game.tick()
        state = game.state
        assert list(state.snake.positions) == [(160, 150), (150, 150)]
        assert state.score == 1
        assert state.food not in state.snake.positions
        game.play_eat_cue.assert_called_once()

    def test_new_food_avoids_obstacles(self):
        game = started_game(food=(160, 150), obstacles=[(0, 0), (10, 0)])
        game.tick()
        assert game.state.food not in [(0, 0), (10, 0)]

    def test_left_edge_wraps(self):
        game = started_game()
        game.state.snake = Snake([(0, 150)])
        game.state.direction = LEFT
        game.tick()
        assert game.state.snake.head == (290, 150)

    def test_obstacle_ends_game(self):
        game = started_game(obstacles=[(160, 150)])
        game.tick()
        state = game.state
        assert state.snake.head == (160, 150)
        assert game.status == GAME_OVER
        assert state.snake.alive is False
        assert state.snake.death_reason == "obstacle"
        assert state.snake.death_tick == 1
        assert game.tick_scheduled is False
        assert game.scheduler.pending_jobs == 0
        game.on_game_over.assert_called_once()

    def test_self_collision_ends_game(self):
        game = started_game()
        game.state.snake = Snake([(10, 10), (20, 10), (20, 20), (10, 20), (0, 20), (0, 10), (0, 0)])
        game.state.direction = LEFT
        game.tick()
        assert game.state.snake.head == (0, 10)
        assert game.status == GAME_OVER
        assert game.state.snake.death_reason == "self"

    def test_no_draw_on_game_over_tick(self):
        game = started_game(obstacles=[(160, 150)])
        clears_before = game.renderer.draw_clear.call_count
        game.tick()
        assert game.renderer.draw_clear.call_count == clears_before

    def test_tick_after_game_over_is_ignored(self):
        game = started_game(obstacles=[(160, 150)])
        game.tick()
        game.tick()
        assert game.state.snake.head == (160, 150)
        assert game.state.tick_number == 1
        game.on_game_over.assert_called_once()

    def test_full_board_after_eating_ends_game(self):
        """Eating the last free cell ends the game so a new one can start."""
        game = started_game(food=(10, 0), width=20, height=10)
        game.state.snake = Snake([(0, 0)])
        with pytest.raises(PlacementError):
            game.tick()
        state = game.state
        assert game.status == GAME_OVER
        assert state.food is None
        assert state.snake.death_reason == "board_full"
        assert game.tick_scheduled is False
        assert game.scheduler.pending_jobs == 0
        game.play_eat_cue.assert_not_called()
        game.on_game_over.assert_called_once()

        game.start()
        assert game.status == RUNNING
        assert game.tick_scheduled is True
        assert game.scheduler.pending_jobs == 1
        assert len(game.state.snake) == 1

    def test_scheduler_stops_ticking_after_game_over(self):
        game = started_game(obstacles=[(170, 150)])
        game.scheduler.step()
        game.scheduler.step()
        assert game.status == GAME_OVER
        game.scheduler.step()
        assert game.state.tick_number == 2

    def test_tick_before_start_is_ignored(self):
        game = make_game()
        game.tick()
        assert game.state.tick_number == 0
        assert list(game.state.snake.positions) == [(150, 150)]

    def test_frame_draw_order(self):
        """clear -> food -> snake head to tail -> obstacles -> finish."""
        game = started_game(food=(0, 0), obstacles=[(0, 290), (10, 290)])
        game.state.snake = Snake([(150, 150), (140, 150)])
        game.renderer.reset_mock()
        game.tick()
        calls = [(name, args) for name, args, _ in game.renderer.mock_calls]
        assert calls == [
            ("draw_clear", ()),
            ("draw_food", ((0, 0),)),
            ("draw_snake_segment", ((160, 150),)),
            ("draw_snake_segment", ((150, 150),)),
            ("draw_obstacle", ((0, 290),)),
            ("draw_obstacle", ((10, 290),)),
            ("finish_frame", ()),
        ]


class TestInput:
    """Tests for key handling and debouncing."""

    def test_turn_applies_on_next_tick(self):
        game = started_game()
        game.handle_key(KEY_UP)
        assert game.state.direction == RIGHT
        game.tick()
        assert game.state.direction == UP
        assert game.state.snake.head == (150, 140)

    def test_reverse_key_is_rejected(self):
        game = started_game()
        game.handle_key(KEY_LEFT)
        game.tick()
        assert game.state.direction == RIGHT
        assert game.state.snake.head == (160, 150)

    def test_unknown_key_is_ignored(self):
        game = started_game()
        game.handle_key(65)
        assert game.state.pending_direction is None
        game.tick()
        assert game.state.snake.head == (160, 150)

    def test_last_key_before_tick_wins(self):
        game = started_game()
        game.handle_key(KEY_UP)
        game.handle_key(KEY_DOWN)
        game.tick()
        assert game.state.direction == DOWN
        assert game.state.snake.head == (150, 160)

    def test_only_one_change_per_tick(self):
        game = started_game()
        game.handle_key(KEY_UP)
        game.tick()
        game.handle_key(KEY_LEFT)
        assert game.apply_pending_direction() is False
        assert game.state.direction == UP
        game.tick()
        assert game.state.direction == LEFT

    def test_keys_before_start_are_ignored(self):
        game = make_game()
        game.handle_key(KEY_UP)
        assert game.state.pending_direction is None

    def test_attached_player_steers_scheduled_ticks(self):
        game = make_game()
        player = ScriptedPlayer([KEY_DOWN, None, KEY_RIGHT])
        game.attach_input(player)
        game.start()
        game.state.food = (0, 0)
        game.scheduler.step()
        assert game.state.snake.head == (150, 160)
        game.scheduler.step()
        assert game.state.snake.head == (150, 170)
        game.scheduler.step()
        assert game.state.snake.head == (160, 170)


class TestRunAndHistory:
    """Tests for run(), summaries and replay output."""

    def test_run_stops_at_max_ticks(self):
        game = make_game()
        game.run(max_ticks=5, realtime=False)
        assert game.state.tick_number == 5
        assert game.status == RUNNING
        assert game.tick_scheduled is False

    def test_run_stops_on_game_over(self):
        game = make_game()
        with patch("snake_game.place_obstacles", return_value=[(170, 150)]):
            game.run(max_ticks=10, realtime=False)
        assert game.status == GAME_OVER
        assert game.state.tick_number == 2
        assert game.tick_scheduled is False

    def test_history_has_one_entry_per_tick(self):
        game = started_game()
        game.tick()
        game.tick()
        history = game.serialize_history()
        assert len(history) == 3
        assert [entry["tick_number"] for entry in history] == [0, 1, 2]

    def test_summary(self):
        game = started_game(obstacles=[(160, 150)])
        game.tick()
        summary = game.get_summary()
        assert summary["status"] == GAME_OVER
        assert summary["death_reason"] == "obstacle"
        assert summary["ticks"] == 1
        assert summary["length"] == 1

    def test_save_history_to_json(self, tmp_path):
        game = started_game(food=(160, 150))
        game.tick()
        path = game.save_history_to_json(str(tmp_path / "replays" / "game.json"))
        with open(path) as f:
            data = json.load(f)
        assert data["metadata"]["game_id"] == game.game_id
        assert data["metadata"]["score"] == 1
        assert data["metadata"]["board"]["width"] == 300
        assert data["ticks"][-1]["snake"] == [[160, 150], [150, 150]]
