"""
Game loop / state machine for a single-snake arcade game.

    not_started --start--> running --collision--> game_over
         ^                    |                       |
         +-------reset--------+--------reset----------+

One scheduled tick job drives a running game. Reset and game over cancel
that job through its CancellationToken, so two loops never run at once.
"""

import json
import logging
import os
import random
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from config import GameConfig
from domain.collision import collision_reason
from domain.constants import DEATH_BOARD_FULL, DEFAULT_DIRECTION, GAME_OVER, NOT_STARTED, RUNNING
from domain.game_state import GameState
from domain.placement import PlacementError, place_food, place_obstacles
from domain.snake import Snake, advance, change_direction, direction_for_key
from players.base import Player
from renderers.base import NullRenderer, Renderer
from services.tick_scheduler import CancellationToken, TickScheduler

logger = logging.getLogger(__name__)


def _noop() -> None:
    pass


class SnakeGame:
    """
    Manages:
      - Board configuration
      - The owned GameState record
      - Tick scheduling and cancellation
      - Input debouncing
      - Collaborators: renderer, eat cue, game-over indicator, input sources
      - History for replay
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        renderer: Optional[Renderer] = None,
        play_eat_cue: Optional[Callable[[], None]] = None,
        on_game_over: Optional[Callable[[], None]] = None,
        scheduler: Optional[TickScheduler] = None,
        rng: Optional[random.Random] = None,
        game_id: Optional[str] = None
    ):
        self.config = config or GameConfig()
        self.renderer = renderer or NullRenderer()
        self.play_eat_cue = play_eat_cue or _noop
        self.on_game_over = on_game_over or _noop
        self.scheduler = scheduler or TickScheduler(self.config.tick_ms)
        self.rng = rng or random.Random()
        self.game_id = game_id or str(uuid.uuid4())

        self.players: List[Player] = []
        self.history: List[GameState] = []
        self.start_time: Optional[float] = None
        self._tick_token: Optional[CancellationToken] = None

        self.state = self._initial_state()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def _initial_state(self, status: str = NOT_STARTED) -> GameState:
        return GameState(
            snake=Snake([self.config.start_cell]),
            width=self.config.width,
            height=self.config.height,
            direction=DEFAULT_DIRECTION,
            status=status,
            cell_size=self.config.cell_size,
        )

    @property
    def status(self) -> str:
        return self.state.status

    @property
    def is_running(self) -> bool:
        return self.state.status == RUNNING

    @property
    def game_over(self) -> bool:
        return self.state.status == GAME_OVER

    @property
    def tick_scheduled(self) -> bool:
        return self._tick_token is not None and not self._tick_token.cancelled

    def get_current_state(self) -> GameState:
        """Return a snapshot of the current game as a GameState."""
        return self.state.copy()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> None:
        """
        Start a fresh game: new obstacles, new food, snake back on the
        starting cell heading right. Does nothing while a game is running.
        """
        if self.is_running:
            logger.info("Game %s is already running; start ignored", self.game_id)
            return

        self._cancel_ticks()
        state = self._initial_state(status=RUNNING)
        cfg = self.config

        try:
            state.obstacles = place_obstacles(
                state.snake.positions, cfg.obstacle_count, cfg.width, cfg.height,
                rng=self.rng, cell_size=cfg.cell_size,
            )
            state.food = place_food(
                state.snake.positions, state.obstacles, cfg.width, cfg.height,
                rng=self.rng, cell_size=cfg.cell_size,
            )
        except PlacementError:
            logger.error(
                "Cannot start game %s: %sx%s board cannot hold %s obstacles",
                self.game_id, cfg.width, cfg.height, cfg.obstacle_count,
            )
            raise

        self.state = state
        self.start_time = time.time()
        self.history = []
        self.record_history()

        logger.info(
            "Started game %s on a %sx%s board (snake at %s, food at %s, %s obstacles)",
            self.game_id, cfg.width, cfg.height, state.snake.head, state.food, len(state.obstacles),
        )

        self.draw()
        self._tick_token = self.scheduler.schedule_ticks(self._scheduled_tick)

    def reset(self) -> None:
        """Stop any running loop and return to not_started."""
        self._cancel_ticks()
        self.state = self._initial_state()
        self.history = []
        logger.info("Game %s reset", self.game_id)
        self.draw()

    def restart(self) -> None:
        self.reset()
        self.start()

    def stop(self) -> None:
        """Cancel the tick loop without ending the game, e.g. at a tick limit."""
        if self.tick_scheduled:
            logger.info("Game %s stopped after %s ticks", self.game_id, self.state.tick_number)
        self._cancel_ticks()

    def _cancel_ticks(self) -> None:
        if self._tick_token is not None:
            self._tick_token.cancel()
            self._tick_token = None

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def attach_input(self, player: Player) -> None:
        """Register our key handler with an input source."""
        player.listen_direction_input(self.handle_key)
        self.players.append(player)

    def handle_key(self, key_code: int) -> None:
        """
        Buffer a direction request. The latest request before a tick wins;
        unknown key codes are ignored.
        """
        direction = direction_for_key(key_code)
        if direction is None:
            logger.debug("Ignoring key code %s", key_code)
            return
        if not self.is_running:
            return
        self.state.pending_direction = direction

    def apply_pending_direction(self) -> bool:
        """
        Consume the buffered request, at most once per tick.

        Returns True if the direction changed.
        """
        state = self.state
        if state.direction_locked or state.pending_direction is None:
            return False

        requested = state.pending_direction
        state.pending_direction = None
        state.direction_locked = True

        new_direction = change_direction(state.direction, requested)
        if new_direction == state.direction:
            if requested != state.direction:
                logger.debug("Rejected reverse turn %s while heading %s", requested, state.direction)
            return False

        state.direction = new_direction
        return True

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def _scheduled_tick(self) -> None:
        for player in self.players:
            player.act(self.get_current_state())
        self.tick()

    def tick(self) -> None:
        """
        Execute one tick:
          1) Apply at most one buffered direction change
          2) Advance the snake; on food, grow, place new food and play the cue
          3) On collision, end the game and cancel further ticks
          4) Otherwise draw the frame
        """
        state = self.state
        if state.status != RUNNING:
            logger.debug("Tick ignored: game %s is %s", self.game_id, state.status)
            return

        state.direction_locked = False
        self.apply_pending_direction()

        cfg = self.config
        state.snake, ate_food = advance(
            state.snake, state.direction, state.food, cfg.width, cfg.height, cfg.cell_size
        )
        state.tick_number += 1

        if ate_food:
            state.score += 1
            logger.info("Food eaten at %s (score %s, length %s)", state.snake.head, state.score, len(state.snake))
            try:
                state.food = place_food(
                    state.snake.positions, state.obstacles, cfg.width, cfg.height,
                    rng=self.rng, cell_size=cfg.cell_size,
                )
            except PlacementError:
                logger.exception("Board is full; ending game %s", self.game_id)
                state.food = None
                self._end_game(DEATH_BOARD_FULL)
                raise
            self.play_eat_cue()

        reason = collision_reason(state.snake.positions, state.obstacles)
        if reason is not None:
            self._end_game(reason)
            return

        logger.debug("Tick %s: head %s heading %s", state.tick_number, state.snake.head, state.direction)
        self.draw()
        self.record_history()

    def _end_game(self, reason: str) -> None:
        state = self.state
        state.status = GAME_OVER
        state.snake.alive = False
        state.snake.death_reason = reason
        state.snake.death_tick = state.tick_number
        self._cancel_ticks()
        self.record_history()
        logger.info(
            "Game Over (%s) at %s on tick %s (score %s)",
            reason, state.snake.head, state.tick_number, state.score,
        )
        self.on_game_over()

    def draw(self) -> None:
        """Paint the current state: clear, food, snake head to tail, obstacles."""
        state = self.state
        self.renderer.draw_clear()
        if state.food is not None:
            self.renderer.draw_food(state.food)
        for cell in state.snake.positions:
            self.renderer.draw_snake_segment(cell)
        for obstacle in state.obstacles:
            self.renderer.draw_obstacle(obstacle)
        self.renderer.finish_frame()

    # ------------------------------------------------------------------
    # Driving and results
    # ------------------------------------------------------------------

    def run(self, max_ticks: Optional[int] = None, realtime: bool = True) -> None:
        """
        Start the game and drive it until game over or `max_ticks` ticks.

        With realtime=False ticks run back to back instead of once per period.
        """
        self.start()

        def finished() -> bool:
            if not self.is_running:
                return True
            return max_ticks is not None and self.state.tick_number >= max_ticks

        if realtime:
            self.scheduler.run_forever(until=finished)
        else:
            while not finished() and self.tick_scheduled:
                self.scheduler.step()

        if self.is_running:
            self.stop()

    def record_history(self) -> None:
        self.history.append(self.get_current_state())

    def serialize_history(self) -> List[Dict[str, Any]]:
        """Convert the recorded GameState snapshots to JSON-serializable dicts."""
        return [state.to_dict() for state in self.history]

    def get_summary(self) -> Dict[str, Any]:
        state = self.state
        return {
            "game_id": self.game_id,
            "status": state.status,
            "score": state.score,
            "length": len(state.snake),
            "ticks": state.tick_number,
            "death_reason": state.snake.death_reason,
            "death_tick": state.snake.death_tick,
        }

    def save_history_to_json(self, filename: Optional[str] = None) -> str:
        """Write metadata and per-tick snapshots to a replay file. Returns the path."""
        if filename is None:
            filename = os.path.join("completed_games", f"snake_game_{self.game_id}.json")

        start = self.start_time or time.time()
        metadata = {
            "game_id": self.game_id,
            "start_time": datetime.fromtimestamp(start, tz=timezone.utc).isoformat(),
            "end_time": datetime.now(timezone.utc).isoformat(),
            "board": {
                "width": self.config.width,
                "height": self.config.height,
                "cell_size": self.config.cell_size,
                "obstacle_count": self.config.obstacle_count,
            },
            "tick_ms": self.config.tick_ms,
            **self.get_summary(),
        }

        data = {
            "metadata": metadata,
            "ticks": self.serialize_history(),
        }

        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(filename, "w") as f:
            json.dump(data, f, indent=2)

        logger.info("Saved replay for game %s to %s", self.game_id, filename)
        return filename
