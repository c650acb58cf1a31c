import argparse
import json
import logging
import random
from typing import Any, Dict, Optional

from config import GameConfig
from players import create_player, list_variants
from renderers.base import Renderer
from renderers.text_renderer import TextRenderer
from snake_game import SnakeGame

logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace) -> GameConfig:
    """Environment defaults, overridden by any flag given on the command line."""
    base = GameConfig.from_env()
    return GameConfig(
        width=args.width if args.width is not None else base.width,
        height=args.height if args.height is not None else base.height,
        tick_ms=args.tick_ms if args.tick_ms is not None else base.tick_ms,
        obstacle_count=args.obstacles if args.obstacles is not None else base.obstacle_count,
        log_level=args.log_level or base.log_level,
    )


def build_renderer(kind: str, config: GameConfig) -> Renderer:
    if kind == "image":
        # Pillow is only needed when frames are exported
        from renderers.image_renderer import ImageRenderer
        return ImageRenderer(config.width, config.height, config.cell_size)
    return TextRenderer(config.width, config.height, config.cell_size)


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(game_params: argparse.Namespace, config: Optional[GameConfig] = None) -> Dict[str, Any]:
    """
    Runs a single headless game steered by an automated player.

    Args:
        game_params: An object (like argparse.Namespace) containing the run settings
                     (player, seed, max_ticks, realtime, renderer, frames_out, replay_out).
        config: Board configuration; built from game_params and the environment if omitted.

    Returns:
        A dictionary summarizing the game (game_id, status, score, length, ticks, death info).
    """
    config = config or build_config(game_params)
    seed = getattr(game_params, 'seed', None)
    rng = random.Random(seed)

    renderer = build_renderer(getattr(game_params, 'renderer', 'text'), config)
    eat_count = {"cues": 0}

    def play_eat_cue() -> None:
        eat_count["cues"] += 1

    def on_game_over() -> None:
        print("GAME OVER")

    game = SnakeGame(
        config=config,
        renderer=renderer,
        play_eat_cue=play_eat_cue,
        on_game_over=on_game_over,
        rng=rng,
    )

    player = create_player(getattr(game_params, 'player', 'random'), rng=random.Random(seed))
    game.attach_input(player)

    game.run(
        max_ticks=getattr(game_params, 'max_ticks', None),
        realtime=getattr(game_params, 'realtime', False),
    )

    if isinstance(renderer, TextRenderer) and renderer.last_frame is not None:
        print("\n" + renderer.last_frame + "\n")

    frames_out = getattr(game_params, 'frames_out', None)
    if frames_out:
        if hasattr(renderer, 'save_animation'):
            renderer.save_animation(frames_out, frame_ms=config.tick_ms)
        else:
            logger.warning("--frames-out needs --renderer image; no frames written")

    replay_out = getattr(game_params, 'replay_out', None)
    if replay_out:
        game.save_history_to_json(replay_out)

    summary = game.get_summary()
    summary["eat_cues"] = eat_count["cues"]
    return summary


# -------------------------------
# Main Entry Point
# -------------------------------
def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Run a headless arcade snake game steered by an automated player."
    )
    parser.add_argument("--width", type=int, required=False, default=None,
                        help="Board width in canvas units (multiple of 10)")
    parser.add_argument("--height", type=int, required=False, default=None,
                        help="Board height in canvas units (multiple of 10)")
    parser.add_argument("--tick-ms", dest="tick_ms", type=int, required=False, default=None,
                        help="Tick period in milliseconds")
    parser.add_argument("--obstacles", type=int, required=False, default=None,
                        help="Number of obstacles placed at start")
    parser.add_argument("--max-ticks", dest="max_ticks", type=int, required=False, default=1000,
                        help="Stop after this many ticks if the snake is still alive")
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Random seed for placement and the player")
    parser.add_argument("--player", choices=list_variants(), default="random",
                        help="Which automated player steers the snake")
    parser.add_argument("--renderer", choices=["text", "image"], default="text",
                        help="Draw frames as text or onto an image canvas")
    parser.add_argument("--frames-out", dest="frames_out", type=str, default=None,
                        help="Write an animated GIF of the game (image renderer only)")
    parser.add_argument("--replay-out", dest="replay_out", type=str, default=None,
                        help="Write the per-tick replay JSON to this path")
    parser.add_argument("--realtime", action="store_true",
                        help="Wait one tick period between ticks instead of running flat out")
    parser.add_argument("--log-level", dest="log_level", type=str, default=None,
                        help="Logging level (default: SNAKE_LOG_LEVEL or INFO)")

    args = parser.parse_args(argv)
    config = build_config(args)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.frames_out and args.renderer != "image":
        parser.error("--frames-out requires --renderer image")

    result = run_simulation(args, config)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
