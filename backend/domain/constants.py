"""
Game constants for the arcade snake engine.
"""

# Board geometry
CELL_SIZE = 10
DEFAULT_BOARD_WIDTH = 300
DEFAULT_BOARD_HEIGHT = 300

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Canvas coordinates: y grows downward
DIRECTION_DELTAS = {
    UP: (0, -CELL_SIZE),
    DOWN: (0, CELL_SIZE),
    LEFT: (-CELL_SIZE, 0),
    RIGHT: (CELL_SIZE, 0),
}

OPPOSITE_DIRECTIONS = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

DEFAULT_DIRECTION = RIGHT

# Arrow key codes
KEY_LEFT = 37
KEY_UP = 38
KEY_RIGHT = 39
KEY_DOWN = 40

KEY_CODE_DIRECTIONS = {
    KEY_LEFT: LEFT,
    KEY_UP: UP,
    KEY_RIGHT: RIGHT,
    KEY_DOWN: DOWN,
}

DIRECTION_KEY_CODES = {direction: code for code, direction in KEY_CODE_DIRECTIONS.items()}

# Game settings
OBSTACLE_COUNT = 10
TICK_MS = 100

# Head is only compared against segments from this index on
SELF_COLLISION_START_INDEX = 4

# Upper bound on redraws for a single placement before giving up
MAX_PLACEMENT_ATTEMPTS = 10_000

# Game status
NOT_STARTED = "not_started"
RUNNING = "running"
GAME_OVER = "game_over"

# Death reasons
DEATH_SELF = "self"
DEATH_OBSTACLE = "obstacle"
DEATH_BOARD_FULL = "board_full"
