"""Game-wide constants and enumerations shared by the server and the client."""

from enum import Enum, IntEnum, auto

SCREEN_WIDTH = 1000
SCREEN_HEIGHT = 600
FPS = 60

MAX_PLAYERS = 4
DEFAULT_PORT = 9876
DEFAULT_ADDRESS = "127.0.0.1:9876"

MAX_ENTITIES = 500
MAX_COMPONENTS = 6


class KeyCode(IntEnum):
    """Two-byte commands a client sends to the server."""

    LEFT = 1
    RIGHT = 2
    UP = 3
    DOWN = 4
    DEBUG_DAMAGE = 5
    SHOOT = 6
    LEVEL_ONE = 21
    LEVEL_TWO = 22
    DISCONNECT = 42


class GameState(Enum):
    """Screens the client can be in."""

    MENU = auto()
    GAME = auto()
    OPTIONS = auto()
    GAME_OVER = auto()
    EXIT = auto()


class InputButtons(Enum):
    """Keyboard buttons known to the entity system."""

    Z = 0
    Q = 1
    S = 2
    D = 3
    A = 4
    E = 5