"""App state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto


class AppMode(Enum):
    """High-level modes that decide which input systems react."""
    LIST = auto()
    EDITOR = auto()


@dataclass
class AppState:
    """Singleton component storing the currently active mode."""
    mode: AppMode = AppMode.LIST


class InputLayer(Enum):
    """Topmost interactive surface; only systems owning it react to input."""
    NOTICE = auto()
    EDITOR = auto()
    LIST = auto()
