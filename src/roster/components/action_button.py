"""Components used by the list view."""
from dataclasses import dataclass
from enum import Enum, auto


class RosterAction(Enum):
    """Actions that a list-view button can trigger."""
    CREATE = auto()
    CLONE = auto()
    EDIT = auto()
    DELETE = auto()
    SAVE_JSON = auto()
    SAVE_XML = auto()
    LOAD_JSON = auto()
    LOAD_XML = auto()


@dataclass
class ActionButton:
    """Interactive button displayed beside the character list."""
    label: str
    action: RosterAction
    x: float
    y: float
    width: float = 220.0
    height: float = 40.0
    enabled: bool = True

    def contains(self, x: float, y: float) -> bool:
        half_w = self.width / 2
        half_h = self.height / 2
        return (
            self.x - half_w <= x <= self.x + half_w
            and self.y - half_h <= y <= self.y + half_h
        )


@dataclass
class ButtonGroupLabel:
    """Caption drawn above a group of buttons."""
    text: str
    x: float
    y: float


@dataclass
class ListViewTag:
    """Marker component so list-view entities can be rebuilt together."""
    pass
