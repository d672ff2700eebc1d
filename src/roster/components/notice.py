from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class NoticeSeverity(Enum):
    INFO = auto()
    SUCCESS = auto()
    ERROR = auto()


@dataclass(slots=True)
class NoticeDialog:
    """Blocking message box; the lowest sequence number is shown first."""

    message: str
    title: Optional[str] = None
    severity: NoticeSeverity = NoticeSeverity.INFO
    sequence: int = 0
