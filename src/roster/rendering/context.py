from __future__ import annotations

from dataclasses import dataclass

from esper import World


@dataclass(slots=True)
class RenderContext:
    """Frame-scoped data shared by the renderers."""

    world: World
    window_width: float
    window_height: float


# Palette shared by the renderers.
BACKGROUND = (24, 28, 40)
PANEL = (40, 46, 70)
PANEL_DARK = (30, 34, 52)
BORDER = (200, 200, 220)
TEXT = (240, 240, 255)
TEXT_MUTED = (150, 155, 180)
ROW_SELECTED = (72, 61, 139)
BUTTON = (72, 61, 139)
BUTTON_DISABLED = (102, 153, 204)
FIELD = (18, 20, 30)
FIELD_FOCUSED = (50, 56, 90)
OVERLAY = (0, 0, 0, 160)
SEVERITY_ACCENTS = {
    "INFO": (100, 149, 237),
    "SUCCESS": (60, 179, 113),
    "ERROR": (220, 20, 60),
}
