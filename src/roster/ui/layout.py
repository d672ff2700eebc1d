"""Pure geometry shared by the input and render systems.

Rectangles are ``(left, bottom, width, height)`` in window coordinates with the
origin at the bottom-left corner, matching arcade.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

from roster.constants import (
    BUTTON_GAP,
    BUTTON_GROUP_GAP,
    BUTTON_HEIGHT,
    EDITOR_ABILITY_ROWS,
    EDITOR_HEIGHT,
    EDITOR_LABEL_WIDTH,
    EDITOR_PADDING,
    EDITOR_ROW_HEIGHT,
    EDITOR_WIDTH,
    LIST_HEADER_HEIGHT,
    LIST_MARGIN,
    LIST_ROW_HEIGHT,
    LIST_WIDTH_PCT,
    NOTICE_HEIGHT,
    NOTICE_WIDTH,
)

Rect = Tuple[float, float, float, float]


def point_in_rect(x: float, y: float, rect: Optional[Rect]) -> bool:
    if rect is None:
        return False
    left, bottom, width, height = rect
    return left <= x <= left + width and bottom <= y <= bottom + height


# List view ----------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ListGeometry:
    list_rect: Rect
    header_center: Tuple[float, float]
    button_center_x: float
    button_top: float
    visible_rows: int


def compute_list_geometry(window_width: float, window_height: float) -> ListGeometry:
    """Place the record list on the left and the button column on the right."""
    list_width = max(120.0, window_width * LIST_WIDTH_PCT - LIST_MARGIN)
    list_height = max(LIST_ROW_HEIGHT, window_height - 2 * LIST_MARGIN - LIST_HEADER_HEIGHT)
    list_rect = (float(LIST_MARGIN), float(LIST_MARGIN), list_width, list_height)
    header_center = (
        LIST_MARGIN + list_width / 2,
        LIST_MARGIN + list_height + LIST_HEADER_HEIGHT / 2,
    )
    list_right = LIST_MARGIN + list_width
    button_center_x = list_right + (window_width - list_right) / 2
    visible_rows = max(1, int(list_height // LIST_ROW_HEIGHT))
    return ListGeometry(
        list_rect=list_rect,
        header_center=header_center,
        button_center_x=button_center_x,
        button_top=window_height - LIST_MARGIN,
        visible_rows=visible_rows,
    )


def row_rect(geometry: ListGeometry, slot: int) -> Rect:
    """Bounds of the ``slot``-th visible row, counted from the top of the list."""
    left, bottom, width, height = geometry.list_rect
    top = bottom + height
    return (left, top - (slot + 1) * LIST_ROW_HEIGHT, width, float(LIST_ROW_HEIGHT))


def row_at_point(
    geometry: ListGeometry,
    x: float,
    y: float,
    *,
    first_row: int,
    count: int,
) -> Optional[int]:
    """Record index under the point, or None for empty list space or outside it."""
    if not point_in_rect(x, y, geometry.list_rect):
        return None
    left, bottom, width, height = geometry.list_rect
    slot = int((bottom + height - y) // LIST_ROW_HEIGHT)
    if slot < 0 or slot >= geometry.visible_rows:
        return None
    index = first_row + slot
    if index >= count:
        return None
    return index


def scroll_to_include(first_row: int, index: Optional[int], visible_rows: int, count: int) -> int:
    """Adjust the first visible row so ``index`` is on screen and no space is wasted."""
    max_first = max(0, count - visible_rows)
    first_row = min(max(0, first_row), max_first)
    if index is None:
        return first_row
    if index < first_row:
        return index
    if index >= first_row + visible_rows:
        return index - visible_rows + 1
    return first_row


def button_group_positions(
    geometry: ListGeometry,
    group_sizes: List[int],
) -> List[Tuple[float, List[float]]]:
    """Return, per group, the caption y and the center y of each button."""
    positions: List[Tuple[float, List[float]]] = []
    cursor = geometry.button_top
    for size in group_sizes:
        caption_y = cursor - 14.0
        cursor -= 32.0
        centers = []
        for _ in range(size):
            centers.append(cursor - BUTTON_HEIGHT / 2)
            cursor -= BUTTON_HEIGHT + BUTTON_GAP
        positions.append((caption_y, centers))
        cursor -= BUTTON_GROUP_GAP - BUTTON_GAP
    return positions


# Editor dialog ------------------------------------------------------------

class EditorWidget(Enum):
    NAME_FIELD = auto()
    LEVEL_DEC = auto()
    LEVEL_FIELD = auto()
    LEVEL_INC = auto()
    HEALTH_DEC = auto()
    HEALTH_FIELD = auto()
    HEALTH_INC = auto()
    MANA_DEC = auto()
    MANA_FIELD = auto()
    MANA_INC = auto()
    CLASS_PREV = auto()
    CLASS_VALUE = auto()
    CLASS_NEXT = auto()
    WEAPON_PREV = auto()
    WEAPON_VALUE = auto()
    WEAPON_NEXT = auto()
    ARMOR_PREV = auto()
    ARMOR_VALUE = auto()
    ARMOR_NEXT = auto()
    ABILITY_LIST = auto()
    NEW_ABILITY_FIELD = auto()
    ADD_ABILITY = auto()
    REMOVE_ABILITY = auto()
    SAVE = auto()
    CANCEL = auto()


# Rows of the form, top to bottom: label, then the (dec/prev, value, inc/next) widgets.
_STEPPER_ROWS = (
    ("Level", EditorWidget.LEVEL_DEC, EditorWidget.LEVEL_FIELD, EditorWidget.LEVEL_INC),
    ("Health", EditorWidget.HEALTH_DEC, EditorWidget.HEALTH_FIELD, EditorWidget.HEALTH_INC),
    ("Mana", EditorWidget.MANA_DEC, EditorWidget.MANA_FIELD, EditorWidget.MANA_INC),
    ("Class", EditorWidget.CLASS_PREV, EditorWidget.CLASS_VALUE, EditorWidget.CLASS_NEXT),
    ("Weapon Type", EditorWidget.WEAPON_PREV, EditorWidget.WEAPON_VALUE, EditorWidget.WEAPON_NEXT),
    ("Armor Type", EditorWidget.ARMOR_PREV, EditorWidget.ARMOR_VALUE, EditorWidget.ARMOR_NEXT),
)

STEP_BUTTON_WIDTH = 30.0
SMALL_BUTTON_WIDTH = 90.0
DIALOG_BUTTON_WIDTH = 120.0
DIALOG_BUTTON_HEIGHT = 36.0


@dataclass(slots=True)
class EditorLayout:
    dialog: Rect
    title_center: Tuple[float, float]
    labels: List[Tuple[str, float, float]] = field(default_factory=list)
    widgets: Dict[EditorWidget, Rect] = field(default_factory=dict)
    ability_rows: List[Rect] = field(default_factory=list)

    def widget_at(self, x: float, y: float) -> Optional[EditorWidget]:
        for widget, rect in self.widgets.items():
            if point_in_rect(x, y, rect):
                return widget
        return None

    def ability_slot_at(self, x: float, y: float) -> Optional[int]:
        for slot, rect in enumerate(self.ability_rows):
            if point_in_rect(x, y, rect):
                return slot
        return None


def compute_editor_layout(window_width: float, window_height: float) -> EditorLayout:
    left = (window_width - EDITOR_WIDTH) / 2
    # On a window shorter than the dialog, keep the title and fields on screen;
    # the OK/Cancel row is still reachable through Enter and Escape.
    top = min(float(window_height), (window_height + EDITOR_HEIGHT) / 2)
    bottom = top - EDITOR_HEIGHT
    layout = EditorLayout(
        dialog=(left, bottom, float(EDITOR_WIDTH), float(EDITOR_HEIGHT)),
        title_center=(left + EDITOR_WIDTH / 2, top - EDITOR_PADDING - EDITOR_ROW_HEIGHT / 2),
    )
    inner_left = left + EDITOR_PADDING
    inner_width = EDITOR_WIDTH - 2 * EDITOR_PADDING
    control_left = inner_left + EDITOR_LABEL_WIDTH
    control_width = inner_width - EDITOR_LABEL_WIDTH
    field_height = EDITOR_ROW_HEIGHT - 6
    cursor = top - EDITOR_PADDING - EDITOR_ROW_HEIGHT

    def next_row(label: Optional[str]) -> float:
        nonlocal cursor
        row_bottom = cursor - EDITOR_ROW_HEIGHT
        if label:
            layout.labels.append((label, inner_left, row_bottom + EDITOR_ROW_HEIGHT / 2))
        cursor = row_bottom
        return row_bottom + 3

    y = next_row("Name")
    layout.widgets[EditorWidget.NAME_FIELD] = (control_left, y, control_width, field_height)

    for label, dec, value, inc in _STEPPER_ROWS:
        y = next_row(label)
        layout.widgets[dec] = (control_left, y, STEP_BUTTON_WIDTH, field_height)
        layout.widgets[value] = (
            control_left + STEP_BUTTON_WIDTH + 6,
            y,
            control_width - 2 * (STEP_BUTTON_WIDTH + 6),
            field_height,
        )
        layout.widgets[inc] = (control_left + control_width - STEP_BUTTON_WIDTH, y, STEP_BUTTON_WIDTH, field_height)

    next_row("Abilities")
    list_height = EDITOR_ABILITY_ROWS * LIST_ROW_HEIGHT
    list_bottom = cursor - list_height
    layout.widgets[EditorWidget.ABILITY_LIST] = (inner_left, list_bottom, inner_width, float(list_height))
    for slot in range(EDITOR_ABILITY_ROWS):
        layout.ability_rows.append(
            (inner_left, list_bottom + list_height - (slot + 1) * LIST_ROW_HEIGHT, inner_width, float(LIST_ROW_HEIGHT))
        )
    cursor = list_bottom - 6

    y = next_row(None)
    field_width = inner_width - 2 * (SMALL_BUTTON_WIDTH + 8)
    layout.widgets[EditorWidget.NEW_ABILITY_FIELD] = (inner_left, y, field_width, field_height)
    layout.widgets[EditorWidget.ADD_ABILITY] = (inner_left + field_width + 8, y, SMALL_BUTTON_WIDTH, field_height)
    layout.widgets[EditorWidget.REMOVE_ABILITY] = (
        inner_left + inner_width - SMALL_BUTTON_WIDTH,
        y,
        SMALL_BUTTON_WIDTH,
        field_height,
    )

    center_x = left + EDITOR_WIDTH / 2
    button_bottom = bottom + EDITOR_PADDING
    layout.widgets[EditorWidget.SAVE] = (
        center_x - 16 - DIALOG_BUTTON_WIDTH,
        button_bottom,
        DIALOG_BUTTON_WIDTH,
        DIALOG_BUTTON_HEIGHT,
    )
    layout.widgets[EditorWidget.CANCEL] = (center_x + 16, button_bottom, DIALOG_BUTTON_WIDTH, DIALOG_BUTTON_HEIGHT)
    return layout


# Notice dialog ------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class NoticeLayout:
    dialog: Rect
    ok_button: Rect


def compute_notice_layout(window_width: float, window_height: float) -> NoticeLayout:
    width = min(float(NOTICE_WIDTH), window_width - 2 * LIST_MARGIN)
    left = (window_width - width) / 2
    bottom = (window_height - NOTICE_HEIGHT) / 2
    ok_width = 100.0
    ok_button = (left + (width - ok_width) / 2, bottom + 18, ok_width, DIALOG_BUTTON_HEIGHT)
    return NoticeLayout(dialog=(left, bottom, width, float(NOTICE_HEIGHT)), ok_button=ok_button)
