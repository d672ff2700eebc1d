"""Draws the character list and the action buttons."""
from __future__ import annotations

from typing import List, Tuple

from roster.components.action_button import ActionButton, ButtonGroupLabel
from roster.rendering.context import (
    BORDER,
    BUTTON,
    BUTTON_DISABLED,
    PANEL_DARK,
    ROW_SELECTED,
    TEXT,
    TEXT_MUTED,
    RenderContext,
)
from roster.ui.layout import Rect, compute_list_geometry, row_rect
from roster.utils.singletons import get_roster, get_selection

RowEntry = Tuple[int, Rect, str]


class ListRenderer:
    """Lays out the visible rows each frame and draws them with the buttons."""

    def __init__(self) -> None:
        self._rows: List[RowEntry] = []

    def render(self, arcade, ctx: RenderContext, *, headless: bool) -> None:
        roster = get_roster(ctx.world)
        selection = get_selection(ctx.world)
        geometry = compute_list_geometry(ctx.window_width, ctx.window_height)

        rows: List[RowEntry] = []
        for slot in range(geometry.visible_rows):
            index = selection.first_row + slot
            if index >= len(roster.records):
                break
            rows.append((index, row_rect(geometry, slot), roster.records[index].display_label()))
        self._rows = rows

        if headless:
            return

        header_x, header_y = geometry.header_center
        arcade.draw_text(
            f"Game Characters ({len(roster)})",
            header_x,
            header_y,
            TEXT,
            18,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        left, bottom, width, height = geometry.list_rect
        arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, PANEL_DARK)
        arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, BORDER, border_width=2)
        if not rows:
            arcade.draw_text(
                "No characters yet. Create one or load a file.",
                left + width / 2,
                bottom + height / 2,
                TEXT_MUTED,
                13,
                anchor_x="center",
                anchor_y="center",
            )
        for index, (row_left, row_bottom, row_width, row_height), label in rows:
            if index == selection.index:
                arcade.draw_lbwh_rectangle_filled(row_left, row_bottom, row_width, row_height, ROW_SELECTED)
            arcade.draw_text(
                label,
                row_left + 10,
                row_bottom + row_height / 2,
                TEXT,
                13,
                anchor_x="left",
                anchor_y="center",
            )

        for _, caption in ctx.world.get_component(ButtonGroupLabel):
            arcade.draw_text(
                caption.text,
                caption.x,
                caption.y,
                TEXT_MUTED,
                14,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )
        for _, button in ctx.world.get_component(ActionButton):
            draw_button(
                arcade,
                (button.x - button.width / 2, button.y - button.height / 2, button.width, button.height),
                button.label,
                enabled=button.enabled,
            )

    def row_layout(self) -> List[RowEntry]:
        return self._rows


def draw_button(arcade, rect: Rect, label: str, *, enabled: bool = True, font_size: int = 14) -> None:
    left, bottom, width, height = rect
    arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, BUTTON if enabled else BUTTON_DISABLED)
    arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, BORDER, border_width=2)
    arcade.draw_text(
        label,
        left + width / 2,
        bottom + height / 2,
        TEXT if enabled else TEXT_MUTED,
        font_size,
        anchor_x="center",
        anchor_y="center",
        bold=True,
    )
