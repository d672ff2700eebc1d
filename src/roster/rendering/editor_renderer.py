"""Rendering helper for the modal character editor."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from roster.components.editor_session import EditorField, EditorSession, OptionKind
from roster.rendering.context import (
    BORDER,
    FIELD,
    FIELD_FOCUSED,
    OVERLAY,
    PANEL,
    PANEL_DARK,
    ROW_SELECTED,
    TEXT,
    TEXT_MUTED,
    RenderContext,
)
from roster.rendering.list_renderer import draw_button
from roster.ui.layout import EditorLayout, EditorWidget, Rect, compute_editor_layout
from roster.utils.singletons import get_editor_session

_FIELD_WIDGETS = {
    EditorField.NAME: EditorWidget.NAME_FIELD,
    EditorField.LEVEL: EditorWidget.LEVEL_FIELD,
    EditorField.HEALTH: EditorWidget.HEALTH_FIELD,
    EditorField.MANA: EditorWidget.MANA_FIELD,
    EditorField.NEW_ABILITY: EditorWidget.NEW_ABILITY_FIELD,
}

_OPTION_WIDGETS = {
    OptionKind.CHARACTER_CLASS: (EditorWidget.CLASS_PREV, EditorWidget.CLASS_VALUE, EditorWidget.CLASS_NEXT),
    OptionKind.WEAPON: (EditorWidget.WEAPON_PREV, EditorWidget.WEAPON_VALUE, EditorWidget.WEAPON_NEXT),
    OptionKind.ARMOR: (EditorWidget.ARMOR_PREV, EditorWidget.ARMOR_VALUE, EditorWidget.ARMOR_NEXT),
}

_STEPPERS = (
    (EditorWidget.LEVEL_DEC, EditorWidget.LEVEL_INC),
    (EditorWidget.HEALTH_DEC, EditorWidget.HEALTH_INC),
    (EditorWidget.MANA_DEC, EditorWidget.MANA_INC),
)

_UNSELECTED = "Select..."


def option_caption(session: EditorSession, kind: OptionKind) -> str:
    choice = session.choices.get(kind)
    if choice is None:
        return _UNSELECTED
    return kind.labels()[choice]


class EditorRenderer:
    """Draws the editor dialog when an EditorSession exists."""

    def __init__(self) -> None:
        self._layout: Optional[EditorLayout] = None
        self._field_text: Dict[EditorWidget, str] = {}
        self._ability_rows: List[Tuple[int, Rect, str]] = []

    def render(self, arcade, ctx: RenderContext, *, headless: bool) -> None:
        found = get_editor_session(ctx.world)
        if found is None:
            self._layout = None
            self._field_text = {}
            self._ability_rows = []
            return
        _, session = found
        layout = compute_editor_layout(ctx.window_width, ctx.window_height)
        self._layout = layout

        field_text = {widget: session.buffers.get(field, "") for field, widget in _FIELD_WIDGETS.items()}
        for kind, (_, value_widget, _) in _OPTION_WIDGETS.items():
            field_text[value_widget] = option_caption(session, kind)
        self._field_text = field_text

        ability_rows = []
        for slot, rect in enumerate(layout.ability_rows):
            index = session.ability_first_row + slot
            if index >= len(session.draft.abilities):
                break
            ability_rows.append((index, rect, session.draft.abilities[index]))
        self._ability_rows = ability_rows

        if headless:
            return

        arcade.draw_lrbt_rectangle_filled(0, ctx.window_width, 0, ctx.window_height, OVERLAY)
        left, bottom, width, height = layout.dialog
        arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, PANEL)
        arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, BORDER, border_width=2)
        title_x, title_y = layout.title_center
        arcade.draw_text(session.title, title_x, title_y, TEXT, 18, anchor_x="center", anchor_y="center", bold=True)
        for text, x, y in layout.labels:
            arcade.draw_text(text, x, y, TEXT, 13, anchor_x="left", anchor_y="center")

        for field, widget in _FIELD_WIDGETS.items():
            self._draw_field(arcade, layout.widgets[widget], field_text[widget], focused=session.focus == field)
        for dec, inc in _STEPPERS:
            draw_button(arcade, layout.widgets[dec], "-", font_size=13)
            draw_button(arcade, layout.widgets[inc], "+", font_size=13)
        for prev_widget, value_widget, next_widget in _OPTION_WIDGETS.values():
            draw_button(arcade, layout.widgets[prev_widget], "<", font_size=13)
            self._draw_field(arcade, layout.widgets[value_widget], field_text[value_widget], focused=False, center=True)
            draw_button(arcade, layout.widgets[next_widget], ">", font_size=13)

        list_left, list_bottom, list_width, list_height = layout.widgets[EditorWidget.ABILITY_LIST]
        arcade.draw_lbwh_rectangle_filled(list_left, list_bottom, list_width, list_height, PANEL_DARK)
        arcade.draw_lbwh_rectangle_outline(list_left, list_bottom, list_width, list_height, BORDER, border_width=1)
        if not ability_rows:
            arcade.draw_text(
                "No abilities",
                list_left + list_width / 2,
                list_bottom + list_height / 2,
                TEXT_MUTED,
                12,
                anchor_x="center",
                anchor_y="center",
            )
        for index, (row_left, row_bottom, row_width, row_height), text in ability_rows:
            if index == session.ability_selection:
                arcade.draw_lbwh_rectangle_filled(row_left, row_bottom, row_width, row_height, ROW_SELECTED)
            arcade.draw_text(text, row_left + 8, row_bottom + row_height / 2, TEXT, 12, anchor_y="center")

        draw_button(arcade, layout.widgets[EditorWidget.ADD_ABILITY], "Add", font_size=12)
        draw_button(
            arcade,
            layout.widgets[EditorWidget.REMOVE_ABILITY],
            "Remove",
            enabled=session.ability_selection is not None,
            font_size=12,
        )
        draw_button(arcade, layout.widgets[EditorWidget.SAVE], "OK")
        draw_button(arcade, layout.widgets[EditorWidget.CANCEL], "Cancel")

    @staticmethod
    def _draw_field(arcade, rect: Rect, text: str, *, focused: bool, center: bool = False) -> None:
        left, bottom, width, height = rect
        arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, FIELD_FOCUSED if focused else FIELD)
        arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, BORDER, border_width=2 if focused else 1)
        shown = f"{text}|" if focused else text
        if center:
            arcade.draw_text(shown, left + width / 2, bottom + height / 2, TEXT, 12, anchor_x="center", anchor_y="center")
        else:
            arcade.draw_text(shown, left + 6, bottom + height / 2, TEXT, 12, anchor_x="left", anchor_y="center")

    def layout(self) -> Optional[EditorLayout]:
        return self._layout

    def field_text(self) -> Dict[EditorWidget, str]:
        return dict(self._field_text)

    def ability_rows(self) -> List[Tuple[int, Rect, str]]:
        return list(self._ability_rows)
