"""Rendering helper for blocking notices."""
from __future__ import annotations

from typing import Optional, Tuple

from roster.rendering.context import BORDER, OVERLAY, PANEL, SEVERITY_ACCENTS, TEXT, RenderContext
from roster.rendering.list_renderer import draw_button
from roster.ui.layout import NoticeLayout, compute_notice_layout
from roster.utils.singletons import active_notice


class NoticeRenderer:
    """Draws the oldest pending notice on top of everything else."""

    def __init__(self) -> None:
        self._layout: Optional[NoticeLayout] = None
        self._shown: Optional[Tuple[str, str]] = None

    def render(self, arcade, ctx: RenderContext, *, headless: bool) -> None:
        current = active_notice(ctx.world)
        if current is None:
            self._layout = None
            self._shown = None
            return
        _, notice = current
        layout = compute_notice_layout(ctx.window_width, ctx.window_height)
        self._layout = layout
        self._shown = (notice.title or "", notice.message)
        if headless:
            return

        arcade.draw_lrbt_rectangle_filled(0, ctx.window_width, 0, ctx.window_height, OVERLAY)
        left, bottom, width, height = layout.dialog
        accent = SEVERITY_ACCENTS.get(notice.severity.name, BORDER)
        arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, PANEL)
        arcade.draw_lbwh_rectangle_filled(left, bottom + height - 6, width, 6, accent)
        arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, BORDER, border_width=2)
        arcade.draw_text(
            notice.title or "",
            left + width / 2,
            bottom + height - 30,
            TEXT,
            16,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        arcade.draw_text(
            notice.message,
            left + 20,
            bottom + height - 56,
            TEXT,
            12,
            width=int(width - 40),
            multiline=True,
            anchor_x="left",
            anchor_y="top",
        )
        draw_button(arcade, layout.ok_button, "OK")

    def layout(self) -> Optional[NoticeLayout]:
        return self._layout

    def shown(self) -> Optional[Tuple[str, str]]:
        return self._shown
