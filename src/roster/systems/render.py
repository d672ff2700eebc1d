from __future__ import annotations

from esper import World

from roster.rendering.context import RenderContext
from roster.rendering.editor_renderer import EditorRenderer
from roster.rendering.list_renderer import ListRenderer
from roster.rendering.notice_renderer import NoticeRenderer


class RenderSystem:
    """Draws the list view, then the editor, then any pending notice."""

    def __init__(self, world: World, window) -> None:
        self.world = world
        self.window = window
        self.list_renderer = ListRenderer()
        self.editor_renderer = EditorRenderer()
        self.notice_renderer = NoticeRenderer()
        self._render_ctx: RenderContext | None = None

    def process(self, *, headless: bool | None = None) -> None:
        # Local import keeps tests headless without creating a window.
        import arcade

        if headless is None:
            try:
                arcade.get_window()
                headless = False
            except Exception:
                headless = True
        ctx = RenderContext(
            world=self.world,
            window_width=self.window.width,
            window_height=self.window.height,
        )
        self._render_ctx = ctx
        self.list_renderer.render(arcade, ctx, headless=headless)
        self.editor_renderer.render(arcade, ctx, headless=headless)
        self.notice_renderer.render(arcade, ctx, headless=headless)
