from __future__ import annotations

import reflex as rx

from ..components import drawing_canvas, rectangle_info, records_table, shortcuts_panel
from ..core import app_shell


def index() -> rx.Component:
    """Drawing surface, shortcut panel and the saved measurements table."""

    content = rx.vstack(
        rx.heading("Measurement Drawing Dashboard", size="7"),
        rx.text(
            "Drag out two rectangles to measure the distance between their centers, then save the pair.",
            color="gray.500",
        ),
        rx.grid(
            rx.box(drawing_canvas(), width="100%"),
            rx.box(shortcuts_panel(), width="100%"),
            template_columns=["1fr", "1fr", "3fr minmax(16rem, 1fr)"],
            gap="6",
            width="100%",
            align_items="stretch",
        ),
        rectangle_info(),
        records_table(),
        spacing="6",
        width="100%",
    )

    return app_shell(content)
