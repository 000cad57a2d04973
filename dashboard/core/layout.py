from __future__ import annotations

import reflex as rx

from .components.header import app_header

# Page background behind the drawing surface.
PAGE_BACKGROUND = "#121212"


def app_shell(*children: rx.Component) -> rx.Component:
    """Wrap a page in the header on the dark page background."""

    return rx.box(
        app_header(),
        rx.container(
            rx.box(*children, width="100%", padding="1.5rem"),
            size="4",
        ),
        width="100%",
        min_height="100vh",
        background=PAGE_BACKGROUND,
    )
