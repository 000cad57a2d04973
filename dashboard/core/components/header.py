from __future__ import annotations

import reflex as rx

from ..state import AppState


def app_header() -> rx.Component:
    """Sticky bar with the dashboard title."""

    return rx.box(
        rx.container(
            rx.hstack(
                rx.icon("ruler"),
                rx.heading(AppState.app_title, size="5"),
                spacing="4",
                align="center",
                width="100%",
            ),
            size="4",
        ),
        width="100%",
        padding_y="1rem",
        border_bottom="1px solid #3A3A3A",
        background="#1F1F1F",
        position="sticky",
        top="0",
        z_index="1000",
    )
