from __future__ import annotations

import reflex as rx

from rectmeasure.session import SHORTCUT_HINTS

from ..state import DashboardState


def _panel_container(*children: rx.Component) -> rx.Component:
    return rx.box(
        rx.vstack(
            *children,
            spacing="4",
            width="100%",
        ),
        width="100%",
        background="#262626",
        border_radius="lg",
        padding="4",
        box_shadow="md",
        border="1px solid",
        border_color="#3A3A3A",
    )


def _shortcut_item(keys: str, action: str) -> rx.Component:
    return rx.hstack(
        rx.code(keys),
        rx.spacer(),
        rx.text(action, size="2"),
        width="100%",
    )


def _status() -> rx.Component:
    return rx.cond(
        DashboardState.error,
        rx.callout(DashboardState.error, icon="triangle_alert", color_scheme="red"),
        rx.cond(
            DashboardState.busy,
            rx.spinner(size="1"),
            rx.badge(DashboardState.drawing_state, color_scheme="green"),
        ),
    )


def shortcuts_panel() -> rx.Component:
    """Keyboard shortcut reference with the save and history buttons."""

    return _panel_container(
        rx.heading("Shortcuts", size="4"),
        *[_shortcut_item(keys, action) for keys, action in SHORTCUT_HINTS],
        rx.divider(),
        rx.hstack(
            rx.button("Save", on_click=DashboardState.save, loading=DashboardState.busy),
            rx.button("Clear Canvas", on_click=DashboardState.clear_canvas, variant="outline"),
            spacing="3",
            wrap="wrap",
        ),
        rx.hstack(
            rx.icon_button(
                rx.icon("undo-2"),
                aria_label="Undo",
                on_click=DashboardState.undo,
                disabled=~DashboardState.can_undo,
                variant="ghost",
            ),
            rx.icon_button(
                rx.icon("redo-2"),
                aria_label="Redo",
                on_click=DashboardState.redo,
                disabled=~DashboardState.can_redo,
                variant="ghost",
            ),
            spacing="2",
        ),
        _status(),
    )
