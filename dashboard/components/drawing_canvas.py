from __future__ import annotations

import reflex as rx

from ..state import DashboardState


def _surface_offset(e: rx.Var[dict]) -> tuple[rx.Var[float], rx.Var[float]]:
    """Pointer position relative to the top-left corner of the surface."""

    box = f"{e}.currentTarget.getBoundingClientRect()"
    return (
        rx.Var(f"({e}.clientX - {box}.left)").to(float),
        rx.Var(f"({e}.clientY - {box}.top)").to(float),
    )


class DrawingSurface(rx.el.Div):
    """A div whose mouse triggers report surface-relative coordinates."""

    on_mouse_down: rx.EventHandler[_surface_offset]
    on_mouse_move: rx.EventHandler[_surface_offset]
    on_mouse_up: rx.EventHandler[_surface_offset]


def _rectangle(shape, stroke_dasharray: str = "none") -> rx.Component:
    return rx.el.rect(
        x=shape["x"],
        y=shape["y"],
        width=shape["width"],
        height=shape["height"],
        stroke=shape["color"],
        stroke_width="2",
        stroke_dasharray=stroke_dasharray,
        fill="none",
    )


def _overlay() -> rx.Component:
    return rx.el.svg(
        rx.foreach(DashboardState.shapes, lambda shape: _rectangle(shape)),
        rx.foreach(DashboardState.preview_shapes, lambda shape: _rectangle(shape, "6 4")),
        width="100%",
        height="100%",
        pointer_events="none",
        style={"position": "absolute", "top": 0, "left": 0},
    )


def drawing_canvas() -> rx.Component:
    """Surface on which the two rectangles are dragged out."""

    return rx.fragment(
        DrawingSurface.create(
            _overlay(),
            rx.cond(
                DashboardState.show_hint,
                rx.center(
                    rx.text("Click & Drag to Draw!", color="gray", size="4"),
                    position="absolute",
                    inset="0",
                    pointer_events="none",
                ),
            ),
            id="drawing-surface",
            position="relative",
            background="#1F1F1F",
            border_radius="8px",
            overflow="hidden",
            width="100%",
            min_height="480px",
            cursor="crosshair",
            user_select="none",
            on_mouse_down=DashboardState.pointer_down,
            on_mouse_move=DashboardState.pointer_move,
            on_mouse_up=DashboardState.pointer_up,
            on_mouse_leave=DashboardState.pointer_leave,
        ),
        rx.window_event_listener(on_key_down=DashboardState.handle_key),
    )


def rectangle_info() -> rx.Component:
    """Dimensions of both rectangles once the pair is complete."""

    return rx.cond(
        DashboardState.dimensions.length() == 2,
        rx.hstack(
            rx.text(rx.text.strong("Rect #1: "), DashboardState.dimensions[0]),
            rx.text(rx.text.strong("Rect #2: "), DashboardState.dimensions[1]),
            spacing="6",
        ),
    )
