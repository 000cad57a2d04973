from __future__ import annotations

import reflex as rx

from .core import AppState
from .pages.index import index
from .state import DashboardState


def _create_app() -> rx.App:
    """Instantiate the Reflex app with the shared theme state."""

    return rx.App(
        theme=rx.theme(appearance="dark", accent_color="cyan"),
    )


app = _create_app()

app.add_page(index, route="/", title="Measurement Drawing Dashboard", on_load=DashboardState.load)

__all__ = ["AppState", "DashboardState", "app"]
