from __future__ import annotations

import reflex as rx


class AppState(rx.State):
    """State shared by every page of the dashboard."""

    app_title: str = "Measurement Drawing Dashboard"
