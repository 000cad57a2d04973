from __future__ import annotations

import os

import reflex as rx

# FastAPI backend that owns the measurement session (see ``rectmeasure.main``).
MEASUREMENT_API_URL = os.environ.get("BACKEND_API_URL", "http://localhost:8000")


class DashboardConfig(rx.Config):
    pass


config = DashboardConfig(app_name="dashboard")
