from __future__ import annotations

import reflex as rx

from rectmeasure.filtering import DistanceFilter, SortCriterion

from ..state import DashboardState

SORT_OPTIONS = [criterion.value for criterion in SortCriterion]
FILTER_OPTIONS = [band.value for band in DistanceFilter]


def _controls() -> rx.Component:
    return rx.hstack(
        rx.hstack(
            rx.text("Sort By:", size="2"),
            rx.select(
                SORT_OPTIONS,
                value=DashboardState.sort_criterion,
                on_change=DashboardState.sort_by,
            ),
            spacing="2",
            align_items="center",
        ),
        rx.hstack(
            rx.text("Filter By Distance:", size="2"),
            rx.select(
                FILTER_OPTIONS,
                value=DashboardState.distance_filter,
                on_change=DashboardState.filter_by,
            ),
            spacing="2",
            align_items="center",
        ),
        spacing="6",
        wrap="wrap",
    )


def _record_row(row) -> rx.Component:
    return rx.table.row(
        rx.table.cell(row["first"]),
        rx.table.cell(row["second"]),
        rx.table.cell(row["distance"]),
        rx.table.cell(row["created_at"]),
        rx.table.cell(
            rx.button(
                "Delete",
                color_scheme="red",
                size="1",
                on_click=DashboardState.delete_record(row["id"]).stop_propagation,
            )
        ),
        on_click=DashboardState.select_record(row["id"]),
        background=rx.cond(row["id"] == DashboardState.selected_id, "rgba(8, 247, 254, 0.15)", "transparent"),
        cursor="pointer",
    )


def records_table() -> rx.Component:
    """Saved measurements with sort and filter controls."""

    return rx.vstack(
        rx.heading("Saved Measurements", size="5"),
        _controls(),
        rx.table.root(
            rx.table.header(
                rx.table.row(
                    rx.table.column_header_cell("Rect #1 (W x H)"),
                    rx.table.column_header_cell("Rect #2 (W x H)"),
                    rx.table.column_header_cell("Distance"),
                    rx.table.column_header_cell("Created At"),
                    rx.table.column_header_cell("Delete"),
                )
            ),
            rx.table.body(
                rx.cond(
                    DashboardState.empty_message,
                    rx.table.row(
                        rx.table.cell(DashboardState.empty_message, col_span=5, text_align="center"),
                    ),
                    rx.foreach(DashboardState.record_rows, _record_row),
                )
            ),
            width="100%",
        ),
        spacing="4",
        width="100%",
        align_items="stretch",
    )
