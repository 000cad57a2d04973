from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

import httpx
import reflex as rx

from rxconfig import MEASUREMENT_API_URL

from .core.state import AppState

# Colors of the first and second rectangle, then the live preview.
RECTANGLE_COLORS = ("#FF0000", "#0066FF")
PREVIEW_COLOR = "#008000"


def _normalise_base_url(value: Optional[str]) -> str:
    if not value:
        return ""
    return value.rstrip("/")


def _extract_error_message(response: Optional[httpx.Response], fallback: str) -> str:
    if response is None:
        return fallback
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str):
            return detail
        if isinstance(detail, list) and detail:
            first = detail[0]
            if isinstance(first, dict):
                msg = first.get("msg")
                if isinstance(msg, str):
                    return msg
    return f"{response.status_code} {response.reason_phrase}"


def _shape(rect: dict[str, float], color: str) -> dict[str, Any]:
    """Turn an anchor/delta rectangle into SVG attributes."""

    x, y = rect["x"], rect["y"]
    width, height = rect["width"], rect["height"]
    return {
        "x": min(x, x + width),
        "y": min(y, y + height),
        "width": abs(width),
        "height": abs(height),
        "color": color,
    }


def _format_timestamp(value: str) -> str:
    try:
        stamp = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return stamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")


class DashboardState(AppState):
    """Mirror of the backend session for the measurement dashboard."""

    api_base_url: str = _normalise_base_url(MEASUREMENT_API_URL)
    drawing_state: str = "idle"
    rectangles: list[dict[str, float]] = []
    preview: Optional[dict[str, float]] = None
    dimensions: list[str] = []
    can_undo: bool = False
    can_redo: bool = False
    show_hint: bool = True
    records: list[dict[str, Any]] = []
    selected_id: Optional[str] = None
    is_filtered: bool = False
    empty_message: Optional[str] = "No records found."
    sort_criterion: str = "timestamp"
    distance_filter: str = "all"
    busy: bool = False
    error: Optional[str] = None

    def _api_endpoint(self, path: str) -> str:
        if not self.api_base_url:
            raise ValueError("API base URL is not configured.")
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.api_base_url}{path}"

    def _apply_view(self, view: dict[str, Any]):
        self.drawing_state = view.get("state", "idle")
        self.rectangles = list(view.get("rectangles") or [])
        self.preview = view.get("preview")
        self.dimensions = list(view.get("dimensions") or [])
        self.can_undo = bool(view.get("can_undo"))
        self.can_redo = bool(view.get("can_redo"))
        self.show_hint = bool(view.get("show_hint", True))
        self.records = list(view.get("records") or [])
        self.selected_id = view.get("selected_id")
        self.is_filtered = bool(view.get("is_filtered"))
        self.empty_message = view.get("empty_message")

    async def _request(self, method: str, path: str, json: Optional[dict[str, Any]] = None) -> Optional[dict[str, Any]]:
        """Call the backend and return its JSON body, recording failures."""

        self.busy = True
        try:
            endpoint = self._api_endpoint(path)
            async with httpx.AsyncClient(timeout=30.0) as client:
                response = await client.request(method, endpoint, json=json)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            self.error = _extract_error_message(exc.response, "Request failed.")
            return None
        except httpx.RequestError as exc:  # pragma: no cover - network errors
            self.error = str(exc)
            return None
        except ValueError as exc:
            self.error = str(exc)
            return None
        finally:
            self.busy = False
        self.error = None
        return payload if isinstance(payload, dict) else None

    async def _command(self, method: str, path: str, json: Optional[dict[str, Any]] = None):
        view = await self._request(method, path, json)
        if view is not None:
            self._apply_view(view)

    async def load(self):
        await self._command("GET", "/state")

    # Pointer coordinates arrive relative to the drawing surface.

    async def pointer_down(self, x: float, y: float):
        await self._command("POST", "/pointer", {"action": "down", "x": x, "y": y})

    async def pointer_move(self, x: float, y: float):
        if self.drawing_state != "dragging":
            return
        await self._command("POST", "/pointer", {"action": "move", "x": x, "y": y})

    async def pointer_up(self, x: float, y: float):
        await self._command("POST", "/pointer", {"action": "up", "x": x, "y": y})

    async def pointer_leave(self):
        if self.drawing_state == "dragging":
            await self._command("POST", "/pointer", {"action": "cancel"})

    async def handle_key(self, key: str, key_info: dict):
        if not (key_info.get("ctrl_key") or key_info.get("meta_key")):
            return
        await self._command(
            "POST",
            "/shortcut",
            {
                "key": key,
                "ctrl": bool(key_info.get("ctrl_key")),
                "meta": bool(key_info.get("meta_key")),
                "shift": bool(key_info.get("shift_key")),
            },
        )

    async def clear_canvas(self):
        await self._command("POST", "/clear")

    async def undo(self):
        await self._command("POST", "/undo")

    async def redo(self):
        await self._command("POST", "/redo")

    async def save(self):
        payload = await self._request("POST", "/save")
        if payload is not None:
            self._apply_view(payload.get("view") or {})

    async def select_record(self, record_id: str):
        await self._command("POST", f"/records/{record_id}/select")

    async def delete_record(self, record_id: str):
        await self._command("DELETE", f"/records/{record_id}")

    async def sort_by(self, criterion: str):
        self.sort_criterion = criterion
        await self._command("POST", "/records/sort", {"criterion": criterion})

    async def filter_by(self, predicate: str):
        self.distance_filter = predicate
        await self._command("POST", "/records/filter", {"predicate": predicate})

    @rx.var
    def shapes(self) -> list[dict[str, Any]]:
        return [
            _shape(rect, RECTANGLE_COLORS[index % len(RECTANGLE_COLORS)])
            for index, rect in enumerate(self.rectangles)
        ]

    @rx.var
    def preview_shapes(self) -> list[dict[str, Any]]:
        if not self.preview:
            return []
        return [_shape(self.preview, PREVIEW_COLOR)]

    @rx.var
    def record_rows(self) -> list[dict[str, str]]:
        rows = []
        for record in self.records:
            first, second = (record.get("dimensions") or ["", ""])[:2]
            rows.append(
                {
                    "id": record.get("id", ""),
                    "first": first,
                    "second": second,
                    "distance": f"{float(record.get('distance', 0.0)):g}",
                    "created_at": _format_timestamp(str(record.get("createdAt", ""))),
                }
            )
        return rows
