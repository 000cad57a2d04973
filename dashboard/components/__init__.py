from .drawing_canvas import drawing_canvas, rectangle_info
from .records_table import records_table
from .shortcuts_panel import shortcuts_panel

__all__ = ["drawing_canvas", "rectangle_info", "records_table", "shortcuts_panel"]
