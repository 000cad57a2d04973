"""Desktop tool for drawing two rectangles and saving the distance between them."""

from typing import List, Optional

from PyQt5.QtCore import QEvent, QRectF, Qt
from PyQt5.QtGui import QBrush, QColor, QKeySequence, QPainter, QPen
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QComboBox,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QShortcut,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from rectmeasure.config import Settings, configure_logging
from rectmeasure.drawing import PointerAction, PointerEvent
from rectmeasure.errors import MeasurementValidationError
from rectmeasure.filtering import DistanceFilter, SortCriterion
from rectmeasure.geometry import Rectangle, rectangle_bounds
from rectmeasure.session import SHORTCUT_HINTS, MeasurementSession, Shortcut
from rectmeasure.storage import JSONFileStore


class DrawingView(QGraphicsView):
    """Graphics view that reports drags in scene coordinates."""

    def __init__(self, scene: QGraphicsScene, parent=None):
        super().__init__(scene, parent)
        self.setRenderHint(QPainter.Antialiasing, True)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setMouseTracking(True)
        self.setBackgroundBrush(QBrush(QColor("#1F1F1F")))


class MeasurementWindow(QMainWindow):
    RECTANGLE_COLORS = (QColor("#FF0000"), QColor("#0066FF"))
    PREVIEW_COLOR = QColor("#008000")
    SURFACE_SIZE = (900, 500)

    def __init__(self, session: MeasurementSession):
        super().__init__()
        self.session = session
        self.setWindowTitle("Measurement Drawing Dashboard")
        self.resize(1200, 900)

        self.scene = QGraphicsScene(self)
        self.scene.setSceneRect(QRectF(0, 0, *self.SURFACE_SIZE))
        self.view = DrawingView(self.scene, self)
        self.rect_items: List[QGraphicsRectItem] = []
        self.preview_item: Optional[QGraphicsRectItem] = None

        self.status_label = QLabel("Click & drag to draw!")
        self.info_label = QLabel("")

        self.save_button = QPushButton("Save")
        self.save_button.clicked.connect(self.save_measurement)
        self.clear_button = QPushButton("Clear Canvas")
        self.clear_button.clicked.connect(self.clear_canvas)
        self.undo_button = QPushButton("Undo")
        self.undo_button.clicked.connect(self.undo)
        self.redo_button = QPushButton("Redo")
        self.redo_button.clicked.connect(self.redo)

        self.sort_box = QComboBox()
        for criterion in SortCriterion:
            self.sort_box.addItem(criterion.value.capitalize(), criterion)
        self.sort_box.activated.connect(self.sort_records)
        self.filter_box = QComboBox()
        for band in DistanceFilter:
            self.filter_box.addItem(band.label, band)
        self.filter_box.activated.connect(self.filter_records)

        self.table = QTableWidget(0, 5)
        self.table.setHorizontalHeaderLabels(
            ["Rect #1 (W x H)", "Rect #2 (W x H)", "Distance", "Created At", "Delete"]
        )
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.cellClicked.connect(self.handle_row_click)

        shortcuts_text = "Shortcuts:  " + "   ".join(f"{keys}: {action}" for keys, action in SHORTCUT_HINTS)

        button_row = QHBoxLayout()
        for button in (self.save_button, self.clear_button, self.undo_button, self.redo_button):
            button_row.addWidget(button)
        button_row.addStretch()
        button_row.addWidget(QLabel(shortcuts_text))

        records_row = QHBoxLayout()
        records_row.addWidget(QLabel("Sort By:"))
        records_row.addWidget(self.sort_box)
        records_row.addWidget(QLabel("Filter By Distance:"))
        records_row.addWidget(self.filter_box)
        records_row.addStretch()

        layout = QVBoxLayout()
        layout.addLayout(button_row)
        layout.addWidget(self.view, 3)
        layout.addWidget(self.info_label)
        layout.addWidget(QLabel("Saved Measurements"))
        layout.addLayout(records_row)
        layout.addWidget(self.table, 2)

        central = QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)
        self.statusBar().addWidget(self.status_label, 1)

        self._bind_shortcut(QKeySequence("Ctrl+C"), Shortcut.CLEAR)
        self._bind_shortcut(QKeySequence.Undo, Shortcut.UNDO)
        self._bind_shortcut(QKeySequence("Ctrl+Shift+Z"), Shortcut.REDO)

        self.view.viewport().installEventFilter(self)
        self.refresh()

    def _bind_shortcut(self, sequence, shortcut: Shortcut) -> None:
        binding = QShortcut(sequence, self)
        binding.activated.connect(lambda: self.apply_shortcut(shortcut))

    def eventFilter(self, obj, event):
        if obj is self.view.viewport():
            action = None
            if event.type() == QEvent.MouseButtonPress and event.button() == Qt.LeftButton:
                action = PointerAction.DOWN
            elif event.type() == QEvent.MouseMove:
                action = PointerAction.MOVE
            elif event.type() == QEvent.MouseButtonRelease and event.button() == Qt.LeftButton:
                action = PointerAction.UP
            elif event.type() == QEvent.Leave:
                action = PointerAction.CANCEL
            if action is not None:
                if action is PointerAction.CANCEL:
                    pointer = PointerEvent(action)
                else:
                    scene_pos = self.view.mapToScene(event.pos())
                    pointer = PointerEvent(action, scene_pos.x(), scene_pos.y())
                self.handle_pointer(pointer)
                return action is not PointerAction.MOVE
        return super().eventFilter(obj, event)

    def handle_pointer(self, pointer: PointerEvent):
        self.session.handle_pointer(pointer)
        if pointer.action is PointerAction.MOVE:
            # Moves only change the preview rectangle.
            self.refresh_scene()
        else:
            self.refresh()

    def apply_shortcut(self, shortcut: Shortcut):
        self.session.handle_shortcut(shortcut)
        self.refresh()

    def clear_canvas(self):
        self.apply_shortcut(Shortcut.CLEAR)

    def undo(self):
        self.apply_shortcut(Shortcut.UNDO)

    def redo(self):
        self.apply_shortcut(Shortcut.REDO)

    def save_measurement(self):
        try:
            record = self.session.save()
        except MeasurementValidationError as exc:
            QMessageBox.warning(self, "Cannot save", str(exc))
            return
        self.status_label.setText(f"Saved measurement: {record.distance:g} px between centers.")
        self.refresh()

    def sort_records(self, index: int):
        self.session.sort(self.sort_box.itemData(index))
        self.refresh_table()

    def filter_records(self, index: int):
        self.session.filter(self.filter_box.itemData(index))
        self.refresh_table()

    def handle_row_click(self, row: int, column: int):
        item = self.table.item(row, 0)
        record_id = item.data(Qt.UserRole) if item is not None else None
        if record_id is None:
            return
        if column == 4:
            self.session.delete_record(record_id)
            self.status_label.setText("Measurement deleted.")
        else:
            self.session.select_record(record_id)
        self.refresh()

    def refresh(self):
        self.refresh_scene()
        self.refresh_table()
        self.undo_button.setEnabled(self.session.history.can_undo)
        self.redo_button.setEnabled(self.session.history.can_redo)

    def refresh_scene(self):
        for item in self.rect_items:
            self.scene.removeItem(item)
        self.rect_items = []
        if self.preview_item is not None:
            self.scene.removeItem(self.preview_item)
            self.preview_item = None

        rectangles = self.session.rectangles
        for index, rect in enumerate(rectangles):
            self.rect_items.append(self._add_rect(rect, self.RECTANGLE_COLORS[index]))
        preview = self.session.drawing.preview
        if preview is not None:
            self.preview_item = self._add_rect(preview, self.PREVIEW_COLOR, Qt.DashLine)

        view = self.session.view()
        if view["dimensions"]:
            first, second = view["dimensions"]
            self.info_label.setText(f"Rect #1: {first}    Rect #2: {second}")
        else:
            self.info_label.setText("")

    def _add_rect(self, rect: Rectangle, color: QColor, style=Qt.SolidLine) -> QGraphicsRectItem:
        left, top, width, height = rectangle_bounds(rect)
        item = QGraphicsRectItem(left, top, width, height)
        item.setPen(QPen(color, 2, style))
        self.scene.addItem(item)
        return item

    def refresh_table(self):
        records = self.session.records.displayed
        selected_id = self.session.records.selected_id
        message = self.session.records.empty_message
        self.table.clearSpans()
        if message:
            self.table.setRowCount(1)
            self.table.setSpan(0, 0, 1, 5)
            placeholder = QTableWidgetItem(message)
            placeholder.setTextAlignment(Qt.AlignCenter)
            placeholder.setFlags(Qt.NoItemFlags)
            self.table.setItem(0, 0, placeholder)
            return

        self.table.setRowCount(len(records))
        for row, record in enumerate(records):
            first, second = record.dimensions
            cells = [
                first,
                second,
                f"{record.distance:g}",
                record.created_at.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
                "Delete",
            ]
            for column, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setData(Qt.UserRole, record.id)
                self.table.setItem(row, column, item)
            if record.id == selected_id:
                self.table.selectRow(row)


def main():
    import sys

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    session = MeasurementSession.open(JSONFileStore(settings.store_path), settings.records_slot)
    app = QApplication(sys.argv)
    window = MeasurementWindow(session)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
