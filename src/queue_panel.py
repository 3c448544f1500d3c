from typing import Dict, List, Optional
from PyQt6.QtWidgets import (QFrame, QHBoxLayout, QLabel, QPushButton, QScrollArea,
                             QVBoxLayout, QWidget, QSizePolicy)
from PyQt6.QtCore import Qt, QThreadPool, pyqtSignal
from PyQt6.QtGui import QPixmap, QImage
from src.image_loader import ImageLoadTask, start_image_load
from src.image_queue import ImageItem
from src.translations import tr


THUMBNAIL_SIZE = 48


class QueueRow(QFrame):
    """A single queue entry: thumbnail, numbered name and a remove button"""

    remove_clicked = pyqtSignal(str)
    entered = pyqtSignal(str)
    left = pyqtSignal(str)

    def __init__(self, position: int, item: ImageItem, parent=None):
        super().__init__(parent)
        self.item_id = item.item_id
        self.setObjectName("queueItem")
        self.setMouseTracking(True)
        self.setStyleSheet("""
            QFrame#queueItem {
                background-color: #1e1e1e;
                border-radius: 6px;
            }
            QFrame#queueItem:hover {
                background-color: #2a2a2a;
            }
        """)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(6, 4, 6, 4)
        layout.setSpacing(10)

        self.thumbnail = QLabel()
        self.thumbnail.setFixedSize(THUMBNAIL_SIZE, THUMBNAIL_SIZE)
        self.thumbnail.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.thumbnail.setStyleSheet("background-color: #0a0a0a; border-radius: 4px;")

        self.name_label = QLabel(f"{position}. {item.short_name}")
        self.name_label.setToolTip(item.display_name)
        self.name_label.setStyleSheet("color: #ddd;")
        self.name_label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)

        self.remove_button = QPushButton("✕")
        self.remove_button.setToolTip(tr('remove_from_queue'))
        self.remove_button.setFixedSize(28, 28)
        self.remove_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self.remove_button.clicked.connect(lambda: self.remove_clicked.emit(self.item_id))

        layout.addWidget(self.thumbnail)
        layout.addWidget(self.name_label)
        layout.addWidget(self.remove_button)

    def set_thumbnail(self, qimage: QImage):
        self.thumbnail.setPixmap(QPixmap.fromImage(qimage))

    def enterEvent(self, event):
        self.entered.emit(self.item_id)
        super().enterEvent(event)

    def leaveEvent(self, event):
        self.left.emit(self.item_id)
        super().leaveEvent(event)


class QueuePanel(QScrollArea):
    """Visible list of queued images, rebuilt in full on every render"""

    remove_requested = pyqtSignal(str)
    item_entered = pyqtSignal(str)
    item_left = pyqtSignal(str)

    def __init__(self, parent=None, pool: Optional[QThreadPool] = None):
        super().__init__(parent)
        self._pool = pool
        self._rows: Dict[str, QueueRow] = {}

        self.setWidgetResizable(True)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.container = QWidget()
        self.rows_layout = QVBoxLayout(self.container)
        self.rows_layout.setContentsMargins(0, 0, 0, 0)
        self.rows_layout.setSpacing(4)
        self.rows_layout.addStretch()
        self.setWidget(self.container)
        self.hide()

    def render_items(self, items: List[ImageItem]):
        self._clear_rows()
        self.setVisible(bool(items))

        for position, item in enumerate(items, start=1):
            row = QueueRow(position, item)
            row.remove_clicked.connect(self.remove_requested)
            row.entered.connect(self.item_entered)
            row.left.connect(self.item_left)
            self.rows_layout.insertWidget(self.rows_layout.count() - 1, row)
            self._rows[item.item_id] = row

            task = ImageLoadTask(item.item_id, item.data, (THUMBNAIL_SIZE, THUMBNAIL_SIZE))
            task.signals.loaded.connect(self._on_thumbnail_loaded)
            start_image_load(task, self._pool)

    def row_count(self) -> int:
        return len(self._rows)

    def row_for(self, item_id: str) -> Optional[QueueRow]:
        return self._rows.get(item_id)

    def _clear_rows(self):
        for row in self._rows.values():
            self.rows_layout.removeWidget(row)
            row.hide()
            # Deferred: the click that triggered this render may still be on the stack
            row.deleteLater()
        self._rows.clear()

    def _on_thumbnail_loaded(self, item_id, qimage: QImage):
        row = self._rows.get(item_id)
        if row is not None:
            row.set_thumbnail(qimage)
