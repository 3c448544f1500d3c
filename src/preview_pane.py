from typing import Optional
from PyQt6.QtWidgets import QLabel, QSizePolicy, QGraphicsOpacityEffect
from PyQt6.QtCore import Qt, QThreadPool
from PyQt6.QtGui import QPixmap, QImage
from utils.animation_utils import create_fade_swap_animation
from src.image_loader import ImageLoadTask, start_image_load
from src.image_queue import ImageItem
from src.logger import debug


class PreviewPane(QLabel):
    """The single preview surface the slideshow draws into.

    Decoding happens on the thread pool; whichever request finishes last is
    what ends up on screen. clear() discards requests made before it.
    """

    def __init__(self, parent=None, pool: Optional[QThreadPool] = None):
        super().__init__(parent)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setStyleSheet("""
            QLabel {
                background-color: #0a0a0a;
                border: 1px solid #222;
                border-radius: 8px;
            }
        """)
        self.setScaledContents(False)
        self.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        self.setMinimumSize(320, 240)

        self._pool = pool
        self._original_pixmap: Optional[QPixmap] = None
        self._pending_pixmap: Optional[QPixmap] = None
        self._generation = 0
        self._fade_group = None

        self.opacity_effect = QGraphicsOpacityEffect(self)
        self.opacity_effect.setOpacity(1.0)
        self.setGraphicsEffect(self.opacity_effect)
        self.hide()

    def show_item(self, item: ImageItem, smooth: bool = False):
        task = ImageLoadTask((self._generation, item.item_id, smooth), item.data)
        task.signals.loaded.connect(self._on_image_loaded)
        task.signals.failed.connect(self._on_image_failed)
        start_image_load(task, self._pool)

    def clear(self):
        self._generation += 1
        self._stop_fade()
        self._original_pixmap = None
        super().clear()
        self.hide()

    def _on_image_loaded(self, tag, qimage: QImage):
        generation, item_id, smooth = tag
        if generation != self._generation:
            debug(f"Dropping preview for {item_id} requested before clear")
            return
        pixmap = QPixmap.fromImage(qimage)
        if smooth and self.isVisible() and self._original_pixmap is not None:
            self._fade_to(pixmap)
        else:
            self._stop_fade()
            self.set_image(pixmap)

    def _on_image_failed(self, tag):
        debug(f"Preview decode failed for {tag[1]}")

    def _fade_to(self, pixmap: QPixmap):
        self._stop_fade()
        self._pending_pixmap = pixmap
        self._fade_group = create_fade_swap_animation(self.opacity_effect, self._swap_pending)
        self._fade_group.start()

    def _swap_pending(self):
        if self._pending_pixmap is not None:
            self.set_image(self._pending_pixmap)
            self._pending_pixmap = None

    def _stop_fade(self):
        if self._fade_group is not None:
            self._fade_group.stop()
            self._fade_group = None
        self._pending_pixmap = None
        self.opacity_effect.setOpacity(1.0)

    def set_image(self, pixmap: QPixmap):
        """Show a pixmap immediately, scaled to fit"""
        if pixmap and not pixmap.isNull():
            self._original_pixmap = pixmap
            self.update_display()
            self.show()

    def current_pixmap(self) -> Optional[QPixmap]:
        return self._original_pixmap

    def update_display(self):
        if self._original_pixmap and not self._original_pixmap.isNull():
            scaled = self._original_pixmap.scaled(
                self.size(),
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation
            )
            super().setPixmap(scaled)

    def resizeEvent(self, event):
        """Rescale image when label is resized"""
        super().resizeEvent(event)
        if self._original_pixmap and not self._original_pixmap.isNull():
            self.update_display()
