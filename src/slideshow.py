from enum import Enum
from typing import Optional
from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from src.image_queue import ImageQueue
from src.logger import debug


ADVANCE_INTERVAL_MS = 2000
RESUME_DELAY_MS = 2000


class SlideshowState(Enum):
    EMPTY = "empty"
    SINGLE_STATIC = "single_static"
    CYCLING = "cycling"
    PAUSED_BY_HOVER = "paused_by_hover"


class Slideshow(QObject):
    """Auto-advancing preview of the queue, paused while a queue row is hovered.

    The preview binding needs show_item(item, smooth) and clear(). Each timer
    is a single QTimer, so starting it again replaces any pending run.
    """

    state_changed = pyqtSignal(object)

    def __init__(self, queue: ImageQueue, preview, parent=None):
        super().__init__(parent)
        self.queue = queue
        self.preview = preview
        self.current_index = 0
        self.paused_by_hover = False
        self._state = SlideshowState.EMPTY

        self.advance_timer = QTimer(self)
        self.advance_timer.setInterval(ADVANCE_INTERVAL_MS)
        self.advance_timer.timeout.connect(self._advance)

        self.resume_timer = QTimer(self)
        self.resume_timer.setSingleShot(True)
        self.resume_timer.setInterval(RESUME_DELAY_MS)
        self.resume_timer.timeout.connect(self._resume)

    @property
    def state(self) -> SlideshowState:
        return self._state

    def _set_state(self, state: SlideshowState):
        if state != self._state:
            debug(f"Slideshow {self._state.value} -> {state.value}")
            self._state = state
            self.state_changed.emit(state)

    def restart(self):
        """Re-evaluate from scratch after any queue change"""
        self.stop()
        self.paused_by_hover = False
        self.current_index = 0

        if len(self.queue) == 0:
            self.preview.clear()
            self._set_state(SlideshowState.EMPTY)
            return

        self.preview.show_item(self.queue[0], smooth=False)
        if len(self.queue) == 1:
            self._set_state(SlideshowState.SINGLE_STATIC)
            return

        self.advance_timer.start()
        self._set_state(SlideshowState.CYCLING)

    def stop(self):
        self.advance_timer.stop()
        self.resume_timer.stop()

    def pause_for_hover(self, item_id: str):
        index = self.queue.index_of(item_id)
        if index is None:
            debug(f"Hover on an item no longer queued: {item_id}")
            return
        self.paused_by_hover = True
        self.stop()
        self.preview.show_item(self.queue[index], smooth=False)
        self._set_state(SlideshowState.PAUSED_BY_HOVER)

    def schedule_resume(self, item_id: Optional[str] = None):
        self.paused_by_hover = False
        self.resume_timer.start()

    def _resume(self):
        if not self.paused_by_hover:
            self.restart()

    def _advance(self):
        if len(self.queue) <= 1:
            self.advance_timer.stop()
            return
        self.current_index = (self.current_index + 1) % len(self.queue)
        self.preview.show_item(self.queue[self.current_index], smooth=True)
