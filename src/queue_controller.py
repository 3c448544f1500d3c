from typing import Iterable, List
from PyQt6.QtCore import QObject, pyqtSignal
from src.converter import BatchConverter, NameTooLongError, OutputFormat, resolve_base_name
from src.image_queue import ImageItem, ImageQueue
from src.slideshow import Slideshow
from src.translations import tr, format_tr
from src.logger import debug, info, warning


class QueueController(QObject):
    """Owns the image queue and reacts to intake, removal, hover and convert events.

    The preview, queue panel and converter are injected so the window decides
    which widgets they are. User-facing problems go out through ``alert``.
    """

    alert = pyqtSignal(str)
    upload_label_changed = pyqtSignal(str)

    def __init__(self, preview, panel, converter: BatchConverter, parent=None):
        super().__init__(parent)
        self.queue = ImageQueue()
        self.preview = preview
        self.panel = panel
        self.converter = converter
        self.slideshow = Slideshow(self.queue, preview, self)

        panel.remove_requested.connect(self.remove_item)
        panel.item_entered.connect(self.slideshow.pause_for_hover)
        panel.item_left.connect(self.slideshow.schedule_resume)
        converter.item_failed.connect(self._on_item_failed)
        converter.save_failed.connect(self._on_save_failed)

    def enqueue(self, paths: Iterable[str]) -> int:
        """Queue every accepted image among paths; returns how many were added"""
        paths = list(paths)
        if not paths:
            return 0

        items = [item for item in (ImageItem.from_path(p) for p in paths) if item is not None]
        if not items:
            warning(f"No usable images among {len(paths)} file(s)")
            self.alert.emit(tr('invalid_files_msg'))
            return 0

        return self.enqueue_items(items)

    def enqueue_items(self, items: List[ImageItem]) -> int:
        if not items:
            return 0
        self.queue.extend(items)
        info(f"Queued {len(items)} image(s), {len(self.queue)} total")

        self.upload_label_changed.emit(tr('upload_more_images'))
        self.render_queue()
        self.slideshow.restart()
        self.preview.show_item(items[0], smooth=False)
        return len(items)

    def remove_item(self, item_id: str) -> bool:
        removed = self.queue.remove(item_id)
        if removed is None:
            warning(f"Ignoring removal of an item no longer queued: {item_id}")
            return False
        debug(f"Removed {removed.display_name}")
        self._after_removal()
        return True

    def remove_at(self, index: int) -> bool:
        try:
            removed = self.queue.remove_at(index)
        except IndexError as e:
            warning(f"Ignoring stale removal: {e}")
            return False
        debug(f"Removed {removed.display_name} from position {index + 1}")
        self._after_removal()
        return True

    def _after_removal(self):
        self.render_queue()
        self.slideshow.restart()
        if self.queue.is_empty():
            self.upload_label_changed.emit(tr('upload_images'))

    def render_queue(self):
        self.panel.render_items(self.queue.items())

    def convert_all(self, format_value: str, name_template: str) -> bool:
        """Validate, then start one independent conversion per queued image"""
        if self.queue.is_empty():
            self.alert.emit(tr('empty_queue_msg'))
            return False

        try:
            base_name = resolve_base_name(name_template)
        except NameTooLongError as e:
            warning(f"Rejected file name template: {e}")
            self.alert.emit(tr('name_too_long_msg'))
            return False

        try:
            output_format = OutputFormat.from_value(format_value)
        except ValueError:
            self.alert.emit(format_tr('unsupported_format_msg', format_value))
            return False

        self.converter.convert_all(self.queue.items(), output_format, base_name)
        return True

    def shutdown(self):
        self.slideshow.stop()
        self.converter.shutdown()

    def _on_item_failed(self, position: int):
        warning(f"Image {position} could not be decoded")
        self.alert.emit(format_tr('invalid_image_msg', position))

    def _on_save_failed(self, filename: str, reason: str):
        self.alert.emit(format_tr('save_failed_msg', filename, reason))
