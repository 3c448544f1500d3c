import re
from enum import Enum
from typing import List, Optional, Tuple
from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal
from utils.image_utils import (ImageDecodeError, decode_image, draw_on_surface,
                               encode_surface, fit_filename, unique_path)
from src.image_queue import ImageItem
from src.logger import debug, info, error


DEFAULT_BASE_NAME = 'ConvertedImage'
MAX_NAME_LENGTH = 250

_ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


class NameTooLongError(ValueError):
    """The file name template exceeds MAX_NAME_LENGTH characters"""


class OutputFormat(Enum):
    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def pillow_format(self) -> str:
        return self.value.upper()

    @classmethod
    def from_value(cls, value: str) -> 'OutputFormat':
        normalized = value.strip().lower()
        for fmt in cls:
            if fmt.value == normalized:
                return fmt
        raise ValueError(f"unsupported output format: {value!r}")


def resolve_base_name(template: str) -> str:
    """Validate the file name template and return the base name to use"""
    name = template.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise NameTooLongError(f"name is {len(name)} characters, limit is {MAX_NAME_LENGTH}")
    if not name:
        return DEFAULT_BASE_NAME
    return _ILLEGAL_FILENAME_CHARS.sub('_', name)


def output_filename(base_name: str, position: int, output_format: OutputFormat) -> str:
    # Stays within MAX_FILENAME_BYTES even for a 250 character base
    return fit_filename(base_name, f"_{position}.{output_format.extension}")


def convert_item(data: bytes, position: int, output_format: OutputFormat,
                 base_name: str) -> Optional[Tuple[str, bytes]]:
    """Decode, draw, and encode one image.

    Raises ImageDecodeError when the source can't be decoded. Returns None
    when encoding produced nothing, otherwise (filename, encoded bytes).
    """
    image = decode_image(data)
    try:
        surface = draw_on_surface(image)
    finally:
        image.close()

    try:
        encoded = encode_surface(surface, output_format.pillow_format)
    finally:
        surface.close()

    if encoded is None:
        return None
    return output_filename(base_name, position, output_format), encoded


class ConversionSignals(QObject):
    encoded = pyqtSignal(int, str, object)  # position, filename, bytes
    failed = pyqtSignal(int)               # position
    skipped = pyqtSignal(int)              # position


class ConversionTask(QRunnable):
    def __init__(self, data: bytes, position: int, output_format: OutputFormat, base_name: str):
        super().__init__()
        self.data = data
        self.position = position
        self.output_format = output_format
        self.base_name = base_name
        self.signals = ConversionSignals()

    def run(self):
        try:
            result = convert_item(self.data, self.position, self.output_format, self.base_name)
        except ImageDecodeError as e:
            debug(f"Decode failed for image {self.position}: {e}")
            self.signals.failed.emit(self.position)
            return

        if result is None:
            debug(f"Encode produced no data for image {self.position}, skipping")
            self.signals.skipped.emit(self.position)
            return

        filename, encoded = result
        self.signals.encoded.emit(self.position, filename, encoded)


class BatchConverter(QObject):
    """Dispatches one independent conversion per queued image and saves the results"""

    item_failed = pyqtSignal(int)
    item_saved = pyqtSignal(int, str)
    save_failed = pyqtSignal(str, str)  # filename, reason

    def __init__(self, output_dir: str, parent=None):
        super().__init__(parent)
        self.output_dir = output_dir
        self.threadpool = QThreadPool()

    def convert_all(self, items: List[ImageItem], output_format: OutputFormat, base_name: str):
        info(f"Converting {len(items)} image(s) to {output_format.value} as {base_name}_N")
        for position, item in enumerate(items, start=1):
            task = ConversionTask(item.data, position, output_format, base_name)
            task.signals.encoded.connect(self._on_encoded)
            task.signals.failed.connect(self.item_failed)
            self.threadpool.start(task)

    def _on_encoded(self, position: int, filename: str, data: bytes):
        path = unique_path(self.output_dir, filename)
        try:
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            error(f"Failed to save {path}: {e}")
            self.save_failed.emit(filename, str(e))
            return

        info(f"Saved image {position} to {path}")
        self.item_saved.emit(position, path)

    def wait_for_done(self, msecs: int = -1) -> bool:
        return self.threadpool.waitForDone(msecs)

    def shutdown(self):
        self.threadpool.clear()
