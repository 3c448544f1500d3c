from typing import Optional, Tuple
from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal
from PyQt6.QtGui import QImage
from utils.image_utils import load_qimage


class ImageLoadSignals(QObject):
    # tag is whatever the requester passed in; it comes back untouched
    loaded = pyqtSignal(object, QImage)
    failed = pyqtSignal(object)


class ImageLoadTask(QRunnable):
    """Decode image bytes off the GUI thread for previews and thumbnails"""

    def __init__(self, tag, data: bytes, target_size: Optional[Tuple[int, int]] = None):
        super().__init__()
        self.tag = tag
        self.data = data
        self.target_size = target_size
        self.signals = ImageLoadSignals()

    def run(self):
        qimage = load_qimage(self.data, self.target_size)
        if qimage is None or qimage.isNull():
            self.signals.failed.emit(self.tag)
        else:
            self.signals.loaded.emit(self.tag, qimage)


def start_image_load(task: ImageLoadTask, pool: Optional[QThreadPool] = None):
    (pool or QThreadPool.globalInstance()).start(task)
