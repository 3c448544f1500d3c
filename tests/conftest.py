import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PIL import Image
from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import QApplication

from src.image_queue import ImageItem


COLORS = [
    (255, 100, 100),  # Red
    (100, 255, 100),  # Green
    (100, 100, 255),  # Blue
    (255, 255, 100),  # Yellow
]


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def make_image(tmp_path):
    """Write a small solid-color image and return its path"""
    counter = {"n": 0}

    def _make(name, fmt=None, size=(12, 8), mode="RGB"):
        color = COLORS[counter["n"] % len(COLORS)]
        counter["n"] += 1
        if mode == "RGBA":
            color = color + (128,)
        path = tmp_path / name
        Image.new(mode, size, color).save(path, format=fmt)
        return str(path)

    return _make


@pytest.fixture
def corrupt_png(tmp_path):
    path = tmp_path / "corrupt.png"
    path.write_bytes(b"definitely not a png")
    return str(path)


def make_item(name="a.png", data=b"x"):
    return ImageItem(data=data, display_name=name, mime_type="image/png")


class FakePreview:
    """Records what the slideshow asks the preview surface to do"""

    def __init__(self):
        self.shown = []
        self.clear_count = 0
        self.visible = False

    def show_item(self, item, smooth=False):
        self.shown.append((item.display_name, smooth))
        self.visible = True

    def clear(self):
        self.clear_count += 1
        self.visible = False

    @property
    def last_shown(self):
        return self.shown[-1] if self.shown else None


class FakePanel(QObject):
    remove_requested = pyqtSignal(str)
    item_entered = pyqtSignal(str)
    item_left = pyqtSignal(str)

    def __init__(self):
        super().__init__()
        self.renders = []

    def render_items(self, items):
        self.renders.append([item.display_name for item in items])

    @property
    def names(self):
        return self.renders[-1] if self.renders else []
