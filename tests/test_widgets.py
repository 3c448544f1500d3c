import pytest
from PyQt6.QtCore import QMimeData, QPoint, QPointF, Qt, QThreadPool, QUrl
from PyQt6.QtGui import QDragEnterEvent, QDragLeaveEvent, QDropEvent
from PyQt6.QtTest import QTest
from PyQt6.QtWidgets import QApplication

from src.drag_overlay import DragOverlay
from src.image_queue import ImageItem
from src.main_window import MainWindow
from src.preview_pane import PreviewPane
from src.queue_panel import QueuePanel
from src.translations import tr


def wait_for_loads(qapp):
    QThreadPool.globalInstance().waitForDone(10000)
    qapp.processEvents()


def item_from(path):
    item = ImageItem.from_path(path)
    assert item is not None
    return item


def test_drag_overlay_counts_nested_events():
    overlay = DragOverlay()
    overlay.drag_entered(True)
    overlay.drag_entered(True)
    assert not overlay.isHidden()

    overlay.drag_left()
    assert not overlay.isHidden()
    overlay.drag_left()
    assert overlay.isHidden()
    assert overlay.drag_counter == 0


def test_drag_overlay_stays_hidden_for_unsupported_files():
    overlay = DragOverlay()
    overlay.drag_entered(False)
    assert overlay.isHidden()
    assert overlay.drag_counter == 1


def test_drag_overlay_counter_never_goes_negative():
    overlay = DragOverlay()
    overlay.drag_left()
    assert overlay.drag_counter == 0


def test_drag_overlay_dismiss_resets():
    overlay = DragOverlay()
    overlay.drag_entered(True)
    overlay.drag_entered(True)
    overlay.dismiss()
    assert overlay.isHidden()
    assert overlay.drag_counter == 0


def test_queue_panel_rebuilds_rows(make_image, qapp):
    panel = QueuePanel()
    items = [item_from(make_image(name)) for name in ("a.png", "b.png")]

    panel.render_items(items)
    assert panel.row_count() == 2
    assert not panel.isHidden()
    assert panel.row_for(items[1].item_id).name_label.text() == "2. b.png"

    panel.render_items(items[1:])
    assert panel.row_count() == 1
    assert panel.row_for(items[1].item_id).name_label.text() == "1. b.png"

    panel.render_items([])
    assert panel.row_count() == 0
    assert panel.isHidden()
    wait_for_loads(qapp)


def test_queue_panel_forwards_row_signals(make_image, qapp):
    panel = QueuePanel()
    item = item_from(make_image("a.png"))
    removed = []
    panel.remove_requested.connect(removed.append)
    panel.render_items([item])

    panel.row_for(item.item_id).remove_button.click()

    assert removed == [item.item_id]
    wait_for_loads(qapp)


def test_queue_panel_thumbnail_arrives(make_image, qapp):
    panel = QueuePanel()
    item = item_from(make_image("a.png", size=(96, 48)))
    panel.render_items([item])
    wait_for_loads(qapp)
    pixmap = panel.row_for(item.item_id).thumbnail.pixmap()
    assert pixmap is not None and not pixmap.isNull()


def test_preview_pane_shows_then_clears(make_image, qapp):
    pane = PreviewPane()
    pane.show_item(item_from(make_image("a.png")))
    wait_for_loads(qapp)
    assert pane.current_pixmap() is not None
    assert not pane.isHidden()

    pane.clear()
    assert pane.current_pixmap() is None
    assert pane.isHidden()


def test_preview_pane_drops_loads_requested_before_clear(make_image, qapp):
    pane = PreviewPane()
    pane.show_item(item_from(make_image("a.png")))
    pane.clear()
    wait_for_loads(qapp)
    assert pane.current_pixmap() is None
    assert pane.isHidden()


@pytest.fixture
def window(tmp_path, qapp):
    win = MainWindow({'output_dir': str(tmp_path), 'log_level': 'INFO'})
    yield win
    win.controller.shutdown()
    wait_for_loads(qapp)
    win.deleteLater()
    qapp.processEvents()


def test_main_window_updates_upload_label(window, make_image):
    assert window.upload_button.text() == tr('upload_images')
    window.controller.enqueue([make_image("a.png")])
    assert window.upload_button.text() == tr('upload_more_images')
    window.controller.remove_at(0)
    assert window.upload_button.text() == tr('upload_images')


def test_main_window_offers_all_formats(window):
    values = [window.format_combo.itemData(i) for i in range(window.format_combo.count())]
    assert values == ["png", "jpeg", "webp"]


def file_mime_data(*paths):
    mime_data = QMimeData()
    mime_data.setUrls([QUrl.fromLocalFile(str(path)) for path in paths])
    return mime_data


def send_drag_enter(window, mime_data):
    event = QDragEnterEvent(QPoint(10, 10), Qt.DropAction.CopyAction, mime_data,
                            Qt.MouseButton.NoButton, Qt.KeyboardModifier.NoModifier)
    QApplication.sendEvent(window, event)


def send_drop(window, mime_data):
    event = QDropEvent(QPointF(10, 10), Qt.DropAction.CopyAction, mime_data,
                       Qt.MouseButton.NoButton, Qt.KeyboardModifier.NoModifier)
    QApplication.sendEvent(window, event)


@pytest.fixture
def notes_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    return str(path)


def test_main_window_drag_enter_shows_overlay(window, make_image):
    mime_data = file_mime_data(make_image("a.png"))
    send_drag_enter(window, mime_data)
    assert not window.drag_overlay.isHidden()
    assert window.drag_overlay.drag_counter == 1

    QApplication.sendEvent(window, QDragLeaveEvent())
    assert window.drag_overlay.isHidden()
    assert window.drag_overlay.drag_counter == 0


def test_main_window_drag_enter_ignores_unsupported_file(window, notes_file):
    mime_data = file_mime_data(notes_file)
    send_drag_enter(window, mime_data)
    assert window.drag_overlay.isHidden()


def test_main_window_drop_queues_images(window, make_image, notes_file):
    image = make_image("a.png")
    mime_data = file_mime_data(image, notes_file)
    send_drag_enter(window, mime_data)
    send_drag_enter(window, mime_data)

    send_drop(window, mime_data)

    assert window.drag_overlay.isHidden()
    assert window.drag_overlay.drag_counter == 0
    assert [item.display_name for item in window.controller.queue] == ["a.png"]
    assert window.upload_button.text() == tr('upload_more_images')


def test_main_window_escape_dismisses_overlay(window, make_image):
    window.show()
    mime_data = file_mime_data(make_image("a.png"))
    send_drag_enter(window, mime_data)
    send_drag_enter(window, mime_data)
    assert not window.drag_overlay.isHidden()

    QTest.keyClick(window, Qt.Key.Key_Escape)

    assert window.drag_overlay.isHidden()
    assert window.drag_overlay.drag_counter == 0
