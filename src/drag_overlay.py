from PyQt6.QtWidgets import QLabel
from PyQt6.QtCore import Qt
from src.translations import tr


class DragOverlay(QLabel):
    """Full-window hint shown while accepted image files are dragged over.

    Enter/leave pairs are counted so nested drag events don't hide it early.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.drag_counter = 0
        self.setText(tr('drop_images_here'))
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.setStyleSheet("""
            QLabel {
                background-color: rgba(0, 132, 255, 60);
                border: 3px dashed #0084ff;
                border-radius: 12px;
                color: white;
                font-size: 28px;
                font-weight: 600;
            }
        """)
        self.hide()

    def drag_entered(self, accepted: bool):
        self.drag_counter += 1
        if accepted:
            self.raise_()
            self.show()

    def drag_left(self):
        self.drag_counter -= 1
        if self.drag_counter <= 0:
            self.dismiss()

    def dismiss(self):
        self.hide()
        self.drag_counter = 0
