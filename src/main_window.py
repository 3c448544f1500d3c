from PyQt6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
                             QMessageBox, QLabel, QComboBox, QLineEdit, QFileDialog)
from PyQt6.QtCore import Qt, QThreadPool
from PyQt6.QtGui import QAction, QActionGroup
from utils.image_utils import DIALOG_NAME_FILTER, detect_mime_type, is_valid_image_type
from src.config import save_output_dir, save_log_level
from src.converter import BatchConverter, OutputFormat
from src.drag_overlay import DragOverlay
from src.preview_pane import PreviewPane
from src.queue_controller import QueueController
from src.queue_panel import QueuePanel
from src.translations import tr, format_tr, get_language, set_language
from src.logger import get_logger, set_log_level, debug


class MainWindow(QMainWindow):
    def __init__(self, config: dict):
        super().__init__()
        self.config = config
        self.pool = QThreadPool.globalInstance()
        self.setAcceptDrops(True)
        self.init_ui()

        self.converter = BatchConverter(config['output_dir'], self)
        self.controller = QueueController(self.preview, self.queue_panel, self.converter, self)
        self.controller.alert.connect(self.show_alert)
        self.controller.upload_label_changed.connect(self.upload_button.setText)

        self.create_menu_bar()

    def init_ui(self):
        self.setWindowTitle(tr('app_title'))
        self.resize(1000, 680)
        self.setStyleSheet("""
            QMainWindow {
                background-color: #141414;
            }
            QLabel {
                color: #ddd;
            }
            QPushButton {
                background-color: #0084ff;
                color: white;
                border: none;
                border-radius: 6px;
                padding: 8px 16px;
                font-weight: 600;
            }
            QPushButton:hover {
                background-color: #0070dd;
            }
        """)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QHBoxLayout()
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(16)

        # Left: preview
        self.preview = PreviewPane(pool=self.pool)
        layout.addWidget(self.preview, 3)

        # Right: controls and queue
        side = QVBoxLayout()
        side.setSpacing(10)

        self.upload_button = QPushButton(tr('upload_images'))
        self.upload_button.clicked.connect(self.choose_images)
        side.addWidget(self.upload_button)

        format_row = QHBoxLayout()
        self.format_label = QLabel(tr('output_format'))
        self.format_combo = QComboBox()
        for fmt in OutputFormat:
            self.format_combo.addItem(fmt.value.upper(), fmt.value)
        format_row.addWidget(self.format_label)
        format_row.addWidget(self.format_combo, 1)
        side.addLayout(format_row)

        name_row = QHBoxLayout()
        self.name_label = QLabel(tr('file_name'))
        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText(tr('file_name_placeholder'))
        name_row.addWidget(self.name_label)
        name_row.addWidget(self.name_input, 1)
        side.addLayout(name_row)

        self.convert_button = QPushButton(tr('convert'))
        self.convert_button.clicked.connect(self.convert)
        side.addWidget(self.convert_button)

        self.output_label = QLabel()
        self.output_label.setWordWrap(True)
        self.output_label.setStyleSheet("color: #888; font-size: 11px;")
        self.update_output_label()
        side.addWidget(self.output_label)

        self.queue_panel = QueuePanel(pool=self.pool)
        side.addWidget(self.queue_panel, 1)
        side.addStretch()

        layout.addLayout(side, 2)
        central_widget.setLayout(layout)

        self.drag_overlay = DragOverlay(central_widget)

    def create_menu_bar(self):
        menubar = self.menuBar()
        menubar.clear()

        # File menu
        file_menu = menubar.addMenu(tr('file'))

        output_action = QAction(tr('choose_output_folder'), self)
        output_action.triggered.connect(self.choose_output_folder)
        file_menu.addAction(output_action)

        file_menu.addSeparator()

        exit_action = QAction(tr('exit'), self)
        exit_action.setShortcut('Ctrl+Q')
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Settings menu
        settings_menu = menubar.addMenu(tr('settings'))
        debug_action = QAction(tr('debug_logging'), self)
        debug_action.setCheckable(True)
        debug_action.setChecked(get_logger().level == 'DEBUG')
        debug_action.toggled.connect(self.set_debug_logging)
        settings_menu.addAction(debug_action)

        # Language menu
        language_menu = menubar.addMenu('Language/语言')
        self.lang_group = QActionGroup(self)
        self.lang_group.setExclusive(True)

        for lang_code, key in (('en', 'english'), ('zh', 'chinese')):
            action = QAction(tr(key), self)
            action.setCheckable(True)
            action.setChecked(get_language() == lang_code)
            action.triggered.connect(lambda checked, code=lang_code: self.change_language(code))
            self.lang_group.addAction(action)
            language_menu.addAction(action)

    def choose_images(self):
        paths, _ = QFileDialog.getOpenFileNames(
            self, tr('select_images'), "", f"{tr('image_files')} ({DIALOG_NAME_FILTER})"
        )
        self.controller.enqueue(paths)

    def choose_output_folder(self):
        directory = QFileDialog.getExistingDirectory(
            self, tr('select_output_folder'), self.config['output_dir']
        )
        if directory:
            self.config['output_dir'] = directory
            self.converter.output_dir = directory
            save_output_dir(directory)
            self.update_output_label()

    def update_output_label(self):
        self.output_label.setText(format_tr('saving_to', self.config['output_dir']))

    def convert(self):
        self.controller.convert_all(self.format_combo.currentData(), self.name_input.text())

    def show_alert(self, message: str):
        QMessageBox.warning(self, tr('warning_title'), message)

    def set_debug_logging(self, enabled: bool):
        level = 'DEBUG' if enabled else 'INFO'
        set_log_level(level)
        save_log_level(level)

    def change_language(self, lang_code):
        set_language(lang_code)
        self.retranslate_ui()
        self.create_menu_bar()

    def retranslate_ui(self):
        self.setWindowTitle(tr('app_title'))
        if self.controller.queue.is_empty():
            self.upload_button.setText(tr('upload_images'))
        else:
            self.upload_button.setText(tr('upload_more_images'))
        self.format_label.setText(tr('output_format'))
        self.name_label.setText(tr('file_name'))
        self.name_input.setPlaceholderText(tr('file_name_placeholder'))
        self.convert_button.setText(tr('convert'))
        self.drag_overlay.setText(tr('drop_images_here'))
        self.update_output_label()
        self.controller.render_queue()

    # Drag and drop

    def dragEnterEvent(self, event):
        mime_data = event.mimeData()
        if not mime_data.hasUrls():
            event.ignore()
            return
        urls = mime_data.urls()
        first = urls[0].toLocalFile() if urls else ''
        accepted = bool(first) and is_valid_image_type(detect_mime_type(first))
        self.drag_overlay.drag_entered(accepted)
        event.acceptProposedAction()

    def dragMoveEvent(self, event):
        event.acceptProposedAction()

    def dragLeaveEvent(self, event):
        self.drag_overlay.drag_left()
        super().dragLeaveEvent(event)

    def dropEvent(self, event):
        event.acceptProposedAction()
        self.drag_overlay.dismiss()
        paths = [url.toLocalFile() for url in event.mimeData().urls() if url.isLocalFile()]
        debug(f"Dropped {len(paths)} file(s)")
        self.controller.enqueue(paths)

    def keyPressEvent(self, event):
        # ESC dismisses a stuck drag overlay
        if event.key() == Qt.Key.Key_Escape:
            self.drag_overlay.dismiss()
        else:
            super().keyPressEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.drag_overlay.setGeometry(self.centralWidget().rect())

    def closeEvent(self, event):
        """Clean up when closing"""
        self.controller.shutdown()
        event.accept()
