import sys
import os
from PyQt6.QtWidgets import QApplication
from PyQt6.QtGui import QIcon
from PyQt6.QtCore import qInstallMessageHandler
from src.config import load_config
from src.main_window import MainWindow
from src.translations import init_language
from src.logger import set_log_level, info, qt_message_handler


def main():
    # Route Qt warnings into our logger
    qInstallMessageHandler(qt_message_handler)

    app = QApplication(sys.argv)
    app.setApplicationName("Image Queue Converter")

    icon_path = os.path.join(os.path.dirname(__file__), 'icons', 'app.png')
    if os.path.exists(icon_path):
        app.setWindowIcon(QIcon(icon_path))

    init_language()

    config = load_config()
    set_log_level(config.get('log_level', 'INFO'))
    info(f"Image Queue Converter starting, saving to {config['output_dir']}")

    main_window = MainWindow(config)
    main_window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
