"""
User preferences for Image Queue Converter, stored with QSettings.
Only preferences live here; the image queue is never persisted.
"""

import os
from PyQt6.QtCore import QSettings, QStandardPaths


SETTINGS_ORG = 'ImageQueue'
SETTINGS_APP = 'Config'

DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_LANGUAGE = 'en'


def get_settings() -> QSettings:
    return QSettings(SETTINGS_ORG, SETTINGS_APP)


def default_output_dir() -> str:
    """The platform Downloads folder, falling back to the home directory"""
    path = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.DownloadLocation)
    return path if path else os.path.expanduser('~')


def load_config() -> dict:
    """Read preferences, dropping an output folder that no longer exists"""
    settings = get_settings()
    output_dir = settings.value('output_dir', '') or default_output_dir()
    if not os.path.isdir(output_dir):
        output_dir = default_output_dir()

    return {
        'output_dir': output_dir,
        'log_level': settings.value('log_level', DEFAULT_LOG_LEVEL),
    }


def save_output_dir(path: str):
    get_settings().setValue('output_dir', path)


def save_log_level(level: str):
    get_settings().setValue('log_level', level.upper())
