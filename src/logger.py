"""
Logging system for Image Queue Converter
Colored console output plus a hook that routes Qt's own messages into the same logger
"""

import logging
import sys
from typing import Optional
from enum import Enum
from PyQt6.QtCore import QtMsgType


LOGGER_NAME = 'ImageQueue'


class LogLevel(Enum):
    """Log levels offered in the settings menu"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps each record in an ANSI color by level"""

    COLORS = {
        logging.DEBUG: '\033[36m',    # Cyan
        logging.INFO: '\033[32m',     # Green
        logging.WARNING: '\033[33m',  # Yellow
        logging.ERROR: '\033[31m',    # Red
        logging.CRITICAL: '\033[35m'  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, use_colors: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colors = use_colors

    def format(self, record):
        formatted = super().format(record)
        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            if color:
                formatted = f"{color}{formatted}{self.RESET}"
        return formatted


class Logger:
    """Process-wide logger for the converter"""

    _instance: Optional['Logger'] = None
    _logger: Optional[logging.Logger] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if self._logger is None:
            self._setup_logger()

    def _setup_logger(self):
        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)  # Handlers do the filtering
        self._logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        formatter = ColoredFormatter(
            fmt='%(asctime)s [%(levelname)8s] %(name)s.%(module)s: %(message)s',
            datefmt='%H:%M:%S',
            use_colors=sys.stdout.isatty()
        )
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.INFO)

        self._logger.addHandler(console_handler)
        self._console_handler = console_handler

    @property
    def level(self) -> str:
        return logging.getLevelName(self._console_handler.level)

    def set_level(self, level: str):
        """Set the console logging level"""
        if self._console_handler:
            log_level = getattr(logging, level.upper(), logging.INFO)
            self._console_handler.setLevel(log_level)
            self.info(f"Log level set to {level.upper()}")

    def debug(self, message: str, *args, **kwargs):
        if self._logger:
            self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        if self._logger:
            self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        if self._logger:
            self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        if self._logger:
            self._logger.error(message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        if self._logger:
            self._logger.critical(message, *args, **kwargs)


# Global logger instance
logger = Logger()


def get_logger() -> Logger:
    return logger


def set_log_level(level: str):
    logger.set_level(level)


def debug(message: str, *args, **kwargs):
    logger.debug(message, *args, **kwargs)


def info(message: str, *args, **kwargs):
    logger.info(message, *args, **kwargs)


def warning(message: str, *args, **kwargs):
    logger.warning(message, *args, **kwargs)


def error(message: str, *args, **kwargs):
    logger.error(message, *args, **kwargs)


def critical(message: str, *args, **kwargs):
    logger.critical(message, *args, **kwargs)


def qt_message_handler(mode, context, message):
    """Forward Qt diagnostics to the application logger"""
    # QPainter chatter during fades is noise
    if 'QPainter' in message:
        return
    if mode in (QtMsgType.QtCriticalMsg, QtMsgType.QtFatalMsg):
        logger.error(f"Qt: {message}")
    else:
        logger.debug(f"Qt: {message}")
