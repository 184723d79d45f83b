import logging
import os
import threading
from logging import Formatter
from pathlib import Path
from typing import Optional

import rich
from rich.logging import RichHandler

from notestack.config.settings import APP_NAME, global_settings
from notestack.config.text_styles import EMOJI_ERROR, EMOJI_WARN

LOG_FILE_NAME = f"{APP_NAME}.log"

_log_lock = threading.RLock()

_file_handler: Optional[logging.FileHandler] = None
_console_handler: Optional[RichHandler] = None


def log_file_path() -> Path:
    return Path(global_settings().log_dir) / LOG_FILE_NAME


def logging_setup():
    """
    Set up or reset logging setup. Call at initial run and again if the log directory
    changes. Replaces previous handlers on the package logger.
    """
    global _file_handler
    global _console_handler

    with _log_lock:
        os.makedirs(log_file_path().parent, exist_ok=True)

        # Verbose logging to file, important logging to console.
        _file_handler = logging.FileHandler(log_file_path(), encoding="utf-8")
        _file_handler.setLevel(global_settings().file_log_level.value)
        _file_handler.setFormatter(Formatter("%(asctime)s %(levelname).1s %(name)s - %(message)s"))

        _console_handler = RichHandler(
            console=rich.get_console(),
            level=global_settings().console_log_level.value,
            show_time=False,
            show_path=False,
            show_level=False,
            markup=False,
        )
        _console_handler.setFormatter(Formatter("%(message)s"))

        logger = logging.getLogger(APP_NAME)
        logger.setLevel(
            min(global_settings().file_log_level.value, global_settings().console_log_level.value)
        )
        logger.propagate = False
        # Remove any existing handlers.
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        logger.addHandler(_console_handler)
        logger.addHandler(_file_handler)


def prefix(line, warn_emoji: str = ""):
    return " ".join(filter(None, [warn_emoji, line]))


def prefix_args(args, warn_emoji: str = ""):
    if len(args) > 0:
        args = (prefix(args[0], warn_emoji),) + args[1:]
    return args


class CustomLogger:
    """
    Custom logger to be clearer about user messages.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, *args, **kwargs):
        self.logger.debug(*args, **kwargs)

    def info(self, *args, **kwargs):
        self.logger.info(*args, **kwargs)

    def message(self, *args, **kwargs):
        self.logger.warning(*args, **kwargs)

    def warning(self, *args, **kwargs):
        self.logger.warning(*prefix_args(args, warn_emoji=EMOJI_WARN), **kwargs)

    def error(self, *args, **kwargs):
        self.logger.error(*prefix_args(args, warn_emoji=EMOJI_ERROR), **kwargs)

    # Fallback for other attributes/methods.
    def __getattr__(self, attr):
        return getattr(self.logger, attr)


def get_logger(name: str):
    return CustomLogger(name)
