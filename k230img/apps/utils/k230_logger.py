#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Console and debug file logging of the k230img tool."""

import logging
import logging.handlers
import os
import sys
from typing import Optional, TextIO

import colorama

from k230img import K230IMG_DEBUG_LOG_FILE, K230IMG_DEBUG_LOGGING_DISABLED, __version__

colorama.just_fix_windows_console()

MESSAGE_FORMAT = "%(levelname)s:%(name)s:%(message)s"
LOCATION_FORMAT = MESSAGE_FORMAT + " (%(filename)s:%(lineno)d)"

LEVEL_COLORS = {
    logging.DEBUG: colorama.Fore.BLUE,
    logging.INFO: colorama.Style.BRIGHT,
    logging.WARNING: colorama.Fore.YELLOW,
    logging.ERROR: colorama.Fore.RED,
    logging.CRITICAL: colorama.Fore.RED + colorama.Style.BRIGHT,
}


class ColoredFormatter(logging.Formatter):
    """Formatter coloring the whole record by its level.

    Records other than INFO carry their source location.
    """

    def __init__(self, colored: bool = True) -> None:
        super().__init__()
        self.colored = colored
        self._message = logging.Formatter(MESSAGE_FORMAT)
        self._location = logging.Formatter(LOCATION_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        formatter = self._message if record.levelno == logging.INFO else self._location
        text = formatter.format(record)
        if not self.colored:
            return text
        return LEVEL_COLORS.get(record.levelno, "") + text + colorama.Style.RESET_ALL


def _use_color(stream: TextIO, colored: Optional[bool]) -> bool:
    if colored is not None:
        return colored
    # https://no-color.org/
    if "NO_COLOR" in os.environ:
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def install(
    level: Optional[int] = None,
    stream: TextIO = sys.stderr,
    colored: Optional[bool] = None,
    logger: Optional[logging.Logger] = None,
    create_debug_logger: bool = True,
) -> None:
    """Install console log handler and, when enabled, the debug log file handler.

    :param level: Console logging level, defaults to logging.WARNING
    :param stream: Console stream, defaults to sys.stderr
    :param colored: Force colored output on or off, autodetected when None
    :param logger: Defaults to the ``k230img`` package logger
    :param create_debug_logger: Create debug log file when enabled by environment
    """
    target_logger = logger or logging.getLogger("k230img")
    # handlers do the level filtering, the logger passes everything
    target_logger.setLevel(logging.DEBUG)

    console = logging.StreamHandler(stream)
    console.setLevel(level or logging.WARNING)
    console.setFormatter(ColoredFormatter(_use_color(stream, colored)))
    target_logger.addHandler(console)

    if not create_debug_logger or K230IMG_DEBUG_LOGGING_DISABLED:
        return
    try:
        os.makedirs(os.path.dirname(os.path.abspath(K230IMG_DEBUG_LOG_FILE)), exist_ok=True)
        debug_file = logging.handlers.RotatingFileHandler(
            K230IMG_DEBUG_LOG_FILE, maxBytes=1_000_000, backupCount=5, encoding="utf-8"
        )
    except OSError as exc:
        target_logger.warning(f"Failed to initialize debug logging: {exc}")
        return
    debug_file.setLevel(logging.DEBUG)
    debug_file.setFormatter(ColoredFormatter(colored=False))
    target_logger.addHandler(debug_file)
    target_logger.debug(f"k230img {__version__} started: {sys.argv}")
