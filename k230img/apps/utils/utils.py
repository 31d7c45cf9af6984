#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG application utilities: application error and top level error handling."""

import logging
import sys
from functools import wraps
from typing import Any, Callable, Optional

import click

from k230img import K230IMG_DEBUG_LOG_FILE, K230IMG_DEBUG_LOGGING_DISABLED
from k230img.exceptions import K230Error

logger = logging.getLogger(__name__)


class K230AppError(K230Error):
    """K230IMG application error exception for CLI tools.

    :cvar fmt: Format string template for error message display.
    """

    fmt = "{description}"

    def __init__(self, desc: Optional[str] = None, error_code: int = 1) -> None:
        """Initialize the AppError.

        :param desc: Description to print out on command line, defaults to None
        :param error_code: Error code passed to OS, defaults to 1
        """
        super().__init__(desc)
        self.description = desc
        self.error_code = error_code


def catch_k230_error(function: Callable) -> Callable:
    """Catch and handle K230Error and other exceptions.

    Exit codes of the decorated function:

    - error code carried by :class:`K230AppError` (1 by default)
    - 2 for any other :class:`K230Error`
    - 3 for unexpected exceptions

    The error is printed to stderr, the traceback is logged on debug level.

    :param function: The function to be decorated.
    :return: The decorated function.
    """

    @wraps(function)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            retval = function(*args, **kwargs)
            return retval
        except K230AppError as app_exc:
            if app_exc.description:
                click.echo(f"{app_exc.__class__.__name__}: {app_exc}", err=True)
            if 0 < app_exc.error_code < 256:
                sys.exit(app_exc.error_code)
            sys.exit(1)
        except (AssertionError, K230Error) as k230_exc:
            click.echo(f"{k230_exc.__class__.__name__}: {k230_exc}", err=True)
            logger.debug(str(k230_exc), exc_info=True)
            if not K230IMG_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {K230IMG_DEBUG_LOG_FILE} for more info",
                    fg="yellow",
                    err=True,
                )
            sys.exit(2)
        except (Exception, KeyboardInterrupt) as base_exc:  # pylint: disable=broad-except
            click.echo(f"GENERAL ERROR: {type(base_exc).__name__}: {base_exc}", err=True)
            logger.debug(str(base_exc), exc_info=True)
            sys.exit(3)

    return wrapper
