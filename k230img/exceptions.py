#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG exception classes.

Every failure raised by the library derives from :class:`K230Error`, so that
callers (and the command line tool) can handle the whole family at once.
Skipping an ELF section without resolvable data is not an error and has no
class here.
"""

from typing import Optional

#######################################################################
# # K230 image tool Exceptions
#######################################################################


class K230Error(Exception):
    """K230IMG Base Exception.

    Base exception class for all errors raised by the image tool. The message
    is rendered through the ``fmt`` template.

    :cvar fmt: Default error message format template.
    """

    fmt = "K230IMG: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base K230IMG Exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        """Return string representation of the exception.

        :return: Formatted exception message as string.
        """
        return self.fmt.format(description=self.description or "Unknown Error")


class K230KeyError(K230Error, KeyError):
    """K230IMG Key Error exception for missing or unknown keys and labels."""


class K230ValueError(K230Error, ValueError):
    """K230IMG standard value error exception."""


class K230IOError(K230Error, IOError):
    """K230IMG standard IO error exception.

    Raised when an input file can't be read or an output file can't be written.
    """


class K230ParsingError(K230Error):
    """K230IMG parsing error exception.

    Raised when an executable container (ELF) or a firmware image is malformed
    and can't be parsed.
    """


class K230SizeOverflowError(K230Error, OverflowError):
    """K230IMG size overflow exception.

    Raised when the file span covered by the loadable sections is too large to
    be materialized in memory on the host.
    """
