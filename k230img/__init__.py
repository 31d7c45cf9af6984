#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG - firmware image builder for the Kendryte K230 boot ROM.

The package turns a compiled ELF executable or a raw binary into a flashable
image in the container format the K230 boot ROM expects. The payload may be
left in plain form (SHA-256 integrity only) or protected by SM4-CBC with an
SM2 signature, or by AES-256-GCM with an RSA-2048 signature.

Library entry points live in :mod:`k230img.pipeline`, the command line tool
in :mod:`k230img.apps.k230img`.
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse
from platformdirs import PlatformDirs


def get_k230img_version() -> Version:
    """Get K230IMG version information.

    :return: Parsed version object.
    """
    from .__version__ import __version__ as k230img_version

    return parse(k230img_version)


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


version = get_k230img_version()

__author__ = "NXP"
__license__ = "BSD-3-Clause"
__version__ = str(version)
__release__ = "beta"


K230IMG_VERSION_BASE = version.base_version
K230IMG_PLATFORM_DIRS = PlatformDirs(
    appauthor="nxp",
    appname="k230img",
    version=K230IMG_VERSION_BASE,
)

K230IMG_YML_INDENT = 2

# The debug log file is opt-in, nothing is written outside the output file unless requested
K230IMG_DEBUG_LOGGING_DISABLED = not value_to_bool(os.environ.get("K230IMG_DEBUG_LOGGING"))
K230IMG_DEBUG_LOG_FILE = os.environ.get(
    "K230IMG_DEBUG_LOG_FILE", os.path.join(K230IMG_PLATFORM_DIRS.user_log_dir, "debug.log")
)
