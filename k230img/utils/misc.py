#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG miscellaneous utilities and helper functions.

This module provides helpers shared across the package: alignment of binary
blocks, conversion of user supplied numbers, file loading and atomic file
writing, and loading of YAML/JSON configuration files.
"""

import contextlib
import json
import logging
import os
import re
import tempfile
from enum import Enum
from typing import Optional, Union

import yaml

from k230img.exceptions import K230Error, K230IOError, K230ValueError

logger = logging.getLogger(__name__)


class Endianness(str, Enum):
    """Endianness enumeration for byte order specification.

    :cvar BIG: Big-endian byte order representation.
    :cvar LITTLE: Little-endian byte order representation.
    """

    BIG = "big"
    LITTLE = "little"


def align(number: int, alignment: int = 4) -> int:
    """Align number to specified byte boundary.

    The function aligns the input number up to the nearest multiple of the specified
    alignment value.

    :param number: The number to be aligned (size or address).
    :param alignment: The boundary alignment value, typically a power of 2.
    :return: Aligned number that is always greater than or equal to the input number.
    :raises K230ValueError: When alignment is non-positive or number is negative.
    """
    if alignment <= 0 or number < 0:
        raise K230ValueError("Wrong alignment")

    return (number + (alignment - 1)) // alignment * alignment


def align_block(data: Union[bytes, bytearray], alignment: int = 4, padding: int = 0) -> bytes:
    """Align binary data block length to specified boundary by adding padding bytes to the end.

    :param data: Binary data to be aligned.
    :param alignment: Boundary alignment in bytes (typically 2, 4, 16, 64 or 512).
    :param padding: 8-bit value used for padding, defaults to zero.
    :return: Aligned binary data block.
    :raises K230ValueError: When alignment value is invalid.
    """
    current_size = len(data)
    num_padding = align(current_size, alignment) - current_size
    return bytes(data) + bytes([padding]) * num_padding


def extend_block(data: bytes, length: int, padding: int = 0) -> bytes:
    """Extend binary data block with padding to reach specified length.

    :param data: Binary block to be extended.
    :param length: Requested block length; must be >= current block length.
    :param padding: 8-bit value to be used as padding (default: 0).
    :return: Block extended with padding bytes.
    :raises K230ValueError: When the length is smaller than current block length.
    """
    current_len = len(data)
    if length < current_len:
        raise K230ValueError(f"Incorrect length {length}, the block has already {current_len} bytes")
    return data + bytes([padding]) * (length - current_len)


def value_to_int(value: Union[bytes, bytearray, int, str], default: Optional[int] = None) -> int:
    """Convert value from multiple formats to integer.

    Supports conversion from integers, bytes (big endian) and string representations
    (binary, octal, decimal, and hexadecimal formats with optional prefixes).

    :param value: Input value to convert (int, bytes, bytearray, or str).
    :param default: Default value returned when conversion fails.
    :return: Converted integer value.
    :raises K230ValueError: Unsupported input type or invalid conversion without default.
    """
    if isinstance(value, int):
        return value

    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, Endianness.BIG.value)

    if isinstance(value, str) and value != "":
        match = re.match(
            r"(?P<prefix>0[box])?(?P<number>[0-9a-f_]+)$",
            value.strip().lower(),
        )
        if match:
            base = {"0b": 2, "0o": 8, "0x": 16, None: 10}[match.group("prefix")]
            try:
                return int(match.group("number"), base=base)
            except ValueError:
                pass

    if default is not None:
        return default
    raise K230ValueError(f"Invalid input number type({type(value)}) with value ({value})")


def hex_to_bytes(value: Union[str, bytes]) -> bytes:
    """Convert hexadecimal string into bytes.

    Whitespace, underscores and an optional ``0x`` prefix are ignored.

    :param value: Hexadecimal string (or bytes that are returned as is).
    :raises K230ValueError: The string is not a valid hexadecimal representation.
    :return: Converted bytes.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise K230ValueError(f"Expected hexadecimal string, got {type(value).__name__}")
    cleaned = re.sub(r"[\s_]", "", value)
    if cleaned.lower().startswith("0x"):
        cleaned = cleaned[2:]
    try:
        return bytes.fromhex(cleaned)
    except ValueError as exc:
        raise K230ValueError(f"Invalid hexadecimal value: {value}") from exc


def load_file(path: str, mode: str = "r") -> Union[str, bytes]:
    """Load file content from specified path.

    :param path: Path to the file to be loaded.
    :param mode: File reading mode, 'r' for text or 'rb' for binary.
    :raises K230IOError: The file can't be read or decoded as UTF-8 text.
    :return: File content as string (text mode) or bytes (binary mode).
    """
    logger.debug(f"Loading {'binary' if 'b' in mode else 'text'} file from {path}")
    encoding = None if "b" in mode else "utf-8"
    try:
        with open(path, mode, encoding=encoding) as f:
            return f.read()
    except OSError as exc:
        raise K230IOError(f"Can't read file '{path}': {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise K230IOError(f"Can't decode file '{path}' as UTF-8 text: {exc.reason}") from exc


def load_binary(path: str) -> bytes:
    """Load binary file into bytes.

    :param path: Path to the binary file to load.
    :return: Content of the binary file as bytes.
    """
    data = load_file(path, mode="rb")
    assert isinstance(data, bytes)
    return data


def load_text(path: str) -> str:
    """Load text file content into string.

    :param path: Path to the text file to load.
    :return: Content of the text file as string.
    """
    text = load_file(path, mode="r")
    assert isinstance(text, str)
    return text


def write_file(
    data: Union[str, bytes],
    path: str,
    mode: str = "w",
    encoding: str = "utf-8",
) -> int:
    """Write data to a file in one atomic step.

    Parent directories are created when missing. The data are first stored in
    a temporary file next to the target and then moved over the target, so the
    target is never left partially written.

    :param data: Data to write to the file.
    :param path: Path to the target file.
    :param mode: File writing mode ('w' for text, 'wb' for binary), defaults to 'w'.
    :param encoding: Text encoding ('ascii', 'utf-8'), defaults to 'utf-8'.
    :raises K230IOError: The file can't be written.
    :return: Number of characters or bytes written to the file.
    """
    folder = os.path.dirname(os.path.abspath(path))
    logger.debug(f"Storing {'binary' if 'b' in mode else 'text'} file at {path}")
    tmp_path = None
    try:
        os.makedirs(folder, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=folder
        )
        with open(fd, mode, encoding=None if "b" in mode else encoding) as f:
            written = f.write(data)
        # mkstemp creates the file readable by the owner only
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
        tmp_path = None
        return written
    except OSError as exc:
        raise K230IOError(f"Can't write file '{path}': {exc.strerror or exc}") from exc
    finally:
        if tmp_path is not None:
            with contextlib.suppress(OSError):
                os.remove(tmp_path)


def load_configuration(path: str) -> dict:
    """Load configuration from YAML or JSON file.

    The method attempts to parse the file content as JSON first, then falls back
    to YAML parsing if JSON parsing fails.

    :param path: Path to configuration file (relative or absolute).
    :raises K230Error: When file cannot be loaded, parsed, or contains invalid format.
    :return: Content of configuration as dictionary.
    """
    try:
        config = load_text(path)
    except K230Error as exc:
        raise K230Error(f"Can't load configuration file: {exc.description}") from exc

    config_data: Optional[dict] = None
    try:
        config_data = json.loads(config)
    except json.JSONDecodeError:
        try:
            config_data = yaml.safe_load(config)
        except (yaml.YAMLError, UnicodeDecodeError):
            pass

    if not config_data:
        raise K230Error(f"Can't parse configuration file: {path}")
    if not isinstance(config_data, dict):
        raise K230Error(f"Invalid configuration file: {path}")

    return config_data
