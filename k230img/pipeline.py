#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Conversion pipeline from ELF or raw binary to K230 firmware image.

The in-memory functions are pure: the same input and key material always give
the same output bytes. The file level functions read one input file, build
the whole output in memory and store it in one atomic write, so no partial
output is left behind when any step fails.
"""

import logging
import os
from typing import Optional

from k230img.elf.flattener import elf_to_bin
from k230img.image.firmware_image import FirmwareImage
from k230img.image.key_material import KeyMaterial
from k230img.image.schemes import CryptoScheme, EncryptionType
from k230img.utils.misc import load_binary, write_file

logger = logging.getLogger(__name__)

IMAGE_EXTENSION = ".img"
BINARY_EXTENSION = ".bin"

__all__ = [
    "default_output_path",
    "elf_to_bin",
    "elf_to_bin_file",
    "elf_to_image",
    "elf_to_image_file",
    "gen_image",
    "gen_image_file",
    "get_versioned_payload",
]


def get_versioned_payload(raw: bytes, key_material: Optional[KeyMaterial] = None) -> bytes:
    """Prepend the firmware version tag to the raw binary.

    :param raw: Raw firmware binary.
    :param key_material: Key material holding the version tag, defaults to K230 development one.
    :return: Versioned payload.
    """
    return (key_material or KeyMaterial()).version + raw


def gen_image(
    raw: bytes,
    encryption: EncryptionType = EncryptionType.NONE,
    key_material: Optional[KeyMaterial] = None,
) -> bytes:
    """Generate firmware image from raw binary.

    :param raw: Raw firmware binary.
    :param encryption: Payload protection scheme.
    :param key_material: Key material, defaults to the K230 development keys.
    :raises K230CryptoError: Invalid key material or failing cryptographic primitive.
    :return: Firmware image bytes.
    """
    key_material = key_material or KeyMaterial()
    logger.info(f"Generating image from {len(raw)} bytes, encryption: {encryption.label}")
    scheme = CryptoScheme.create(encryption, key_material)
    block = scheme.protect(get_versioned_payload(raw, key_material))
    image = FirmwareImage(block).export()
    logger.info(f"Image size: {len(image)} bytes")
    return image


def elf_to_image(
    elf: bytes,
    encryption: EncryptionType = EncryptionType.NONE,
    key_material: Optional[KeyMaterial] = None,
) -> bytes:
    """Generate firmware image directly from ELF file contents.

    The result is identical to :func:`elf_to_bin` followed by :func:`gen_image`.

    :param elf: Content of the ELF file.
    :param encryption: Payload protection scheme.
    :param key_material: Key material, defaults to the K230 development keys.
    :raises K230ParsingError: The data is not a well formed ELF file.
    :raises K230SizeOverflowError: The section span doesn't fit in memory.
    :raises K230CryptoError: Invalid key material or failing cryptographic primitive.
    :return: Firmware image bytes.
    """
    return gen_image(elf_to_bin(elf), encryption, key_material)


def default_output_path(input_path: str, extension: str) -> str:
    """Get output path derived from the input path by replacing its extension.

    :param input_path: Path to the input file.
    :param extension: New extension including the leading dot.
    :return: Output path.
    """
    return os.path.splitext(input_path)[0] + extension


def _store(data: bytes, output_path: str) -> str:
    write_file(data, output_path, mode="wb")
    logger.info(f"Output written to {output_path}")
    return output_path


def gen_image_file(
    input_path: str,
    output_path: Optional[str] = None,
    encryption: EncryptionType = EncryptionType.NONE,
    key_material: Optional[KeyMaterial] = None,
) -> str:
    """Generate firmware image file from raw binary file.

    :param input_path: Path to the raw binary.
    :param output_path: Path to the output image, defaults to input path with ``.img`` extension.
    :param encryption: Payload protection scheme.
    :param key_material: Key material, defaults to the K230 development keys.
    :raises K230Error: Any failure of reading, conversion or writing.
    :return: Path to the written image.
    """
    image = gen_image(load_binary(input_path), encryption, key_material)
    return _store(image, output_path or default_output_path(input_path, IMAGE_EXTENSION))


def elf_to_bin_file(input_path: str, output_path: Optional[str] = None) -> str:
    """Convert ELF file into raw binary file.

    :param input_path: Path to the ELF file.
    :param output_path: Path to the output binary, defaults to input path with ``.bin`` extension.
    :raises K230Error: Any failure of reading, conversion or writing.
    :return: Path to the written binary.
    """
    binary = elf_to_bin(load_binary(input_path))
    return _store(binary, output_path or default_output_path(input_path, BINARY_EXTENSION))


def elf_to_image_file(
    input_path: str,
    output_path: Optional[str] = None,
    encryption: EncryptionType = EncryptionType.NONE,
    key_material: Optional[KeyMaterial] = None,
) -> str:
    """Convert ELF file directly into firmware image file.

    :param input_path: Path to the ELF file.
    :param output_path: Path to the output image, defaults to input path with ``.img`` extension.
    :param encryption: Payload protection scheme.
    :param key_material: Key material, defaults to the K230 development keys.
    :raises K230Error: Any failure of reading, conversion or writing.
    :return: Path to the written image.
    """
    image = elf_to_image(load_binary(input_path), encryption, key_material)
    return _store(image, output_path or default_output_path(input_path, IMAGE_EXTENSION))
