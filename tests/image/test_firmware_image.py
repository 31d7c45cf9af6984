#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of firmware image assembly."""

import struct

import pytest

from k230img.exceptions import K230ParsingError
from k230img.image import AUTH_MATERIAL_SIZE, EncryptionType, FirmwareImage, NoneScheme


@pytest.mark.parametrize("payload_size", [0, 1, 4, 100, 1000, 4096])
def test_alignment(payload_size: int) -> None:
    image = FirmwareImage(NoneScheme().protect(bytes(payload_size))).export()
    assert len(image) % FirmwareImage.ALIGNMENT == 0
    assert len(image) >= 0x100000 + 8 + 8 + AUTH_MATERIAL_SIZE + payload_size


def test_layout() -> None:
    payload = bytes(4) + b"\xa5" * 1000
    image = FirmwareImage(NoneScheme().protect(payload)).export()
    assert image[:0x100000] == bytes(0x100000)
    assert image[0x100000:0x100008] == b"K230\x00\x00\x00\x00"
    length, scheme_id = struct.unpack_from("<ii", image, 0x100008)
    assert length == 1004
    assert scheme_id == 0
    payload_offset = 0x100010 + AUTH_MATERIAL_SIZE
    assert image[payload_offset : payload_offset + length] == payload
    # 0x100000 + 8 + 8 + 516 + 1004 = 1050112, rounded up to 512
    assert len(image) == 1050112
    assert image[payload_offset + length :] == bytes(len(image) - payload_offset - length)


def test_parse() -> None:
    firmware = FirmwareImage(NoneScheme().protect(b"\x01\x02\x03"))
    parsed = FirmwareImage.parse(firmware.export())
    assert parsed == firmware
    assert parsed.block.encryption == EncryptionType.NONE
    assert parsed.block_offset == 0x100008
    assert "Block offset" in str(parsed)


def test_parse_invalid_magic() -> None:
    image = bytearray(FirmwareImage(NoneScheme().protect(b"\x01")).export())
    image[0x100000] = ord("X")
    with pytest.raises(K230ParsingError):
        FirmwareImage.parse(bytes(image))
