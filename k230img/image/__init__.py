#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230 firmware image: key material, payload protection schemes and image layout."""

from k230img.image.firmware_image import FirmwareImage
from k230img.image.key_material import KeyMaterial
from k230img.image.schemes import (
    AUTH_MATERIAL_SIZE,
    AesRsaScheme,
    CryptoScheme,
    EncryptionType,
    NoneScheme,
    ProtectedBlock,
    Sm4Sm2Scheme,
)

__all__ = [
    "AUTH_MATERIAL_SIZE",
    "AesRsaScheme",
    "CryptoScheme",
    "EncryptionType",
    "FirmwareImage",
    "KeyMaterial",
    "NoneScheme",
    "ProtectedBlock",
    "Sm4Sm2Scheme",
]
