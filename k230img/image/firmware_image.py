#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230 flashable firmware image.

Layout of the image::

    +--------------------+  0x0
    | zero prefix        |  reserved for the boot ROM
    +--------------------+  0x100000
    | magic (8 B)        |
    +--------------------+  0x100008
    | protected block    |  [length][scheme id][auth material][payload]
    +--------------------+
    | zero padding       |  up to the next multiple of 512 bytes
    +--------------------+
"""

import logging

from typing_extensions import Self

from k230img.exceptions import K230ParsingError
from k230img.image.schemes import ProtectedBlock
from k230img.utils.abstract import BaseClass
from k230img.utils.misc import align_block

logger = logging.getLogger(__name__)


class FirmwareImage(BaseClass):
    """Firmware image assembled from a protected block."""

    ZERO_PREFIX_SIZE = 0x100000
    MAGIC = b"K230\x00\x00\x00\x00"
    ALIGNMENT = 512

    def __init__(self, block: ProtectedBlock) -> None:
        """Constructor of firmware image.

        :param block: Protected block with header, authentication material and payload.
        """
        self.block = block

    @property
    def block_offset(self) -> int:
        """Offset of the protected block in the image."""
        return self.ZERO_PREFIX_SIZE + len(self.MAGIC)

    def __repr__(self) -> str:
        return f"FirmwareImage({self.block!r})"

    def __str__(self) -> str:
        return (
            f"Firmware image:\n"
            f"  Block offset: {hex(self.block_offset)}\n"
            f"  Image size:   {len(self)}\n" + str(self.block)
        )

    def __len__(self) -> int:
        return len(self.export())

    def export(self) -> bytes:
        """Export the firmware image.

        :return: Image bytes, the length is always a multiple of 512.
        """
        image = bytes(self.ZERO_PREFIX_SIZE) + self.MAGIC + self.block.export()
        logger.debug(f"Image magic: {self.MAGIC!r}")
        return align_block(image, self.ALIGNMENT)

    @classmethod
    def parse(cls, data: bytes) -> Self:
        """Parse firmware image.

        Only the layout is parsed, neither the digest nor the signature are checked.

        :param data: Image bytes.
        :raises K230ParsingError: Invalid magic or truncated image.
        :return: Firmware image.
        """
        magic_end = cls.ZERO_PREFIX_SIZE + len(cls.MAGIC)
        magic = data[cls.ZERO_PREFIX_SIZE : magic_end]
        if magic != cls.MAGIC:
            raise K230ParsingError(f"Invalid image magic {magic!r}, expected {cls.MAGIC!r}")
        return cls(ProtectedBlock.parse(data[magic_end:]))
