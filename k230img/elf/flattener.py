#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""ELF to raw binary conversion.

The loadable sections with file contents are copied into one contiguous blob,
positioned by their offsets in the ELF file. The blob starts at the lowest
section offset and ends at the highest section end; address gaps between the
sections are never materialized, which gives the same result as
``objcopy -O binary`` for a regular linker output.
"""

import logging
import sys
from dataclasses import dataclass, field
from io import BytesIO
from typing import Optional

from elftools.common.exceptions import ELFError
from elftools.elf.constants import SH_FLAGS
from elftools.elf.elffile import ELFFile

from k230img.exceptions import K230ParsingError, K230SizeOverflowError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Section:
    """Description of one ELF section relevant for flattening."""

    name: str
    address: int
    file_offset: int
    file_size: int
    is_loadable: bool
    is_zero_initialized: bool
    data: Optional[bytes] = field(default=None, repr=False)

    @property
    def is_selected(self) -> bool:
        """Section contributes bytes to the flattened binary."""
        return self.is_loadable and not self.is_zero_initialized

    def __str__(self) -> str:
        return (
            f"{self.name or '<unnamed>'}: address {hex(self.address)}, "
            f"offset {hex(self.file_offset)}, size {hex(self.file_size)}"
        )


class SectionFlattener:
    """Flatten loadable ELF sections into a raw binary.

    :param elf_data: Content of the ELF file.
    :raises K230ParsingError: The data is not a well formed ELF file.
    """

    def __init__(self, elf_data: bytes) -> None:
        self.sections = self._load_sections(elf_data)

    @staticmethod
    def _load_sections(elf_data: bytes) -> list[Section]:
        """Parse section headers and resolve their raw file contents.

        :param elf_data: Content of the ELF file.
        :raises K230ParsingError: The data is not a well formed ELF file.
        :return: List of sections in section header order.
        """
        sections = []
        try:
            elf = ELFFile(BytesIO(elf_data))
            for elf_section in elf.iter_sections():
                header = elf_section.header
                offset = header["sh_offset"]
                size = header["sh_size"]
                is_zero_initialized = header["sh_type"] == "SHT_NOBITS"
                data = None
                # the whole file range must be present, otherwise the section has no data
                if not is_zero_initialized and offset + size <= len(elf_data):
                    data = elf_data[offset : offset + size]
                sections.append(
                    Section(
                        name=elf_section.name,
                        address=header["sh_addr"],
                        file_offset=offset,
                        file_size=size,
                        is_loadable=bool(header["sh_flags"] & SH_FLAGS.SHF_ALLOC),
                        is_zero_initialized=is_zero_initialized,
                        data=data,
                    )
                )
        except (ELFError, ValueError, OverflowError) as exc:
            raise K230ParsingError(f"Invalid ELF file: {exc}") from exc
        return sections

    @property
    def selected_sections(self) -> list[tuple[Section, bytes]]:
        """Sections that contribute to the binary with their data, ordered by file offset.

        Sections without resolvable file data are left out.
        """
        selected = []
        for section in self.sections:
            if not section.is_selected:
                continue
            if section.data is None:
                logger.debug(f"Skipping section without file data: {section}")
                continue
            selected.append((section, section.data))
        return sorted(selected, key=lambda item: item[0].file_offset)

    def flatten(self) -> bytes:
        """Create the raw binary from the selected sections.

        Sections are copied in ascending file offset order, so when file ranges
        overlap, the section placed later overwrites the earlier one.

        :raises K230SizeOverflowError: The section span doesn't fit in memory.
        :return: Raw binary, empty if there is no loadable section with contents.
        """
        selected = self.selected_sections
        if not selected:
            logger.info("No loadable sections with contents found")
            return b""

        min_offset = selected[0][0].file_offset
        max_end = max(section.file_offset + len(data) for section, data in selected)
        span = max_end - min_offset
        if span > sys.maxsize:
            raise K230SizeOverflowError(f"Section span {span} is too large to fit in memory")

        output = bytearray(span)
        for section, data in selected:
            logger.debug(f"Section {section}")
            start = section.file_offset - min_offset
            output[start : start + len(data)] = data

        logger.info(f"Flattened {len(selected)} sections into {len(output)} bytes")
        return bytes(output)


def elf_to_bin(elf_data: bytes) -> bytes:
    """Convert ELF file contents into a raw binary.

    :param elf_data: Content of the ELF file.
    :raises K230ParsingError: The data is not a well formed ELF file.
    :raises K230SizeOverflowError: The section span doesn't fit in memory.
    :return: Raw binary.
    """
    return SectionFlattener(elf_data).flatten()
