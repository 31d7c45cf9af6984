#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Minimal in-memory builder of ELF64 little endian RISC-V files for tests.

Only section headers are produced, the flattening works on sections and
doesn't need program headers.
"""

import struct
from dataclasses import dataclass
from typing import Optional

SHT_NULL = 0
SHT_PROGBITS = 1
SHT_STRTAB = 3
SHT_NOBITS = 8

SHF_WRITE = 0x1
SHF_ALLOC = 0x2
SHF_EXECINSTR = 0x4

EM_RISCV = 243
ET_EXEC = 2

ELF_HEADER_FORMAT = "<16sHHIQQQIHHHHHH"
SECTION_HEADER_FORMAT = "<IIQQQQIIQQ"
ELF_HEADER_SIZE = struct.calcsize(ELF_HEADER_FORMAT)
SECTION_HEADER_SIZE = struct.calcsize(SECTION_HEADER_FORMAT)


@dataclass
class _Section:
    name: str
    data: bytes
    address: int
    flags: int
    sh_type: int
    offset: Optional[int]
    header_offset: Optional[int]
    header_size: Optional[int]
    header_name: Optional[int]


class ElfBuilder:
    """Builder of ELF files with arbitrary sections."""

    def __init__(self) -> None:
        self.sections: list[_Section] = []

    def add_section(
        self,
        name: str,
        data: bytes,
        address: int = 0,
        flags: int = SHF_ALLOC,
        sh_type: int = SHT_PROGBITS,
        offset: Optional[int] = None,
        header_offset: Optional[int] = None,
        header_size: Optional[int] = None,
        header_name: Optional[int] = None,
    ) -> "ElfBuilder":
        """Add section.

        :param name: Section name.
        :param data: Section contents, for NOBITS sections only the length matters.
        :param address: Virtual address.
        :param flags: Section flags.
        :param sh_type: Section type.
        :param offset: File offset where to place the data, appended after previous data if None.
        :param header_offset: Offset written into the section header instead of the real one.
        :param header_size: Size written into the section header instead of the data length.
        :param header_name: Name offset written into the section header instead of the real one.
        :return: The builder itself.
        """
        self.sections.append(
            _Section(
                name, data, address, flags, sh_type, offset, header_offset, header_size, header_name
            )
        )
        return self

    def build(self, shstrtab_offset: Optional[int] = None) -> bytes:
        """Build the ELF file.

        :param shstrtab_offset: Offset written into the name table header instead of the real one.
        """
        body = bytearray(ELF_HEADER_SIZE)
        names = bytearray(b"\x00")
        headers = [struct.pack(SECTION_HEADER_FORMAT, *([0] * 10))]

        for section in self.sections:
            name_offset = len(names)
            names += section.name.encode() + b"\x00"
            if section.sh_type == SHT_NOBITS:
                offset = len(body)
            else:
                offset = len(body) if section.offset is None else section.offset
                if len(body) < offset + len(section.data):
                    body += bytes(offset + len(section.data) - len(body))
                body[offset : offset + len(section.data)] = section.data
            headers.append(
                struct.pack(
                    SECTION_HEADER_FORMAT,
                    name_offset if section.header_name is None else section.header_name,
                    section.sh_type,
                    section.flags,
                    section.address,
                    offset if section.header_offset is None else section.header_offset,
                    len(section.data) if section.header_size is None else section.header_size,
                    0,
                    0,
                    1,
                    0,
                )
            )

        shstrtab_name = len(names)
        names += b".shstrtab\x00"
        names_offset = len(body)
        body += names
        headers.append(
            struct.pack(
                SECTION_HEADER_FORMAT,
                shstrtab_name,
                SHT_STRTAB,
                0,
                0,
                names_offset if shstrtab_offset is None else shstrtab_offset,
                len(names),
                0,
                0,
                1,
                0,
            )
        )

        body += bytes(-len(body) % 8)
        section_headers_offset = len(body)
        for header in headers:
            body += header

        ident = b"\x7fELF" + bytes([2, 1, 1, 0]) + bytes(8)
        body[:ELF_HEADER_SIZE] = struct.pack(
            ELF_HEADER_FORMAT,
            ident,
            ET_EXEC,
            EM_RISCV,
            1,
            self.sections[0].address if self.sections else 0,
            0,
            section_headers_offset,
            0,
            ELF_HEADER_SIZE,
            56,
            0,
            SECTION_HEADER_SIZE,
            len(headers),
            len(headers) - 1,
        )
        return bytes(body)
