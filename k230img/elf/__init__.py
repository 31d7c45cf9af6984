#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG ELF executable support."""

from k230img.elf.flattener import Section, SectionFlattener, elf_to_bin

__all__ = ["Section", "SectionFlattener", "elf_to_bin"]
