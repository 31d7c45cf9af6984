#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG pytest configuration and shared test fixtures."""

import logging
import os
from typing import Any

import pytest
from cryptography.hazmat.backends.openssl import backend

from tests.cli_runner import CliRunner
from tests.elf_builder import SHF_ALLOC, SHF_EXECINSTR, SHF_WRITE, SHT_NOBITS, ElfBuilder

# Disable RSA key blinding to speed up unit tests in cryptography 37+
# https://github.com/pyca/cryptography/issues/7236
setattr(backend, "_rsa_skip_check_key", True)

os.environ["K230IMG_DEBUG_LOGGING"] = "False"
os.environ["NO_COLOR"] = "1"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Get CLI runner instance for testing.

    :return: CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture(scope="module")
def data_dir(request: Any) -> str:
    """Get test data directory path for the current test module.

    :param request: Pytest request fixture containing test execution context.
    :return: Absolute path to the test data directory.
    """
    logging.debug(f"data_dir for module: {request.fspath}")
    data_path = os.path.join(os.path.dirname(request.fspath), "data")
    logging.debug(f"data_dir: {data_path}")
    return data_path


@pytest.fixture
def simple_elf() -> bytes:
    """ELF with 4-byte .text (13 05 00 00) and 4-byte .data (12 34 56 78) plus .bss."""
    builder = ElfBuilder()
    builder.add_section(
        ".text", bytes.fromhex("13050000"), address=0x8000_0000, flags=SHF_ALLOC | SHF_EXECINSTR
    )
    builder.add_section(
        ".data", bytes.fromhex("12345678"), address=0x8000_1000, flags=SHF_ALLOC | SHF_WRITE
    )
    builder.add_section(
        ".bss", bytes(8), address=0x8000_2000, flags=SHF_ALLOC | SHF_WRITE, sh_type=SHT_NOBITS
    )
    return builder.build()


@pytest.fixture
def simple_elf_file(tmpdir: Any, simple_elf: bytes) -> str:
    """Path to a file with the simple ELF."""
    path = os.path.join(tmpdir, "app.elf")
    with open(path, "wb") as f:
        f.write(simple_elf)
    return path


@pytest.fixture
def raw_file(tmpdir: Any) -> str:
    """Path to a raw firmware binary of 1000 bytes."""
    path = os.path.join(tmpdir, "firmware.bin")
    with open(path, "wb") as f:
        f.write(bytes(range(250)) * 4)
    return path
