#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230 firmware image tool."""

import logging
import sys
from typing import Optional

import click

from k230img import pipeline
from k230img.apps.utils import k230_logger
from k230img.apps.utils.common_cli_options import (
    k230img_apps_common_options,
    k230img_config_option,
    k230img_encryption_option,
    k230img_input_option,
    k230img_output_option,
)
from k230img.apps.utils.utils import catch_k230_error
from k230img.image.key_material import KeyMaterial
from k230img.image.schemes import CryptoScheme, EncryptionType
from k230img.utils.misc import write_file

logger = logging.getLogger(__name__)


def get_key_material(config: Optional[str]) -> KeyMaterial:
    """Get key material from configuration file or the default one.

    :param config: Path to the configuration file, None for the K230 development keys.
    :return: Key material.
    """
    if config:
        return KeyMaterial.load(config)
    logger.debug("Using default K230 development key material")
    return KeyMaterial()


@click.group(name="k230img", no_args_is_help=True)
@k230img_apps_common_options
def main(log_level: int) -> None:
    """K230 firmware image tool.

    Convert RISC-V ELF executables and raw binaries into K230 flashable images,
    optionally encrypted and signed.
    """
    k230_logger.install(level=log_level)


@main.command(name="gen-image", no_args_is_help=True)
@k230img_input_option(help="Path to the raw firmware binary.")
@k230img_output_option(
    required=False, help="Path to the output image, defaults to input path with .img extension."
)
@k230img_encryption_option()
@k230img_config_option(required=False)
def gen_image_command(
    input_file: str, output: Optional[str], encryption: EncryptionType, config: Optional[str]
) -> None:
    """Generate firmware image from raw binary."""
    path = pipeline.gen_image_file(input_file, output, encryption, get_key_material(config))
    click.echo(f"Success. Firmware image has been created: {path}")


@main.command(name="bin-extract", no_args_is_help=True)
@k230img_input_option(help="Path to the ELF executable.")
@k230img_output_option(
    required=False, help="Path to the output binary, defaults to input path with .bin extension."
)
def bin_extract_command(input_file: str, output: Optional[str]) -> None:
    """Extract loadable sections of ELF executable into raw binary."""
    path = pipeline.elf_to_bin_file(input_file, output)
    click.echo(f"Success. Raw binary has been created: {path}")


@main.command(name="elf-to-image", no_args_is_help=True)
@k230img_input_option(help="Path to the ELF executable.")
@k230img_output_option(
    required=False, help="Path to the output image, defaults to input path with .img extension."
)
@k230img_encryption_option()
@k230img_config_option(required=False)
def elf_to_image_command(
    input_file: str, output: Optional[str], encryption: EncryptionType, config: Optional[str]
) -> None:
    """Convert ELF executable directly into firmware image."""
    path = pipeline.elf_to_image_file(input_file, output, encryption, get_key_material(config))
    click.echo(f"Success. Firmware image has been created: {path}")


@main.command(name="get-template", no_args_is_help=True)
@k230img_output_option(help="Path to the YAML configuration template.")
def get_template_command(output: str) -> None:
    """Create key material configuration template with the K230 development keys."""
    write_file(KeyMaterial.get_config_template(), output)
    click.echo(f"The configuration template file has been created: {output}")


@main.command(name="pubkey-hash", no_args_is_help=True)
@k230img_encryption_option(
    default=None, help="Payload protection scheme whose public key is hashed."
)
@k230img_config_option(required=False)
def pubkey_hash_command(encryption: EncryptionType, config: Optional[str]) -> None:
    """Print hash of the public key to be programmed into OTP."""
    scheme = CryptoScheme.create(encryption, get_key_material(config))
    click.echo(scheme.public_key_hash().hex())


@catch_k230_error
def safe_main() -> None:
    """Call the main function."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()
