#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Fixed key material used to protect K230 firmware images.

The defaults are the K230 development keys the boot ROM of an unfused chip
accepts. They can be overridden from a YAML/JSON configuration file.
"""

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable

import yaml
from typing_extensions import Self

from k230img import K230IMG_YML_INDENT
from k230img.exceptions import K230Error, K230ValueError
from k230img.utils.misc import hex_to_bytes, load_configuration, value_to_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyMaterial:
    """Immutable table of key constants for all protection schemes."""

    # Firmware version tag prepended to the payload
    version: bytes = bytes(4)

    # AES-256-GCM
    aes_key: bytes = bytes.fromhex(
        "24501ad384e473963d476edcfe08205237acfd49b5b8f33857f8114e863fec7f"
    )
    aes_iv: bytes = bytes.fromhex("9ff18563b978ec281b3f2794")
    aes_auth_data: bytes = b""

    # RSA-2048
    rsa_modulus: int = int(
        "cea80475324c1dc8347827818da58bac069d3419c614a6ea1ac6a3b510dcd72c"
        "c516954905e9fef908d45e13006adf27d467a7d83c111d1a5df15ef293771aef"
        "b920032a5bb989f8e4f5e1b05093d3f130f984c07a772a3683f4dc6fb28a9681"
        "5b32123ccdd13954f19d5b8b24a103e771a34c328755c65ed64e1924ffd04d30"
        "b2142cc262f6e0048fef6dbc652f21479ea1c4b1d66d28f4d46ef7185e390cbf"
        "a2e02380582f3188bb94ebbf05d31487a09aff01fcbb4cd4bfd1f0a833b38c11"
        "813c84360bb53c7d4481031c40bad8713bb6b835cb08098ed15ba31ee4ba728a"
        "8c8e10f7294e1b4163b7aee57277bfd881a6f9d43e02c6925aa3a043fb7fb78d",
        16,
    )
    rsa_public_exponent: int = 0x260445
    rsa_private_exponent: int = int(
        "0997634c477c1a039d44c810b2aaa3c7862b0b88d3708272e1e15f66fc938970"
        "9f8a11f3ea6a5af7effa2d01c189c50f0d5bcbe3fa272e56cfc4a4e1d388a9dc"
        "d65df8628902556c8b6bb6a641709b5a35dd2622c73d4640bfa1359d0e76e1f2"
        "19f8e33eb9bd0b59ec198eb2fccaae0346bd8b401e12e3c67cb629569c185a2e"
        "0f35a2f741644c1cca5ebb139d77a89a2953fc5e30048c0e619f07c8d21d1e56"
        "b8af07193d0fdf3f49cd49f2ef3138b5138862f1470bd2d16e34a2b9e7777a6c"
        "8c8d4cb94b4e8b5d616cd5393753e7b0f31cc7da559ba8e98d888914e334773b"
        "af498ad88d9631eb5fe32e53a4145bf0ba548bf2b0a50c63f67b14e398a34b0d",
        16,
    )

    # SM4-CBC
    sm4_key: bytes = bytes.fromhex("0123456789abcdeffedcba9876543210")
    sm4_iv: bytes = bytes.fromhex("000102030405060708090a0b0c0d0e0f")

    # SM2 with SM3
    sm2_private_key: bytes = bytes.fromhex(
        "3945208f7b2144b13f36e38ac6d39f95889393692860b51a42fb81ef4df7c5b8"
    )
    sm2_public_key_x: bytes = bytes.fromhex(
        "09f9df311e5421a150dd7d161e4bc5c672179fad1833fc076bb08ff356f35020"
    )
    sm2_public_key_y: bytes = bytes.fromhex(
        "ccea490ce26775a52dc6ea718cc1aa600aed05fbf35e084a6632f6072da9ad13"
    )
    sm2_nonce: bytes = bytes.fromhex(
        "59276e27d506861a16680f3ad9c02dccef3cc1fa3cdbe4ce6d54b80deac1bc21"
    )
    sm2_id: bytes = b"1234567812345678"

    @classmethod
    def _config_fields(cls) -> dict[str, dict[str, tuple[str, Callable[[Any], Any]]]]:
        """Mapping of configuration sections and keys to fields and value converters."""
        return {
            "firmware": {"version_bytes": ("version", hex_to_bytes)},
            "aes": {
                "key": ("aes_key", hex_to_bytes),
                "iv": ("aes_iv", hex_to_bytes),
                "auth_data": ("aes_auth_data", hex_to_bytes),
            },
            "rsa": {
                "modulus": ("rsa_modulus", _hex_to_int),
                "exponent": ("rsa_public_exponent", value_to_int),
                "private_exponent": ("rsa_private_exponent", _hex_to_int),
            },
            "sm4": {
                "key": ("sm4_key", hex_to_bytes),
                "iv": ("sm4_iv", hex_to_bytes),
            },
            "sm2": {
                "private_key": ("sm2_private_key", hex_to_bytes),
                "public_key_x": ("sm2_public_key_x", hex_to_bytes),
                "public_key_y": ("sm2_public_key_y", hex_to_bytes),
                "random_k": ("sm2_nonce", hex_to_bytes),
                "id": ("sm2_id", _identity_to_bytes),
            },
        }

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> Self:
        """Create key material from configuration dictionary.

        Values not present in the configuration keep their defaults, unknown
        sections and keys are ignored.

        :param config: Configuration dictionary.
        :raises K230ValueError: Invalid value in the configuration.
        :return: Key material.
        """
        overrides = {}
        for section_name, section_fields in cls._config_fields().items():
            section = config.get(section_name)
            if section is None:
                continue
            if not isinstance(section, dict):
                raise K230ValueError(f"Configuration section '{section_name}' must be a mapping")
            for key, (field_name, converter) in section_fields.items():
                if key not in section:
                    continue
                try:
                    overrides[field_name] = converter(section[key])
                except K230Error as exc:
                    raise K230ValueError(
                        f"Invalid value of '{section_name}.{key}': {exc.description}"
                    ) from exc
                logger.debug(f"Key material field '{field_name}' overridden by configuration")
        return cls(**overrides)

    @classmethod
    def load(cls, path: str) -> Self:
        """Load key material from YAML or JSON configuration file.

        :param path: Path to the configuration file.
        :raises K230Error: The file can't be loaded or contains invalid values.
        :return: Key material.
        """
        key_material = cls.from_config(load_configuration(path))
        logger.info(f"Key material loaded from {path}")
        return key_material

    def to_config(self) -> dict[str, Any]:
        """Convert key material into configuration dictionary.

        :return: Configuration dictionary accepted by :meth:`from_config`.
        """
        config: dict[str, Any] = {}
        for section_name, section_fields in self._config_fields().items():
            section: dict[str, Any] = {}
            for key, (field_name, _) in section_fields.items():
                value = getattr(self, field_name)
                if field_name == "sm2_id":
                    section[key] = value.decode("utf-8", errors="replace")
                elif field_name == "rsa_public_exponent":
                    section[key] = hex(value)
                elif isinstance(value, int):
                    section[key] = value.to_bytes((value.bit_length() + 7) // 8, "big").hex()
                else:
                    section[key] = value.hex()
            config[section_name] = section
        return config

    @classmethod
    def get_config_template(cls) -> str:
        """Get YAML configuration template filled with the default key material.

        :return: YAML text of the template.
        """
        header = (
            "# K230 image key material configuration.\n"
            "# Binary values are hexadecimal strings, sm2.id is a plain text identity.\n"
            "# Any section or key may be removed to keep its default value.\n"
        )
        return header + yaml.safe_dump(
            cls().to_config(), indent=K230IMG_YML_INDENT, sort_keys=False, width=1000
        )

    def replace(self, **changes: Any) -> Self:
        """Get copy of the key material with some fields changed.

        :param changes: Field names and their new values.
        :return: New key material.
        """
        return dataclasses.replace(self, **changes)


def _hex_to_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise K230ValueError(f"Expected hexadecimal string, got {type(value).__name__}")
    cleaned = re.sub(r"[\s_]", "", value).lower()
    try:
        return int(cleaned[2:] if cleaned.startswith("0x") else cleaned, 16)
    except ValueError as exc:
        raise K230ValueError(f"Invalid hexadecimal value: {value}") from exc


def _identity_to_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    raise K230ValueError(f"Identity must be a string, got {type(value).__name__}")
