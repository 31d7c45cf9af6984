#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of key material configuration."""

import json
import os
from typing import Any

import pytest
import yaml

from k230img.exceptions import K230Error, K230ValueError
from k230img.image import KeyMaterial


def test_defaults() -> None:
    km = KeyMaterial()
    assert km.version == bytes(4)
    assert len(km.aes_key) == 32
    assert len(km.aes_iv) == 12
    assert km.rsa_modulus.bit_length() == 2048
    assert km.rsa_public_exponent == 0x260445
    assert len(km.sm4_key) == 16
    assert km.sm2_id == b"1234567812345678"


def test_immutable() -> None:
    km = KeyMaterial()
    with pytest.raises(AttributeError):
        km.aes_key = bytes(32)  # type: ignore[misc]
    assert km.replace(aes_key=bytes(32)).aes_key == bytes(32)
    assert km.aes_key != bytes(32)


def test_from_config() -> None:
    km = KeyMaterial.from_config(
        {
            "firmware": {"version_bytes": "0x01000000"},
            "aes": {"key": "00" * 32},
            "rsa": {"exponent": 65537},
            "sm2": {"id": "ALICE123@YAHOO.COM"},
            "unknown": {"key": "value"},
        }
    )
    assert km.version == b"\x01\x00\x00\x00"
    assert km.aes_key == bytes(32)
    assert km.rsa_public_exponent == 65537
    assert km.sm2_id == b"ALICE123@YAHOO.COM"
    assert km.sm4_key == KeyMaterial().sm4_key


@pytest.mark.parametrize(
    "config",
    [
        {"aes": "not a mapping"},
        {"aes": {"key": "not hex"}},
        {"rsa": {"modulus": "xyz"}},
    ],
)
def test_from_config_invalid(config: dict[str, Any]) -> None:
    with pytest.raises(K230ValueError):
        KeyMaterial.from_config(config)


def test_to_config_round_trip() -> None:
    km = KeyMaterial()
    assert KeyMaterial.from_config(km.to_config()) == km


def test_template(tmpdir: Any) -> None:
    template = KeyMaterial.get_config_template()
    assert template.startswith("#")
    config = yaml.safe_load(template)
    assert set(config) == {"firmware", "aes", "rsa", "sm4", "sm2"}
    path = os.path.join(tmpdir, "keys.yaml")
    with open(path, "w") as f:
        f.write(template)
    assert KeyMaterial.load(path) == KeyMaterial()


def test_load_json(tmpdir: Any) -> None:
    path = os.path.join(tmpdir, "keys.json")
    with open(path, "w") as f:
        json.dump({"sm4": {"key": "ff" * 16}}, f)
    assert KeyMaterial.load(path).sm4_key == b"\xff" * 16


def test_load_missing_file(tmpdir: Any) -> None:
    with pytest.raises(K230Error):
        KeyMaterial.load(os.path.join(tmpdir, "missing.yaml"))
