#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of RSA and SM2 key wrappers."""

import pytest

from k230img.crypto.exceptions import K230CryptoError, K230InvalidKeyType
from k230img.crypto.keys import PrivateKeyRsa, PrivateKeySM2, PublicKeyRsa, PublicKeySM2
from k230img.image.key_material import KeyMaterial


@pytest.fixture(scope="module")
def rsa_key() -> PrivateKeyRsa:
    km = KeyMaterial()
    return PrivateKeyRsa.from_numbers(km.rsa_modulus, km.rsa_public_exponent, km.rsa_private_exponent)


def test_rsa_from_numbers(rsa_key: PrivateKeyRsa) -> None:
    km = KeyMaterial()
    assert rsa_key.key_size == 2048
    assert rsa_key.signature_size == 256
    public_key = rsa_key.get_public_key()
    assert public_key.n == km.rsa_modulus
    assert public_key.e == km.rsa_public_exponent
    assert public_key == PublicKeyRsa.from_numbers(km.rsa_modulus, km.rsa_public_exponent)


def test_rsa_export(rsa_key: PrivateKeyRsa) -> None:
    public_key = rsa_key.get_public_key()
    modulus = public_key.export_modulus()
    assert len(modulus) == 256
    assert int.from_bytes(modulus, "big") == KeyMaterial().rsa_modulus
    assert public_key.export_exponent() == bytes.fromhex("45042600")


def test_rsa_sign_verify(rsa_key: PrivateKeyRsa) -> None:
    signature = rsa_key.sign(b"data")
    assert len(signature) == 256
    # PKCS#1 v1.5 signatures are deterministic
    assert rsa_key.sign(b"data") == signature
    public_key = rsa_key.get_public_key()
    assert public_key.verify_signature(signature, b"data")
    assert not public_key.verify_signature(signature, b"other data")


def test_rsa_unsupported_size() -> None:
    km = KeyMaterial()
    with pytest.raises(K230InvalidKeyType):
        PrivateKeyRsa.from_numbers(km.rsa_modulus >> 1024, km.rsa_public_exponent, 3)


def test_rsa_mismatched_exponents() -> None:
    km = KeyMaterial()
    with pytest.raises(K230InvalidKeyType):
        PrivateKeyRsa.from_numbers(km.rsa_modulus, 65537, km.rsa_private_exponent)


def test_rsa_exponent_too_large() -> None:
    public_key = PublicKeyRsa.from_numbers(KeyMaterial().rsa_modulus, 2**33 + 1)
    with pytest.raises(K230CryptoError):
        public_key.export_exponent()


def test_sm2_coordinates() -> None:
    km = KeyMaterial()
    public_key = PublicKeySM2.from_coordinates(km.sm2_public_key_x, km.sm2_public_key_y)
    assert public_key.x == km.sm2_public_key_x
    assert public_key.y == km.sm2_public_key_y
    private_key = PrivateKeySM2.from_numbers(
        km.sm2_private_key, km.sm2_public_key_x, km.sm2_public_key_y
    )
    assert private_key.get_public_key() == public_key
    assert private_key.signature_size == 64


@pytest.mark.parametrize(
    "private_key",
    [bytes(32), b"\x01" * 31, b"\xff" * 32],
)
def test_sm2_invalid_private_key(private_key: bytes) -> None:
    km = KeyMaterial()
    with pytest.raises(K230InvalidKeyType):
        PrivateKeySM2.from_numbers(private_key, km.sm2_public_key_x, km.sm2_public_key_y)


@pytest.mark.parametrize("nonce", [bytes(32), b"\xff" * 32, bytes(31)])
def test_sm2_invalid_nonce(nonce: bytes) -> None:
    km = KeyMaterial()
    private_key = PrivateKeySM2.from_numbers(
        km.sm2_private_key, km.sm2_public_key_x, km.sm2_public_key_y
    )
    with pytest.raises(K230CryptoError):
        private_key.sign_prehashed(bytes(32), nonce)
