#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of payload protection schemes."""

import struct

import pytest

from k230img.crypto.exceptions import K230CryptoError
from k230img.crypto.hash import EnumHashAlgorithm, get_hash
from k230img.crypto.keys import PublicKeyRsa, PublicKeySM2
from k230img.crypto.oscca import sm2_message_digest, sm2_z_digest
from k230img.crypto.symmetric import aes_gcm_decrypt, sm4_cbc_decrypt
from k230img.exceptions import K230KeyError, K230ParsingError, K230ValueError
from k230img.image import (
    AUTH_MATERIAL_SIZE,
    AesRsaScheme,
    CryptoScheme,
    EncryptionType,
    KeyMaterial,
    NoneScheme,
    ProtectedBlock,
    Sm4Sm2Scheme,
)

PAYLOAD = bytes(4) + bytes(range(256)) * 3


@pytest.mark.parametrize(
    "name, encryption",
    [
        ("none", EncryptionType.NONE),
        ("sm4", EncryptionType.SM4),
        ("aes", EncryptionType.AES),
        ("scheme-a", EncryptionType.SM4),
        ("scheme-b", EncryptionType.AES),
        ("AES", EncryptionType.AES),
        ("Scheme-A", EncryptionType.SM4),
    ],
)
def test_encryption_from_name(name: str, encryption: EncryptionType) -> None:
    assert EncryptionType.from_name(name) == encryption


def test_encryption_unknown_name() -> None:
    with pytest.raises(K230KeyError):
        EncryptionType.from_name("des")


@pytest.mark.parametrize(
    "encryption, scheme_class",
    [
        (EncryptionType.NONE, NoneScheme),
        (EncryptionType.SM4, Sm4Sm2Scheme),
        (EncryptionType.AES, AesRsaScheme),
    ],
)
def test_create(encryption: EncryptionType, scheme_class: type) -> None:
    scheme = CryptoScheme.create(encryption)
    assert isinstance(scheme, scheme_class)
    assert scheme.encryption == encryption


@pytest.mark.parametrize("encryption", [EncryptionType.NONE, EncryptionType.SM4, EncryptionType.AES])
def test_deterministic_and_consistent(encryption: EncryptionType) -> None:
    block = CryptoScheme.create(encryption).protect(PAYLOAD)
    assert block.export() == CryptoScheme.create(encryption).protect(PAYLOAD).export()
    assert len(block.auth_material) == AUTH_MATERIAL_SIZE
    exported = block.export()
    length, scheme_id = struct.unpack_from("<ii", exported)
    assert length == len(block.payload)
    assert scheme_id == encryption.tag
    assert len(exported) == 8 + AUTH_MATERIAL_SIZE + length


def test_none_scheme() -> None:
    block = NoneScheme().protect(PAYLOAD)
    assert block.payload == PAYLOAD
    assert block.auth_material[:32] == get_hash(PAYLOAD, EnumHashAlgorithm.SHA256)
    assert block.auth_material[32:] == bytes(AUTH_MATERIAL_SIZE - 32)


def test_none_scheme_has_no_public_key() -> None:
    with pytest.raises(K230CryptoError):
        NoneScheme().public_key_hash()


def test_sm4_scheme() -> None:
    km = KeyMaterial()
    block = Sm4Sm2Scheme(km).protect(PAYLOAD)
    assert len(block.payload) == (len(PAYLOAD) // 16 + 1) * 16
    assert sm4_cbc_decrypt(km.sm4_key, block.payload, km.sm4_iv) == PAYLOAD

    auth = block.auth_material
    assert auth[:4] == struct.pack("<i", len(km.sm2_id))
    assert auth[4 : 4 + len(km.sm2_id)] == km.sm2_id
    assert auth[4 + len(km.sm2_id) : 388] == bytes(388 - 4 - len(km.sm2_id))
    assert auth[388:420] == km.sm2_public_key_x
    assert auth[420:452] == km.sm2_public_key_y

    public_key = PublicKeySM2.from_coordinates(auth[388:420], auth[420:452])
    digest = sm2_message_digest(sm2_z_digest(km.sm2_id, public_key.x, public_key.y), block.payload)
    assert public_key.verify_prehashed(auth[452:], digest)


def test_sm4_scheme_public_key_hash() -> None:
    block = Sm4Sm2Scheme().protect(PAYLOAD)
    expected = get_hash(block.auth_material[:452], EnumHashAlgorithm.SM3)
    assert Sm4Sm2Scheme().public_key_hash() == expected


def test_sm4_scheme_identity_too_long() -> None:
    km = KeyMaterial().replace(sm2_id=b"x" * 385)
    with pytest.raises(K230CryptoError):
        Sm4Sm2Scheme(km).protect(PAYLOAD)


def test_aes_scheme() -> None:
    km = KeyMaterial()
    block = AesRsaScheme(km).protect(PAYLOAD)
    assert len(block.payload) == len(PAYLOAD) + 16
    assert aes_gcm_decrypt(km.aes_key, block.payload, km.aes_iv, km.aes_auth_data) == PAYLOAD

    auth = block.auth_material
    modulus = int.from_bytes(auth[:256], "big")
    exponent = int.from_bytes(auth[256:260], "little")
    assert modulus == km.rsa_modulus
    assert exponent == km.rsa_public_exponent
    public_key = PublicKeyRsa.from_numbers(modulus, exponent)
    assert public_key.verify_signature(auth[260:], block.payload[-16:])


def test_aes_scheme_public_key_hash() -> None:
    block = AesRsaScheme().protect(PAYLOAD)
    expected = get_hash(block.auth_material[:260], EnumHashAlgorithm.SHA256)
    assert AesRsaScheme().public_key_hash() == expected


def test_aes_scheme_invalid_key() -> None:
    km = KeyMaterial().replace(aes_key=bytes(16))
    with pytest.raises(K230CryptoError):
        AesRsaScheme(km).protect(PAYLOAD)


def test_protected_block_invalid_auth_material() -> None:
    with pytest.raises(K230ValueError):
        ProtectedBlock(EncryptionType.NONE, bytes(AUTH_MATERIAL_SIZE - 1), PAYLOAD)


def test_protected_block_parse() -> None:
    block = NoneScheme().protect(PAYLOAD)
    parsed = ProtectedBlock.parse(block.export() + bytes(100))
    assert parsed == block
    assert parsed.encryption == EncryptionType.NONE


@pytest.mark.parametrize(
    "data",
    [
        bytes(10),
        struct.pack("<ii", 0, 7) + bytes(AUTH_MATERIAL_SIZE),
        struct.pack("<ii", 100, 0) + bytes(AUTH_MATERIAL_SIZE),
    ],
)
def test_protected_block_parse_invalid(data: bytes) -> None:
    with pytest.raises(K230ParsingError):
        ProtectedBlock.parse(data)
