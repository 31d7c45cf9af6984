#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG symmetric cryptography utilities.

SM4 in CBC mode with PKCS#7 padding and AES in GCM mode, the two ciphers the
K230 boot ROM is able to decrypt.
"""

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, aead, algorithms, modes

from k230img.crypto.exceptions import K230CryptoError

GCM_NONCE_LENGTH = 12
GCM_TAG_LENGTH = 16


def _check_sm4_parameters(key: bytes, iv_data: bytes) -> None:
    if len(key) * 8 not in algorithms.SM4.key_sizes:
        raise K230CryptoError(
            "The key must be a valid SM4 key length: "
            f"{', '.join([str(k) for k in algorithms.SM4.key_sizes])} bits"
        )
    if len(iv_data) * 8 != algorithms.SM4.block_size:
        raise K230CryptoError(
            f"The initial vector length must be {algorithms.SM4.block_size // 8} Bytes long"
        )


def sm4_cbc_encrypt(key: bytes, plain_data: bytes, iv_data: bytes) -> bytes:
    """Encrypt plain data with SM4 in CBC mode.

    The input data are padded with PKCS#7 padding to the cipher block size
    before encryption, so a full block of padding is added to block-aligned data.

    :param key: The key for SM4 encryption (16 bytes).
    :param plain_data: Input data to be encrypted.
    :param iv_data: Initialization vector data (16 bytes).
    :raises K230CryptoError: Invalid key length, IV length or unsupported cipher.
    :return: Encrypted data.
    """
    _check_sm4_parameters(key, iv_data)
    padder = padding.PKCS7(algorithms.SM4.block_size).padder()
    padded_data = padder.update(plain_data) + padder.finalize()
    try:
        cipher = Cipher(algorithms.SM4(key), modes.CBC(iv_data))
    except UnsupportedAlgorithm as exc:
        raise K230CryptoError(f"SM4 cipher is not supported by the crypto backend: {exc}") from exc
    enc = cipher.encryptor()
    return enc.update(padded_data) + enc.finalize()


def sm4_cbc_decrypt(key: bytes, encrypted_data: bytes, iv_data: bytes) -> bytes:
    """Decrypt encrypted data with SM4 in CBC mode and remove the PKCS#7 padding.

    :param key: The key for data decryption.
    :param encrypted_data: Input data to be decrypted.
    :param iv_data: Initialization vector data.
    :raises K230CryptoError: Invalid key length, IV length or padding.
    :return: Decrypted data.
    """
    _check_sm4_parameters(key, iv_data)
    try:
        cipher = Cipher(algorithms.SM4(key), modes.CBC(iv_data))
        dec = cipher.decryptor()
        padded_data = dec.update(encrypted_data) + dec.finalize()
        unpadder = padding.PKCS7(algorithms.SM4.block_size).unpadder()
        return unpadder.update(padded_data) + unpadder.finalize()
    except (UnsupportedAlgorithm, ValueError) as exc:
        raise K230CryptoError(f"SM4-CBC decryption failed: {exc}") from exc


def aes_gcm_encrypt(
    key: bytes, plain_data: bytes, init_vector: bytes, associated_data: bytes = b""
) -> bytes:
    """Encrypt plain data with AES in GCM mode (Galois/Counter Mode).

    The 16-byte authentication tag is appended to the encrypted data.

    :param key: The AES encryption key (must be 128, 192, or 256 bits).
    :param plain_data: Input data to be encrypted.
    :param init_vector: Initialization vector (nonce), 12 bytes.
    :param associated_data: Additional authenticated data that remains unencrypted.
    :raises K230CryptoError: Invalid key length or initialization vector length.
    :return: Encrypted data with authentication tag appended.
    """
    if len(key) * 8 not in algorithms.AES.key_sizes:
        raise K230CryptoError(
            "The key must be a valid AES key length: "
            f"{', '.join([str(k) for k in sorted(algorithms.AES.key_sizes)])} bits"
        )
    if len(init_vector) != GCM_NONCE_LENGTH:
        raise K230CryptoError(f"The initial vector length must be {GCM_NONCE_LENGTH} Bytes long")

    aesgcm = aead.AESGCM(key)
    return aesgcm.encrypt(init_vector, plain_data, associated_data)


def aes_gcm_decrypt(
    key: bytes,
    encrypted_data: bytes,
    init_vector: bytes,
    associated_data: bytes = b"",
) -> bytes:
    """Decrypt encrypted data with AES in GCM mode (Galois/Counter Mode).

    :param key: The key for data decryption (16, 24, or 32 bytes for AES-128/192/256)
    :param encrypted_data: Input data with authentication tag appended
    :param init_vector: Initialization vector (nonce) - must be exactly 12 bytes
    :param associated_data: Associated data - unencrypted but authenticated data
    :raises K230CryptoError: Invalid key length, IV length, or authentication failure
    :return: Decrypted data as bytes
    """
    if len(key) * 8 not in algorithms.AES.key_sizes:
        raise K230CryptoError(
            "The key must be a valid AES key length: "
            f"{', '.join([str(k) for k in sorted(algorithms.AES.key_sizes)])} bits"
        )
    if len(init_vector) != GCM_NONCE_LENGTH:
        raise K230CryptoError(f"The initial vector length must be {GCM_NONCE_LENGTH} Bytes long")
    aesgcm = aead.AESGCM(key)
    try:
        return aesgcm.decrypt(init_vector, encrypted_data, associated_data)
    except InvalidTag as exc:
        raise K230CryptoError("AES-GCM decryption failed: authentication tag mismatch") from exc
