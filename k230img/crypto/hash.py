#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG cryptographic hash algorithms.

Unified interface over the hash algorithms used by the image protection
schemes: SHA-256 for the plain and AES/RSA images, SM3 for the SM4/SM2 images.
"""

from cryptography.hazmat.primitives import hashes

from k230img.crypto.exceptions import K230CryptoError
from k230img.utils.k230_enum import K230Enum


class EnumHashAlgorithm(K230Enum):
    """Hash algorithm enumeration for cryptographic operations."""

    SHA256 = (1, "sha256", "SHA256")
    SM3 = (5, "sm3", "SM3")


def get_hash_algorithm(algorithm: EnumHashAlgorithm) -> hashes.HashAlgorithm:
    """Get hash algorithm instance for specified algorithm type.

    :param algorithm: Hash algorithm type enumeration value.
    :raises K230CryptoError: If the specified algorithm is not supported.
    :return: Instance of the corresponding hash algorithm class.
    """
    cls_name = algorithm.label.upper()
    algo_cls = getattr(hashes, cls_name, None)  # hack: get class object by name
    if algo_cls is None:
        raise K230CryptoError(f"Unsupported algorithm: hashes.{cls_name}")
    return algo_cls()  # pylint: disable=not-callable


class Hash:
    """Incremental hash computation wrapper."""

    def __init__(self, algorithm: EnumHashAlgorithm = EnumHashAlgorithm.SHA256) -> None:
        """Initialize hash object.

        :param algorithm: Algorithm type enum, defaults to EnumHashAlgorithm.SHA256
        """
        self.hash_obj = hashes.Hash(get_hash_algorithm(algorithm))

    def update(self, data: bytes) -> None:
        """Update the hash object with new data.

        :param data: Binary data to be added to the hash calculation.
        """
        self.hash_obj.update(data)

    def finalize(self) -> bytes:
        """Finalize the hash computation and return the digest.

        :return: The computed hash digest as bytes.
        """
        return self.hash_obj.finalize()


def get_hash(data: bytes, algorithm: EnumHashAlgorithm = EnumHashAlgorithm.SHA256) -> bytes:
    """Compute hash digest from input data using specified algorithm.

    :param data: Input data to be hashed.
    :param algorithm: Hash algorithm to use for computation.
    :raises K230CryptoError: If the specified algorithm is not supported.
    :return: Hash digest as bytes.
    """
    hash_obj = hashes.Hash(get_hash_algorithm(algorithm))
    hash_obj.update(data)
    return hash_obj.finalize()
