#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG OSCCA cryptographic algorithms support utilities.

Helpers for the SM2 elliptic curve signature (GB/T 32918) on top of gmssl:
the curve parameters and the signer identity digest ``Z`` that is hashed
together with the message before signing.
"""

from gmssl import sm2

from k230img.crypto.exceptions import K230CryptoError
from k230img.crypto.hash import EnumHashAlgorithm, Hash, get_hash

SM2_COORDINATE_LENGTH = 32

SM2_CURVE_A = bytes.fromhex(sm2.default_ecc_table["a"])
SM2_CURVE_B = bytes.fromhex(sm2.default_ecc_table["b"])
SM2_GENERATOR = bytes.fromhex(sm2.default_ecc_table["g"])


def sm2_entl(identity: bytes) -> bytes:
    """Get the ENTL field: bit length of the signer identity as 2-byte big endian value.

    :param identity: Signer distinguishing identifier.
    :raises K230CryptoError: The identity is too long.
    :return: Two bytes of identity bit length.
    """
    bit_length = len(identity) * 8
    if bit_length > 0xFFFF:
        raise K230CryptoError(f"SM2 identity is too long: {len(identity)} bytes")
    return bit_length.to_bytes(2, "big")


def sm2_z_digest(identity: bytes, public_x: bytes, public_y: bytes) -> bytes:
    """Compute the SM2 signer identity digest Z.

    ``Z = SM3(ENTL || ID || a || b || xG || yG || xA || yA)``

    :param identity: Signer distinguishing identifier.
    :param public_x: X coordinate of the signer public key (32 bytes).
    :param public_y: Y coordinate of the signer public key (32 bytes).
    :raises K230CryptoError: Invalid public key coordinates.
    :return: 32-byte Z digest.
    """
    if len(public_x) != SM2_COORDINATE_LENGTH or len(public_y) != SM2_COORDINATE_LENGTH:
        raise K230CryptoError(
            f"SM2 public key coordinates must be {SM2_COORDINATE_LENGTH} bytes long, "
            f"got {len(public_x)} and {len(public_y)}"
        )
    z_hash = Hash(EnumHashAlgorithm.SM3)
    z_hash.update(sm2_entl(identity))
    z_hash.update(identity)
    z_hash.update(SM2_CURVE_A)
    z_hash.update(SM2_CURVE_B)
    z_hash.update(SM2_GENERATOR)
    z_hash.update(public_x)
    z_hash.update(public_y)
    return z_hash.finalize()


def sm2_message_digest(z_digest: bytes, message: bytes) -> bytes:
    """Compute the SM2 message digest ``e = SM3(Z || M)``.

    :param z_digest: Signer identity digest Z.
    :param message: Message to be signed.
    :return: 32-byte digest to be signed.
    """
    return get_hash(z_digest + message, EnumHashAlgorithm.SM3)
