#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG key wrappers for RSA and SM2.

The image signing keys are supplied as raw numbers (RSA modulus, public and
private exponents; SM2 private scalar and public point), so the wrappers are
created from numbers rather than from PEM/DER files.
"""

import logging
from typing import Any, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from gmssl import sm2
from typing_extensions import Self

from k230img.crypto.exceptions import K230CryptoError, K230InvalidKeyType
from k230img.crypto.hash import EnumHashAlgorithm, get_hash_algorithm
from k230img.crypto.oscca import SM2_COORDINATE_LENGTH

logger = logging.getLogger(__name__)


# ===================================================================================================
#
#                                      RSA Key
#
# ===================================================================================================


class PublicKeyRsa:
    """K230IMG RSA Public Key.

    :cvar EXPONENT_LENGTH: Length of the public exponent field in the image header.
    """

    EXPONENT_LENGTH = 4

    key: rsa.RSAPublicKey

    def __init__(self, key: rsa.RSAPublicKey) -> None:
        """Create K230IMG RSA public key wrapper.

        :param key: RSA public key instance.
        """
        self.key = key

    @classmethod
    def from_numbers(cls, n: int, e: int) -> Self:
        """Create RSA public key from modulus and public exponent.

        :param n: Modulus.
        :param e: Public exponent.
        :raises K230InvalidKeyType: The numbers don't form a valid RSA public key.
        :return: RSA public key.
        """
        try:
            return cls(rsa.RSAPublicNumbers(e=e, n=n).public_key())
        except ValueError as exc:
            raise K230InvalidKeyType(f"Invalid RSA public key numbers: {exc}") from exc

    @property
    def n(self) -> int:
        """Public modulus."""
        return self.key.public_numbers().n

    @property
    def e(self) -> int:
        """Public exponent."""
        return self.key.public_numbers().e

    @property
    def key_size(self) -> int:
        """Key size in bits."""
        return self.key.key_size

    def export_modulus(self) -> bytes:
        """Export the modulus in big endian, zero padded to the key size.

        :return: Modulus bytes.
        """
        return self.n.to_bytes(self.key_size // 8, "big")

    def export_exponent(self) -> bytes:
        """Export the public exponent as 4-byte little endian value.

        :raises K230CryptoError: The exponent doesn't fit into 4 bytes.
        :return: Exponent bytes.
        """
        if self.e.bit_length() > self.EXPONENT_LENGTH * 8:
            raise K230CryptoError(f"RSA public exponent {hex(self.e)} doesn't fit into 32 bits")
        return self.e.to_bytes(self.EXPONENT_LENGTH, "little")

    def verify_signature(
        self, signature: bytes, data: bytes, algorithm: EnumHashAlgorithm = EnumHashAlgorithm.SHA256
    ) -> bool:
        """Verify PKCS#1 v1.5 signature of the data.

        :param signature: Signature to verify.
        :param data: Signed data.
        :param algorithm: Hash algorithm used for signing.
        :return: True if the signature is valid, False otherwise.
        """
        try:
            self.key.verify(signature, data, padding.PKCS1v15(), get_hash_algorithm(algorithm))
        except InvalidSignature:
            return False
        return True

    def __repr__(self) -> str:
        return f"RSA{self.key_size} Public Key"

    def __str__(self) -> str:
        return f"RSA{self.key_size} Public key: e({hex(self.e)})"

    def __eq__(self, obj: Any) -> bool:
        return isinstance(obj, PublicKeyRsa) and obj.key.public_numbers() == self.key.public_numbers()


class PrivateKeyRsa:
    """K230IMG RSA Private Key.

    :cvar SUPPORTED_KEY_SIZES: List of supported RSA key sizes in bits.
    """

    SUPPORTED_KEY_SIZES = [2048]

    key: rsa.RSAPrivateKey

    def __init__(self, key: rsa.RSAPrivateKey) -> None:
        """Create K230IMG RSA private key wrapper.

        :param key: RSA private key instance to be wrapped.
        """
        self.key = key

    @classmethod
    def from_numbers(cls, n: int, e: int, d: int) -> Self:
        """Rebuild RSA private key from modulus, public and private exponent.

        The prime factors and CRT coefficients are recovered from ``(n, e, d)``.

        :param n: Modulus.
        :param e: Public exponent.
        :param d: Private exponent.
        :raises K230InvalidKeyType: The numbers don't form a valid RSA key pair.
        :return: RSA private key.
        """
        if n.bit_length() not in cls.SUPPORTED_KEY_SIZES:
            raise K230InvalidKeyType(
                f"Unsupported RSA key size {n.bit_length()}, "
                f"supported: {', '.join(str(size) for size in cls.SUPPORTED_KEY_SIZES)}"
            )
        try:
            p, q = rsa.rsa_recover_prime_factors(n, e, d)
            private_numbers = rsa.RSAPrivateNumbers(
                p=p,
                q=q,
                d=d,
                dmp1=rsa.rsa_crt_dmp1(d, p),
                dmq1=rsa.rsa_crt_dmq1(d, q),
                iqmp=rsa.rsa_crt_iqmp(p, q),
                public_numbers=rsa.RSAPublicNumbers(e=e, n=n),
            )
            return cls(private_numbers.private_key())
        except ValueError as exc:
            raise K230InvalidKeyType(f"Invalid RSA private key numbers: {exc}") from exc

    @property
    def signature_size(self) -> int:
        """Get the size of signature data in bytes."""
        return self.key.key_size // 8

    @property
    def key_size(self) -> int:
        """Key size in bits."""
        return self.key.key_size

    def get_public_key(self) -> PublicKeyRsa:
        """Get public key from RSA private key.

        :return: RSA public key object.
        """
        return PublicKeyRsa(self.key.public_key())

    def sign(self, data: bytes, algorithm: Optional[EnumHashAlgorithm] = None) -> bytes:
        """Sign input data with the private key using PKCS#1 v1.5 padding.

        :param data: Input data to be signed, hashed by ``algorithm`` first.
        :param algorithm: Hash algorithm to use for signing, defaults to SHA256.
        :return: Digital signature as bytes.
        """
        hash_alg = get_hash_algorithm(algorithm or EnumHashAlgorithm.SHA256)
        return self.key.sign(data=data, padding=padding.PKCS1v15(), algorithm=hash_alg)

    def __repr__(self) -> str:
        return f"RSA{self.key_size} Private Key"

    def __str__(self) -> str:
        return f"RSA{self.key_size} Private key: \nd({hex(self.key.private_numbers().d)})"


# ===================================================================================================
#
#                                      SM2 Key
#
# ===================================================================================================


class PublicKeySM2:
    """K230IMG SM2 Public Key."""

    key: sm2.CryptSM2

    def __init__(self, key: sm2.CryptSM2) -> None:
        """Create K230IMG Public Key from SM2 cryptographic key.

        :param key: SM2 cryptographic key instance to wrap.
        :raises K230InvalidKeyType: If the provided key is not an SM2 type.
        """
        if not isinstance(key, sm2.CryptSM2):
            raise K230InvalidKeyType("The input key is not SM2 type")
        self.key = key

    @classmethod
    def from_coordinates(cls, x: bytes, y: bytes) -> Self:
        """Create SM2 public key from affine coordinates.

        :param x: X coordinate, 32 bytes big endian.
        :param y: Y coordinate, 32 bytes big endian.
        :raises K230InvalidKeyType: Invalid coordinate length.
        :return: SM2 public key.
        """
        if len(x) != SM2_COORDINATE_LENGTH or len(y) != SM2_COORDINATE_LENGTH:
            raise K230InvalidKeyType(
                f"SM2 public key coordinates must be {SM2_COORDINATE_LENGTH} bytes long"
            )
        key = sm2.CryptSM2(private_key=None, public_key="")
        # assigned directly, the constructor would strip a leading "04" from the point
        key.public_key = (x + y).hex()
        return cls(key)

    @property
    def x(self) -> bytes:
        """X coordinate of the public point."""
        return bytes.fromhex(self.key.public_key[: self.key.para_len])

    @property
    def y(self) -> bytes:
        """Y coordinate of the public point."""
        return bytes.fromhex(self.key.public_key[self.key.para_len :])

    def verify_prehashed(self, signature: bytes, digest: bytes) -> bool:
        """Verify SM2 signature (r || s) of already computed message digest ``e``.

        :param signature: Raw signature, r and s concatenated.
        :param digest: Message digest ``e = SM3(Z || M)``.
        :return: True if signature is valid, False otherwise.
        """
        return bool(self.key.verify(Sign=signature.hex(), data=digest))

    def __repr__(self) -> str:
        return "SM2 Public Key"

    def __str__(self) -> str:
        return f"SM2 Public key: \nx({self.x.hex()}) \ny({self.y.hex()})"

    def __eq__(self, obj: Any) -> bool:
        return isinstance(obj, PublicKeySM2) and self.key.public_key == obj.key.public_key


class PrivateKeySM2:
    """K230IMG SM2 Private Key.

    The public point is not derived here, it's supplied together with the private
    scalar because both are part of the fixed key material.
    """

    key: sm2.CryptSM2

    def __init__(self, key: sm2.CryptSM2) -> None:
        """Create K230IMG Key with SM2 cryptographic key.

        :param key: SM2 cryptographic key instance to be wrapped.
        :raises K230InvalidKeyType: If the provided key is not of SM2 type.
        """
        if not isinstance(key, sm2.CryptSM2):
            raise K230InvalidKeyType("The input key is not SM2 type")
        self.key = key

    @classmethod
    def from_numbers(cls, private_key: bytes, public_x: bytes, public_y: bytes) -> Self:
        """Create SM2 private key from the private scalar and public point.

        :param private_key: Private scalar, 32 bytes big endian.
        :param public_x: X coordinate of the public point.
        :param public_y: Y coordinate of the public point.
        :raises K230InvalidKeyType: Invalid key length or scalar out of range.
        :return: SM2 private key.
        """
        public_key = PublicKeySM2.from_coordinates(public_x, public_y)
        if len(private_key) != SM2_COORDINATE_LENGTH:
            raise K230InvalidKeyType(
                f"SM2 private key must be {SM2_COORDINATE_LENGTH} bytes long, got {len(private_key)}"
            )
        order = int(sm2.default_ecc_table["n"], base=16)
        if not 0 < int.from_bytes(private_key, "big") < order - 1:
            raise K230InvalidKeyType("SM2 private key is out of the curve order range")
        key = sm2.CryptSM2(private_key=private_key.hex(), public_key="")
        key.public_key = public_key.key.public_key
        return cls(key)

    def get_public_key(self) -> PublicKeySM2:
        """Get public key of this private key.

        :return: Public key object containing the SM2 public key.
        """
        public_key = sm2.CryptSM2(private_key=None, public_key="")
        public_key.public_key = self.key.public_key
        return PublicKeySM2(public_key)

    def sign_prehashed(self, digest: bytes, nonce: bytes) -> bytes:
        """Sign already computed message digest with the given nonce.

        Signing with a fixed nonce gives reproducible signatures, the same
        digest always produces the same (r, s).

        :param digest: Message digest ``e = SM3(Z || M)``.
        :param nonce: Ephemeral scalar k, 32 bytes big endian.
        :raises K230CryptoError: The nonce is invalid or the signature can't be created.
        :return: Raw signature, r and s concatenated (64 bytes).
        """
        order = int(self.key.ecc_table["n"], base=16)
        if len(nonce) != SM2_COORDINATE_LENGTH or not 0 < int.from_bytes(nonce, "big") < order:
            raise K230CryptoError("SM2 signing nonce must be a 32 byte scalar within curve order")
        signature_str = self.key.sign(data=digest, K=nonce.hex())
        if not signature_str:
            raise K230CryptoError("Can't sign data, the nonce gives degenerate signature")
        return bytes.fromhex(signature_str)

    @property
    def signature_size(self) -> int:
        """Get the signature size in bytes (r and s, 32 bytes each)."""
        return 2 * SM2_COORDINATE_LENGTH

    def __repr__(self) -> str:
        return "SM2 Private Key"

    def __str__(self) -> str:
        return f"SM2 Private key: \nd({self.key.private_key})"
