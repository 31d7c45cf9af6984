#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Protection schemes of the K230 firmware image payload.

Each scheme takes the versioned payload (version tag followed by the raw
firmware binary) and produces a :class:`ProtectedBlock`: the payload length,
the scheme identifier, 516 bytes of authentication material and the payload
itself, either plain or encrypted.

Supported schemes:

* ``none`` - plain payload, SHA-256 digest as authentication material
* ``sm4`` - SM4-CBC encrypted payload, SM2 signature over SM3 digest
* ``aes`` - AES-256-GCM encrypted payload, RSA-2048 PKCS#1 v1.5 signature of the GCM tag
"""

import logging
import struct
from abc import ABC, abstractmethod
from typing import Optional, Type

from typing_extensions import Self

from k230img.crypto.exceptions import K230CryptoError
from k230img.crypto.hash import EnumHashAlgorithm, get_hash
from k230img.crypto.keys import PrivateKeyRsa, PrivateKeySM2
from k230img.crypto.oscca import SM2_COORDINATE_LENGTH, sm2_message_digest, sm2_z_digest
from k230img.crypto.symmetric import GCM_TAG_LENGTH, aes_gcm_encrypt, sm4_cbc_encrypt
from k230img.exceptions import K230KeyError, K230ParsingError, K230ValueError
from k230img.image.key_material import KeyMaterial
from k230img.utils.abstract import BaseClass
from k230img.utils.k230_enum import K230Enum
from k230img.utils.misc import extend_block

logger = logging.getLogger(__name__)

# Size of the authentication material, the same for every scheme
AUTH_MATERIAL_SIZE = 516
# SM2 identity block: identity length, identity and zero padding
SM2_ID_BLOCK_SIZE = AUTH_MATERIAL_SIZE - 4 * SM2_COORDINATE_LENGTH


class EncryptionType(K230Enum):
    """Payload protection scheme identifiers stored in the image header."""

    NONE = (0, "none", "No encryption, SHA-256 digest")
    SM4 = (1, "sm4", "SM4-CBC encryption, SM2 signature")
    AES = (2, "aes", "AES-256-GCM encryption, RSA-2048 signature")

    @classmethod
    def aliases(cls) -> dict[str, str]:
        """Alternative scheme names accepted on the command line."""
        return {"scheme-a": cls.SM4.label, "scheme-b": cls.AES.label}

    @classmethod
    def from_name(cls, name: str) -> Self:
        """Get encryption type by its label or alias (case-insensitive).

        :param name: Label or alias of the encryption type.
        :raises K230KeyError: Unknown encryption type.
        :return: Encryption type.
        """
        return cls.from_label(cls.aliases().get(name.lower(), name))


class ProtectedBlock(BaseClass):
    """Header, authentication material and payload of the firmware image.

    Binary layout::

        [length: i32 LE][scheme id: i32 LE][auth material: 516 B][payload: length B]
    """

    HEADER_FORMAT = "<ii"
    HEADER_SIZE = struct.calcsize(HEADER_FORMAT)

    def __init__(self, encryption: EncryptionType, auth_material: bytes, payload: bytes) -> None:
        """Constructor of protected block.

        :param encryption: Scheme that produced the block.
        :param auth_material: Scheme specific authentication material.
        :param payload: Plain or encrypted payload.
        :raises K230ValueError: Invalid authentication material size or payload too large.
        """
        if len(auth_material) != AUTH_MATERIAL_SIZE:
            raise K230ValueError(
                f"Authentication material must be {AUTH_MATERIAL_SIZE} bytes long, "
                f"got {len(auth_material)}"
            )
        if len(payload) > 0x7FFF_FFFF:
            raise K230ValueError(f"Payload of {len(payload)} bytes doesn't fit into the header")
        self.encryption = encryption
        self.auth_material = auth_material
        self.payload = payload

    @property
    def length(self) -> int:
        """Length of the payload stored in the header."""
        return len(self.payload)

    def __repr__(self) -> str:
        return f"ProtectedBlock({self.encryption.label}, {self.length} bytes)"

    def __str__(self) -> str:
        return (
            f"Protected block:\n"
            f"  Scheme:  {self.encryption.label} ({self.encryption.description})\n"
            f"  Length:  {self.length}\n"
        )

    def __len__(self) -> int:
        return self.HEADER_SIZE + AUTH_MATERIAL_SIZE + self.length

    def export(self) -> bytes:
        """Export protected block into bytes.

        :return: Binary representation of the block.
        """
        header = struct.pack(self.HEADER_FORMAT, self.length, self.encryption.tag)
        return header + self.auth_material + self.payload

    @classmethod
    def parse(cls, data: bytes) -> Self:
        """Parse protected block from bytes; trailing data behind the payload are ignored.

        :param data: Binary data starting with the block header.
        :raises K230ParsingError: The data are too short or contain an unknown scheme.
        :return: Protected block.
        """
        if len(data) < cls.HEADER_SIZE + AUTH_MATERIAL_SIZE:
            raise K230ParsingError(f"Not enough data for protected block header: {len(data)}")
        length, scheme_id = struct.unpack_from(cls.HEADER_FORMAT, data)
        try:
            encryption = EncryptionType.from_tag(scheme_id)
        except K230KeyError as exc:
            raise K230ParsingError(f"Unknown encryption scheme {scheme_id}") from exc
        payload_offset = cls.HEADER_SIZE + AUTH_MATERIAL_SIZE
        if length < 0 or len(data) < payload_offset + length:
            raise K230ParsingError(f"Invalid payload length {length}")
        return cls(
            encryption=encryption,
            auth_material=data[cls.HEADER_SIZE : payload_offset],
            payload=data[payload_offset : payload_offset + length],
        )


class CryptoScheme(ABC):
    """Base class of the payload protection schemes."""

    encryption: EncryptionType

    def __init__(self, key_material: Optional[KeyMaterial] = None) -> None:
        """Constructor of protection scheme.

        :param key_material: Key material, defaults to the K230 development keys.
        """
        self.key_material = key_material or KeyMaterial()

    @classmethod
    def create(
        cls, encryption: EncryptionType, key_material: Optional[KeyMaterial] = None
    ) -> "CryptoScheme":
        """Create protection scheme instance for given encryption type.

        :param encryption: Encryption type.
        :param key_material: Key material, defaults to the K230 development keys.
        :raises K230KeyError: No scheme for the encryption type.
        :return: Protection scheme.
        """
        schemes: dict[EncryptionType, Type[CryptoScheme]] = {
            EncryptionType.NONE: NoneScheme,
            EncryptionType.SM4: Sm4Sm2Scheme,
            EncryptionType.AES: AesRsaScheme,
        }
        if encryption not in schemes:
            raise K230KeyError(f"Unsupported encryption type: {encryption}")
        return schemes[encryption](key_material)

    @abstractmethod
    def protect(self, payload: bytes) -> ProtectedBlock:
        """Protect the versioned payload.

        :param payload: Version tag followed by the raw firmware binary.
        :raises K230CryptoError: Invalid key material or failing primitive.
        :return: Protected block.
        """

    @abstractmethod
    def public_key_hash(self) -> bytes:
        """Get hash of the public key as programmed into the OTP of a secured chip.

        :raises K230CryptoError: The scheme uses no public key.
        :return: Public key hash.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.encryption.label})"


class NoneScheme(CryptoScheme):
    """Plain payload with SHA-256 digest."""

    encryption = EncryptionType.NONE

    def protect(self, payload: bytes) -> ProtectedBlock:
        """Compute digest of the payload, the payload stays unencrypted.

        :param payload: Version tag followed by the raw firmware binary.
        :return: Protected block.
        """
        logger.info("No encryption, SHA-256 digest")
        digest = get_hash(payload, EnumHashAlgorithm.SHA256)
        logger.debug(f"Digest: {digest.hex()}")
        return ProtectedBlock(
            encryption=self.encryption,
            auth_material=extend_block(digest, AUTH_MATERIAL_SIZE),
            payload=payload,
        )

    def public_key_hash(self) -> bytes:
        raise K230CryptoError("Scheme without encryption has no public key")


class Sm4Sm2Scheme(CryptoScheme):
    """SM4-CBC encrypted payload signed by SM2."""

    encryption = EncryptionType.SM4

    def _id_block(self) -> bytes:
        identity = self.key_material.sm2_id
        if len(identity) > SM2_ID_BLOCK_SIZE - 4:
            raise K230CryptoError(
                f"SM2 identity is too long: {len(identity)} bytes, max {SM2_ID_BLOCK_SIZE - 4}"
            )
        return extend_block(struct.pack("<i", len(identity)) + identity, SM2_ID_BLOCK_SIZE)

    def protect(self, payload: bytes) -> ProtectedBlock:
        """Encrypt the payload with SM4-CBC and sign the ciphertext with SM2.

        The signed digest is ``SM3(Z || ciphertext)``, the signature is made
        with the fixed nonce from the key material.

        :param payload: Version tag followed by the raw firmware binary.
        :raises K230CryptoError: Invalid key material or failing primitive.
        :return: Protected block.
        """
        logger.info("SM4-CBC encryption, SM2 signature")
        km = self.key_material
        ciphertext = sm4_cbc_encrypt(km.sm4_key, payload, km.sm4_iv)
        private_key = PrivateKeySM2.from_numbers(
            km.sm2_private_key, km.sm2_public_key_x, km.sm2_public_key_y
        )
        z_digest = sm2_z_digest(km.sm2_id, km.sm2_public_key_x, km.sm2_public_key_y)
        digest = sm2_message_digest(z_digest, ciphertext)
        signature = private_key.sign_prehashed(digest, km.sm2_nonce)
        logger.debug(f"Z: {z_digest.hex()}")
        logger.debug(f"Digest: {digest.hex()}")
        logger.debug(f"Signature r: {signature[:SM2_COORDINATE_LENGTH].hex()}")
        logger.debug(f"Signature s: {signature[SM2_COORDINATE_LENGTH:].hex()}")
        auth_material = self._id_block() + km.sm2_public_key_x + km.sm2_public_key_y + signature
        return ProtectedBlock(
            encryption=self.encryption, auth_material=auth_material, payload=ciphertext
        )

    def public_key_hash(self) -> bytes:
        """Get SM3 hash of the identity block and public key coordinates.

        :return: 32-byte public key hash.
        """
        km = self.key_material
        if len(km.sm2_public_key_x + km.sm2_public_key_y) != 2 * SM2_COORDINATE_LENGTH:
            raise K230CryptoError("Invalid length of SM2 public key coordinates")
        return get_hash(
            self._id_block() + km.sm2_public_key_x + km.sm2_public_key_y, EnumHashAlgorithm.SM3
        )


class AesRsaScheme(CryptoScheme):
    """AES-256-GCM encrypted payload with RSA-2048 signed authentication tag."""

    encryption = EncryptionType.AES

    def _private_key(self) -> PrivateKeyRsa:
        km = self.key_material
        return PrivateKeyRsa.from_numbers(
            km.rsa_modulus, km.rsa_public_exponent, km.rsa_private_exponent
        )

    def protect(self, payload: bytes) -> ProtectedBlock:
        """Encrypt the payload with AES-GCM and sign the GCM tag with RSA.

        The stored payload is the ciphertext followed by the 16-byte tag.

        :param payload: Version tag followed by the raw firmware binary.
        :raises K230CryptoError: Invalid key material or failing primitive.
        :return: Protected block.
        """
        logger.info("AES-256-GCM encryption, RSA-2048 signature")
        km = self.key_material
        if len(km.aes_key) != 32:
            raise K230CryptoError(f"AES-256 key must be 32 bytes long, got {len(km.aes_key)}")
        encrypted = aes_gcm_encrypt(km.aes_key, payload, km.aes_iv, km.aes_auth_data)
        tag = encrypted[-GCM_TAG_LENGTH:]
        private_key = self._private_key()
        signature = private_key.sign(tag, EnumHashAlgorithm.SHA256)
        public_key = private_key.get_public_key()
        logger.debug(f"Tag: {tag.hex()}")
        logger.debug(f"Signature: {signature.hex()}")
        auth_material = public_key.export_modulus() + public_key.export_exponent() + signature
        return ProtectedBlock(
            encryption=self.encryption, auth_material=auth_material, payload=encrypted
        )

    def public_key_hash(self) -> bytes:
        """Get SHA-256 hash of the modulus and public exponent as stored in the image.

        :return: 32-byte public key hash.
        """
        public_key = self._private_key().get_public_key()
        return get_hash(
            public_key.export_modulus() + public_key.export_exponent(), EnumHashAlgorithm.SHA256
        )
