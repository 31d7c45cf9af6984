#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG cryptographic exceptions module."""

from k230img.exceptions import K230Error


class K230CryptoError(K230Error):
    """General K230IMG Crypto Error.

    Raised when key material is malformed or when an encryption, hashing or
    signing primitive rejects its input.
    """


class K230InvalidKeyType(K230CryptoError):
    """Invalid key type or key data that can't be turned into a key."""
