#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG cryptographic operations module.

Hashing, symmetric ciphers and key wrappers used by the image protection
schemes, built on cryptography and gmssl.
"""
