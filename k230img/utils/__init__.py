#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG utilities package.

Helpers shared by the whole package: binary alignment, file handling,
configuration loading and the tagged enumeration.
"""
