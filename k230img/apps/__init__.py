#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG applications package.

This package contains the command-line application delivered with K230IMG.
"""
