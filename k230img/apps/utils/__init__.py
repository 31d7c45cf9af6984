#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""K230IMG application utilities.

Logging installation, error handling and common click options shared by
the command line applications.
"""
