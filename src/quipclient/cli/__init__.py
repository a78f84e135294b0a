# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Command line interface (``quip``)."""

from .commands import app, main

__all__ = ["app", "main"]
