# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Base model for API payloads."""

from pydantic import BaseModel, ConfigDict


class QuipModel(BaseModel):
    """
    Base for all response models.

    Fields the client does not know about are kept as-is (opaque passthrough)
    so callers can read them without a library release.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)
