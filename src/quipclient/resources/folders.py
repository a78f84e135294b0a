# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Folder operations."""

from ..executor import ApiRequest, RequestExecutor
from ..models.folders import FolderResponse
from .paths import api_path


class FoldersResource:
    def __init__(self, executor: RequestExecutor, api_version: int = 1):
        self._executor = executor
        self._version = api_version

    def get_folder(self, folder_id: str) -> FolderResponse:
        """Fetch a folder with its members and children."""
        data = self._executor.execute(
            ApiRequest.get(api_path(self._version, "folders", folder_id))
        )
        return FolderResponse.model_validate(data)


__all__ = ["FoldersResource"]
