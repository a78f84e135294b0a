# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""User operations."""

from ..executor import ApiRequest, RequestExecutor
from ..models.users import User
from .paths import api_path


class UsersResource:
    def __init__(self, executor: RequestExecutor, api_version: int = 1):
        self._executor = executor
        self._version = api_version

    def get_user(self, id_or_email: str) -> User:
        data = self._executor.execute(
            ApiRequest.get(api_path(self._version, "users", id_or_email))
        )
        return User.model_validate(data)

    def get_current_user(self) -> User:
        data = self._executor.execute(
            ApiRequest.get(api_path(self._version, "users", "current"))
        )
        return User.model_validate(data)

    def get_contacts(self) -> list[User]:
        data = self._executor.execute(
            ApiRequest.get(api_path(self._version, "users", "contacts"))
        )
        return [User.model_validate(u) for u in data or []]


__all__ = ["UsersResource"]
