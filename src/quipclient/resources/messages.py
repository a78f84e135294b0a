# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Message operations."""

from ..executor import ApiRequest, RequestExecutor
from ..models.messages import Message, MessageFrame
from .paths import api_path


class MessagesResource:
    def __init__(self, executor: RequestExecutor, api_version: int = 1):
        self._executor = executor
        self._version = api_version

    def get_messages_for_thread(self, thread_id: str) -> list[Message]:
        """Messages posted on a thread, newest first."""
        data = self._executor.execute(
            ApiRequest.get(api_path(self._version, "messages", thread_id))
        )
        return [Message.model_validate(m) for m in data or []]

    def add_message_for_thread(
        self,
        thread_id: str,
        frame: MessageFrame,
        content: str,
    ) -> Message:
        data = self._executor.execute(
            ApiRequest.post(
                api_path(self._version, "messages", "new"),
                thread_id=thread_id,
                frame=MessageFrame(frame).value,
                content=content,
            )
        )
        return Message.model_validate(data)


__all__ = ["MessagesResource"]
