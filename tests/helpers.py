"""Shared test helpers: fake run stream events and a fake hosted-platform client."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from assistant_chat.stream_protocol import parse_stream_part


class FakeStreamManager:
    """Stands in for the SDK's AsyncAssistantStreamManager."""

    def __init__(self, events):
        self.events = list(events)
        self.entered = False

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for event in self.events:
            yield event


def message_created(message_id: str = "msg_assistant"):
    return SimpleNamespace(event="thread.message.created", data=SimpleNamespace(id=message_id))


def message_delta(text: str):
    content = SimpleNamespace(type="text", text=SimpleNamespace(value=text))
    return SimpleNamespace(
        event="thread.message.delta",
        data=SimpleNamespace(delta=SimpleNamespace(content=[content])),
    )


def tool_call(call_id: str, name: str, arguments: dict | None = None):
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=json.dumps(arguments or {})),
    )


def run_event(status: str, run_id: str = "run_1", tool_calls=None, last_error=None):
    required_action = None
    if tool_calls is not None:
        required_action = SimpleNamespace(
            type="submit_tool_outputs",
            submit_tool_outputs=SimpleNamespace(tool_calls=tool_calls),
        )
    run = SimpleNamespace(
        id=run_id, status=status, required_action=required_action, last_error=last_error
    )
    return SimpleNamespace(event=f"thread.run.{status}", data=run)


def make_client(*segments, thread_id: str = "thread_new", message_id: str = "msg_user"):
    """Build a fake client whose run streams replay ``segments`` in order.

    The first segment answers ``runs.stream``; each following one answers a
    ``runs.submit_tool_outputs_stream`` call.
    """
    client = MagicMock()
    client.beta.threads.create = AsyncMock(return_value=SimpleNamespace(id=thread_id))
    client.beta.threads.messages.create = AsyncMock(return_value=SimpleNamespace(id=message_id))

    managers = [FakeStreamManager(events) for events in segments] or [FakeStreamManager([])]
    client.beta.threads.runs.stream = MagicMock(return_value=managers[0])
    client.beta.threads.runs.submit_tool_outputs_stream = MagicMock(side_effect=managers[1:])
    return client


async def collect_parts(relay, thread_id: str = "thread_1", message_id: str = "msg_user"):
    """Drain ``relay.stream`` and decode every part."""
    return [parse_stream_part(part) async for part in relay.stream(thread_id, message_id)]


def parse_body(text: str):
    return [parse_stream_part(line) for line in text.splitlines() if line]
