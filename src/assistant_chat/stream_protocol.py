"""
Assistant stream protocol spoken to the browser client.

Every part is written as a single line ``<code>:<json>\\n``. The first part of
a response is always ``assistant_control_data`` carrying the thread and
message ids, followed by message and text parts forwarded from the run.
"""

import json
import logging
from typing import Any, AsyncIterator, Optional, Tuple

from .schemas import MessageRole

logger = logging.getLogger(__name__)

STREAM_PART_CODES = {
    "text": "0",
    "error": "3",
    "assistant_message": "4",
    "assistant_control_data": "5",
    "data_message": "6",
}
STREAM_PART_NAMES = {code: name for name, code in STREAM_PART_CODES.items()}

# Events after which the run object is final for this stream segment
RUN_RESULT_EVENTS = {
    "thread.run.completed",
    "thread.run.requires_action",
    "thread.run.failed",
    "thread.run.cancelled",
    "thread.run.expired",
    "thread.run.incomplete",
}


class AssistantStreamError(RuntimeError):
    """Raised when the hosted platform reports an error event mid-stream."""


def format_stream_part(name: str, value: Any) -> str:
    """Encode one protocol part as a line of text."""
    code = STREAM_PART_CODES[name]
    return f"{code}:{json.dumps(value, separators=(',', ':'), ensure_ascii=False)}\n"


def parse_stream_part(line: str) -> Tuple[str, Any]:
    """Decode one protocol line back into ``(name, value)``."""
    code, sep, payload = line.rstrip("\n").partition(":")
    if not sep or code not in STREAM_PART_NAMES:
        raise ValueError(f"Invalid stream part: {line!r}")
    return STREAM_PART_NAMES[code], json.loads(payload)


class RunStreamForwarder:
    """Turns run stream events into protocol parts and remembers the run they settle on."""

    def __init__(self):
        self.run: Optional[Any] = None

    async def forward(self, stream_manager) -> AsyncIterator[str]:
        """Forward one run stream segment.

        Parameters
        ----------
        stream_manager : AsyncAssistantStreamManager
            What ``runs.stream`` or ``runs.submit_tool_outputs_stream`` returns.

        Yields
        ------
        str
            Encoded protocol parts.
        """
        self.run = None
        async with stream_manager as stream:
            async for event in stream:
                if event.event == "thread.message.created":
                    yield format_stream_part(
                        "assistant_message",
                        {
                            "id": event.data.id,
                            "role": MessageRole.ASSISTANT.value,
                            "content": [{"type": "text", "text": {"value": ""}}],
                        },
                    )
                elif event.event == "thread.message.delta":
                    for content in event.data.delta.content or []:
                        text = getattr(content, "text", None)
                        if content.type == "text" and text is not None and text.value is not None:
                            yield format_stream_part("text", text.value)
                elif event.event in RUN_RESULT_EVENTS:
                    self.run = event.data
                    logger.debug(f"STREAM: {event.event} for run {event.data.id}")
                elif event.event == "error":
                    raise AssistantStreamError(getattr(event.data, "message", None) or str(event.data))
