import logging
from typing import AsyncIterator, Awaitable, Callable, Optional, Tuple

from openai import AsyncOpenAI

from .config import Settings
from .schemas import MessageRole, RunStatus
from .stream_protocol import RunStreamForwarder, format_stream_part
from .tool_registry import ToolCall, ToolRegistry

logger = logging.getLogger(__name__)


class RequestCancelled(Exception):
    """Raised when the inbound request went away before the next outbound call."""


class RelayLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that automatically injects thread_id into structured logs."""

    def __init__(self, logger, thread_id=None):
        self.thread_id = thread_id
        super().__init__(logger, {})

    def process(self, msg, kwargs):
        if "extra" in kwargs and "structured" in kwargs["extra"]:
            kwargs["extra"]["structured"]["thread_id"] = self.thread_id
        return msg, kwargs


class Environment:
    """Environment owns the plugin tools and resolves the calls a run is waiting on."""

    def __init__(self, plugins: list, logger: logging.Logger):
        self.plugins = plugins
        self.logger = logger

        self.tool_registry = ToolRegistry()
        for plugin in plugins:
            if hasattr(plugin, "hook_provide_tools"):
                for name, method in plugin.hook_provide_tools().items():
                    self.tool_registry.register_callable(method, name=name)

    def tool_schemas(self) -> list:
        return self.tool_registry.get_schemas()

    def log_item(self, item_type: str, extra: dict):
        structured = {"log_type": item_type, **extra}
        self.logger.info(
            f"{item_type.replace('_', ' ').title()} received", extra={"structured": structured}
        )

    async def resolve_tool_calls(self, tool_calls) -> list:
        """Compute the output for every pending tool call.

        All calls are resolved before anything is returned, so an unknown
        function name aborts the whole batch.
        """
        tool_outputs = []
        for raw_call in tool_calls:
            tool_call = ToolCall.from_openai(raw_call)
            self.log_item(
                "tool_call",
                {
                    "tool_name": tool_call.name,
                    "arguments": tool_call.arguments,
                    "call_id": tool_call.id,
                },
            )
            tool_output = await self.tool_registry.resolve_tool_call(tool_call)
            self.log_item(
                "tool_result", {"tool_name": tool_call.name, "result": tool_output["output"]}
            )
            tool_outputs.append(tool_output)
        return tool_outputs


class AssistantRelay:
    """Relays one user message to a hosted assistant and streams the run back.

    The relay is request scoped: it holds no state beyond the thread it is
    working on. ``is_disconnected`` is polled before each outbound call so an
    abandoned request stops talking to the platform.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        settings: Settings,
        plugins: list,
        is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    ):
        self.client = client
        self.settings = settings
        self.is_disconnected = is_disconnected
        self.logger = RelayLoggerAdapter(logger)
        self.env = Environment(plugins, self.logger)

    async def _check_cancelled(self):
        if self.is_disconnected is not None and await self.is_disconnected():
            raise RequestCancelled("Client disconnected")

    async def start(self, conversation_id: Optional[str], message: str) -> Tuple[str, str]:
        """Ensure a thread exists and append the user message to it.

        Returns
        -------
        tuple
            ``(thread_id, message_id)`` of the thread and the created message.
        """
        await self._check_cancelled()
        thread_id = conversation_id
        if thread_id is None:
            thread = await self.client.beta.threads.create()
            thread_id = thread.id
            self.logger.info(f"Created thread {thread_id}")
        self.logger.thread_id = thread_id

        await self._check_cancelled()
        created_message = await self.client.beta.threads.messages.create(
            thread_id, role=MessageRole.USER.value, content=message
        )
        self.env.log_item("user_input", {"content": message, "message_id": created_message.id})
        return thread_id, created_message.id

    async def stream(self, thread_id: str, message_id: str) -> AsyncIterator[str]:
        """Stream the run as protocol parts.

        The control data part goes out first. Failures inside the run are
        reported as a single error part.
        """
        self.logger.thread_id = thread_id
        yield format_stream_part(
            "assistant_control_data", {"threadId": thread_id, "messageId": message_id}
        )
        try:
            async for part in self._run(thread_id):
                yield part
        except RequestCancelled:
            self.logger.info(f"SYSTEM: Client disconnected, stopping run on thread {thread_id}")
        except Exception as e:
            self.logger.error(f"ERROR: Run on thread {thread_id} failed: {e}")
            yield format_stream_part("error", str(e))

    async def _run(self, thread_id: str) -> AsyncIterator[str]:
        """Run the assistant and serve tool calls until the run stops asking for them."""
        assistant_id = self.settings.require_assistant_id()
        forwarder = RunStreamForwarder()

        await self._check_cancelled()
        async for part in forwarder.forward(
            self.client.beta.threads.runs.stream(thread_id=thread_id, assistant_id=assistant_id)
        ):
            yield part
        run = forwarder.run

        while (
            run is not None
            and run.status == RunStatus.REQUIRES_ACTION.value
            and run.required_action is not None
            and run.required_action.type == "submit_tool_outputs"
        ):
            self._log_run_status(run)
            tool_outputs = await self.env.resolve_tool_calls(
                run.required_action.submit_tool_outputs.tool_calls
            )

            await self._check_cancelled()
            async for part in forwarder.forward(
                self.client.beta.threads.runs.submit_tool_outputs_stream(
                    thread_id=thread_id, run_id=run.id, tool_outputs=tool_outputs
                )
            ):
                yield part
            run = forwarder.run

        if run is None:
            return
        self._log_run_status(run)
        if run.status != RunStatus.COMPLETED.value:
            last_error = getattr(run, "last_error", None)
            yield format_stream_part(
                "data_message",
                {
                    "role": MessageRole.DATA.value,
                    "data": {
                        "description": f"Run {run.status}",
                        "runId": run.id,
                        "status": run.status,
                        "lastError": getattr(last_error, "message", None),
                    },
                },
            )

    def _log_run_status(self, run):
        self.logger.info(
            f"Run {run.id} is {run.status}",
            extra={"structured": {"log_type": "run_status", "run_id": run.id, "status": run.status}},
        )
