import logging


class StructuredLogFormatter(logging.Formatter):
    """Formatter that renders the ``structured`` payload relay log items carry."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if hasattr(record, "structured"):
            line = f"{line} | {self._format_structured_log(record.structured)}"
        return line

    def _format_structured_log(self, data: dict) -> str:
        log_type = data.get("log_type", "")
        thread_id = data.get("thread_id")

        prefix = f"[{thread_id}] " if thread_id else ""

        formatters = {
            "tool_call": lambda: f"{data.get('tool_name', 'unknown')}({data.get('arguments', '')}) call_id={data.get('call_id', '')}",
            "tool_result": lambda: f"{data.get('tool_name', 'unknown')} executed - returned: {data.get('result', '')}",
            "user_input": lambda: f"{data.get('content', '')} message_id={data.get('message_id', '')}",
            "run_status": lambda: f"{data.get('run_id', 'unknown')} {data.get('status', '')}",
        }

        if log_type in formatters:
            return f"{prefix}{log_type.upper()}: {formatters[log_type]()}"

        return f"{prefix}{data}"


def install_structured_logging(level: int) -> logging.Handler:
    """Attach a stream handler using StructuredLogFormatter to the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredLogFormatter(logging.BASIC_FORMAT))
    logging.basicConfig(level=level, handlers=[handler])
    return handler
