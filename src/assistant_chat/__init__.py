"""
Assistant Chat - a demo chat relay for a hosted assistant.

This package relays browser messages to an assistant run, streams the reply
back, and answers the stock tool calls the assistant makes along the way.
"""

__version__ = "0.1.0"

from .assistant import AssistantRelay, Environment
from .plugins.stock_plugin import StockPlugin
from .tool_registry import ToolRegistry, UnknownToolError, callable_to_tool_schema

__all__ = [
    "AssistantRelay",
    "Environment",
    "StockPlugin",
    "ToolRegistry",
    "UnknownToolError",
    "callable_to_tool_schema",
]
