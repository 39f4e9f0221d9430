"""
Main entry point for the Assistant Chat application.

This module provides the entry point for running the chat application.
Can be called with: python -m assistant_chat

Automatically opens the app in your browser once the server is reachable.
Disable with --no-open or ASSISTANT_CHAT_NO_BROWSER=1.
"""

import argparse
import json
import logging
import os
import threading
import time
import urllib.error
import urllib.request
import webbrowser

import uvicorn

from .app import app, tool_schemas
from .config import get_settings
from .log_format import install_structured_logging

logger = logging.getLogger(__name__)


def _open_when_ready(url: str, timeout: float = 15.0, interval: float = 0.2):
    """Open the browser once the server answers (best-effort)."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with urllib.request.urlopen(url, timeout=1):
                pass
        except (urllib.error.URLError, TimeoutError, ConnectionError):
            time.sleep(interval)
            continue
        try:
            webbrowser.open(url, new=1)
        except webbrowser.Error as e:
            logger.warning(f"SYSTEM: Could not open a browser: {e}")
        return


def main():
    """Main entry point for the Assistant Chat application."""
    parser = argparse.ArgumentParser(
        description="Assistant Chat - stream a hosted assistant into the browser"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Interface to bind the server to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to run the server on (default: 8000)",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Do not automatically open the browser",
    )
    parser.add_argument(
        "--print-tools",
        action="store_true",
        help="Print the tool definitions to configure on the assistant and exit",
    )
    args = parser.parse_args()

    if args.print_tools:
        print(json.dumps(tool_schemas(), indent=2))
        return

    settings = get_settings()
    install_structured_logging(getattr(logging, settings.log_level, logging.INFO))
    # Keep HTTP client internals (and their headers) out of the logs
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    for key in settings.missing_keys():
        logger.warning(f"Missing {key} environment variable!")

    logger.info("Starting chat server...")
    logger.info(f"Open http://localhost:{args.port} in your browser to start chatting")

    should_open = not args.no_open and os.environ.get("ASSISTANT_CHAT_NO_BROWSER") != "1"
    url = f"http://localhost:{args.port}"
    if should_open:
        threading.Thread(target=_open_when_ready, args=(url,), daemon=True).start()
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
