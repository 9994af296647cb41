"""Writing JSON-RPC messages framed with a Content-Length header."""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO

CONTENT_TYPE = "application/vscode-jsonrpc; charset=utf-8"
JSONRPC_VERSION = "2.0"


def _encode(payload: Any, *, sort_keys: bool = False) -> str:
    return json.dumps(
        payload, separators=(",", ":"), ensure_ascii=False, sort_keys=sort_keys
    )


def frame_message(message: str) -> str:
    """Prefix a serialized message with its headers.

    The Content-Length counts the UTF-8 encoded bytes of the message.
    """
    length = len(message.encode("utf-8"))
    return f"Content-Length: {length}\r\nContent-Type: {CONTENT_TYPE}\r\n\r\n{message}"


def _write(message: str, stream: TextIO | None) -> None:
    out = sys.stdout if stream is None else stream
    out.write(frame_message(message))
    try:
        out.flush()
    except (OSError, ValueError):
        pass


def send_message(method: str, params: Any = None, stream: TextIO | None = None) -> None:
    """Send a notification carrying ``method`` and ``params``."""
    payload = {"jsonrpc": JSONRPC_VERSION, "method": method, "params": params}
    _write(_encode(payload), stream)


def send_reply(request_id: int, payload: Any = None, stream: TextIO | None = None) -> None:
    """Send the result of the request identified by ``request_id``."""
    body = {"jsonrpc": JSONRPC_VERSION, "result": payload, "id": request_id}
    _write(_encode(body, sort_keys=True), stream)


def send_error(
    request_id: int | None, code: int, message: str, stream: TextIO | None = None
) -> None:
    """Send an error response; ``request_id`` is None for notifications."""
    body = {
        "jsonrpc": JSONRPC_VERSION,
        "error": {"code": code, "message": message},
        "id": request_id,
    }
    _write(_encode(body, sort_keys=True), stream)