"""Dispatching JSON-RPC requests read from a framed byte stream."""

from __future__ import annotations

import json
import re
import sys
from collections.abc import Callable, Iterator
from typing import Any, BinaryIO, Generic, TextIO, TypeVar

from envscout.jsonrpc import send_error

C = TypeVar("C")

RequestHandler = Callable[[Any, int, Any], None]
NotificationHandler = Callable[[Any, Any], None]

_HEADER = "Content-Length: "
_DIGITS = re.compile(r"\+?[0-9]+")
_U64_LIMIT = 2**64


def _log(text: str) -> None:
    sys.stderr.write(text)


def _request_id(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if 0 <= value < _U64_LIMIT:
        return value & 0xFFFFFFFF
    return None


class HandlerRegistry(Generic[C]):
    """Request and notification handlers keyed by method name."""

    def __init__(self, context: C, output: TextIO | None = None) -> None:
        self.context = context
        self.output = output
        self._requests: dict[str, RequestHandler] = {}
        self._notifications: dict[str, NotificationHandler] = {}

    def add_request_handler(self, method: str, handler: RequestHandler) -> None:
        self._requests[method] = handler

    def add_notification_handler(self, method: str, handler: NotificationHandler) -> None:
        self._notifications[method] = handler

    def handle_request(self, message: Any) -> None:
        """Dispatch one decoded message, replying with an error if unhandled."""
        method = message.get("method") if isinstance(message, dict) else None
        if not isinstance(method, str):
            text = json.dumps(message)
            _log(f"Failed to get method from message: {text}")
            send_error(
                None,
                -3,
                f"Failed to extract method from JSONRPC payload {text}",
                self.output,
            )
            return

        params = message.get("params")
        request_id = _request_id(message.get("id"))
        if request_id is not None:
            handler = self._requests.get(method)
            if handler is None:
                _log(f"Failed to find handler for method: {method}")
                send_error(
                    request_id,
                    -1,
                    f"Failed to find handler for request {method}",
                    self.output,
                )
                return
            handler(self.context, request_id, params)
        else:
            notification = self._notifications.get(method)
            if notification is None:
                _log(f"Failed to find handler for method: {method}")
                send_error(
                    None,
                    -2,
                    f"Failed to find handler for notification {method}",
                    self.output,
                )
                return
            notification(self.context, params)


def get_content_length(line: str) -> int:
    """Parse the length from a ``Content-Length`` header line.

    Raises ValueError if the header is missing or the value is not a length.
    """
    line = line.strip()
    index = line.find(_HEADER)
    if index < 0:
        raise ValueError(f"String 'Content-Length' not found in input => {line}")
    rest = line[index + len(_HEADER):]
    if not _DIGITS.fullmatch(rest):
        raise ValueError(f"Failed to parse content length from {rest} for {line}")
    return int(rest)


def read_messages(stream: BinaryIO) -> Iterator[Any]:
    """Yield decoded JSON messages from a framed byte stream until it ends."""
    while True:
        raw = stream.readline()
        if not raw:
            return
        header = raw.decode("utf-8", errors="replace")
        try:
            length = get_content_length(header)
        except ValueError as err:
            _log(f"Failed to get content length from {header}, {err}")
            continue
        stream.readline()
        data = stream.read(length)
        if data is None or len(data) < length:
            _log(f"Failed to read exactly {length} bytes")
            return
        text = data.decode("utf-8", errors="replace")
        try:
            yield json.loads(text)
        except json.JSONDecodeError as err:
            _log(f"Failed to parse LINE: {text}, {err}")


def start_server(handlers: HandlerRegistry, stream: BinaryIO | None = None) -> None:
    """Serve requests from ``stream`` (standard input by default) until it ends."""
    source = sys.stdin.buffer if stream is None else stream
    for message in read_messages(source):
        handlers.handle_request(message)