import io
import json

from envscout.jsonrpc import frame_message, send_error, send_message, send_reply

HEADER_TAIL = "\r\nContent-Type: application/vscode-jsonrpc; charset=utf-8\r\n\r\n"


def _split(text):
    header, body = text.split("\r\n\r\n", 1)
    first = header.split("\r\n")[0]
    assert first.startswith("Content-Length: ")
    return int(first[len("Content-Length: "):]), body


def test_frame_message_exact_bytes():
    assert frame_message("{}") == "Content-Length: 2" + HEADER_TAIL + "{}"


def test_frame_message_counts_utf8_bytes():
    message = '{"name":"\u00e9\u00e8"}'
    length, body = _split(frame_message(message))
    assert body == message
    assert length == len(message.encode("utf-8"))
    assert length > len(message)


def test_send_message_round_trip():
    out = io.StringIO()
    send_message("log", {"level": "info", "message": "hi"}, out)
    length, body = _split(out.getvalue())
    assert length == len(body.encode("utf-8"))
    assert json.loads(body) == {
        "jsonrpc": "2.0",
        "method": "log",
        "params": {"level": "info", "message": "hi"},
    }


def test_send_message_without_params_sends_null():
    out = io.StringIO()
    send_message("refresh", None, out)
    _, body = _split(out.getvalue())
    assert json.loads(body)["params"] is None


def test_send_reply_wire_format():
    out = io.StringIO()
    send_reply(1, None, out)
    _, body = _split(out.getvalue())
    assert body == '{"id":1,"jsonrpc":"2.0","result":null}'


def test_send_reply_with_payload():
    out = io.StringIO()
    send_reply(7, {"b": 2, "a": [1, 2]}, out)
    _, body = _split(out.getvalue())
    assert json.loads(body) == {"jsonrpc": "2.0", "id": 7, "result": {"a": [1, 2], "b": 2}}


def test_send_error_contains_code_and_message():
    out = io.StringIO()
    send_error(None, -2, "boom", out)
    length, body = _split(out.getvalue())
    assert length == len(body.encode("utf-8"))
    assert json.loads(body) == {
        "jsonrpc": "2.0",
        "error": {"code": -2, "message": "boom"},
        "id": None,
    }


def test_multiple_messages_append():
    out = io.StringIO()
    send_reply(1, "a", out)
    send_reply(2, "b", out)
    assert out.getvalue().count("Content-Length: ") == 2