"""Classification of server replies.

Every reply is reduced to exactly one of four payload kinds so callers can
dispatch on the type instead of inspecting fields:

* ``ResultPayload``  - a JSON-RPC response carrying ``result``
* ``ErrorPayload``   - a JSON-RPC response carrying ``error``
* ``RawPayload``     - decoded JSON that is not a JSON-RPC envelope
* ``StreamPayload``  - the outcome of an SSE stream without an error event
"""

from __future__ import annotations

import inspect
import json
import logging
import typing as t
from dataclasses import dataclass

from ..errors import SchemaError, ShapeError
from ..schema.jsonrpc import (
    INTERNAL_ERROR,
    JSONRPCErrorObject,
    JSONRPCErrorResponse,
    JSONRPCNotification,
    JSONRPCResponse,
)

JSON = t.Dict[str, t.Any]
NotificationHandler = t.Callable[[JSONRPCNotification], t.Union[None, t.Awaitable[None]]]

EVENT_STREAM = "text/event-stream"
DATA_FIELD = "data:"

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultPayload:
    result: t.Any


@dataclass(frozen=True)
class ErrorPayload:
    error: JSONRPCErrorObject


@dataclass(frozen=True)
class RawPayload:
    body: t.Any


@dataclass(frozen=True)
class StreamPayload:
    # result is None when the stream ended without a result-bearing event
    result: t.Any = None
    has_result: bool = False
    events: int = 0


ParsedResponse = t.Union[ResultPayload, ErrorPayload, RawPayload, StreamPayload]


def is_event_stream(content_type: t.Optional[str]) -> bool:
    return bool(content_type) and EVENT_STREAM in content_type.lower()


def _has_error(document: JSON) -> bool:
    # "error": null means no error
    return document.get("error") is not None


def _coerce_error(document: JSON) -> JSONRPCErrorObject:
    try:
        return JSONRPCErrorResponse.from_dict(document).error
    except SchemaError as exc:
        _logger.debug("Malformed JSON-RPC error response, coercing: %s", exc)

    # A malformed error object still has to surface as an error
    error = document["error"]
    if not isinstance(error, dict):
        return JSONRPCErrorObject(code=INTERNAL_ERROR, message=str(error))
    message = error.get("message")
    code = error.get("code")
    return JSONRPCErrorObject(
        code=code if isinstance(code, int) and not isinstance(code, bool) else INTERNAL_ERROR,
        message=message if isinstance(message, str) else json.dumps(error),
        data=error.get("data"),
    )


def _parse_result(document: JSON) -> t.Optional[JSONRPCResponse]:
    try:
        return JSONRPCResponse.from_dict(document)
    except SchemaError as exc:
        _logger.warning("Malformed JSON-RPC response envelope: %s", exc)
        return None


def classify_json(document: t.Any) -> t.Union[ResultPayload, ErrorPayload, RawPayload]:
    """Classify one decoded JSON document; ``error`` wins over ``result``.

    A document whose ``result`` envelope fails validation (wrong ``jsonrpc``
    version, an id that is neither string nor integer) is returned raw.
    """
    if isinstance(document, dict):
        if _has_error(document):
            return ErrorPayload(_coerce_error(document))
        if "result" in document:
            response = _parse_result(document)
            if response is not None:
                return ResultPayload(response.result)
    return RawPayload(document)


def parse_json_body(text: str) -> t.Union[ResultPayload, ErrorPayload, RawPayload]:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ShapeError(f"response body is not valid JSON: {exc}") from exc
    return classify_json(document)


class SSEParser:
    """Incremental parser for an SSE response body.

    Feed it one line at a time. Each ``data:`` line carries one JSON-RPC
    message. Messages with ``method`` are validated as notifications and
    passed to ``on_notification`` as they are seen. Messages with ``result``
    replace the running final result; a non-null ``error`` makes ``finish()``
    return an ``ErrorPayload``.
    """

    def __init__(self, on_notification: t.Optional[NotificationHandler] = None) -> None:
        self._on_notification = on_notification
        self._result: t.Any = None
        self._has_result = False
        self._error: t.Optional[JSONRPCErrorObject] = None
        self._events = 0

    async def feed(self, line: str) -> None:
        if not line.startswith(DATA_FIELD):
            # blank separators, comments, event:/id:/retry: fields
            return
        data = line[len(DATA_FIELD):]
        if data.startswith(" "):
            data = data[1:]
        if not data.strip():
            return
        try:
            message = json.loads(data)
        except json.JSONDecodeError:
            _logger.warning("SSE: skipping undecodable data line len=%d", len(data))
            return
        if not isinstance(message, dict):
            _logger.debug("SSE: skipping non-object event")
            return

        self._events += 1
        if "method" in message:
            try:
                notification = JSONRPCNotification.from_dict(message)
            except SchemaError as exc:
                _logger.warning("SSE: skipping malformed notification: %s", exc)
                return
            if self._on_notification is not None:
                outcome = self._on_notification(notification)
                if inspect.isawaitable(outcome):
                    await outcome
        elif _has_error(message):
            if self._error is None:
                self._error = _coerce_error(message)
        elif "result" in message:
            response = _parse_result(message)
            if response is not None:
                self._result = response.result
                self._has_result = True
        else:
            _logger.debug("SSE: ignoring event without method/result/error")

    def finish(self) -> t.Union[ErrorPayload, StreamPayload]:
        if self._error is not None:
            return ErrorPayload(self._error)
        return StreamPayload(result=self._result, has_result=self._has_result, events=self._events)
