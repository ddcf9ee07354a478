from __future__ import annotations

import inspect
import logging
import time
import typing as t

import httpx

from ..errors import HTTPStatusError, RPCError, SchemaError, TransportError
from ..monitoring.metrics import (
    mcp_client_progress_events_total,
    mcp_client_request_latency_seconds,
    mcp_client_requests_total,
)
from ..schema.initialization import (
    ClientCapabilities,
    Implementation,
    initialize_request,
    initialized_notification,
)
from ..schema.jsonrpc import JSONRPCNotification, JSONRPCRequest, RequestId, new_request_id
from ..schema.notifications import PROGRESS_METHOD, ProgressNotification, cancelled_notification
from ..schema.tools import ListToolsResult, Tool, call_tool_request, list_tools_request
from ..utils.config import ClientConfig
from .lifecycle import ClientState, Lifecycle
from .responses import (
    ErrorPayload,
    NotificationHandler,
    ParsedResponse,
    RawPayload,
    ResultPayload,
    SSEParser,
    StreamPayload,
    is_event_stream,
    parse_json_body,
)

JSON = t.Dict[str, t.Any]
ProgressCallback = t.Callable[[JSON], t.Union[None, t.Awaitable[None]]]

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json, text/event-stream",
}
SESSION_HEADER = "Mcp-Session-Id"

logger = logging.getLogger(__name__)


class MCPClient:
    """MCP client speaking JSON-RPC over HTTP POST to a single endpoint.

    Each operation issues its own POST; replies are read either as one JSON
    document or as an SSE stream, depending on the response content type.

    Headers are merged in order: protocol defaults, ``config.transport.headers``,
    then ``headers``. Later values replace earlier ones case-insensitively, so a
    caller can override ``Accept`` or ``Content-Type`` if it needs to.

    Usage:
        async with MCPClient("https://example.com/mcp", headers={"Authorization": "Bearer ..."}) as client:
            await client.initialize()
            tools = await client.list_tools()
            result = await client.call_tool("echo", {"text": "hi"}, on_progress=print)
    """

    def __init__(
        self,
        endpoint: str,
        *,
        headers: t.Optional[t.Mapping[str, str]] = None,
        config: t.Optional[ClientConfig] = None,
        http_client: t.Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not isinstance(endpoint, str) or not endpoint:
            raise ValueError("endpoint must be a non-empty URL string")
        self._endpoint = endpoint
        self._config = config or ClientConfig()

        merged = httpx.Headers(DEFAULT_HEADERS)
        merged.update(self._config.transport.headers)
        merged.update(dict(headers or {}))
        self._headers = merged

        self._own_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=self._config.transport.timeout_seconds,
            follow_redirects=self._config.transport.follow_redirects,
        )
        self._lifecycle = Lifecycle()
        self._session_id: t.Optional[str] = None
        self._server_result: t.Any = None

    async def __aenter__(self) -> "MCPClient":
        return self

    async def __aexit__(self, *exc_info: t.Any) -> None:
        await self.aclose()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def headers(self) -> t.Dict[str, str]:
        return dict(self._headers.items())

    @property
    def state(self) -> ClientState:
        return self._lifecycle.state

    @property
    def initialized(self) -> bool:
        return self._lifecycle.initialized

    @property
    def session_id(self) -> t.Optional[str]:
        return self._session_id

    @property
    def server_result(self) -> t.Any:
        """The ``result`` of the most recent successful ``initialize``."""
        return self._server_result

    async def aclose(self) -> None:
        if self._own_client:
            await self._http.aclose()

    async def connect(self) -> str:
        self._lifecycle.mark_connected()
        return "connected"

    async def initialize(self) -> t.Any:
        """Run the initialize handshake and return the server's result.

        Sends ``initialize``, then the ``notifications/initialized``
        notification. The client only counts as initialized once both went
        out; any failure before that propagates and leaves it uninitialized.
        Calling it again repeats the whole handshake.
        """
        protocol = self._config.protocol
        request = initialize_request(
            new_request_id(),
            Implementation(name=protocol.client_name, version=protocol.client_version),
            protocol_version=protocol.protocol_version,
            capabilities=ClientCapabilities.from_dict(protocol.capabilities),
        )
        logger.info("Initializing MCP session endpoint=%s id=%s", self._endpoint, request.id)
        result = self._unwrap(await self._request(request, with_session=False), request.method)

        await self._notify(initialized_notification())
        self._lifecycle.mark_initialized()
        self._server_result = result

        server_info = result.get("serverInfo") if isinstance(result, dict) else None
        logger.info(
            "MCP session initialized endpoint=%s server=%s session=%s",
            self._endpoint,
            server_info,
            self._session_id,
        )
        return result

    async def list_tools_page(self, cursor: t.Optional[str] = None) -> ListToolsResult:
        self._lifecycle.require_initialized()
        request = list_tools_request(new_request_id(), cursor)
        result = self._unwrap(await self._request(request), request.method)
        return ListToolsResult.from_dict(result)

    async def list_tools(self, cursor: t.Optional[str] = None) -> t.List[Tool]:
        page = await self.list_tools_page(cursor)
        return page.tools

    async def call_tool(
        self,
        name: str,
        arguments: t.Optional[JSON] = None,
        on_progress: t.Optional[ProgressCallback] = None,
    ) -> t.Any:
        """Invoke a tool and return the ``result`` of the call.

        When the server answers with an event stream, ``on_progress`` receives
        the params of every ``notifications/progress`` message in stream order
        before the call returns. Other notifications in the stream, and progress
        params that fail validation, are logged and not delivered. A stream that
        never carries a result yields ``None``. A plain JSON reply that is not
        a JSON-RPC envelope is returned as is.
        """
        self._lifecycle.require_initialized()
        request_id = new_request_id()
        request = call_tool_request(
            request_id,
            name,
            arguments,
            progress_token=request_id if on_progress is not None else None,
        )
        parsed = await self._request(request, on_notification=self._progress_handler(name, on_progress))
        return self._unwrap(parsed, request.method)

    async def send_cancelled(self, request_id: RequestId, reason: t.Optional[str] = None) -> None:
        self._lifecycle.require_initialized()
        await self._notify(cancelled_notification(request_id, reason))

    def _progress_handler(self, tool: str, on_progress: t.Optional[ProgressCallback]) -> NotificationHandler:
        async def handle(notification: JSONRPCNotification) -> None:
            if notification.method != PROGRESS_METHOD:
                logger.debug("Ignoring server notification method=%s during tools/call %s", notification.method, tool)
                return
            params = notification.params or {}
            try:
                progress = ProgressNotification.from_dict(params)
            except SchemaError as exc:
                logger.warning("Skipping malformed progress notification during tools/call %s: %s", tool, exc)
                return
            mcp_client_progress_events_total.inc(method=PROGRESS_METHOD)
            logger.debug("tools/call %s progress=%s total=%s", tool, progress.progress, progress.total)
            if on_progress is None:
                return
            outcome = on_progress(params)
            if inspect.isawaitable(outcome):
                await outcome

        return handle

    def _request_headers(self, with_session: bool = True) -> httpx.Headers:
        headers = httpx.Headers(self._headers)
        if with_session and self._session_id:
            headers[SESSION_HEADER] = self._session_id
        return headers

    def _capture_session(self, response: httpx.Response) -> None:
        sid = response.headers.get(SESSION_HEADER)
        if sid and sid != self._session_id:
            logger.debug("Server assigned session id=%s", sid)
            self._session_id = sid

    async def _request(
        self,
        request: JSONRPCRequest,
        *,
        on_notification: t.Optional[NotificationHandler] = None,
        with_session: bool = True,
    ) -> ParsedResponse:
        method = request.method
        started = time.perf_counter()
        try:
            async with self._http.stream(
                "POST",
                self._endpoint,
                json=request.to_dict(),
                headers=self._request_headers(with_session),
            ) as response:
                if not response.is_success:
                    await response.aread()
                    mcp_client_requests_total.inc(method=method, outcome="http_error")
                    logger.error("MCP server answered %s with status=%s", method, response.status_code)
                    raise HTTPStatusError(response.status_code, response.text)
                self._capture_session(response)

                content_type = response.headers.get("content-type", "")
                logger.debug("%s id=%s status=%s content_type=%s", method, request.id, response.status_code, content_type)
                if is_event_stream(content_type):
                    parser = SSEParser(on_notification)
                    async for line in response.aiter_lines():
                        await parser.feed(line)
                    parsed: ParsedResponse = parser.finish()
                else:
                    await response.aread()
                    parsed = parse_json_body(response.text)
        except httpx.HTTPError as exc:
            mcp_client_requests_total.inc(method=method, outcome="transport_error")
            logger.error("HTTP error calling MCP server method=%s endpoint=%s: %s", method, self._endpoint, exc)
            raise TransportError(f"{method} request to {self._endpoint} failed: {exc}") from exc
        finally:
            mcp_client_request_latency_seconds.observe(time.perf_counter() - started, method=method)

        outcome = "rpc_error" if isinstance(parsed, ErrorPayload) else "ok"
        mcp_client_requests_total.inc(method=method, outcome=outcome)
        return parsed

    async def _notify(self, notification: JSONRPCNotification) -> None:
        method = notification.method
        started = time.perf_counter()
        try:
            response = await self._http.post(
                self._endpoint,
                json=notification.to_dict(),
                headers=self._request_headers(),
            )
        except httpx.HTTPError as exc:
            mcp_client_requests_total.inc(method=method, outcome="transport_error")
            logger.error("HTTP error sending notification method=%s endpoint=%s: %s", method, self._endpoint, exc)
            raise TransportError(f"{method} notification to {self._endpoint} failed: {exc}") from exc
        finally:
            mcp_client_request_latency_seconds.observe(time.perf_counter() - started, method=method)

        # Fire-and-forget: the body is never inspected and a bad status is not fatal
        if not response.is_success:
            mcp_client_requests_total.inc(method=method, outcome="http_error")
            logger.warning("Notification %s answered with status=%s", method, response.status_code)
            return
        mcp_client_requests_total.inc(method=method, outcome="ok")

    def _unwrap(self, parsed: ParsedResponse, method: str) -> t.Any:
        if isinstance(parsed, ErrorPayload):
            error = parsed.error
            logger.error("MCP JSON-RPC error method=%s: %s - %s", method, error.code, error.message)
            raise RPCError(error.code, error.message, error.data)
        if isinstance(parsed, ResultPayload):
            return parsed.result
        if isinstance(parsed, StreamPayload):
            if not parsed.has_result:
                logger.warning("SSE stream for %s ended without a result (events=%d)", method, parsed.events)
            return parsed.result
        if isinstance(parsed, RawPayload):
            logger.warning("No JSON-RPC envelope in %s response; returning raw body", method)
            return parsed.body
        raise TypeError(f"unhandled response payload {parsed!r}")
