"""
Performs one http(s) call: validates params, builds options, sends the request with a
timeout and returns the parsed JSON body or the live response stream.
"""

import asyncio
import json
import logging
import time
from typing import Any, AsyncIterator, Mapping, Optional, Union

import httpx
import structlog

from .errors import (
    BodyParseError,
    RiquestError,
    StatusError,
    TimeoutError,
    TransportError,
    UrlParseError,
)
from .options import build_options, serialize_body
from .params import RequestParams, validate_params
from .transport import basic_auth, create_transport
from .url import resolve_url

# largest delay a timer accepts, in milliseconds
MAX_TIMEOUT_MS = 2 ** 31 - 1

logger = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)


class ResponseStream:
    """Unread 2xx response handed to the caller in stream mode.

    The caller owns it: iterate it (or ``aread()``) and close it, or use it as an
    async context manager. Closing releases the per-call client as well.
    """

    def __init__(self, response: httpx.Response, client: httpx.AsyncClient, label: str):
        self._response = response
        self._client = client
        self._label = label

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    @property
    def is_closed(self) -> bool:
        return self._response.is_closed

    async def __aiter__(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes():
                yield chunk
        except httpx.TimeoutException as e:
            raise TransportError(self._label, f"stream read timed out: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(self._label, str(e) or type(e).__name__) from e

    async def aread(self) -> bytes:
        chunks = []
        async for chunk in self:
            chunks.append(chunk)
        return b''.join(chunks)

    async def aclose(self) -> None:
        try:
            await self._response.aclose()
        finally:
            await self._client.aclose()

    async def __aenter__(self) -> "ResponseStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


class RequestExecutor:
    """One request, one outcome. Instances are not reusable."""

    def __init__(self, params: Union[Mapping[str, Any], RequestParams],
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.params = validate_params(params)
        self.resolved = resolve_url(self.params.url)
        self.options = build_options(self.params, self.resolved)
        self.body = serialize_body(self.params.data)
        self.label = self.resolved.scheme.label
        self._transport = transport
        self._request = self._build_request()

    @property
    def timeout_seconds(self) -> Optional[float]:
        """None when the timer is disabled (non-positive timeout, or above MAX_TIMEOUT_MS)."""
        timeout = self.options['timeout']
        return timeout / 1000 if 0 < timeout <= MAX_TIMEOUT_MS else None

    def _build_request(self) -> httpx.Request:
        method = self.options['method']
        content = self.body if method != 'GET' else None
        try:
            return httpx.Request(
                method,
                self.resolved.target,
                headers=dict(self.options['headers']),
                content=content,
                extensions={'timeout': httpx.Timeout(self.timeout_seconds).as_dict()},
            )
        except httpx.InvalidURL as e:
            raise UrlParseError(str(e)) from e

    def _create_client(self) -> httpx.AsyncClient:
        transport = self._transport or create_transport(self.options)
        return httpx.AsyncClient(transport=transport, auth=basic_auth(self.options))

    async def _exchange(self, client: httpx.AsyncClient) -> Any:
        response = await client.send(self._request, stream=True)

        if not 200 <= response.status_code < 300:
            await response.aclose()
            raise StatusError(response.status_code)

        if self.options['return_stream']:
            return ResponseStream(response, client, self.label)

        chunks = []
        try:
            async for chunk in response.aiter_text():
                chunks.append(chunk)
        finally:
            await response.aclose()

        try:
            return json.loads(''.join(chunks))
        except ValueError as e:
            raise BodyParseError(str(e)) from e

    async def run(self) -> Any:
        """Send the request and return the parsed JSON body or a ResponseStream."""
        method = self.options['method']
        url = self.resolved.target
        timeout_ms = self.options['timeout']
        log = logger.bind(method=method, url=url, timeout_ms=timeout_ms)
        log.debug("request_started", return_stream=self.options['return_stream'])

        start_time = time.time()
        client = self._create_client()
        keep_open = False
        try:
            result = await asyncio.wait_for(self._exchange(client), timeout=self.timeout_seconds)
            keep_open = isinstance(result, ResponseStream)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            log.warning("request_timed_out")
            raise TimeoutError(self.label, timeout_ms) from e
        except httpx.RequestError as e:
            log.warning("request_failed", error=str(e))
            raise TransportError(self.label, str(e) or type(e).__name__) from e
        except RiquestError as e:
            log.warning("request_failed", error=str(e))
            raise
        finally:
            if not keep_open:
                await client.aclose()

        fetch_time = time.time() - start_time
        if keep_open:
            log.debug("stream_delivered", status_code=result.status_code, fetch_time=fetch_time)
        else:
            log.debug("request_completed", fetch_time=fetch_time)
        return result


async def request(params: Union[Mapping[str, Any], RequestParams],
                  transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    """Perform a single http(s) request.

    Args:
        params: mapping (or RequestParams) describing the call. Only ``url`` is
            required.
        transport: optional httpx transport replacing the network one.

    Returns:
        The JSON-decoded body, or a ResponseStream when ``returnStream`` is set.

    Raises:
        RiquestError: the subclass names what went wrong.
    """
    return await RequestExecutor(params, transport=transport).run()
