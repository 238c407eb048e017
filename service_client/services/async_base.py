"""Asyncio flavour of the service client."""

from __future__ import annotations

import logging
from typing import Protocol, TypeVar

import anyio
import httpx

from .base import (
    BodyTypes,
    HeaderTypes,
    QueryTypes,
    ResponseTypes,
    ServiceClientCore,
    ServiceFinder,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncBaseClient(Protocol):
    async def do(
        self,
        method: str,
        slug: str,
        query: QueryTypes | None = None,
        headers: HeaderTypes | None = None,
        body: BodyTypes | None = None,
        response_type: ResponseTypes[T] | None = None,
        *,
        timeout: float | None = None,
    ) -> T | None: ...

    async def make_request(
        self,
        method: str,
        slug: str,
        query: QueryTypes | None = None,
        headers: HeaderTypes | None = None,
        body: BodyTypes | None = None,
        *,
        timeout: float | None = None,
    ) -> tuple[int, bytes]: ...


class AsyncBaseServiceClient(ServiceClientCore):
    """Reusable async JSON client for one named service.

    Cancelling the awaiting task aborts an in-flight request; the
    ``CancelledError`` reaches the caller unwrapped. The configured timeout
    bounds each call as a whole, body read included.

    The finder and any file-like request body are called synchronously on
    the event loop, so neither may block.
    """

    def __init__(
        self,
        finder: ServiceFinder,
        service_name: str,
        *,
        use_tls: bool = False,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(finder, service_name, use_tls=use_tls, timeout=timeout)
        self._client = httpx.AsyncClient(transport=transport, follow_redirects=True)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncBaseServiceClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def do(
        self,
        method: str,
        slug: str,
        query: QueryTypes | None = None,
        headers: HeaderTypes | None = None,
        body: BodyTypes | None = None,
        response_type: ResponseTypes[T] | None = None,
        *,
        timeout: float | None = None,
    ) -> T | None:
        """Perform the request and decode a response or a problem document."""

        status, payload = await self.make_request(method, slug, query, headers, body, timeout=timeout)
        return self._decode(method, slug, status, payload, response_type)

    async def make_request(
        self,
        method: str,
        slug: str,
        query: QueryTypes | None = None,
        headers: HeaderTypes | None = None,
        body: BodyTypes | None = None,
        *,
        timeout: float | None = None,
    ) -> tuple[int, bytes]:
        request = self._build_request(method, slug, query, headers, body, timeout)
        limit = self._call_timeout(timeout)
        try:
            with anyio.fail_after(limit):
                return await self._exchange(request)
        except TimeoutError as exc:
            raise self._timed_out(request, limit) from exc

    async def _exchange(self, request: httpx.Request) -> tuple[int, bytes]:
        logger.debug("%s %s", request.method, request.url)
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise self._request_failed(request, exc) from exc

        try:
            payload = await response.aread()
        except httpx.TimeoutException as exc:
            raise self._request_failed(request, exc) from exc
        except httpx.HTTPError as exc:
            raise self._read_failed(request, exc) from exc
        finally:
            try:
                with anyio.CancelScope(shield=True):
                    await response.aclose()
            except httpx.HTTPError as exc:
                logger.debug("Closing response of %s %s failed: %s", request.method, request.url, exc)

        logger.debug("%s %s -> %s (%d bytes)", request.method, request.url, response.status_code, len(payload))
        return response.status_code, payload
