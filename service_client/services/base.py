"""Common HTTP client utilities."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Mapping, Sequence
from typing import IO, Any, Protocol, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from service_client.config import ClientSettings, get_settings
from service_client.errors import (
    ERROR_CANT_FIND,
    ERROR_DECODING_ERROR,
    ERROR_DECODING_RESPONSE,
    ERROR_REQUEST_CREATION,
    ERROR_REQUEST_ERROR,
    DataError,
    from_http_problem,
)
from service_client.models import HTTPProblem

logger = logging.getLogger(__name__)

T = TypeVar("T")
ClientT = TypeVar("ClientT", bound="ServiceClientCore")

QueryTypes = Mapping[str, Union[str, Sequence[str]]]
HeaderTypes = Union[httpx.Headers, Mapping[str, Union[str, Sequence[str]]], Sequence[tuple[str, str]]]
BodyTypes = Union[bytes, IO[bytes]]
ResponseTypes = Union[type[T], TypeAdapter[T]]

# RFC 9110 token characters
_METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
# Path characters left as-is; everything else, "?" and "#" included, is escaped
_PATH_SAFE = "/:@!$&'()*+,;=-._~"


class ServiceFinder(Protocol):
    """Resolves a service name to its base URL, raising when it cannot."""

    def __call__(self, service_name: str, use_tls: bool) -> httpx.URL | str: ...


class BaseClient(Protocol):
    """Anything that can issue requests the way :class:`BaseServiceClient` does."""

    def do(
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

    def make_request(
        self,
        method: str,
        slug: str,
        query: QueryTypes | None = None,
        headers: HeaderTypes | None = None,
        body: BodyTypes | None = None,
        *,
        timeout: float | None = None,
    ) -> tuple[int, bytes]: ...


def _header_pairs(headers: HeaderTypes | None) -> httpx.Headers | list[tuple[str, str]] | None:
    if headers is None or isinstance(headers, httpx.Headers):
        return headers
    items = headers.items() if isinstance(headers, Mapping) else headers
    pairs: list[tuple[str, str]] = []
    for name, value in items:
        if isinstance(value, str):
            pairs.append((name, value))
        else:
            pairs.extend((name, item) for item in value)
    return pairs


def _read_body(body: BodyTypes | None) -> Any:
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    read = getattr(body, "read", None)
    return read() if read is not None else body


class ServiceClientCore:
    """Request building and response decoding shared by sync and async clients."""

    def __init__(
        self,
        finder: ServiceFinder,
        service_name: str,
        *,
        use_tls: bool = False,
        timeout: float = 10.0,
    ) -> None:
        self._finder = finder
        self._service_name = service_name
        self._use_tls = use_tls
        self._timeout = timeout

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def use_tls(self) -> bool:
        return self._use_tls

    @property
    def timeout(self) -> float:
        return self._timeout

    @classmethod
    def from_settings(
        cls: type[ClientT],
        finder: ServiceFinder,
        settings: ClientSettings | None = None,
        **kwargs: Any,
    ) -> ClientT:
        """Build a client from :class:`ClientSettings` (cached env settings by default)."""

        settings = settings or get_settings()
        return cls(
            finder,
            settings.service_name,
            use_tls=settings.use_tls,
            timeout=settings.request_timeout,
            **kwargs,
        )

    def _resolve(self) -> httpx.URL | str:
        try:
            base = self._finder(self._service_name, self._use_tls)
        except Exception as exc:
            logger.warning("Could not find service %s: %s", self._service_name, exc)
            raise DataError(ERROR_CANT_FIND, "Error finding service", inner=exc) from exc
        return base

    def _build_request(
        self,
        method: str,
        slug: str,
        query: QueryTypes | None,
        headers: HeaderTypes | None,
        body: BodyTypes | None,
        timeout: float | None,
    ) -> httpx.Request:
        base = self._resolve()
        try:
            if not _METHOD_TOKEN.fullmatch(method):
                raise ValueError(f"invalid method {method!r}")
            url = httpx.URL(base).copy_with(
                path=quote(slug if slug.startswith("/") else f"/{slug}", safe=_PATH_SAFE),
                params=httpx.QueryParams(query or {}),
            )
            # Built directly rather than through the client so no default
            # headers are merged into the caller's.
            return httpx.Request(
                method,
                url,
                headers=_header_pairs(headers),
                content=_read_body(body),
                extensions={
                    "timeout": httpx.Timeout(self._call_timeout(timeout)).as_dict()
                },
            )
        except (httpx.InvalidURL, OSError, TypeError, ValueError) as exc:
            logger.warning("Could not create %s request for %s: %s", method, slug, exc)
            raise DataError(ERROR_REQUEST_CREATION, "Error creating request object", inner=exc) from exc

    def _request_failed(self, request: httpx.Request, exc: httpx.HTTPError) -> DataError:
        logger.warning("%s %s failed: %s", request.method, request.url, exc)
        return DataError(ERROR_REQUEST_ERROR, "Could not make the request", inner=exc)

    def _read_failed(self, request: httpx.Request, exc: httpx.HTTPError) -> DataError:
        logger.warning("Reading response of %s %s failed: %s", request.method, request.url, exc)
        return DataError(ERROR_DECODING_RESPONSE, "Could not read response body", inner=exc)

    def _call_timeout(self, timeout: float | None) -> float:
        return self._timeout if timeout is None else timeout

    def _timed_out(self, request: httpx.Request, timeout: float) -> DataError:
        return self._request_failed(
            request,
            httpx.TimeoutException(f"call exceeded {timeout}s", request=request),
        )

    def _decode(
        self,
        method: str,
        slug: str,
        status: int,
        payload: bytes,
        response_type: ResponseTypes[T] | None,
    ) -> T | None:
        if status < 200 or status >= 400:
            try:
                problem = HTTPProblem.model_validate_json(payload)
            except ValidationError as exc:
                logger.warning("Undecodable error response status=%s from %s", status, self._service_name)
                raise DataError(
                    ERROR_DECODING_ERROR, "Could not decode error response", inner=exc
                ) from exc
            logger.debug("Problem from %s: %s", self._service_name, problem)
            raise from_http_problem(problem, f"Error from {method} to {self._service_name} - {slug}")

        if response_type is None:
            return None

        adapter = response_type if isinstance(response_type, TypeAdapter) else TypeAdapter(response_type)
        try:
            return adapter.validate_json(payload)
        except ValidationError as exc:
            logger.warning("Undecodable response status=%s from %s", status, self._service_name)
            raise DataError(ERROR_DECODING_RESPONSE, "Could not decode response", inner=exc) from exc


class BaseServiceClient(ServiceClientCore):
    """Blocking JSON client for one named service."""

    def __init__(
        self,
        finder: ServiceFinder,
        service_name: str,
        *,
        use_tls: bool = False,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(finder, service_name, use_tls=use_tls, timeout=timeout)
        self._client = httpx.Client(transport=transport, follow_redirects=True)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BaseServiceClient:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def do(
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
        """Perform the request and decode the outcome.

        A 2xx/3xx body is validated into ``response_type`` when one is given;
        any other status is decoded as a problem document and raised as a
        :class:`DataError` carrying the remote code.
        """

        status, payload = self.make_request(method, slug, query, headers, body, timeout=timeout)
        return self._decode(method, slug, status, payload, response_type)

    def make_request(
        self,
        method: str,
        slug: str,
        query: QueryTypes | None = None,
        headers: HeaderTypes | None = None,
        body: BodyTypes | None = None,
        *,
        timeout: float | None = None,
    ) -> tuple[int, bytes]:
        """Perform the request and return the raw status and body.

        Use this directly only for services that do not answer errors with a
        problem document.
        """

        request = self._build_request(method, slug, query, headers, body, timeout)
        limit = self._call_timeout(timeout)
        deadline = time.monotonic() + limit
        logger.debug("%s %s", request.method, request.url)
        try:
            response = self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise self._request_failed(request, exc) from exc

        # httpx times each network operation separately; the deadline bounds
        # the call as a whole, body included.
        chunks: list[bytes] = []
        try:
            if time.monotonic() > deadline:
                raise self._timed_out(request, limit)
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise self._timed_out(request, limit)
        except httpx.TimeoutException as exc:
            raise self._request_failed(request, exc) from exc
        except httpx.HTTPError as exc:
            raise self._read_failed(request, exc) from exc
        finally:
            try:
                response.close()
            except httpx.HTTPError as exc:
                logger.debug("Closing response of %s %s failed: %s", request.method, request.url, exc)

        payload = b"".join(chunks)
        logger.debug("%s %s -> %s (%d bytes)", request.method, request.url, response.status_code, len(payload))
        return response.status_code, payload
