"""Uniform error type raised for every client failure."""

from __future__ import annotations

from service_client.models import HTTPProblem

ERROR_CANT_FIND = "CANT_FIND_SERVICE"
ERROR_REQUEST_CREATION = "CANT_CREATE_REQUEST"
ERROR_REQUEST_ERROR = "ERROR_MAKING_REQUEST"
ERROR_DECODING_ERROR = "ERROR_DECODING_ERROR"
ERROR_DECODING_RESPONSE = "ERROR_DECODING_RESPONSE"
ERROR_MARSHALLING_OBJECT = "ERROR_MARSHALLING_OBJECT"


class DataError(RuntimeError):
    """Raised when a downstream call fails.

    ``code`` is machine readable. It is one of the ``ERROR_*`` constants for
    local failures, or whatever a remote service put in its problem document.
    """

    def __init__(
        self,
        code: str,
        msg: str,
        *,
        inner: BaseException | None = None,
        problem: HTTPProblem | None = None,
    ) -> None:
        super().__init__(code, msg)
        self.code = code
        self.msg = msg
        self.inner = inner
        self.problem = problem

    @property
    def status(self) -> int | None:
        """HTTP status reported by the remote problem document, if any."""

        return self.problem.status if self.problem is not None else None

    def __str__(self) -> str:
        inner = self.inner if self.inner is not None else self.problem
        return f"Code: [{self.code}] Message: [{self.msg}] Inner error: [{inner}]"


def from_http_problem(problem: HTTPProblem, msg: str) -> DataError:
    """Turn a decoded problem document into a :class:`DataError`."""

    return DataError(problem.code, msg, problem=problem)
