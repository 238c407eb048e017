"""Problem document returned by services on failure."""

from __future__ import annotations

from pydantic import BaseModel, model_validator


class HTTPProblem(BaseModel):
    """RFC 7807 problem details with an application error ``code``."""

    model_config = {"extra": "ignore"}

    type: str | None = None
    title: str | None = None
    status: int = 0
    detail: str = ""
    instance: str | None = None
    code: str = ""

    @model_validator(mode="before")
    @classmethod
    def _null_is_empty(cls, value):
        """A JSON ``null`` body decodes to an empty problem."""

        return {} if value is None else value

    def __str__(self) -> str:
        return f"Status: {self.status} | Code: {self.code} | Detail: {self.detail}"
