"""Export Pydantic models for convenience."""

from .problem import HTTPProblem

__all__ = ["HTTPProblem"]
