"""Public service client exports."""

from .async_base import AsyncBaseClient, AsyncBaseServiceClient
from .base import BaseClient, BaseServiceClient, ServiceFinder

__all__ = [
    "AsyncBaseClient",
    "AsyncBaseServiceClient",
    "BaseClient",
    "BaseServiceClient",
    "ServiceFinder",
]
