"""JSON-over-HTTP clients for internal services with uniform error decoding."""

from .config import ClientSettings, get_settings
from .core import normalize_path_part, object_to_json_reader, prefix_route
from .errors import (
    ERROR_CANT_FIND,
    ERROR_DECODING_ERROR,
    ERROR_DECODING_RESPONSE,
    ERROR_MARSHALLING_OBJECT,
    ERROR_REQUEST_CREATION,
    ERROR_REQUEST_ERROR,
    DataError,
    from_http_problem,
)
from .logging import configure_logging
from .models import HTTPProblem
from .services import (
    AsyncBaseClient,
    AsyncBaseServiceClient,
    BaseClient,
    BaseServiceClient,
    ServiceFinder,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncBaseClient",
    "AsyncBaseServiceClient",
    "BaseClient",
    "BaseServiceClient",
    "ClientSettings",
    "DataError",
    "ERROR_CANT_FIND",
    "ERROR_DECODING_ERROR",
    "ERROR_DECODING_RESPONSE",
    "ERROR_MARSHALLING_OBJECT",
    "ERROR_REQUEST_CREATION",
    "ERROR_REQUEST_ERROR",
    "HTTPProblem",
    "ServiceFinder",
    "configure_logging",
    "from_http_problem",
    "get_settings",
    "normalize_path_part",
    "object_to_json_reader",
    "prefix_route",
]
