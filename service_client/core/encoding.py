"""Request body encoding."""

from __future__ import annotations

import io
import logging
from typing import Any

from pydantic_core import PydanticSerializationError, to_json

from service_client.errors import ERROR_MARSHALLING_OBJECT, DataError

logger = logging.getLogger(__name__)


def object_to_json_reader(value: Any) -> io.BytesIO:
    """Return a readable stream over the JSON representation of ``value``.

    Raw bytes are passed through untouched, so callers may send pre-encoded
    payloads as-is.
    """

    if isinstance(value, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(value))

    try:
        encoded = to_json(value)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        logger.warning("Could not marshal %s to json: %s", type(value).__name__, exc)
        raise DataError(
            ERROR_MARSHALLING_OBJECT, "Error marshalling object to json", inner=exc
        ) from exc
    return io.BytesIO(encoded)
