"""Core building blocks."""

from .encoding import object_to_json_reader
from .routes import normalize_path_part, prefix_route

__all__ = ["normalize_path_part", "object_to_json_reader", "prefix_route"]
