"""Route composition helpers."""

from __future__ import annotations


def normalize_path_part(part: str) -> str:
    """Return ``part`` with exactly one leading slash and no trailing slash.

    Empty input (or a bare ``/``) normalizes to the root ``/``.
    """

    return "/" + part.strip("/")


def prefix_route(
    service_name: str,
    path_prefix: str,
    append_service_name: bool,
    route: str,
) -> str:
    """Compose ``[/prefix][/service_name]/route`` from its parts.

    Components normalizing to the root are skipped so they never leave a
    doubled or trailing slash behind.
    """

    parts = []
    if path_prefix:
        parts.append(path_prefix)
    if append_service_name:
        parts.append(service_name)
    parts.append(route)

    composed = "".join(
        normalized for normalized in map(normalize_path_part, parts) if normalized != "/"
    )
    return composed or "/"
