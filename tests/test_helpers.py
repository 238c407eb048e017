"""Tests for route composition and body encoding."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from service_client import (
    ERROR_MARSHALLING_OBJECT,
    DataError,
    normalize_path_part,
    object_to_json_reader,
    prefix_route,
)


class Inner(BaseModel):
    foo: str
    baz: int


class Outer(BaseModel):
    a: str
    b: int
    c: Inner


@dataclass
class Point:
    x: int
    y: int


def test_bytes_pass_through_unchanged() -> None:
    raw = b'{"foo":"bar","baz":123}'

    assert object_to_json_reader(raw).read() == raw


def test_invalid_json_bytes_pass_through_unchanged() -> None:
    assert object_to_json_reader(b"{not json").read() == b"{not json"


def test_model_is_encoded_compactly() -> None:
    value = Outer(a="bar", b=123, c=Inner(foo="bar2", baz=456))

    assert object_to_json_reader(value).read() == b'{"a":"bar","b":123,"c":{"foo":"bar2","baz":456}}'


@pytest.mark.parametrize(
    "value",
    [
        {"foo": "bar", "nested": {"list": [1, 2, 3], "flag": True, "none": None}},
        ["a", 1, 2.5, False],
        "plain",
        42,
    ],
)
def test_plain_values_match_json_dumps(value: object) -> None:
    expected = json.dumps(value, separators=(",", ":")).encode()

    assert object_to_json_reader(value).read() == expected


def test_dataclass_is_encoded() -> None:
    assert json.loads(object_to_json_reader(Point(x=1, y=2)).read()) == {"x": 1, "y": 2}


def test_unserializable_value_raises_marshalling_error() -> None:
    with pytest.raises(DataError) as exc_info:
        object_to_json_reader({"lock": threading.Lock()})

    assert exc_info.value.code == ERROR_MARSHALLING_OBJECT
    assert exc_info.value.inner is not None


@pytest.mark.parametrize(
    ("part", "expected"),
    [
        ("foo", "/foo"),
        ("/foo", "/foo"),
        ("foo/", "/foo"),
        ("/foo/bar/", "/foo/bar"),
        ("//foo//", "/foo"),
        ("", "/"),
        ("/", "/"),
    ],
)
def test_normalize_path_part(part: str, expected: str) -> None:
    assert normalize_path_part(part) == expected


@pytest.mark.parametrize(
    ("service", "prefix", "append", "route", "expected"),
    [
        ("svc", "", False, "/foo/bar", "/foo/bar"),
        ("svc", "", True, "/foo/bar", "/svc/foo/bar"),
        ("svc", "v1", False, "foo/bar", "/v1/foo/bar"),
        ("svc", "v1", True, "/foo/bar/", "/v1/svc/foo/bar"),
        ("svc", "/api/v1/", True, "/foo", "/api/v1/svc/foo"),
        ("svc", "v1", True, "", "/v1/svc"),
        ("", "", True, "/foo", "/foo"),
        ("svc", "", False, "", "/"),
    ],
)
def test_prefix_route(service: str, prefix: str, append: bool, route: str, expected: str) -> None:
    assert prefix_route(service, prefix, append, route) == expected
