"""Tests for endpoint schema decoding and static GET filtering."""

from __future__ import annotations

import json

import pytest

from devagent.core.errors import SchemaDecodeFailed
from devagent.core.factsheet import RouteObject
from devagent.core.route_schema import (
    decode_route_schema,
    filter_static_get_routes,
    is_static_get_route,
)


MIXED_ROUTES = [
    RouteObject("/health", "get", "false"),
    RouteObject("/item/{id}", "get", "true"),
    RouteObject("/item", "post", "false"),
    RouteObject("/items", "get", "false"),
    RouteObject("/Upper", "GET", "false"),
    RouteObject("/bool", "get", "False"),
    RouteObject("/crypto", "get", "false"),
]


def test_filter_keeps_exact_static_get_routes_in_order() -> None:
    """Only method == "get" and is_route_dynamic == "false", case-sensitive."""
    filtered = filter_static_get_routes(MIXED_ROUTES)

    assert [r.route for r in filtered] == ["/health", "/items", "/crypto"]


def test_filter_is_idempotent() -> None:
    once = filter_static_get_routes(MIXED_ROUTES)
    twice = filter_static_get_routes(once)

    assert twice == once


def test_filter_does_not_modify_input() -> None:
    routes = list(MIXED_ROUTES)
    filter_static_get_routes(routes)

    assert routes == MIXED_ROUTES


def test_is_static_get_route() -> None:
    assert is_static_get_route(RouteObject("/health", "get", "false"))
    assert not is_static_get_route(RouteObject("/health", "get", "true"))
    assert not is_static_get_route(RouteObject("/health", "delete", "false"))


def test_decode_route_schema() -> None:
    raw = json.dumps([
        {"route": "/item/{id}", "is_route_dynamic": "true", "method": "get"},
        {"route": "/item", "is_route_dynamic": "false", "method": "post"},
    ])

    routes = decode_route_schema(raw)

    assert routes == [
        RouteObject("/item/{id}", "get", "true"),
        RouteObject("/item", "post", "false"),
    ]


def test_decode_empty_list() -> None:
    assert decode_route_schema("[]") == []


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        '{"route": "/health", "method": "get", "is_route_dynamic": "false"}',
        '["/health"]',
        '[{"route": "/health", "method": "get"}]',
        '[{"route": "/health", "method": "get", "is_route_dynamic": false}]',
    ],
)
def test_decode_rejects_malformed_schema(raw: str) -> None:
    with pytest.raises(SchemaDecodeFailed) as exc_info:
        decode_route_schema(raw)

    assert exc_info.value.raw_schema == raw
