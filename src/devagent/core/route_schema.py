"""
Decoding and filtering of the REST endpoint schema extracted from backend code
"""

import json
from typing import List

from .errors import SchemaDecodeFailed
from .factsheet import RouteObject


def decode_route_schema(raw_schema: str) -> List[RouteObject]:
    """
    Parse the model's endpoint summary into route objects

    Expected shape:
        [{"route": "/health", "method": "get", "is_route_dynamic": "false"}, ...]

    Raises:
        SchemaDecodeFailed: if the text is not a JSON list of route objects
    """
    try:
        data = json.loads(raw_schema)
    except json.JSONDecodeError as e:
        raise SchemaDecodeFailed(raw_schema, f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise SchemaDecodeFailed(raw_schema, f"expected a list, got {type(data).__name__}")

    routes = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise SchemaDecodeFailed(raw_schema, f"entry {i} is not an object")
        try:
            route = RouteObject.from_dict(item)
        except KeyError as e:
            raise SchemaDecodeFailed(raw_schema, f"entry {i} is missing {e}") from e
        if not all(isinstance(v, str) for v in (route.route, route.method, route.is_route_dynamic)):
            raise SchemaDecodeFailed(raw_schema, f"entry {i} has non-string fields")
        routes.append(route)

    return routes


def is_static_get_route(route: RouteObject) -> bool:
    """A route that can be called without inventing path parameters or a body"""
    return route.method == "get" and route.is_route_dynamic == "false"


def filter_static_get_routes(routes: List[RouteObject]) -> List[RouteObject]:
    """Keep the static GET routes, in their input order"""
    return [route for route in routes if is_static_get_route(route)]
