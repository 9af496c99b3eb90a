"""
FactSheet - the project record shared by every agent of one pipeline run

Only the agent that is currently executing may modify a FactSheet.
Agents take turns; there is no locking.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class RouteObject:
    """One HTTP endpoint found in the generated backend code"""

    route: str
    method: str
    is_route_dynamic: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RouteObject":
        return cls(
            route=data["route"],
            method=data["method"],
            is_route_dynamic=data["is_route_dynamic"],
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "route": self.route,
            "method": self.method,
            "is_route_dynamic": self.is_route_dynamic,
        }


@dataclass
class ProjectScope:
    is_crud_required: bool = False
    is_user_login_and_logout: bool = False
    is_external_urls_required: bool = False


@dataclass
class FactSheet:
    project_description: str
    project_scope: Optional[ProjectScope] = None
    external_urls: Optional[List[str]] = None
    backend_code: Optional[str] = None
    api_endpoint_schema: Optional[List[RouteObject]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FactSheet":
        scope = data.get("project_scope")
        schema = data.get("api_endpoint_schema")
        return cls(
            project_description=data["project_description"],
            project_scope=ProjectScope(**scope) if scope else None,
            external_urls=data.get("external_urls"),
            backend_code=data.get("backend_code"),
            api_endpoint_schema=[RouteObject.from_dict(r) for r in schema] if schema is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_description": self.project_description,
            "project_scope": vars(self.project_scope).copy() if self.project_scope else None,
            "external_urls": self.external_urls,
            "backend_code": self.backend_code,
            "api_endpoint_schema": (
                [r.to_dict() for r in self.api_endpoint_schema]
                if self.api_endpoint_schema is not None else None
            ),
        }

    @classmethod
    def load(cls, path: str) -> "FactSheet":
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))

    def save(self, path: str):
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
