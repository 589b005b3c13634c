"""Route patterns and the request and response types for plugin HTTP and page routes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional

from plugview.views import Empty, PluginView, SessionCtx


@dataclass(frozen=True)
class RoutePattern:
    """A URL path pattern with ``:param`` segments, e.g. ``"/product/:id"``."""

    pattern: str

    def matches(self, path: str) -> bool:
        """True if ``path`` matches this pattern."""
        return self.extract_params(path) is not None

    def extract_params(self, path: str) -> Optional[dict[str, str]]:
        """Named parameters from ``path`` if it matches, otherwise ``None``."""
        pattern_segs = self.pattern.split("/")
        path_segs = path.split("/")
        if len(pattern_segs) != len(path_segs):
            return None
        params: dict[str, str] = {}
        for pat, seg in zip(pattern_segs, path_segs):
            if pat.startswith(":"):
                params[pat[1:]] = seg
            elif pat != seg:
                return None
        return params


class HttpMethod(enum.Enum):
    """HTTP method of a plugin-declared inbound API route."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    def as_str(self) -> str:
        """The method as an upper-case string."""
        return self.value


@dataclass
class ApiRouteDeclaration:
    """One inbound HTTP API route declared by a plugin."""

    method: HttpMethod
    path: str
    handler_fn: str

    @classmethod
    def get(cls, path: str, handler_fn: str) -> ApiRouteDeclaration:
        return cls(HttpMethod.GET, path, handler_fn)

    @classmethod
    def post(cls, path: str, handler_fn: str) -> ApiRouteDeclaration:
        return cls(HttpMethod.POST, path, handler_fn)

    @classmethod
    def put(cls, path: str, handler_fn: str) -> ApiRouteDeclaration:
        return cls(HttpMethod.PUT, path, handler_fn)

    @classmethod
    def patch(cls, path: str, handler_fn: str) -> ApiRouteDeclaration:
        return cls(HttpMethod.PATCH, path, handler_fn)

    @classmethod
    def delete(cls, path: str, handler_fn: str) -> ApiRouteDeclaration:
        return cls(HttpMethod.DELETE, path, handler_fn)


@dataclass
class ApiRequest:
    """Request delivered to a plugin's API handler."""

    path_params: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass
class ApiResponse:
    """Response returned by a plugin's API handler."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass
class PageRouteDeclaration:
    """A view page served under the host's catch-all prefix."""

    path: str
    render_fn: str
    title: Optional[str] = None
    bypass_layout: bool = False


@dataclass
class PageRouteInput:
    """Input delivered to a plugin's page render function."""

    path_params: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, str] = field(default_factory=dict)
    session: SessionCtx = field(default_factory=SessionCtx)


@dataclass
class PageRouteOutput:
    """A rendered plugin page."""

    view: PluginView = field(default_factory=Empty)
    bypass_layout: bool = False
    title: Optional[str] = None


@dataclass
class HttpRequest:
    """An outbound HTTP request made by a plugin."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


@dataclass
class HttpResponse:
    """The response returned to a plugin after an outbound request."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""