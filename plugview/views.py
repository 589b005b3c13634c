"""Identifiers, client capabilities, session context and the plugin view tree.

Views are plain dataclasses. ``view_to_json`` and ``view_from_json`` convert a
view tree to and from its wire form, in which every view is an externally
tagged object such as ``{"Text": "hello"}`` or the bare string ``"Empty"``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional, Union

PROTOCOL_VERSION = 1
"""Bumped whenever a protocol type gains variants or fields old clients cannot handle."""

AttrValue = Union[str, bool, float]
"""A typed attribute value: a string, a boolean or a number."""


# ── Core identifiers ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PluginId:
    """Globally unique plugin identifier, ``"org/plugin-name"``."""

    value: str = ""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HandlerId:
    """Opaque handler reference embedded in a view's event handler."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SessionId:
    """Session identifier (a user session, an HTTP request, and so on)."""

    value: str = ""

    def __str__(self) -> str:
        return self.value


# ── Client capabilities and session ──────────────────────────────────────────


@dataclass
class ClientCapabilities:
    """What the connecting client can render."""

    protocol_version: int = 0
    app_version: int = 0
    registered_host_components: list[str] = field(default_factory=list)

    @classmethod
    def default_ssr(cls) -> ClientCapabilities:
        """Capabilities for server-side rendering, where there is no real client."""
        return cls(protocol_version=PROTOCOL_VERSION, app_version=0, registered_host_components=[])

    def to_json(self) -> dict[str, Any]:
        return {
            "protocol_version": self.protocol_version,
            "app_version": self.app_version,
            "registered_host_components": list(self.registered_host_components),
        }

    @classmethod
    def from_json(cls, data: Any) -> ClientCapabilities:
        try:
            return cls(
                protocol_version=int(data["protocol_version"]),
                app_version=int(data["app_version"]),
                registered_host_components=[str(n) for n in data["registered_host_components"]],
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"invalid client capabilities: {data!r}") from exc


@dataclass
class SessionCtx:
    """Session and caller context threaded through every plugin call."""

    session_id: SessionId = field(default_factory=SessionId)
    user_id: Optional[str] = None
    client: ClientCapabilities = field(default_factory=ClientCapabilities)
    caller: Optional[PluginId] = None


def session_to_json(session: SessionCtx) -> dict[str, Any]:
    """Convert a session context to its wire form."""
    return {
        "session_id": session.session_id.value,
        "user_id": session.user_id,
        "client": session.client.to_json(),
        "caller": session.caller.value if session.caller is not None else None,
    }


def session_from_json(data: Any) -> SessionCtx:
    """Build a session context from its wire form; raises ``ValueError`` if malformed."""
    if not isinstance(data, dict):
        raise ValueError(f"invalid session: {data!r}")
    try:
        caller = data.get("caller")
        return SessionCtx(
            session_id=SessionId(str(data["session_id"])),
            user_id=data.get("user_id"),
            client=ClientCapabilities.from_json(data["client"]),
            caller=PluginId(str(caller)) if caller is not None else None,
        )
    except KeyError as exc:
        raise ValueError(f"invalid session: missing {exc}") from exc


# ── Priority ─────────────────────────────────────────────────────────────────


class PriorityHint(enum.Enum):
    """A plugin's suggested position in any ordered sequence."""

    FIRST = "First"
    HIGH = "High"
    NORMAL = "Normal"
    LOW = "Low"
    LAST = "Last"

    def as_numeric(self) -> int:
        """The numeric bucket used for ordering; higher runs earlier."""
        return _PRIORITY_NUMERIC[self]


_PRIORITY_NUMERIC = {
    PriorityHint.FIRST: 1000,
    PriorityHint.HIGH: 750,
    PriorityHint.NORMAL: 500,
    PriorityHint.LOW: 250,
    PriorityHint.LAST: 0,
}


# ── Event handlers ───────────────────────────────────────────────────────────


class DomEvent(enum.Enum):
    """DOM events a plugin can listen for."""

    CLICK = "Click"
    INPUT = "Input"
    CHANGE = "Change"
    SUBMIT = "Submit"
    FOCUS = "Focus"
    BLUR = "Blur"
    KEY_DOWN = "KeyDown"
    KEY_UP = "KeyUp"


@dataclass
class BoundEventHandler:
    """An event handler bound to a DOM event on an element."""

    event: DomEvent
    handler_id: HandlerId
    debounce_ms: Optional[int] = None


# ── View tree ────────────────────────────────────────────────────────────────


@dataclass
class ViewElement:
    """A virtual element node."""

    tag: str = ""
    name: Optional[str] = None
    key: Optional[str] = None
    attrs: list[tuple[str, AttrValue]] = field(default_factory=list)
    handlers: list[BoundEventHandler] = field(default_factory=list)
    children: list[PluginView] = field(default_factory=list)


@dataclass
class Text:
    """A text node."""

    content: str


@dataclass
class HostComponentRef:
    """A reference to a named host component with forwarded props and children."""

    name: str = ""
    props: Any = None
    children: list[PluginView] = field(default_factory=list)


@dataclass
class Fragment:
    """A list of sibling views without a wrapping element."""

    children: list[PluginView] = field(default_factory=list)


@dataclass
class Empty:
    """Renders nothing."""


@dataclass
class Incompatible:
    """Served when a plugin's requirements exceed the client's capabilities."""

    reason: str
    fallback: Optional[PluginView] = None


PluginView = Union[ViewElement, Text, HostComponentRef, Fragment, Empty, Incompatible]


# ── Wire form ────────────────────────────────────────────────────────────────


def _attr_to_json(value: AttrValue) -> dict[str, Any]:
    if isinstance(value, bool):
        return {"Bool": value}
    if isinstance(value, (int, float)):
        return {"Number": float(value)}
    if isinstance(value, str):
        return {"String": value}
    raise TypeError(f"unsupported attribute value: {value!r}")


def _attr_from_json(data: Any) -> AttrValue:
    if isinstance(data, dict) and len(data) == 1:
        ((kind, value),) = data.items()
        if kind == "String" and isinstance(value, str):
            return value
        if kind == "Bool" and isinstance(value, bool):
            return value
        if kind == "Number" and isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    raise ValueError(f"invalid attribute value: {data!r}")


def _handler_to_json(handler: BoundEventHandler) -> dict[str, Any]:
    return {
        "event": handler.event.value,
        "handler_id": handler.handler_id.value,
        "debounce_ms": handler.debounce_ms,
    }


def _handler_from_json(data: Any) -> BoundEventHandler:
    try:
        return BoundEventHandler(
            event=DomEvent(data["event"]),
            handler_id=HandlerId(str(data["handler_id"])),
            debounce_ms=data.get("debounce_ms"),
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"invalid event handler: {data!r}") from exc


def view_to_json(view: PluginView) -> Any:
    """Convert a view tree to its wire form."""
    if isinstance(view, ViewElement):
        return {
            "Element": {
                "tag": view.tag,
                "name": view.name,
                "key": view.key,
                "attrs": [[k, _attr_to_json(v)] for k, v in view.attrs],
                "handlers": [_handler_to_json(h) for h in view.handlers],
                "children": [view_to_json(c) for c in view.children],
            }
        }
    if isinstance(view, Text):
        return {"Text": view.content}
    if isinstance(view, HostComponentRef):
        return {
            "HostComponent": {
                "name": view.name,
                "props": view.props,
                "children": [view_to_json(c) for c in view.children],
            }
        }
    if isinstance(view, Fragment):
        return {"Fragment": [view_to_json(c) for c in view.children]}
    if isinstance(view, Empty):
        return "Empty"
    if isinstance(view, Incompatible):
        return {
            "Incompatible": {
                "reason": view.reason,
                "fallback": view_to_json(view.fallback) if view.fallback is not None else None,
            }
        }
    raise TypeError(f"not a plugin view: {view!r}")


def _element_from_json(body: Any) -> ViewElement:
    try:
        attrs = []
        for pair in body["attrs"]:
            key, value = pair
            attrs.append((str(key), _attr_from_json(value)))
        return ViewElement(
            tag=str(body["tag"]),
            name=body.get("name"),
            key=body.get("key"),
            attrs=attrs,
            handlers=[_handler_from_json(h) for h in body["handlers"]],
            children=[view_from_json(c) for c in body["children"]],
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"invalid element: {body!r}") from exc


def view_from_json(data: Any) -> PluginView:
    """Build a view tree from its wire form; raises ``ValueError`` if malformed."""
    if data == "Empty":
        return Empty()
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError(f"invalid plugin view: {data!r}")
    ((kind, body),) = data.items()
    if kind == "Element":
        return _element_from_json(body)
    if kind == "Text":
        if not isinstance(body, str):
            raise ValueError(f"invalid text node: {body!r}")
        return Text(body)
    if kind == "HostComponent":
        try:
            return HostComponentRef(
                name=str(body["name"]),
                props=body.get("props"),
                children=[view_from_json(c) for c in body["children"]],
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"invalid host component: {body!r}") from exc
    if kind == "Fragment":
        if not isinstance(body, list):
            raise ValueError(f"invalid fragment: {body!r}")
        return Fragment([view_from_json(c) for c in body])
    if kind == "Incompatible":
        try:
            fallback = body.get("fallback")
            return Incompatible(
                reason=str(body["reason"]),
                fallback=view_from_json(fallback) if fallback is not None else None,
            )
        except (KeyError, AttributeError) as exc:
            raise ValueError(f"invalid incompatible view: {body!r}") from exc
    raise ValueError(f"unknown plugin view variant: {kind!r}")