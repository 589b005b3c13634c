"""Plugin manifest, capabilities, hooks, events, transforms and render results."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from plugview.routing import ApiRouteDeclaration, PageRouteDeclaration, RoutePattern
from plugview.selectors import Selector, TransformOperation
from plugview.views import ClientCapabilities, PluginId, PluginView, PriorityHint, SessionCtx

# ── State scope ──────────────────────────────────────────────────────────────


class ScopeKind(enum.Enum):
    """How a plugin's state is partitioned."""

    PER_SESSION = "PerSession"
    GLOBAL = "Global"
    HYBRID = "Hybrid"


@dataclass(frozen=True)
class StateScope:
    """State scope declared by a plugin; key lists apply only to hybrid scopes."""

    kind: ScopeKind = ScopeKind.PER_SESSION
    global_keys: tuple[str, ...] = ()
    session_keys: tuple[str, ...] = ()

    @classmethod
    def hybrid(cls, global_keys, session_keys) -> StateScope:
        """A scope that keeps ``global_keys`` globally and ``session_keys`` per session."""
        return cls(ScopeKind.HYBRID, tuple(global_keys), tuple(session_keys))


# ── Registrations ────────────────────────────────────────────────────────────


@dataclass
class SlotRegistration:
    """One slot this plugin contributes to."""

    name: str
    priority_hint: PriorityHint = PriorityHint.NORMAL


@dataclass
class HookRegistration:
    """One hook this plugin intercepts."""

    hook_name: str
    priority_hint: PriorityHint = PriorityHint.NORMAL


# ── Host capabilities ────────────────────────────────────────────────────────


@dataclass
class HttpCapability:
    """Permission to make outbound HTTP requests to these hosts."""

    allowed_hosts: list[str] = field(default_factory=list)


@dataclass
class GlobalStateReadCapability:
    """Permission to read these global state keys."""

    keys: list[str] = field(default_factory=list)


@dataclass
class GlobalStateWriteCapability:
    """Permission to write these global state keys."""

    keys: list[str] = field(default_factory=list)


@dataclass
class ReadPluginStateCapability:
    """Permission to read these keys of another plugin's state."""

    plugin_id: PluginId
    keys: list[str] = field(default_factory=list)


@dataclass
class InvokeCapability:
    """Permission to call named host-side invocations."""

    names: list[str] = field(default_factory=list)


@dataclass
class CustomCapability:
    """A host-defined capability; denied unless the host registers a check for ``namespace``."""

    namespace: str
    value: Any = None


HostCapability = Union[
    HttpCapability,
    GlobalStateReadCapability,
    GlobalStateWriteCapability,
    ReadPluginStateCapability,
    InvokeCapability,
    CustomCapability,
]


# ── Transforms ───────────────────────────────────────────────────────────────


@dataclass
class TransformDeclaration:
    """A dynamic extension: select a point, apply an operation."""

    selector: Selector
    transform_fn: str
    op: TransformOperation
    priority_hint: PriorityHint = PriorityHint.NORMAL


@dataclass
class TransformContext:
    """Context available to a transform call."""

    route_params: dict[str, str] = field(default_factory=dict)
    component_props: Any = None
    slot_name: Optional[str] = None
    client: ClientCapabilities = field(default_factory=ClientCapabilities)


@dataclass
class TransformInput:
    """Input passed to a plugin's transform function."""

    original: Optional[PluginView] = None
    context: TransformContext = field(default_factory=TransformContext)
    session: SessionCtx = field(default_factory=SessionCtx)


@dataclass
class TransformOutput:
    """Output returned by a plugin's transform function."""

    view: PluginView


# ── Manifest ─────────────────────────────────────────────────────────────────


@dataclass
class PluginManifest:
    """What a plugin declares about itself."""

    id: PluginId = field(default_factory=PluginId)
    version: str = ""
    min_protocol_version: int = 0
    min_app_version: int = 0
    required_host_components: list[str] = field(default_factory=list)
    state_scope: StateScope = field(default_factory=StateScope)
    slots: list[SlotRegistration] = field(default_factory=list)
    hooks: list[HookRegistration] = field(default_factory=list)
    event_subscriptions: list[str] = field(default_factory=list)
    transforms: list[TransformDeclaration] = field(default_factory=list)
    host_capabilities: list[HostCapability] = field(default_factory=list)
    api_routes: list[ApiRouteDeclaration] = field(default_factory=list)
    page_routes: list[PageRouteDeclaration] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)


# ── Hooks ────────────────────────────────────────────────────────────────────


@dataclass
class HookCall:
    """Input to a plugin's hook handler."""

    hook_name: str
    context: Any = None


@dataclass
class HookContinue:
    """Pass the (possibly modified) context to the next handler."""

    context: Any = None


@dataclass
class HookCancel:
    """Stop the hook chain with a reason."""

    reason: str


@dataclass
class HookReplace:
    """Replace the context outright."""

    context: Any = None


HookResult = Union[HookContinue, HookCancel, HookReplace]


def hook_result_to_json(result: HookResult) -> dict[str, Any]:
    """Convert a hook result to its internally tagged wire form."""
    if isinstance(result, HookContinue):
        return {"type": "continue", "context": result.context}
    if isinstance(result, HookCancel):
        return {"type": "cancel", "reason": result.reason}
    if isinstance(result, HookReplace):
        return {"type": "replace", "context": result.context}
    raise TypeError(f"not a hook result: {result!r}")


def hook_result_from_json(data: Any) -> HookResult:
    """Build a hook result from its wire form; raises ``ValueError`` if malformed."""
    if not isinstance(data, dict) or "type" not in data:
        raise ValueError(f"invalid hook result: {data!r}")
    kind = data["type"]
    if kind in ("continue", "replace"):
        if "context" not in data:
            raise ValueError(f"hook result {kind!r} is missing its context")
        cls = HookContinue if kind == "continue" else HookReplace
        return cls(data["context"])
    if kind == "cancel":
        reason = data.get("reason")
        if not isinstance(reason, str):
            raise ValueError(f"hook cancel needs a string reason: {data!r}")
        return HookCancel(reason)
    raise ValueError(f"unknown hook result type: {kind!r}")


# ── Events, slots and interactions ───────────────────────────────────────────


@dataclass
class PluginEvent:
    """An event routed via the event bus; ``source`` is ``None`` when the host emitted it."""

    name: str
    payload: Any = None
    source: Optional[PluginId] = None


@dataclass
class SlotContent:
    """One plugin's contribution to a named slot."""

    plugin_id: PluginId
    priority: int
    view: PluginView


@dataclass
class ViewUpdate:
    """Returned by an interaction handler: an optional new view and events to emit."""

    view: Optional[PluginView] = None
    events: list[PluginEvent] = field(default_factory=list)


# ── Client requirements and override map ─────────────────────────────────────


@dataclass
class AppUpdateRequired:
    """Loaded plugins need a newer client than the one connected."""

    current_protocol: int
    required_protocol: int
    current_app: int
    required_app: int
    blocking_plugins: list[PluginId] = field(default_factory=list)


@dataclass
class PluginClientRequirement:
    """One plugin's client requirements."""

    min_protocol_version: int = 0
    min_app_version: int = 0
    required_host_components: list[str] = field(default_factory=list)


@dataclass
class OverrideMap:
    """What plugins override, served once at startup and refreshed on reload."""

    version: int = 0
    overridden_components: set[str] = field(default_factory=set)
    transformed_slots: set[str] = field(default_factory=set)
    route_patterns: list[RoutePattern] = field(default_factory=list)
    required_protocol_version: int = 0
    required_app_version: int = 0
    plugin_requirements: dict[PluginId, PluginClientRequirement] = field(default_factory=dict)
    page_route_prefix: Optional[str] = None


# ── Render results ───────────────────────────────────────────────────────────


@dataclass
class RouteTransforms:
    """Route transforms resolved for the current path."""

    before: list[PluginView] = field(default_factory=list)
    wrap: Optional[PluginView] = None
    after: list[PluginView] = field(default_factory=list)
    replacement: Optional[PluginView] = None

    @classmethod
    def empty(cls) -> RouteTransforms:
        """Transforms with no contributions."""
        return cls()

    def is_empty(self) -> bool:
        """True if every partition is empty."""
        return not self.before and self.wrap is None and not self.after and self.replacement is None

    def has_wrap(self) -> bool:
        """True if a wrap transform was resolved."""
        return self.wrap is not None

    def has_replacement(self) -> bool:
        """True if a route-replace transform was resolved."""
        return self.replacement is not None


@dataclass
class ComponentResolution:
    """Resolved transforms for one named component."""

    before: list[PluginView] = field(default_factory=list)
    replacement: Optional[PluginView] = None
    after: list[PluginView] = field(default_factory=list)


@dataclass
class SsrRouteTransforms:
    """Route transforms as embedded into server-rendered output."""

    before: list[PluginView] = field(default_factory=list)
    wrap: Optional[PluginView] = None
    after: list[PluginView] = field(default_factory=list)
    replacement: Optional[PluginView] = None


@dataclass
class SsrComponentResolution:
    """Component resolution as embedded into server-rendered output."""

    before: list[PluginView] = field(default_factory=list)
    replacement: Optional[PluginView] = None
    after: list[PluginView] = field(default_factory=list)


@dataclass
class SsrRouteOutput:
    """Output of a full server-side render pass for one route."""

    route_transforms: SsrRouteTransforms = field(default_factory=SsrRouteTransforms)
    slots: dict[str, list[SlotContent]] = field(default_factory=dict)
    components: dict[str, Optional[SsrComponentResolution]] = field(default_factory=dict)