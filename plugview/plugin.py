"""Plugin-side interfaces and the export table a host calls into.

A plugin is a class implementing ``Plugin.manifest`` plus any of the provider
interfaces. ``PluginExports`` gathers the callable exports a host invokes by
name; errors raised as ``PdkError`` come back to the host as ``ExportError``.
"""

from __future__ import annotations

import abc
import copy
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Iterable, Optional

from plugview.errors import PdkError
from plugview.manifest import (
    HookCall,
    HookResult,
    PluginEvent,
    PluginManifest,
    TransformInput,
    TransformOutput,
    ViewUpdate,
)
from plugview.routing import ApiRequest, ApiResponse
from plugview.views import ClientCapabilities, HandlerId, PluginView, SessionCtx

# ── Plugin context ───────────────────────────────────────────────────────────


@dataclass
class PluginCtx:
    """Runtime context available inside every plugin call."""

    session: SessionCtx
    client: ClientCapabilities

    @classmethod
    def from_session(cls, session: SessionCtx) -> PluginCtx:
        """Build the context from the session received on a call."""
        return cls(session=session, client=copy.deepcopy(session.client))


# ── Core interfaces ──────────────────────────────────────────────────────────


class Plugin(abc.ABC):
    """Implemented by every plugin class to declare its manifest."""

    @classmethod
    @abc.abstractmethod
    def manifest(cls) -> PluginManifest:
        """The plugin's manifest."""


class SlotProvider(Plugin):
    """Contributes content to the slot named by ``SLOT_NAME``."""

    SLOT_NAME: ClassVar[str]

    @classmethod
    @abc.abstractmethod
    def render(cls, ctx: PluginCtx) -> PluginView:
        """Render the slot contribution; raise ``PdkError`` on failure."""


class HookHandler(Plugin):
    """Intercepts the hook named by ``HOOK_NAME``."""

    HOOK_NAME: ClassVar[str]

    @classmethod
    @abc.abstractmethod
    def handle(cls, call: HookCall, ctx: PluginCtx) -> HookResult:
        """Handle one hook call; raise ``PdkError`` on failure."""


class EventSubscriber(Plugin):
    """Receives events from the event bus."""

    @classmethod
    @abc.abstractmethod
    def on_event(cls, event: PluginEvent, ctx: PluginCtx) -> None:
        """Handle one event; raise ``PdkError`` on failure."""


class InteractionHandler(Plugin):
    """Handles UI interactions."""

    @classmethod
    @abc.abstractmethod
    def on_interaction(cls, handler_id: HandlerId, event_data: Any, ctx: PluginCtx) -> ViewUpdate:
        """Handle one interaction; raise ``PdkError`` on failure."""


class OnLoad(Plugin):
    """Called once after the plugin is loaded."""

    @classmethod
    @abc.abstractmethod
    def on_load(cls, ctx: PluginCtx) -> None:
        """Initialise; raising ``PdkError`` makes the plugin fail to load."""


class OnUnload(Plugin):
    """Called before the plugin is unloaded."""

    @classmethod
    @abc.abstractmethod
    def on_unload(cls) -> None:
        """Clean up; raise ``PdkError`` on failure."""


class TransformProvider(Plugin):
    """Provides route, slot and component transforms."""

    @classmethod
    @abc.abstractmethod
    def transform(cls, transform_input: TransformInput, ctx: PluginCtx) -> TransformOutput:
        """Apply the transform; raise ``PdkError`` on failure."""


# ── Exports ──────────────────────────────────────────────────────────────────


class ExportError(Exception):
    """An export failed or does not exist; carries the message the host sees."""


def _require(cls: type, interface: type) -> None:
    if not (isinstance(cls, type) and issubclass(cls, interface)):
        raise TypeError(f"{cls!r} does not implement {interface.__name__}")


class PluginExports:
    """The named functions a plugin exposes to its host."""

    def __init__(self, plugin: type[Plugin], slots: Iterable[type[SlotProvider]] = ()) -> None:
        _require(plugin, Plugin)
        self._exports: dict[str, Callable[..., Any]] = {}
        self._register("manifest", plugin.manifest)
        for slot in slots:
            _require(slot, SlotProvider)
            self._register("slot_render", self._slot_export(slot))

    @staticmethod
    def _slot_export(slot: type[SlotProvider]) -> Callable[[SessionCtx], PluginView]:
        def slot_render(session: SessionCtx) -> PluginView:
            return slot.render(PluginCtx.from_session(session))

        return slot_render

    def _register(self, name: str, fn: Callable[..., Any]) -> PluginExports:
        if name in self._exports:
            raise ValueError(f"duplicate export {name!r}")
        self._exports[name] = fn
        return self

    def add_hook(self, handler: type[HookHandler], export_name: Optional[str] = None) -> PluginExports:
        """Export a hook handler, by default as ``hook_<HOOK_NAME>``; called with (call, session)."""
        _require(handler, HookHandler)
        name = export_name if export_name is not None else f"hook_{handler.HOOK_NAME}"

        def hook(call: HookCall, session: SessionCtx) -> HookResult:
            return handler.handle(call, PluginCtx.from_session(session))

        return self._register(name, hook)

    def add_transform(self, provider: type[TransformProvider], export_name: str) -> PluginExports:
        """Export a transform provider; called with a ``TransformInput``."""
        _require(provider, TransformProvider)

        def transform(transform_input: TransformInput) -> TransformOutput:
            ctx = PluginCtx.from_session(copy.deepcopy(transform_input.session))
            return provider.transform(transform_input, ctx)

        return self._register(export_name, transform)

    def add_events(self, subscriber: type[EventSubscriber]) -> PluginExports:
        """Export ``on_event``; called with (event, session)."""
        _require(subscriber, EventSubscriber)

        def on_event(event: PluginEvent, session: SessionCtx) -> None:
            subscriber.on_event(event, PluginCtx.from_session(session))

        return self._register("on_event", on_event)

    def add_interactions(self, handler: type[InteractionHandler]) -> PluginExports:
        """Export ``on_interaction``; called with (handler_id, event_data, session)."""
        _require(handler, InteractionHandler)

        def on_interaction(handler_id: HandlerId, event_data: Any, session: SessionCtx) -> ViewUpdate:
            return handler.on_interaction(handler_id, event_data, PluginCtx.from_session(session))

        return self._register("on_interaction", on_interaction)

    def add_on_load(self, plugin: type[OnLoad]) -> PluginExports:
        """Export ``on_load``; called with a session."""
        _require(plugin, OnLoad)

        def on_load(session: SessionCtx) -> None:
            plugin.on_load(PluginCtx.from_session(session))

        return self._register("on_load", on_load)

    def add_on_unload(self, plugin: type[OnUnload]) -> PluginExports:
        """Export ``on_unload``; called with no arguments."""
        _require(plugin, OnUnload)

        def on_unload() -> None:
            plugin.on_unload()

        return self._register("on_unload", on_unload)

    def add_api_route(
        self, export_name: str, handler: Callable[[ApiRequest], ApiResponse]
    ) -> PluginExports:
        """Export an API route handler; called with an ``ApiRequest``."""
        if not callable(handler):
            raise TypeError(f"API route handler {handler!r} is not callable")
        return self._register(export_name, handler)

    def names(self) -> list[str]:
        """Export names in registration order."""
        return list(self._exports)

    def call(self, name: str, *args: Any) -> Any:
        """Invoke an export; plugin errors come back as ``ExportError``."""
        try:
            fn = self._exports[name]
        except KeyError:
            raise ExportError(f"no export named {name!r}") from None
        try:
            return fn(*args)
        except PdkError as exc:
            raise ExportError(str(exc)) from exc