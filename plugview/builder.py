"""Fluent builders for plugin view trees."""

from __future__ import annotations

from typing import Any, Iterable

from plugview.views import (
    AttrValue,
    BoundEventHandler,
    DomEvent,
    Fragment,
    HandlerId,
    HostComponentRef,
    Incompatible,
    PluginView,
    Text,
    ViewElement,
)

CONTENT_PLACEHOLDER = "__content__"
TARGET_PLACEHOLDER = "__target__"


class ViewBuilder:
    """Fluent builder for an element view."""

    def __init__(self, tag: str) -> None:
        self._element = ViewElement(tag=tag)

    def _push_attr(self, name: str, value: AttrValue) -> ViewBuilder:
        self._element.attrs.append((name, value))
        return self

    def attr(self, name: str, value: str) -> ViewBuilder:
        """Add a string attribute."""
        return self._push_attr(name, str(value))

    def bool_attr(self, name: str, value: bool) -> ViewBuilder:
        """Add a boolean attribute such as ``disabled`` or ``hidden``."""
        return self._push_attr(name, bool(value))

    def num_attr(self, name: str, value: float) -> ViewBuilder:
        """Add a numeric attribute."""
        return self._push_attr(name, float(value))

    def class_(self, value: str) -> ViewBuilder:
        """Set the ``class`` attribute."""
        return self.attr("class", value)

    def id(self, value: str) -> ViewBuilder:
        """Set the ``id`` attribute."""
        return self.attr("id", value)

    def style(self, value: str) -> ViewBuilder:
        """Set the ``style`` attribute."""
        return self.attr("style", value)

    def href(self, value: str) -> ViewBuilder:
        """Set the ``href`` attribute."""
        return self.attr("href", value)

    def src(self, value: str) -> ViewBuilder:
        """Set the ``src`` attribute."""
        return self.attr("src", value)

    def alt(self, value: str) -> ViewBuilder:
        """Set the ``alt`` attribute."""
        return self.attr("alt", value)

    def type_(self, value: str) -> ViewBuilder:
        """Set the ``type`` attribute."""
        return self.attr("type", value)

    def value(self, value: str) -> ViewBuilder:
        """Set the ``value`` attribute."""
        return self.attr("value", value)

    def placeholder(self, value: str) -> ViewBuilder:
        """Set the ``placeholder`` attribute."""
        return self.attr("placeholder", value)

    def role(self, value: str) -> ViewBuilder:
        """Set the ``role`` attribute."""
        return self.attr("role", value)

    def disabled(self, value: bool) -> ViewBuilder:
        """Set the ``disabled`` attribute."""
        return self.bool_attr("disabled", value)

    def hidden(self, value: bool) -> ViewBuilder:
        """Set the ``hidden`` attribute."""
        return self.bool_attr("hidden", value)

    def data(self, name: str, value: str) -> ViewBuilder:
        """Set a ``data-*`` attribute; the ``data-`` prefix is added."""
        return self.attr(f"data-{name}", value)

    def plugin_slot(self, slot_name: str) -> ViewBuilder:
        """Mark this element as a ``data-plugin-slot`` target."""
        return self.attr("data-plugin-slot", slot_name)

    def name(self, name: str) -> ViewBuilder:
        """Set the stable selector name."""
        self._element.name = name
        return self

    def key(self, key: str) -> ViewBuilder:
        """Set a stable diff key."""
        self._element.key = key
        return self

    def child(self, child: PluginView) -> ViewBuilder:
        """Append a child view."""
        self._element.children.append(child)
        return self

    def children(self, children: Iterable[PluginView]) -> ViewBuilder:
        """Append several child views."""
        self._element.children.extend(children)
        return self

    def on(self, handler: BoundEventHandler) -> ViewBuilder:
        """Attach a pre-built event handler."""
        self._element.handlers.append(handler)
        return self

    def _on_event(self, event: DomEvent, handler_id: HandlerId) -> ViewBuilder:
        return self.on(BoundEventHandler(event=event, handler_id=handler_id))

    def on_click(self, handler_id: HandlerId) -> ViewBuilder:
        """Attach a ``click`` handler."""
        return self._on_event(DomEvent.CLICK, handler_id)

    def on_input(self, handler_id: HandlerId) -> ViewBuilder:
        """Attach an ``input`` handler."""
        return self._on_event(DomEvent.INPUT, handler_id)

    def on_change(self, handler_id: HandlerId) -> ViewBuilder:
        """Attach a ``change`` handler."""
        return self._on_event(DomEvent.CHANGE, handler_id)

    def on_submit(self, handler_id: HandlerId) -> ViewBuilder:
        """Attach a ``submit`` handler."""
        return self._on_event(DomEvent.SUBMIT, handler_id)

    def on_focus(self, handler_id: HandlerId) -> ViewBuilder:
        """Attach a ``focus`` handler."""
        return self._on_event(DomEvent.FOCUS, handler_id)

    def on_blur(self, handler_id: HandlerId) -> ViewBuilder:
        """Attach a ``blur`` handler."""
        return self._on_event(DomEvent.BLUR, handler_id)

    def on_keydown(self, handler_id: HandlerId) -> ViewBuilder:
        """Attach a ``keydown`` handler."""
        return self._on_event(DomEvent.KEY_DOWN, handler_id)

    def on_keyup(self, handler_id: HandlerId) -> ViewBuilder:
        """Attach a ``keyup`` handler."""
        return self._on_event(DomEvent.KEY_UP, handler_id)

    def debounce(self, ms: int) -> ViewBuilder:
        """Set a debounce delay on the most recent handler; no effect without one."""
        if self._element.handlers:
            self._element.handlers[-1].debounce_ms = ms
        return self

    def build(self) -> ViewElement:
        """Finish the element."""
        return self._element


# ── Element constructors ─────────────────────────────────────────────────────


def element(tag: str) -> ViewBuilder:
    """Start an element with the given tag."""
    return ViewBuilder(tag)


def div() -> ViewBuilder:
    return ViewBuilder("div")


def span() -> ViewBuilder:
    return ViewBuilder("span")


def p() -> ViewBuilder:
    return ViewBuilder("p")


def h1() -> ViewBuilder:
    return ViewBuilder("h1")


def h2() -> ViewBuilder:
    return ViewBuilder("h2")


def h3() -> ViewBuilder:
    return ViewBuilder("h3")


def h4() -> ViewBuilder:
    return ViewBuilder("h4")


def h5() -> ViewBuilder:
    return ViewBuilder("h5")


def h6() -> ViewBuilder:
    return ViewBuilder("h6")


def button() -> ViewBuilder:
    return ViewBuilder("button")


def input() -> ViewBuilder:  # noqa: A001
    return ViewBuilder("input")


def label() -> ViewBuilder:
    return ViewBuilder("label")


def a() -> ViewBuilder:
    return ViewBuilder("a")


def img() -> ViewBuilder:
    return ViewBuilder("img")


def ul() -> ViewBuilder:
    return ViewBuilder("ul")


def ol() -> ViewBuilder:
    return ViewBuilder("ol")


def li() -> ViewBuilder:
    return ViewBuilder("li")


def form() -> ViewBuilder:
    return ViewBuilder("form")


def section() -> ViewBuilder:
    return ViewBuilder("section")


def header() -> ViewBuilder:
    return ViewBuilder("header")


def footer() -> ViewBuilder:
    return ViewBuilder("footer")


def nav() -> ViewBuilder:
    return ViewBuilder("nav")


def article() -> ViewBuilder:
    return ViewBuilder("article")


def aside() -> ViewBuilder:
    return ViewBuilder("aside")


def table() -> ViewBuilder:
    return ViewBuilder("table")


def thead() -> ViewBuilder:
    return ViewBuilder("thead")


def tbody() -> ViewBuilder:
    return ViewBuilder("tbody")


def tr() -> ViewBuilder:
    return ViewBuilder("tr")


def td() -> ViewBuilder:
    return ViewBuilder("td")


def th() -> ViewBuilder:
    return ViewBuilder("th")


def textarea() -> ViewBuilder:
    return ViewBuilder("textarea")


def select() -> ViewBuilder:
    return ViewBuilder("select")


def option() -> ViewBuilder:
    return ViewBuilder("option")


# ── Non-element views ────────────────────────────────────────────────────────


def text(content: str) -> Text:
    """A text node."""
    return Text(content)


def fragment(children: Iterable[PluginView]) -> Fragment:
    """Collect views into a fragment."""
    return Fragment(list(children))


def incompatible(reason: str) -> Incompatible:
    """A view saying the plugin cannot render for this client."""
    return Incompatible(reason=reason)


def incompatible_with_fallback(reason: str, fallback: PluginView) -> Incompatible:
    """An incompatible view with a simpler fallback."""
    return Incompatible(reason=reason, fallback=fallback)


def original_content() -> HostComponentRef:
    """Placeholder for the original content inside a wrap transform."""
    return HostComponentRef(name=CONTENT_PLACEHOLDER)


def original_target() -> HostComponentRef:
    """Placeholder for the original node inside a wrap-node transform."""
    return HostComponentRef(name=TARGET_PLACEHOLDER)


# ── Host components ──────────────────────────────────────────────────────────


class HostComponentBuilder:
    """Fluent builder for a reference to a host-registered component."""

    def __init__(self, name: str) -> None:
        self._ref = HostComponentRef(name=name)

    def props(self, props: Any) -> HostComponentBuilder:
        """Set the JSON props forwarded to the host component."""
        self._ref.props = props
        return self

    def child(self, view: PluginView) -> HostComponentBuilder:
        """Append a child view."""
        self._ref.children.append(view)
        return self

    def children(self, children: Iterable[PluginView]) -> HostComponentBuilder:
        """Append several child views."""
        self._ref.children.extend(children)
        return self

    def build(self) -> HostComponentRef:
        """Finish the reference."""
        return self._ref


def host(name: str) -> HostComponentBuilder:
    """Start a reference to a named host component."""
    return HostComponentBuilder(name)