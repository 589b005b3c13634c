"""Matching node selectors against plugin view trees and editing matched nodes."""

from __future__ import annotations

import copy
from dataclasses import replace

from plugview.selectors import (
    And,
    DataAttr,
    First,
    HasClass,
    HostComponentNamed,
    Index,
    Last,
    Name,
    NodeSelector,
    Or,
    Recursive,
    Tag,
)
from plugview.views import AttrValue, Fragment, HostComponentRef, PluginView, ViewElement

TARGET_PLACEHOLDER = "__target__"


def _children(view: PluginView) -> list[PluginView]:
    if isinstance(view, ViewElement):
        return view.children
    if isinstance(view, Fragment):
        return view.children
    return []


def find_shallow_matching(view: PluginView, selector: NodeSelector) -> list[PluginView]:
    """Direct children of ``view`` that match ``selector``.

    Position selectors are resolved against the child list; nothing recurses.
    """
    children = _children(view)
    if isinstance(selector, First):
        return children[:1]
    if isinstance(selector, Last):
        return children[-1:]
    if isinstance(selector, Index):
        return [children[selector.index]] if selector.index < len(children) else []
    return [child for child in children if node_matches(child, selector)]


def _walk(view: PluginView):
    yield view
    for child in _children(view):
        yield from _walk(child)


def find_recursive_matching(view: PluginView, selector: NodeSelector) -> list[PluginView]:
    """All nodes at any depth in ``view``, itself included, that match ``selector``."""
    return [node for node in _walk(view) if node_matches(node, selector)]


def _has_class(element: ViewElement, cls: str) -> bool:
    return any(
        key == "class" and isinstance(value, str) and cls in value.split()
        for key, value in element.attrs
    )


def node_matches(view: PluginView, selector: NodeSelector) -> bool:
    """True if ``view`` itself matches ``selector``.

    ``Recursive`` delegates to its inner selector without descending; position
    selectors never match here because they need the parent's child list.
    """
    if isinstance(selector, Tag):
        return isinstance(view, ViewElement) and view.tag == selector.tag
    if isinstance(selector, HasClass):
        return isinstance(view, ViewElement) and _has_class(view, selector.class_name)
    if isinstance(selector, Name):
        return isinstance(view, ViewElement) and view.name == selector.name
    if isinstance(selector, DataAttr):
        return isinstance(view, ViewElement) and any(
            key == selector.key and isinstance(value, str) and value == selector.value
            for key, value in view.attrs
        )
    if isinstance(selector, HostComponentNamed):
        return isinstance(view, HostComponentRef) and view.name == selector.name
    if isinstance(selector, And):
        return node_matches(view, selector.left) and node_matches(view, selector.right)
    if isinstance(selector, Or):
        return node_matches(view, selector.left) or node_matches(view, selector.right)
    if isinstance(selector, Recursive):
        return node_matches(view, selector.inner)
    return False


def is_recursive_selector(selector: NodeSelector) -> bool:
    """True if traversal should descend into non-matching children."""
    return isinstance(selector, Recursive)


def add_class_to_view(view: PluginView, cls: str) -> PluginView:
    """A copy of an element with ``cls`` appended to its class list; other views unchanged."""
    if not isinstance(view, ViewElement):
        return view
    attrs = list(view.attrs)
    for pos, (key, value) in enumerate(attrs):
        if key == "class":
            if isinstance(value, str):
                attrs[pos] = (key, f"{value} {cls}")
                return replace(view, attrs=attrs)
            break
    attrs.append(("class", cls))
    return replace(view, attrs=attrs)


def set_attr_on_view(view: PluginView, key: str, value: AttrValue) -> PluginView:
    """A copy of an element with ``key`` set to ``value``; other views unchanged."""
    if not isinstance(view, ViewElement):
        return view
    attrs = list(view.attrs)
    for pos, (existing, _) in enumerate(attrs):
        if existing == key:
            attrs[pos] = (key, value)
            break
    else:
        attrs.append((key, value))
    return replace(view, attrs=attrs)


def resolve_target_in_view(wrapper: PluginView, target: PluginView) -> PluginView:
    """Replace every ``__target__`` host-component placeholder in ``wrapper`` with ``target``."""
    if isinstance(wrapper, HostComponentRef) and wrapper.name == TARGET_PLACEHOLDER:
        return copy.deepcopy(target)
    if isinstance(wrapper, ViewElement):
        return replace(wrapper, children=[resolve_target_in_view(c, target) for c in wrapper.children])
    if isinstance(wrapper, Fragment):
        return Fragment([resolve_target_in_view(c, target) for c in wrapper.children])
    return wrapper