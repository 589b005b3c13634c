"""Selectors that address points in the rendered UI, and transform operations.

A *selector* picks a point in one of three layers: a named component or slot,
a route, or nodes inside a plugin view tree. A *node selector* picks nodes
within a view tree. Both are immutable and hashable.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Union

from plugview.routing import RoutePattern
from plugview.views import AttrValue

# ── Node selectors ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Tag:
    """Matches any element with this HTML tag."""

    tag: str


@dataclass(frozen=True)
class HasClass:
    """Matches any element whose class list contains this class."""

    class_name: str


@dataclass(frozen=True)
class HostComponentNamed:
    """Matches any host component reference with this name."""

    name: str


@dataclass(frozen=True)
class Name:
    """Matches any element whose stable ``name`` equals this string."""

    name: str


@dataclass(frozen=True)
class DataAttr:
    """Matches any element carrying the attribute ``key`` with string value ``value``."""

    key: str
    value: str


@dataclass(frozen=True)
class First:
    """Matches the first child of the outer selection."""


@dataclass(frozen=True)
class Last:
    """Matches the last child of the outer selection."""


@dataclass(frozen=True)
class Index:
    """Matches the child at this 0-based index."""

    index: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"child index must not be negative: {self.index}")


@dataclass(frozen=True)
class And:
    """Both inner selectors must match."""

    left: NodeSelector
    right: NodeSelector


@dataclass(frozen=True)
class Or:
    """Either inner selector must match."""

    left: NodeSelector
    right: NodeSelector


@dataclass(frozen=True)
class Recursive:
    """Apply the inner selector at any depth in the tree."""

    inner: NodeSelector


NodeSelector = Union[Tag, HasClass, HostComponentNamed, Name, DataAttr, First, Last, Index, And, Or, Recursive]


# ── Selectors ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ComponentSelector:
    """A named overridable component boundary."""

    name: str


@dataclass(frozen=True)
class SlotSelector:
    """A plugin slot by name; targets the slot's contribution list."""

    name: str


@dataclass(frozen=True)
class DataPluginSlotSelector:
    """An element carrying ``data-plugin-slot="value"`` inside any plugin view tree."""

    value: str


@dataclass(frozen=True)
class RouteSelector:
    """The rendered output of a route matching this pattern."""

    pattern: RoutePattern


@dataclass(frozen=True)
class WithinSelector:
    """Nodes selected by ``inner`` within the view tree produced by ``outer``."""

    outer: Selector
    inner: NodeSelector


@dataclass(frozen=True)
class AnySelector:
    """Applies to any selector in the list that matches."""

    selectors: tuple[Selector, ...] = ()

    def __init__(self, selectors: Iterable[Selector] = ()) -> None:
        object.__setattr__(self, "selectors", tuple(selectors))


Selector = Union[
    ComponentSelector,
    SlotSelector,
    DataPluginSlotSelector,
    RouteSelector,
    WithinSelector,
    AnySelector,
]


# ── Transform operations ─────────────────────────────────────────────────────


class TransformOp(enum.Enum):
    """A transform operation that renders a plugin view at the selected target."""

    # Route / slot level
    INJECT_BEFORE = "InjectBefore"
    INJECT_AFTER = "InjectAfter"
    WRAP = "Wrap"
    ROUTE_REPLACE = "RouteReplace"
    # Node level
    REPLACE = "Replace"
    WRAP_NODE = "WrapNode"
    INSERT_BEFORE = "InsertBefore"
    INSERT_AFTER = "InsertAfter"


@dataclass(frozen=True)
class AddClass:
    """Add a CSS class to the selected node; no new view is rendered."""

    class_name: str


@dataclass(frozen=True)
class SetAttr:
    """Set an attribute on the selected node; no new view is rendered."""

    key: str
    value: AttrValue


TransformOperation = Union[TransformOp, AddClass, SetAttr]