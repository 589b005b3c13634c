import json

import pytest

from plugview.views import (
    PROTOCOL_VERSION,
    BoundEventHandler,
    ClientCapabilities,
    DomEvent,
    Empty,
    Fragment,
    HandlerId,
    HostComponentRef,
    Incompatible,
    PluginId,
    PriorityHint,
    SessionCtx,
    SessionId,
    Text,
    ViewElement,
    session_from_json,
    session_to_json,
    view_from_json,
    view_to_json,
)


def _sample_tree():
    return ViewElement(
        tag="div",
        name="root",
        key="k1",
        attrs=[("class", "card big"), ("hidden", False), ("tabindex", 2.0)],
        handlers=[BoundEventHandler(DomEvent.CLICK, HandlerId("h1"), 200)],
        children=[
            Text("hello"),
            HostComponentRef(name="UserAvatar", props={"user_id": 42}, children=[Text("x")]),
            Fragment([Empty(), Text("y")]),
            Incompatible(reason="too old", fallback=Text("fallback")),
            Incompatible(reason="no fallback"),
        ],
    )


def test_view_round_trip_through_json_text():
    tree = _sample_tree()
    wire = json.loads(json.dumps(view_to_json(tree)))
    assert view_from_json(wire) == tree


def test_empty_wire_form_is_bare_string():
    assert view_to_json(Empty()) == "Empty"
    assert view_from_json("Empty") == Empty()


def test_text_wire_form_is_tagged():
    assert view_to_json(Text("hi")) == {"Text": "hi"}


def test_attr_wire_forms():
    el = ViewElement(tag="input", attrs=[("value", "v"), ("disabled", True), ("size", 3)])
    attrs = view_to_json(el)["Element"]["attrs"]
    assert attrs[0] == ["value", {"String": "v"}]
    assert attrs[1] == ["disabled", {"Bool": True}]
    assert attrs[2] == ["size", {"Number": 3.0}]


def test_number_attr_comes_back_as_float():
    el = ViewElement(tag="input", attrs=[("size", 3)])
    back = view_from_json(view_to_json(el))
    assert back.attrs == [("size", 3.0)]
    assert isinstance(back.attrs[0][1], float)


def test_handler_wire_form_uses_event_name():
    el = ViewElement(tag="button", handlers=[BoundEventHandler(DomEvent.KEY_DOWN, HandlerId("h"))])
    handler = view_to_json(el)["Element"]["handlers"][0]
    assert handler == {"event": "KeyDown", "handler_id": "h", "debounce_ms": None}


def test_incompatible_without_fallback_serialises_null():
    assert view_to_json(Incompatible(reason="r")) == {"Incompatible": {"reason": "r", "fallback": None}}


@pytest.mark.parametrize("bad", ["Bogus", {"Unknown": 1}, {"Text": 5}, [], {"Fragment": "x"}, {"Element": {"tag": "div"}}])
def test_malformed_view_raises(bad):
    with pytest.raises(ValueError):
        view_from_json(bad)


def test_bad_attr_value_raises():
    wire = {"Element": {"tag": "a", "attrs": [["k", {"Weird": 1}]], "handlers": [], "children": []}}
    with pytest.raises(ValueError):
        view_from_json(wire)


def test_unknown_dom_event_raises():
    wire = {
        "Element": {
            "tag": "a",
            "attrs": [],
            "handlers": [{"event": "Hover", "handler_id": "h"}],
            "children": [],
        }
    }
    with pytest.raises(ValueError):
        view_from_json(wire)


def test_to_json_rejects_non_view():
    with pytest.raises(TypeError):
        view_to_json("not a view")


def test_default_ssr_capabilities():
    caps = ClientCapabilities.default_ssr()
    assert caps.protocol_version == PROTOCOL_VERSION
    assert caps.app_version == 0
    assert caps.registered_host_components == []


def test_default_ssr_uses_protocol_version_one():
    assert ClientCapabilities.default_ssr().protocol_version == 1


def test_priority_numeric_values():
    assert PriorityHint.FIRST.as_numeric() == 1000
    assert PriorityHint.HIGH.as_numeric() == 750
    assert PriorityHint.NORMAL.as_numeric() == 500
    assert PriorityHint.LOW.as_numeric() == 250
    assert PriorityHint.LAST.as_numeric() == 0


def test_priority_ordering_is_strictly_decreasing():
    assert (
        PriorityHint.FIRST.as_numeric()
        > PriorityHint.HIGH.as_numeric()
        > PriorityHint.NORMAL.as_numeric()
        > PriorityHint.LOW.as_numeric()
        > PriorityHint.LAST.as_numeric()
    )


def test_default_session():
    session = SessionCtx()
    assert session.session_id == SessionId("")
    assert session.user_id is None
    assert session.caller is None


def test_session_round_trip():
    session = SessionCtx(
        session_id=SessionId("s1"),
        user_id="u1",
        client=ClientCapabilities(protocol_version=1, app_version=7, registered_host_components=["Card"]),
        caller=PluginId("org/plugin"),
    )
    wire = json.loads(json.dumps(session_to_json(session)))
    assert wire["session_id"] == "s1"
    assert wire["caller"] == "org/plugin"
    assert session_from_json(wire) == session


def test_session_from_json_missing_field_raises():
    with pytest.raises(ValueError):
        session_from_json({"session_id": "s"})


def test_identifiers_are_hashable_and_compare_by_value():
    ids = {PluginId("a/b"), PluginId("a/b"), PluginId("c/d")}
    assert len(ids) == 2
    assert str(HandlerId("h1")) == "h1"