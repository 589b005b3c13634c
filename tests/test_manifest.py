import pytest

from plugview.manifest import (
    CustomCapability,
    HookCall,
    HookCancel,
    HookContinue,
    HookRegistration,
    HookReplace,
    OverrideMap,
    PluginEvent,
    PluginManifest,
    RouteTransforms,
    ScopeKind,
    SlotContent,
    SlotRegistration,
    StateScope,
    SsrRouteOutput,
    TransformDeclaration,
    TransformInput,
    ViewUpdate,
    hook_result_from_json,
    hook_result_to_json,
)
from plugview.selectors import SlotSelector, TransformOp
from plugview.views import Empty, PluginId, PriorityHint, Text


def test_manifest_defaults_are_empty():
    m = PluginManifest()
    assert m.id == PluginId("")
    assert m.slots == [] and m.hooks == [] and m.extensions == {}
    assert m.state_scope.kind is ScopeKind.PER_SESSION
    assert m.min_protocol_version == 0


def test_manifest_lists_are_independent():
    a, b = PluginManifest(), PluginManifest()
    a.slots.append(SlotRegistration("sidebar"))
    assert b.slots == []


def test_registration_default_priority_is_normal():
    assert SlotRegistration("sidebar").priority_hint is PriorityHint.NORMAL
    assert HookRegistration("before_save").priority_hint is PriorityHint.NORMAL


def test_hybrid_scope():
    scope = StateScope.hybrid(["theme"], ["cart"])
    assert scope.kind is ScopeKind.HYBRID
    assert scope.global_keys == ("theme",)
    assert scope.session_keys == ("cart",)


@pytest.mark.parametrize(
    "result",
    [HookContinue({"value": 42}), HookCancel("nope"), HookReplace([1, 2])],
)
def test_hook_result_round_trip(result):
    assert hook_result_from_json(hook_result_to_json(result)) == result


def test_hook_result_wire_tags():
    assert hook_result_to_json(HookCancel("denied")) == {"type": "cancel", "reason": "denied"}
    assert hook_result_to_json(HookContinue(None))["type"] == "continue"
    assert hook_result_to_json(HookReplace(None))["type"] == "replace"


@pytest.mark.parametrize(
    "data",
    [
        "cancel",
        {},
        {"type": "abort"},
        {"type": "continue"},
        {"type": "cancel"},
        {"type": "cancel", "reason": 5},
    ],
)
def test_hook_result_from_json_rejects_malformed(data):
    with pytest.raises(ValueError):
        hook_result_from_json(data)


def test_hook_result_to_json_rejects_other_types():
    with pytest.raises(TypeError):
        hook_result_to_json(HookCall("x"))


def test_route_transforms_empty():
    rt = RouteTransforms.empty()
    assert rt.is_empty()
    assert not rt.has_wrap()
    assert not rt.has_replacement()


def test_route_transforms_partitions():
    assert not RouteTransforms(before=[Text("a")]).is_empty()
    wrapped = RouteTransforms(wrap=Text("w"))
    assert wrapped.has_wrap() and not wrapped.is_empty()
    replaced = RouteTransforms(replacement=Empty())
    assert replaced.has_replacement() and not replaced.is_empty()


def test_transform_declaration_defaults():
    decl = TransformDeclaration(SlotSelector("sidebar"), "transform_wrap", TransformOp.WRAP)
    assert decl.priority_hint is PriorityHint.NORMAL
    assert decl.selector == SlotSelector("sidebar")


def test_transform_input_defaults():
    ti = TransformInput()
    assert ti.original is None
    assert ti.context.route_params == {}
    assert ti.context.slot_name is None


def test_event_from_host_has_no_source():
    ev = PluginEvent("saved", {"id": 1})
    assert ev.source is None
    assert PluginEvent("saved", source=PluginId("a/b")).source == PluginId("a/b")


def test_view_update_defaults():
    vu = ViewUpdate()
    assert vu.view is None and vu.events == []


def test_override_map_defaults():
    om = OverrideMap()
    assert om.version == 0
    assert om.overridden_components == set()
    assert om.page_route_prefix is None


def test_slot_content_equality():
    a = SlotContent(PluginId("a/b"), 500, Text("x"))
    assert a == SlotContent(PluginId("a/b"), 500, Text("x"))
    assert a != SlotContent(PluginId("a/b"), 750, Text("x"))


def test_ssr_route_output_defaults():
    out = SsrRouteOutput()
    assert out.slots == {} and out.components == {}
    assert out.route_transforms.replacement is None


def test_custom_capability_keeps_value():
    cap = CustomCapability("test.cap-a", {"tier": 1})
    assert cap.value == {"tier": 1}