import pytest

from plugview.errors import HostFnError, PdkError
from plugview.manifest import (
    HookCall,
    HookCancel,
    HookContinue,
    PluginEvent,
    PluginManifest,
    SlotRegistration,
    TransformInput,
    TransformOutput,
    ViewUpdate,
)
from plugview.plugin import (
    EventSubscriber,
    ExportError,
    HookHandler,
    InteractionHandler,
    OnLoad,
    OnUnload,
    Plugin,
    PluginCtx,
    PluginExports,
    SlotProvider,
    TransformProvider,
)
from plugview.routing import ApiRequest, ApiResponse
from plugview.views import (
    ClientCapabilities,
    Fragment,
    HandlerId,
    PluginId,
    SessionCtx,
    SessionId,
    Text,
)

RECORD: list = []


def _session(sid="s1", user=None):
    return SessionCtx(
        session_id=SessionId(sid),
        user_id=user,
        client=ClientCapabilities(protocol_version=1, app_version=3, registered_host_components=["Card"]),
    )


class HelloPlugin(SlotProvider, HookHandler, EventSubscriber, InteractionHandler, OnLoad, OnUnload, TransformProvider):
    SLOT_NAME = "sidebar"
    HOOK_NAME = "before_save"

    @classmethod
    def manifest(cls):
        return PluginManifest(
            id=PluginId("my-org/my-plugin"),
            version="0.1.0",
            slots=[SlotRegistration("sidebar")],
        )

    @classmethod
    def render(cls, ctx):
        return Text(ctx.session.session_id.value)

    @classmethod
    def handle(cls, call, ctx):
        if call.context.get("block"):
            raise PdkError("blocked")
        return HookContinue({**call.context, "user": ctx.session.user_id})

    @classmethod
    def on_event(cls, event, ctx):
        RECORD.append((event.name, ctx.session.session_id.value))

    @classmethod
    def on_interaction(cls, handler_id, event_data, ctx):
        return ViewUpdate(view=Text(f"{handler_id.value}:{event_data}"))

    @classmethod
    def on_load(cls, ctx):
        RECORD.append(("load", ctx.client.app_version))

    @classmethod
    def on_unload(cls):
        raise HostFnError("dx_log unavailable")

    @classmethod
    def transform(cls, transform_input, ctx):
        return TransformOutput(view=Fragment([transform_input.original, Text(ctx.session.session_id.value)]))


class FailingSlot(SlotProvider):
    SLOT_NAME = "broken"

    @classmethod
    def manifest(cls):
        return PluginManifest(id=PluginId("test/failing"))

    @classmethod
    def render(cls, ctx):
        raise HostFnError("state unavailable")


class ManifestOnly(Plugin):
    @classmethod
    def manifest(cls):
        return PluginManifest(id=PluginId("test/bare"))


@pytest.fixture(autouse=True)
def _clear_record():
    RECORD.clear()


def test_from_session_copies_client():
    session = _session()
    ctx = PluginCtx.from_session(session)
    assert ctx.session is session
    assert ctx.client == session.client
    assert ctx.client is not session.client


def test_manifest_and_slot_exports():
    exports = PluginExports(HelloPlugin, [HelloPlugin])
    assert exports.names() == ["manifest", "slot_render"]
    assert exports.call("manifest").id == PluginId("my-org/my-plugin")
    assert exports.call("slot_render", _session("abc")) == Text("abc")


def test_manifest_only_plugin_has_no_slot_export():
    exports = PluginExports(ManifestOnly)
    assert exports.names() == ["manifest"]


def test_slot_error_becomes_export_error():
    exports = PluginExports(FailingSlot, [FailingSlot])
    with pytest.raises(ExportError, match="host function error: state unavailable"):
        exports.call("slot_render", _session())


def test_two_slots_rejected():
    with pytest.raises(ValueError):
        PluginExports(HelloPlugin, [HelloPlugin, FailingSlot])


def test_slot_must_be_slot_provider():
    with pytest.raises(TypeError):
        PluginExports(ManifestOnly, [ManifestOnly])


def test_hook_export_default_name_and_results():
    exports = PluginExports(HelloPlugin).add_hook(HelloPlugin)
    assert "hook_before_save" in exports.names()
    result = exports.call("hook_before_save", HookCall("before_save", {"n": 1}), _session(user="u7"))
    assert result == HookContinue({"n": 1, "user": "u7"})
    with pytest.raises(ExportError, match="blocked"):
        exports.call("hook_before_save", HookCall("before_save", {"block": True}), _session())


def test_hook_export_custom_name():
    exports = PluginExports(HelloPlugin).add_hook(HelloPlugin, "hook_custom")
    assert exports.names() == ["manifest", "hook_custom"]


def test_add_hook_rejects_non_handler():
    with pytest.raises(TypeError):
        PluginExports(ManifestOnly).add_hook(ManifestOnly, "hook_x")


def test_transform_uses_input_session():
    exports = PluginExports(HelloPlugin).add_transform(HelloPlugin, "transform_wrap")
    inp = TransformInput(original=Text("orig"), session=_session("t1"))
    out = exports.call("transform_wrap", inp)
    assert out.view == Fragment([Text("orig"), Text("t1")])


def test_events_and_on_load():
    exports = PluginExports(HelloPlugin).add_events(HelloPlugin).add_on_load(HelloPlugin)
    assert exports.call("on_event", PluginEvent(name="saved"), _session("e1")) is None
    exports.call("on_load", _session())
    assert RECORD == [("saved", "e1"), ("load", 3)]


def test_interaction_export():
    exports = PluginExports(HelloPlugin).add_interactions(HelloPlugin)
    update = exports.call("on_interaction", HandlerId("h1"), 5, _session())
    assert update.view == Text("h1:5")
    assert update.events == []


def test_on_unload_error():
    exports = PluginExports(HelloPlugin).add_on_unload(HelloPlugin)
    with pytest.raises(ExportError, match="dx_log unavailable"):
        exports.call("on_unload")


def test_api_route_export():
    def handler(req):
        if "id" not in req.path_params:
            raise PdkError("missing id")
        return ApiResponse(body={"id": req.path_params["id"]})

    exports = PluginExports(ManifestOnly).add_api_route("handle_get_note", handler)
    resp = exports.call("handle_get_note", ApiRequest(path_params={"id": "42"}))
    assert resp.status == 200
    assert resp.body == {"id": "42"}
    with pytest.raises(ExportError, match="missing id"):
        exports.call("handle_get_note", ApiRequest())


def test_duplicate_export_rejected():
    exports = PluginExports(HelloPlugin).add_events(HelloPlugin)
    with pytest.raises(ValueError):
        exports.add_events(HelloPlugin)


def test_unknown_export():
    exports = PluginExports(ManifestOnly)
    with pytest.raises(ExportError):
        exports.call("nonexistent_export")


def test_cancel_result_passes_through():
    class Canceller(HookHandler):
        HOOK_NAME = "guard"

        @classmethod
        def manifest(cls):
            return PluginManifest()

        @classmethod
        def handle(cls, call, ctx):
            return HookCancel(call.hook_name)

    exports = PluginExports(Canceller).add_hook(Canceller)
    assert exports.call("hook_guard", HookCall("guard"), _session()) == HookCancel("guard")