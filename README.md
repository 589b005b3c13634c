# plugview

`plugview` describes user interfaces that plugins contribute to a host
application, together with the data a plugin and its host exchange:

- **View trees** (`plugview.views`): `ViewElement`, `Text`,
  `HostComponentRef`, `Fragment`, `Empty` and `Incompatible`, plus
  `PluginId`, `SessionCtx`, `ClientCapabilities`, `PriorityHint` and
  `DomEvent`. `view_to_json` / `view_from_json` and `session_to_json` /
  `session_from_json` convert to and from the wire form.
- **A fluent builder** (`plugview.builder`):
  `div().class_("card").child(text("Hello")).build()`, with helpers for common
  tags, event handlers, `host(...)` component references and the
  `original_content()` / `original_target()` placeholders.
- **Selectors and transform operations** (`plugview.selectors`): slot,
  component, route and `WithinSelector` targets; node selectors `Tag`,
  `HasClass`, `HostComponentNamed`, `Name`, `DataAttr`, `First`, `Last`,
  `Index`, `And`, `Or`, `Recursive`; `TransformOp`, `AddClass`, `SetAttr`.
- **Tree utilities** (`plugview.tree`): `find_shallow_matching`,
  `find_recursive_matching`, `node_matches`, `add_class_to_view`,
  `set_attr_on_view`, `resolve_target_in_view`.
- **Manifests and results** (`plugview.manifest`): `PluginManifest`,
  capabilities, hook calls and results (`hook_result_to_json` /
  `hook_result_from_json`), events, `SlotContent`, `OverrideMap`,
  `RouteTransforms` and the server-rendering result types.
- **Routing** (`plugview.routing`): `RoutePattern` with `:param` segments,
  `HttpMethod`, API and page route declarations and their request and
  response types.
- **Trust** (`plugview.trust`): Ed25519 signature checks over a plugin binary
  with `compute_trust_tag`.
- **Plugin authoring** (`plugview.plugin`, `plugview.errors`): `Plugin`,
  `SlotProvider`, `HookHandler`, `EventSubscriber`, `InteractionHandler`,
  `OnLoad`, `OnUnload`, `TransformProvider`, gathered into named exports by
  `PluginExports`; plugin failures are raised as `PdkError`.

## Installation

```
pip install plugview
```

Python 3.10 or newer is required.

## Building a view

```python
from plugview.builder import div, span, button, text
from plugview.views import HandlerId, view_to_json, view_from_json

view = (
    div()
    .class_("widget")
    .plugin_slot("actions")
    .child(span().class_("badge").child(text("42")).build())
    .child(button().on_click(HandlerId("save")).debounce(200).build())
    .build()
)

assert view_from_json(view_to_json(view)) == view
```

## Selecting and editing nodes

```python
from plugview.selectors import HasClass, Recursive
from plugview.tree import add_class_to_view, find_recursive_matching, find_shallow_matching

find_shallow_matching(view, HasClass("badge"))               # direct children only
find_recursive_matching(view, Recursive(HasClass("badge")))  # any depth
add_class_to_view(view, "highlight")                         # a modified copy
```

## Matching routes

```python
from plugview.routing import RoutePattern

pattern = RoutePattern("/shop/:shop/item/:id")
pattern.matches("/shop/acme/item/99")         # True
pattern.extract_params("/shop/acme/item/99")  # {"shop": "acme", "id": "99"}
pattern.matches("/shop/acme/item/99/")        # False: segment counts must agree
```

## Checking a signature

```python
from plugview.trust import TrustKey, compute_trust_tag

tag = compute_trust_tag(binary, signature, None, [TrustKey("release", public_key_bytes)])
tag.verified, tag.signer_key_id
```

With a key id hint only the key of that id is tried; without a signature the
tag is unverified.

## Writing a plugin

```python
from plugview.builder import div, text
from plugview.manifest import PluginManifest, SlotRegistration
from plugview.plugin import PluginExports, SlotProvider
from plugview.views import PluginId, PriorityHint, SessionCtx


class HelloPlugin(SlotProvider):
    SLOT_NAME = "sidebar"

    @classmethod
    def manifest(cls):
        return PluginManifest(
            id=PluginId("my-org/hello"),
            version="0.1.0",
            slots=[SlotRegistration("sidebar", PriorityHint.NORMAL)],
        )

    @classmethod
    def render(cls, ctx):
        return div().class_("widget").child(text("Hello from plugin!")).build()


exports = PluginExports(HelloPlugin, [HelloPlugin])
exports.names()                          # ["manifest", "slot_render"]
exports.call("slot_render", SessionCtx())
```

Further exports are added with `add_hook`, `add_transform`, `add_events`,
`add_interactions`, `add_on_load`, `add_on_unload` and `add_api_route`.
Calling an unknown export, or one whose plugin code raises `PdkError`, raises
`ExportError`.

## What it does not do

`plugview` defines the data and the plugin-side interfaces only. It does not
load or run plugin binaries, keep plugin state, dispatch hooks and events
across plugins, serve HTTP routes or render views to HTML. A host application
supplies those and uses these types to talk to its plugins.

## Testing

Install the `test` extra and run `pytest`.