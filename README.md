# riftspire

The core of a small game engine, with no window and no graphics device behind it. It provides:

- **Entity-component scenes** (`riftspire.ecs`): create entities in a `Scene` and attach components such as `TransformComponent`, `HealthComponent` or `ChampionComponent`.
- **Camera math** (`riftspire.camera`): `OrthographicCamera` for top-down 2D views, `PerspectiveCamera` for 3D, and the numpy matrix helpers `translate`, `rotate`, `scale`, `ortho` and `perspective`.
- **Vertex data description** (`riftspire.buffer`, `riftspire.vertex_array`): `BufferLayout` works out offsets and stride, `VertexBuffer` and `IndexBuffer` hold the data in memory, and `VertexArray` turns layouts into numbered `VertexAttribute` records.
- **Shader sources** (`riftspire.shader`): `parse_shader_source` splits a combined file on its `#type vertex` / `#type fragment` (or `#type pixel`) lines, and `Shader` keeps the uniform values set on names its sources declare.
- **Block-based visual scripting** (`riftspire.scripting`): a `BlockRegistry` of block definitions, a `ScriptVM` that evaluates block trees against an `ExecutionContext`, and ready-made block sets.

## Installation

```
pip install riftspire
```

Python 3.10 or newer is required. The only runtime dependency is numpy.

## Scenes and components

```python
from riftspire.ecs import Scene, HealthComponent, TransformComponent

scene = Scene()
hero = scene.create_entity("Hero")
hero.add_component(HealthComponent(max_health=600.0, current_health=600.0))

transform = hero.get_component(TransformComponent)
transform.position = (10.0, 0.0, 5.0)
world = transform.matrix()          # 4x4 numpy array

assert hero.has_component(HealthComponent)
scene.destroy_entity(hero)
assert hero not in scene
```

Every entity starts with a `TransformComponent` and a `TagComponent`; an empty name becomes `"Entity"`. Adding a second component of the same type raises `ValueError`, and `get_component` raises `KeyError` for a type the entity lacks.

## Cameras

```python
from riftspire.camera import OrthographicCamera, PerspectiveCamera

ortho = OrthographicCamera(-16.0, 16.0, -9.0, 9.0)
ortho.position = (2.0, 3.0, 0.0)
vp = ortho.view_projection_matrix

cam = PerspectiveCamera(45.0, 16 / 9, 0.1, 1000.0)
cam.rotation = (-30.0, 45.0, 0.0)   # pitch, yaw, roll in degrees
print(cam.forward(), cam.right(), cam.up())
```

The orthographic camera's `rotation` is a single angle in degrees about the z axis. `TransformComponent.rotation` is in radians.

## Vertex layouts

```python
from riftspire.buffer import BufferElement, BufferLayout, ShaderDataType, VertexBuffer
from riftspire.vertex_array import VertexArray

layout = BufferLayout([
    BufferElement(ShaderDataType.FLOAT3, "a_Position"),
    BufferElement(ShaderDataType.FLOAT2, "a_TexCoords"),
])
print(layout.stride)                # 20

vertices = VertexBuffer([0.0] * 10, layout)   # packed as float32
va = VertexArray()
va.add_vertex_buffer(vertices)
print([a.offset for a in va.attributes])      # [0, 12]
```

## Visual scripting

```python
from riftspire.scripting.core import BlockRegistry, ExecutionContext, ScriptVM
from riftspire.scripting.library import register_all_blocks

registry = BlockRegistry()
register_all_blocks(registry)

loop = registry.create_block("control.repeat")
loop.set_input("count", 3)

change = registry.create_block("data.change")
change.set_input("name", "score")
change.set_input("amount", 5)
loop.append_nested("body", change)

ctx = ExecutionContext()
ctx.set_variable("score", 0)
ScriptVM().execute(loop, ctx)
print(ctx.get_variable("score"))    # 15
```

Inputs take either a literal (`set_input`) or another block's result (`connect_input`). Custom blocks are defined with `registry.define_block(...)`, a fluent `BlockBuilder` whose `on_execute` function is called as `func(block, ctx, vm)`.

The block sets, each with its own `register_*` function:

| Module | Block ids |
| --- | --- |
| `scripting.control_flow` | `control.if`, `control.if_else`, `control.repeat`, `control.while`, `control.forever`, `control.for_each`, `control.break`, `control.continue`, `control.return`, `control.stop`, ... |
| `scripting.operators` | `operators.add`, `operators.equals`, `operators.and`, `operators.clamp`, `operators.random`, ... (takes an optional `random.Random`) |
| `scripting.data` | `data.set`, `data.get`, `data.change`, `data.list_add`, `data.self`, ... |
| `scripting.events` | `events.on_start`, `events.on_damage_received`, `events.on_key_pressed`, `events.on_custom`, ... |
| `scripting.signals` | `events.broadcast`, `events.broadcast_with_data` |
| `scripting.timing` | `time.delay`, `time.set_timer`, `time.cooldown_start`, `time.cooldown_ready`, `time.get_countdown`, ... |
| `scripting.debug` | `debug.print`, `debug.log_info`, `debug.assert`, ... (writes to a `logging.Logger`, by default `riftspire.script`) |

`register_all_blocks` registers all of them.

## What it does not do

- Nothing is drawn. There is no window, no graphics context and no GPU upload: buffers hold bytes in memory and `Shader` neither compiles nor links its sources.
- There is no model or texture loading.
- Event blocks only run their body when the host executes them. Broadcasts are queued as `(event_name, data)` pairs in the script variable `_broadcasts`; delivering them to `events.on_custom` triggers is left to the host.
- Time blocks do not suspend a script. `time.delay` and `time.set_timer` are polled: execute them every frame and they run their body once the context's `game_time` reaches the due time.

## Running the tests

```
pip install "riftspire[test]"
pytest
```