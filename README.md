# simple-engine

A small 2D game engine that draws through OpenGL 3.3 with pyglet, with a playable demo level.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the demo

```
simple-engine
simple-engine --assets path/to/assets
```

This opens a resizable 1280×720 window titled "Simple Engine". The level contains:

- three parallax background layers
- a tilemap with solid walls and floor
- a few spinning shapes, one of which is the player
- a small HUD in the top-left corner

Move the player with **W**, **A**, **S** and **D**. Solid tiles block it. The camera follows the player with a dead zone and stays inside the tilemap's bounds. Close the window to quit.

Textures come from `checker.ppm` in the asset directory. The directory is looked up in this order:

1. `--assets DIR`
2. the `SIMPLE_ENGINE_ASSET_ROOT` environment variable
3. `./assets`

If the file cannot be loaded, the level still runs. The backgrounds, HUD and tile sprites are then not drawn, but the tiles still block movement.

Log lines go to the terminal. Informational messages go to stdout as `[Info] ...` and errors go to stderr as `[Error] ...`. The command exits with status 1 when the window or renderer cannot be set up.

## Modules

| Module | Contents |
| --- | --- |
| `simple_engine.geometry` | `Vec2`, `AABB` and `Transform` (model matrix via `matrix()`), plus the 4×4 numpy matrix helpers `identity_matrix`, `translation_matrix`, `rotation_z_matrix`, `scale_matrix` and `ortho_matrix` |
| `simple_engine.camera` | `Camera`: orthographic view and projection, exponential following, `dead_zone`, `follow_sharpness`, `set_bounds` / `clear_bounds` |
| `simple_engine.keyboard` | `Scancode`, `EventType`, `Event`, and `Input`, which tracks the held keys |
| `simple_engine.texture_atlas` | `AtlasRegion` (a UV rectangle) and `TextureAtlas` (a grid of cells, with `region` and `region_by_index`) |
| `simple_engine.sprite_animation` | `SpriteAnimation`: looping or one-shot frame grids |
| `simple_engine.graphics_backend` | `PygletBackend`, and `load_backend`, `current_backend`, `is_backend_loaded`, `unload_backend` for the active backend |
| `simple_engine.shader` | `Shader` |
| `simple_engine.mesh` | `Mesh`, `create_triangle` and `create_quad` |
| `simple_engine.texture` | `parse_ppm`, `PixelImage` and `Texture` |
| `simple_engine.material` | `Material` and the built-in shader from `Material.create_default_shader` |
| `simple_engine.sprite` | `RenderObject` and `Sprite` (a shared quad mesh, atlas regions, animation) |
| `simple_engine.parallax` | `ParallaxLayer` |
| `simple_engine.ui` | `UIElement` and `UIAnchor` |
| `simple_engine.tilemap` | `Tilemap`: tiles, solid flags, `collides_with`, `world_bounds` |
| `simple_engine.scene` | `Scene`: holds objects in render-layer order; `move_object` moves an object with tile collision |
| `simple_engine.renderer` | `Renderer` |
| `simple_engine.window` | `Window` |
| `simple_engine.engine` | `Engine`, `GameLayer` and `EngineError` |
| `simple_engine.game` | The demo: `Game`, `GameScene` and `PlayerController` |
| `simple_engine.app` | `main`, the entry point of the `simple-engine` command |

Failures raise exceptions:

- `BackendError`
- `ShaderError`
- `MeshError`
- `TextureError`
- `WindowError`
- `EngineError`

Each is raised by the module that defines it.

## Using the pieces

### Collision boxes

`AABB.intersects` does not count boxes that only touch at an edge as overlapping.

```python
from simple_engine.geometry import AABB, Vec2

player = AABB.from_center_and_half_size(Vec2(0.0, 0.0), Vec2(0.5, 0.5))
wall = AABB.from_center_and_half_size(Vec2(0.8, 0.0), Vec2(0.5, 0.5))
assert player.intersects(wall)
```

### A camera that follows a point

```python
from simple_engine.camera import Camera
from simple_engine.geometry import Vec2

camera = Camera()
camera.dead_zone = Vec2(0.75, 0.45)
camera.set_bounds(Vec2(-4.0, -2.0), Vec2(4.0, 2.0))
camera.set_follow_target(Vec2(1.0, 0.5))
camera.update(1 / 60)
```

### Reading a PPM image without a GPU

```python
from simple_engine.texture import parse_ppm

image = parse_ppm("P3\n1 1\n255\n255 0 0\n")
assert image.pixels == bytes([255, 0, 0])
```

### Writing your own game

1. Subclass `GameLayer` from `simple_engine.engine`.
2. Implement `init`, `update(input, delta_time)` and `render(renderer, window)`.
3. Optionally override `handle_event` and `shutdown`.
4. Call `Engine.init()`, then `Engine.run(game)`.

`Engine` can be used as a context manager, which shuts it down on exit.

`Engine` also accepts:

- your own window and renderer objects
- a `clock` and a `sleep` function
- a `frame_delay`

Any object that has the methods `PygletBackend` has can be passed to `load_backend` or `Renderer` in its place.

## What it does not do

- There is no sound, no mouse input and no text rendering.
- Only ASCII PPM (`P3`) images can be loaded as textures.
- The window only reports these keys:
  - the letters A to Z
  - Return, Escape, Backspace, Tab and Space
  - the four arrow keys
- Collision is only between moving objects and solid tiles. Objects do not collide with each other, and there is no physics simulation.