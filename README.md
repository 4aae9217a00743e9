# gengine2d

A small 2D game engine built on pygame, together with the entities of three
sample games: a top-down shooter, a platformer and a space shooter.

## Engine modules

- `gengine2d.camera` – `Camera2D`: `init(screen_width, screen_height)` sets the
  orthographic projection; `position` and `scale` are properties, and
  `update()` recomputes `camera_matrix` (row-major) when either changed.
  `convert_screen_to_world` maps window pixels (y down) to world
  coordinates, and `is_box_in_view` tests a box against the visible area.
- `gengine2d.inputs` – `InputManager`: `press_key`, `release_key`,
  `set_mouse_coords`, `is_key_down`, `was_key_down` and `is_key_pressed`,
  which is true only on the frame a key goes down. Call `update()` once per
  frame to remember the current key states.
- `gengine2d.timing` – `Timer` (`start`, `stop`, `pause`, `unpause`, `ticks`
  in milliseconds) and `FpsLimiter` (`begin_frame`, `end_frame`), which
  averages the last ten frame times, sleeps off the rest of the frame budget
  and returns the current FPS. Both take an injectable clock.
- `gengine2d.vertex` – frozen value types `Position`, `UV`, `ColorRGBA8`
  (channels checked to be 0..255), `Vertex` and `Texture`.
- `gengine2d.sprite_batch` – `SpriteBatch` collects quads between `begin()`
  and `end()`, sorts them by `GlyphSortType` (`NONE`, `FRONT_TO_BACK`,
  `BACK_TO_FRONT`, `TEXTURE`) and groups consecutive quads of one texture
  into `RenderBatch`es. `draw` takes an optional rotation angle,
  `draw_toward` a unit direction vector. `render_batch(renderer)` calls
  `renderer(texture, vertices)` once per batch. `build_glyph` and
  `rotate_point` are available on their own.
- `gengine2d.particles` – `Particle2D`, `ParticleBatch2D` (a fixed pool that
  reuses dead particles, or overwrites the first one when none is free) and
  `ParticleEngine2D`, which draws each batch in its own sprite-batch pass.
- `gengine2d.inflate` – `inflate` for raw DEFLATE data and `decompress` for
  zlib streams (the Adler-32 checksum is not verified).
- `gengine2d.png` – `decode_png(data, convert_to_rgba32)` returns a
  `DecodedImage` with `pixels`, `width`, `height` and a `PngInfo`. All
  colour types and bit depths, palettes, `tRNS` transparency and Adam7
  interlacing are handled.
- `gengine2d.resources` – `read_file`, `load_png` (gives each texture a
  new integer id; `texture_pixels` returns its RGBA data), `TextureCache`
  and the shared-cache function `get_texture`.
- `gengine2d.sprite_font` – `SpriteFont` packs a character range of a font
  into one atlas (`closest_pow2` and `create_rows` choose the layout);
  `measure` and `draw` with `Justification.LEFT`, `MIDDLE` or `RIGHT`.
  Fonts come from pygame, or from any object with the `FontBackend` shape.
- `gengine2d.sound` – `SoundManager` (`init`, `destroy`, also usable as a
  context manager) caches `SoundEffect`s and `Music` by path; the mixer can
  be injected.
- `gengine2d.window` – `init()` starts pygame; `Window.create` opens a
  window with `WindowFlags` (`INVISIBLE`, `FULLSCREEN`, `BORDERLESS`),
  `clear()` fills it and `swap_buffer()` shows it.
- `gengine2d.state` – the abstract `GameState` and `StateManager`, which
  replaces the active state with `change_state` and forwards the game loop
  calls to it.
- `gengine2d.errors` – `FatalError` (with `exit_code` 69), `DecodeError`
  (with a numeric `code`) and `fatal_error`.

## Sample-game modules

- `gengine2d.topdown.entity` – `Entity` with circle collision between
  entities, tile collision against a level given as a list of strings
  (`"."` is floor, anything else is solid) and an AABB test against
  enemies; `Tile`.
- `gengine2d.platformer.entities` – `Entity`, `Tile` and a `Player` that
  runs, jumps, falls under gravity and lands on tiles.
- `gengine2d.spaceshooter.entities` – `Entity`, `EnemyType`, `Enemy`,
  `Projectile` and a `Player` that moves sideways and keeps at most three
  lasers in flight.

The players and projectiles load their textures through `get_texture` from
paths under `../assets/textures`; pass a `get_texture` callable to use
something else.

## Example

```python
from gengine2d.camera import Camera2D
from gengine2d.inputs import InputManager

camera = Camera2D()
camera.init(1024, 768)
camera.update()

world = camera.convert_screen_to_world((512, 384))
visible = camera.is_box_in_view((0, 0), (64, 64))

inputs = InputManager()
inputs.press_key(32)
if inputs.is_key_pressed(32):
    print("jump")
inputs.update()  # at the start of the next frame
```

Decoding a PNG image held in memory:

```python
from gengine2d.png import decode_png

with open("tile.png", "rb") as fh:
    image = decode_png(fh.read(), True)
```

A malformed image raises `DecodeError`.

## What the package does not do

- It has no command and no main loop: nothing here starts a game. A
  program has to create the `Window`, the `StateManager` and its own
  `GameState` subclasses and run the loop itself.
- It does not load level files for the sample games, and the top-down game
  has no player, enemy or projectile classes; only its `Entity` and `Tile`
  are included.
- It does not draw on the GPU. `SpriteBatch.render_batch` hands vertices to
  a renderer function that the program supplies; there are no shaders.

## Tests

The `test` extra installs pytest; the tests live in `tests/`.