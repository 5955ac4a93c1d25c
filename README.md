# cubcaster

A grid-based raycasting engine. It reads a `.cub` scene description, checks
that the map is enclosed by walls, loads four XPM wall textures and shows a
first-person view of the maze in a 640×480 window drawn with pygame.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Running

```
cubcaster path/to/scene.cub
```

Controls:

| Key          | Action              |
|--------------|---------------------|
| `W` / `S`    | move forward / back |
| `A` / `D`    | strafe left / right |
| Left / Right | turn                |
| `Esc`        | quit                |

Closing the window also quits. On leaving, the program prints
`Closing the game...`.

When the command line or the scene is invalid, the program prints an error
header followed by a message describing the problem, and exits with a
non-zero status: the number of the `ErrorCode`, plus the system error number
when the fault came from opening a file.

## Scene files

A scene file has six parameter lines, in any order and possibly separated by
blank lines, followed by the map:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0

111111
100001
1000N1
111111
```

- The file name must end in `.cub`.
- `NO`, `SO`, `WE`, `EA` give the path of an XPM texture for each wall face.
  Each file must exist when the scene is read.
- `F` and `C` give the floor and ceiling colours as `R,G,B`, each value
  from 0 to 255.
- Each parameter may appear only once, and all six are required.
- The map uses `0` for open space, `1` for walls, spaces for void, and exactly
  one of `N`, `S`, `E`, `W` for the player's starting position and facing.
  Blank lines inside the map are dropped.
- The map must be closed: the player has to stand inside an unbroken outer
  wall.

Textures are copied into 64×64 buffers in pixel order: a smaller image leaves
the rest black and a larger one is cut short.

## Using it as a library

```python
from cubcaster.scene import load_scene
from cubcaster.raycaster import Camera, render_frame
from cubcaster.game import load_textures

scene = load_scene("maps/example.cub")
start = scene.map_data.start
camera = Camera.from_start(start.line, start.col, scene.map_data.start_char)
textures = load_textures(scene, 64, 64)
frame = render_frame(
    camera, scene.map_data.grid, textures,
    scene.ceiling_colour(), scene.floor_colour(), 320, 200,
)
```

- `cubcaster.scene`: `validate_args` checks a command line, `load_scene` and
  `parse_scene` turn a file or its lines into a validated `Scene` with its
  texture paths, colours (`floor_colour()`, `ceiling_colour()` as 0xRRGGBB)
  and map.
- `cubcaster.errors`: `CubError` carries an `ErrorCode`; `exit_status()`
  gives the process exit status and `format_error` the text shown to the
  player.
- `cubcaster.params`: `SceneParams` collects parameter lines one at a time;
  `parse_colour` reads an `R,G,B` line.
- `cubcaster.grid`: `validate_map` checks a map on its own and returns a
  `MapData` holding the padded grid and the player's starting `Position`.
  The steps (`pad_map`, `validate_size`, `validate_characters`,
  `trace_outer_walls`, `find_player`, `check_player_inside`,
  `revert_contour`) are available separately.
- `cubcaster.xpm`: `load_xpm` and `parse_xpm_text` read XPM images into
  `XpmImage` objects, whose `pixel(x, y)` returns a 0xRRGGBB value.
- `cubcaster.raycaster`: `Camera`, `cast_ray` and `render_frame` do the ray
  casting; `render_frame` returns the pixel rows of one frame. Texture
  heights should be powers of two.
- `cubcaster.player`: `handle_action` moves or turns a `Camera` in response
  to an `Action`, stepping only onto open floor cells; it returns `False`
  for `Action.QUIT`.
- `cubcaster.game`: `Game` ties a scene, camera and textures together;
  `Game.frame()` renders without a window and `Game.run()` opens one.
  `action_for_key` maps pygame key codes to actions.
- `cubcaster.colours`: `lookup_colour` finds named colours, `encode_rgb`
  packs channels into 0xRRGGBB.

## What it does not do

There is no mouse control, no minimap, no sprites or doors, and no sound.
Only XPM textures are read.