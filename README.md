# raycube

A first-person maze explorer drawn by raycasting on a square grid. Scenes are
described in `.cub` files. The game runs in a pygame window.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
raycube path/to/level.cub
```

The command takes exactly one argument, a scene file. It is loaded with
`raycube.bonus_scene.load_bonus_scene`, so its map may contain doors.

- With the wrong number of arguments, or with an invalid scene, `Error` and a
  short message are printed to standard error and the exit status is 1.
- If the file cannot be read, `file invalide : <name>` is printed and the exit
  status is 2.
- The name is checked from its first dot onwards, which must be exactly
  `.cub`. A name such as `maps/level.cub` passes; `./level.cub` does not,
  because its first dot is the one in `./`.

Once the window is open, nothing is drawn until Space is pressed.

### Files the game needs

The game draws with fixed images, read relative to the working directory:

- `./bonus/walls_textures/mur_1.xpm`, `mur_2.xpm`, `ps3.xpm`, `prison_lux1.xpm`
  (the four wall faces)
- `./bonus/bonus_textures/port_f.xpm` and `port_o.xpm` (closed and open door)
- `./bonus/images.txt`: twelve image paths, one per line, four for each of the
  three weapons
- `./bonus/presentation_textures/presentation.xpm`: shown at start-up if it
  exists

XPM images are read directly; other image formats are read through pygame.
If any required image or the weapon list cannot be loaded, the program
reports an error and exits with status 1. These images are not part of the
package.

## Scene files

A scene starts with header lines, each at most once:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

All four texture lines are required. `F` and `C` are the floor and ceiling
colours, three comma-separated values of at most 255. The map follows the
header:

```
111111
100101
1010N1
111111
```

- `1` is a wall and `0` is open floor.
- `N`, `S`, `E` or `W` marks the single player start and the direction faced.
- Spaces are empty. Open floor may only touch map cells, never spaces.
- The first and last map rows may hold only walls and spaces; each row must
  start and end with a wall or a space.
- In scenes loaded with `load_bonus_scene`, `P` is a door. It must sit between
  two walls, either left and right or above and below, and may not touch
  another door.

## Controls

| Key          | Action                                         |
|--------------|------------------------------------------------|
| W / S        | move forward / back                            |
| A / D        | strafe left / right                            |
| Left / Right | turn                                           |
| Mouse        | turn slightly towards the pointer's movement   |
| Space        | start, then switch to the next weapon          |
| P            | fire (plays the weapon animation)              |
| O            | open or close doors, with the third weapon held |
| Escape       | quit                                           |

Doors open and close all at once. A door cannot be closed while the player
stands in it. Walking onto an open door carries the player through to the
tile beyond.

## Using the library

```python
from raycube.scene import load_scene
from raycube.raycast import cast_ray

scene = load_scene("level.cub")
x, y = scene.player_position
hit = cast_ray(scene.grid, scene.width, scene.last_line, x, y,
               scene.player_angle, False)
print(hit.distance, hit.vertical)
```

- `raycube.scene.load_scene` reads and validates a scene without doors.
  `raycube.bonus_scene.load_bonus_scene` also accepts doors. Both return a
  `Scene` and raise `raycube.errors.MapError` on any problem.
- `raycube.raycast.cast_ray` traces one ray through the grid and returns a
  `RayHit`. `wall_texture_index` picks the texture for that hit, and
  `projected_height` gives the height of the wall slice on screen.
- `raycube.player.Player` holds the position and angle, and moves with wall
  collision through `step` and `step_with_doors`.
- `raycube.render.Frame` is a 32-bit pixel buffer. `render_view` draws the
  first-person view into it, and `raycube.minimap.render_minimap` draws the
  overhead map.
- `raycube.texture.Texture` loads images and reads single pixels.
- `raycube.app.Game` holds a running game. Its `handle_key` takes a key press
  and `render` returns the next frame.

## Limitations

- The `NO`, `SO`, `WE` and `EA` paths in a scene are checked to be present,
  but they are not used for drawing. The game always uses the fixed images
  listed above.
- The `raycube` command always loads scenes with doors allowed. The door-free
  loader is available only from the library.
- There is no sound, no enemies and no saving of progress.