# mildgame

A small, mildly annoying top-down arcade shooter built on pygame.

You are the red square in the middle of the screen. The world scrolls
around you: your square keeps accelerating toward the mouse pointer, so
staying still takes effort. Enemies appear just outside the visible area
and head straight for you. Shoot them before they reach you.

## Installing

```
pip install .
```

This pulls in `pygame`, which provides the window, drawing and input.

## Playing

```
mildgame
```

Options:

- `--background PATH`: an image tiled behind the world, scrolling as you
  move. Without it the background is plain light grey.
- `--enemy-texture PATH`: an image drawn, scaled to 40×40, for each enemy.
  Without it enemies are drawn as plain purple boxes.
- `--width N`, `--height N`: the starting window size (default 800×600).
  The window can be resized while playing.

No images come with the package; pass your own if you want them.

Controls:

- **Move**: the square accelerates toward the mouse pointer, up to a
  maximum speed. With the pointer resting right on the square, friction
  brings it slowly to a stop.
- **Shoot**: the left mouse button fires a bullet from the square toward
  the pointer. A bullet that hits an enemy destroys it and counts as a
  kill. Bullets that leave the screen disappear.
- **Dev mode**: the backtick key (`` ` ``) toggles a mode in which you
  steer with W, A, S and D instead of the mouse and cannot be killed.
  Toggling it stops the square.
- **Quit**: close the window.

On screen you will find:

- the number of enemies killed so far;
- a black arrow above the square that turns toward the nearest enemy, or
  a black dot when there are none;
- a blue triangle in the lower-left corner showing the direction you are
  moving.

Enemies arrive every two seconds. The longer you survive, the more of
them arrive at a time: one more for every ten seconds played, up to six
per wave.

When an enemy touches you the game is over. Press Space, Enter, Escape or
click the left mouse button to start a fresh round. Dev mode stays as it
was.

## Using it from code

The game logic runs without a window, which makes it easy to drive in
scripts and tests:

- `mildgame.game.Game(screen_width, screen_height, enemy_texture=None, rng=None)`
  holds a round's state. `update(dt, frame_input)` advances it,
  `nearest_enemy()` returns the closest enemy or `None`, `reset()` starts a
  new round and `draw(surface, background_texture, fonts)` renders it.
- `mildgame.game.FrameInput` describes one frame of input: pointer
  position, `fire`, `restart`, `toggle_dev` and the `up`/`down`/`left`/`right`
  keys.
- `mildgame.game.resolve_collisions(bullets, enemies)` removes bullets
  and the enemies they hit and returns the number of kills.
- `mildgame.entities` has the `Bullet` and `Enemy` dataclasses.
- `mildgame.utils` has the constants, `GameState`, `rotate_point`,
  `lerp_angle`, `background_tiles`, `spawn_enemies` and `launch_bullet`.

## Running the tests

```
pip install ".[test]"
pytest
```