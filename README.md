# merinobreakout

The game logic of a brick-breaking arcade game: eight levels of bricks,
falling power-up barrels, an exit portal in the bottom-right corner,
wandering meanies and nine-letter unlock codes that players trade with
each other.

## Installing

    pip install .

To run the tests as well:

    pip install ".[test]"
    pytest

## What is in the package

| Module        | Contents |
|---------------|----------|
| `consts`      | Screen layout, physics tuning, the `LEVELS` brick maps, level titles, hints, barrel titles and the `Secret` enum |
| `geometry`    | `Vec2`, `Collision`, `RectBody`, `RoundBody`, `collision()` and the grid conversions `xy_to_rc`, `rc_to_xy`, `rc_to_idx` |
| `timing`      | `Timer` and `TimerMode`: timers advanced by explicit `tick(dt)` calls |
| `animation`   | `Animation` and `AnimationType` (repeat, freeze or despawn at the last frame) |
| `codes`       | `encode`, `decode`, `checksum`, `vigenere_encipher`, `vigenere_decipher` and `CodeError` |
| `progress`    | `Progress` (discovered/unlocked secrets, unlocked levels, saving), `CodeRejected`, `make_username`, `default_save_path` |
| `shop`        | `ShopScreen`: code entry and the texts shown on the shop screen |
| `world`       | `World`, the state of one level in play, with `Paddle`, `Ball`, `Bullet`, `Barrel`, `Meanie`, `Brick`, `Portal`, `Controls`, `GameState`, `PortalState` and `brick_variant` |
| `physics`     | `ball_update`, `bullets_update`, `lives_update`, `barrels_update` and `nudge_ball` |
| `meanies`     | `meanies_update` and `meanie_destroy` |
| `transition`  | `Transition` banners and `transition_enter`, which grants codes for beaten levels |
| `assets`      | `Assets`: loads and caches images and sounds with pygame |

## Driving a level

A level is played by calling the systems once per frame, in this order:

```python
import random
from pathlib import Path

from merinobreakout import meanies, physics
from merinobreakout.progress import Progress, make_username
from merinobreakout.world import Controls, World

progress = Progress.load(make_username("player"), Path("progress.txt"))
world = World(progress, rng=random.Random(1))
world.current_level = 0
world.enter_level()

world.update_delta(1 / 60)
world.paddle_update(Controls(right=True, fire=True))
physics.ball_update(world)
physics.bullets_update(world)
physics.barrels_update(world)
world.portal_update()
meanies.meanies_update(world)
world.animate()
world.countdown_update()
physics.lives_update(world)
```

`world.next_state` becomes `GameState.TRANSITION` when the last life is
lost or the paddle leaves through the open portal. Sounds to play are
queued by name in `world.sounds` (and `world.loop_sound` for a looping
one); images are referred to by name, for example `world.paddle.image`.

`transition_enter(world)` builds the banners for the level being
entered; `Transition.update(dt)` shows them one after another and then
returns `GameState.GAME` or `GameState.MENU`.

## Secrets and codes

Beating a level's countdown discovers a secret: `Progress.generate_code("X", idx)`
creates a code tied to the player's user name, records it and saves.
The secret is unlocked only when another player's code for the same
secret is entered with `Progress.add_code(code)` (or through
`ShopScreen`). Beating the countdown again generates an `"L"` code that
keeps that level's portal open. `add_code` raises `CodeRejected` with
the message to show the player ("Incorrect", "Duplicated" or
"Secret not discovered yet").

Unlocked secrets change the barrel odds (`Progress.barrel_weights()`),
let bricks of the invisible kind be seen, and open the fourth and the
last level.

Progress is saved to `.merino_breakout.txt` in the home directory unless
another path is given; `Progress.reset()` deletes that file.

## What the package does not do

There is no command to start the game, no window, no main loop and no
menu or splash screen: drawing, keyboard input and audio playback are
left to the caller. `Assets` loads files from an `assets` directory
(`images/<name>.png` and the sound files it lists), which is not
included in the package.