# knifegame

A top-down arena game. You play a character in a circular arena with knives orbiting around
you. Five AI rivals wander the arena and throw knives of their own. Knives, health bottles and
speed boots lie scattered on the ground, and three bushes are placed among them. You win when
every rival has fallen.

## Installation

```
pip install .
```

## Playing

```
knifegame
knifegame --seed 42
```

`--seed` makes the random placement and the rivals' behaviour repeatable.

The start screen waits for input. Enter (or Y) starts a round. Esc (or N) quits. The
controls during a round are:

| Key     | Action                                  |
|---------|-----------------------------------------|
| W A S D | move                                    |
| Space   | throw a knife at the aimed target       |
| X       | drop a knife                            |
| C       | lose one point of health                |

The rules:

- Every character starts with 100 health and four knives. The knife ring widens as more
  knives are added, up to a limit.
- When two living characters come close enough for their knife rings to touch, each loses a
  knife. A character with no knives left loses 20 health instead.
- Each character aims at the nearest living rival within 500 units. A throw costs the thrower
  a knife, and the target is hit 150 ms later. Throws have a short cooldown.
- While you hold fewer than four knives, a new one is added every three seconds.
- Walking over a knife adds one to your ring. A health bottle restores 20 health, up to 100.
  Boots double your speed for five seconds.
- Characters cannot leave the circular arena.
- A rival's death counts as your kill if you are within 500 units of it at that moment.

When the round ends, because you died or because no rivals remain, a summary shows your rank,
your kills and how many seconds you survived. Any key or mouse click returns to the start
screen. On-screen text is in Chinese, so it needs a CJK font installed on the system to show
properly.

## Using the pieces

The game logic does not depend on a display, so you can drive it from code:

- `knifegame.app.GameSession` sets up one round: a player, five mobs and the scattered
  props. `tick(dt_ms)` advances it, and `result()` returns the win flag, rank, kills and
  seconds. `format_result(win, rank, kills, seconds)` builds the summary text.
- `knifegame.scene.Scene` holds the items. On each `tick(dt_ms)` it resolves pickups
  (`check_distance`), melee contact (`check_character_distance`), aiming
  (`update_aim_targets`) and the aim lines (`reset_aim_lines`).
- `knifegame.character.Character`, `Player` and `Mob` model the fighters. The `Key` enum
  names the keys they react to through `key_press` and `key_release`.
- `knifegame.props.Prop`, `PropKind`, `Bush`, `populate` and `random_position` cover the
  pickups and their placement.
- `knifegame.aimline.AimLine` and `KnifeAnimation` follow the aim lines and animate knife
  throws along them.

```python
import random
from knifegame.app import GameSession

session = GameSession(random.Random(1))
for _ in range(600):
    session.tick(16)
print(session.result().message)
```

## Limitations

The window draws plain shapes: coloured circles, rectangles and lines. It loads no image
files and plays no sound. There are no saved scores and no settings beyond `--seed`.

## Tests

```
pip install .[test]
pytest
```