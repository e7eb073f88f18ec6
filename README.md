# ecotetris

A falling-block puzzle game about recycling. Every piece is made of one kind
of trash: paper, plastic, metal, glass or organic. A full row made of one
kind of trash is recycled with a short animation and scores points. A full
row of mixed trash is removed at once and scores nothing.

## Installing

```
pip install .
```

This installs pygame as well.

## Playing

```
ecotetris
```

Options:

- `--textures DIR`: directory holding `paper.png`, `plastic.png`,
  `metal.png`, `glass.png` and `organic.png` (default: `textures`, relative
  to the current directory). A texture that cannot be loaded is replaced by
  a plain colour block.
- `--seed N`: seed for the piece generator, for a repeatable game.

The game opens on its main menu. Use the Up and Down arrows to choose an
option and Enter to select it; Esc on the main menu quits.

While playing:

| Key          | Action                         |
|--------------|--------------------------------|
| Up           | Rotate                         |
| Left / Right | Move                           |
| Down         | Move down one step             |
| Space        | Hard drop                      |
| C            | Hold the piece, or swap it     |
| Esc          | Pause                          |
| R            | Restart                        |
| Q            | Back to the main menu          |

The pause menu offers continue, restart and back to the main menu; Esc
resumes the game.

### Scoring

Each kind of trash has a base score per recycled line: paper 100, plastic
150, metal 200, glass 175, organic 125. The score is raised by the level
(10% per level above the first), by the combo count (20% per combo step) and
by a uniform-line bonus of 1.5. When several uniform lines are completed by
one piece, the combo count goes up, and every line after the first (or every
line, once a combo is running) gets a further 1.5 bonus. You go up a level
for every ten lines cleared, and pieces fall faster at higher levels.

Hold keeps one piece for later. It can be used once for each new piece that
appears.

## Using the game logic in code

The rules live in `ecotetris.game.Game`, which does not use pygame:

```python
import random

from ecotetris.game import Game
from ecotetris.achievements import AchievementManager

game = Game(random.Random(1))
game.restart()
game.translate(-1)
game.rotate()
game.move_down()
print(game.score, game.level, game.lines_cleared)

achievements = AchievementManager()
achievements.check(game)
print(achievements.unlocked_count(), achievements.completion_percentage())
```

- `ecotetris.pieces` holds `TrashType` (with `display_name()`, `color()` and
  `base_score()`), `shape_offsets()` and `piece_cells()`.
- `ecotetris.game.Game` also offers `hold_piece()`, `drop_trashes()`,
  `check_collision()`, `update()` for particle effects, and setters
  (`set_cell`, `set_current_piece`, `set_next_piece`, `set_hold_piece`,
  `set_recycled_count`) for putting a game into a given state.
- `ecotetris.achievements.AchievementManager` keeps a catalogue of 25
  achievements for score, lines, level, recycling and combos.
- `ecotetris.controller.Controller` handles the menus, the pause screen and
  the timed fall of the current piece; call `tick()` once per frame.
- `ecotetris.render.Renderer` draws a controller's state onto a pygame
  surface.

## What it does not do

- Achievements are not shown in the game window; `AchievementManager` is
  only available from code. The achievements "Velocista Ecológico" and
  "Perfeccionista" are never unlocked by `check()`, only by an explicit
  `unlock()`.
- Games, scores and achievements are not saved anywhere. The setter methods
  on `Game` restore a state you provide, but the package reads and writes no
  files for it.

## Running the tests

```
pip install .[test]
pytest
```