# texttetris

A falling-block puzzle game that runs in a terminal. Blocks drop by one row every half second. You can move, rotate, hard-drop and hold them, and a ghost shows where the current block will land. When a game ends you type a name, and the score goes into a ranked history file.

## Installing

```
pip install .
```

No third-party libraries are needed.

## Playing

```
texttetris
```

The same program can be started with `python -m texttetris.cli`.

Options:

- `--results PATH`: the file that holds the score records (default `results.txt` in the current directory)

The game needs a terminal window of at least 35 rows by 60 columns. If the window is smaller, it shows the current size and waits until the window is resized. If the size cannot be found, the game takes it to be 24 by 80.

The main menu offers:

1. Game Start
2. Search history: asks for a name and lists every saved result under that name
3. Record Output: lists all saved results in rank order
4. QUIT

Any other input gets a "Wrong Input" message and the menu again. The program also quits at the end of input.

### Keys during a game

Keys work in lower or upper case.

| Key | Action                           |
|-----|----------------------------------|
| J   | Move left                        |
| L   | Move right                       |
| K   | Move down one row                |
| I   | Rotate                           |
| A   | Drop the block to the bottom     |
| S   | Hold the block (once per block)  |
| P   | Stop the game                    |

The first hold puts the block aside and brings in the next block. Later holds swap the current block with the held one. After a hold, the block starts again at the top of the board. You can hold again once a block has locked.

### Scoring

- 25 points each time a block locks and the next block fits on the board
- 100 points for each full line cleared

The game ends when a new block cannot be placed, or when you press P. The final score is shown, with "Best Record!" if it beats the best score so far. Then you are asked for a name. Only the first word you type is used. If input ends before a name is given, the result is not saved.

## Score history

Results are kept as tab-separated lines: rank, name, score, year, month, day, hour and minute. Lines run from best to worst score. A new result goes in before the first record whose score is not higher than it. Records above it keep their rank, and records below it move down by one. Reading the file stops at the first malformed line. The best score in the file is shown at the top of the board while you play.

## Using the modules

- `texttetris.game`: `Game` holds the board, the current, next and held `Piece`s and the score. Its methods are `start`, `move_left`, `move_right`, `move_down`, `rotate`, `hard_drop`, `hold`, `ghost_row`, `is_collision` and `process_key`. Each board square is a `Cell`, and `shape(piece, state)` gives the 4x4 grid of a piece.
- `texttetris.records`: `Record`, `parse_records`, `format_record`, `insert_record`, and `RecordStore` with `load`, `best_point`, `search` and `save_result`.
- `texttetris.render`: `render_table`, `render_menu`, `render_game_over`, `render_records`, `render_size_warning` and `is_terminal_size_sufficient` return the screens as strings.
- `texttetris.cli`: `Terminal`, `parse_menu_choice`, `play` and `main`.

## What it does not do

There are no levels and no speed-up: blocks always fall every half second. Scores are kept only in the local results file. Raw keyboard input uses termios on POSIX systems and msvcrt on Windows. When input is not a terminal, keys are read from the input stream as it comes.

## Running the tests

```
pip install ".[test]"
pytest
```