"""Text screens of the game: board, menu, game-over banner and record listings."""

from __future__ import annotations

from typing import Iterable, Optional

from texttetris.game import Cell, Game, shape
from texttetris.records import Record

INDENT = "\t\t\t"
RULE = INDENT + "=" * 28
MIN_ROWS = 35
MIN_COLS = 60

_WALL = "🔲"
_LOCKED = "⬜"
_FALLING = "🔳"
_GHOST = "🟪"
_NEXT = "🟨"
_HOLD = "🟩"
_BLANK = "  "

_HELP = (
    "A: Drop, S: Hold, P: Game Stop",
    "I: Rotate, K: Down",
    "J: Move Left, L: Move Right",
)


def _preview(grid: tuple[tuple[int, ...], ...], filled: str) -> list[str]:
    return ["".join(filled if value else _BLANK for value in line) for line in grid]


def _ghost_cells(game: Game) -> set[tuple[int, int]]:
    top = game.ghost_row()
    return {
        (top + i, game.col + j)
        for i, line in enumerate(shape(game.piece, game.rotation))
        for j, value in enumerate(line)
        if value
    }


def _square(cell: Cell, ghost: bool) -> str:
    if cell is Cell.WALL:
        return _WALL
    if cell is Cell.LOCKED:
        return _LOCKED
    if ghost:
        return _GHOST
    if cell is Cell.FALLING:
        return _FALLING
    return _BLANK


def render_table(game: Game, best_point: int) -> str:
    """The whole play screen: scores, next and held pieces, board with ghost, key help."""
    lines = [
        f"\033[H{INDENT}Best Score: {best_point} Score: {game.point}",
        f"{INDENT}Next Block | Hold block",
    ]
    next_rows = _preview(shape(game.next_piece, 0), _NEXT)
    hold_rows = _preview(shape(game.held, 0), _HOLD)
    lines.extend(
        f"{INDENT}{nxt}{_WALL * 2}{held}" for nxt, held in zip(next_rows, hold_rows)
    )
    lines.append(INDENT + _WALL * len(game.table[0]))
    ghost = _ghost_cells(game)
    for r, row in enumerate(game.table):
        lines.append(
            INDENT + "".join(_square(cell, (r, c) in ghost) for c, cell in enumerate(row))
        )
    lines.extend(INDENT + text for text in _HELP)
    return "\n".join(lines) + "\n"


def render_menu() -> str:
    """The main menu with its selection prompt."""
    options = ("1) Game Start", "2) Search history", "3) Record Output", "4) QUIT")
    parts = [
        "\n\n\t\t\t\tText Tetris",
        RULE,
        "\t\t\t\tGAME MENU\t",
        RULE,
        *(f"{INDENT}   {option}" for option in options),
        RULE,
        "\t\t\t\t\t SELECT : ",
    ]
    return "\n".join(parts)


def render_game_over(point: int, is_best: bool) -> str:
    """The banner shown once a game has ended."""
    text = (
        f"\033[H{INDENT}\n{INDENT}\n{RULE}\n\t\t\t\tGAME OVER\t\n{RULE}\n"
        f"\t\t\t\tYour score: {point}\n"
    )
    if is_best:
        text += f"\n{INDENT}Best Record!\n"
    return text


def render_records(records: Iterable[Record], title: Optional[str] = None) -> str:
    """A table of records, preceded by a titled banner when a title is given."""
    banner = ""
    if title is not None:
        banner = f"\n\n\t\t\t\tText Tetris\n{RULE}\n\t\t\t\t{title}\t\n{RULE}\n"
    rows = "".join(f"{INDENT}{record.display()}\n" for record in records)
    return f"{banner}{INDENT}Rank\tName\tPoint\tDate\n{rows}{RULE}\n"


def render_size_warning(rows: int, cols: int) -> str:
    """Message asking for a larger terminal window."""
    return (
        f"\n{INDENT}[!] Terminal window is too small.\n"
        f"{INDENT}Minimum required size: {MIN_ROWS} × {MIN_COLS}\n"
        f"{INDENT}Current size: {rows} × {cols}\n"
        f"{INDENT}Please resize the terminal window.\n"
    )


def is_terminal_size_sufficient(rows: int, cols: int) -> bool:
    """Whether a terminal of this size can show the whole play screen."""
    return rows >= MIN_ROWS and cols >= MIN_COLS