"""Board, pieces and movement rules of the falling-block game."""

from __future__ import annotations

import random
from enum import Enum, IntEnum
from typing import Iterator, Optional, Protocol

HEIGHT = 21
WIDTH = 10
SPAWN_ROW = 0
SPAWN_COL = 3
LOCK_POINTS = 25
LINE_POINTS = 100

_INTERIOR = range(1, WIDTH - 1)


class Piece(IntEnum):
    """The seven block kinds, numbered as the random generator picks them."""

    I = 0
    T = 1
    S = 2
    Z = 3
    L = 4
    J = 5
    O = 6

    def letter(self) -> str:
        """Lower-case letter naming the piece."""
        return self.name.lower()


class Cell(Enum):
    """Contents of one board square."""

    EMPTY = 0
    WALL = 1
    FALLING = 2
    LOCKED = 3


class GameState(Enum):
    START = 0
    END = 1


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def _grid(*rows: str) -> tuple[tuple[int, ...], ...]:
    return tuple(tuple(int(ch) for ch in row) for row in rows)


_EMPTY_SHAPE = _grid("0000", "0000", "0000", "0000")

_SHAPES: dict[Piece, tuple[tuple[tuple[int, ...], ...], ...]] = {
    Piece.I: (
        _grid("1111", "0000", "0000", "0000"),
        _grid("0001", "0001", "0001", "0001"),
        _grid("0000", "0000", "0000", "1111"),
        _grid("1000", "1000", "1000", "1000"),
    ),
    Piece.T: (
        _grid("1000", "1100", "1000", "0000"),
        _grid("1110", "0100", "0000", "0000"),
        _grid("0010", "0110", "0010", "0000"),
        _grid("0000", "0100", "1110", "0000"),
    ),
    Piece.S: (
        _grid("1000", "1100", "0100", "0000"),
        _grid("0110", "1100", "0000", "0000"),
        _grid("0100", "0110", "0010", "0000"),
        _grid("0000", "0110", "1100", "0000"),
    ),
    Piece.Z: (
        _grid("0100", "1100", "1000", "0000"),
        _grid("1100", "0110", "0000", "0000"),
        _grid("0010", "0110", "0100", "0000"),
        _grid("0000", "1100", "0110", "0000"),
    ),
    Piece.L: (
        _grid("1000", "1000", "1100", "0000"),
        _grid("1110", "1000", "0000", "0000"),
        _grid("0110", "0010", "0010", "0000"),
        _grid("0000", "0010", "1110", "0000"),
    ),
    Piece.J: (
        _grid("0100", "0100", "1100", "0000"),
        _grid("1000", "1110", "0000", "0000"),
        _grid("1100", "1000", "1000", "0000"),
        _grid("1110", "0010", "0000", "0000"),
    ),
    Piece.O: (
        _grid("1100", "1100", "0000", "0000"),
        _grid("1100", "1100", "0000", "0000"),
        _grid("1100", "1100", "0000", "0000"),
        _grid("1100", "1100", "0000", "0000"),
    ),
}


def shape(piece: Optional[Piece], state: int) -> tuple[tuple[int, ...], ...]:
    """The 4x4 grid of a piece in a rotation state; an empty grid for no piece."""
    if piece is None:
        return _EMPTY_SHAPE
    return _SHAPES[Piece(piece)][state]


def _new_table() -> list[list[Cell]]:
    table = [[Cell.EMPTY] * WIDTH for _ in range(HEIGHT)]
    for row in table:
        row[0] = Cell.WALL
        row[-1] = Cell.WALL
    table[-1] = [Cell.WALL] * WIDTH
    return table


class Game:
    """One game: the board, the falling piece, the next and held pieces, the score."""

    def __init__(self, rng: Optional[_RandomSource] = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.table = _new_table()
        self.piece = Piece.I
        self.next_piece = Piece.I
        self.rotation = 0
        self.row = SPAWN_ROW
        self.col = SPAWN_COL
        self.state = GameState.END
        self.point = 0
        self.held: Optional[Piece] = None
        self.hold_used = False

    def start(self) -> None:
        """Clear the board, spawn the first piece and set the game running."""
        self.table = _new_table()
        self.point = 0
        self.held = None
        self.hold_used = False
        self.next_piece = self._random_piece()
        self._spawn()
        self._place()
        self.state = GameState.START

    def cell(self, row: int, col: int) -> Cell:
        return self.table[row][col]

    def is_collision(self, row: int, col: int, state: int) -> bool:
        """Whether the current piece in ``state`` at (row, col) hits a wall, a locked cell or the edge."""
        for r, c in self._cells(row, col, state):
            if not (0 <= r < HEIGHT and 0 <= c < WIDTH):
                return True
            if self.table[r][c] in (Cell.WALL, Cell.LOCKED):
                return True
        return False

    def move_left(self) -> None:
        self._shift(-1)

    def move_right(self) -> None:
        self._shift(1)

    def move_down(self) -> None:
        """Move the piece one row down, locking it when it cannot go further."""
        self._remove()
        if not self.is_collision(self.row + 1, self.col, self.rotation):
            self.row += 1
            self._place()
        else:
            self._place()
            self._lock()

    def rotate(self) -> None:
        new_state = (self.rotation + 1) % 4
        self._remove()
        if not self.is_collision(self.row, self.col, new_state):
            self.rotation = new_state
        self._place()

    def hard_drop(self) -> None:
        """Drop the piece as far as it goes and lock it at once."""
        self._remove()
        self.row = self.ghost_row()
        self._place()
        self._lock()

    def hold(self) -> None:
        """Put the current piece on hold, or swap it with the held one; once per piece."""
        if self.hold_used:
            return
        self._remove()
        if self.held is None:
            self.held = self.piece
            self._spawn()
        else:
            self.piece, self.held = self.held, self.piece
        self.rotation = 0
        self.row = SPAWN_ROW
        self.col = SPAWN_COL
        self._place()
        self.hold_used = True

    def ghost_row(self) -> int:
        """Row the current piece would come to rest at if dropped."""
        row = self.row
        while not self.is_collision(row + 1, self.col, self.rotation):
            row += 1
        return row

    def process_key(self, key: str) -> None:
        """Apply one key press; unknown keys are ignored."""
        action = key.lower()
        if action == "j":
            self.move_left()
        elif action == "l":
            self.move_right()
        elif action == "k":
            self.move_down()
        elif action == "i":
            self.rotate()
        elif action == "a":
            self.hard_drop()
        elif action == "p":
            self.state = GameState.END
        elif action == "s":
            self.hold()

    def _random_piece(self) -> Piece:
        return Piece(self._rng.randrange(len(Piece)))

    def _spawn(self) -> None:
        self.piece = self.next_piece
        self.next_piece = self._random_piece()
        self.rotation = 0
        self.row = SPAWN_ROW
        self.col = SPAWN_COL

    def _cells(self, row: int, col: int, state: int) -> Iterator[tuple[int, int]]:
        for i, line in enumerate(shape(self.piece, state)):
            for j, filled in enumerate(line):
                if filled:
                    yield row + i, col + j

    def _paint(self, value: Cell) -> None:
        for r, c in self._cells(self.row, self.col, self.rotation):
            self.table[r][c] = value

    def _place(self) -> None:
        self._paint(Cell.FALLING)

    def _remove(self) -> None:
        self._paint(Cell.EMPTY)

    def _shift(self, delta: int) -> None:
        self._remove()
        if not self.is_collision(self.row, self.col + delta, self.rotation):
            self.col += delta
        self._place()

    def _lock(self) -> None:
        self._paint(Cell.LOCKED)
        self._clear_lines()
        self._spawn()
        if self.is_collision(self.row, self.col, self.rotation):
            self.state = GameState.END
        else:
            self._place()
            self.point += LOCK_POINTS
        self.hold_used = False

    def _clear_lines(self) -> None:
        inner = slice(1, WIDTH - 1)
        for row in range(HEIGHT - 1):
            if all(self.table[row][c] is Cell.LOCKED for c in _INTERIOR):
                for r in range(row, 0, -1):
                    self.table[r][inner] = self.table[r - 1][inner]
                self.table[0][inner] = [Cell.EMPTY] * len(_INTERIOR)
                self.point += LINE_POINTS