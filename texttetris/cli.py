"""Interactive terminal front end: menu, game loop and record screens."""

from __future__ import annotations

import argparse
import os
import re
import select
import sys
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence, TextIO

from texttetris.game import Game, GameState
from texttetris.records import RESULTS_FILE, RecordStore
from texttetris.render import (
    RULE,
    is_terminal_size_sufficient,
    render_game_over,
    render_menu,
    render_records,
    render_size_warning,
    render_table,
)

try:
    import termios
except ImportError:  # pragma: no cover - non-POSIX systems
    termios = None  # type: ignore[assignment]

try:
    import msvcrt
except ImportError:
    msvcrt = None  # type: ignore[assignment]

FALL_INTERVAL = 0.5
KEY_POLL = 0.05
FALLBACK_SIZE = (24, 80)

_MENU_CHOICE = re.compile(r"\s*([+-]?\d+)")


class Terminal:
    """Keyboard and screen access over a pair of text streams."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def _tty_fd(self) -> Optional[int]:
        try:
            fd = self.stdin.fileno()
        except (AttributeError, OSError, ValueError):
            return None
        return fd if os.isatty(fd) else None

    @contextmanager
    def _termios_mode(self, vmin: int, vtime: int, when: int) -> Iterator[Optional[int]]:
        fd = self._tty_fd()
        if fd is None or termios is None:
            yield None
            return
        original = termios.tcgetattr(fd)
        raw = termios.tcgetattr(fd)
        raw[3] &= ~(termios.ECHO | termios.ICANON)
        raw[6][termios.VMIN] = vmin
        raw[6][termios.VTIME] = vtime
        termios.tcsetattr(fd, when, raw)
        try:
            yield fd
        finally:
            termios.tcsetattr(fd, when, original)

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Turn off echo and line buffering for the duration of the block."""
        flush = termios.TCSAFLUSH if termios is not None else 0
        with self._termios_mode(0, 1, flush):
            yield

    def read_key(self) -> Optional[str]:
        """One pending key, or None when nothing was typed."""
        fd = self._tty_fd()
        if fd is not None and termios is not None:
            ready, _, _ = select.select([fd], [], [], KEY_POLL)
            if not ready:
                return None
            data = os.read(fd, 1)
            return data.decode(errors="replace") or None
        if fd is not None and msvcrt is not None:
            if msvcrt.kbhit():
                return msvcrt.getwch()
            time.sleep(KEY_POLL)
            return None
        return self.stdin.read(1) or None

    def press_any_key(self) -> None:
        """Prompt and wait for a single key."""
        self.stdout.write("\n\t\t\tPress any key to continue...")
        self.stdout.flush()
        fd = self._tty_fd()
        if fd is not None and termios is not None:
            with self._termios_mode(1, 0, termios.TCSANOW):
                os.read(fd, 1)
        elif fd is not None and msvcrt is not None:
            msvcrt.getwch()
        else:
            self.stdin.read(1)

    def clear(self) -> None:
        self.stdout.write("\033[2J\033[H")
        self.stdout.flush()

    def size(self) -> tuple[int, int]:
        """Rows and columns of the output terminal, 24 x 80 when unknown."""
        try:
            columns, lines = os.get_terminal_size(self.stdout.fileno())
        except (AttributeError, OSError, ValueError):
            return FALLBACK_SIZE
        return lines, columns


def parse_menu_choice(text: str) -> int:
    """The menu number at the start of ``text``; ValueError unless it is 1 to 4."""
    match = _MENU_CHOICE.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    choice = int(match.group(1))
    if not 1 <= choice <= 4:
        raise ValueError(f"menu choice out of range: {choice}")
    return choice


def _read_word(terminal: Terminal) -> Optional[str]:
    while True:
        line = terminal.stdin.readline()
        if not line:
            return None
        words = line.split()
        if words:
            return words[0]


def play(
    terminal: Terminal,
    store: RecordStore,
    best_point: int = 0,
    rng=None,
    clock: Callable[[], float] = time.monotonic,
) -> int:
    """Run one game, record its result and return the best score so far."""
    game = Game(rng)
    out = terminal.stdout

    def draw() -> None:
        out.write(render_table(game, best_point))
        out.flush()

    with terminal.raw_mode():
        terminal.clear()
        game.start()
        draw()
        last_fall = clock()
        while game.state is GameState.START:
            key = terminal.read_key()
            if key is not None:
                game.process_key(key)
                draw()
                if game.state is not GameState.START:
                    break
            now = clock()
            if now - last_fall >= FALL_INTERVAL:
                game.move_down()
                draw()
                last_fall = now

    terminal.clear()
    is_best = game.point > best_point
    out.write(render_game_over(game.point, is_best))
    if is_best:
        best_point = game.point
    out.write("\n\t\t\tEnter your name: ")
    out.flush()
    name = _read_word(terminal)
    if name is not None:
        store.save_result(name, game.point)
    terminal.press_any_key()
    return best_point


def _search(terminal: Terminal, store: RecordStore) -> None:
    out = terminal.stdout
    terminal.clear()
    out.write(
        f"\n\n\t\t\t\tText Tetris\n{RULE}\n\t\t\t\tSearch history\n{RULE}\n"
        "\t\t\t\tEnter name : "
    )
    out.flush()
    name = _read_word(terminal)
    if not store.path.exists():
        out.write("\n\t\t\tNo records found.\n")
    elif name is not None:
        out.write("\n" + render_records(store.search(name)))
    terminal.press_any_key()


def _show_records(terminal: Terminal, store: RecordStore) -> None:
    terminal.clear()
    if store.path.exists():
        terminal.stdout.write(render_records(store.load(), "All Records"))
    else:
        terminal.stdout.write("\n\t\t\tNo records found.\n")
    terminal.press_any_key()


def _wait_for_size(terminal: Terminal) -> None:
    while True:
        rows, cols = terminal.size()
        if is_terminal_size_sufficient(rows, cols):
            return
        terminal.clear()
        terminal.stdout.write(render_size_warning(rows, cols))
        terminal.stdout.flush()
        time.sleep(FALL_INTERVAL)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="texttetris", description="Text Tetris")
    parser.add_argument(
        "--results", default=RESULTS_FILE, help="file holding the score records"
    )
    args = parser.parse_args(argv)

    terminal = Terminal()
    store = RecordStore(args.results)
    _wait_for_size(terminal)
    best_point = store.best_point()

    while True:
        terminal.clear()
        terminal.stdout.write(render_menu())
        terminal.stdout.flush()
        line = terminal.stdin.readline()
        if not line:
            return 0
        try:
            choice = parse_menu_choice(line)
        except ValueError:
            terminal.stdout.write("Wrong Input. Please enter right number in 1~4.\n")
            terminal.press_any_key()
            continue
        if choice == 1:
            best_point = play(terminal, store, best_point)
        elif choice == 2:
            _search(terminal, store)
        elif choice == 3:
            _show_records(terminal, store)
        else:
            return 0


if __name__ == "__main__":
    raise SystemExit(main())