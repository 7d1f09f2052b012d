"""
Terminal UI (curses).

- command_for_key(): raw key code -> Command (or None to ignore the key)
- KeyReader: producer thread, reads keys and queues commands in order
- BoardView: draws a Snapshot; never touches the game itself
- run(): wires the three together around session.play()

Keys: 1-9 = pick color, Backspace/Ctrl-Z = undo, Enter/Space = guess,
Esc/Ctrl-C/q = quit.
"""

import curses
import logging
import queue
import select
import sys
import threading
from typing import Optional

from .commands import AppendColor, Command, Quit, RemoveLast, Submit
from .schemas import PALETTE, GameConfig, Snapshot
from .session import play
from .store import Game

logger = logging.getLogger(__name__)

CIRCLE = "●"
DOT = "∙"

KEY_ESC = 27
KEY_CTRL_C = 3
KEY_CTRL_Z = 26
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8, KEY_CTRL_Z)
ENTER_KEYS = (curses.KEY_ENTER, 10, 13, ord(" "))
QUIT_KEYS = (KEY_ESC, KEY_CTRL_C, ord("q"))

# Color pair indices; palette colors use 1..len(PALETTE)
PAIR_BULL = len(PALETTE) + 1
PAIR_COW = len(PALETTE) + 2

# Seconds the reader waits for input before checking whether to stop
POLL_SECONDS = 0.1


def command_for_key(key: int) -> Optional[Command]:
    if key in QUIT_KEYS:
        return Quit()
    if key in BACKSPACE_KEYS:
        return RemoveLast()
    if key in ENTER_KEYS:
        return Submit()
    # Keys 1..9 pick colors 0..8; 0 is not a color key
    if ord("1") <= key <= ord("9"):
        return AppendColor(key - ord("1"))
    return None


class KeyReader(threading.Thread):
    """Reads keys off the terminal and queues the matching commands."""

    def __init__(self, screen, commands: "queue.Queue[Command]", lock: threading.Lock):
        super().__init__(name="key-reader", daemon=True)
        self.screen = screen
        self.commands = commands
        self.lock = lock
        self.stopped = threading.Event()

    def stop(self) -> None:
        self.stopped.set()

    def run(self) -> None:
        while not self.stopped.is_set():
            # Wait outside the lock so drawing is never blocked on input
            ready, _, _ = select.select([sys.stdin], [], [], POLL_SECONDS)
            if not ready:
                continue
            with self.lock:
                key = self.screen.getch()
            if key == -1:
                continue
            command = command_for_key(key)
            if command is not None:
                self.commands.put(command)


def init_colors() -> None:
    """Initialize curses color pairs."""
    curses.start_color()
    curses.use_default_colors()
    for index, name in enumerate(PALETTE, start=1):
        curses.init_pair(index, getattr(curses, "COLOR_" + name.upper()), -1)
    curses.init_pair(PAIR_BULL, curses.COLOR_RED, -1)
    curses.init_pair(PAIR_COW, curses.COLOR_WHITE, -1)


def safe_addstr(win, y, x, text, attr=0):
    """addstr that silently ignores curses errors at screen edges."""
    try:
        win.addstr(y, x, text, attr)
    except curses.error:
        pass


class BoardView:
    """
    Layout, top to bottom:
      two legend lines for the hint pegs, a blank line,
      the solution row, one row per allowed guess (first guess at the
      bottom), a blank line, then the status line and an undo reminder.
    The color keys are listed to the right of the board.
    """

    def __init__(self, screen, config: GameConfig, lock: threading.Lock):
        self.screen = screen
        self.config = config
        self.lock = lock

    @property
    def board_top(self) -> int:
        return 3

    @property
    def board_width(self) -> int:
        # 2 columns per code peg + 1 per key peg, a gap, then 2 before the legend
        return self.config.holes * 3 + 1 + 2

    def __call__(self, snapshot: Snapshot) -> None:
        with self.lock:
            self.screen.erase()
            self.draw_legend_lines()
            self.draw_board(snapshot)
            self.draw_color_keys()
            self.draw_status(snapshot)
            self.screen.refresh()

    def draw_legend_lines(self) -> None:
        safe_addstr(self.screen, 0, 0, CIRCLE, curses.color_pair(PAIR_BULL))
        safe_addstr(self.screen, 0, 1, " Correct color, correct position")
        safe_addstr(self.screen, 1, 0, CIRCLE, curses.color_pair(PAIR_COW))
        safe_addstr(self.screen, 1, 1, " Correct color, wrong position")

    def draw_board(self, snapshot: Snapshot) -> None:
        holes = self.config.holes
        max_guesses = self.config.max_guesses

        self.draw_code(self.board_top, snapshot.solution or [])

        codes = [row.guess for row in snapshot.rows] + [snapshot.current_guess]
        codes += [[]] * max_guesses
        pegs = [(row.bulls, row.cows) for row in snapshot.rows]
        pegs += [(0, 0)] * max_guesses

        for index in range(max_guesses):
            y = self.board_top + max_guesses - index
            self.draw_code(y, codes[index])
            self.draw_pegs(y, 2 * holes + 1, *pegs[index])

    def draw_code(self, y: int, code) -> None:
        for hole in range(self.config.holes):
            x = hole * 2
            if hole < len(code):
                safe_addstr(self.screen, y, x, CIRCLE, curses.color_pair(code[hole] + 1))
            else:
                safe_addstr(self.screen, y, x, DOT)

    def draw_pegs(self, y: int, x: int, bulls: int, cows: int) -> None:
        for hole in range(self.config.holes):
            if hole < bulls:
                safe_addstr(self.screen, y, x + hole, CIRCLE, curses.color_pair(PAIR_BULL))
            elif hole < bulls + cows:
                safe_addstr(self.screen, y, x + hole, CIRCLE, curses.color_pair(PAIR_COW))
            else:
                safe_addstr(self.screen, y, x + hole, DOT)

    def draw_color_keys(self) -> None:
        x = self.board_width
        for color in range(self.config.num_colors):
            safe_addstr(self.screen, self.board_top, x + color * 2, str(color + 1))
            safe_addstr(self.screen, self.board_top + 1, x + color * 2, CIRCLE,
                        curses.color_pair(color + 1))

    def draw_status(self, snapshot: Snapshot) -> None:
        # solution row + guess rows + one blank line
        y = self.board_top + self.config.max_guesses + 2
        if snapshot.status == "won":
            safe_addstr(self.screen, y, 0, "You won!")
        elif snapshot.status == "lost":
            safe_addstr(self.screen, y, 0, "You lost")
        else:
            if len(snapshot.current_guess) < self.config.holes:
                safe_addstr(self.screen, y, 0, "Press number keys to select colors")
            else:
                safe_addstr(self.screen, y, 0, "Press enter to make a guess")
            if snapshot.current_guess:
                safe_addstr(self.screen, y + 1, 0, "Press backspace to undo")


def run(screen, game: Game) -> Snapshot:
    """Play one game on a curses screen; meant for curses.wrapper()."""
    init_colors()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    # raw mode so Ctrl-C and Ctrl-Z arrive as keys
    curses.raw()
    screen.keypad(True)
    screen.nodelay(True)

    lock = threading.Lock()
    commands: "queue.Queue[Command]" = queue.Queue()
    reader = KeyReader(screen, commands, lock)
    reader.start()
    try:
        return play(game, commands, BoardView(screen, game.config, lock))
    finally:
        reader.stop()
        reader.join()
        curses.noraw()
