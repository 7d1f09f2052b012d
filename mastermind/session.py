"""
The play loop, without any terminal.

Key presses arrive on a FIFO queue (one producer thread feeds it); this loop
is the only consumer and the only code that mutates the game. The screen is
drawn from a snapshot before the first command and after every command, so
a render never sees a half-applied guess.
"""

import logging
import queue
from typing import Callable

from .commands import Command, Quit
from .schemas import Snapshot
from .store import Game

logger = logging.getLogger(__name__)

Renderer = Callable[[Snapshot], None]


def play(game: Game, commands: "queue.Queue[Command]", render: Renderer) -> Snapshot:
    """
    Run until the game is won or lost, or a Quit command arrives.
    Returns the last snapshot drawn.
    """
    snapshot = game.snapshot()
    render(snapshot)

    while snapshot.status == "playing":
        command = commands.get()
        if isinstance(command, Quit):
            logger.info("Player quit after %d guess(es)", len(snapshot.rows))
            break

        # Ignored commands still redraw; the screen simply stays the same
        game.apply(command)
        snapshot = game.snapshot()
        render(snapshot)

    return snapshot
