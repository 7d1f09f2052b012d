"""
In-memory game state
Holds one play session: the hidden solution, every submitted guess with
its hint, and the guess being typed.

Invalid commands (too many colors, submitting half a row, anything after
the game ended) are ignored rather than reported.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .commands import AppendColor, Command, RemoveLast, Submit
from .engine import Hint, describe_hint, is_win, score_guess
from .random_client import generate_solution
from .schemas import GameConfig, RowOut, Snapshot
from .types import Code, GameStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuessEntry:
    guess: tuple
    hint: Hint


@dataclass
class Game:
    config: GameConfig
    solution: tuple
    history: List[GuessEntry] = field(default_factory=list)
    current_guess: Code = field(default_factory=list)

    @classmethod
    def create(cls, config: GameConfig, solution: Optional[Code] = None,
               rng: Optional[random.Random] = None) -> "Game":
        """
        Start a game. Without an explicit solution one is generated
        from `rng` (a system random source when None).
        """
        if solution is None:
            solution = generate_solution(
                config.num_colors, config.holes, config.allow_duplicates, rng=rng
            )
        if len(solution) != config.holes:
            raise ValueError(f"Solution must have exactly {config.holes} colors.")
        for color in solution:
            if color < 0 or color >= config.num_colors:
                raise ValueError(f"Solution color out of range 0..{config.num_colors - 1}.")
        if not config.allow_duplicates and len(set(solution)) != len(solution):
            raise ValueError("Solution repeats a color but duplicates are forbidden.")
        logger.debug("New game: %s", config)
        return cls(config=config, solution=tuple(solution))

    # --- Queries ---

    @property
    def hints(self) -> List[Hint]:
        return [entry.hint for entry in self.history]

    @property
    def guesses(self) -> List[tuple]:
        return [entry.guess for entry in self.history]

    def status(self) -> GameStatus:
        # Derived from the last hint every time, so it can never go stale
        if self.history and is_win(self.history[-1].hint, self.config.holes):
            return "won"
        if len(self.history) >= self.config.max_guesses:
            return "lost"
        return "playing"

    def is_over(self) -> bool:
        return self.status() != "playing"

    def guesses_left(self) -> int:
        return max(0, self.config.max_guesses - len(self.history))

    def snapshot(self) -> Snapshot:
        status = self.status()
        return Snapshot(
            status=status,
            rows=[
                RowOut(
                    guess=list(entry.guess),
                    bulls=entry.hint.bulls,
                    cows=entry.hint.cows,
                    message=describe_hint(entry.hint),
                )
                for entry in self.history
            ],
            current_guess=list(self.current_guess),
            guesses_left=self.guesses_left(),
            # Keep the solution hidden while the game is running
            solution=list(self.solution) if status != "playing" else None,
        )

    # --- Commands ---

    def append_color(self, color: int) -> bool:
        if self.is_over():
            return False
        if len(self.current_guess) >= self.config.holes:
            return False
        if color < 0 or color >= self.config.num_colors:
            return False
        self.current_guess.append(color)
        return True

    def remove_last_color(self) -> bool:
        if self.is_over() or not self.current_guess:
            return False
        self.current_guess.pop()
        return True

    def submit_guess(self) -> Optional[Hint]:
        """
        Score the current guess and move it into the history.
        Returns the hint, or None when nothing was submitted.
        """
        if self.is_over():
            return None
        if len(self.current_guess) != self.config.holes:
            return None

        guess = tuple(self.current_guess)
        hint = score_guess(guess, self.solution, self.config.num_colors)
        self.history.append(GuessEntry(guess=guess, hint=hint))
        self.current_guess = []

        status = self.status()
        logger.debug("Guess %d: %s -> %s", len(self.history), list(guess), describe_hint(hint))
        if status != "playing":
            logger.info("Game %s after %d guess(es)", status, len(self.history))
        return hint

    def apply(self, command: Command) -> bool:
        """Apply one command; True when the game changed."""
        if isinstance(command, AppendColor):
            return self.append_color(command.color)
        if isinstance(command, RemoveLast):
            return self.remove_last_color()
        if isinstance(command, Submit):
            return self.submit_guess() is not None
        # Quit belongs to the session, not the game
        return False
