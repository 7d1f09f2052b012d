"""
Pure game logic (no terminal, no randomness).
We compute two feedback numbers for each guess:
- bulls: how many holes are exactly correct (right color, right place)
- cows: how many of the remaining guessed colors appear somewhere else
  in the solution (right color, wrong place)

A hole that scores a bull never counts towards the cows.
Duplicates are allowed in both the guess and the solution.
"""

from dataclasses import dataclass

from .types import Code


@dataclass(frozen=True)
class Hint:
    bulls: int = 0  # correct color, correct position
    cows: int = 0   # correct color, wrong position


def score_guess(guess: Code, solution: Code, num_colors: int) -> Hint:
    """
    Example:
      solution = [0, 1, 1, 3]
      guess    = [1, 1, 2, 0]
      bulls = 1  (the 1 in the second hole)
      cows  = 2  (the leftover 1 and the 0 are in the wrong holes)
    """

    # 0. Validate lengths match
    n = len(solution)
    if n == 0 or len(guess) != n:
        raise ValueError("Guess and solution must be the same non-zero length.")

    # 1. Count exact matches; only unmatched holes go into the color counts
    bulls = 0
    guess_counts = [0] * num_colors
    solution_counts = [0] * num_colors
    for guessed, hidden in zip(guess, solution):
        if guessed == hidden:
            bulls += 1
        else:
            guess_counts[guessed] += 1
            solution_counts[hidden] += 1

    # 2. Overlap of the leftovers is the sum of the smaller count per color
    cows = sum(min(a, b) for a, b in zip(guess_counts, solution_counts))

    return Hint(bulls=bulls, cows=cows)


def is_win(hint: Hint, holes: int) -> bool:
    """Win = every hole is a bull."""
    return hint.bulls == holes


def describe_hint(hint: Hint) -> str:
    # Same wording for every row; never says which holes are right
    if hint.bulls == 0 and hint.cows == 0:
        return "all incorrect"
    return f"{hint.bulls} bull(s) and {hint.cows} cow(s)"
