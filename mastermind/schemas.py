"""
Explicit validation & Pydantic models
- GameConfig is validated once, before a game is created; a game never
  sees an invalid config.
- Snapshot and RowOut describe what the screen may show at any time.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .types import GameStatus

# Colors the terminal can draw, in key order (key 1 -> blue, ...)
PALETTE = ("blue", "red", "green", "yellow", "magenta", "white", "cyan")


# 1. Rules of one play session
class GameConfig(BaseModel):
    num_colors: int = Field(6, gt=0, description="How many colors the code is made of")
    max_guesses: int = Field(8, gt=0, description="How many guesses the player gets")
    holes: int = Field(4, gt=0, description="How many holes per row")
    allow_duplicates: bool = Field(True, description="Whether a color may repeat in the solution")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_solvable(self) -> "GameConfig":
        """
        The palette bounds how many colors we can draw, and without
        duplicates there must be at least one color per hole.
        """
        if self.num_colors > len(PALETTE):
            raise ValueError(f"colors must be <= {len(PALETTE)}")
        if not self.allow_duplicates and self.holes > self.num_colors:
            raise ValueError("colors must be >= holes when duplicates are forbidden")
        return self


# 2. One submitted row and its feedback
class RowOut(BaseModel):
    guess: List[int] = Field(..., description="The player's guess")
    bulls: int = Field(..., description="Right color in the right hole")
    cows: int = Field(..., description="Right color in the wrong hole")
    message: str = Field(..., description="Feedback message")


# 3. Read-only view of a game for the display
class Snapshot(BaseModel):
    status: GameStatus = Field(..., description="Current state of the game")
    rows: List[RowOut] = Field(..., description="All guesses made so far with feedback")
    current_guess: List[int] = Field(..., description="Colors entered for the next guess")
    guesses_left: int = Field(..., description="How many guesses remain")
    solution: Optional[List[int]] = Field(
        None, description="The solution (only revealed once the game is over)"
    )

    model_config = {"frozen": True}
