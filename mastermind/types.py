"""
Labels for clarity.
"""

from typing import List, Literal

Color = int  # 0 -> num_colors - 1
Code = List[Color]  # a solution or a guess, one color per hole
GameStatus = Literal["playing", "won", "lost"]
