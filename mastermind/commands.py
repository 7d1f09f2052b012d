"""
Discrete player commands.

The UI turns key presses into these; the game only ever sees commands.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AppendColor:
    color: int


@dataclass(frozen=True)
class RemoveLast:
    pass


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[AppendColor, RemoveLast, Submit, Quit]
