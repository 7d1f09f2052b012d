"""
- Clear MASTERMIND_* env vars so a developer's shell or .env never leaks into tests
- Provide the standard 6 colors / 8 guesses / 4 holes config
- Provide a game whose solution is known up front ([0, 1, 2, 3])
- Provide `enter`, which types a whole row and submits it
"""
import os

import pytest

from mastermind.schemas import GameConfig
from mastermind.store import Game


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("MASTERMIND_"):
            monkeypatch.delenv(name)
    yield


@pytest.fixture
def config() -> GameConfig:
    return GameConfig(num_colors=6, max_guesses=8, holes=4, allow_duplicates=True)


@pytest.fixture
def game(config) -> Game:
    # Fixed solution so we know what every guess should score
    return Game.create(config, solution=[0, 1, 2, 3])


@pytest.fixture
def enter():
    """Returns a helper that types a whole row and presses enter."""
    def _enter(game: Game, code) -> None:
        for color in code:
            game.append_color(color)
        game.submit_guess()
    return _enter
