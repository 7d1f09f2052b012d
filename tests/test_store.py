"""
Testing the in-memory game
- Type colors, submit rows, and check status/history/no-op handling.
"""

import random

import pytest

from mastermind.commands import AppendColor, Quit, RemoveLast, Submit
from mastermind.engine import Hint
from mastermind.schemas import GameConfig
from mastermind.store import Game



def test_new_game_starts_playing(game):
    assert game.status() == "playing"
    assert game.history == []
    assert game.current_guess == []
    assert game.guesses_left() == 8


def test_win_in_one_guess(game):
    for color in [0, 1, 2, 3]:
        assert game.append_color(color) is True

    hint = game.submit_guess()

    assert hint == Hint(bulls=4, cows=0)
    assert game.status() == "won"
    assert game.hints == [Hint(bulls=4, cows=0)]
    assert game.guesses == [(0, 1, 2, 3)]
    assert game.current_guess == []


def test_wrong_guess_keeps_playing(game, enter):
    enter(game, [3, 2, 1, 0])

    assert game.status() == "playing"
    assert game.hints == [Hint(bulls=0, cows=4)]
    assert game.guesses_left() == 7
    # Typing starts fresh after every submission
    assert game.current_guess == []


def test_loss_after_last_guess(enter):
    config = GameConfig(num_colors=6, max_guesses=1, holes=4)
    game = Game.create(config, solution=[0, 1, 2, 3])

    enter(game, [5, 5, 5, 5])

    assert game.status() == "lost"
    assert game.guesses_left() == 0


def test_winning_on_the_last_guess_is_a_win(enter):
    config = GameConfig(num_colors=6, max_guesses=2, holes=4)
    game = Game.create(config, solution=[0, 1, 2, 3])

    enter(game, [5, 5, 5, 5])
    enter(game, [0, 1, 2, 3])

    assert game.status() == "won"


def test_append_beyond_holes_is_ignored(game):
    for color in [0, 1, 2, 3]:
        game.append_color(color)

    assert game.append_color(4) is False
    assert game.current_guess == [0, 1, 2, 3]


def test_append_out_of_range_color_is_ignored(game):
    assert game.append_color(6) is False
    assert game.append_color(-1) is False
    assert game.current_guess == []


def test_remove_last_color(game):
    game.append_color(2)
    game.append_color(4)

    assert game.remove_last_color() is True
    assert game.current_guess == [2]
    assert game.remove_last_color() is True
    # Nothing left to remove
    assert game.remove_last_color() is False
    assert game.current_guess == []


def test_partial_submit_is_ignored(game):
    game.append_color(0)
    game.append_color(1)

    assert game.submit_guess() is None
    assert game.history == []
    assert game.current_guess == [0, 1]


def test_commands_after_game_over_change_nothing(game, enter):
    enter(game, [0, 1, 2, 3])
    assert game.status() == "won"

    assert game.append_color(1) is False
    assert game.remove_last_color() is False
    assert game.submit_guess() is None
    assert game.current_guess == []
    assert len(game.history) == 1


def test_apply_dispatches_commands(game):
    assert game.apply(AppendColor(0)) is True
    assert game.apply(AppendColor(9)) is False
    assert game.apply(RemoveLast()) is True
    assert game.apply(Submit()) is False
    assert game.apply(Quit()) is False

    for color in [0, 1, 2, 3]:
        game.apply(AppendColor(color))
    assert game.apply(Submit()) is True
    assert game.status() == "won"


def test_snapshot_hides_solution_until_game_over(game, enter):
    game.append_color(5)
    snapshot = game.snapshot()
    assert snapshot.status == "playing"
    assert snapshot.solution is None
    assert snapshot.current_guess == [5]
    assert snapshot.rows == []

    game.remove_last_color()
    enter(game, [0, 1, 3, 2])
    snapshot = game.snapshot()
    assert snapshot.solution is None
    assert snapshot.rows[0].guess == [0, 1, 3, 2]
    assert snapshot.rows[0].bulls == 2
    assert snapshot.rows[0].cows == 2
    assert snapshot.rows[0].message == "2 bull(s) and 2 cow(s)"

    enter(game, [0, 1, 2, 3])
    snapshot = game.snapshot()
    assert snapshot.status == "won"
    assert snapshot.solution == [0, 1, 2, 3]
    assert snapshot.guesses_left == 6


def test_snapshot_is_a_copy(game):
    snapshot = game.snapshot()
    game.append_color(1)
    assert snapshot.current_guess == []


def test_create_generates_a_solution_from_rng(config):
    first = Game.create(config, rng=random.Random(42))
    second = Game.create(config, rng=random.Random(42))

    assert first.solution == second.solution
    assert len(first.solution) == 4
    assert all(0 <= color < 6 for color in first.solution)


def test_create_rejects_wrong_length_solution(config):
    with pytest.raises(ValueError):
        Game.create(config, solution=[0, 1, 2])


@pytest.mark.parametrize("solution", [[0, 1, 2, 9], [0, 1, 2, 6], [-1, 0, 1, 2]])
def test_create_rejects_out_of_range_solution(config, solution):
    with pytest.raises(ValueError):
        Game.create(config, solution=solution)


def test_create_rejects_repeats_when_duplicates_forbidden():
    config = GameConfig(num_colors=6, holes=4, allow_duplicates=False)
    with pytest.raises(ValueError):
        Game.create(config, solution=[0, 0, 1, 2])
    # The same code is fine when repeats are allowed
    assert Game.create(GameConfig(), solution=[0, 0, 1, 2]).solution == (0, 0, 1, 2)
