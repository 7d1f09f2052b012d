"""
Single place to:
- Read game defaults from env (or a local .env)
- Merge them with command line overrides
- Build a validated GameConfig, or fail with ConfigError before play starts

Env vars:
  MASTERMIND_COLORS, MASTERMIND_GUESSES, MASTERMIND_HOLES  (positive ints)
  MASTERMIND_NO_DUPLICATE, MASTERMIND_RANDOM_ORG           (1/true/yes/on)
  MASTERMIND_LOG_LEVEL                                     (DEBUG, INFO, ...)
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .schemas import GameConfig

# Load env vars from .env if present; real env vars win
load_dotenv()

TRUTHY = ("1", "true", "yes", "on")


class ConfigError(ValueError):
    """The requested game cannot be played; reported once at startup."""


def env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in TRUTHY


def log_level() -> str:
    return os.getenv("MASTERMIND_LOG_LEVEL", "WARNING").upper()


def _describe(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        msg = item["msg"].removeprefix("Value error, ")
        field = ".".join(str(part) for part in item["loc"])
        messages.append(f"{field}: {msg}" if field else msg)
    return "; ".join(messages)


def load_config(
    num_colors: Optional[int] = None,
    max_guesses: Optional[int] = None,
    holes: Optional[int] = None,
    allow_duplicates: Optional[bool] = None,
) -> GameConfig:
    """
    Arguments left as None come from the environment, then from the
    GameConfig defaults (6 colors, 8 guesses, 4 holes, duplicates allowed).
    """
    values = {
        "num_colors": num_colors if num_colors is not None else env_int("MASTERMIND_COLORS"),
        "max_guesses": max_guesses if max_guesses is not None else env_int("MASTERMIND_GUESSES"),
        "holes": holes if holes is not None else env_int("MASTERMIND_HOLES"),
    }
    if allow_duplicates is None:
        allow_duplicates = not env_flag("MASTERMIND_NO_DUPLICATE")
    values["allow_duplicates"] = allow_duplicates

    # Drop unset values so the model defaults apply
    values = {key: value for key, value in values.items() if value is not None}

    try:
        return GameConfig(**values)
    except ValidationError as exc:
        raise ConfigError(_describe(exc)) from None
