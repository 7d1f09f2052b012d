"""
Solution generation.

generate_solution() draws the hidden code from a local random source. Pass a
seeded random.Random to get the same code every time (tests do this).

fetch_code() is the opt-in remote variant: get the code from random.org. If
anything goes wrong (no internet, timeout, bad response), we fall back to a
local secure random generator so the game still works.
"""

import logging
import random
from typing import List, Optional

import requests

from .types import Code

logger = logging.getLogger(__name__)

RANDOM_ORG_URL = "https://www.random.org"
INTEGERS_URL = RANDOM_ORG_URL + "/integers/"
SEQUENCES_URL = RANDOM_ORG_URL + "/sequences/"

# keep network quick; if it takes too long, we will just fallback
TIMEOUT_SECONDS = 3.0


def generate_solution(
    num_colors: int,
    holes: int,
    allow_duplicates: bool,
    rng: Optional[random.Random] = None,
) -> Code:
    if rng is None:
        rng = random.SystemRandom()

    if allow_duplicates:
        # with replacement: every hole is an independent draw
        return [rng.randrange(num_colors) for _ in range(holes)]

    if num_colors < holes:
        raise ValueError(
            f"Cannot pick {holes} distinct colors out of {num_colors}."
        )
    # without replacement, in random order
    return rng.sample(range(num_colors), holes)


def _parse_plain(text: str) -> List[int]:
    # The body looks like:
    #   0\n3\n1\n2\n
    return [int(line) for line in text.splitlines() if line.strip() != ""]


def _request(url: str, params: dict) -> List[int]:
    response = requests.get(url, params=params, timeout=TIMEOUT_SECONDS)
    # If the response was not 200 OK, this will raise an error
    response.raise_for_status()
    return _parse_plain(response.text)


def _fetch_remote(num_colors: int, holes: int, allow_duplicates: bool) -> Code:
    if allow_duplicates:
        values = _request(INTEGERS_URL, {
            "num": holes,          # how many numbers we want
            "min": 0,              # smallest allowed color
            "max": num_colors - 1, # largest allowed color
            "col": 1,              # one number per line
            "base": 10,            # normal decimal numbers
            "format": "plain",     # plain text response
            "rnd": "new",          # always generate new numbers
        })
    else:
        # A shuffled 0..num_colors-1; the first `holes` entries are distinct
        values = _request(SEQUENCES_URL, {
            "min": 0,
            "max": num_colors - 1,
            "col": 1,
            "format": "plain",
            "rnd": "new",
        })
        if len(values) != num_colors:
            raise ValueError(
                f"random.org returned {len(values)} values, expected {num_colors}."
            )
        values = values[:holes]

    if len(values) != holes:
        raise ValueError(f"random.org returned {len(values)} values, expected {holes}.")
    for value in values:
        if value < 0 or value >= num_colors:
            raise ValueError(f"random.org number out of range 0..{num_colors - 1}.")
    if not allow_duplicates and len(set(values)) != len(values):
        raise ValueError("random.org returned repeated colors.")
    return values


def fetch_code(num_colors: int, holes: int, allow_duplicates: bool) -> Code:
    if not allow_duplicates and num_colors < holes:
        raise ValueError(
            f"Cannot pick {holes} distinct colors out of {num_colors}."
        )

    try:
        code = _fetch_remote(num_colors, holes, allow_duplicates)
    except (requests.RequestException, ValueError) as exc:
        logger.warning("random.org unavailable, using local random source: %s", exc)
        return generate_solution(num_colors, holes, allow_duplicates)

    logger.debug("Solution drawn from random.org")
    return code
