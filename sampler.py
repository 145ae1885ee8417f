"""Random selection of the papers to post in one run."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

DEFAULT_SAMPLE_SIZE = 3


def sample_papers(
    papers: Sequence[T],
    k: int = DEFAULT_SAMPLE_SIZE,
    rng: random.Random | None = None,
) -> list[T]:
    """Return ``min(k, len(papers))`` distinct items chosen uniformly at random.

    The input is copied, shuffled with ``Random.shuffle`` (Fisher-Yates) and
    the prefix is returned, so each item is included with probability k/N and
    every ordering of the result is equally likely. ``papers`` is not mutated.
    """
    if k < 0:
        raise ValueError(f"k must be >= 0, got {k}")
    shuffled = list(papers)
    (rng or random).shuffle(shuffled)
    return shuffled[: min(k, len(shuffled))]
