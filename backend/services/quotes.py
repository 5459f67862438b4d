"""Programming quotes served by /api/quotes."""

import random

QUOTES = (
    "First, solve the problem. Then, write the code.",
    "Code is like humor. When you have to explain it, it's bad.",
    "Programming isn't about what you know; it's about what you can figure out.",
    "The only way to learn a new programming language is by writing programs in it.",
    "Any fool can write code that a computer can understand. Good programmers write code that humans can understand.",
)


def pick(count: int, *, rng: random.Random | None = None) -> list[str]:
    """Return `count` distinct quotes in random order, count clamped to [1, len(QUOTES)]."""
    count = max(1, min(count, len(QUOTES)))
    shuffled = list(QUOTES)
    (rng or random).shuffle(shuffled)
    return shuffled[:count]
