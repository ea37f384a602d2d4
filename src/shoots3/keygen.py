import random
import time
from typing import Optional

from . import config as cfg


def generate_key(length: int = cfg.DEFAULT_KEY_LENGTH, rng: Optional[random.Random] = None) -> str:
    """Return `length` characters sampled uniformly from the key alphabet.

    A fresh `random.Random` seeded from the clock is used unless `rng` is
    given.
    """
    if length < 0:
        raise ValueError(f"key length must be non-negative, got {length}")
    rng = rng or random.Random(time.time_ns())
    return "".join(rng.choice(cfg.KEY_ALPHABET) for _ in range(length))
