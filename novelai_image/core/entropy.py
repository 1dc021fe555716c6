"""Default entropy sources. Both are plain callables so tests can swap them."""

import random
import string
from typing import Callable

MAX_SEED = 2**32 - 1
CORRELATION_ID_LENGTH = 6
CORRELATION_ID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

SeedSource = Callable[[], int]
CorrelationIdSource = Callable[[], str]


def random_seed() -> int:
    return random.randint(0, MAX_SEED)


def generate_correlation_id() -> str:
    return "".join(random.choices(CORRELATION_ID_ALPHABET, k=CORRELATION_ID_LENGTH))
