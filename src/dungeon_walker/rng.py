from __future__ import annotations

import hashlib
import logging
import random
import re
from dataclasses import dataclass
from typing import Protocol, Sequence, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")

Seed = Union[int, str, bytes, None]

# Plain ASCII decimal strings are taken as integer seeds; anything else is hashed
_INT_SEED = re.compile(r"-?[0-9]+")


class RandomLike(Protocol):
    """The slice of :class:`random.Random` the generator depends on.

    Anything with ``random()`` and ``choice()`` works, including ``random.Random``
    itself or a scripted source in tests.
    """

    def random(self) -> float:
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...


def derive_seed(seed: Seed) -> int | None:
    """Turn an int, str or bytes seed into a 64-bit integer seed.

    Ints pass through untouched. Strings and bytes are hashed with BLAKE2b so
    that "dungeon-1" is stable across runs and Python versions.
    """
    if seed is None:
        return None
    if isinstance(seed, bool):
        raise TypeError("Unsupported seed type: %r" % (type(seed),))
    if isinstance(seed, int):
        return seed
    if isinstance(seed, str):
        s = seed.strip()
        if _INT_SEED.fullmatch(s):
            return int(s)
        raw = s.encode("utf-8")
    elif isinstance(seed, bytes):
        raw = seed
    else:
        raise TypeError("Unsupported seed type: %r" % (type(seed),))
    digest = hashlib.blake2b(raw, digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=False)


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random to:
    - centralize RNG handling
    - support optional deterministic seeding for tests and reproducible dungeons
    - satisfy :class:`RandomLike` for the walk generator
    """

    seed: Seed = None

    def __post_init__(self) -> None:
        self.effective_seed = derive_seed(self.seed)
        if self.effective_seed is not None:
            self._rng = random.Random(self.effective_seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.effective_seed)
        else:
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def random(self) -> float:
        return self._rng.random()

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("RandomSource.choice() received an empty sequence")
        return seq[self._rng.randrange(len(seq))]


__all__ = ["RandomLike", "RandomSource", "Seed", "derive_seed"]
