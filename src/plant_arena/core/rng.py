"""Seeded randomness for arena battles.

Every random draw in a battle (stat baselines, synthetic opponents, the
opponent's roster pick and its move choice) goes through a ``GameRNG``.
Components take their own named stream via :meth:`GameRNG.fork`, so a
battle replays exactly from one seed and adding a draw in one component
does not shift the others.
"""

from __future__ import annotations

import hashlib
import random
from typing import Sequence, TypeVar

T = TypeVar("T")

_SEED_BYTES = 8


def _derive_seed(parent_seed: int, name: str) -> int:
    digest = hashlib.blake2b(
        name.encode(), digest_size=_SEED_BYTES, key=str(parent_seed).encode()[:64]
    ).digest()
    return int.from_bytes(digest, "big")


class GameRNG:
    """A named, replayable random stream.

    Parameters
    ----------
    seed:
        Seed for the underlying ``random.Random``.  ``None`` draws one from
        the operating system, so live play is unpredictable but can still
        be replayed from :attr:`seed`.
    stream:
        Dotted path of fork names, used only for logging and ``repr``.
    """

    def __init__(self, seed: int | None = None, stream: str = "root") -> None:
        self._seed = random.SystemRandom().getrandbits(63) if seed is None else seed
        self._stream = stream
        self._rng = random.Random(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def stream(self) -> str:
        return self._stream

    def random_int(self, low: int, high: int) -> int:
        """Uniform integer in ``[low, high]``, both ends included."""
        return self._rng.randint(low, high)

    def random_float(self) -> float:
        """Uniform float in ``[0, 1)``."""
        return self._rng.random()

    def random_uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)

    def random_choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    def fork(self, name: str) -> GameRNG:
        """Return the child stream *name*.

        The child's seed depends only on this stream's seed and *name*, not
        on how many values have been drawn here, so ``fork("stats")`` is the
        same stream no matter when it is taken.
        """
        return GameRNG(_derive_seed(self._seed, name), stream=f"{self._stream}.{name}")

    def __repr__(self) -> str:
        return f"GameRNG(seed={self._seed}, stream={self._stream!r})"
