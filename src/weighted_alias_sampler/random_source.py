"""Source of uniform integers used for sampling."""

import logging
import random

logger = logging.getLogger(__name__)


class RandomSource:
    """A thin wrapper around :class:`random.Random`.

    Provides the two draws the alias method needs and supports reseeding,
    which makes sampling reproducible in tests.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)
        if seed is None:
            logger.debug("Initialized RandomSource with non-deterministic seed")
        else:
            logger.debug("Initialized RandomSource with deterministic seed=%s", seed)

    @classmethod
    def wrap(cls, rng: "RandomSource | random.Random | None") -> "RandomSource":
        """Coerce ``rng`` into a RandomSource.

        A ``random.Random`` is shared rather than copied, so draws made
        through the returned source advance the caller's generator.
        """
        if rng is None:
            return cls()
        if isinstance(rng, RandomSource):
            return rng
        if isinstance(rng, random.Random):
            source = cls.__new__(cls)
            source._random = rng
            return source
        raise TypeError(
            f"Expected RandomSource, random.Random or None, got {type(rng).__name__}"
        )

    def uniform_int(self, low: int, high: int) -> int:
        """Return a uniform integer in ``[low, high)``."""
        return self._random.randrange(low, high)

    def reseed(self, seed: int | None = None) -> None:
        self._random.seed(seed)
        logger.debug("Reseeded RandomSource with seed=%s", seed)


__all__ = ["RandomSource"]
