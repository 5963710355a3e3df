"""Construction of alias tables with Vose's algorithm.

See https://www.keithschwarz.com/darts-dice-coins/ for the method. The
usual formulation works with probabilities in ``[0, 1]``; here every
weight is scaled by the number of buckets instead, so that a bucket is
"full" when its scaled weight reaches the total weight and all arithmetic
stays in integers. A draw picks a bucket uniformly and then keeps it with
probability ``probabilities[i] / total_weight``, otherwise taking
``aliases[i]``.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from weighted_alias_sampler.errors import WeightOverflowError
from weighted_alias_sampler.random_source import RandomSource

logger = logging.getLogger(__name__)

# Largest value a signed 64-bit accumulator can hold.
MAX_INT64 = 2**63 - 1


@dataclass(frozen=True)
class AliasTable:
    """An immutable alias table for one weight sequence.

    When ``all_weights_equal`` is set the probabilities and aliases are
    never read and every bucket is equally likely.
    """

    probabilities: tuple[int, ...]
    aliases: tuple[int, ...]
    total_weight: int
    min_weight: int
    max_weight: int
    all_weights_equal: bool

    def __len__(self) -> int:
        return len(self.probabilities)

    def draw(self, random_source: RandomSource) -> int:
        """Draw an index with probability proportional to its weight.

        Must not be called on an empty table.
        """
        bucket = random_source.uniform_int(0, len(self.probabilities))
        if self.all_weights_equal:
            return bucket
        if random_source.uniform_int(0, self.total_weight) < self.probabilities[bucket]:
            return bucket
        return self.aliases[bucket]


EMPTY_TABLE = AliasTable(
    probabilities=(),
    aliases=(),
    total_weight=0,
    min_weight=0,
    max_weight=0,
    all_weights_equal=True,
)


def build_alias_table(weights: Sequence[int], max_value: int = MAX_INT64) -> AliasTable:
    """Build the alias table for a sequence of positive integer weights.

    Raises :class:`WeightOverflowError` if the total weight or the largest
    scaled weight would not fit below ``max_value``.
    """
    n = len(weights)
    if n == 0:
        return EMPTY_TABLE

    total = sum(weights)
    min_weight = min(weights)
    max_weight = max(weights)
    if total > max_value or max_weight * n > max_value:
        raise WeightOverflowError(
            f"Weights of {n} items (total {total}, max {max_weight}) "
            f"exceed the integer bound {max_value}"
        )

    if min_weight == max_weight:
        logger.debug("Rebuilt uniform table for %d items (total weight %d)", n, total)
        return AliasTable(
            probabilities=(total,) * n,
            aliases=tuple(range(n)),
            total_weight=total,
            min_weight=min_weight,
            max_weight=max_weight,
            all_weights_equal=True,
        )

    scaled = [w * n for w in weights]
    probabilities = [0] * n
    aliases = list(range(n))

    small: list[int] = []
    large: list[int] = []
    for i, s in enumerate(scaled):
        if s < total:
            small.append(i)
        else:
            large.append(i)

    while small and large:
        less = small.pop()
        more = large.pop()
        probabilities[less] = scaled[less]
        aliases[less] = more
        scaled[more] += scaled[less] - total
        if scaled[more] < total:
            small.append(more)
        else:
            large.append(more)

    while large:
        probabilities[large.pop()] = total

    # Exact integer arithmetic leaves every remaining bucket full, so this
    # only runs if the invariant above has been broken.
    if small:
        logger.warning(
            "Alias table construction left %d underfull buckets; filling them",
            len(small),
        )
    while small:
        probabilities[small.pop()] = total

    logger.debug("Rebuilt alias table for %d items (total weight %d)", n, total)
    return AliasTable(
        probabilities=tuple(probabilities),
        aliases=tuple(aliases),
        total_weight=total,
        min_weight=min_weight,
        max_weight=max_weight,
        all_weights_equal=False,
    )
