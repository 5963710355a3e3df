"""A list of items that can be sampled in proportion to integer weights.

Items and weights are stored in two index-aligned lists. Every mutation
rebuilds the alias table from scratch, which costs O(n), after which each
draw costs O(1) however skewed the weights are. Populate large samplers
with :meth:`WeightedSampler.add_batch` (or the constructor) so the rebuild
happens once rather than once per item.

Instances are not thread-safe. Callers sharing one across threads must
guard the whole instance with a lock.
"""

import operator
import random
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, ClassVar, Generic, NamedTuple, TypeVar

from weighted_alias_sampler.alias_table import (
    EMPTY_TABLE,
    MAX_INT64,
    AliasTable,
    build_alias_table,
)
from weighted_alias_sampler.diagnostics import ChiSquaredResult, check_distribution
from weighted_alias_sampler.errors import (
    IndexOutOfRangeError,
    InvalidWeightError,
    ItemNotFoundError,
)
from weighted_alias_sampler.policy import WeightErrorHandling, fix_weight
from weighted_alias_sampler.random_source import RandomSource

T = TypeVar("T")


class WeightedItem(NamedTuple):
    """An item paired with its weight, as accepted by the batch constructor."""

    item: Any
    weight: int


class WeightedSampler(Generic[T]):
    """A weighted collection supporting O(1) random draws.

    :param pairs: Optional iterable of ``(item, weight)`` pairs to load.
        The alias table is built once after all of them are added.
    :param rng: Source of randomness. A :class:`RandomSource`, a
        ``random.Random`` (shared, not copied) or ``None`` for a fresh one.
    :param bad_weight_handling: How non-positive weights are treated. The
        default silently stores them as 1.

    Every operation that takes a weight raises ``TypeError`` for
    non-integers. A failed operation leaves the sampler unchanged.
    """

    #: Bound on the total weight and on ``max_weight * len(self)``.
    #: Subclass to change the integer width.
    max_weight_value: ClassVar[int] = MAX_INT64

    def __init__(
        self,
        pairs: Iterable[tuple[T, int]] | None = None,
        *,
        rng: RandomSource | random.Random | None = None,
        bad_weight_handling: WeightErrorHandling = (
            WeightErrorHandling.SET_NON_POSITIVE_TO_ONE
        ),
    ) -> None:
        self._random = RandomSource.wrap(rng)
        self.bad_weight_handling = bad_weight_handling
        self._items: list[T] = []
        self._weights: list[int] = []
        self._table: AliasTable = EMPTY_TABLE
        if pairs is not None:
            self.add_batch(pairs)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _fix_weight(self, weight: int) -> int:
        return fix_weight(weight, self._bad_weight_handling)

    def _commit(self, items: list[T], weights: list[int]) -> None:
        """Replace the contents with ``items`` and ``weights``.

        The table is built before anything is assigned, so an overflow
        leaves the previous state in place. The lists are replaced rather
        than mutated, which keeps running iterators on their old snapshot.
        """
        table = build_alias_table(weights, self.max_weight_value)
        self._items = items
        self._weights = weights
        self._table = table

    def _check_index(self, index: int, upper: int) -> int:
        value = operator.index(index)
        if not 0 <= value < upper:
            raise IndexOutOfRangeError(
                f"Index {value} out of range for sampler of length {len(self)}"
            )
        return value

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def bad_weight_handling(self) -> WeightErrorHandling:
        """The policy applied to weights passed to later calls."""
        return self._bad_weight_handling

    @bad_weight_handling.setter
    def bad_weight_handling(self, policy: WeightErrorHandling) -> None:
        self._bad_weight_handling = WeightErrorHandling(policy)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def total_weight(self) -> int:
        return self._table.total_weight

    @property
    def min_weight(self) -> int:
        return self._table.min_weight

    @property
    def max_weight(self) -> int:
        return self._table.max_weight

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._items)

    @property
    def weights(self) -> tuple[int, ...]:
        return tuple(self._weights)

    @property
    def alias_table(self) -> AliasTable:
        """The alias table for the current weights."""
        return self._table

    def __getitem__(self, index: int) -> T:
        return self._items[self._check_index(index, len(self))]

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        """Iterate over the items in storage order.

        Changing weights inside the loop is allowed but each change
        rebuilds the table, making the loop quadratic.
        """
        return iter(self._items)

    def index_of(self, item: T) -> int:
        """Return the index of the first occurrence of ``item``."""
        try:
            return self._items.index(item)
        except ValueError:
            raise ItemNotFoundError(f"{item!r} is not in the sampler") from None

    def get_weight_at(self, index: int) -> int:
        return self._weights[self._check_index(index, len(self))]

    def get_weight_of(self, item: T) -> int:
        return self._weights[self.index_of(item)]

    def __str__(self) -> str:
        type_names = {type(item).__name__ for item in self._items}
        type_name = type_names.pop() if len(type_names) == 1 else "object"
        contents = ", ".join(
            f"{item}:{weight}" for item, weight in zip(self._items, self._weights)
        )
        return (
            f"WeightedSampler[{type_name}]: total_weight={self.total_weight}, "
            f"min_weight={self.min_weight}, max_weight={self.max_weight}, "
            f"count={len(self)}, {{{contents}}}"
        )

    def __repr__(self) -> str:
        pairs = list(zip(self._items, self._weights))
        return f"{type(self).__name__}({pairs!r})"

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add(self, item: T, weight: int) -> None:
        """Append ``item`` with ``weight``."""
        self._commit([*self._items, item], [*self._weights, self._fix_weight(weight)])

    def add_batch(self, pairs: Iterable[tuple[T, int]]) -> None:
        """Append every ``(item, weight)`` pair, rebuilding only once."""
        items = list(self._items)
        weights = list(self._weights)
        for item, weight in pairs:
            items.append(item)
            weights.append(self._fix_weight(weight))
        self._commit(items, weights)

    def insert(self, index: int, item: T, weight: int) -> None:
        """Insert ``item`` before ``index``; ``index == len(self)`` appends."""
        index = self._check_index(index, len(self) + 1)
        fixed = self._fix_weight(weight)
        items = list(self._items)
        weights = list(self._weights)
        items.insert(index, item)
        weights.insert(index, fixed)
        self._commit(items, weights)

    def remove(self, item: T) -> None:
        """Remove the first occurrence of ``item``."""
        self.remove_at(self.index_of(item))

    def remove_at(self, index: int) -> None:
        index = self._check_index(index, len(self))
        self._commit(
            self._items[:index] + self._items[index + 1 :],
            self._weights[:index] + self._weights[index + 1 :],
        )

    def set_weight_at(self, index: int, weight: int) -> None:
        index = self._check_index(index, len(self))
        weights = list(self._weights)
        weights[index] = self._fix_weight(weight)
        self._commit(self._items, weights)

    def set_weight(self, item: T, weight: int) -> None:
        """Set the weight of the first occurrence of ``item``."""
        self.set_weight_at(self.index_of(item), weight)

    def add_weight_to_all(self, delta: int) -> None:
        """Add ``delta`` to every weight.

        Under ``THROW_ON_ADD`` the call fails without changing anything if
        it would make the smallest weight non-positive. Otherwise each
        resulting weight is admitted individually, so non-positive results
        become 1.
        """
        delta = operator.index(delta)
        if (
            self._weights
            and self._bad_weight_handling is WeightErrorHandling.THROW_ON_ADD
            and self.min_weight + delta <= 0
        ):
            raise InvalidWeightError(
                f"Adding {delta} would make the minimum weight "
                f"{self.min_weight} non-positive"
            )
        self._commit(self._items, [self._fix_weight(w + delta) for w in self._weights])

    def subtract_weight_from_all(self, delta: int) -> None:
        """Subtract ``delta`` from every weight. See :meth:`add_weight_to_all`."""
        self.add_weight_to_all(-operator.index(delta))

    def set_weight_of_all(self, weight: int) -> None:
        fixed = self._fix_weight(weight)
        self._commit(self._items, [fixed] * len(self))

    def clear(self) -> None:
        self._commit([], [])

    def rebuild(self) -> None:
        """Rebuild the alias table from the current weights.

        Mutations already do this; the result is always identical.
        """
        self._commit(self._items, self._weights)

    # -------------------------------------------------------------------------
    # Sampling
    # -------------------------------------------------------------------------

    def sample(self, default: Any = None) -> Any:
        """Draw an item with probability proportional to its weight.

        Returns ``default`` if the sampler is empty.
        """
        if not self._items:
            return default
        return self._items[self._table.draw(self._random)]

    next = sample

    def sample_many(self, k: int) -> list[Any]:
        """Draw ``k`` items independently, with replacement."""
        if k < 0:
            raise ValueError(f"Sample size must be non-negative, got {k}")
        return [self.sample() for _ in range(k)]

    def check_distribution(self, num_samples: int) -> ChiSquaredResult:
        """Run a chi-squared test of ``num_samples`` draws against the weights.

        Draws consume this sampler's random source.
        """
        return check_distribution(
            self._table, self._weights, num_samples, self._random
        )


def from_weights(weights: Sequence[int], **kwargs: Any) -> "WeightedSampler[int]":
    """Build a sampler whose items are the indices ``0..len(weights)-1``."""
    return WeightedSampler(enumerate(weights), **kwargs)
