"""Statistical conformance checks for alias tables.

Draws many indices from a table and compares the observed counts with the
counts its weights predict, using Pearson's chi-squared test.
"""

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from scipy import stats

from weighted_alias_sampler.alias_table import AliasTable
from weighted_alias_sampler.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChiSquaredResult:
    """Outcome of a chi-squared goodness-of-fit test."""

    chi_squared: float
    p_value: float
    degrees_of_freedom: int
    num_samples: int

    def passes(self, alpha: float = 0.05) -> bool:
        """True if the null hypothesis survives at significance ``alpha``."""
        return self.p_value >= alpha


def check_distribution(
    table: AliasTable,
    weights: Sequence[int],
    num_samples: int,
    random_source: RandomSource,
) -> ChiSquaredResult:
    """Draw ``num_samples`` indices from ``table`` and test them against ``weights``."""
    n = len(weights)
    if n == 0:
        raise ValueError("Cannot check the distribution of an empty sampler")
    if len(table) != n:
        raise ValueError(f"Table has {len(table)} buckets but there are {n} weights")
    if num_samples <= 0:
        raise ValueError(f"num_samples must be positive, got {num_samples}")

    if n == 1:
        return ChiSquaredResult(0.0, 1.0, 0, num_samples)

    counts: Counter[int] = Counter(
        table.draw(random_source) for _ in range(num_samples)
    )
    observed = [counts[i] for i in range(n)]
    expected = [num_samples * w / table.total_weight for w in weights]
    statistic, p_value = stats.chisquare(observed, expected)
    logger.debug(
        "Chi-squared over %d samples of %d items: chi2=%.3f p=%.5f",
        num_samples,
        n,
        statistic,
        p_value,
    )
    return ChiSquaredResult(float(statistic), float(p_value), n - 1, num_samples)
