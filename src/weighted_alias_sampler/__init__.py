"""Weighted random sampling with Vose's alias method.

A list-like collection of items with integer weights supporting O(1)
weighted draws, rebuilt in O(n) after every mutation.
"""

from weighted_alias_sampler.alias_table import AliasTable, build_alias_table
from weighted_alias_sampler.diagnostics import ChiSquaredResult
from weighted_alias_sampler.errors import (
    IndexOutOfRangeError,
    InvalidWeightError,
    ItemNotFoundError,
    WeightedSamplerError,
    WeightOverflowError,
)
from weighted_alias_sampler.policy import WeightErrorHandling, fix_weight
from weighted_alias_sampler.random_source import RandomSource
from weighted_alias_sampler.sampler import WeightedItem, WeightedSampler, from_weights

__version__ = "0.1.0"
__all__ = [
    "AliasTable",
    "ChiSquaredResult",
    "IndexOutOfRangeError",
    "InvalidWeightError",
    "ItemNotFoundError",
    "RandomSource",
    "WeightErrorHandling",
    "WeightOverflowError",
    "WeightedItem",
    "WeightedSampler",
    "WeightedSamplerError",
    "build_alias_table",
    "fix_weight",
    "from_weights",
]
