"""Tests for the RandomSource collaborator."""

import random

import pytest

from weighted_alias_sampler import RandomSource


def test_uniform_int_in_range() -> None:
    """Draws lie in [low, high)."""
    source = RandomSource(1)
    draws = {source.uniform_int(0, 5) for _ in range(500)}
    assert draws == {0, 1, 2, 3, 4}


def test_uniform_int_empty_range() -> None:
    """An empty range is an error."""
    with pytest.raises(ValueError):
        RandomSource(0).uniform_int(0, 0)


def test_reseed_repeats_sequence() -> None:
    """Reseeding with the same seed replays the draws."""
    source = RandomSource(3)
    first = [source.uniform_int(0, 1000) for _ in range(20)]
    source.reseed(3)
    assert [source.uniform_int(0, 1000) for _ in range(20)] == first


def test_wrap_none_creates_source() -> None:
    """wrap(None) returns a fresh source."""
    assert isinstance(RandomSource.wrap(None), RandomSource)


def test_wrap_returns_same_source() -> None:
    """wrap passes existing sources through."""
    source = RandomSource(0)
    assert RandomSource.wrap(source) is source


def test_wrap_shares_random() -> None:
    """A wrapped random.Random draws the same sequence as the original."""
    rnd = random.Random(11)
    expected = random.Random(11)
    source = RandomSource.wrap(rnd)
    assert source.uniform_int(0, 100) == expected.randrange(0, 100)


def test_wrap_rejects_other_types() -> None:
    """Anything else is a TypeError."""
    with pytest.raises(TypeError):
        RandomSource.wrap("seed")  # type: ignore[arg-type]
