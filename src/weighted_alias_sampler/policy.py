"""Admission policy for weights entering a sampler."""

import enum
import logging
import operator

from weighted_alias_sampler.errors import InvalidWeightError

logger = logging.getLogger(__name__)


class WeightErrorHandling(enum.Enum):
    """What to do when a non-positive weight is supplied."""

    SET_NON_POSITIVE_TO_ONE = "set_non_positive_to_one"
    THROW_ON_ADD = "throw_on_add"


def fix_weight(weight: int, policy: WeightErrorHandling) -> int:
    """Return the weight that should be stored for ``weight``.

    Every weight a sampler stores passes through here. Positive integers
    are returned unchanged. Non-positive ones are clamped to 1, or rejected
    with :class:`InvalidWeightError` under ``THROW_ON_ADD``.

    Raises ``TypeError`` for anything that is not an integer.
    """
    value = operator.index(weight)
    if value > 0:
        return value
    if policy is WeightErrorHandling.THROW_ON_ADD:
        raise InvalidWeightError(f"Weight must be positive, got {value}")
    logger.debug("Clamping non-positive weight %d to 1", value)
    return 1
