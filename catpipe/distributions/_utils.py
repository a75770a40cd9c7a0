from __future__ import annotations

import numbers
from fractions import Fraction
from typing import Any, Sequence

import numpy as np

from ..errors import DimensionMismatch, InvalidDistributionError


def _prob_type(dtype: Any) -> type:
    """Normalizes a probability dtype to a scalar type.

    ``Fraction`` is kept as is; ``float`` maps to ``np.float64``; anything else
    must name a numpy floating type.

    Raises:
        TypeError: If ``dtype`` is not a supported probability type.
    """
    if dtype is Fraction:
        return Fraction
    if dtype is float:
        return np.float64
    try:
        scalar_type = np.dtype(dtype).type
    except TypeError as e:
        raise TypeError(f"Unsupported probability dtype {dtype!r}.") from e
    if not issubclass(scalar_type, np.floating):
        raise TypeError(f"Probability dtype must be floating or Fraction. Got {dtype!r}.")
    return scalar_type


def _infer_prob_type(values: Sequence[Any]) -> type:
    """Infers the probability type from the given values.

    All ``Fraction`` -> ``Fraction``; otherwise the promoted type of any numpy
    floating scalars, falling back to ``np.float64``.
    """
    if values and all(isinstance(v, Fraction) for v in values):
        return Fraction
    dtypes = {v.dtype for v in values if isinstance(v, np.floating)}
    if dtypes:
        return np.result_type(*dtypes).type
    return np.float64


def _cast_prob(value: Any, prob_type: type) -> Any:
    """Casts a probability to ``prob_type``.

    Raises:
        InvalidDistributionError: If ``value`` is not a real number (strings
            and booleans included).
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (numbers.Real, np.integer, np.floating)):
        raise InvalidDistributionError(f"Probabilities must be real numbers. Got {value!r}.")
    if prob_type is Fraction:
        if isinstance(value, np.generic):
            value = value.item()
        return Fraction(value)
    return prob_type(value)


def _is_prob_vec(p: Sequence[Any], prob_type: type) -> bool:
    """Checks that ``p`` is a non-empty probability vector.

    Every entry must lie in [0, 1] and the entries must sum to one: exactly
    for ``Fraction``, otherwise within a relative tolerance of
    ``sqrt(eps(prob_type))``.
    """
    if len(p) == 0:
        return False
    if not all(0 <= v <= 1 for v in p):
        return False
    total = sum(p, prob_type(0))
    if prob_type is Fraction:
        return total == 1
    rtol = float(np.sqrt(np.finfo(prob_type).eps))
    return bool(np.isclose(float(total), 1.0, rtol=rtol, atol=0.0))


def _ensure_weights(weights: Sequence[Any], n: int) -> list:
    """Validates averaging weights, returning them as a list of python scalars.

    Raises:
        DimensionMismatch: If ``len(weights) != n``.
        ValueError: If a weight is negative or the weights sum to zero.
    """
    w = [x.item() if isinstance(x, np.generic) else x for x in np.ravel(np.asarray(weights, dtype=object))]
    if len(w) != n:
        raise DimensionMismatch(f"Got {len(w)} weights for {n} distributions.")
    if any(not (x >= 0) for x in w):
        raise ValueError("weights must be nonnegative.")
    if sum(w) <= 0:
        raise ValueError("weights must sum to a positive value.")
    return w
