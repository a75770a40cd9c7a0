# custom_types.py
"""
Type definitions and aliases shared across catpipe.

We generally following the conventions:
- Annotate function input with `ArrayLike`
- Annotate function output with `Array`
"""
from __future__ import annotations
from fractions import Fraction
from typing import Hashable, TypeAlias, TypeVar, Union
from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)

from numpy import floating as NumpyFloating

Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike
Float: TypeAlias = NumpyFloating
PRNG: TypeAlias = NumpyRNG

# probabilities are floats (python or numpy) or exact fractions
Prob: TypeAlias = Union[float, NumpyFloating, Fraction]

L = TypeVar("L", bound=Hashable)
T = TypeVar("T")
