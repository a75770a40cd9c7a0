# distributions/distribution.py
from __future__ import annotations

from typing import Generic, Any, Sequence
from abc import ABC, abstractmethod

import numpy as np

from ..custom_types import Array, PRNG, T

__all__ = [
    "ValueSupport",
    "Continuous",
    "Discrete",
    "NonEuclidean",
    "Distribution",
    "is_distribution",
    "support",
    "pdf",
    "mode",
    "rand",
    "fit",
]


# --------------------------- Value supports -----------------------------


class ValueSupport:
    """Kind of values a distribution is supported on."""


class Continuous(ValueSupport):
    """Real-valued, continuous support (subset of R or R^d)."""


class Discrete(ValueSupport):
    """Real-valued, countable support (e.g. the integers)."""


class NonEuclidean(ValueSupport):
    """
    Support that is not a subset of R or R^d, such as a finite set of opaque
    labels.
    """


# -------------------------- Abstract Classes ----------------------------


class Distribution(Generic[T], ABC):
    """
    Abstract base class for probability distributions.

    This class defines the general interface shared by the distributions of
    catpipe. Subclasses that cannot support a specific operation (e.g.
    computing a mode) may leave that method unimplemented.

    Two distributions are equal when they have the same type and all stored
    attributes are equal, except those listed in ``_eq_exclude`` (the random
    number generator by default).

    Class Attributes:
        value_support: The :class:`ValueSupport` kind of the distribution.
        variate_form: ``"univariate"`` or ``"multivariate"``.
    """

    value_support: type[ValueSupport] = ValueSupport
    variate_form: str | None = None

    _eq_exclude: tuple[str, ...] = ("_rng", "__orig_class__")

    def sample(self, n_samples: int, *, rng: PRNG | None = None) -> Array:
        """
        Samples data points from the distribution.

        Args:
            n_samples: The number of samples to generate.
            rng: Optional random number generator overriding the instance's.

        Returns:
            Array: An array containing `n_samples` draws from the distribution.

        Raises:
            NotImplementedError: If the subclass does not implement this method.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def rand(self, *, rng: PRNG | None = None) -> T:
        """Draws a single value from the distribution."""
        return self.sample(1, rng=rng)[0]

    def pdf(self, x: Any) -> Any:
        """
        Probability (mass or density) of a single value `x`.

        Raises:
            NotImplementedError: If the subclass does not implement this method.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def density(self, data: Sequence[Any]) -> Array[np.floating]:
        """
        Computes p(data) under this distribution.

        The default evaluates :meth:`pdf` pointwise.

        Args:
            data: Sequence of observations.

        Returns:
            Array[np.floating]: Probability values, shape (n,).
        """
        return np.asarray([float(self.pdf(x)) for x in data], dtype=float)

    def log_density(self, data: Sequence[Any]) -> Array[np.floating]:
        """
        Computes log p(data) under this distribution.

        Zero-probability values map to ``-inf``.
        """
        with np.errstate(divide="ignore"):
            return np.log(self.density(data))

    def support(self) -> Sequence[T]:
        """Returns the values carrying explicit probability mass."""
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def mode(self) -> T:
        """Returns a most probable value."""
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    @classmethod
    def fit(cls, data: Sequence[Any], **fit_kwargs: Any) -> Distribution[T]:
        """
        Maximum-likelihood fit of `cls` to observations.

        Raises:
            NotImplementedError: If the subclass does not implement this method.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    @classmethod
    @abstractmethod
    def from_distribution(
        cls,
        convert_from: Distribution,
        **fit_kwargs: Any,
    ) -> Distribution[T]:
        """
        Constructs a new distribution by fitting or converting from another.

        This method defines how a subclass converts or fits itself from an
        existing `Distribution` instance, for example by fitting to samples
        drawn from it.

        Args:
            convert_from: The source distribution to fit or convert from.
            **fit_kwargs: Additional fitting parameters specific to the subclass.

        Returns:
            Distribution[T]: A new instance of `cls` fitted to the source distribution.
        """
        raise NotImplementedError("This method should be implemented by subclasses")

    # ------------------------------ equality ------------------------------

    def _eq_fields(self) -> dict[str, Any]:
        return {k: v for k, v in vars(self).items() if k not in self._eq_exclude}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        mine, theirs = self._eq_fields(), other._eq_fields()
        if mine.keys() != theirs.keys():
            return False
        return all(_field_equal(mine[k], theirs[k]) for k in mine)

    __hash__ = None


def _field_equal(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    return bool(a == b)


# ------------------------------- Traits ---------------------------------


def is_distribution(x: Any) -> bool:
    """Returns True if `x` (an instance or a type) is a sampleable distribution.

    Recognizes subclasses of :class:`Distribution` and anything following the
    scipy.stats convention of a callable ``rvs`` (e.g. ``scipy.stats.norm(0, 1)``).
    """
    if isinstance(x, type):
        return issubclass(x, Distribution) or callable(getattr(x, "rvs", None))
    return isinstance(x, Distribution) or callable(getattr(x, "rvs", None))


# --------------------------- Generic functions --------------------------


def support(d: Distribution) -> Sequence[Any]:
    return d.support()


def pdf(d: Distribution, x: Any) -> Any:
    return d.pdf(x)


def mode(d: Distribution) -> Any:
    return d.mode()


def rand(d: Distribution, n: int | None = None, *, rng: PRNG | None = None) -> Any:
    """Draws one value (``n=None``) or an array of ``n`` values from `d`."""
    if n is None:
        return d.rand(rng=rng)
    return d.sample(n, rng=rng)


def fit(dist_type: type[Distribution], data: Sequence[Any], **fit_kwargs: Any) -> Distribution:
    """Fits distribution family `dist_type` to `data`.

    Raises:
        TypeError: If `dist_type` is not a :class:`Distribution` subclass.
    """
    if not (isinstance(dist_type, type) and issubclass(dist_type, Distribution)):
        raise TypeError(f"fit expects a Distribution subclass. Got {dist_type!r}.")
    return dist_type.fit(data, **fit_kwargs)
