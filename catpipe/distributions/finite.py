# distributions/finite.py
from __future__ import annotations

from collections import Counter
from fractions import Fraction
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

import numpy as np
from scipy.stats import entropy as _entropy

from ..custom_types import Array, ArrayLike, Float, PRNG, Prob
from ..categorical import CategoricalPool, CategoricalValue, _is_missing
from ..errors import (
    ArgumentError,
    DimensionMismatch,
    EmptyDataError,
    IncompatiblePoolError,
    InvalidDistributionError,
    InvalidLabelTypeError,
)
from ._utils import _cast_prob, _ensure_weights, _infer_prob_type, _is_prob_vec, _prob_type
from .distribution import Distribution, NonEuclidean

__all__ = [
    "UnivariateFinite",
    "classes",
    "average",
]


class UnivariateFinite(Distribution[CategoricalValue]):
    """
    Univariate distribution with finite support over pooled categorical labels.

    Probabilities are stored by pool reference in ``prob_given_level``. Levels
    of the pool with no entry have probability zero; only explicit entries
    take part in :meth:`mode` and sampling, in the mapping's iteration order.

    The direct constructor keeps the order of ``prob_given_level`` as given;
    :meth:`from_dict`, :meth:`from_levels` and :meth:`fit` store entries in
    the pool's canonical order.

    Instances are immutable.

    Example::

        yes, no, maybe = categorical(["yes", "no", "maybe"])
        d = UnivariateFinite.from_levels([yes, no, maybe], [0.1, 0.2, 0.7])
        d.pdf("no")        # 0.2
        d.mode()           # CategoricalValue('maybe')
        d.sample(5)        # array of 5 CategoricalValue draws

    Attributes:
        pool (CategoricalPool): Shared pool of levels.
        prob_given_level (Mapping[int, Prob]): Read-only map reference -> probability.
        dtype (type): Scalar type of the probabilities.
    """

    value_support = NonEuclidean
    variate_form = "univariate"

    def __init__(
        self,
        pool: CategoricalPool,
        prob_given_level: Mapping[int, Prob],
        *,
        dtype: Any = None,
        rng: PRNG | None = None,
    ):
        """Initializes a distribution from pool references.

        Args:
            pool: The pool whose references key ``prob_given_level``.
            prob_given_level: Map from pool reference to probability.
            dtype: Probability type (numpy floating type or ``Fraction``).
                Inferred from the values if ``None``.
            rng: Random number generator used for sampling.
                Defaults to ``np.random.default_rng()``.

        Raises:
            TypeError: If ``pool`` is not a :class:`CategoricalPool`.
            InvalidDistributionError: If a key is not a reference of ``pool``
                or the values do not form a probability vector.
        """
        if not isinstance(pool, CategoricalPool):
            raise TypeError(f"pool must be a CategoricalPool. Got {type(pool).__name__}.")

        refs = list(prob_given_level.keys())
        bad = [r for r in refs if not pool.valid_reference(r)]
        if bad:
            raise InvalidDistributionError(f"References {bad!r} are not valid for the pool.")

        values = list(prob_given_level.values())
        prob_type = _prob_type(dtype) if dtype is not None else _infer_prob_type(values)
        probs = [_cast_prob(v, prob_type) for v in values]
        if not _is_prob_vec(probs, prob_type):
            raise InvalidDistributionError(
                f"Probabilities must lie in [0, 1] and sum to one. Got {values!r}."
            )

        self._pool = pool
        self._prob_given_level = {int(r): p for r, p in zip(refs, probs)}
        self._dtype = prob_type
        self._rng = rng or np.random.default_rng()

    # --------------------------- constructors ---------------------------

    @classmethod
    def from_dict(
        cls,
        prob_given_level: Mapping[CategoricalValue, Prob],
        *,
        dtype: Any = None,
        rng: PRNG | None = None,
    ) -> UnivariateFinite:
        """Builds a distribution from a map of pooled labels to probabilities.

        Entries are stored in the pool's canonical order, whatever the order
        of ``prob_given_level``.

        Raises:
            InvalidLabelTypeError: If a key is not a :class:`CategoricalValue`.
            InvalidDistributionError: If the values are not a probability vector.
            IncompatiblePoolError: If the keys come from different pools.
        """
        if len(prob_given_level) == 0:
            raise InvalidDistributionError("A UnivariateFinite needs at least one level.")

        keys = list(prob_given_level.keys())
        for key in keys:
            if not isinstance(key, CategoricalValue):
                raise InvalidLabelTypeError(
                    "The support of a UnivariateFinite can consist only of "
                    f"CategoricalValue elements. Got {type(key).__name__}."
                )

        values = list(prob_given_level.values())
        prob_type = _prob_type(dtype) if dtype is not None else _infer_prob_type(values)
        if not _is_prob_vec([_cast_prob(v, prob_type) for v in values], prob_type):
            raise InvalidDistributionError(
                f"Probabilities must lie in [0, 1] and sum to one. Got {values!r}."
            )

        pool = keys[0].pool
        if any(key.pool is not pool for key in keys):
            raise IncompatiblePoolError("All levels of a UnivariateFinite must share one pool.")

        prob_given_ref = {key.ref: p for key, p in prob_given_level.items()}
        ordered = {ref: prob_given_ref[ref] for ref in pool.refs if ref in prob_given_ref}
        return cls(pool, ordered, dtype=prob_type, rng=rng)

    @classmethod
    def from_levels(
        cls,
        levels: Sequence[CategoricalValue],
        probabilities: Sequence[Prob] | ArrayLike,
        *,
        dtype: Any = None,
        rng: PRNG | None = None,
    ) -> UnivariateFinite:
        """Builds a distribution from parallel sequences of levels and probabilities.

        Raises:
            DimensionMismatch: If ``levels`` and ``probabilities`` differ in length.
            InvalidLabelTypeError: If a level is not a :class:`CategoricalValue`.
            InvalidDistributionError: If a level is repeated.
        """
        levels = list(levels)
        p = list(np.ravel(probabilities)) if isinstance(probabilities, np.ndarray) else list(probabilities)
        if len(levels) != len(p):
            raise DimensionMismatch(
                f"Got {len(levels)} levels but {len(p)} probabilities."
            )
        for x in levels:
            if not isinstance(x, CategoricalValue):
                raise InvalidLabelTypeError(
                    f"levels must have CategoricalValue type. Got {type(x).__name__}."
                )
        prob_given_level = dict(zip(levels, p))
        if len(prob_given_level) != len(levels):
            raise InvalidDistributionError("levels must not contain duplicates.")
        return cls.from_dict(prob_given_level, dtype=dtype, rng=rng)

    # ----------------------------- attributes ----------------------------

    @property
    def pool(self) -> CategoricalPool:
        return self._pool

    @property
    def prob_given_level(self) -> Mapping[int, Prob]:
        return MappingProxyType(self._prob_given_level)

    @property
    def dtype(self) -> type:
        return self._dtype

    # ------------------------------ queries ------------------------------

    def classes(self) -> list[CategoricalValue]:
        """All levels of the pool in canonical order, including zero-mass ones."""
        return self._pool.values()

    def support(self) -> list[CategoricalValue]:
        """Levels with an explicit entry, sorted by pool reference."""
        return [CategoricalValue(self._pool, ref) for ref in sorted(self._prob_given_level)]

    def items(self) -> list[tuple[CategoricalValue, Prob]]:
        """(level, probability) pairs in iteration order."""
        return [(CategoricalValue(self._pool, ref), p) for ref, p in self._prob_given_level.items()]

    def _pdf(self, ref: int) -> Prob:
        return self._prob_given_level.get(ref, self._dtype(0))

    def pdf(self, x: Any) -> Prob:
        """Probability of level ``x``.

        Args:
            x: A :class:`CategoricalValue` or a raw label.

        Returns:
            The stored probability, or zero if ``x`` is a level of the pool
            without an entry.

        Raises:
            ArgumentError: If ``x`` is not a level of the pool.
        """
        if isinstance(x, CategoricalValue) and x.pool is self._pool:
            return self._pdf(x.ref)
        label = x.label if isinstance(x, CategoricalValue) else x
        if label not in self._pool:
            raise ArgumentError(f"{label!r} is not a level of this distribution's pool.")
        return self._pdf(self._pool.reference_of(label))

    def mode(self) -> CategoricalValue:
        """Most probable level; ties go to the first entry in iteration order."""
        max_prob = max(self._prob_given_level.values())
        for ref, p in self._prob_given_level.items():
            if p == max_prob:
                return CategoricalValue(self._pool, ref)

    def entropy(self) -> float:
        """Shannon entropy (nats)."""
        p = np.asarray([float(v) for v in self._prob_given_level.values()], dtype=float)
        return float(_entropy(p))

    # ------------------------------ sampling ------------------------------

    def _cumulative(self) -> Array[Float]:
        """
        Cumulative probability vector ``[0, ..., 1]`` of length K + 1, in the
        iteration order of ``prob_given_level``. The last entry is set to
        exactly one.
        """
        p = list(self._prob_given_level.values())
        K = len(p)
        ctype = float if self._dtype is Fraction else self._dtype
        c = np.empty(K + 1, dtype=ctype)
        c[0] = 0
        c[1:K] = np.cumsum(np.asarray([float(v) for v in p[:-1]], dtype=ctype))
        c[K] = 1
        return c

    def sample(self, n_samples: int, *, rng: PRNG | None = None) -> Array:
        """Draws ``n_samples`` i.i.d. levels by inverting the cumulative vector.

        Each uniform draw ``u`` selects the first level ``i`` (in iteration
        order) with ``u < C[i + 1]``.

        Args:
            n_samples: Number of draws.
            rng: Generator overriding the instance's generator.

        Returns:
            Array: Object array of shape (n_samples,) holding CategoricalValues.

        Raises:
            ValueError: If ``n_samples`` is not a nonnegative integer.
        """
        if isinstance(n_samples, bool) or not isinstance(n_samples, (int, np.integer)) or n_samples < 0:
            raise ValueError(f"n_samples must be a nonnegative integer. Got {n_samples!r}.")
        rng = rng or self._rng
        c = self._cumulative()
        u = rng.random(int(n_samples))
        idx = np.searchsorted(c, u, side="right") - 1

        levels = np.empty(len(self._prob_given_level), dtype=object)
        for i, ref in enumerate(self._prob_given_level):
            levels[i] = CategoricalValue(self._pool, ref)
        return levels[idx]

    # ------------------------------- fitting -------------------------------

    @classmethod
    def fit(
        cls,
        observations: Iterable[CategoricalValue | None],
        *,
        dtype: Any = None,
        rng: PRNG | None = None,
    ) -> UnivariateFinite:
        """Maximum-likelihood fit to observed levels.

        Missing entries (``None``, NaN) are skipped. Each level's probability
        is its relative frequency among the remaining observations.

        Raises:
            EmptyDataError: If there are no non-missing observations.
            InvalidLabelTypeError: If an observation is not a CategoricalValue.
            IncompatiblePoolError: If the observations come from different pools.
        """
        vpure = [x for x in observations if not _is_missing(x)]
        if not vpure:
            raise EmptyDataError("No non-missing data to fit.")
        for x in vpure:
            if not isinstance(x, CategoricalValue):
                raise InvalidLabelTypeError(
                    "Can only fit a UnivariateFinite distribution to samples of "
                    f"CategoricalValue type. Got {type(x).__name__}."
                )

        N = len(vpure)
        prob_type = _prob_type(dtype) if dtype is not None else np.float64
        count_given_level = Counter(vpure)
        if prob_type is Fraction:
            prob_given_level = {x: Fraction(c, N) for x, c in count_given_level.items()}
        else:
            prob_given_level = {x: prob_type(c) / N for x, c in count_given_level.items()}
        return cls.from_dict(prob_given_level, dtype=prob_type, rng=rng)

    @classmethod
    def from_distribution(
        cls,
        convert_from: Distribution,
        num_samples: int = 1024,
        **fit_kwargs: Any,
    ) -> UnivariateFinite:
        """Fits a UnivariateFinite to ``num_samples`` draws from ``convert_from``.

        Args:
            convert_from: Source distribution; must sample CategoricalValues.
            num_samples: Number of draws. Defaults to 1024.
            **fit_kwargs: Passed to :meth:`fit` (``dtype``, ``rng``). ``rng``
                is also used to draw from the source.
        """
        samples = convert_from.sample(num_samples, rng=fit_kwargs.get("rng"))
        return cls.fit(list(samples), **fit_kwargs)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{x.label}=>{self._pdf(x.ref)}" for x in self.support())
        return f"UnivariateFinite({pairs})"


def classes(d: UnivariateFinite) -> list[CategoricalValue]:
    return d.classes()


def average(
    distributions: Sequence[UnivariateFinite],
    weights: ArrayLike | None = None,
) -> UnivariateFinite:
    """Weighted mixture of distributions over a common pool.

    Distributions are averaged over the union of their supports; a level
    missing from one distribution counts as zero there. The result has the
    probability type and generator of the first distribution.

    Args:
        distributions: Non-empty sequence of distributions sharing one pool.
        weights: Optional nonnegative weights, one per distribution. Uniform
            if ``None``.

    Returns:
        UnivariateFinite: Distribution with probability
        ``sum_k w_k p_k(x) / sum_k w_k`` for every level in the union.

    Raises:
        ValueError: If ``distributions`` is empty or the weights are invalid.
        DimensionMismatch: If ``len(weights) != len(distributions)``.
        IncompatiblePoolError: If the distributions do not share one pool.
    """
    dvec = list(distributions)
    n = len(dvec)
    if n == 0:
        raise ValueError("average requires at least one distribution.")
    for d in dvec:
        if not isinstance(d, UnivariateFinite):
            raise TypeError(f"average expects UnivariateFinite distributions. Got {type(d).__name__}.")

    w = None if weights is None else _ensure_weights(weights, n)

    # check all distributions have consistent pool:
    pool = dvec[0].pool
    if any(d.pool is not pool for d in dvec):
        raise IncompatiblePoolError("Averaging UnivariateFinite distributions with incompatible pools.")

    # union of refs, in order of first appearance:
    refs = list(dict.fromkeys(ref for d in dvec for ref in d.prob_given_level))

    prob_type = dvec[0].dtype
    zero = prob_type(0)
    if w is None:
        prob_given_level = {
            ref: sum((d._pdf(ref) for d in dvec), zero) / n for ref in refs
        }
    else:
        w = [_cast_prob(wk, prob_type) for wk in w]
        total = sum(w, zero)
        prob_given_level = {
            ref: sum((wk * d._pdf(ref) for wk, d in zip(w, dvec)), zero) / total for ref in refs
        }

    return UnivariateFinite(pool, prob_given_level, dtype=prob_type, rng=dvec[0]._rng)
