# categorical.py
"""
Pooled categorical labels.

A :class:`CategoricalPool` is an ordered, deduplicated registry of labels. It
gives every label a stable integer reference (assigned in registration order,
starting at 0) and keeps a separate canonical ordering of the labels, which
may be permuted without touching the references.

A :class:`CategoricalValue` is a label bound to its pool. Distributions over
categorical labels are keyed by pool reference, so values drawn from the same
pool can always be compared and combined cheaply.

Example::

    yes, no, maybe = categorical(["yes", "no", "maybe"])
    yes.pool is no.pool          # True
    yes.ref, maybe.label         # (0, 'maybe')
"""
from __future__ import annotations

from typing import Generic, Hashable, Iterable, Iterator, Sequence

import numpy as np

from .custom_types import L

__all__ = [
    "CategoricalPool",
    "CategoricalValue",
    "categorical",
]


def _is_missing(x) -> bool:
    """Return True for entries treated as missing (``None`` or float NaN)."""
    if x is None:
        return True
    if isinstance(x, (float, np.floating)):
        return bool(np.isnan(x))
    return False


class CategoricalPool(Generic[L]):
    """
    Ordered registry of labels shared by many categorical values.

    Pools are compared by identity: two pools holding the same labels are
    still different pools.

    Args:
        levels: Initial labels. Duplicates are ignored; missing entries are
            rejected.
    """

    def __init__(self, levels: Iterable[L] = ()):
        self._labels: list[L] = []           # indexed by reference
        self._index: dict[L, int] = {}       # label -> reference
        self._order: list[int] = []          # references in canonical order
        for level in levels:
            self.add_level(level)

    # ------------------------------ registry ------------------------------

    def add_level(self, label: L) -> int:
        """Registers ``label`` (if new) and returns its reference."""
        if _is_missing(label):
            raise ValueError("Missing values cannot be registered as levels.")
        if isinstance(label, CategoricalValue):
            label = label.label
        if not isinstance(label, Hashable):
            raise TypeError(f"Levels must be hashable. Got {type(label).__name__}.")
        ref = self._index.get(label)
        if ref is None:
            ref = len(self._labels)
            self._labels.append(label)
            self._index[label] = ref
            self._order.append(ref)
        return ref

    def reorder(self, levels: Sequence[L]) -> None:
        """Sets a new canonical order. References are left unchanged.

        Raises:
            ValueError: If ``levels`` is not a permutation of the pool's labels.
        """
        levels = list(levels)
        if len(levels) != len(self._labels) or set(levels) != set(self._labels):
            raise ValueError(
                f"reorder requires a permutation of the pool levels {self.levels!r}. "
                f"Got {levels!r}."
            )
        self._order = [self._index[label] for label in levels]

    # ------------------------------- lookup -------------------------------

    @property
    def levels(self) -> list[L]:
        """list: Labels in canonical order."""
        return [self._labels[ref] for ref in self._order]

    def labels_in_canonical_order(self) -> list[L]:
        """Labels in canonical order (same as ``levels``)."""
        return self.levels

    @property
    def refs(self) -> list[int]:
        """list: References in canonical order."""
        return list(self._order)

    def reference_of(self, label: L) -> int:
        """Reference of ``label``; raises ``KeyError`` if it is not a level."""
        try:
            return self._index[label]
        except KeyError:
            raise KeyError(f"Label {label!r} is not a level of this pool.") from None

    def label_of(self, ref: int) -> L:
        """Label stored under reference ``ref``; raises ``KeyError`` if invalid."""
        if not self.valid_reference(ref):
            raise KeyError(f"Reference {ref!r} is not valid for this pool.")
        return self._labels[ref]

    def valid_reference(self, ref) -> bool:
        """True if ``ref`` is an integer reference issued by this pool."""
        return isinstance(ref, (int, np.integer)) and 0 <= ref < len(self._labels)

    def position(self, ref: int) -> int:
        """Position of reference ``ref`` in the canonical order."""
        return self._order.index(ref)

    def value(self, label: L) -> CategoricalValue[L]:
        """Returns the pooled element for ``label``."""
        return CategoricalValue(self, self.reference_of(label))

    def values(self) -> list[CategoricalValue[L]]:
        """Returns all pooled elements in canonical order."""
        return [CategoricalValue(self, ref) for ref in self._order]

    def __contains__(self, label) -> bool:
        if isinstance(label, CategoricalValue):
            return label.pool is self
        try:
            return label in self._index
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[L]:
        return iter(self.levels)

    def __repr__(self) -> str:
        return f"CategoricalPool({self.levels!r})"


class CategoricalValue(Generic[L]):
    """
    A label bound to a :class:`CategoricalPool`.

    Attributes:
        pool (CategoricalPool): The pool the label belongs to.
        ref (int): The label's reference in ``pool``.
    """

    __slots__ = ("_pool", "_ref")

    def __init__(self, pool: CategoricalPool[L], ref: int):
        if not pool.valid_reference(ref):
            raise KeyError(f"Reference {ref!r} is not valid for this pool.")
        self._pool = pool
        self._ref = int(ref)

    @property
    def pool(self) -> CategoricalPool[L]:
        return self._pool

    @property
    def ref(self) -> int:
        return self._ref

    @property
    def label(self) -> L:
        return self._pool.label_of(self._ref)

    def __eq__(self, other) -> bool:
        if isinstance(other, CategoricalValue):
            return self._pool is other._pool and self._ref == other._ref
        return self.label == other

    def __hash__(self) -> int:
        return hash(self.label)

    def __lt__(self, other) -> bool:
        if not isinstance(other, CategoricalValue) or other._pool is not self._pool:
            return NotImplemented
        return self._pool.position(self._ref) < self._pool.position(other._ref)

    def __repr__(self) -> str:
        return f"CategoricalValue({self.label!r})"

    def __str__(self) -> str:
        return str(self.label)


def categorical(
    values: Iterable,
    levels: Sequence | None = None,
    *,
    pool: CategoricalPool | None = None,
) -> list[CategoricalValue | None]:
    """Binds raw labels to a pool.

    Args:
        values: Raw labels. ``None`` and NaN entries are kept as ``None``.
        levels: Optional levels registered (in this order) before ``values``;
            lets the pool hold levels that never occur in ``values``.
        pool: Existing pool to register into. A new pool is created if omitted.

    Returns:
        list: One :class:`CategoricalValue` (or ``None``) per input value.
    """
    pool = CategoricalPool() if pool is None else pool
    for level in levels or ():
        pool.add_level(level)
    out: list[CategoricalValue | None] = []
    for x in values:
        if _is_missing(x):
            out.append(None)
        elif isinstance(x, CategoricalValue) and x.pool is pool:
            out.append(x)
        else:
            out.append(CategoricalValue(pool, pool.add_level(x)))
    return out
