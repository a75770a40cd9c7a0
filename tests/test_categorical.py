import numpy as np
import pytest

from catpipe import CategoricalPool, CategoricalValue, categorical


# ------------------------------- Pool ---------------------------------

def test_pool_assigns_refs_in_registration_order():
    pool = CategoricalPool(["b", "a", "b", "c"])
    assert len(pool) == 3
    assert pool.levels == ["b", "a", "c"]
    assert pool.reference_of("b") == 0
    assert pool.reference_of("c") == 2
    assert pool.label_of(1) == "a"
    assert pool.add_level("a") == 1
    assert pool.add_level("d") == 3


def test_pool_unknown_label_and_ref():
    pool = CategoricalPool(["x"])
    with pytest.raises(KeyError):
        pool.reference_of("y")
    with pytest.raises(KeyError):
        pool.label_of(5)
    assert not pool.valid_reference(-1)
    assert not pool.valid_reference("0")


def test_pool_rejects_missing_and_unhashable_levels():
    pool = CategoricalPool()
    with pytest.raises(ValueError):
        pool.add_level(None)
    with pytest.raises(ValueError):
        pool.add_level(float("nan"))
    with pytest.raises(TypeError):
        pool.add_level(["a"])


def test_reorder_changes_canonical_order_not_refs():
    pool = CategoricalPool(["low", "high", "mid"])
    pool.reorder(["low", "mid", "high"])
    assert pool.labels_in_canonical_order() == ["low", "mid", "high"]
    assert pool.refs == [0, 2, 1]
    assert pool.reference_of("high") == 1
    assert [v.label for v in pool.values()] == ["low", "mid", "high"]

    with pytest.raises(ValueError):
        pool.reorder(["low", "mid"])


def test_contains():
    pool = CategoricalPool(["a"])
    other = CategoricalPool(["a"])
    assert "a" in pool
    assert "z" not in pool
    assert [1] not in pool
    assert pool.value("a") in pool
    assert other.value("a") not in pool


# ------------------------------ Values --------------------------------

def test_value_equality_and_hash():
    pool = CategoricalPool(["a", "b"])
    other = CategoricalPool(["a", "b"])
    a = pool.value("a")

    assert a == CategoricalValue(pool, 0)
    assert a == "a"
    assert a != pool.value("b")
    assert a != other.value("a")
    assert hash(a) == hash("a")
    assert {a: 1}["a"] == 1


def test_values_sort_by_canonical_order():
    pool = CategoricalPool(["c", "a", "b"])
    pool.reorder(["a", "b", "c"])
    c, a, b = (pool.value(x) for x in ["c", "a", "b"])
    assert sorted([c, b, a]) == [a, b, c]


def test_invalid_ref_rejected():
    with pytest.raises(KeyError):
        CategoricalValue(CategoricalPool(["a"]), 1)


# ---------------------------- categorical() ---------------------------

def test_categorical_shares_one_pool_and_keeps_missing():
    v = categorical(["no", None, "yes", np.nan, "no"])
    assert v[1] is None and v[3] is None
    assert v[0].pool is v[2].pool is v[4].pool
    assert v[0] == v[4]
    assert v[0].pool.levels == ["no", "yes"]


def test_categorical_with_levels_and_existing_pool():
    v = categorical(["b"], levels=["a", "b", "c"])
    assert v[0].pool.levels == ["a", "b", "c"]
    assert v[0].ref == 1

    w = categorical(["c", "d"], pool=v[0].pool)
    assert w[0].pool is v[0].pool
    assert w[1].ref == 3
