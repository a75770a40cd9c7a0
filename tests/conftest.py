import pytest
import numpy as np

from catpipe import CategoricalPool, UnivariateFinite, categorical


@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def pool():
    return CategoricalPool(["yes", "no", "maybe"])

@pytest.fixture
def levels(pool):
    return pool.values()  # [yes, no, maybe]

@pytest.fixture
def answers(levels, rng):
    return UnivariateFinite.from_levels(levels, [0.1, 0.2, 0.7], rng=rng)

@pytest.fixture
def abc():
    return categorical(["a", "b", "c"])
