from .distribution import (
    ValueSupport,
    Continuous,
    Discrete,
    NonEuclidean,
    Distribution,
    is_distribution,
    support,
    pdf,
    mode,
    rand,
    fit,
)
from .finite import UnivariateFinite, classes, average
