from catpipe.categorical import CategoricalPool, CategoricalValue, categorical
from catpipe.errors import (
    ArgumentError,
    DimensionMismatch,
    EmptyDataError,
    IncompatiblePoolError,
    InvalidDistributionError,
    InvalidLabelTypeError,
)
from catpipe.distributions import (
    Distribution,
    NonEuclidean,
    UnivariateFinite,
    average,
    classes,
    fit,
    is_distribution,
    mode,
    pdf,
    rand,
    support,
)
