"""Similarity metrics comparing two categories over their mutual features.

Choosing a metric:
    euclidean - groups categories by the magnitude of their values.
    pearson   - compares the shape of two rating profiles, correcting for
                one category consistently scoring higher than another.
    tanimoto  - compares which features occur, ignoring their values; suited
                to binary or presence-only data.

For example, if A bought 1 egg, 1 flour and 1 sugar, B bought 100 of each and
C bought 1 egg, 1 vodka and 1 energy drink, euclidean finds C closer to A,
while pearson and tanimoto find B closer.
"""

from abc import ABC, abstractmethod
import math
from typing import Callable, Dict, List, Optional, Tuple, Type, Union
import logging
import numpy as np

from System.cofilter.dataset import Dataset

logger = logging.getLogger(__name__)

_RELATIVE_VARIANCE_TOL = 1e-12

class SimilarityMetric(ABC):
    """Pluggable scoring strategy comparing two categories of a dataset.

    Subclasses implement ``compute``, returning None when the score is
    undefined for the pair. ``score`` maps undefined to 0.0 so sparse data
    never breaks a ranking.
    """

    name: str = "metric"

    @abstractmethod
    def compute(self, dataset: Dataset, category_a: str, category_b: str) -> Optional[float]:
        """Return the similarity of two categories, or None if undefined."""

    def score_or_none(self, dataset: Dataset, category_a: str, category_b: str) -> Optional[float]:
        """Return the similarity, or None when there is no data to compare."""
        result = self.compute(dataset, category_a, category_b)
        if result is None:
            return None
        result = float(result)
        if not math.isfinite(result):
            logger.warning("%s returned non-finite score for (%s, %s); treating as undefined",
                           self.name, category_a, category_b)
            return None
        return result

    def score(self, dataset: Dataset, category_a: str, category_b: str) -> float:
        """Return the similarity, with undefined results reported as 0.0."""
        result = self.score_or_none(dataset, category_a, category_b)
        return 0.0 if result is None else result

    def __call__(self, dataset: Dataset, category_a: str, category_b: str) -> float:
        return self.score(dataset, category_a, category_b)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def _mutual_values(dataset: Dataset, category_a: str, category_b: str) -> Tuple[np.ndarray, np.ndarray]:
    features_a = dataset.get_features(category_a)
    features_b = dataset.get_features(category_b)
    mutual = dataset.mutual_features(category_a, category_b)
    values_a = np.array([features_a[f] for f in mutual], dtype=float)
    values_b = np.array([features_b[f] for f in mutual], dtype=float)
    return values_a, values_b


def _is_zero_variance(variance: float, sum_of_squares: float) -> bool:
    return variance <= 0.0 or math.isclose(variance, 0.0, abs_tol=_RELATIVE_VARIANCE_TOL * sum_of_squares)


class EuclideanDistance(SimilarityMetric):
    """Inverse of one plus the sum of squared differences, in (0, 1].

    A sum of exactly zero (identical values on every mutual feature) yields
    0.0, the same as having no mutual features at all.
    """

    name = "euclidean"

    def compute(self, dataset: Dataset, category_a: str, category_b: str) -> Optional[float]:
        if not dataset.contains_category(category_a) or not dataset.contains_category(category_b):
            return None
        values_a, values_b = _mutual_values(dataset, category_a, category_b)
        if values_a.size == 0:
            return None

        sum_of_squares = float(np.sum((values_a - values_b) ** 2))
        if sum_of_squares == 0.0:
            return 0.0
        return 1.0 / (1.0 + sum_of_squares)


class PearsonCorrelation(SimilarityMetric):
    """Pearson correlation of mutual feature values, in [-1, 1]."""

    name = "pearson"

    def compute(self, dataset: Dataset, category_a: str, category_b: str) -> Optional[float]:
        if not dataset.contains_category(category_a) or not dataset.contains_category(category_b):
            return None
        values_a, values_b = _mutual_values(dataset, category_a, category_b)
        n = values_a.size
        if n == 0:
            return None

        # Products and squares share one summation path so a profile compared
        # with itself yields identical covariance and variance terms
        sum_a = float(np.sum(values_a))
        sum_b = float(np.sum(values_b))
        sum_sq_a = float(np.sum(values_a * values_a))
        sum_sq_b = float(np.sum(values_b * values_b))
        sum_products = float(np.sum(values_a * values_b))

        numerator = sum_products - (sum_a * sum_b / n)
        variance_a = sum_sq_a - (sum_a * sum_a / n)
        variance_b = sum_sq_b - (sum_b * sum_b / n)
        # A constant profile leaves only rounding residue in its variance
        if _is_zero_variance(variance_a, sum_sq_a) or _is_zero_variance(variance_b, sum_sq_b):
            return None

        correlation = numerator / math.sqrt(variance_a * variance_b)
        return max(-1.0, min(1.0, correlation))


class TanimotoCoefficient(SimilarityMetric):
    """Shared feature count over the size of the combined feature set, in [0, 1]."""

    name = "tanimoto"

    def compute(self, dataset: Dataset, category_a: str, category_b: str) -> Optional[float]:
        if not dataset.contains_category(category_a) or not dataset.contains_category(category_b):
            return None
        count_a = len(dataset.feature_names(category_a))
        count_b = len(dataset.feature_names(category_b))
        shared = len(dataset.mutual_features(category_a, category_b))

        denominator = count_a + count_b - shared
        if denominator == 0:
            return None
        return shared / denominator


class FunctionMetric(SimilarityMetric):
    """Adapts a plain ``(dataset, category_a, category_b)`` callable into a metric.

    The engine does not assume the function is symmetric.
    """

    def __init__(self, func: Callable[[Dataset, str, str], Optional[float]], name: Optional[str] = None):
        if not callable(func):
            raise TypeError(f"Expected a callable, got {type(func).__name__}")
        self.func = func
        self.name = name or getattr(func, "__name__", "custom")

    def compute(self, dataset: Dataset, category_a: str, category_b: str) -> Optional[float]:
        return self.func(dataset, category_a, category_b)


_METRICS: Dict[str, Type[SimilarityMetric]] = {
    "euclidean": EuclideanDistance,
    "pearson": PearsonCorrelation,
    "tanimoto": TanimotoCoefficient,
}

_ALIASES = {
    "distance": "euclidean",
    "correlation": "pearson",
    "overlap": "tanimoto",
    "jaccard": "tanimoto",
}

MetricLike = Union[SimilarityMetric, str, Callable[[Dataset, str, str], Optional[float]]]

def available_metrics() -> List[str]:
    """Names accepted by get_metric, excluding aliases."""
    return list(_METRICS)


def get_metric(name: str) -> SimilarityMetric:
    """Return a new instance of the built-in metric registered under name.

    Raises:
        ValueError: If the name is not a known metric or alias
    """
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    if key not in _METRICS:
        raise ValueError(f"Unsupported metric: {name}. Choose from {available_metrics()}")
    return _METRICS[key]()


def resolve_metric(metric: MetricLike) -> SimilarityMetric:
    """Coerce a metric instance, registry name or plain callable into a metric.

    Raises:
        ValueError: If a string does not name a known metric
        TypeError: If metric is none of the accepted kinds
    """
    if isinstance(metric, SimilarityMetric):
        return metric
    if isinstance(metric, str):
        return get_metric(metric)
    if callable(metric):
        return FunctionMetric(metric)
    raise TypeError(f"Cannot use {type(metric).__name__} as a similarity metric")


def euclidean_distance_score(dataset: Dataset, category_a: str, category_b: str) -> float:
    return EuclideanDistance().score(dataset, category_a, category_b)


def pearson_correlation_score(dataset: Dataset, category_a: str, category_b: str) -> float:
    return PearsonCorrelation().score(dataset, category_a, category_b)


def tanimoto_similarity_score(dataset: Dataset, category_a: str, category_b: str) -> float:
    return TanimotoCoefficient().score(dataset, category_a, category_b)
