"""Similarity-based ranking and prediction over a Dataset."""

from typing import Dict, List, Optional
import logging

from System.cofilter.dataset import Dataset
from System.cofilter.metrics import MetricLike, PearsonCorrelation, SimilarityMetric, resolve_metric
from System.cofilter.scores import CategoryScore, FeatureScore, rank_scores

logger = logging.getLogger(__name__)

class NoPredictionError(ValueError):
    """Raised when no other category with positive similarity has the feature."""

    def __init__(self, category: str, feature: str):
        self.category = category
        self.feature = feature
        super().__init__(
            f"No prediction available for feature '{feature}' in category '{category}': "
            "no similar category has a value for it"
        )


class Recommender:
    """Collaborative filtering queries over a caller-owned dataset.

    Every query recomputes from the dataset's current contents; nothing is
    cached between calls.

    Attributes:
        dataset (Dataset): The observations to query. Not copied.
        metric (SimilarityMetric): Default metric used when a call passes none.
    """

    def __init__(self, dataset: Dataset, metric: Optional[MetricLike] = None):
        """Initialize the recommender.

        Args:
            dataset: Dataset to query
            metric: Default metric instance, registry name or callable.
                Defaults to Pearson correlation.
        """
        self.dataset = dataset
        self.metric = resolve_metric(metric) if metric is not None else PearsonCorrelation()

    def _metric(self, metric: Optional[MetricLike]) -> SimilarityMetric:
        return self.metric if metric is None else resolve_metric(metric)

    def _positive_neighbours(self, category_name: str, metric: SimilarityMetric) -> Dict[str, float]:
        """Similarity of every other category to category_name, keeping only scores > 0."""
        neighbours = {}
        for other in self.dataset.category_names():
            if other == category_name:
                continue
            similarity = metric.score(self.dataset, category_name, other)
            if similarity > 0.0:
                neighbours[other] = similarity
        return neighbours

    def similarity(self, category_a: str, category_b: str, metric: Optional[MetricLike] = None) -> float:
        """Score two categories with the given or default metric."""
        return self._metric(metric).score(self.dataset, category_a, category_b)

    def top_n_similar_categories(
        self,
        category_name: str,
        n: int,
        metric: Optional[MetricLike] = None
    ) -> List[CategoryScore]:
        """Rank every other category by similarity to category_name.

        Args:
            category_name: Category to compare against
            n: Maximum number of results
            metric: Optional override of the default metric

        Returns:
            Up to n CategoryScore entries, most similar first. Ties keep
            dataset order. The query category itself is never included.
        """
        scorer = self._metric(metric)
        scores = [
            CategoryScore(other, scorer.score(self.dataset, category_name, other))
            for other in self.dataset.category_names()
            if other != category_name
        ]
        ranked = rank_scores(scores, n)
        logger.debug("Top %d %s matches for %s: %d results", n, scorer.name, category_name, len(ranked))
        return ranked

    def top_n_recommended_features(
        self,
        category_name: str,
        n: int,
        metric: Optional[MetricLike] = None
    ) -> List[FeatureScore]:
        """Recommend features category_name lacks, scored by similar categories.

        Each candidate feature's score is the similarity-weighted average of
        the values given to it by categories with positive similarity.
        Categories with zero or negative similarity do not contribute.

        Args:
            category_name: Category to recommend for
            n: Maximum number of results
            metric: Optional override of the default metric

        Returns:
            Up to n FeatureScore entries, highest first. Ties keep the order in
            which features were first encountered.
        """
        scorer = self._metric(metric)
        own_features = set(self.dataset.feature_names(category_name))
        totals: Dict[str, float] = {}
        sim_sums: Dict[str, float] = {}

        for other, similarity in self._positive_neighbours(category_name, scorer).items():
            for feature, value in self.dataset.get_features(other).items():
                if feature in own_features:
                    continue
                totals[feature] = totals.get(feature, 0.0) + value * similarity
                sim_sums[feature] = sim_sums.get(feature, 0.0) + similarity

        scores = [FeatureScore(feature, totals[feature] / sim_sums[feature]) for feature in totals]
        ranked = rank_scores(scores, n)
        logger.debug("Top %d %s feature recommendations for %s: %d of %d candidates",
                     n, scorer.name, category_name, len(ranked), len(scores))
        return ranked

    def top_n_categories_for_feature(
        self,
        feature_name: str,
        n: int,
        metric: Optional[MetricLike] = None,
        include_predictions: bool = False
    ) -> List[CategoryScore]:
        """Rank categories by their value for feature_name.

        Categories holding the feature contribute their real value. Categories
        lacking it are omitted unless include_predictions is set, in which case
        their predicted value is used; a category for which no prediction is
        possible is still omitted.

        Args:
            feature_name: Feature to rank by
            n: Maximum number of results
            metric: Optional override of the default metric, used for predictions
            include_predictions: Fill in predicted values for categories lacking the feature

        Returns:
            Up to n CategoryScore entries, highest value first. Ties keep dataset order.
        """
        scorer = self._metric(metric)
        scores = []
        for category in self.dataset.category_names():
            if self.dataset.contains_feature(category, feature_name):
                scores.append(CategoryScore(category, self.dataset.get_value(category, feature_name)))
            elif include_predictions:
                try:
                    predicted = self.predict_feature_value(category, feature_name, scorer)
                except NoPredictionError:
                    logger.debug("No prediction for %s in %s; omitting from ranking", feature_name, category)
                    continue
                scores.append(CategoryScore(category, predicted))

        ranked = rank_scores(scores, n)
        logger.debug("Top %d categories for %s (predictions=%s): %d results",
                     n, feature_name, include_predictions, len(ranked))
        return ranked

    def predict_feature_value(
        self,
        category_name: str,
        feature_name: str,
        metric: Optional[MetricLike] = None
    ) -> float:
        """Predict the value category_name would give feature_name.

        The prediction is the similarity-weighted average of the feature's
        value over every other category that has it and has positive
        similarity to category_name.

        Raises:
            NoPredictionError: If no such category exists
        """
        scorer = self._metric(metric)
        total = 0.0
        sim_sum = 0.0
        for other, similarity in self._positive_neighbours(category_name, scorer).items():
            if not self.dataset.contains_feature(other, feature_name):
                continue
            total += self.dataset.get_value(other, feature_name) * similarity
            sim_sum += similarity

        if sim_sum <= 0.0:
            raise NoPredictionError(category_name, feature_name)
        return total / sim_sum

    def predict_feature_value_or_none(
        self,
        category_name: str,
        feature_name: str,
        metric: Optional[MetricLike] = None
    ) -> Optional[float]:
        """Like predict_feature_value, but returns None when no prediction is possible."""
        try:
            return self.predict_feature_value(category_name, feature_name, metric)
        except NoPredictionError:
            return None
