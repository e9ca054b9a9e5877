"""In-memory store of category -> feature -> value observations."""

import math
from typing import Dict, Iterator, List
import logging

logger = logging.getLogger(__name__)

class Dataset:
    """Sparse mapping of categories to their weighted features.

    A category may exist with no features. Each (category, feature) pair holds
    at most one value; writing it again overwrites the old value. Lookups never
    mutate the store and unknown names read back as 0.0 / empty.

    The dataset is owned by the caller and is not thread-safe: mutations must
    not overlap with ranking queries over the same instance.
    """

    def __init__(self):
        self._data: Dict[str, Dict[str, float]] = {}

    def __contains__(self, category_name: str) -> bool:
        return category_name in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __repr__(self) -> str:
        return f"Dataset(categories={len(self._data)}, observations={self.n_observations})"

    @property
    def n_observations(self) -> int:
        """Total number of stored (category, feature) values."""
        return sum(len(features) for features in self._data.values())

    def contains_category(self, category_name: str) -> bool:
        return category_name in self._data

    def contains_feature(self, category_name: str, feature_name: str) -> bool:
        """Return True if the category exists and has a value for the feature."""
        features = self._data.get(category_name)
        return features is not None and feature_name in features

    def add_category(self, category_name: str) -> None:
        """Register a category with no features. No-op if already present.

        Raises:
            ValueError: If category_name is empty
        """
        if not category_name:
            raise ValueError("Category name must be a non-empty string")
        if category_name not in self._data:
            self._data[category_name] = {}
            logger.debug("Added category %s", category_name)

    def category_names(self) -> List[str]:
        """Return category names in insertion order."""
        return list(self._data)

    def feature_names(self, category_name: str) -> List[str]:
        """Return the category's feature names in insertion order, or [] if unknown."""
        return list(self._data.get(category_name, {}))

    def get_features(self, category_name: str) -> Dict[str, float]:
        """Return a copy of the category's feature -> value mapping."""
        return dict(self._data.get(category_name, {}))

    def set_value(self, category_name: str, feature_name: str, value: float) -> None:
        """Store a value for a feature, creating the category if needed.

        Args:
            category_name: Category to write to
            feature_name: Feature within the category
            value: Numeric value; overwrites any existing value

        Raises:
            ValueError: If a name is empty or the value is not a finite number
        """
        if not feature_name:
            raise ValueError("Feature name must be a non-empty string")
        try:
            numeric = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Value for {category_name}/{feature_name} is not numeric: {value!r}")
        if math.isnan(numeric) or math.isinf(numeric):
            raise ValueError(f"Value for {category_name}/{feature_name} must be finite, got {value!r}")

        self.add_category(category_name)
        self._data[category_name][feature_name] = numeric

    def update(self, other: "Dataset") -> None:
        """Copy every category and value of other into this dataset, overwriting on conflict."""
        for category_name in other.category_names():
            self.add_category(category_name)
            self._data[category_name].update(other.get_features(category_name))

    def get_value(self, category_name: str, feature_name: str) -> float:
        """Return the stored value, or 0.0 when the category or feature is absent."""
        return self._data.get(category_name, {}).get(feature_name, 0.0)

    def mutual_features(self, category_a: str, category_b: str) -> List[str]:
        """Return features present in both categories, in category_a's order."""
        features_a = self._data.get(category_a)
        features_b = self._data.get(category_b)
        if not features_a or not features_b:
            return []
        return [feature for feature in features_a if feature in features_b]
