"""Loader converting tabular (category, feature, value) data to and from a Dataset."""

import os
from typing import Optional
import pandas as pd
import logging
from tqdm import tqdm

from System.cofilter.dataset import Dataset

logger = logging.getLogger(__name__)

CATEGORY_COLUMN = "category"
FEATURE_COLUMN = "feature"
VALUE_COLUMN = "value"

class DatasetLoader:
    """Builds Dataset instances from pandas DataFrames or CSV files and exports them back."""

    column_mapping = {
        'user': CATEGORY_COLUMN,
        'user_id': CATEGORY_COLUMN,
        'critic': CATEGORY_COLUMN,
        'person': CATEGORY_COLUMN,
        'item': FEATURE_COLUMN,
        'item_id': FEATURE_COLUMN,
        'movie': FEATURE_COLUMN,
        'song_id': FEATURE_COLUMN,
        'rating': VALUE_COLUMN,
        'score': VALUE_COLUMN,
        'play_count': VALUE_COLUMN,
    }

    def __init__(self, show_progress: bool = False):
        """Initialize the loader.

        Args:
            show_progress: Display a progress bar while reading rows
        """
        self.show_progress = show_progress

    def _standardize_columns(self, df: pd.DataFrame) -> pd.DataFrame:
        """Rename known column aliases to category/feature/value."""
        renames = {
            k: v for k, v in self.column_mapping.items()
            if k in df.columns and v not in df.columns
        }
        if renames:
            logger.info("Standardized columns: %s", renames)
        return df.rename(columns=renames)

    def from_frame(
        self,
        df: pd.DataFrame,
        category_col: str = CATEGORY_COLUMN,
        feature_col: str = FEATURE_COLUMN,
        value_col: str = VALUE_COLUMN,
        dataset: Optional[Dataset] = None
    ) -> Dataset:
        """Populate a Dataset from one row per observation.

        Rows are applied in order, so a later row for the same
        (category, feature) pair overwrites an earlier one.

        Args:
            df: Observations
            category_col: Column holding category names
            feature_col: Column holding feature names
            value_col: Column holding numeric values
            dataset: Existing dataset to add to. A new one is created if omitted.

        Returns:
            The populated Dataset

        Raises:
            ValueError: If a required column is missing or a value is not numeric
        """
        if (category_col, feature_col, value_col) == (CATEGORY_COLUMN, FEATURE_COLUMN, VALUE_COLUMN):
            df = self._standardize_columns(df)

        missing = [col for col in (category_col, feature_col, value_col) if col not in df.columns]
        if missing:
            raise ValueError(f"Observations must contain columns {missing}; found {df.columns.tolist()}")

        observations = df[[category_col, feature_col, value_col]]
        complete = observations.dropna()
        dropped = len(observations) - len(complete)
        if dropped > 0:
            logger.warning("Skipped %d rows with missing category, feature or value", dropped)

        # Rows go into a staging dataset so a bad row leaves the target untouched
        staged = Dataset()
        rows = complete.itertuples(index=False, name=None)
        for category, feature, value in tqdm(rows, total=len(complete), desc="Loading observations",
                                             leave=False, disable=not self.show_progress):
            staged.set_value(str(category), str(feature), value)

        if dataset is None:
            dataset = staged
        else:
            dataset.update(staged)

        logger.info("Loaded %d observations across %d categories", len(complete), len(dataset))
        return dataset

    def load_csv(self, path: str, **kwargs) -> Dataset:
        """Read observations from a CSV file.

        Args:
            path: CSV file with category, feature and value columns
            **kwargs: Passed to from_frame

        Raises:
            FileNotFoundError: If path does not exist
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"No observations found at {path}")

        logger.info("Loading observations from %s", path)
        df = pd.read_csv(path)
        return self.from_frame(df, **kwargs)

    @staticmethod
    def to_frame(dataset: Dataset) -> pd.DataFrame:
        """Snapshot a dataset as one row per observation, in insertion order.

        Categories without features have no rows and are not represented.
        """
        records = [
            (category, feature, value)
            for category in dataset.category_names()
            for feature, value in dataset.get_features(category).items()
        ]
        return pd.DataFrame(records, columns=[CATEGORY_COLUMN, FEATURE_COLUMN, VALUE_COLUMN])

    def save_csv(self, dataset: Dataset, path: str) -> None:
        """Write a dataset snapshot to a CSV file."""
        df = self.to_frame(dataset)
        df.to_csv(path, index=False)
        logger.info("Saved %d observations to %s", len(df), path)
