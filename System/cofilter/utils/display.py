"""Utilities for displaying ranked scores."""

from typing import Sequence, Union
import pandas as pd
import logging

from System.cofilter.scores import CategoryScore, FeatureScore

logger = logging.getLogger(__name__)

def scores_to_frame(scores: Sequence[Union[CategoryScore, FeatureScore]]) -> pd.DataFrame:
    """Convert ranked scores to a DataFrame with columns name and score, keeping rank order."""
    return pd.DataFrame(
        [(score.name, score.value) for score in scores],
        columns=['name', 'score']
    )

def print_score_table(
    scores: Sequence[Union[CategoryScore, FeatureScore]],
    header: str = "SCORES",
    max_items: int = 20,
    name_width: int = 36
) -> None:
    """Print ranked scores in a table format.

    Args:
        scores: Ranked CategoryScore or FeatureScore entries
        header: Custom header for the table
        max_items: Maximum number of rows to print
        name_width: Width of the name column
    """
    if not scores:
        logger.warning("No results to display for %s", header)
        print(f"\n=== {header} ===\nNo results to display.")
        return

    frame = scores_to_frame(scores)

    print("\n" + "=" * 60)
    print(f"{header}")
    print("=" * 60)

    table_header = f"{'Rank':<6} | {'Name':<{name_width}} | {'Score':>10}"
    print(table_header)
    print("-" * len(table_header))

    for i, row in enumerate(frame.itertuples(index=False), start=1):
        if i > max_items:
            break
        name = str(row.name)[:name_width - 2]
        print(f"{i:<6} | {name:<{name_width}} | {row.score:>10.4f}")

    print("=" * 60)
