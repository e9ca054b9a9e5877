"""Initialization file for the collaborative filtering utilities package."""

from .display import scores_to_frame, print_score_table

__all__ = [
    'scores_to_frame',
    'print_score_table'
]
