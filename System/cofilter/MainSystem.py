#!/usr/bin/env python3
"""
Command-line runner for the collaborative filtering engine.

Loads a ratings CSV named by a run config, then prints similar categories,
recommended features and per-feature rankings for the configured queries.

    python System/cofilter/MainSystem.py --config System/cofilter/configs/base_local.yml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add the project root to sys.path to allow package imports
PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(PROJECT_ROOT))

from System.cofilter.config_loader import load_run_config
from System.cofilter.dataloading import DatasetLoader
from System.cofilter.metrics import available_metrics, get_metric
from System.cofilter.recommendations import NoPredictionError, Recommender
from System.cofilter.utils.display import print_score_table


logger = logging.getLogger("CoFilterRunner")


def cli(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Similarity rankings and predictions over a ratings dataset",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument(
        "--config",
        required=True,
        help="YAML/JSON/TOML file containing the run configuration",
    )
    p.add_argument(
        "--metric",
        choices=available_metrics(),
        help="Similarity metric; overrides the config",
    )
    p.add_argument(
        "--n",
        type=int,
        help="Number of results per ranking; overrides top_n in the config",
    )
    p.add_argument(
        "--category",
        action="append",
        default=[],
        help="Category to report similar categories and feature recommendations for (repeatable)",
    )
    p.add_argument(
        "--feature",
        action="append",
        default=[],
        help="Feature to rank categories by (repeatable)",
    )
    p.add_argument(
        "--predict",
        nargs=2,
        metavar=("CATEGORY", "FEATURE"),
        help="Predict a single category's value for a feature",
    )
    return p.parse_args(argv)


def enrich_config(base_conf: dict, args: argparse.Namespace) -> dict:
    base_conf = base_conf.copy()

    # Honor CLI switches
    if args.metric:
        base_conf["metric"] = args.metric
    if args.n is not None:
        if args.n < 0:
            raise ValueError(f"--n must be non-negative, got {args.n}")
        base_conf["top_n"] = args.n
    cli_queries = [{"category": c} for c in args.category] + [{"feature": f} for f in args.feature]
    if cli_queries:
        base_conf["queries"] = cli_queries

    return base_conf


def report_category(recommender: Recommender, category: str, n: int) -> None:
    metric_name = recommender.metric.name
    if not recommender.dataset.contains_category(category):
        logger.warning("Category %s is not in the dataset", category)
    print_score_table(
        recommender.top_n_similar_categories(category, n),
        header=f"Top {n} {metric_name} category matches for {category}",
    )
    print_score_table(
        recommender.top_n_recommended_features(category, n),
        header=f"Top {n} {metric_name} feature recommendations for {category}",
    )


def report_feature(recommender: Recommender, feature: str, n: int, include_predictions: bool) -> None:
    print_score_table(
        recommender.top_n_categories_for_feature(feature, n, include_predictions=include_predictions),
        header=f"Top {n} {recommender.metric.name} categories for {feature}",
    )


def report_prediction(recommender: Recommender, category: str, feature: str) -> None:
    try:
        predicted = recommender.predict_feature_value(category, feature)
    except NoPredictionError as e:
        logger.info("%s", e)
        print(f"\nPredicted {feature} for {category}: no prediction available")
        return
    print(f"\nPredicted {feature} for {category}: {predicted:.4f}")


def main(argv=None):
    args = cli(argv)
    cfg = enrich_config(load_run_config(args.config), args)

    logging.basicConfig(
        level=getattr(logging, str(cfg["log_level"]).upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(message)s",
    )
    logger.info("Metric: %s", cfg["metric"])
    logger.info("top_n: %d", cfg["top_n"])

    dataset = DatasetLoader().load_csv(
        cfg["data_path"],
        category_col=cfg["category_column"],
        feature_col=cfg["feature_column"],
        value_col=cfg["value_column"],
    )
    recommender = Recommender(dataset, get_metric(cfg["metric"]))
    n = cfg["top_n"]

    for query in cfg["queries"]:
        if "category" in query:
            report_category(recommender, str(query["category"]), n)
        elif "feature" in query:
            report_feature(recommender, str(query["feature"]), n, bool(cfg["include_predictions"]))
        else:
            logger.warning("Skipping query without category or feature: %s", query)

    if args.predict:
        report_prediction(recommender, *args.predict)


if __name__ == "__main__":
    main()
