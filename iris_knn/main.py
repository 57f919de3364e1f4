"""
Iris Detector - Command Line Entry Point

Loads the training set, classifies one query specimen with k-NN and prints
the predicted species.

Usage:
    python -m iris_knn.main
    python -m iris_knn.main --data data/iris.csv --query 6.5 3.0 5.4 2.4 -k 3
    python -m iris_knn.main --config my_config.json --log-level DEBUG
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from iris_knn.classifier import NeighborCountError, predict
from iris_knn.dataset_loader import load_training_data
from iris_knn.state import DEFAULT_CONFIG_PATH, LOG_LEVELS, default_config, load_config
from iris_knn.store import FEATURE_NAMES, QueryPoint
from iris_knn.utils import setup_logging


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Predict the species of an Iris specimen with k-nearest-neighbors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify the default query point against data/iris.csv
  python -m iris_knn.main

  # Classify a custom specimen with 5 neighbors
  python -m iris_knn.main --query 5.1 3.5 1.4 0.2 -k 5

  # Use a different training file and configuration
  python -m iris_knn.main --data other.csv --config settings.json
        """
    )

    parser.add_argument(
        '--data',
        type=str,
        default=None,
        help='Path to the training CSV file (overrides config dataset_path)'
    )

    parser.add_argument(
        '--query',
        type=float,
        nargs=len(FEATURE_NAMES),
        metavar=('SL', 'SW', 'PL', 'PW'),
        default=None,
        help='Sepal length, sepal width, petal length and petal width of the specimen'
    )

    parser.add_argument(
        '-k', '--k',
        type=int,
        default=None,
        help='Number of neighbors to consider (overrides config k)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help=f'Path to a JSON configuration file (default: {DEFAULT_CONFIG_PATH} if present)'
    )

    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help='Logging level (overrides config log_level)'
    )

    return parser


def resolve_config(config_path: Optional[str]) -> Dict:
    """
    Load the configuration layered over the built-in defaults.

    An explicitly named config file must load. The default location is
    optional and falls back to the defaults when it does not exist.

    Raises:
        FileNotFoundError: If an explicitly named config file is missing
        json.JSONDecodeError: If the config file is not valid JSON
        ValueError: If the config file is invalid
    """
    config = default_config()

    if config_path is not None:
        config.update(load_config(config_path))
        return config

    try:
        config.update(load_config(DEFAULT_CONFIG_PATH))
    except FileNotFoundError:
        logger.info(f"No configuration at {DEFAULT_CONFIG_PATH}, using defaults")

    return config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one prediction.

    Returns:
        Process exit status: 0 on success, 1 on any failure
    """
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level or "INFO")

    try:
        config = resolve_config(args.config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError) as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    if args.log_level is None:
        setup_logging(config["log_level"])

    dataset_path = args.data if args.data is not None else config["dataset_path"]
    k = args.k if args.k is not None else config["k"]
    measurements = args.query if args.query is not None else config["query"]

    try:
        query = QueryPoint(tuple(measurements))
    except ValueError as e:
        logger.error(f"Invalid query point: {e}")
        return 1

    try:
        store = load_training_data(dataset_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to load training data: {e}")
        return 1

    try:
        species = predict(store, query, k)
    except NeighborCountError as e:
        logger.error(f"Prediction failed: {e}")
        return 1

    print(f"Predicted species: {species}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
