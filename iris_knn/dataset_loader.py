"""
Iris Dataset Loader

This module reads labeled Iris measurements from a comma-separated text file
into an ExampleStore. Each line holds four numeric features followed by the
species label. Loading is best effort: malformed rows (including a header
row) are skipped with a warning and the load continues.
"""

import logging
import math
from typing import Dict, Optional

import numpy as np

from iris_knn.store import ExampleStore, LabeledPoint, FEATURE_NAMES


logger = logging.getLogger(__name__)

FIELDS_PER_ROW = len(FEATURE_NAMES) + 1


def parse_row(line: str) -> Optional[LabeledPoint]:
    """
    Parse one CSV line into a LabeledPoint.

    Args:
        line: Raw line without its trailing newline

    Returns:
        LabeledPoint, or None if the line was rejected (a warning is logged)
    """
    data = line.split(',')
    if len(data) != FIELDS_PER_ROW:
        logger.warning(f"Invalid data format in the CSV file: {line}")
        return None

    # float() also takes digit separators such as "1_0"
    if any('_' in value for value in data[:-1]):
        logger.warning(f"Invalid numeric data in the CSV file: {line}")
        return None

    try:
        features = [float(value) for value in data[:-1]]
    except ValueError:
        logger.warning(f"Invalid numeric data in the CSV file: {line}")
        return None

    if not all(math.isfinite(value) for value in features):
        logger.warning(f"Invalid numeric data in the CSV file: {line}")
        return None

    species = data[-1].strip()
    if not species:
        logger.warning(f"Invalid label in the CSV file: {line}")
        return None

    return LabeledPoint(tuple(features), species)


def load_training_data(file_path: str, store: Optional[ExampleStore] = None) -> ExampleStore:
    """
    Load labeled training points from a comma-separated file.

    Args:
        file_path: Path to the CSV file
        store: Optional store to append to; a new one is created if omitted

    Returns:
        The populated ExampleStore

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8

    The store is only extended once the whole file has been read, so a
    failed load leaves it unchanged.
    """
    if store is None:
        store = ExampleStore()

    points = []
    skipped = 0

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            for raw_line in f:
                point = parse_row(raw_line.rstrip('\r\n'))
                if point is None:
                    skipped += 1
                    continue

                points.append(point)
    except FileNotFoundError:
        raise FileNotFoundError(f"Training data file not found at {file_path}")

    store.extend(points)

    logger.info(f"Loaded {len(points)} training points from {file_path} ({skipped} rows skipped)")
    return store


def get_dataset_info(store: ExampleStore) -> Dict:
    """
    Summarize the contents of an example store.

    Args:
        store: Loaded example store

    Returns:
        Dictionary containing:
            - labels: Distinct labels in first-seen order
            - sample_count: Total number of training points
            - samples_per_label: Number of points per label
            - feature_ranges: {feature_name: (min, max)}
    """
    points = store.all()
    if not points:
        return {
            "labels": [],
            "sample_count": 0,
            "samples_per_label": {},
            "feature_ranges": {}
        }

    labels = store.labels()

    samples_per_label = {label: 0 for label in labels}
    for point in points:
        samples_per_label[point.label] += 1

    features = np.array([point.features for point in points], dtype=np.float64)
    mins = features.min(axis=0)
    maxs = features.max(axis=0)
    feature_ranges = {
        name: (float(mins[i]), float(maxs[i]))
        for i, name in enumerate(FEATURE_NAMES)
    }

    return {
        "labels": labels,
        "sample_count": len(points),
        "samples_per_label": samples_per_label,
        "feature_ranges": feature_ranges
    }
