"""
K-Nearest Neighbors Classifier

Predicts the species of a query specimen by majority vote among the k
closest training examples under Euclidean distance.

Ranking uses a stable sort, so training points at equal distance keep their
store order. Vote ties go to the label that reached the winning count first
while scanning the neighbors nearest-first.
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from iris_knn.store import ExampleStore, LabeledPoint, NeighborResult, QueryPoint
from iris_knn.dataset_loader import load_training_data


logger = logging.getLogger(__name__)


class NeighborCountError(ValueError):
    """
    Raised when k cannot be satisfied by the training set.

    Attributes:
        reason: One of "empty_store", "k_too_small", "k_too_large"
        k: The requested neighbor count
        available: Number of training points in the store
    """

    EMPTY_STORE = 'empty_store'
    K_TOO_SMALL = 'k_too_small'
    K_TOO_LARGE = 'k_too_large'

    def __init__(self, reason: str, k: int, available: int):
        self.reason = reason
        self.k = k
        self.available = available

        if reason == self.EMPTY_STORE:
            message = "Example store is empty; no neighbors available"
        elif reason == self.K_TOO_SMALL:
            message = f"k must be at least 1, got {k}"
        else:
            message = f"k must not exceed the number of training points ({available}), got {k}"
        super().__init__(message)


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Euclidean distance between two feature vectors.

    Values are promoted to float64 before subtraction, so integer
    measurements are never truncated.
    """
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.sqrt(np.sum(diff * diff)))


def _check_k(k: int, available: int) -> None:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise TypeError(f"k must be an integer, got {type(k).__name__}")
    if available == 0:
        raise NeighborCountError(NeighborCountError.EMPTY_STORE, k, available)
    if k <= 0:
        raise NeighborCountError(NeighborCountError.K_TOO_SMALL, k, available)
    if k > available:
        raise NeighborCountError(NeighborCountError.K_TOO_LARGE, k, available)


def nearest_neighbors(store: ExampleStore, query: QueryPoint, k: int) -> List[NeighborResult]:
    """
    Rank every training point by distance to the query and return the k nearest.

    Args:
        store: Populated example store (read only)
        query: Point to classify
        k: Number of neighbors, 1 <= k <= len(store)

    Returns:
        List of k NeighborResult objects, nearest first. Equal distances keep
        the order in which the points were added to the store.

    Raises:
        TypeError: If k is not an integer
        NeighborCountError: If the store is empty or k is out of range
    """
    points = store.all()
    _check_k(k, len(points))

    features = np.array([point.features for point in points], dtype=np.float64)
    diff = features - np.asarray(query.features, dtype=np.float64)
    distances = np.sqrt(np.sum(diff * diff, axis=1))

    order = np.argsort(distances, kind='stable')[:k]
    return [NeighborResult(points[i], float(distances[i])) for i in order]


def majority_vote(neighbors: Sequence[NeighborResult]) -> str:
    """
    Pick the most common label among the neighbors.

    A label takes the lead only by strictly exceeding the current best
    count, so on a tie the label that reached that count first wins.

    Raises:
        ValueError: If neighbors is empty
    """
    if not neighbors:
        raise ValueError("Cannot vote over an empty neighbor set")

    counts: Dict[str, int] = {}
    best_label: Optional[str] = None
    best_count = 0

    for neighbor in neighbors:
        count = counts.get(neighbor.label, 0) + 1
        counts[neighbor.label] = count
        if count > best_count:
            best_label = neighbor.label
            best_count = count

    logger.debug(f"Vote counts: {counts}")
    return best_label


def predict(store: ExampleStore, query: QueryPoint, k: int) -> str:
    """
    Predict the label of a query point by k-NN majority vote.

    Args:
        store: Populated example store
        query: Point to classify
        k: Number of neighbors, 1 <= k <= len(store)

    Returns:
        The winning label

    Raises:
        TypeError: If k is not an integer
        NeighborCountError: If the store is empty or k is out of range
    """
    neighbors = nearest_neighbors(store, query, k)
    label = majority_vote(neighbors)
    logger.debug(f"Predicted '{label}' for {query.features} with k={k}")
    return label


class IrisDetector:
    """Holds a training set and classifies Iris measurements against it."""

    def __init__(self, store: Optional[ExampleStore] = None):
        self.training_data = store if store is not None else ExampleStore()

    def load_training_data(self, csv_file_path: str) -> ExampleStore:
        load_training_data(csv_file_path, self.training_data)
        return self.training_data

    def add_example(self, point: LabeledPoint) -> None:
        self.training_data.append(point)

    def predict_species(
        self,
        sepal_length: float,
        sepal_width: float,
        petal_length: float,
        petal_width: float,
        k: int
    ) -> str:
        query = QueryPoint.from_measurements(sepal_length, sepal_width, petal_length, petal_width)
        return predict(self.training_data, query, k)
