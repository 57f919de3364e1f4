"""
Iris species detection with k-nearest-neighbors
"""

from .store import ExampleStore, LabeledPoint, NeighborResult, QueryPoint
from .classifier import (
    IrisDetector,
    NeighborCountError,
    euclidean_distance,
    majority_vote,
    nearest_neighbors,
    predict,
)
from .dataset_loader import get_dataset_info, load_training_data

__all__ = [
    'ExampleStore', 'LabeledPoint', 'NeighborResult', 'QueryPoint',
    'IrisDetector', 'NeighborCountError', 'euclidean_distance',
    'majority_vote', 'nearest_neighbors', 'predict',
    'get_dataset_info', 'load_training_data',
]
