"""
Example Store

This module defines the data model for the Iris detector: labeled training
points, unlabeled query points, the per-prediction neighbor pairing, and the
ordered store that holds the training set.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple


FEATURE_NAMES = ('sepal_length', 'sepal_width', 'petal_length', 'petal_width')
NUM_FEATURES = len(FEATURE_NAMES)


def _validate_features(features: Sequence[float]) -> Tuple[float, ...]:
    """
    Convert a feature sequence to a tuple of floats and check its shape.

    Args:
        features: Sequence of numeric measurements

    Returns:
        Tuple of NUM_FEATURES floats

    Raises:
        ValueError: If the count is wrong or any value is not a finite number
    """
    values = tuple(features)
    if len(values) != NUM_FEATURES:
        raise ValueError(f"Expected {NUM_FEATURES} features, got {len(values)}")

    converted = []
    for name, value in zip(FEATURE_NAMES, values):
        if isinstance(value, bool):
            raise ValueError(f"Feature '{name}' must be a real number, got {value!r}")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Feature '{name}' must be a real number, got {value!r}")
        if not math.isfinite(number):
            raise ValueError(f"Feature '{name}' must be finite, got {value!r}")
        converted.append(number)

    return tuple(converted)


@dataclass(frozen=True)
class QueryPoint:
    """An unlabeled specimen supplied for a single prediction."""
    features: Tuple[float, ...]

    def __post_init__(self):
        object.__setattr__(self, 'features', _validate_features(self.features))

    @classmethod
    def from_measurements(
        cls,
        sepal_length: float,
        sepal_width: float,
        petal_length: float,
        petal_width: float
    ) -> 'QueryPoint':
        return cls((sepal_length, sepal_width, petal_length, petal_width))


@dataclass(frozen=True)
class LabeledPoint:
    """
    One training example: four measurements plus the species label.

    Instances are immutable. Distances computed during a prediction are kept
    in NeighborResult objects and never stored here.
    """
    features: Tuple[float, ...]
    label: str

    def __post_init__(self):
        object.__setattr__(self, 'features', _validate_features(self.features))
        if not isinstance(self.label, str):
            raise ValueError(f"Label must be a string, got {type(self.label).__name__}")
        label = self.label.strip()
        if not label:
            raise ValueError("Label cannot be empty")
        object.__setattr__(self, 'label', label)

    @property
    def sepal_length(self) -> float:
        return self.features[0]

    @property
    def sepal_width(self) -> float:
        return self.features[1]

    @property
    def petal_length(self) -> float:
        return self.features[2]

    @property
    def petal_width(self) -> float:
        return self.features[3]


@dataclass(frozen=True)
class NeighborResult:
    """A training point paired with its distance to one query."""
    point: LabeledPoint
    distance: float

    @property
    def label(self) -> str:
        return self.point.label


class ExampleStore:
    """
    Ordered collection of LabeledPoint entries in insertion order.

    Duplicates are allowed. The store is filled once by the loader and then
    only read by the classifier.
    """

    def __init__(self, points: Iterable[LabeledPoint] = ()):
        self._points: List[LabeledPoint] = []
        self.extend(points)

    def append(self, point: LabeledPoint) -> None:
        """Add one training point to the end of the store."""
        self._points.append(point)

    def extend(self, points: Iterable[LabeledPoint]) -> None:
        for point in points:
            self.append(point)

    def all(self) -> Tuple[LabeledPoint, ...]:
        """Return a read-only snapshot of every stored point, in order."""
        return tuple(self._points)

    def labels(self) -> List[str]:
        """Distinct labels in the order they were first added."""
        return list(dict.fromkeys(point.label for point in self._points))

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[LabeledPoint]:
        return iter(self.all())

    def __repr__(self) -> str:
        return f"ExampleStore(size={len(self._points)})"
