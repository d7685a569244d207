# =============================================================================
# PlantScan Backend
# services/classifier.py - Class Selection
#
# Maps a feature vector onto one label of the class table. Selection is a
# pure function of the features unless time seeding is switched on, in which
# case the wall clock is mixed into the seed and repeated scans of the same
# image may pick different labels.
# =============================================================================

import time
import logging
from typing import Callable, Optional, Sequence

import numpy as np

from plantscan.exceptions import ClassificationError

# Configure logging
logger = logging.getLogger(__name__)


def feature_seed(features: np.ndarray) -> int:
    """
    Combine the mean, variance, max and min of a feature vector into a seed.

    Args:
        features: 1-D feature array

    Returns:
        Non-negative integer seed
    """
    if features.size == 0:
        raise ClassificationError('Feature vector is empty')

    mean = float(np.mean(features))
    variance = float(np.var(features))
    highest = float(np.max(features))
    lowest = float(np.min(features))

    return (
        int(mean * 1000) * 31
        + int(variance * 10000) * 17
        + int(highest * 100) * 7
        + int(lowest * 100)
    )


class ClassSelector:
    """
    Selects a class label from a feature vector.

    Args:
        labels: Ordered class labels; position is the class index
        time_seeded: Mix the current time (milliseconds) into the seed
        clock: Callable returning seconds since the epoch
    """

    def __init__(
        self,
        labels: Sequence[str],
        time_seeded: bool = False,
        clock: Optional[Callable[[], float]] = None
    ):
        self.labels = list(labels)
        self.time_seeded = time_seeded
        self.clock = clock or time.time

    def seed(self, features: np.ndarray) -> int:
        seed = feature_seed(features)
        if self.time_seeded:
            seed += int(self.clock() * 1000)
        return seed

    def select_index(self, features: np.ndarray) -> int:
        if not self.labels:
            raise ClassificationError('No class labels configured')
        return self.seed(features) % len(self.labels)

    def select(self, features: np.ndarray) -> str:
        label = self.labels[self.select_index(features)]
        logger.debug(f"Selected class label: {label}")
        return label
