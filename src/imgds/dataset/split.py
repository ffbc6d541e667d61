from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np

from imgds.dataset.serialize import read_dataset
from imgds.errors import ValidationError
from imgds.monitoring import log_context
from imgds.types import Dataset, SplitResult

_logger = logging.getLogger("imgds.split")


def validate_test_fraction(test_fraction: float) -> float:
    value = float(test_fraction)
    if not math.isfinite(value) or not 0.0 <= value <= 1.0:
        raise ValidationError(f"test_fraction must be within [0, 1], got {test_fraction}")
    return value


def split_point(sample_count: int, test_fraction: float) -> int:
    return int(math.floor(sample_count * (1.0 - test_fraction)))


def split_dataset(
    dataset: Dataset,
    test_fraction: float = 0.05,
    rng: np.random.Generator | None = None,
) -> SplitResult:
    """Shuffle sample indices and cut them into train and test subsets.

    Without an explicit ``rng`` every call draws fresh OS entropy, so repeated
    calls yield different splits.
    """
    test_fraction = validate_test_fraction(test_fraction)
    generator = rng if rng is not None else np.random.default_rng()

    indices = generator.permutation(len(dataset))
    cut = split_point(len(dataset), test_fraction)

    result = SplitResult(
        train=dataset.subset(indices[:cut]),
        test=dataset.subset(indices[cut:]),
    )
    _logger.info(
        "split samples=%d train=%d test=%d test_fraction=%.4f",
        len(dataset),
        len(result.train),
        len(result.test),
        test_fraction,
        extra=log_context(
            samples=len(dataset),
            train=len(result.train),
            test=len(result.test),
            test_fraction=test_fraction,
        ),
    )
    return result


def load_and_split(
    dataset_path: str | Path,
    test_fraction: float = 0.05,
    rng: np.random.Generator | None = None,
) -> SplitResult:
    validate_test_fraction(test_fraction)
    dataset = read_dataset(dataset_path)
    return split_dataset(dataset, test_fraction=test_fraction, rng=rng)
