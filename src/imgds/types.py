from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from imgds.errors import DecodeError


@dataclass(frozen=True)
class ImageRecord:
    """One image discovered by the directory scan."""

    file_path: Path
    label: str
    numeric_label: int


@dataclass
class ImageLoadResult:
    """Outcome of loading a single image: pixels on success, the error otherwise."""

    path: Path
    image: np.ndarray | None = None
    error: DecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.image is not None


@dataclass
class Dataset:
    """Parallel sequences of images, textual labels and numeric labels."""

    images: list[np.ndarray] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    numeric_labels: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.images)

    def append(self, image: np.ndarray, label: str, numeric_label: int) -> None:
        self.images.append(image)
        self.labels.append(label)
        self.numeric_labels.append(int(numeric_label))

    def is_consistent(self) -> bool:
        return len(self.images) == len(self.labels) == len(self.numeric_labels)

    def subset(self, indices: Any) -> Dataset:
        return Dataset(
            images=[self.images[int(i)] for i in indices],
            labels=[self.labels[int(i)] for i in indices],
            numeric_labels=[self.numeric_labels[int(i)] for i in indices],
        )


@dataclass
class SplitResult:
    train: Dataset
    test: Dataset

    def as_tuple(self) -> tuple[list[np.ndarray], list[int], list[np.ndarray], list[int]]:
        return (
            self.train.images,
            self.train.numeric_labels,
            self.test.images,
            self.test.numeric_labels,
        )


@dataclass
class BuildSummary:
    output_path: Path
    scanned: int
    written: int
    failed: int
    cancelled: bool
    class_count: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "output_path": str(self.output_path),
            "scanned": self.scanned,
            "written": self.written,
            "failed": self.failed,
            "cancelled": self.cancelled,
            "class_count": self.class_count,
        }
