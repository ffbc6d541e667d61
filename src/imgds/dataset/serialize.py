from __future__ import annotations

import logging
import os
import tempfile
import zipfile
from pathlib import Path
from typing import BinaryIO

import numpy as np

from imgds.errors import DatasetFormatError, DatasetIOError
from imgds.types import Dataset

_logger = logging.getLogger("imgds.serialize")


def _images_array(dataset: Dataset) -> np.ndarray:
    if not dataset.images:
        return np.empty((0, 0, 0, 3), dtype=np.uint8)
    try:
        return np.stack([np.asarray(img, dtype=np.uint8) for img in dataset.images])
    except ValueError as exc:
        raise DatasetFormatError(f"Images must share one shape: {exc}") from exc


def _write_sections(handle: BinaryIO, dataset: Dataset) -> None:
    labels = np.array(dataset.labels, dtype=np.str_)
    numeric = np.asarray(dataset.numeric_labels, dtype=np.uint64)

    np.save(handle, _images_array(dataset), allow_pickle=False)
    np.save(handle, labels, allow_pickle=False)
    np.save(handle, numeric, allow_pickle=False)


def write_dataset(path: str | Path, dataset: Dataset) -> Path:
    """Write images, labels and numeric labels as three consecutive .npy sections."""
    if not dataset.is_consistent():
        raise DatasetFormatError(
            "Dataset sequences differ in length: "
            f"images={len(dataset.images)} labels={len(dataset.labels)} "
            f"numeric_labels={len(dataset.numeric_labels)}"
        )

    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
    except OSError as exc:
        raise DatasetIOError(f"Cannot write dataset to {target}: {exc}") from exc

    try:
        with os.fdopen(fd, "wb") as handle:
            _write_sections(handle, dataset)
        os.replace(tmp_name, target)
    except OSError as exc:
        raise DatasetIOError(f"Cannot write dataset to {target}: {exc}") from exc
    finally:
        # Gone after a successful rename; a leftover means the write failed.
        Path(tmp_name).unlink(missing_ok=True)

    _logger.info("dataset written path=%s samples=%d", target, len(dataset))
    return target


def _read_section(handle: BinaryIO, name: str) -> np.ndarray:
    try:
        section = np.load(handle, allow_pickle=False)
    except (EOFError, ValueError, zipfile.BadZipFile) as exc:
        raise DatasetFormatError(f"Truncated or malformed {name} section: {exc}") from exc
    if not isinstance(section, np.ndarray):
        # np.load hands back an NpzFile for zip input.
        close = getattr(section, "close", None)
        if close is not None:
            close()
        raise DatasetFormatError(f"{name} section is not a .npy array: {type(section).__name__}")
    return section


def read_dataset(path: str | Path) -> Dataset:
    source = Path(path)
    try:
        handle = source.open("rb")
    except OSError as exc:
        raise DatasetIOError(f"Cannot open dataset {source}: {exc}") from exc

    with handle:
        images = _read_section(handle, "images")
        labels = _read_section(handle, "labels")
        numeric = _read_section(handle, "numeric_labels")

    if images.ndim != 4 or images.shape[-1] != 3 or images.dtype != np.uint8:
        raise DatasetFormatError(
            f"Images section must be uint8[N, rows, cols, 3], got {images.dtype}{list(images.shape)}"
        )
    if labels.ndim != 1 or labels.dtype.kind != "U":
        raise DatasetFormatError(f"Labels section must be str[N], got {labels.dtype}{list(labels.shape)}")
    if numeric.ndim != 1 or numeric.dtype.kind not in {"u", "i"}:
        raise DatasetFormatError(
            f"Numeric labels section must be uint[N], got {numeric.dtype}{list(numeric.shape)}"
        )
    if not (len(images) == len(labels) == len(numeric)):
        raise DatasetFormatError(
            "Dataset section lengths differ: "
            f"images={len(images)} labels={len(labels)} numeric_labels={len(numeric)}"
        )

    return Dataset(
        images=list(images),
        labels=[str(item) for item in labels],
        numeric_labels=[int(item) for item in numeric],
    )
