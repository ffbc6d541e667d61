from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from imgds.cancellation import CancellationToken
from imgds.dataset.loader import try_load_image
from imgds.dataset.scan import scan_image_directory
from imgds.dataset.serialize import write_dataset
from imgds.errors import ConfigurationError, ValidationError
from imgds.monitoring import log_context
from imgds.types import BuildSummary, Dataset, ImageLoadResult, ImageRecord

_logger = logging.getLogger("imgds.builder")

ImageLoader = Callable[[Path, int, int], ImageLoadResult]


def collect_dataset(
    records: list[ImageRecord],
    rows: int,
    cols: int,
    cancel_token: CancellationToken | None = None,
    progress_interval: int = 1000,
    loader: ImageLoader = try_load_image,
) -> tuple[Dataset, int, bool]:
    """Load every record in order. Returns (dataset, failed_count, cancelled)."""
    if progress_interval < 1:
        raise ValidationError(f"progress_interval must be >= 1, got {progress_interval}")

    dataset = Dataset()
    failed = 0
    cancelled = False
    total = len(records)

    for idx, record in enumerate(records):
        if cancel_token is not None and cancel_token.is_cancelled():
            cancelled = True
            _logger.warning(
                "build cancelled processed=%d remaining=%d",
                idx,
                total - idx,
                extra=log_context(processed=idx, remaining=total - idx),
            )
            break

        result = loader(record.file_path, rows, cols)
        if result.ok:
            dataset.append(result.image, record.label, record.numeric_label)
        else:
            failed += 1
            _logger.warning(
                "skipping image path=%s reason=%s",
                record.file_path,
                result.error,
                extra=log_context(
                    path=str(record.file_path),
                    reason=str(result.error),
                    label=record.label,
                ),
            )

        if (idx + 1) % progress_interval == 0 or idx == total - 1:
            _logger.info(
                "progress %d/%d images processed",
                idx + 1,
                total,
                extra=log_context(processed=idx + 1, total=total, loaded=len(dataset), failed=failed),
            )

    return dataset, failed, cancelled


def build_dataset(
    images_root: str | Path,
    output_path: str | Path,
    target_size: int | tuple[int, int],
    cancel_token: CancellationToken | None = None,
    progress_interval: int = 1000,
) -> BuildSummary:
    if isinstance(target_size, int):
        rows, cols = target_size, target_size
    else:
        rows, cols = target_size
    if rows <= 0 or cols <= 0:
        raise ValidationError(f"Target size must be positive, got {rows}x{cols}")

    images_root = Path(images_root)
    output_path = Path(output_path)
    _logger.info(
        "building dataset images=%s output=%s size=%dx%d",
        images_root,
        output_path,
        rows,
        cols,
        extra=log_context(images_root=str(images_root), output_path=str(output_path), rows=rows, cols=cols),
    )

    records = scan_image_directory(images_root)
    _logger.info("scan complete images=%d", len(records), extra=log_context(scanned=len(records)))
    if not records:
        raise ConfigurationError(f"No images found in directory: {images_root}")

    dataset, failed, cancelled = collect_dataset(
        records,
        rows,
        cols,
        cancel_token=cancel_token,
        progress_interval=progress_interval,
    )

    _logger.info("saving dataset to %s", output_path)
    write_dataset(output_path, dataset)

    return BuildSummary(
        output_path=output_path,
        scanned=len(records),
        written=len(dataset),
        failed=failed,
        cancelled=cancelled,
        class_count=len({record.numeric_label for record in records}),
    )
