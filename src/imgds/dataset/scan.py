from __future__ import annotations

import logging
from pathlib import Path

from imgds.errors import ConfigurationError
from imgds.types import ImageRecord

_IMAGE_SUFFIX = ".jpg"

_logger = logging.getLogger("imgds.scan")


def extract_class_description(dir_name: str) -> str:
    """Return the description part of a ``<id>_<description>`` directory name."""
    if "_" not in dir_name:
        raise ConfigurationError(
            f"Class directory '{dir_name}' does not match <id>_<description>"
        )
    return dir_name.split("_", 1)[1]


def _is_image_file(path: Path) -> bool:
    name = path.name
    return len(name) > len(_IMAGE_SUFFIX) and name.lower().endswith(_IMAGE_SUFFIX)


def scan_image_directory(images_root: str | Path) -> list[ImageRecord]:
    root = Path(images_root)
    if not root.exists():
        raise FileNotFoundError(f"Image directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Image directory is not a directory: {root}")

    class_dirs = sorted((p for p in root.iterdir() if p.is_dir()), key=lambda p: p.name)

    records: list[ImageRecord] = []
    for numeric_label, class_dir in enumerate(class_dirs):
        label = extract_class_description(class_dir.name)
        files = sorted(
            (p for p in class_dir.iterdir() if p.is_file() and _is_image_file(p)),
            key=lambda p: p.name,
        )
        for image_path in files:
            records.append(
                ImageRecord(file_path=image_path, label=label, numeric_label=numeric_label)
            )
        _logger.debug(
            "class dir=%s label=%s numeric_label=%d images=%d",
            class_dir.name,
            label,
            numeric_label,
            len(files),
        )

    return records
