from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np

from imgds.errors import DecodeError, ValidationError
from imgds.types import ImageLoadResult

_logger = logging.getLogger("imgds.loader")


def _decode_rgb(path: Path) -> np.ndarray:
    try:
        raw = np.fromfile(str(path), dtype=np.uint8)
    except OSError as exc:
        raise DecodeError(f"cannot read {path}: {exc}") from exc
    if raw.size == 0:
        raise DecodeError(f"empty image file: {path}")

    # IMREAD_COLOR folds greyscale, palette and alpha sources into 3 channels.
    image = cv2.imdecode(raw, cv2.IMREAD_COLOR)
    if image is None:
        raise DecodeError(f"unsupported or corrupt image data: {path}")
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def load_and_resize_image(path: str | Path, rows: int, cols: int) -> np.ndarray:
    """Decode ``path`` as RGB and bilinearly resize it to ``rows`` x ``cols``.

    Images already at the target resolution are returned as decoded.
    """
    if rows <= 0 or cols <= 0:
        raise ValidationError(f"Target size must be positive, got {rows}x{cols}")

    image = _decode_rgb(Path(path))
    height, width = image.shape[:2]
    if height != rows or width != cols:
        _logger.debug("resizing path=%s from=%dx%d to=%dx%d", path, height, width, rows, cols)
        image = cv2.resize(image, (cols, rows), interpolation=cv2.INTER_LINEAR)
    return image


def try_load_image(path: str | Path, rows: int, cols: int) -> ImageLoadResult:
    image_path = Path(path)
    try:
        image = load_and_resize_image(image_path, rows, cols)
    except DecodeError as exc:
        return ImageLoadResult(path=image_path, error=exc)
    except cv2.error as exc:
        return ImageLoadResult(path=image_path, error=DecodeError(f"{image_path}: {exc}"))
    return ImageLoadResult(path=image_path, image=image)
