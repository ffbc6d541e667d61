from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np


def write_image(path: Path, height: int, width: int, seed: int = 0) -> np.ndarray:
    """Write a random BGR image with OpenCV and return the written pixels."""
    path.parent.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(seed)
    image = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    ext = path.suffix if path.suffix.lower() in {".png", ".jpg", ".jpeg"} else ".png"
    ok, encoded = cv2.imencode(ext, image)
    if not ok:
        raise RuntimeError(f"failed to encode {path}")
    path.write_bytes(encoded.tobytes())
    return image


def write_corrupt(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"this file is not an image")
