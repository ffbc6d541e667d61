from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Mapping

import cv2
import numpy as np

from imgds.types import Dataset, SplitResult

_logger = logging.getLogger("imgds.preview")


def display_available(platform: str | None = None, environ: Mapping[str, str] | None = None) -> bool:
    """Whether a GUI window can be opened.

    On X11/Wayland hosts the OpenCV Qt backend aborts the process when no display
    is reachable, so the check has to happen before any window call.
    """
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ
    if platform.startswith("win") or platform == "darwin":
        return True
    return bool(environ.get("DISPLAY") or environ.get("WAYLAND_DISPLAY"))


class PreviewWindow:
    """OpenCV window that steps through dataset samples one keypress at a time."""

    def __init__(self, window_name: str = "imgds") -> None:
        self._window_name = window_name
        self._open = False

    def open(self) -> None:
        if self._open:
            return
        cv2.namedWindow(
            self._window_name,
            cv2.WINDOW_NORMAL | cv2.WINDOW_KEEPRATIO | cv2.WINDOW_GUI_EXPANDED,
        )
        self._open = True

    def show(self, image: np.ndarray, title: str) -> bool:
        """Display an RGB image and block until a key is pressed. False on Esc/q."""
        if not self._open:
            self.open()
        cv2.setWindowTitle(self._window_name, title)
        cv2.imshow(self._window_name, cv2.cvtColor(image, cv2.COLOR_RGB2BGR))
        key = cv2.waitKey(0) & 0xFF
        return key not in {27, ord("q")}

    def close(self) -> None:
        if self._open:
            cv2.destroyWindow(self._window_name)
            self._open = False


def _describe_subset(
    name: str,
    title_prefix: str,
    subset: Dataset,
    count: int,
    show: Callable[[np.ndarray, str], bool] | None,
) -> bool:
    _logger.info("%s set images=%d", name, len(subset))
    for idx in range(min(count, len(subset))):
        _logger.info(
            "  image %d numeric_label=%d label=%s",
            idx + 1,
            subset.numeric_labels[idx],
            subset.labels[idx],
        )
        if show is not None and not show(subset.images[idx], f"{title_prefix} Image #{idx + 1}"):
            return False
    return True


def preview_split(
    split: SplitResult,
    count: int = 3,
    window: PreviewWindow | None = None,
) -> None:
    """Log the first ``count`` samples of each subset and optionally display them."""
    show = None
    if window is not None and not display_available():
        _logger.warning("no display available, preview logging only")
        window = None
    if window is not None:
        try:
            window.open()
            show = window.show
        except cv2.error as exc:
            _logger.warning("preview window unavailable, logging only: %s", exc)

    try:
        if _describe_subset("training", "Training", split.train, count, show):
            _describe_subset("testing", "Testing", split.test, count, show)
    finally:
        if window is not None:
            window.close()
