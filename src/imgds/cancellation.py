from __future__ import annotations

import logging
import signal
import sys
import threading
from contextlib import contextmanager
from typing import Any, Iterator

_logger = logging.getLogger("imgds.cancel")


class CancellationToken:
    """Caller-owned stop flag polled by long-running loops."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()


def _interrupt_signals(platform: str) -> tuple[int, ...]:
    if platform.startswith("win"):
        # Console control events: CTRL_C_EVENT -> SIGINT, CTRL_BREAK_EVENT -> SIGBREAK.
        return (signal.SIGINT, getattr(signal, "SIGBREAK", signal.SIGINT))
    return (signal.SIGINT, signal.SIGTERM)


@contextmanager
def interrupt_source(
    token: CancellationToken,
    platform: str | None = None,
) -> Iterator[CancellationToken]:
    """Trip ``token`` on an interactive interrupt while the block runs.

    Handlers must be installed from the main thread; previous handlers are restored on exit.
    """
    signals = tuple(dict.fromkeys(_interrupt_signals(platform or sys.platform)))

    def _handler(signum: int, _frame: Any) -> None:
        if not token.is_cancelled():
            _logger.warning(
                "interrupt received signal=%s, finishing current image and saving",
                signal.Signals(signum).name,
            )
        token.cancel()

    previous = {sig: signal.signal(sig, _handler) for sig in signals}
    try:
        yield token
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
