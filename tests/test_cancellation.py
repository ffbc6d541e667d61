from __future__ import annotations

import os
import signal
import unittest

from imgds.cancellation import CancellationToken, _interrupt_signals, interrupt_source


class CancellationTests(unittest.TestCase):
    def test_token_starts_clear_and_latches(self) -> None:
        token = CancellationToken()
        self.assertFalse(token.is_cancelled())
        token.cancel()
        token.cancel()
        self.assertTrue(token.is_cancelled())

    def test_backend_signals_per_platform(self) -> None:
        self.assertEqual(_interrupt_signals("linux"), (signal.SIGINT, signal.SIGTERM))
        self.assertEqual(_interrupt_signals("darwin"), (signal.SIGINT, signal.SIGTERM))
        self.assertEqual(_interrupt_signals("win32")[0], signal.SIGINT)

    @unittest.skipIf(os.name == "nt", "POSIX signal delivery")
    def test_sigint_trips_token_and_restores_handler(self) -> None:
        before = signal.getsignal(signal.SIGINT)
        token = CancellationToken()

        with self.assertLogs("imgds.cancel", level="WARNING"):
            with interrupt_source(token):
                os.kill(os.getpid(), signal.SIGINT)

        self.assertTrue(token.is_cancelled())
        self.assertIs(signal.getsignal(signal.SIGINT), before)


if __name__ == "__main__":
    unittest.main()
