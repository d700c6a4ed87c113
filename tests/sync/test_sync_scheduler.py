import threading
import unittest

from projsync.sync.scheduler import AutosaveScheduler


class TestAutosaveScheduler(unittest.TestCase):
    def test_rejects_non_positive_period(self) -> None:
        with self.assertRaises(ValueError):
            AutosaveScheduler(lambda: None, 0)

    def test_tick_requires_running(self) -> None:
        calls = []
        scheduler = AutosaveScheduler(lambda: calls.append(1), 60)
        self.assertFalse(scheduler.tick())

        scheduler.start()
        try:
            self.assertTrue(scheduler.running)
            self.assertTrue(scheduler.tick())
        finally:
            scheduler.stop()

        self.assertFalse(scheduler.running)
        self.assertFalse(scheduler.tick())
        self.assertEqual(calls, [1])

    def test_fires_periodically(self) -> None:
        fired = threading.Event()
        count = []

        def callback() -> None:
            count.append(1)
            if len(count) >= 2:
                fired.set()

        scheduler = AutosaveScheduler(callback, 0.01)
        scheduler.start()
        try:
            self.assertTrue(fired.wait(2.0))
        finally:
            scheduler.stop()

    def test_no_tick_after_stop(self) -> None:
        count = []
        scheduler = AutosaveScheduler(lambda: count.append(1), 0.01)
        scheduler.start()
        scheduler.stop()
        seen = len(count)
        threading.Event().wait(0.05)
        self.assertEqual(len(count), seen)

    def test_restart_replaces_timer(self) -> None:
        scheduler = AutosaveScheduler(lambda: None, 60)
        scheduler.start()
        scheduler.start()
        try:
            self.assertTrue(scheduler.running)
        finally:
            scheduler.stop()
        scheduler.stop()
        self.assertFalse(scheduler.running)

    def test_failing_callback_does_not_stop_timer(self) -> None:
        fired = threading.Event()
        count = []

        def callback() -> None:
            count.append(1)
            if len(count) >= 2:
                fired.set()
            raise RuntimeError("boom")

        scheduler = AutosaveScheduler(callback, 0.01)
        with self.assertLogs("projsync.sync.scheduler", level="ERROR"):
            scheduler.start()
            try:
                self.assertTrue(fired.wait(2.0))
            finally:
                scheduler.stop()


if __name__ == "__main__":
    unittest.main()
