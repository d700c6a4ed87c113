import unittest

from projsync.sync.dirty import DirtyTracker, FlushTicket


class TestDirtyTracker(unittest.TestCase):
    def setUp(self) -> None:
        self.tracker = DirtyTracker()
        self.tracker.reset("p1")

    def test_starts_clean(self) -> None:
        self.assertFalse(self.tracker.is_dirty)
        self.assertEqual(self.tracker.project_id, "p1")

    def test_reset_dirty(self) -> None:
        self.tracker.reset("p2", dirty=True)
        self.assertTrue(self.tracker.is_dirty)

    def test_nothing_loaded_is_never_dirty(self) -> None:
        self.tracker.reset(None)
        self.tracker.mark_dirty("p1")
        self.assertFalse(self.tracker.is_dirty)
        self.assertIsNone(self.tracker.begin_flush())

    def test_flush_cycle_cleans(self) -> None:
        self.tracker.mark_dirty("p1")
        ticket = self.tracker.begin_flush()
        self.assertEqual(ticket, FlushTicket(project_id="p1", revision=1))
        self.assertTrue(self.tracker.complete_flush(ticket))
        self.assertFalse(self.tracker.is_dirty)

    def test_mutation_during_flush_stays_dirty(self) -> None:
        self.tracker.mark_dirty("p1")
        ticket = self.tracker.begin_flush()
        self.tracker.mark_dirty("p1")

        self.assertFalse(self.tracker.complete_flush(ticket))
        self.assertTrue(self.tracker.is_dirty)

        second = self.tracker.begin_flush()
        self.assertTrue(self.tracker.complete_flush(second))
        self.assertFalse(self.tracker.is_dirty)

    def test_out_of_order_completion_never_regresses(self) -> None:
        self.tracker.mark_dirty("p1")
        old = self.tracker.begin_flush()
        self.tracker.mark_dirty("p1")
        new = self.tracker.begin_flush()

        self.assertTrue(self.tracker.complete_flush(new))
        self.assertTrue(self.tracker.complete_flush(old))
        self.assertFalse(self.tracker.is_dirty)

    def test_stale_ticket_for_other_project_is_ignored(self) -> None:
        self.tracker.mark_dirty("p1")
        ticket = self.tracker.begin_flush()
        self.tracker.reset("p2", dirty=True)

        self.assertFalse(self.tracker.complete_flush(ticket))
        self.assertTrue(self.tracker.is_dirty)

    def test_mark_dirty_for_other_project_is_ignored(self) -> None:
        self.tracker.mark_dirty("other")
        self.assertFalse(self.tracker.is_dirty)
        self.assertEqual(self.tracker.revision, 0)


if __name__ == "__main__":
    unittest.main()
