import unittest

from projsync.models import FlushResult, ProjectPage


class TestResults(unittest.TestCase):
    def test_flush_result_defaults(self) -> None:
        r = FlushResult(status="saved", project_id="p1", revision=3)
        self.assertTrue(r.ok)
        self.assertFalse(r.synced)
        self.assertIsNone(r.remote_version)
        self.assertIsNone(r.error_type)

    def test_failed_flush_result_is_not_ok(self) -> None:
        r = FlushResult(
            status="failed",
            project_id="p1",
            revision=1,
            error_type="NetworkError",
            error_message="down",
        )
        self.assertFalse(r.ok)
        self.assertEqual(r.error_type, "NetworkError")

    def test_project_page_defaults(self) -> None:
        page = ProjectPage()
        self.assertEqual(page.items, [])
        self.assertEqual(page.page, 1)
        self.assertEqual(page.limit, 10)
        self.assertEqual(page.total, 0)
        self.assertEqual(page.pages, 0)


if __name__ == "__main__":
    unittest.main()
