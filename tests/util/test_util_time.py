import unittest
from datetime import datetime, timedelta, timezone

from projsync.util.time import (
    normalize_dt,
    now_utc,
    parse_rfc3339,
    to_rfc3339,
    touch,
)


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_tz_aware(self) -> None:
        dt = now_utc()
        self.assertIsNotNone(dt.tzinfo)
        self.assertEqual(dt.tzinfo, timezone.utc)

    def test_normalize_dt_rejects_naive(self) -> None:
        naive = datetime(2025, 1, 1, 12, 0, 0)
        with self.assertRaises(ValueError):
            normalize_dt(naive)

    def test_parse_rfc3339_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56Z")
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_fractional_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56.123456Z")
        self.assertEqual(
            dt, datetime(2025, 1, 1, 12, 34, 56, 123456, tzinfo=timezone.utc)
        )

    def test_parse_rfc3339_offset_converts_to_utc(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56+09:00")
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt, datetime(2025, 1, 1, 3, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_rejects_empty(self) -> None:
        with self.assertRaises(ValueError):
            parse_rfc3339("")

    def test_to_rfc3339_round_trips(self) -> None:
        dt = datetime(2025, 1, 1, 0, 0, 0, 250000, tzinfo=timezone.utc)
        s = to_rfc3339(dt)
        self.assertTrue(s.endswith("Z"))
        self.assertEqual(parse_rfc3339(s), dt)

    def test_touch_moves_forward(self) -> None:
        prev = datetime(2025, 1, 1, tzinfo=timezone.utc)
        now = prev + timedelta(seconds=5)
        self.assertEqual(touch(prev, now), now)

    def test_touch_never_goes_backwards(self) -> None:
        prev = datetime(2030, 1, 1, tzinfo=timezone.utc)
        earlier = datetime(2025, 1, 1, tzinfo=timezone.utc)
        self.assertEqual(touch(prev, earlier), prev)

    def test_touch_without_previous(self) -> None:
        self.assertIsNotNone(touch(None).tzinfo)


if __name__ == "__main__":
    unittest.main()
