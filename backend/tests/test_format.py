import unittest
from datetime import date, datetime, timezone

from grindlog.utils.format import MISSING, format_duration, format_number, format_weight
from grindlog.utils.time import day_bounds, get_zone, local_date, to_utc_naive


class TestFormatting(unittest.TestCase):

    def test_format_weight(self):
        self.assertEqual(format_weight(80), "80")
        self.assertEqual(format_weight(80.0), "80")
        self.assertEqual(format_weight(80.5), "80.5")
        self.assertEqual(format_weight(80.25), "80.25")
        self.assertEqual(format_weight("80.50"), "80.5")

    def test_missing_values(self):
        self.assertEqual(MISSING, "—")
        self.assertEqual(format_weight(None), MISSING)
        self.assertEqual(format_weight("heavy"), MISSING)
        self.assertEqual(format_number(float("nan")), MISSING)

    def test_format_number_decimals(self):
        self.assertEqual(format_number(2.345, decimals=1), "2.3")
        self.assertEqual(format_number(100.1), "100.1")

    def test_format_duration(self):
        self.assertEqual(format_duration(1800), "30 min")
        self.assertEqual(format_duration(90), "1:30")
        self.assertEqual(format_duration(65), "1:05")
        self.assertEqual(format_duration(0), MISSING)
        self.assertEqual(format_duration(None), MISSING)


class TestTimeHelpers(unittest.TestCase):

    def test_day_bounds_in_zone(self):
        start, end = day_bounds(date(2026, 1, 15), "America/New_York")
        self.assertEqual(start, datetime(2026, 1, 15, 5, 0))
        self.assertEqual(end, datetime(2026, 1, 16, 5, 0))

    def test_day_bounds_utc(self):
        start, end = day_bounds(date(2026, 1, 15), "UTC")
        self.assertEqual(start, datetime(2026, 1, 15))
        self.assertEqual(end, datetime(2026, 1, 16))

    def test_local_date_crosses_midnight(self):
        self.assertEqual(local_date(datetime(2026, 1, 1, 3, 0), "America/New_York"), date(2025, 12, 31))
        self.assertEqual(local_date(datetime(2026, 1, 1, 3, 0), "UTC"), date(2026, 1, 1))

    def test_unknown_zone_falls_back_to_utc(self):
        self.assertEqual(get_zone("Nowhere/Special").zone, "UTC")

    def test_to_utc_naive(self):
        aware = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.assertEqual(to_utc_naive(aware), datetime(2026, 1, 1, 12, 0))
        naive = datetime(2026, 1, 1, 12, 0)
        self.assertIs(to_utc_naive(naive), naive)


if __name__ == '__main__':
    unittest.main()
