import unittest

from weekgrid.util.timefmt import format_start_end, format_time


class TestTimeFormatContract(unittest.TestCase):
    def test_twelve_hour_variants(self) -> None:
        self.assertEqual(format_time(1380, omit_minutes_for_whole_hours=True), "11 pm")
        self.assertEqual(format_time(1380), "11:00 pm")
        self.assertEqual(format_time(1380, omit_minutes_for_whole_hours=True, omit_meridian_suffix=True), "11")
        self.assertEqual(format_time(1380, omit_meridian_suffix=True), "11:00")

    def test_twenty_four_hour_variants(self) -> None:
        self.assertEqual(format_time(1380, use_24_hour_time=True), "23:00")
        self.assertEqual(format_time(1380, use_24_hour_time=True, omit_minutes_for_whole_hours=True), "23")
        self.assertEqual(format_time(545, use_24_hour_time=True, omit_minutes_for_whole_hours=True), "09:05")
        # Suffix flags never apply in 24-hour mode.
        self.assertEqual(format_time(0, use_24_hour_time=True), "00:00")

    def test_midnight_and_noon(self) -> None:
        self.assertEqual(format_time(0), "12:00 am")
        self.assertEqual(format_time(720), "12:00 pm")
        self.assertEqual(format_time(719), "11:59 am")
        self.assertEqual(format_time(1440), "12:00 am")
        self.assertEqual(format_time(1440, use_24_hour_time=True), "24:00")

    def test_start_end_uses_exclusive_end(self) -> None:
        self.assertEqual(format_start_end(540, 90, use_24_hour_time=True), ("09:00", "10:30"))
        self.assertEqual(format_start_end(690, 60, use_24_hour_time=False), ("11:30 am", "12:30 pm"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
