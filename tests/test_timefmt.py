import unittest

from core.timefmt import format_time, normalize_time, time_sort_key


class TestFormatTime(unittest.TestCase):
    def test_every_clock_time(self) -> None:
        for hour in range(24):
            for minute in range(60):
                value = f"{hour:02d}:{minute:02d}"
                out = format_time(value)
                expected_hour = hour % 12 or 12
                suffix = "pm" if hour >= 12 else "am"
                self.assertEqual(out, f"{expected_hour}:{minute:02d}{suffix}", value)

    def test_am_pm_boundaries(self) -> None:
        self.assertEqual(format_time("00:00"), "12:00am")
        self.assertEqual(format_time("11:59"), "11:59am")
        self.assertEqual(format_time("12:00"), "12:00pm")
        self.assertEqual(format_time("23:59"), "11:59pm")

    def test_already_formatted_is_unchanged(self) -> None:
        for value in ("9:30am", "12:00PM", "1:05 pm", "7AM"):
            self.assertEqual(format_time(value), value)
        once = format_time("18:45")
        self.assertEqual(format_time(once), once)

    def test_empty_and_malformed(self) -> None:
        self.assertEqual(format_time(""), "")
        self.assertEqual(format_time(None), "")
        self.assertEqual(format_time("noon"), "noon")
        self.assertEqual(format_time("7:5"), "7:5am")

    def test_seconds_are_dropped(self) -> None:
        self.assertEqual(format_time("09:15:00"), "9:15am")
        self.assertEqual(format_time("00:05:59"), "12:05am")
        self.assertEqual(format_time("23:59:59"), "11:59pm")


class TestTimeSortKey(unittest.TestCase):
    def test_orders_by_hour_then_minute(self) -> None:
        values = ["13:00", "09:15", "9:05", "00:30"]
        self.assertEqual(sorted(values, key=time_sort_key), ["00:30", "9:05", "09:15", "13:00"])

    def test_unparseable_sorts_last(self) -> None:
        self.assertEqual(sorted(["x", "08:00"], key=time_sort_key), ["08:00", "x"])


class TestNormalizeTime(unittest.TestCase):
    def test_pads_and_accepts_blank(self) -> None:
        self.assertEqual(normalize_time("9:30"), "09:30")
        self.assertEqual(normalize_time(" 23:59 "), "23:59")
        self.assertIsNone(normalize_time(""))
        self.assertIsNone(normalize_time(None))

    def test_rejects_bad_input(self) -> None:
        for value in ("24:00", "12:60", "1230", "ab:cd", "9:3"):
            with self.assertRaises(ValueError):
                normalize_time(value)


if __name__ == "__main__":
    unittest.main()
