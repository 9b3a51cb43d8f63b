import unittest
from weekend.logic.timing.clock import InvalidTimeFormat, calculate_end_time, minutes_to_time, time_to_minutes


class TestClock(unittest.TestCase):

    def test_time_to_minutes(self):
        self.assertEqual(time_to_minutes("00:00"), 0)
        self.assertEqual(time_to_minutes("09:30"), 570)
        self.assertEqual(time_to_minutes("9:05"), 545)
        self.assertEqual(time_to_minutes("23:59"), 1439)

    def test_invalid_times_raise(self):
        for bad in ("24:00", "12:60", "9:5", "0930", "abc", "", "12:345", None):
            with self.assertRaises(InvalidTimeFormat, msg=repr(bad)):
                time_to_minutes(bad)
        # callers may catch it as a plain ValueError
        self.assertTrue(issubclass(InvalidTimeFormat, ValueError))

    def test_minutes_to_time_pads_and_wraps(self):
        self.assertEqual(minutes_to_time(0), "00:00")
        self.assertEqual(minutes_to_time(65), "01:05")
        self.assertEqual(minutes_to_time(1440), "00:00")
        self.assertEqual(minutes_to_time(1500), "01:00")
        self.assertEqual(minutes_to_time(-60), "23:00")

    def test_end_time_wraps_past_midnight(self):
        self.assertEqual(calculate_end_time("09:00", 120), "11:00")
        self.assertEqual(calculate_end_time("23:00", 120), "01:00")
        self.assertEqual(calculate_end_time("22:00", 0), "22:00")

    def test_end_time_property(self):
        durations = [0, 1, 45, 60, 119, 1439, 1440, 3000]
        for start in range(0, 1440, 7):
            t = minutes_to_time(start)
            for d in durations:
                self.assertEqual(time_to_minutes(calculate_end_time(t, d)), (start + d) % 1440)


if __name__ == '__main__':
    unittest.main()
