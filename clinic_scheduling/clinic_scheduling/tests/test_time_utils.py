"""
Tests for scheduling/time_utils.py

Tests time conversions, interval overlap and display formatting.
"""

import unittest
from datetime import date, datetime, time, timedelta

from clinic_scheduling.clinic_scheduling.scheduling.models import WorkingPeriod
from clinic_scheduling.clinic_scheduling.scheduling.time_utils import (
	calculate_end_time,
	day_of_week,
	format_period_display,
	format_time_display,
	get_now,
	intervals_overlap,
	is_time_within_period,
	minutes_to_time,
	normalize_time,
	time_to_minutes,
	to_date,
)


class TestTimeConversions(unittest.TestCase):
	"""Tests for HH:MM <-> minutes conversions."""

	def test_time_to_minutes_formats(self):
		"""Test that strings, time and timedelta values are accepted."""
		self.assertEqual(time_to_minutes("09:30"), 570)
		self.assertEqual(time_to_minutes("09:30:00"), 570)
		self.assertEqual(time_to_minutes(time(9, 30)), 570)
		self.assertEqual(time_to_minutes(timedelta(hours=9, minutes=30)), 570)
		self.assertEqual(time_to_minutes("00:00"), 0)

	def test_unparseable_time_degrades_to_zero(self):
		"""Test that empty or garbage input does not raise."""
		self.assertEqual(time_to_minutes(""), 0)
		self.assertEqual(time_to_minutes(None), 0)
		self.assertEqual(time_to_minutes("xx:15"), 15)
		self.assertEqual(time_to_minutes("10:yy"), 600)

	def test_minutes_to_time_is_zero_padded(self):
		"""Test zero padding and the absence of day wraparound."""
		self.assertEqual(minutes_to_time(570), "09:30")
		self.assertEqual(minutes_to_time(5), "00:05")
		self.assertEqual(minutes_to_time(1500), "25:00")

	def test_normalize_time(self):
		"""Test that seconds are dropped."""
		self.assertEqual(normalize_time("14:45:00"), "14:45")
		self.assertEqual(normalize_time(timedelta(hours=8)), "08:00")
		self.assertEqual(normalize_time(None), "")

	def test_calculate_end_time(self):
		self.assertEqual(calculate_end_time("11:30", 45), "12:15")


class TestIntervals(unittest.TestCase):
	"""Tests for half-open interval logic."""

	def test_overlap_is_symmetric(self):
		"""Test that swapping intervals gives the same answer."""
		pairs = [
			("09:00", "10:00", "09:30", "10:30"),
			("09:00", "10:00", "10:00", "11:00"),
			("09:00", "12:00", "10:00", "10:30"),
			("13:00", "14:00", "09:00", "10:00"),
		]
		for start_a, end_a, start_b, end_b in pairs:
			self.assertEqual(
				intervals_overlap(start_a, end_a, start_b, end_b),
				intervals_overlap(start_b, end_b, start_a, end_a)
			)

	def test_touching_intervals_do_not_overlap(self):
		self.assertFalse(intervals_overlap("09:00", "10:00", "10:00", "11:00"))
		self.assertFalse(intervals_overlap("10:00", "11:00", "09:00", "10:00"))

	def test_partial_and_contained_overlap(self):
		self.assertTrue(intervals_overlap("09:00", "10:00", "09:59", "10:30"))
		self.assertTrue(intervals_overlap("09:00", "12:00", "10:00", "10:15"))

	def test_time_within_period_bounds(self):
		"""Test inclusive start and exclusive end."""
		period = WorkingPeriod("p1", "Morning", "09:00", "12:00", 1)

		self.assertTrue(is_time_within_period("09:00", period))
		self.assertTrue(is_time_within_period("11:59", period))
		self.assertFalse(is_time_within_period("12:00", period))
		self.assertFalse(is_time_within_period("08:45", period))


class TestDisplay(unittest.TestCase):
	"""Tests for presentation helpers."""

	def test_format_time_display(self):
		self.assertEqual(format_time_display("09:05"), "9:05 AM")
		self.assertEqual(format_time_display("12:00"), "12:00 PM")
		self.assertEqual(format_time_display("00:30"), "12:30 AM")
		self.assertEqual(format_time_display("17:45"), "5:45 PM")

	def test_format_period_display(self):
		period = WorkingPeriod("p1", "Morning", "09:00", "12:00", 1)
		self.assertEqual(format_period_display(period), "Morning (09:00 – 12:00)")


class TestDates(unittest.TestCase):
	"""Tests for date helpers."""

	def test_day_of_week_starts_on_sunday(self):
		self.assertEqual(day_of_week(date(2026, 1, 4)), 0)  # Sunday
		self.assertEqual(day_of_week(date(2026, 1, 5)), 1)  # Monday
		self.assertEqual(day_of_week("2026-01-10"), 6)  # Saturday

	def test_to_date(self):
		self.assertEqual(to_date("2026-01-05"), date(2026, 1, 5))
		self.assertEqual(to_date(datetime(2026, 1, 5, 10, 0)), date(2026, 1, 5))
		with self.assertRaises(ValueError):
			to_date("05/01/2026")

	def test_get_now_with_invalid_timezone(self):
		"""Test that an unknown timezone falls back to UTC instead of failing."""
		with self.assertLogs(
			"clinic_scheduling.clinic_scheduling.scheduling.time_utils", level="WARNING"
		):
			result = get_now("Mars/Olympus_Mons")

		self.assertIsInstance(result, datetime)
		self.assertIsNone(result.tzinfo)


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
