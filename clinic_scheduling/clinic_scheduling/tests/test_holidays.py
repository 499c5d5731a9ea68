"""
Tests for scheduling/holidays.py

Tests exact, range and recurring annual holiday matching.
"""

import unittest
from datetime import date

from clinic_scheduling.clinic_scheduling.scheduling.holidays import (
	DEFAULT_HOLIDAY_NOTE,
	find_holiday,
	holiday_reason,
	is_holiday,
)
from clinic_scheduling.clinic_scheduling.scheduling.models import Holiday


class TestHolidays(unittest.TestCase):
	"""Tests for holiday resolution."""

	def setUp(self):
		"""Set up test data before each test."""
		self.winter_break = Holiday(
			id="HOL-WINTER",
			type="recurring_annual",
			note="Winter break",
			recurring_start_month=12,
			recurring_start_day=20,
			recurring_end_month=1,
			recurring_end_day=5,
		)
		self.summer_break = Holiday(
			id="HOL-SUMMER",
			type="recurring_annual",
			recurring_start_month=7,
			recurring_start_day=1,
			recurring_end_month=7,
			recurring_end_day=15,
		)

	def test_recurring_range_wrapping_new_year(self):
		"""Test Dec 20 -> Jan 5 covers both sides of the year boundary."""
		holidays = [self.winter_break]

		self.assertTrue(is_holiday(date(2025, 12, 20), holidays))
		self.assertTrue(is_holiday(date(2025, 12, 25), holidays))
		self.assertTrue(is_holiday(date(2026, 1, 1), holidays))
		self.assertTrue(is_holiday(date(2026, 1, 5), holidays))
		self.assertFalse(is_holiday(date(2026, 1, 6), holidays))
		self.assertFalse(is_holiday(date(2025, 12, 19), holidays))
		self.assertFalse(is_holiday(date(2026, 6, 15), holidays))

	def test_recurring_range_is_year_independent(self):
		holidays = [self.summer_break]

		self.assertTrue(is_holiday(date(2024, 7, 10), holidays))
		self.assertTrue(is_holiday(date(2031, 7, 15), holidays))
		self.assertFalse(is_holiday(date(2026, 7, 16), holidays))
		self.assertFalse(is_holiday(date(2026, 6, 30), holidays))

	def test_recurring_without_type_is_ignored(self):
		"""Test that month/day fields only apply to recurring_annual holidays."""
		holiday = Holiday(
			id="HOL-X",
			type="holiday",
			recurring_start_month=3,
			recurring_start_day=1,
			recurring_end_month=3,
			recurring_end_day=31,
		)
		self.assertFalse(is_holiday(date(2026, 3, 10), [holiday]))

	def test_exact_date(self):
		holidays = [Holiday(id="HOL-1", date=date(2026, 5, 1), note="Labor Day")]

		self.assertTrue(is_holiday(date(2026, 5, 1), holidays))
		self.assertTrue(is_holiday("2026-05-01", holidays))
		self.assertFalse(is_holiday(date(2027, 5, 1), holidays))

	def test_explicit_range_inclusive(self):
		holidays = [Holiday(
			id="HOL-2",
			type="long_holiday",
			start_date=date(2026, 4, 1),
			end_date=date(2026, 4, 5),
		)]

		self.assertTrue(is_holiday(date(2026, 4, 1), holidays))
		self.assertTrue(is_holiday(date(2026, 4, 5), holidays))
		self.assertFalse(is_holiday(date(2026, 4, 6), holidays))
		self.assertFalse(is_holiday(date(2026, 3, 31), holidays))

	def test_range_end_defaults_to_start(self):
		holidays = [Holiday(id="HOL-3", type="closed", start_date=date(2026, 2, 10))]

		self.assertTrue(is_holiday(date(2026, 2, 10), holidays))
		self.assertFalse(is_holiday(date(2026, 2, 11), holidays))

	def test_first_match_wins(self):
		"""Test that list order decides between overlapping holidays."""
		new_year = Holiday(id="HOL-NY", date=date(2026, 1, 1), note="New Year")
		holidays = [self.winter_break, new_year]

		self.assertEqual(find_holiday(date(2026, 1, 1), holidays).id, "HOL-WINTER")
		self.assertEqual(find_holiday(date(2026, 1, 1), holidays[::-1]).id, "HOL-NY")

	def test_no_holidays(self):
		self.assertIsNone(find_holiday(date(2026, 1, 1), []))

	def test_holiday_reason(self):
		self.assertEqual(holiday_reason(self.winter_break), "Winter break")
		self.assertEqual(holiday_reason(self.summer_break), DEFAULT_HOLIDAY_NOTE)

	def test_from_dict_field_names(self):
		"""Test that stored field names map to the record."""
		holiday = Holiday.from_dict({
			"name": "HOL-0001",
			"holiday_date": "2026-12-08",
			"holiday_type": "holiday",
			"note": "Immaculate Conception",
		})

		self.assertEqual(holiday.id, "HOL-0001")
		self.assertEqual(holiday.date, date(2026, 12, 8))
		self.assertTrue(is_holiday(date(2026, 12, 8), [holiday]))


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
