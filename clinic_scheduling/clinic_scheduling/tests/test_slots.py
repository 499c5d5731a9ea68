"""
Tests for scheduling/slots.py

Tests fixed-increment slot generation inside a working period.
"""

import unittest
from datetime import date, datetime

from clinic_scheduling.clinic_scheduling.scheduling.models import (
	Appointment,
	Service,
	WorkingPeriod,
)
from clinic_scheduling.clinic_scheduling.scheduling.settings import SchedulingSettings
from clinic_scheduling.clinic_scheduling.scheduling.slots import (
	BOOKED_REASON,
	calculate_next_available_time,
	generate_time_slots,
	get_available_time_slots,
)


MONDAY = date(2026, 1, 5)
TUESDAY = date(2026, 1, 6)


class TestSlots(unittest.TestCase):
	"""Tests for slot generation functions."""

	def setUp(self):
		"""Set up test data before each test."""
		self.morning = WorkingPeriod("PER-MON-AM", "Morning", "09:00", "12:00", 1)
		self.services = [
			Service("SRV-CHECKUP", "Checkup", 30),
			Service("SRV-THERAPY", "Therapy", 60),
		]
		self.booked_nine = Appointment(
			id="APT-1",
			appointment_date=MONDAY,
			start_time="09:00",
			end_time="09:30",
			service_id="SRV-CHECKUP",
		)
		self.now = datetime(2026, 1, 4, 18, 0)

	def test_slots_around_existing_appointment(self):
		"""Test the 09:00 booking blocks 09:00 and 09:15 for a 30 minute service."""
		slots = generate_time_slots(
			self.morning, [self.booked_nine], self.services, 30,
			target_date=MONDAY, now=self.now
		)
		by_time = {slot.time: slot for slot in slots}

		self.assertFalse(by_time["09:00"].available)
		self.assertFalse(by_time["09:15"].available)
		self.assertEqual(by_time["09:00"].reason, BOOKED_REASON)
		self.assertTrue(by_time["09:30"].available)
		self.assertIsNone(by_time["09:30"].reason)
		self.assertEqual(slots[-1].time, "11:30")
		self.assertEqual(len(slots), 11)

	def test_slot_must_end_inside_period(self):
		"""Test that no slot runs past the period end."""
		slots = generate_time_slots(
			self.morning, [], self.services, 60, target_date=MONDAY, now=self.now
		)

		self.assertEqual(slots[0].time, "09:00")
		self.assertEqual(slots[-1].time, "11:00")
		self.assertTrue(all(slot.available for slot in slots))

	def test_duration_longer_than_period(self):
		slots = generate_time_slots(
			self.morning, [], self.services, 240, target_date=MONDAY, now=self.now
		)
		self.assertEqual(slots, [])

	def test_slots_are_sorted_and_labelled(self):
		slots = generate_time_slots(
			self.morning, [], self.services, 30, target_date=MONDAY, now=self.now
		)

		times = [slot.time for slot in slots]
		self.assertEqual(times, sorted(times))
		self.assertEqual(slots[0].label, "9:00 AM")

	def test_existing_appointment_uses_its_own_service_duration(self):
		"""Test that a 60 minute booking blocks until 10:00."""
		therapy = Appointment(
			id="APT-2",
			appointment_date=MONDAY,
			start_time="09:00",
			service_id="SRV-THERAPY",
		)

		available = get_available_time_slots(
			self.morning, [therapy], self.services, 30, target_date=MONDAY, now=self.now
		)

		self.assertEqual(available[0], "10:00")

	def test_unknown_service_uses_default_duration(self):
		unknown = Appointment(
			id="APT-3",
			appointment_date=MONDAY,
			start_time="09:00",
			service_id="SRV-MISSING",
		)
		settings = SchedulingSettings(default_service_duration=45)

		available = get_available_time_slots(
			self.morning, [unknown], self.services, 15,
			target_date=MONDAY, settings=settings, now=self.now
		)

		self.assertEqual(available[0], "09:45")

	def test_non_confirmed_appointments_are_ignored(self):
		cancelled = Appointment(
			id="APT-4",
			appointment_date=MONDAY,
			start_time="09:00",
			service_id="SRV-CHECKUP",
			status="cancelled",
		)

		available = get_available_time_slots(
			self.morning, [cancelled], self.services, 30, target_date=MONDAY, now=self.now
		)

		self.assertEqual(available[0], "09:00")

	def test_today_skips_past_and_current_minute(self):
		"""Test that a slot starting exactly now is not offered."""
		now = datetime(2026, 1, 5, 10, 0)

		slots = generate_time_slots(
			self.morning, [], self.services, 30, target_date=MONDAY, now=now
		)

		self.assertEqual(slots[0].time, "10:15")

	def test_future_date_ignores_clock(self):
		now = datetime(2026, 1, 5, 10, 0)

		slots = generate_time_slots(
			self.morning, [], self.services, 30, target_date=TUESDAY, now=now
		)

		self.assertEqual(slots[0].time, "09:00")

	def test_custom_increment(self):
		settings = SchedulingSettings(slot_increment_minutes=30)

		slots = generate_time_slots(
			self.morning, [], self.services, 30,
			target_date=MONDAY, settings=settings, now=self.now
		)

		self.assertEqual(
			[slot.time for slot in slots],
			["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]
		)

	def test_next_available_time(self):
		self.assertEqual(
			calculate_next_available_time(
				self.morning, [self.booked_nine], self.services, 30,
				target_date=MONDAY, now=self.now
			),
			"09:30"
		)

	def test_next_available_time_when_full(self):
		therapy_block = [
			Appointment(f"APT-{hour}", MONDAY, f"{hour:02d}:00", service_id="SRV-THERAPY")
			for hour in (9, 10, 11)
		]

		self.assertIsNone(calculate_next_available_time(
			self.morning, therapy_block, self.services, 30,
			target_date=MONDAY, now=self.now
		))


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
