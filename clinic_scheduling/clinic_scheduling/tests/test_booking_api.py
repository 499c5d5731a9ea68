"""
Tests for api/booking_api.py

Tests whitelisted booking endpoints. Runs only inside a bench site
(bench run-tests).
"""

import unittest

try:
	import frappe
except ImportError:
	raise unittest.SkipTest("Booking API tests require a Frappe bench site")

from frappe.utils import add_days, getdate

from clinic_scheduling.api.booking_api import create_booking, get_time_slots
from clinic_scheduling.api.shared.validators import validate_mode
from clinic_scheduling.clinic_scheduling.scheduling.models import AvailabilityMode
from clinic_scheduling.clinic_scheduling.scheduling.provider import STAFF_ROLE


PATIENT_USER = "patient.api@clinic-scheduling.test"
STAFF_USER = "staff.api@clinic-scheduling.test"


def _ensure_user(email, user_type, roles=None):
	if not frappe.db.exists("User", email):
		frappe.get_doc({
			"doctype": "User",
			"email": email,
			"first_name": email.split("@")[0],
			"user_type": user_type,
			"send_welcome_email": 0,
		}).insert(ignore_permissions=True)

	if roles:
		frappe.get_doc("User", email).add_roles(*roles)


class TestBookingAPI(unittest.TestCase):
	"""Tests for API endpoints."""

	def setUp(self):
		"""Set up test data before each test."""
		frappe.set_user("Administrator")
		frappe.cache.delete_keys("rate_limit:clinic_scheduling:")

		if not frappe.db.exists("Role", STAFF_ROLE):
			frappe.get_doc({
				"doctype": "Role",
				"role_name": STAFF_ROLE,
				"desk_access": 1,
			}).insert(ignore_permissions=True)

		_ensure_user(PATIENT_USER, "Website User")
		_ensure_user(STAFF_USER, "System User", roles=[STAFF_ROLE])

		# Mismo día de la semana, una semana adelante (dentro del horizonte)
		self.target_date = add_days(getdate(), 7)
		self.date_str = self.target_date.strftime("%Y-%m-%d")
		self.weekday = (self.target_date.weekday() + 1) % 7

		self._cleanup()

		period = frappe.get_doc({
			"doctype": "Working Period",
			"period_name": "Morning",
			"start_time": "09:00:00",
			"end_time": "12:00:00",
			"day_of_week": self.weekday,
		}).insert(ignore_permissions=True)
		self.period = period.name

		if not frappe.db.exists("Clinic Service", {"service_name": "Test Checkup"}):
			frappe.get_doc({
				"doctype": "Clinic Service",
				"service_name": "Test Checkup",
				"duration": 30,
			}).insert(ignore_permissions=True)

		self.service = frappe.db.get_value("Clinic Service", {"service_name": "Test Checkup"})

		# create_booking hace commit/rollback: los datos base deben estar guardados
		frappe.db.commit()

	def _cleanup(self):
		for offset in (0, 7, 14):
			booking_date = add_days(self.target_date, offset)
			frappe.db.delete("Clinic Appointment", {"appointment_date": booking_date})
			frappe.db.delete("Clinic Holiday", {"holiday_date": booking_date})
		frappe.db.delete("Working Period", {"day_of_week": self.weekday})

	def test_create_booking_success(self):
		"""Test that a free slot is booked and confirmed."""
		frappe.set_user(PATIENT_USER)

		result = create_booking(self.date_str, "09:00", self.service)

		self.assertTrue(result["success"])
		self.assertFalse(result["retry"])
		self.assertEqual(
			frappe.db.get_value("Clinic Appointment", result["appointment"], "status"),
			"Confirmed"
		)

	def test_create_booking_taken_slot_is_retryable(self):
		"""Test that an overlapping booking returns retry=True with a suggestion."""
		frappe.set_user(PATIENT_USER)
		create_booking(self.date_str, "09:00", self.service)

		result = create_booking(self.date_str, "09:15", self.service)

		self.assertFalse(result["success"])
		self.assertTrue(result["retry"])
		self.assertIsNone(result["appointment"])
		self.assertIsNotNone(result["suggested_date"])
		self.assertGreater(result["suggested_date"], self.date_str)

	def test_create_booking_rule_violation_is_not_retryable(self):
		"""Test that a time outside working hours returns retry=False."""
		frappe.set_user(PATIENT_USER)

		result = create_booking(self.date_str, "13:00", self.service)

		self.assertFalse(result["success"])
		self.assertFalse(result["retry"])
		self.assertEqual(result["message"], "Selected time is outside working hours")
		self.assertIn("suggested_date", result)

	def test_validate_mode_requires_staff_role(self):
		"""Test that INTERNAL mode is limited to clinic staff."""
		frappe.set_user("Guest")
		with self.assertRaises(frappe.PermissionError):
			validate_mode("INTERNAL")

		frappe.set_user(PATIENT_USER)
		with self.assertRaises(frappe.PermissionError):
			validate_mode("INTERNAL")
		self.assertEqual(validate_mode("public"), AvailabilityMode.PUBLIC)

		frappe.set_user(STAFF_USER)
		self.assertEqual(validate_mode("INTERNAL"), AvailabilityMode.INTERNAL)

		with self.assertRaises(frappe.ValidationError):
			validate_mode("ADMIN")

	def test_non_staff_cannot_book_internal_on_holiday(self):
		"""Test that a logged-in patient cannot bypass holidays with INTERNAL mode."""
		frappe.get_doc({
			"doctype": "Clinic Holiday",
			"holiday_date": self.target_date,
			"holiday_type": "holiday",
			"note": "API test holiday",
		}).insert(ignore_permissions=True)
		frappe.db.commit()

		frappe.set_user(PATIENT_USER)
		with self.assertRaises(frappe.PermissionError):
			create_booking(self.date_str, "09:00", self.service, mode="INTERNAL")

		result = create_booking(self.date_str, "09:00", self.service)
		self.assertFalse(result["success"])
		self.assertEqual(result["message"], "API test holiday")

		frappe.set_user(STAFF_USER)
		result = create_booking(self.date_str, "09:00", self.service, mode="INTERNAL")
		self.assertTrue(result["success"])

	def test_get_time_slots(self):
		slots = get_time_slots(self.date_str, self.period, service=self.service)

		self.assertEqual(slots[0]["time"], "09:00")
		self.assertEqual(slots[-1]["time"], "11:30")
		self.assertTrue(all(slot["available"] for slot in slots))

	def test_get_time_slots_unknown_period(self):
		"""Test that get_time_slots fails with a period not configured for the date."""
		with self.assertRaises(frappe.ValidationError):
			get_time_slots(self.date_str, "PER-DOES-NOT-EXIST")

	def tearDown(self):
		"""Clean up after tests."""
		frappe.set_user("Administrator")
		frappe.db.rollback()
		self._cleanup()
		frappe.db.commit()


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
