# Copyright (c) 2026, Clinic Scheduling Contributors and contributors
# For license information, please see license.txt

"""
Clinic Settings DocType (Single)

Configuración del motor de reservas: horizonte, incremento de slots,
duración por defecto y timezone de la clínica.
"""

import frappe
from frappe import _
from frappe.model.document import Document
import pytz


class ClinicSettings(Document):
	"""
	Clinic Settings with validations.

	Validations:
	- booking_range_days >= 1
	- slot_increment_minutes > 0
	- default_service_duration > 0
	- timezone known to pytz (or "system timezone")
	"""

	def validate(self) -> None:
		if self.booking_range_days is not None and int(self.booking_range_days) < 1:
			frappe.throw(_("Booking Range Days must be at least 1"))

		if self.slot_increment_minutes is not None and int(self.slot_increment_minutes) <= 0:
			frappe.throw(_("Slot Increment must be greater than 0"))

		if self.default_service_duration is not None and int(self.default_service_duration) <= 0:
			frappe.throw(_("Default Service Duration must be greater than 0"))

		self._validate_timezone()

	def _validate_timezone(self) -> None:
		if not self.timezone or self.timezone == "system timezone":
			return

		if self.timezone not in pytz.all_timezones_set:
			frappe.throw(_("Unknown timezone: {0}").format(self.timezone))
