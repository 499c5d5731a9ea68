# Copyright (c) 2026, Clinic Scheduling Contributors and contributors
# For license information, please see license.txt

"""
Clinic Holiday DocType

Cierre de la clínica en una de tres formas:
- Fecha exacta (holiday / closed)
- Rango de fechas (long_holiday)
- Rango anual recurrente por mes/día (recurring_annual), que puede cruzar
  el año nuevo
"""

import calendar

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import getdate

from clinic_scheduling.clinic_scheduling.scheduling.models import HOLIDAY_TYPES, RECURRING_ANNUAL


# Año bisiesto para aceptar 29 de febrero en feriados recurrentes
_LEAP_YEAR = 2024


class ClinicHoliday(Document):
	"""
	Clinic Holiday with validations.

	Validations:
	- holiday_type is one of the known types
	- Exactly one shape: date, date range, or recurring month/day range
	- end_date >= start_date
	- Recurring month/day values form real calendar days
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.
		"""
		self._validate_type()

		if self.holiday_type == RECURRING_ANNUAL:
			self._validate_recurring_range()
		elif self.start_date:
			self._validate_date_range()
		elif not self.holiday_date:
			frappe.throw(_("Date is required"))

	def _validate_type(self) -> None:
		if not self.holiday_type:
			self.holiday_type = "holiday"

		if self.holiday_type not in HOLIDAY_TYPES:
			frappe.throw(
				_("Holiday Type must be one of: {0}").format(", ".join(HOLIDAY_TYPES))
			)

	def _validate_date_range(self) -> None:
		"""Valida que end_date >= start_date; end_date vacío = un solo día."""
		if self.holiday_date:
			frappe.throw(_("Use either Date or Start Date / End Date, not both"))

		if self.end_date and getdate(self.end_date) < getdate(self.start_date):
			frappe.throw(_("End Date must be on or after Start Date"))

	def _validate_recurring_range(self) -> None:
		"""
		Valida los cuatro campos mes/día del rango recurrente.

		El rango puede cruzar el año (p.ej. 20 dic -> 5 ene).
		"""
		if self.holiday_date or self.start_date:
			frappe.throw(_("Recurring holidays use month/day fields only"))

		for month_field, day_field in (
			("recurring_start_month", "recurring_start_day"),
			("recurring_end_month", "recurring_end_day"),
		):
			month = self.get(month_field)
			day = self.get(day_field)

			if not month or not day:
				frappe.throw(_("Recurring holidays require start and end month/day"))

			month, day = int(month), int(day)
			if not 1 <= month <= 12:
				frappe.throw(_("Invalid month: {0}").format(month))

			if not 1 <= day <= calendar.monthrange(_LEAP_YEAR, month)[1]:
				frappe.throw(_("Invalid day {0} for month {1}").format(day, month))
