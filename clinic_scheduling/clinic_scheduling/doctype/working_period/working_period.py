# Copyright (c) 2026, Clinic Scheduling Contributors and contributors
# For license information, please see license.txt

"""
Working Period DocType

Franja de trabajo con nombre (Morning, Afternoon, Evening...) en un día de
la semana. Los huecos entre franjas son descansos implícitos.
"""

import frappe
from frappe import _
from frappe.model.document import Document

from clinic_scheduling.clinic_scheduling.scheduling.time_utils import (
	intervals_overlap,
	normalize_time,
	time_to_minutes,
)


WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class WorkingPeriod(Document):
	"""
	Working Period with validations.

	Validations:
	- period_name, start_time, end_time required
	- day_of_week between 0 (Sunday) and 6 (Saturday)
	- start_time < end_time
	- No overlapping periods on the same weekday
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.
		"""
		self._validate_required_fields()
		self._validate_day_of_week()
		self._validate_times()
		self._validate_no_overlapping_periods()

	def _validate_required_fields(self) -> None:
		"""Valida campos requeridos."""
		if not self.period_name:
			frappe.throw(_("Period Name is required"))

		if not self.start_time:
			frappe.throw(_("Start Time is required"))

		if not self.end_time:
			frappe.throw(_("End Time is required"))

	def _validate_day_of_week(self) -> None:
		if self.day_of_week is None or not 0 <= int(self.day_of_week) <= 6:
			frappe.throw(_("Day of Week must be between 0 (Sunday) and 6 (Saturday)"))

	def _validate_times(self) -> None:
		"""Valida que start_time < end_time."""
		if time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
			frappe.throw(
				_("Start Time ({0}) must be before End Time ({1})").format(
					normalize_time(self.start_time), normalize_time(self.end_time)
				)
			)

	def _validate_no_overlapping_periods(self) -> None:
		"""
		Valida que no haya periodos solapados en el mismo día.

		Dos periodos se solapan si:
		- Son del mismo day_of_week
		- period1.start < period2.end AND period2.start < period1.end
		"""
		filters = {"day_of_week": self.day_of_week}
		if not self.is_new():
			filters["name"] = ["!=", self.name]

		existing = frappe.get_all(
			"Working Period",
			filters=filters,
			fields=["name", "period_name", "start_time", "end_time"]
		)

		for other in existing:
			if intervals_overlap(self.start_time, self.end_time, other.start_time, other.end_time):
				frappe.throw(
					_("{0}: {1} ({2}-{3}) overlaps with {4} ({5}-{6})").format(
						WEEKDAY_NAMES[int(self.day_of_week)],
						self.period_name,
						normalize_time(self.start_time),
						normalize_time(self.end_time),
						other.period_name,
						normalize_time(other.start_time),
						normalize_time(other.end_time),
					)
				)
