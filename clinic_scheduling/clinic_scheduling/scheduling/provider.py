"""
Scheduling Data Provider

Loads immutable snapshots of the clinic's configuration and appointments
from the Frappe database for the engine to consume.
"""

import frappe
from frappe.utils import getdate
from datetime import date
from typing import Optional, Union

from .models import SchedulingContext
from .settings import SchedulingSettings


SETTINGS_DOCTYPE = "Clinic Settings"
STAFF_ROLE = "Clinic Staff"


def get_logger():
	return frappe.logger("clinic_scheduling")


def is_staff_user(user: Optional[str] = None) -> bool:
	"""Solo el staff de la clínica puede agendar en modo INTERNAL."""
	return STAFF_ROLE in frappe.get_roles(user)


def load_settings() -> SchedulingSettings:
	"""
	Lee Clinic Settings (single DocType) y construye SchedulingSettings.

	"system timezone" se resuelve al timezone del sistema Frappe.
	"""
	values = frappe.get_cached_doc(SETTINGS_DOCTYPE).as_dict()

	if values.get("timezone") == "system timezone":
		values["timezone"] = frappe.utils.get_system_timezone()

	try:
		return SchedulingSettings.from_dict(values)
	except ValueError as e:
		frappe.log_error(f"Invalid Clinic Settings: {str(e)}", "Load Scheduling Settings")
		return SchedulingSettings()


def load_context(
	from_date: Union[date, str],
	to_date: Optional[Union[date, str]] = None
) -> SchedulingContext:
	"""
	Obtiene el snapshot de datos para un rango de fechas.

	Args:
		from_date: fecha inicial de las citas a cargar
		to_date: fecha final (default: from_date)

	Returns:
		SchedulingContext con periodos, feriados, servicios y las citas
		del rango (todas las de status Confirmed; el resto no afecta la
		disponibilidad)
	"""
	from_date = getdate(from_date)
	to_date = getdate(to_date) if to_date else from_date

	periods = frappe.get_all(
		"Working Period",
		fields=["name", "period_name", "start_time", "end_time", "day_of_week"],
		order_by="day_of_week asc, start_time asc"
	)

	holidays = frappe.get_all(
		"Clinic Holiday",
		fields=[
			"name", "holiday_date", "holiday_type", "note",
			"start_date", "end_date",
			"recurring_start_month", "recurring_start_day",
			"recurring_end_month", "recurring_end_day",
		],
		order_by="creation asc"
	)

	services = frappe.get_all(
		"Clinic Service",
		fields=["name", "service_name", "duration", "price"]
	)

	appointments = frappe.get_all(
		"Clinic Appointment",
		filters={
			"status": "Confirmed",
			"appointment_date": ["between", [from_date, to_date]],
		},
		fields=["name", "appointment_date", "start_time", "end_time", "service", "status"],
		order_by="appointment_date asc, start_time asc"
	)

	get_logger().debug(
		f"Loaded scheduling context {from_date}..{to_date}: "
		f"{len(periods)} periods, {len(holidays)} holidays, "
		f"{len(services)} services, {len(appointments)} appointments"
	)

	return SchedulingContext.build(
		periods=periods,
		holidays=holidays,
		services=services,
		appointments=appointments
	)
