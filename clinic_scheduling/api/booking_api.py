"""
Booking API Endpoints

Whitelisted functions for the public booking page and the staff desk.
Every call loads a fresh snapshot and runs the scheduling engine; nothing
is cached between calls.

Public endpoints allow guest access with rate limiting by IP.
"""

import frappe
from frappe import _
from frappe.utils import getdate, add_days
from typing import Any, Dict, List, Optional

from clinic_scheduling.clinic_scheduling import scheduling
from clinic_scheduling.clinic_scheduling.exceptions import SlotUnavailableError
from clinic_scheduling.clinic_scheduling.scheduling.provider import (
	get_logger,
	load_context,
	load_settings,
)

from clinic_scheduling.api.shared import (
	check_rate_limit,
	validate_date_string,
	validate_docname,
	validate_duration,
	validate_mode,
	validate_time_string,
)


def _resolve_duration(service: Optional[str], duration: Optional[int], context, settings) -> int:
	"""
	Duración a reservar: explícita, la del servicio, o la de defecto.
	"""
	if duration:
		return validate_duration(duration)
	if service:
		service = validate_docname(service, "service")
	return scheduling.get_service_duration(service, context.services, settings)


def _calendar(context, settings, duration: int, mode, include_today: bool = False):
	return scheduling.generate_available_dates(
		context.periods,
		context.holidays,
		context.appointments,
		context.services,
		duration,
		booking_range_days=settings.booking_range_days,
		start_from_tomorrow=not include_today,
		mode=mode,
		settings=settings
	)


def _horizon_context(settings):
	today = settings.today()
	return load_context(today, add_days(today, settings.booking_range_days))


@frappe.whitelist(allow_guest=True, methods=["GET"])
def get_available_dates(
	service: Optional[str] = None,
	duration: Optional[int] = None,
	mode: str = "PUBLIC",
	include_today: int = 0
) -> List[Dict[str, Any]]:
	"""
	Calendario de reservas con el estado de cada fecha del horizonte.

	Rate limited: 30 requests per minute per IP.

	Returns:
		list[dict]: [
			{
				"date": "2026-01-20",
				"label": "Tuesday, January 20",
				"day_of_week": 2,
				"status": "available",
				"reason": None
			},
			...
		]
	"""
	check_rate_limit("get_available_dates", limit=30, seconds=60)
	mode = validate_mode(mode)

	settings = load_settings()
	context = _horizon_context(settings)
	duration = _resolve_duration(service, duration, context, settings)

	dates = _calendar(context, settings, duration, mode, include_today=bool(int(include_today or 0)))
	return [d.as_dict() for d in dates]


@frappe.whitelist(allow_guest=True, methods=["GET"])
def get_periods_for_date(
	date: str,
	service: Optional[str] = None,
	duration: Optional[int] = None,
	mode: str = "PUBLIC"
) -> List[Dict[str, Any]]:
	"""
	Disponibilidad por periodo (Morning, Afternoon...) de una fecha.

	Rate limited: 30 requests per minute per IP.

	Returns:
		list[dict]: [
			{
				"period": {"id": ..., "name": "Morning", ...},
				"display": "Morning (09:00 – 12:00)",
				"status": "available",
				"available_slots": 8,
				"next_available_time": "09:30"
			},
			...
		]
	"""
	check_rate_limit("get_periods_for_date", limit=30, seconds=60)
	date = validate_date_string(date, "date")
	mode = validate_mode(mode)

	settings = load_settings()
	context = load_context(date)
	duration = _resolve_duration(service, duration, context, settings)

	periods = scheduling.calculate_period_availability(
		date,
		context.periods,
		context.appointments,
		context.services,
		duration,
		settings=settings,
		holidays=context.holidays,
		mode=mode
	)

	result = []
	for available_period in periods:
		row = available_period.as_dict()
		row["display"] = scheduling.format_period_display(available_period.period)
		result.append(row)

	return result


@frappe.whitelist(allow_guest=True, methods=["GET"])
def get_time_slots(
	date: str,
	period: str,
	service: Optional[str] = None,
	duration: Optional[int] = None,
	only_available: int = 0
) -> List[Dict[str, Any]]:
	"""
	Slots de un periodo en una fecha.

	Rate limited: 30 requests per minute per IP.

	Returns:
		list[dict]: [
			{"time": "09:00", "available": False, "label": "9:00 AM",
			 "reason": "This time is already booked"},
			{"time": "09:30", "available": True, "label": "9:30 AM", "reason": None},
			...
		]
	"""
	check_rate_limit("get_time_slots", limit=30, seconds=60)
	date = validate_date_string(date, "date")
	period = validate_docname(period, "period")

	settings = load_settings()
	context = load_context(date)
	duration = _resolve_duration(service, duration, context, settings)

	day_periods = scheduling.get_periods_for_date(date, context.periods)
	target = next((p for p in day_periods if p.id == period), None)
	if target is None:
		frappe.throw(_("Period {0} is not configured for {1}").format(period, date))

	slots = scheduling.generate_time_slots(
		target,
		context.confirmed_for_date(date),
		context.services,
		duration,
		target_date=date,
		settings=settings
	)

	if int(only_available or 0):
		slots = [slot for slot in slots if slot.available]

	return [slot.as_dict() for slot in slots]


@frappe.whitelist(allow_guest=True, methods=["GET", "POST"])
def validate_booking(
	date: str,
	start_time: str,
	service: Optional[str] = None,
	duration: Optional[int] = None,
	mode: str = "PUBLIC",
	period: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Valida una reserva ANTES de guardarla. Útil para mostrar errores en la
	UI; la escritura vuelve a validar.

	Rate limited: 20 requests per minute per IP.

	Returns:
		dict: {"is_valid": bool, "errors": list[str]}
	"""
	check_rate_limit("validate_booking", limit=20, seconds=60)
	date = validate_date_string(date, "date")
	start_time = validate_time_string(start_time, "start_time")
	mode = validate_mode(mode)
	if period:
		period = validate_docname(period, "period")

	settings = load_settings()
	context = load_context(date)
	duration = _resolve_duration(service, duration, context, settings)

	validation = scheduling.validate_booking(
		date,
		start_time,
		duration,
		context.periods,
		context.holidays,
		context.appointments,
		context.services,
		mode=mode,
		period_id=period,
		settings=settings,
		max_date=scheduling.get_max_booking_date(settings, settings.today())
	)

	return validation.as_dict()


@frappe.whitelist(allow_guest=True, methods=["GET"])
def suggest_next_available_date(
	date: str,
	service: Optional[str] = None,
	duration: Optional[int] = None,
	mode: str = "PUBLIC"
) -> Optional[str]:
	"""
	Siguiente fecha disponible después de `date` dentro del horizonte.

	Returns:
		str: fecha YYYY-MM-DD, o None si no hay ninguna
	"""
	check_rate_limit("suggest_next_available_date", limit=30, seconds=60)
	date = validate_date_string(date, "date")
	mode = validate_mode(mode)

	settings = load_settings()
	context = _horizon_context(settings)
	duration = _resolve_duration(service, duration, context, settings)

	return _suggest(date, context, settings, duration, mode)


def _suggest(date: str, context, settings, duration: int, mode) -> Optional[str]:
	calendar = _calendar(context, settings, duration, mode, include_today=True)
	suggestion = scheduling.suggest_next_available_date(getdate(date), calendar)
	return suggestion.strftime("%Y-%m-%d") if suggestion else None


def _rejected_booking(date: str, service: str, mode, message: str, retry: bool) -> Dict[str, Any]:
	settings = load_settings()
	context = _horizon_context(settings)
	duration = scheduling.get_service_duration(service, context.services, settings)

	return {
		"success": False,
		"appointment": None,
		"retry": retry,
		"message": message,
		"suggested_date": _suggest(date, context, settings, duration, mode),
	}


@frappe.whitelist(allow_guest=True, methods=["POST"])
def create_booking(
	date: str,
	start_time: str,
	service: str,
	patient: Optional[str] = None,
	period: Optional[str] = None,
	mode: str = "PUBLIC"
) -> Dict[str, Any]:
	"""
	Crea una cita confirmada.

	Si otra reserva tomó el horario entre la consulta y la escritura, la
	respuesta es recuperable (retry=True) con una fecha alternativa
	sugerida, no un error del sistema. Si la reserva viola una regla
	(feriado, fuera de horario), success=False con retry=False.

	Rate limited: 5 requests per minute per IP (write operation).

	Returns:
		dict: {
			"success": bool,
			"appointment": str | None,
			"retry": bool,
			"message": str | None,
			"suggested_date": str | None
		}
	"""
	check_rate_limit("create_booking", limit=5, seconds=60)
	date = validate_date_string(date, "date")
	start_time = validate_time_string(start_time, "start_time")
	service = validate_docname(service, "service")
	mode = validate_mode(mode)
	if patient:
		patient = validate_docname(patient, "patient")
	if period:
		period = validate_docname(period, "period")

	if not frappe.db.exists("Clinic Service", service):
		frappe.throw(_("Clinic Service {0} does not exist").format(service))

	appointment = frappe.get_doc({
		"doctype": "Clinic Appointment",
		"appointment_date": date,
		"start_time": start_time,
		"service": service,
		"patient": patient,
		"working_period": period,
		"status": "Confirmed",
	})
	# validate_mode ya exigió el rol de staff para INTERNAL
	appointment.flags.booking_mode = mode.value

	try:
		appointment.insert(ignore_permissions=True)
		frappe.db.commit()

	except SlotUnavailableError as e:
		frappe.db.rollback()
		return _rejected_booking(
			date, service, mode, str(e) or _("Slot unavailable. Please pick another time."), retry=True
		)

	except (frappe.QueryDeadlockError, frappe.QueryTimeoutError):
		# Dos reservas compitiendo por el mismo bloqueo: una pierde y reintenta
		frappe.db.rollback()
		get_logger().warning(f"Booking lock contention on {date} {start_time}")
		return _rejected_booking(
			date, service, mode, _("Slot unavailable. Please pick another time."), retry=True
		)

	except frappe.ValidationError as e:
		# Reglas de reserva (feriado, fuera de horario...): respuesta para la UI
		frappe.db.rollback()
		frappe.clear_messages()
		return _rejected_booking(date, service, mode, str(e), retry=False)

	except Exception as e:
		frappe.db.rollback()
		frappe.log_error(f"Error in create_booking: {str(e)}", "Booking API Error")
		frappe.throw(_("Could not create the appointment"))

	get_logger().info(
		f"Booking created: {appointment.name} on {date} {start_time} ({mode.value})"
	)

	return {
		"success": True,
		"appointment": appointment.name,
		"retry": False,
		"message": None,
		"suggested_date": None,
	}
