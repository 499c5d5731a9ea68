"""
Booking Validator

Authoritative accept/reject decision for a proposed booking. Stops at the
first failing check and returns the reason as data; it never raises for
business conditions.

The decision is advisory: the write layer must still enforce the
no-overlap invariant atomically (see the Clinic Appointment controller).
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Union

from .holidays import find_holiday, holiday_reason
from .models import (
	Appointment,
	AvailabilityMode,
	BookingValidation,
	Holiday,
	Service,
	WorkingPeriod,
	confirmed_appointments_for_date,
)
from .overlap import find_conflicting_appointment
from .periods import find_period, get_periods_for_date
from .settings import SchedulingSettings, resolve_settings
from .time_utils import is_time_within_period, normalize_time, time_to_minutes, to_date


logger = logging.getLogger(__name__)

PAST_DATE_ERROR = "Cannot book past dates"
CLOSED_DAY_ERROR = "Clinic is closed on this day"
OUTSIDE_HOURS_ERROR = "Selected time is outside working hours"
EXCEEDS_PERIOD_ERROR = "Appointment extends beyond the working period"


def _reject(reason: str, target_date: date, start_time: str) -> BookingValidation:
	logger.debug("Booking rejected for %s %s: %s", target_date, start_time, reason)
	return BookingValidation.reject(reason)


def validate_booking(
	target_date: Union[date, str],
	start_time: str,
	service_duration_minutes: int,
	periods: Iterable[WorkingPeriod],
	holidays: Iterable[Holiday],
	appointments: Iterable[Appointment],
	services: Iterable[Service],
	mode: Union[AvailabilityMode, str] = AvailabilityMode.PUBLIC,
	period_id: Optional[str] = None,
	settings: Optional[SchedulingSettings] = None,
	now: Optional[datetime] = None,
	max_date: Optional[date] = None,
	exclude_appointment: Optional[str] = None
) -> BookingValidation:
	"""
	Valida una reserva propuesta.

	Args:
		target_date: fecha de la reserva
		start_time: hora de inicio (HH:MM)
		service_duration_minutes: duración del servicio
		periods, holidays, appointments, services: snapshot de datos
		mode: PUBLIC o INTERNAL
		period_id: periodo destino explícito (opcional)
		settings: configuración
		now: hora actual de la clínica
		max_date: última fecha reservable en modo PUBLIC (opcional)
		exclude_appointment: id de cita a ignorar (para reprogramaciones)

	Returns:
		BookingValidation: is_valid y errores (el primero es el que detuvo
		la validación)

	Algoritmo:
		1. Rechazar fechas pasadas
		2. Solo PUBLIC: fecha máxima, feriado, día sin periodos, periodo
		   destino, hora fuera del periodo, fin más allá del periodo
		3. Ambos modos: overlap con citas confirmadas del día
	"""
	settings = resolve_settings(settings)
	mode = AvailabilityMode(mode)
	target_date = to_date(target_date)
	start_time = normalize_time(start_time)
	now = now or settings.now()

	# 1. Fecha pasada
	if target_date < now.date():
		return _reject(PAST_DATE_ERROR, target_date, start_time)

	# 2. Chequeos solo para reservas públicas
	if mode == AvailabilityMode.PUBLIC:
		if max_date is not None and target_date > max_date:
			return _reject(
				f"Bookings are only accepted up to {max_date.strftime('%Y-%m-%d')}",
				target_date,
				start_time
			)

		holiday = find_holiday(target_date, holidays)
		if holiday is not None:
			return _reject(holiday_reason(holiday), target_date, start_time)

		day_periods = get_periods_for_date(target_date, periods)
		if not day_periods:
			return _reject(CLOSED_DAY_ERROR, target_date, start_time)

		target_period = find_period(day_periods, start_time, period_id)
		if target_period is None:
			return _reject(OUTSIDE_HOURS_ERROR, target_date, start_time)

		if not is_time_within_period(start_time, target_period):
			return _reject(
				f"Time must be between {normalize_time(target_period.start_time)} "
				f"and {normalize_time(target_period.end_time)}",
				target_date,
				start_time
			)

		end_minutes = time_to_minutes(start_time) + service_duration_minutes
		if end_minutes > time_to_minutes(target_period.end_time):
			return _reject(EXCEEDS_PERIOD_ERROR, target_date, start_time)

	# 3. Overlap con citas confirmadas (ambos modos)
	confirmed = confirmed_appointments_for_date(list(appointments), target_date)
	conflict = find_conflicting_appointment(
		start_time,
		service_duration_minutes,
		confirmed,
		services,
		settings,
		exclude_appointment=exclude_appointment
	)
	if conflict is not None:
		return _reject(
			f"This time overlaps with an existing appointment at {normalize_time(conflict.start_time)}",
			target_date,
			start_time
		)

	return BookingValidation.ok()
