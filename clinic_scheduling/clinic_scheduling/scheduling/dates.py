"""
Booking Calendar

Generates the bounded sequence of dates shown to a booker, each annotated
with its status and a human-readable reason, and suggests the next
available date when the chosen one cannot be booked.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from .availability import calculate_date_status
from .holidays import find_holiday, holiday_reason
from .models import (
	Appointment,
	AvailabilityMode,
	AvailableDate,
	DateStatus,
	Holiday,
	Service,
	WorkingPeriod,
)
from .settings import SchedulingSettings, resolve_settings
from .time_utils import day_of_week, to_date


STATUS_REASONS = {
	DateStatus.NO_PERIODS: "Clinic is closed on this day",
	DateStatus.PAST: "This date has passed",
	DateStatus.FULL: "This day is fully booked",
}


def format_date_label(target_date: date) -> str:
	"""Ej: "Monday, January 5"."""
	return f"{target_date.strftime('%A, %B')} {target_date.day}"


def _status_reason(
	status: DateStatus,
	target_date: date,
	holidays: List[Holiday]
) -> Optional[str]:
	if status == DateStatus.AVAILABLE:
		return None

	if status == DateStatus.HOLIDAY:
		holiday = find_holiday(target_date, holidays)
		return holiday_reason(holiday) if holiday else None

	return STATUS_REASONS[status]


def generate_available_dates(
	periods: Iterable[WorkingPeriod],
	holidays: Iterable[Holiday],
	appointments: Iterable[Appointment],
	services: Iterable[Service],
	service_duration_minutes: int,
	booking_range_days: Optional[int] = None,
	start_from_tomorrow: bool = True,
	mode: Union[AvailabilityMode, str] = AvailabilityMode.PUBLIC,
	settings: Optional[SchedulingSettings] = None,
	now: Optional[datetime] = None
) -> List[AvailableDate]:
	"""
	Calendario de reservas con estado por fecha.

	Args:
		periods, holidays, appointments, services: snapshot de datos
		service_duration_minutes: duración usada para detectar días llenos
		booking_range_days: horizonte (default: settings.booking_range_days)
		start_from_tomorrow: si False, incluye hoy
		mode: PUBLIC o INTERNAL
		settings: configuración
		now: hora actual de la clínica

	Returns:
		list[AvailableDate]: una entrada por día, desde hoy (o mañana)
		hasta hoy + booking_range_days inclusive
	"""
	settings = resolve_settings(settings)
	mode = AvailabilityMode(mode)
	now = now or settings.now()
	today = now.date()

	if booking_range_days is None:
		booking_range_days = settings.booking_range_days

	periods = list(periods)
	holidays = list(holidays)
	appointments = list(appointments)
	services = list(services)

	start_offset = 1 if start_from_tomorrow else 0
	dates = []

	for offset in range(start_offset, booking_range_days + 1):
		current_date = today + timedelta(days=offset)

		status = calculate_date_status(
			current_date,
			periods,
			holidays,
			appointments,
			services,
			service_duration_minutes,
			mode=mode,
			settings=settings,
			now=now
		)

		dates.append(AvailableDate(
			date=current_date,
			label=format_date_label(current_date),
			day_of_week=day_of_week(current_date),
			status=status,
			reason=_status_reason(status, current_date, holidays),
		))

	return dates


def suggest_next_available_date(
	current_date: Union[date, str],
	available_dates: List[AvailableDate]
) -> Optional[date]:
	"""
	Primera fecha "available" estrictamente posterior a current_date dentro
	del calendario generado, o None si current_date no está en el
	calendario o el horizonte se agota.
	"""
	current_date = to_date(current_date)

	index = next(
		(i for i, d in enumerate(available_dates) if d.date == current_date),
		None
	)
	if index is None:
		return None

	for candidate in available_dates[index + 1:]:
		if candidate.status == DateStatus.AVAILABLE and candidate.date > current_date:
			return candidate.date

	return None
