"""
Availability Service

Combines periods, holidays and confirmed appointments into:
- Per-period availability (status, available slot count, next free time)
- A single date status (past, holiday, no_periods, full, available),
  sensitive to the availability mode (PUBLIC vs INTERNAL)
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from .holidays import find_holiday
from .models import (
	Appointment,
	AvailabilityMode,
	AvailablePeriod,
	DateStatus,
	Holiday,
	PeriodStatus,
	Service,
	TimeSlot,
	WorkingPeriod,
	confirmed_appointments_for_date,
)
from .periods import get_periods_for_date
from .settings import SchedulingSettings, resolve_settings
from .slots import generate_time_slots
from .time_utils import to_date


def aggregate_period(period: WorkingPeriod, slots: List[TimeSlot]) -> AvailablePeriod:
	"""
	Reduce la lista de slots de un periodo.

	status = available si hay al menos un slot libre, full si no.
	next_available_time = primer slot libre (el más temprano) o None.
	"""
	available = [slot for slot in slots if slot.available]

	return AvailablePeriod(
		period=period,
		status=PeriodStatus.AVAILABLE if available else PeriodStatus.FULL,
		available_slots=len(available),
		next_available_time=available[0].time if available else None,
	)


def calculate_period_availability(
	target_date: Union[date, str],
	periods: Iterable[WorkingPeriod],
	appointments: Iterable[Appointment],
	services: Iterable[Service],
	service_duration_minutes: int,
	settings: Optional[SchedulingSettings] = None,
	now: Optional[datetime] = None,
	holidays: Optional[Iterable[Holiday]] = None,
	mode: Union[AvailabilityMode, str] = AvailabilityMode.PUBLIC
) -> List[AvailablePeriod]:
	"""
	Disponibilidad de cada periodo de la fecha.

	Args:
		target_date: fecha consultada
		periods: todos los periodos configurados
		appointments: citas (se filtran las confirmadas de la fecha)
		services: catálogo de servicios
		service_duration_minutes: duración del servicio a reservar
		settings: configuración
		now: hora actual de la clínica
		holidays: si se indica y el modo es PUBLIC, un feriado cierra todos
			los periodos
		mode: PUBLIC o INTERNAL

	Returns:
		list[AvailablePeriod]: en orden de start_time. Los periodos de una
		fecha pasada (o feriado en modo PUBLIC) se devuelven como closed.
	"""
	settings = resolve_settings(settings)
	mode = AvailabilityMode(mode)
	target_date = to_date(target_date)
	now = now or settings.now()

	day_periods = get_periods_for_date(target_date, periods)

	is_closed = target_date < now.date()
	if not is_closed and holidays is not None and mode == AvailabilityMode.PUBLIC:
		is_closed = find_holiday(target_date, holidays) is not None

	if is_closed:
		return [
			AvailablePeriod(period=period, status=PeriodStatus.CLOSED, available_slots=0)
			for period in day_periods
		]

	confirmed = confirmed_appointments_for_date(list(appointments), target_date)
	services = list(services)

	result = []
	for period in day_periods:
		slots = generate_time_slots(
			period,
			confirmed,
			services,
			service_duration_minutes,
			target_date=target_date,
			settings=settings,
			now=now
		)
		result.append(aggregate_period(period, slots))

	return result


def is_day_fully_booked(
	target_date: Union[date, str],
	periods: Iterable[WorkingPeriod],
	appointments: Iterable[Appointment],
	services: Iterable[Service],
	service_duration_minutes: int,
	settings: Optional[SchedulingSettings] = None,
	now: Optional[datetime] = None
) -> bool:
	"""
	True si todos los periodos del día, cada uno por separado, quedan sin
	slots disponibles. Un día sin periodos no está "full" (está cerrado).
	"""
	settings = resolve_settings(settings)
	target_date = to_date(target_date)
	day_periods = get_periods_for_date(target_date, periods)

	if not day_periods:
		return False

	confirmed = confirmed_appointments_for_date(list(appointments), target_date)
	services = list(services)
	now = now or settings.now()

	for period in day_periods:
		slots = generate_time_slots(
			period,
			confirmed,
			services,
			service_duration_minutes,
			target_date=target_date,
			settings=settings,
			now=now
		)
		if any(slot.available for slot in slots):
			return False

	return True


def calculate_date_status(
	target_date: Union[date, str],
	periods: Iterable[WorkingPeriod],
	holidays: Iterable[Holiday],
	appointments: Iterable[Appointment],
	services: Iterable[Service],
	service_duration_minutes: int,
	mode: Union[AvailabilityMode, str] = AvailabilityMode.PUBLIC,
	settings: Optional[SchedulingSettings] = None,
	now: Optional[datetime] = None
) -> DateStatus:
	"""
	Estado de una fecha, evaluado en este orden:

	1. past: fecha anterior a hoy (siempre, en ambos modos)
	2. holiday: solo en modo PUBLIC
	3. no_periods: solo en modo PUBLIC
	4. full: si hay periodos y ninguno tiene slots disponibles
	5. available

	INTERNAL omite 2 y 3 para que el staff pueda agendar en cierres.
	"""
	settings = resolve_settings(settings)
	mode = AvailabilityMode(mode)
	target_date = to_date(target_date)
	now = now or settings.now()

	if target_date < now.date():
		return DateStatus.PAST

	if mode == AvailabilityMode.PUBLIC and find_holiday(target_date, holidays) is not None:
		return DateStatus.HOLIDAY

	periods = list(periods)
	day_periods = get_periods_for_date(target_date, periods)

	if not day_periods and mode == AvailabilityMode.PUBLIC:
		return DateStatus.NO_PERIODS

	if day_periods and is_day_fully_booked(
		target_date,
		day_periods,
		appointments,
		services,
		service_duration_minutes,
		settings=settings,
		now=now
	):
		return DateStatus.FULL

	return DateStatus.AVAILABLE


def is_date_available(
	target_date: Union[date, str],
	periods: Iterable[WorkingPeriod],
	holidays: Iterable[Holiday],
	settings: Optional[SchedulingSettings] = None,
	now: Optional[datetime] = None
) -> Dict[str, Any]:
	"""
	Chequeo básico sin citas (solo pasado, feriados y días sin periodos).

	Returns:
		dict: {"available": bool, "reason": str | None}
	"""
	settings = resolve_settings(settings)
	status = calculate_date_status(
		target_date,
		periods,
		holidays,
		[],
		[],
		settings.default_service_duration,
		settings=settings,
		now=now
	)

	return {
		"available": status == DateStatus.AVAILABLE,
		"reason": None if status == DateStatus.AVAILABLE else "Date is not available",
	}
