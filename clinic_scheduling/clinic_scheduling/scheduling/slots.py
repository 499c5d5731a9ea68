"""
Slot Generation Service

Generates fixed-increment candidate start times inside a working period and
marks each one available or blocked, considering:
- Required service duration (the slot must end inside the period)
- Confirmed appointments of the same day
- Same-day wall-clock time (no past or same-minute bookings today)
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from .models import Appointment, Service, TimeSlot, WorkingPeriod
from .overlap import appointment_end_time
from .settings import SchedulingSettings, resolve_settings
from .time_utils import (
	format_time_display,
	intervals_overlap,
	minutes_since_midnight,
	minutes_to_time,
	time_to_minutes,
	to_date,
)


BOOKED_REASON = "This time is already booked"


def generate_time_slots(
	period: WorkingPeriod,
	appointments: Iterable[Appointment],
	services: Iterable[Service],
	service_duration_minutes: int,
	target_date: Optional[Union[date, str]] = None,
	settings: Optional[SchedulingSettings] = None,
	now: Optional[datetime] = None
) -> List[TimeSlot]:
	"""
	Genera los slots candidatos de un periodo.

	Args:
		period: periodo de trabajo
		appointments: citas del día (solo cuentan las confirmadas)
		services: catálogo para calcular el fin de cada cita existente
		service_duration_minutes: duración del servicio a reservar
		target_date: fecha del periodo; si es hoy se omiten horas pasadas
		settings: configuración (incremento, duración por defecto)
		now: hora actual de la clínica (default: settings.now())

	Returns:
		list[TimeSlot]: ordenados por hora ascendente

	Algoritmo:
		1. Recorrer desde period.start_time hasta period.end_time - duración,
		   en pasos de slot_increment_minutes
		2. Si la fecha es hoy, omitir candidatos <= hora actual
		3. Para cada candidato, verificar overlap contra cada cita confirmada
	"""
	settings = resolve_settings(settings)
	services = list(services)

	# Fin efectivo de cada cita confirmada, calculado una sola vez
	booked = [
		(apt.start_time, appointment_end_time(apt, services, settings))
		for apt in appointments
		if apt.is_confirmed
	]

	now_minutes = -1
	if target_date is not None:
		now = now or settings.now()
		if to_date(target_date) == now.date():
			now_minutes = minutes_since_midnight(now)

	period_start = time_to_minutes(period.start_time)
	period_end = time_to_minutes(period.end_time)

	slots = []
	current = period_start

	while current + service_duration_minutes <= period_end:
		if current <= now_minutes:
			current += settings.slot_increment_minutes
			continue

		slot_time = minutes_to_time(current)
		slot_end = minutes_to_time(current + service_duration_minutes)

		has_conflict = any(
			intervals_overlap(slot_time, slot_end, apt_start, apt_end)
			for apt_start, apt_end in booked
		)

		slots.append(TimeSlot(
			time=slot_time,
			available=not has_conflict,
			label=format_time_display(slot_time),
			reason=BOOKED_REASON if has_conflict else None,
		))

		current += settings.slot_increment_minutes

	return slots


def get_available_time_slots(
	period: WorkingPeriod,
	appointments: Iterable[Appointment],
	services: Iterable[Service],
	service_duration_minutes: int,
	target_date: Optional[Union[date, str]] = None,
	settings: Optional[SchedulingSettings] = None,
	now: Optional[datetime] = None
) -> List[str]:
	"""Solo las horas (HH:MM) de los slots disponibles."""
	slots = generate_time_slots(
		period, appointments, services, service_duration_minutes,
		target_date=target_date, settings=settings, now=now
	)
	return [slot.time for slot in slots if slot.available]


def calculate_next_available_time(
	period: WorkingPeriod,
	appointments: Iterable[Appointment],
	services: Iterable[Service],
	service_duration_minutes: int,
	target_date: Optional[Union[date, str]] = None,
	settings: Optional[SchedulingSettings] = None,
	now: Optional[datetime] = None
) -> Optional[str]:
	"""Primer slot disponible del periodo, o None."""
	available = get_available_time_slots(
		period, appointments, services, service_duration_minutes,
		target_date=target_date, settings=settings, now=now
	)
	return available[0] if available else None
