"""
Overlap Detection Service

Detects conflicts between a proposed [start, start + duration) interval and
the confirmed appointments of the same day. Each existing appointment's end
is computed from its own service duration, falling back to the default
duration when the service is unknown.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .models import Appointment, Service
from .settings import SchedulingSettings, resolve_settings
from .time_utils import calculate_end_time, intervals_overlap


logger = logging.getLogger(__name__)


def get_service_duration(
	service_id: Optional[str],
	services: Iterable[Service],
	settings: Optional[SchedulingSettings] = None
) -> int:
	"""
	Duración en minutos del servicio; default si no existe o no se indica.
	"""
	settings = resolve_settings(settings)

	if not service_id:
		return settings.default_service_duration

	for service in services:
		if service.id == service_id:
			if service.duration and service.duration > 0:
				return service.duration
			break

	logger.debug(
		"Unknown or zero-length service %s, using default duration %s",
		service_id, settings.default_service_duration
	)
	return settings.default_service_duration


def appointment_end_time(
	appointment: Appointment,
	services: Iterable[Service],
	settings: Optional[SchedulingSettings] = None
) -> str:
	"""Fin efectivo de una cita según la duración de su propio servicio."""
	duration = get_service_duration(appointment.service_id, services, settings)
	return calculate_end_time(appointment.start_time, duration)


def check_overlap(
	start_time: str,
	duration_minutes: int,
	appointments: Iterable[Appointment],
	services: Iterable[Service],
	settings: Optional[SchedulingSettings] = None,
	exclude_appointment: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Detecta overlaps con citas confirmadas.

	Args:
		start_time: inicio propuesto (HH:MM)
		duration_minutes: duración propuesta
		appointments: citas del mismo día (se ignoran las no confirmadas)
		services: catálogo de servicios para calcular el fin de cada cita
		settings: configuración (duración por defecto)
		exclude_appointment: id de cita a excluir (para ediciones)

	Returns:
		dict: {
			"has_overlap": bool,
			"overlapping_appointments": [list of Appointment],
		}
	"""
	services = list(services)
	proposed_end = calculate_end_time(start_time, duration_minutes)

	overlapping = []
	for apt in appointments:
		if not apt.is_confirmed:
			continue
		if exclude_appointment and apt.id == exclude_appointment:
			continue

		apt_end = appointment_end_time(apt, services, settings)
		if intervals_overlap(start_time, proposed_end, apt.start_time, apt_end):
			overlapping.append(apt)

	return {
		"has_overlap": bool(overlapping),
		"overlapping_appointments": overlapping,
	}


def find_conflicting_appointment(
	start_time: str,
	duration_minutes: int,
	appointments: Iterable[Appointment],
	services: Iterable[Service],
	settings: Optional[SchedulingSettings] = None,
	exclude_appointment: Optional[str] = None
) -> Optional[Appointment]:
	"""Primera cita confirmada que se solapa, o None."""
	result = check_overlap(
		start_time,
		duration_minutes,
		appointments,
		services,
		settings,
		exclude_appointment=exclude_appointment
	)
	overlapping: List[Appointment] = result["overlapping_appointments"]
	return overlapping[0] if overlapping else None
