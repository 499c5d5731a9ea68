"""
Scheduling Settings

Tunable constants of the engine, with the defaults used when a clinic has
not configured a value.
"""

from dataclasses import dataclass, fields
from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional

from .time_utils import get_now


DEFAULT_BOOKING_RANGE_DAYS = 21
DEFAULT_SERVICE_DURATION = 30
SLOT_INCREMENT_MINUTES = 15


@dataclass(frozen=True)
class SchedulingSettings:
	"""
	Configuración del motor de disponibilidad.

	Attributes:
		slot_increment_minutes: paso fijo entre inicios candidatos; no
			depende de la duración del servicio
		default_service_duration: duración usada si el servicio de una cita
			no existe o no se indica
		booking_range_days: horizonte del calendario de reservas
		booking_range_enabled: si es False, las reservas públicas no tienen
			fecha máxima
		timezone: timezone IANA de la clínica (None = hora local del servidor)
	"""

	slot_increment_minutes: int = SLOT_INCREMENT_MINUTES
	default_service_duration: int = DEFAULT_SERVICE_DURATION
	booking_range_days: int = DEFAULT_BOOKING_RANGE_DAYS
	booking_range_enabled: bool = True
	timezone: Optional[str] = None

	def __post_init__(self) -> None:
		if self.slot_increment_minutes <= 0:
			raise ValueError(
				f"slot_increment_minutes must be positive, got {self.slot_increment_minutes}"
			)
		if self.default_service_duration <= 0:
			raise ValueError(
				f"default_service_duration must be positive, got {self.default_service_duration}"
			)
		if self.booking_range_days < 0:
			raise ValueError(
				f"booking_range_days cannot be negative, got {self.booking_range_days}"
			)

	@classmethod
	def from_dict(cls, values: Optional[Dict[str, Any]]) -> "SchedulingSettings":
		"""
		Construye settings desde un registro (p.ej. Clinic Settings).

		Los valores vacíos se ignoran para que apliquen los defaults.
		"""
		if not values:
			return cls()

		kwargs = {}
		for f in fields(cls):
			value = values.get(f.name)
			if value is None or value == "":
				continue
			if f.name == "booking_range_enabled":
				if isinstance(value, str):
					kwargs[f.name] = value.strip().lower() in ("1", "true", "yes")
				else:
					kwargs[f.name] = bool(value)
			elif f.name == "timezone":
				kwargs[f.name] = str(value)
			else:
				kwargs[f.name] = int(value)

		return cls(**kwargs)

	def now(self) -> datetime:
		return get_now(self.timezone)

	def today(self) -> date:
		return self.now().date()


def resolve_settings(settings: Optional[SchedulingSettings]) -> SchedulingSettings:
	return settings if settings is not None else SchedulingSettings()


def get_max_booking_date(settings: SchedulingSettings, today: date) -> Optional[date]:
	"""Última fecha reservable públicamente, o None si el rango está desactivado."""
	if not settings.booking_range_enabled:
		return None
	return today + timedelta(days=settings.booking_range_days)
