"""
Scheduling Value Records

Immutable records consumed and produced by the scheduling engine:
- Base records supplied by the data provider (WorkingPeriod, Holiday,
  Service, Appointment)
- Derived records computed on every call (AvailableDate, AvailablePeriod,
  TimeSlot, BookingValidation)
- Enums for availability mode and statuses
"""

import datetime
from dataclasses import dataclass, field, asdict
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .time_utils import normalize_time, to_date


CONFIRMED = "confirmed"

HOLIDAY_TYPES = ("holiday", "closed", "recurring_annual", "long_holiday")
RECURRING_ANNUAL = "recurring_annual"


class AvailabilityMode(str, Enum):
	"""PUBLIC aplica cierres (feriados, días sin periodos); INTERNAL no."""

	PUBLIC = "PUBLIC"
	INTERNAL = "INTERNAL"


class DateStatus(str, Enum):
	AVAILABLE = "available"
	HOLIDAY = "holiday"
	NO_PERIODS = "no_periods"
	PAST = "past"
	FULL = "full"


class PeriodStatus(str, Enum):
	AVAILABLE = "available"
	FULL = "full"
	CLOSED = "closed"


def _get_field(record: Any, fieldname: str, default: Any = None) -> Any:
	"""
	Lee un campo desde un dict o un documento Frappe.

	Args:
		record: dict, frappe._dict o Document
		fieldname: nombre del campo
		default: valor si el campo no existe o está vacío

	Returns:
		valor del campo o default
	"""
	if isinstance(record, dict):
		value = record.get(fieldname)
	else:
		value = getattr(record, fieldname, None)

	return default if value is None else value


def _optional_int(value: Any) -> Optional[int]:
	if value in (None, ""):
		return None
	return int(value)


@dataclass(frozen=True)
class WorkingPeriod:
	"""Bloque de trabajo con nombre en un día de la semana (0 = domingo)."""

	id: str
	name: str
	start_time: str
	end_time: str
	day_of_week: int

	@classmethod
	def from_dict(cls, record: Any) -> "WorkingPeriod":
		return cls(
			id=str(_get_field(record, "id") or _get_field(record, "name", "")),
			name=_get_field(record, "period_name") or _get_field(record, "name", ""),
			start_time=normalize_time(_get_field(record, "start_time", "")),
			end_time=normalize_time(_get_field(record, "end_time", "")),
			day_of_week=int(_get_field(record, "day_of_week", 0)),
		)

	def as_dict(self) -> Dict[str, Any]:
		return asdict(self)


@dataclass(frozen=True)
class Holiday:
	"""
	Feriado en una de tres formas excluyentes:
	- fecha exacta (date)
	- rango explícito (start_date .. end_date)
	- rango anual recurrente por mes/día (type = "recurring_annual")
	"""

	id: str
	date: Optional[datetime.date] = None
	type: str = "holiday"
	note: Optional[str] = None
	start_date: Optional[datetime.date] = None
	end_date: Optional[datetime.date] = None
	recurring_start_month: Optional[int] = None
	recurring_start_day: Optional[int] = None
	recurring_end_month: Optional[int] = None
	recurring_end_day: Optional[int] = None

	@property
	def is_recurring(self) -> bool:
		return self.type == RECURRING_ANNUAL and all((
			self.recurring_start_month,
			self.recurring_start_day,
			self.recurring_end_month,
			self.recurring_end_day,
		))

	@property
	def recurring_range(self) -> Optional[Tuple[Tuple[int, int], Tuple[int, int]]]:
		if not self.is_recurring:
			return None
		return (
			(self.recurring_start_month, self.recurring_start_day),
			(self.recurring_end_month, self.recurring_end_day),
		)

	@classmethod
	def from_dict(cls, record: Any) -> "Holiday":
		def optional_date(fieldname: str) -> Optional[date]:
			value = _get_field(record, fieldname)
			return to_date(value) if value else None

		holiday_date = _get_field(record, "holiday_date") or _get_field(record, "date")

		return cls(
			id=str(_get_field(record, "id") or _get_field(record, "name", "")),
			date=to_date(holiday_date) if holiday_date else None,
			type=_get_field(record, "holiday_type") or _get_field(record, "type", "holiday"),
			note=_get_field(record, "note"),
			start_date=optional_date("start_date"),
			end_date=optional_date("end_date"),
			recurring_start_month=_optional_int(_get_field(record, "recurring_start_month")),
			recurring_start_day=_optional_int(_get_field(record, "recurring_start_day")),
			recurring_end_month=_optional_int(_get_field(record, "recurring_end_month")),
			recurring_end_day=_optional_int(_get_field(record, "recurring_end_day")),
		)


@dataclass(frozen=True)
class Service:
	id: str
	name: str
	duration: int
	price: Optional[float] = None

	@classmethod
	def from_dict(cls, record: Any) -> "Service":
		price = _get_field(record, "price")
		return cls(
			id=str(_get_field(record, "id") or _get_field(record, "name", "")),
			name=_get_field(record, "service_name") or _get_field(record, "name", ""),
			duration=int(_get_field(record, "duration", 0)),
			price=float(price) if price not in (None, "") else None,
		)


@dataclass(frozen=True)
class Appointment:
	"""
	Cita existente. Solo las citas con status "confirmed" bloquean horarios;
	pending, postponed, cancelled, completed y no_show se ignoran.
	"""

	id: str
	appointment_date: date
	start_time: str
	end_time: str = ""
	service_id: Optional[str] = None
	status: str = CONFIRMED

	@property
	def is_confirmed(self) -> bool:
		return self.status == CONFIRMED

	@classmethod
	def from_dict(cls, record: Any) -> "Appointment":
		service_id = _get_field(record, "service_id") or _get_field(record, "service")
		return cls(
			id=str(_get_field(record, "id") or _get_field(record, "name", "")),
			appointment_date=to_date(_get_field(record, "appointment_date")),
			start_time=normalize_time(_get_field(record, "start_time", "")),
			end_time=normalize_time(_get_field(record, "end_time", "")),
			service_id=str(service_id) if service_id else None,
			status=str(_get_field(record, "status", CONFIRMED)).lower(),
		)


@dataclass(frozen=True)
class TimeSlot:
	time: str
	available: bool
	label: str = ""
	reason: Optional[str] = None

	def as_dict(self) -> Dict[str, Any]:
		return asdict(self)


@dataclass(frozen=True)
class AvailablePeriod:
	period: WorkingPeriod
	status: PeriodStatus
	available_slots: int
	next_available_time: Optional[str] = None

	def as_dict(self) -> Dict[str, Any]:
		return {
			"period": self.period.as_dict(),
			"status": self.status.value,
			"available_slots": self.available_slots,
			"next_available_time": self.next_available_time,
		}


@dataclass(frozen=True)
class AvailableDate:
	date: date
	label: str
	day_of_week: int
	status: DateStatus
	reason: Optional[str] = None

	@property
	def is_available(self) -> bool:
		return self.status == DateStatus.AVAILABLE

	def as_dict(self) -> Dict[str, Any]:
		return {
			"date": self.date.strftime("%Y-%m-%d"),
			"label": self.label,
			"day_of_week": self.day_of_week,
			"status": self.status.value,
			"reason": self.reason,
		}


@dataclass(frozen=True)
class BookingValidation:
	is_valid: bool
	errors: List[str] = field(default_factory=list)

	@classmethod
	def ok(cls) -> "BookingValidation":
		return cls(is_valid=True, errors=[])

	@classmethod
	def reject(cls, reason: str) -> "BookingValidation":
		return cls(is_valid=False, errors=[reason])

	def as_dict(self) -> Dict[str, Any]:
		return {"is_valid": self.is_valid, "errors": list(self.errors)}


@dataclass(frozen=True)
class SchedulingContext:
	"""
	Snapshot inmutable de los datos base que el motor consulta.

	El proveedor de datos lo construye por llamada; el motor nunca lo
	modifica ni lo cachea.
	"""

	periods: Tuple[WorkingPeriod, ...] = ()
	holidays: Tuple[Holiday, ...] = ()
	services: Tuple[Service, ...] = ()
	appointments: Tuple[Appointment, ...] = ()

	@classmethod
	def build(
		cls,
		periods: Optional[List[Any]] = None,
		holidays: Optional[List[Any]] = None,
		services: Optional[List[Any]] = None,
		appointments: Optional[List[Any]] = None
	) -> "SchedulingContext":
		"""Construye el contexto aceptando records o dicts/documentos."""
		return cls(
			periods=tuple(_coerce(WorkingPeriod, periods)),
			holidays=tuple(_coerce(Holiday, holidays)),
			services=tuple(_coerce(Service, services)),
			appointments=tuple(_coerce(Appointment, appointments)),
		)

	def confirmed_for_date(self, target_date: Union[date, str]) -> List[Appointment]:
		return confirmed_appointments_for_date(self.appointments, target_date)


def _coerce(record_cls: Any, records: Optional[List[Any]]) -> List[Any]:
	if not records:
		return []
	return [r if isinstance(r, record_cls) else record_cls.from_dict(r) for r in records]


def confirmed_appointments_for_date(
	appointments: List[Appointment],
	target_date: Union[date, str]
) -> List[Appointment]:
	"""Filtra las citas confirmadas de una fecha."""
	target_date = to_date(target_date)
	return [
		apt for apt in appointments
		if apt.is_confirmed and to_date(apt.appointment_date) == target_date
	]
