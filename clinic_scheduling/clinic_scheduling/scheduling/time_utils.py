"""
Time Utilities

Pure helpers shared by the scheduling engine:
- Conversions between HH:MM strings and minute offsets
- Half-open interval overlap test
- 12-hour display formatting
- Clinic-local clock ("now" / "today") resolved with pytz
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Union

import pytz


logger = logging.getLogger(__name__)

TimeValue = Union[str, time, timedelta, None]
DateValue = Union[date, datetime, str]


def time_to_minutes(time_value: TimeValue) -> int:
	"""
	Convierte un tiempo a minutos desde medianoche.

	Valores vacíos o ilegibles degradan a 0 en vez de fallar.

	Examples:
		"09:30" -> 570, "09:30:00" -> 570, timedelta(hours=9) -> 540
	"""
	if not time_value and not isinstance(time_value, time):
		return 0

	if isinstance(time_value, timedelta):
		return int(time_value.total_seconds() // 60)

	if isinstance(time_value, time):
		return time_value.hour * 60 + time_value.minute

	parts = str(time_value).strip().split(":")
	try:
		hours = int(parts[0])
	except ValueError:
		logger.debug("Unparseable time %r, using 0 hours", time_value)
		hours = 0
	try:
		minutes = int(parts[1]) if len(parts) > 1 else 0
	except ValueError:
		logger.debug("Unparseable time %r, using 0 minutes", time_value)
		minutes = 0

	return hours * 60 + minutes


def minutes_to_time(total_minutes: int) -> str:
	"""
	Convierte minutos desde medianoche a "HH:MM".

	No aplica módulo: 1500 minutos devuelve "25:00" (no se soporta el
	cruce de medianoche).
	"""
	hours, minutes = divmod(int(total_minutes), 60)
	return f"{hours:02d}:{minutes:02d}"


def normalize_time(time_value: TimeValue) -> str:
	"""Recorta "HH:MM:SS" a "HH:MM"; acepta time y timedelta."""
	if time_value is None or time_value == "":
		return ""
	if isinstance(time_value, (time, timedelta)):
		return minutes_to_time(time_to_minutes(time_value))
	return str(time_value).strip()[:5]


def calculate_end_time(start_time: TimeValue, duration_minutes: int) -> str:
	return minutes_to_time(time_to_minutes(start_time) + duration_minutes)


def intervals_overlap(
	start_a: TimeValue,
	end_a: TimeValue,
	start_b: TimeValue,
	end_b: TimeValue
) -> bool:
	"""
	Intervalos semiabiertos [start, end): se solapan si
	start_a < end_b AND start_b < end_a.

	Extremos que se tocan (10:00 fin / 10:00 inicio) no se solapan.
	"""
	return (
		time_to_minutes(start_a) < time_to_minutes(end_b)
		and time_to_minutes(start_b) < time_to_minutes(end_a)
	)


def is_time_within_period(time_value: TimeValue, period: Any) -> bool:
	"""Inclusivo en el inicio del periodo, exclusivo en el fin."""
	minutes = time_to_minutes(time_value)
	return time_to_minutes(period.start_time) <= minutes < time_to_minutes(period.end_time)


def format_time_display(time_value: TimeValue) -> str:
	"""
	Formatea "HH:MM" (24 h) como "h:mm AM/PM". Solo presentación.

	Examples:
		"09:05" -> "9:05 AM", "12:00" -> "12:00 PM", "00:30" -> "12:30 AM"
	"""
	if not time_value and not isinstance(time_value, time):
		return ""

	total = time_to_minutes(time_value)
	hours, minutes = divmod(total, 60)
	suffix = "PM" if hours >= 12 else "AM"
	display_hours = hours % 12 or 12
	return f"{display_hours}:{minutes:02d} {suffix}"


def format_period_display(period: Any) -> str:
	return f"{period.name} ({normalize_time(period.start_time)} – {normalize_time(period.end_time)})"


def to_date(value: DateValue) -> date:
	"""
	Convierte date, datetime o string YYYY-MM-DD a date.

	Raises:
		ValueError: si el string no tiene formato ISO
	"""
	if isinstance(value, datetime):
		return value.date()
	if isinstance(value, date):
		return value
	return date.fromisoformat(str(value).strip()[:10])


def day_of_week(target_date: DateValue) -> int:
	"""Día de la semana con 0 = domingo ... 6 = sábado."""
	return (to_date(target_date).weekday() + 1) % 7


def get_timezone(tz_name: Optional[str]) -> Optional[pytz.BaseTzInfo]:
	"""
	Resuelve un nombre IANA con pytz.

	Returns:
		tzinfo, o None si no hay timezone configurado (hora local del
		servidor). Un nombre inválido cae a UTC.
	"""
	if not tz_name:
		return None

	try:
		return pytz.timezone(tz_name)
	except pytz.UnknownTimeZoneError:
		logger.warning("Invalid timezone '%s', using UTC", tz_name)
		return pytz.UTC


def get_now(tz_name: Optional[str] = None) -> datetime:
	"""
	Hora actual de la clínica como datetime naive.

	Args:
		tz_name: timezone IANA de la clínica (None = hora local)
	"""
	tz = get_timezone(tz_name)
	if tz is None:
		return datetime.now()
	return datetime.now(tz).replace(tzinfo=None)


def minutes_since_midnight(moment: datetime) -> int:
	return moment.hour * 60 + moment.minute
