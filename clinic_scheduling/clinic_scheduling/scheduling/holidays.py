"""
Holiday Resolver

Decides whether a calendar date is a holiday. Holidays come in three shapes:
- Exact date
- Explicit date range (start_date .. end_date, inclusive)
- Recurring annual month/day range, possibly wrapping across New Year
"""

from datetime import date
from typing import Iterable, Optional, Tuple, Union

from .models import Holiday
from .time_utils import to_date


DEFAULT_HOLIDAY_NOTE = "Clinic is closed for holiday"


def _month_day_in_range(
	month_day: Tuple[int, int],
	start: Tuple[int, int],
	end: Tuple[int, int]
) -> bool:
	"""
	Compara solo (mes, día), independiente del año.

	Si el rango no cruza el año: start <= md <= end.
	Si cruza el año (p.ej. 20 dic -> 5 ene): md >= start OR md <= end.
	"""
	if start <= end:
		return start <= month_day <= end
	return month_day >= start or month_day <= end


def matches_holiday(target_date: date, holiday: Holiday) -> bool:
	# 1. Fecha exacta
	if holiday.date and target_date == holiday.date:
		return True

	# 2. Rango explícito (end_date por defecto = start_date)
	if holiday.start_date:
		end_date = holiday.end_date or holiday.start_date
		if holiday.start_date <= target_date <= end_date:
			return True

	# 3. Rango anual recurrente
	recurring = holiday.recurring_range
	if recurring:
		start, end = recurring
		if _month_day_in_range((target_date.month, target_date.day), start, end):
			return True

	return False


def find_holiday(
	target_date: Union[date, str],
	holidays: Iterable[Holiday]
) -> Optional[Holiday]:
	"""
	Devuelve el primer feriado que coincide con la fecha, o None.

	Gana el primero en el orden de la lista; no hay prioridad entre tipos.
	"""
	target_date = to_date(target_date)

	for holiday in holidays:
		if matches_holiday(target_date, holiday):
			return holiday

	return None


def is_holiday(target_date: Union[date, str], holidays: Iterable[Holiday]) -> bool:
	return find_holiday(target_date, holidays) is not None


def holiday_reason(holiday: Holiday) -> str:
	return holiday.note or DEFAULT_HOLIDAY_NOTE
