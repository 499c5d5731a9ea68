"""
Working-Period Lookup

Maps a calendar date to the working periods configured for its weekday.
"""

from datetime import date
from typing import Iterable, List, Optional, Union

from .models import WorkingPeriod
from .time_utils import day_of_week, is_time_within_period, time_to_minutes


def get_periods_for_date(
	target_date: Union[date, str],
	periods: Iterable[WorkingPeriod]
) -> List[WorkingPeriod]:
	"""
	Periodos del día de la semana de la fecha, ordenados por start_time.

	Un día sin periodos está cerrado, sea o no feriado.
	"""
	weekday = day_of_week(target_date)
	return sorted(
		(p for p in periods if p.day_of_week == weekday),
		key=lambda p: time_to_minutes(p.start_time)
	)


def find_period(
	day_periods: Iterable[WorkingPeriod],
	start_time: str,
	period_id: Optional[str] = None
) -> Optional[WorkingPeriod]:
	"""
	Resuelve el periodo destino de una reserva.

	Con period_id explícito busca por id; si no, el primer periodo que
	contiene start_time.
	"""
	for period in day_periods:
		if period_id:
			if period.id == period_id:
				return period
		elif is_time_within_period(start_time, period):
			return period

	return None
