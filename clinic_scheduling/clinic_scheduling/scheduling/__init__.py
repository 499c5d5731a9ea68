"""
Scheduling Engine

Pure availability and booking-validation logic for the clinic:
- Value records and enums (models.py)
- Engine configuration (settings.py)
- Time helpers and clinic clock (time_utils.py)
- Holiday resolution (holidays.py)
- Working periods per weekday (periods.py)
- Overlap detection (overlap.py)
- Slot generation (slots.py)
- Period and date availability (availability.py)
- Booking calendar and suggestions (dates.py)
- Booking validation (validation.py)
- Frappe data provider (provider.py, the only module that imports frappe)
"""

from .availability import (
	aggregate_period,
	calculate_date_status,
	calculate_period_availability,
	is_date_available,
	is_day_fully_booked,
)
from .dates import generate_available_dates, suggest_next_available_date
from .holidays import find_holiday, is_holiday
from .models import (
	Appointment,
	AvailabilityMode,
	AvailableDate,
	AvailablePeriod,
	BookingValidation,
	DateStatus,
	Holiday,
	PeriodStatus,
	SchedulingContext,
	Service,
	TimeSlot,
	WorkingPeriod,
)
from .overlap import check_overlap, get_service_duration
from .periods import get_periods_for_date
from .settings import SchedulingSettings, get_max_booking_date
from .slots import (
	calculate_next_available_time,
	generate_time_slots,
	get_available_time_slots,
)
from .time_utils import (
	calculate_end_time,
	format_period_display,
	format_time_display,
	intervals_overlap,
	is_time_within_period,
	minutes_to_time,
	normalize_time,
	time_to_minutes,
)
from .validation import validate_booking

__all__ = [
	# Records
	"Appointment",
	"AvailabilityMode",
	"AvailableDate",
	"AvailablePeriod",
	"BookingValidation",
	"DateStatus",
	"Holiday",
	"PeriodStatus",
	"SchedulingContext",
	"SchedulingSettings",
	"Service",
	"TimeSlot",
	"WorkingPeriod",
	# Time
	"calculate_end_time",
	"format_period_display",
	"format_time_display",
	"intervals_overlap",
	"is_time_within_period",
	"minutes_to_time",
	"normalize_time",
	"time_to_minutes",
	# Engine
	"aggregate_period",
	"calculate_date_status",
	"calculate_next_available_time",
	"calculate_period_availability",
	"check_overlap",
	"find_holiday",
	"generate_available_dates",
	"generate_time_slots",
	"get_available_time_slots",
	"get_max_booking_date",
	"get_periods_for_date",
	"get_service_duration",
	"is_date_available",
	"is_day_fully_booked",
	"is_holiday",
	"suggest_next_available_date",
	"validate_booking",
]
