"""
Clinic Scheduling API

Structure:
    api/
    ├── __init__.py              # This file
    ├── booking_api.py           # Booking calendar, slots, validation, creation
    └── shared/                  # Shared utilities
        ├── rate_limit.py        # Rate limiting by client IP
        └── validators.py        # Request-parameter validators

Usage:
    frappe.call("clinic_scheduling.api.booking_api.get_available_dates", ...)
"""

from . import booking_api
from . import shared

__all__ = [
	"booking_api",
	"shared",
]
