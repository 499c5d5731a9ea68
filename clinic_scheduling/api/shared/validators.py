"""
Booking Request Validators

Validation utilities for parameters received by the booking API.
"""

import re
import frappe
from frappe import _
from frappe.utils import cint

from clinic_scheduling.clinic_scheduling.scheduling.models import AvailabilityMode
from clinic_scheduling.clinic_scheduling.scheduling.provider import is_staff_user


def validate_date_string(date_str: str, field_name: str = "date") -> str:
    """
    Validate date string format (YYYY-MM-DD).

    Args:
        date_str: Date string to validate
        field_name: Name of field for error messages

    Returns:
        str: Validated date string

    Raises:
        frappe.ValidationError: If date format is invalid
    """
    if not date_str:
        frappe.throw(_("{0} is required").format(field_name), frappe.ValidationError)

    date_str = str(date_str).strip()

    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        frappe.throw(
            _("Invalid {0} format. Use YYYY-MM-DD").format(field_name), frappe.ValidationError
        )

    return date_str


def validate_time_string(time_str: str, field_name: str = "start_time") -> str:
    """
    Validate time string format (HH:MM or HH:MM:SS).

    Returns:
        str: Normalized HH:MM time string

    Raises:
        frappe.ValidationError: If time format is invalid
    """
    if not time_str:
        frappe.throw(_("{0} is required").format(field_name), frappe.ValidationError)

    time_str = str(time_str).strip()

    if not re.match(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$", time_str):
        frappe.throw(
            _("Invalid {0} format. Use HH:MM").format(field_name), frappe.ValidationError
        )

    return time_str[:5]


def validate_duration(duration, field_name: str = "duration") -> int:
    """
    Validate a service duration in minutes (1..1440).

    Raises:
        frappe.ValidationError: If duration is not a positive number of minutes
    """
    minutes = cint(duration)

    if minutes <= 0 or minutes > 24 * 60:
        frappe.throw(_("Invalid {0}").format(field_name), frappe.ValidationError)

    return minutes


def validate_mode(mode: str) -> AvailabilityMode:
    """
    Validate availability mode. INTERNAL requires the Clinic Staff role.

    Raises:
        frappe.ValidationError: If mode is unknown
        frappe.PermissionError: If a non-staff user requests INTERNAL mode
    """
    try:
        mode = AvailabilityMode(str(mode or "PUBLIC").upper())
    except ValueError:
        frappe.throw(_("Invalid mode. Use PUBLIC or INTERNAL"), frappe.ValidationError)

    if mode == AvailabilityMode.INTERNAL and not is_staff_user():
        frappe.throw(_("INTERNAL mode is restricted to clinic staff"), frappe.PermissionError)

    return mode


def validate_docname(name: str, field_name: str = "name") -> str:
    """
    Validate a document name (ID).

    Ensures the name is not too long and doesn't contain injection patterns.

    Raises:
        frappe.ValidationError: If name is invalid
    """
    if not name:
        frappe.throw(_("{0} is required").format(field_name), frappe.ValidationError)

    name = str(name).strip()

    if len(name) > 140:
        frappe.throw(_("{0} is too long").format(field_name), frappe.ValidationError)

    dangerous_patterns = [
        r"<script",
        r"javascript:",
        r"SELECT\s+",
        r"INSERT\s+",
        r"UPDATE\s+",
        r"DELETE\s+",
        r"DROP\s+",
        r"UNION\s+",
        r"--",
        r";",
    ]

    for pattern in dangerous_patterns:
        if re.search(pattern, name, re.IGNORECASE):
            frappe.throw(_("Invalid {0}").format(field_name), frappe.ValidationError)

    return name
