"""
Shared utilities for the Clinic Scheduling API.

Rate limiting and request-parameter validators used by the booking
endpoints.
"""

from .rate_limit import check_rate_limit, get_client_ip
from .validators import (
    validate_date_string,
    validate_docname,
    validate_duration,
    validate_mode,
    validate_time_string,
)

__all__ = [
    # Rate limiting
    "check_rate_limit",
    "get_client_ip",
    # Validators
    "validate_date_string",
    "validate_docname",
    "validate_duration",
    "validate_mode",
    "validate_time_string",
]
