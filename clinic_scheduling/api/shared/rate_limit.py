"""
Rate Limiting for Public Booking APIs

Counts requests per client IP in Frappe's cache (Redis).
"""

import frappe
from frappe import _
from frappe.utils import cint


def check_rate_limit(action: str, limit: int = 10, seconds: int = 60) -> None:
    """
    Check rate limit for an action by IP address.

    Args:
        action: Identifier for the action being rate limited
        limit: Maximum number of requests allowed
        seconds: Time window in seconds

    Raises:
        frappe.TooManyRequestsError: If rate limit exceeded
    """
    ip = get_client_ip()
    cache_key = f"rate_limit:clinic_scheduling:{action}:{ip}"

    current = cint(frappe.cache.get_value(cache_key) or 0)

    if current >= limit:
        frappe.logger("clinic_scheduling").warning(
            f"Rate limit exceeded - IP: {ip}, Action: {action}, Limit: {limit}/{seconds}s"
        )
        frappe.throw(
            _("Too many requests. Please wait a moment and try again."),
            frappe.TooManyRequestsError
        )

    frappe.cache.set_value(cache_key, current + 1, expires_in_sec=seconds)


def get_client_ip() -> str:
    """
    Get the real client IP address, handling proxies.

    Returns:
        str: Client IP address
    """
    if not getattr(frappe.local, "request", None):
        return "local"

    forwarded_for = frappe.request.headers.get("X-Forwarded-For", "")
    if forwarded_for:
        # X-Forwarded-For can contain multiple IPs, take the first one
        return forwarded_for.split(",")[0].strip()

    real_ip = frappe.request.headers.get("X-Real-IP", "")
    if real_ip:
        return real_ip.strip()

    return frappe.request.remote_addr or "unknown"
