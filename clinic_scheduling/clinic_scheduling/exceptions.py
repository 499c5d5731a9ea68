"""
Clinic Scheduling Exceptions

Write-layer conditions raised by the DocType controllers.
"""

import frappe


class SlotUnavailableError(frappe.ValidationError):
	"""
	El horario fue tomado por otra cita confirmada entre la consulta de
	disponibilidad y la escritura. Es recuperable: el usuario debe elegir
	otro horario.
	"""
	pass
