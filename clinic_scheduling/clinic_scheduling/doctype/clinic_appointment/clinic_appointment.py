# Copyright (c) 2026, Clinic Scheduling Contributors and contributors
# For license information, please see license.txt

"""
Clinic Appointment DocType

Write sink for bookings. Runs the booking validator before saving a
confirmed appointment and performs the authoritative overlap re-check
under a row lock.
"""

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import getdate

from clinic_scheduling.clinic_scheduling.exceptions import SlotUnavailableError
from clinic_scheduling.clinic_scheduling.scheduling.models import Appointment, AvailabilityMode
from clinic_scheduling.clinic_scheduling.scheduling.overlap import (
	check_overlap,
	get_service_duration,
)
from clinic_scheduling.clinic_scheduling.scheduling.provider import (
	get_logger,
	is_staff_user,
	load_context,
	load_settings,
)
from clinic_scheduling.clinic_scheduling.scheduling.settings import get_max_booking_date
from clinic_scheduling.clinic_scheduling.scheduling.time_utils import (
	calculate_end_time,
	normalize_time,
)
from clinic_scheduling.clinic_scheduling.scheduling.validation import validate_booking


# Campos que, al cambiar, obligan a re-validar la reserva
BOOKING_FIELDS = ("appointment_date", "start_time", "service", "status", "working_period")


class ClinicAppointment(Document):
	"""
	Clinic Appointment with scheduling validation.

	Flujo:
	1. Se calcula end_time con la duración del servicio
	2. Si la cita queda Confirmed (nueva o con cambios de fecha, hora,
	   servicio o status), se validan las reglas de cierre con el motor
	3. El overlap se verifica solo bajo bloqueo de las citas confirmadas del
	   día (SELECT ... FOR UPDATE); un conflicto es SlotUnavailableError
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.

		Ejecuta:
		1. Validar campos requeridos
		2. Calcular end_time
		3. Validar reglas de reserva (solo Confirmed con cambios de reserva)
		4. Verificar overlap con bloqueo (idem)
		"""
		self._validate_required_fields()
		settings = load_settings()
		context = load_context(self.appointment_date)

		self._calculate_end_time(context, settings)

		if self.status != "Confirmed" or not self._booking_changed():
			return

		self._validate_booking_rules(context, settings)
		self._validate_no_overlap_locked(context, settings)

	# ===== VALIDATION METHODS =====

	def _validate_required_fields(self) -> None:
		"""Valida campos requeridos."""
		if not self.appointment_date:
			frappe.throw(_("Appointment Date is required"))

		if not self.start_time:
			frappe.throw(_("Start Time is required"))

		if not self.status:
			self.status = "Pending"

	def _calculate_end_time(self, context, settings) -> None:
		duration = get_service_duration(self.service, context.services, settings)
		self.end_time = calculate_end_time(self.start_time, duration)

	def _booking_changed(self) -> bool:
		"""
		True si la cita es nueva o cambió algún campo de la reserva. Editar
		notas de una cita ya pasada no debe re-validar la reserva.
		"""
		if self.is_new():
			return True
		return any(self.has_value_changed(fieldname) for fieldname in BOOKING_FIELDS)

	def get_mode(self) -> AvailabilityMode:
		"""
		Modo de la reserva:
		- flags.booking_mode si lo fijó la API (ya validado contra el rol)
		- INTERNAL si el staff agenda desde el desk (flag o rol)
		- PUBLIC en cualquier otro caso
		"""
		if self.flags.booking_mode:
			return AvailabilityMode(self.flags.booking_mode)
		if self.flags.internal_booking or is_staff_user():
			return AvailabilityMode.INTERNAL
		return AvailabilityMode.PUBLIC

	def get_duration(self, context, settings) -> int:
		return get_service_duration(self.service, context.services, settings)

	def _validate_booking_rules(self, context, settings) -> None:
		"""
		Valida las reglas de cierre con el motor (fecha pasada, fecha máxima,
		feriado, horario). Las citas no se pasan al validador: el overlap lo
		decide _validate_no_overlap_locked, para que un horario tomado sea
		siempre SlotUnavailableError.
		"""
		now = settings.now()
		validation = validate_booking(
			getdate(self.appointment_date),
			normalize_time(self.start_time),
			self.get_duration(context, settings),
			context.periods,
			context.holidays,
			[],
			context.services,
			mode=self.get_mode(),
			period_id=self.working_period or None,
			settings=settings,
			now=now,
			max_date=get_max_booking_date(settings, now.date())
		)

		if not validation.is_valid:
			frappe.throw(validation.errors[0], title=_("Booking not allowed"))

	def _validate_no_overlap_locked(self, context, settings) -> None:
		"""
		Verificación autoritativa de overlaps al escribir.

		Bloquea las citas confirmadas del día hasta el commit; dos reservas
		concurrentes del mismo horario no pueden pasar ambas. Requiere
		índice en appointment_date para que el bloqueo cubra inserciones.
		"""
		rows = frappe.db.sql("""
			SELECT name, appointment_date, start_time, end_time, service, status
			FROM `tabClinic Appointment`
			WHERE appointment_date = %s
			AND status = 'Confirmed'
			AND name != %s
			FOR UPDATE
		""", (getdate(self.appointment_date), self.name or ""), as_dict=True)

		locked = [Appointment.from_dict(row) for row in rows]

		overlap_result = check_overlap(
			normalize_time(self.start_time),
			self.get_duration(context, settings),
			locked,
			context.services,
			settings
		)

		if overlap_result["has_overlap"]:
			conflict = overlap_result["overlapping_appointments"][0]
			get_logger().info(
				f"Slot taken for {self.appointment_date} {normalize_time(self.start_time)} "
				f"(conflicts with {conflict.id})"
			)
			frappe.throw(
				_("This time slot is no longer available (booked at {0}). Please pick another time.").format(
					conflict.start_time
				),
				SlotUnavailableError,
				title=_("Slot unavailable")
			)
