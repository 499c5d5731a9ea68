app_name = "clinic_scheduling"
app_title = "Clinic Scheduling"
app_publisher = "Clinic Scheduling Contributors"
app_description = "Disponibilidad de agenda y validacion de reservas para clinicas"
app_email = "dev@clinic-scheduling.local"
app_license = "mit"

# Apps
# ------------------

# required_apps = []

# Includes in <head>
# ------------------

# include js, css files in header of web template
# web_include_css = "/assets/clinic_scheduling/css/clinic_scheduling.css"
# web_include_js = "/assets/clinic_scheduling/js/booking.js"

# include js in doctype views
# doctype_js = {"Clinic Appointment" : "public/js/clinic_appointment.js"}

# Home Pages
# ----------

# application home page (will override Website Settings)
# home_page = "book"

# Installation
# ------------

# before_install = "clinic_scheduling.install.before_install"
# after_install = "clinic_scheduling.install.after_install"

# Permissions
# -----------
# Permissions evaluated in scripted ways

# permission_query_conditions = {
# 	"Clinic Appointment": "clinic_scheduling.permissions.get_appointment_query_conditions",
# }

# Document Events
# ---------------
# Las reglas de reserva viven en el controlador de Clinic Appointment;
# no hace falta doc_events.

# doc_events = {
# 	"Clinic Appointment": {
# 		"on_update": "method",
# 	}
# }

# Scheduled Tasks
# ---------------
# La disponibilidad se calcula en cada consulta; no hay tareas programadas.

# scheduler_events = {
# 	"daily": [
# 		"clinic_scheduling.tasks.daily"
# 	],
# }

# Testing
# -------

# before_tests = "clinic_scheduling.install.before_tests"

# Overriding Methods
# ------------------------------
#
# override_whitelisted_methods = {
# 	"frappe.desk.doctype.event.event.get_events": "clinic_scheduling.event.get_events"
# }
