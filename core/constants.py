# core/constants.py

# --- Roles ---
ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"

ROLE_CHOICES = (
    (ROLE_STUDENT, "Student"),
    (ROLE_ADMIN, "Admin"),
)

# --- Client views (redirect targets returned to the front-end router) ---
VIEW_LOGIN = "/login"
VIEW_DASHBOARD = "/dashboard"
VIEW_ADMIN = "/admin"

# --- Point awards ---
POINT_PRESETS = (5, 10, 20, -5)  # quick-award buttons; any signed int is accepted

POINT_METHOD_QR_SCAN = "qr_scan"

POINT_METHOD_CHOICES = (
    (POINT_METHOD_QR_SCAN, "QR scan"),
)

# --- Accounts ---
PASSWORD_MIN_LENGTH = 6
