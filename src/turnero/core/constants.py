"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_BACKEND_BASE_URL = "http://localhost:3001/api"
DEFAULT_BACKEND_TIMEOUT = 10.0

DEFAULT_SESSION_HOURS = 8

DEFAULT_LOCALE = "es-AR"
SUPPORTED_LOCALES = ("es-AR", "en-US")

MIN_PASSWORD_LENGTH = 6
MIN_THEME_LENGTH = 3
MIN_FULL_NAME_LENGTH = 3
ROOM_NAME_MIN_LENGTH = 3
ROOM_NAME_MAX_LENGTH = 50

DNI_PATTERN = r"^\d{7,8}$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

MAX_PROFILE_PICTURE_BYTES = 5 * 1024 * 1024
ACCEPTED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
DEFAULT_PROFILE_BUCKET = "profile-pictures"

CONNECTION_ERROR_MESSAGE = "Error de conexión con el servidor."
VALIDATION_ERROR_MESSAGE = "Error de validación."
