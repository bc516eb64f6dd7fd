SECRET_KEY = "test-secret"

BACKEND_BASE_URL = "http://backend.test/api"
BACKEND_TIMEOUT = 1.0

SUPABASE_URL = ""
SUPABASE_KEY = ""
SUPABASE_BUCKET = "profile-pictures"

SESSION_HOURS = 8
DEFAULT_LOCALE = "es-AR"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
