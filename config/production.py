import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

BACKEND_BASE_URL = os.getenv("BACKEND_BASE_URL", "http://localhost:3001/api")
BACKEND_TIMEOUT = float(os.getenv("BACKEND_TIMEOUT", "10"))

SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")
SUPABASE_BUCKET = os.getenv("SUPABASE_BUCKET", "profile-pictures")

SESSION_HOURS = int(os.getenv("SESSION_HOURS", "8"))
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "es-AR")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
