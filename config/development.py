import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# External REST backend (auth, shifts, rooms, invitations)
BACKEND_BASE_URL = os.getenv("BACKEND_BASE_URL", "http://localhost:3001/api")
BACKEND_TIMEOUT = float(os.getenv("BACKEND_TIMEOUT", "10"))

# Profile pictures bucket
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")
SUPABASE_BUCKET = os.getenv("SUPABASE_BUCKET", "profile-pictures")

SESSION_HOURS = int(os.getenv("SESSION_HOURS", "8"))
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "es-AR")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
