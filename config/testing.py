from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

SUPABASE_URL = "http://localhost:54321"
SUPABASE_SERVICE_ROLE_KEY = "test-service-role-key"
CRON_SECRET = "test-cron-secret"
RESEND_API_KEY = None
BADGE_BASE_URL = "https://cico.test"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_FILE = None
