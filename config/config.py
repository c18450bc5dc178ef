import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "please-set-SECRET_KEY"

    # Supabase (service-role client; bypasses row-level security)
    SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
    SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

    # Scheduled jobs and email
    CRON_SECRET = os.environ.get("CRON_SECRET") or None
    RESEND_API_KEY = os.environ.get("RESEND_API_KEY") or None
    REPORT_FROM_EMAIL = os.environ.get("REPORT_FROM_EMAIL", "CICO Reports <reports@resend.dev>")

    # Photos and badges
    PHOTO_BUCKET = os.environ.get("PHOTO_BUCKET", "timeclock-photos")
    SIGNED_URL_EXPIRES_IN = int(os.environ.get("SIGNED_URL_EXPIRES_IN", "3600"))
    BADGE_BASE_URL = os.environ.get("BADGE_BASE_URL", "http://localhost:5000")

    DEFAULT_TIMEZONE = os.environ.get("DEFAULT_TIMEZONE", "America/Los_Angeles")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE") or None


SECRET_KEY = Config.SECRET_KEY
SUPABASE_URL = Config.SUPABASE_URL
SUPABASE_SERVICE_ROLE_KEY = Config.SUPABASE_SERVICE_ROLE_KEY
CRON_SECRET = Config.CRON_SECRET
RESEND_API_KEY = Config.RESEND_API_KEY
REPORT_FROM_EMAIL = Config.REPORT_FROM_EMAIL
PHOTO_BUCKET = Config.PHOTO_BUCKET
SIGNED_URL_EXPIRES_IN = Config.SIGNED_URL_EXPIRES_IN
BADGE_BASE_URL = Config.BADGE_BASE_URL
DEFAULT_TIMEZONE = Config.DEFAULT_TIMEZONE
LOG_LEVEL = Config.LOG_LEVEL
LOG_FILE = Config.LOG_FILE

DEBUG = bool(int(os.environ.get("DEBUG", "0")))
TESTING = False
