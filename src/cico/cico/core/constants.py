"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

APP_NAME = "CICO"

PHOTO_BUCKET = "timeclock-photos"
SIGNED_URL_EXPIRES_IN = 3600

DEFAULT_TIMEZONE = "America/Los_Angeles"
DEFAULT_REPORT_SENDER = "CICO Reports <reports@resend.dev>"
RESEND_API_URL = "https://api.resend.com/emails"
HTTP_TIMEOUT_SECONDS = 30

REGULAR_WEEKLY_MINUTES = 40 * 60

AUTO_OTHER_TASK = "auto-other"
OTHER_TASK_CODES = ("8050", "OTH")

FOREMAN_ALLOWED_PATHS = ("/timeclock", "/time-tracking/admin")
LOGIN_PATH = "/login"
TIMECLOCK_PATH = "/timeclock"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type, x-cron-secret",
}
