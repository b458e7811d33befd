import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

# Outbound mail (HTTP mail API)
MAIL_API_URL = os.getenv("MAIL_API_URL")
MAIL_API_KEY = os.getenv("MAIL_API_KEY")
MAIL_FROM = os.getenv("MAIL_FROM", "TaskEase <no-reply@taskease.app>")

# Shared secret expected from the external cron caller
CRON_SECRET = os.getenv("CRON_SECRET")

# Daily summaries are not sent before this hour (APP_TIMEZONE)
DAILY_SUMMARY_HOUR = int(os.getenv("DAILY_SUMMARY_HOUR", "12"))
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
