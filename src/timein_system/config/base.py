"""Settings shared by every environment.

Each value can be overridden from the environment (or a .env file).
"""
import os


def env_list(name: str, default: str = "") -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
DEBUG = env_flag("DEBUG", "1")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

TIMEZONE = os.getenv("TIMEZONE", "Asia/Manila")
SHIFT_START = os.getenv("SHIFT_START", "09:00")
SHIFT_END = os.getenv("SHIFT_END", "18:00")
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "1"))

DATA_DIR = os.getenv("DATA_DIR", os.path.join(os.getcwd(), "data"))
UPLOADS_DIR = os.getenv("UPLOADS_DIR", os.path.join(os.getcwd(), "uploads"))
TIME_IN_CSV = os.getenv("TIME_IN_CSV", "time-in.csv")
ROSTER_CSV = os.getenv("ROSTER_CSV", "Attendance.csv")
BATCH_CSV = os.getenv("BATCH_CSV", "batch-time-in.csv")
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(5 * 1024 * 1024)))
# Multipart overhead on top of the image cap.
MAX_CONTENT_LENGTH = MAX_IMAGE_BYTES + 1024 * 1024

QUEUE_BATCH_SIZE = int(os.getenv("QUEUE_BATCH_SIZE", "10"))
QUEUE_MAX_SIZE = int(os.getenv("QUEUE_MAX_SIZE", "100"))
QUEUE_DELAY_SECONDS = int(os.getenv("QUEUE_DELAY_SECONDS", "300"))
QUEUE_BACKGROUND_FLUSH = env_flag("QUEUE_BACKGROUND_FLUSH", "1")

OTP_TTL_SECONDS = int(os.getenv("OTP_TTL_SECONDS", "600"))
OTP_MAX_ATTEMPTS = int(os.getenv("OTP_MAX_ATTEMPTS", "5"))

TIME_IN_RATE_LIMIT = os.getenv("TIME_IN_RATE_LIMIT", "10 per minute")
OTP_RATE_LIMIT = os.getenv("OTP_RATE_LIMIT", "5 per minute")
RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

ALLOWED_ORIGINS = env_list(
    "ALLOWED_ORIGINS",
    "https://wellevate.ch,https://www.wellevate.ch,https://localhost:3000",
)
ALLOWED_CIDRS = env_list("ALLOWED_CIDRS", "")
GATED_PATHS = env_list("GATED_PATHS", "/api/time-in")

MAIL_BACKEND = os.getenv("MAIL_BACKEND", "graph")
AZURE_TENANT_ID = os.getenv("AZURE_TENANT_ID", "")
AZURE_CLIENT_ID = os.getenv("AZURE_CLIENT_ID", "")
AZURE_CLIENT_SECRET = os.getenv("AZURE_CLIENT_SECRET", "")
SENDER_EMAIL = os.getenv("SENDER_EMAIL", os.getenv("AZURE_SENDER_EMAIL", ""))
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
CC_EMAIL = os.getenv("CC_EMAIL", "")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
USER_PASSWORD = os.getenv("USER_PASSWORD", "")

COMPANY_NAME = os.getenv("COMPANY_NAME", "Wellevate")
NOTICE_SIGNATURE = os.getenv("NOTICE_SIGNATURE", "Office & Operations Manager")

VALIDATE_ENV = env_flag("VALIDATE_ENV", "0")
