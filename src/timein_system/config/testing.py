from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"
DEBUG = False
TESTING = True

ALLOWED_CIDRS = ["127.0.0.0/8", "10.0.0.0/8"]

MAIL_BACKEND = "memory"
SENDER_EMAIL = "noreply@example.com"
ADMIN_EMAIL = "admin@example.com"
CC_EMAIL = "hr@example.com"
ADMIN_PASSWORD = "admin-pass"
USER_PASSWORD = "user-pass"

QUEUE_BACKGROUND_FLUSH = False
QUEUE_DELAY_SECONDS = 3600

VALIDATE_ENV = False
