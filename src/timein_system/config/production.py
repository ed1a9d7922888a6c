import os

from .base import *  # noqa: F401,F403
from .base import env_flag, env_list

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DEBUG = env_flag("DEBUG", "0")

ALLOWED_CIDRS = env_list("ALLOWED_CIDRS", "203.82.42.0/24")

MAIL_BACKEND = os.getenv("MAIL_BACKEND", "graph")
VALIDATE_ENV = env_flag("VALIDATE_ENV", "1")
