import os

from .base import *  # noqa: F401,F403
from .base import env_flag, env_list

DEBUG = env_flag("DEBUG", "1")

# Local machines and the office range.
ALLOWED_CIDRS = env_list("ALLOWED_CIDRS", "127.0.0.0/8,::1/128,203.82.42.0/24")

# Without Graph credentials, log mails instead of sending them.
MAIL_BACKEND = os.getenv("MAIL_BACKEND", "console")
