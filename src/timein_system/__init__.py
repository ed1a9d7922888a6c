"""WFH and onsite time-in web application.

This package is organized by feature modules (attendance, batch, otp,
onsite, ...) with a thin Flask controller layer over plain services.
"""
from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .config.validate import validate_environment

from .common.http import json_message
from .container import build_container
from .security.access import install_access_gate
from .security.rate_limit import build_limiter
from .attendance.controller import register as register_attendance
from .otp.controller import register as register_otp
from .onsite.controller import register as register_onsite

LOG_FORMAT = "[timein-system] %(asctime)s %(levelname)s %(name)s: %(message)s"


def create_app(settings_module: Optional[str] = None, **overrides) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    app.config.from_object(importlib.import_module(settings_module))
    app.config.update(overrides)

    logging.basicConfig(level=app.config.get("LOG_LEVEL", "INFO"), format=LOG_FORMAT)
    logger = logging.getLogger(__name__)
    logger.info("settings=%s data_dir=%s mail=%s", settings_module, app.config["DATA_DIR"], app.config["MAIL_BACKEND"])

    if app.config.get("VALIDATE_ENV"):
        validate_environment(app.config)

    container = build_container(app.config)
    app.extensions["timein"] = container
    atexit.register(container.email_queue.shutdown)

    # Gate first: blocked callers must not count against the rate-limit window.
    install_access_gate(app, container.access_policy, paths=app.config.get("GATED_PATHS", ()))
    limiter = build_limiter(app)

    @app.errorhandler(413)
    def request_too_large(_error):
        return json_message("Image too large", 400)

    register_attendance(app, container, limiter)
    register_otp(app, container, limiter)
    register_onsite(app, container)

    return app
