from __future__ import annotations

import logging

from flask import Flask, request, session
from flask_limiter import Limiter

from ..common.http import domain_error_response, json_message
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

ONSITE_SESSION_KEY = "onsite_verified"
# Set by a password login that still needs the admin OTP; holds the admin address.
OTP_PENDING_SESSION_KEY = "onsite_otp_pending"


def register(app: Flask, container: Container, limiter: Limiter) -> None:
    @app.route("/api/send-otp", methods=["POST"], endpoint="api_send_otp")
    @limiter.limit(app.config["OTP_RATE_LIMIT"])
    def api_send_otp():
        data = request.get_json(silent=True) or {}
        email = str(data.get("email") or "").strip()
        if not email:
            return json_message("Email is required", 400)

        try:
            sent = container.otp_service.request_code(email)
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.error("Error in send-otp: %s", e, exc_info=app.config.get("DEBUG", False))
            return json_message("Internal server error", 500)

        if not sent:
            return json_message("Failed to send OTP email", 500)
        return json_message("OTP sent successfully", success=True)

    @app.route("/api/verify-otp", methods=["POST"], endpoint="api_verify_otp")
    @limiter.limit(app.config["OTP_RATE_LIMIT"])
    def api_verify_otp():
        data = request.get_json(silent=True) or {}
        email = str(data.get("email") or "").strip()
        code = str(data.get("otp") or "").strip()
        if not email or not code:
            return json_message("Email and OTP are required", 400)

        pending = session.get(OTP_PENDING_SESSION_KEY)
        admin_email = container.onsite_login_service.admin_email
        if not admin_email or pending != admin_email.lower() or email.lower() != pending:
            logger.warning("OTP verify for %s without a pending onsite login", email)
            return json_message("Invalid or expired OTP", 401)

        if not container.otp_service.verify(email, code):
            return json_message("Invalid or expired OTP", 401)

        session.pop(OTP_PENDING_SESSION_KEY, None)
        session[ONSITE_SESSION_KEY] = True
        return json_message("OTP verified successfully", success=True)
