from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, render_template, request, session

from ..common.http import domain_error_response, json_message
from ..container import Container
from ..core.enums import LoginStep
from ..core.exceptions import DomainError
from ..otp.controller import ONSITE_SESSION_KEY, OTP_PENDING_SESSION_KEY

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def onsite_verified_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not session.get(ONSITE_SESSION_KEY):
                return json_message("OTP verification required", 401)
            return view(*args, **kwargs)

        return wrapper

    @app.route("/onsite-time-in", methods=["GET"], endpoint="onsite_time_in")
    def onsite_time_in():
        verified = bool(session.get(ONSITE_SESSION_KEY))
        employees = container.roster_repo.list_employees() if verified else []
        return render_template(
            "onsite_time_in.html",
            verified=verified,
            employees=employees,
            admin_email=container.onsite_login_service.admin_email,
        )

    @app.route("/api/onsite-login", methods=["POST"], endpoint="api_onsite_login")
    def api_onsite_login():
        data = request.get_json(silent=True) or {}
        email = str(data.get("email") or "").strip()
        password = str(data.get("password") or "")

        try:
            step = container.onsite_login_service.login(email, password)
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.error("Onsite login failed: %s", e, exc_info=app.config.get("DEBUG", False))
            return json_message("Internal server error", 500)

        session["onsite_email"] = email.lower()
        if step == LoginStep.ATTENDANCE:
            session.pop(OTP_PENDING_SESSION_KEY, None)
            session[ONSITE_SESSION_KEY] = True
            return jsonify({"message": "Welcome back, Admin!", "step": step.value})

        session[ONSITE_SESSION_KEY] = False
        session[OTP_PENDING_SESSION_KEY] = container.onsite_login_service.admin_email.lower()
        return jsonify(
            {
                "message": "OTP has been sent to the admin inbox",
                "step": step.value,
                "otpSentTo": container.onsite_login_service.admin_email,
            }
        )

    @app.route("/api/onsite-logout", methods=["POST"], endpoint="api_onsite_logout")
    def api_onsite_logout():
        session.pop(ONSITE_SESSION_KEY, None)
        session.pop(OTP_PENDING_SESSION_KEY, None)
        session.pop("onsite_email", None)
        return json_message("Logged out")

    @app.route("/api/attendance-csv", methods=["GET"], endpoint="api_attendance_csv")
    @onsite_verified_required
    def api_attendance_csv():
        content = container.roster_repo.read_text()
        if content is None:
            logger.error("Roster file not found at %s", container.roster_repo.path)
            return (
                jsonify(
                    {
                        "error": "File not found",
                        "message": f"Make sure {container.roster_repo.path.name} exists in the data folder",
                    }
                ),
                404,
            )
        return app.response_class(
            content,
            mimetype="text/csv",
            headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
        )

    @app.route("/api/onsite-attendance", methods=["POST"], endpoint="api_onsite_attendance")
    @onsite_verified_required
    def api_onsite_attendance():
        data = request.get_json(silent=True) or {}
        submitted_by = data.get("submittedBy") or session.get("onsite_email")

        try:
            result = container.onsite_attendance_service.submit(data.get("employees"), submitted_by=submitted_by)
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.error("Error processing attendance: %s", e, exc_info=app.config.get("DEBUG", False))
            return json_message("Internal server error", 500)
        return jsonify(result.to_json())
