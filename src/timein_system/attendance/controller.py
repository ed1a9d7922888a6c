from __future__ import annotations

import logging

from flask import Flask, jsonify, render_template, request
from flask_limiter import Limiter

from ..common.http import domain_error_response, json_message
from ..container import Container
from ..core.exceptions import DomainError
from ..security.access import client_ip
from .model import TimeInSubmission

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container, limiter: Limiter) -> None:
    @app.route("/", methods=["GET"], endpoint="time_in_form")
    def time_in_form():
        return render_template("time_in.html", shift=container.shift)

    @app.route("/api/time-in", methods=["POST"], endpoint="api_time_in")
    @limiter.limit(app.config["TIME_IN_RATE_LIMIT"])
    def api_time_in():
        submission = TimeInSubmission(
            name=request.form.get("name"),
            email=request.form.get("email"),
            attachment=request.files.get("attachment"),
            client_ip=client_ip(),
        )
        try:
            result = container.time_in_service.submit(submission)
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            logger.error("Time-in route failed: %s", e, exc_info=app.config.get("DEBUG", False))
            return json_message("Server error", 500)
        return jsonify(result.to_json())
