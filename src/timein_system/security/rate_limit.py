from __future__ import annotations

from flask import Flask, jsonify
from flask_limiter import Limiter

from .access import client_ip


def build_limiter(app: Flask) -> Limiter:
    """Per-client-IP fixed-window limiter kept in process memory."""
    limiter = Limiter(
        client_ip,
        app=app,
        storage_uri=app.config.get("RATELIMIT_STORAGE_URI", "memory://"),
        strategy="fixed-window",
    )

    @app.errorhandler(429)
    def too_many_requests(_error):
        return jsonify({"message": "Too many requests"}), 429

    return limiter
