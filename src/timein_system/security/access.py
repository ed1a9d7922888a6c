from __future__ import annotations

import ipaddress
import logging
from typing import Iterable, Optional

from flask import Flask, Request, jsonify, request

logger = logging.getLogger(__name__)


def client_ip(req: Optional[Request] = None) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then the socket peer."""
    req = req or request
    forwarded = req.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = req.headers.get("X-Real-IP")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return req.remote_addr or "unknown"


class AccessPolicy:
    """Static origin and CIDR allowlists.

    An empty CIDR list lets every address through.
    """

    def __init__(self, *, allowed_cidrs: Iterable[str] = (), allowed_origins: Iterable[str] = ()):
        self._networks = [ipaddress.ip_network(c.strip(), strict=False) for c in allowed_cidrs if c and c.strip()]
        self._origins = {o.strip().rstrip("/") for o in allowed_origins if o and o.strip()}

    def is_allowed_ip(self, ip: str) -> bool:
        if not self._networks:
            return True
        try:
            addr = ipaddress.ip_address(ip)
        except ValueError:
            return False
        if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped:
            addr = addr.ipv4_mapped
        return any(addr.version == net.version and addr in net for net in self._networks)

    def is_allowed_origin(self, origin: str) -> bool:
        return origin.rstrip("/") in self._origins


def install_access_gate(app: Flask, policy: AccessPolicy, *, paths: Iterable[str]) -> None:
    gated = {p.rstrip("/") or "/" for p in paths}

    @app.before_request
    def enforce_allowlists():
        if (request.path.rstrip("/") or "/") not in gated:
            return None

        origin = request.headers.get("Origin")
        if origin and not policy.is_allowed_origin(origin):
            logger.warning("Blocked %s from origin %s", request.path, origin)
            return jsonify({"message": "Forbidden (Invalid Origin)"}), 403

        ip = client_ip()
        if not policy.is_allowed_ip(ip):
            logger.warning("Blocked %s from ip %s", request.path, ip)
            return jsonify({"message": "Forbidden (IP Not Allowed)"}), 403
        return None
