from __future__ import annotations

import pytest
from flask import Flask

from timein_system.security.access import AccessPolicy, client_ip


@pytest.fixture
def policy():
    return AccessPolicy(
        allowed_cidrs=["203.82.42.0/24", "127.0.0.0/8"],
        allowed_origins=["https://wellevate.ch", "https://localhost:3000/"],
    )


@pytest.mark.parametrize(
    "ip,allowed",
    [
        ("203.82.42.17", True),
        ("127.0.0.1", True),
        ("::ffff:203.82.42.17", True),
        ("203.82.43.1", False),
        ("::1", False),
        ("unknown", False),
        ("", False),
    ],
)
def test_ip_allowlist(policy, ip, allowed):
    assert policy.is_allowed_ip(ip) is allowed


def test_empty_allowlist_lets_everyone_in():
    assert AccessPolicy(allowed_cidrs=[]).is_allowed_ip("8.8.8.8")


def test_origin_allowlist(policy):
    assert policy.is_allowed_origin("https://wellevate.ch")
    assert policy.is_allowed_origin("https://localhost:3000")
    assert not policy.is_allowed_origin("https://evil.example.com")
    assert not policy.is_allowed_origin("http://wellevate.ch")


def test_client_ip_prefers_forwarded_headers():
    app = Flask(__name__)

    with app.test_request_context("/", headers={"X-Forwarded-For": " 10.1.1.1 , 172.16.0.1"}):
        assert client_ip() == "10.1.1.1"
    with app.test_request_context("/", headers={"X-Real-IP": "10.2.2.2"}):
        assert client_ip() == "10.2.2.2"
    with app.test_request_context("/", environ_base={"REMOTE_ADDR": "10.3.3.3"}):
        assert client_ip() == "10.3.3.3"


def time_in_form(name="Ana", email="ana@example.com"):
    return {"name": name, "email": email}


def test_gate_blocks_foreign_origin(client):
    resp = client.post("/api/time-in", data=time_in_form(), headers={"Origin": "https://evil.example.com"})

    assert resp.status_code == 403
    assert resp.get_json() == {"message": "Forbidden (Invalid Origin)"}


def test_gate_blocks_outside_network(client):
    resp = client.post("/api/time-in", data=time_in_form(), headers={"X-Forwarded-For": "8.8.8.8"})

    assert resp.status_code == 403
    assert resp.get_json() == {"message": "Forbidden (IP Not Allowed)"}


def test_gate_allows_office_network_and_known_origin(client):
    resp = client.post(
        "/api/time-in",
        data=time_in_form(),
        headers={"X-Forwarded-For": "10.1.1.1", "Origin": "https://wellevate.ch"},
    )

    assert resp.status_code == 200


def test_gate_only_covers_time_in(client):
    resp = client.post("/api/onsite-login", json={}, headers={"X-Forwarded-For": "8.8.8.8"})

    assert resp.status_code == 400


def test_time_in_is_rate_limited_per_ip(client):
    headers = {"X-Forwarded-For": "10.1.1.1"}
    statuses = [
        client.post("/api/time-in", data=time_in_form(email=f"user{i}@example.com"), headers=headers).status_code
        for i in range(11)
    ]

    assert statuses[:10] == [200] * 10
    assert statuses[10] == 429

    other = client.post("/api/time-in", data=time_in_form(email="other@example.com"), headers={"X-Forwarded-For": "10.9.9.9"})
    assert other.status_code == 200


def test_otp_endpoints_are_rate_limited(client):
    headers = {"X-Forwarded-For": "10.1.1.1"}
    statuses = [client.post("/api/verify-otp", json={}, headers=headers).status_code for _ in range(6)]

    assert statuses == [400] * 5 + [429]
    assert client.post("/api/verify-otp", json={}, headers=headers).get_json() == {"message": "Too many requests"}


def test_blocked_origin_does_not_use_up_the_rate_limit(client):
    headers = {"X-Forwarded-For": "10.1.1.1", "Origin": "https://evil.example.com"}
    blocked = [client.post("/api/time-in", data=time_in_form(), headers=headers).status_code for _ in range(12)]

    assert blocked == [403] * 12

    resp = client.post("/api/time-in", data=time_in_form(), headers={"X-Forwarded-For": "10.1.1.1"})
    assert resp.status_code == 200


def test_blocked_ip_always_gets_forbidden(client):
    headers = {"X-Forwarded-For": "8.8.8.8"}

    statuses = [client.post("/api/time-in", data=time_in_form(), headers=headers).status_code for _ in range(12)]

    assert statuses == [403] * 12
