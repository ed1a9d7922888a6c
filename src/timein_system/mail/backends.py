"""Mail transports.

``graph`` talks to Microsoft Graph with an app-only (client credential) token,
``console`` only logs and ``memory`` keeps an outbox for tests and local runs.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional, Protocol

import msal
import requests

from ..core.constants import GRAPH_AUTHORITY, GRAPH_BASE_URL, GRAPH_SCOPE
from ..core.exceptions import ConfigurationError, MailDeliveryError
from .message import EmailMessage

logger = logging.getLogger(__name__)


class MailBackend(Protocol):
    def send(self, message: EmailMessage) -> None:
        raise NotImplementedError


class GraphMailBackend(MailBackend):
    def __init__(
        self,
        *,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        sender: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self._tenant_id = tenant_id
        self._client_id = client_id
        self._client_secret = client_secret
        self._sender = sender
        self._timeout = timeout
        self._session = session or requests.Session()
        self._app: Optional[msal.ConfidentialClientApplication] = None
        self._app_lock = threading.Lock()

    def _client_app(self) -> msal.ConfidentialClientApplication:
        # Built lazily: msal resolves the authority over the network.
        with self._app_lock:
            if self._app is None:
                self._app = msal.ConfidentialClientApplication(
                    self._client_id,
                    authority=GRAPH_AUTHORITY.format(tenant_id=self._tenant_id),
                    client_credential=self._client_secret,
                )
            return self._app

    def _access_token(self) -> str:
        try:
            result = self._client_app().acquire_token_for_client(scopes=[GRAPH_SCOPE])
        except (ValueError, requests.RequestException) as exc:
            raise MailDeliveryError(f"Token request failed: {exc}") from exc
        token = (result or {}).get("access_token")
        if not token:
            raise MailDeliveryError(
                f"No access token returned: {result.get('error') if result else 'empty response'}"
            )
        return token

    def send(self, message: EmailMessage) -> None:
        if not self._sender:
            raise ConfigurationError("SENDER_EMAIL is not configured")

        url = f"{GRAPH_BASE_URL}/users/{self._sender}/sendMail"
        headers = {"Authorization": f"Bearer {self._access_token()}", "Content-Type": "application/json"}
        try:
            resp = self._session.post(url, json=message.to_graph(), headers=headers, timeout=self._timeout)
        except requests.RequestException as exc:
            raise MailDeliveryError(f"sendMail request failed: {exc}") from exc

        if not resp.ok:
            raise MailDeliveryError(f"sendMail returned {resp.status_code}: {resp.text[:200]}")
        logger.debug("sendMail accepted %r for %s", message.subject, ", ".join(message.to))


class ConsoleMailBackend(MailBackend):
    def send(self, message: EmailMessage) -> None:
        logger.info(
            "[mail] to=%s cc=%s subject=%r attachments=%s",
            ", ".join(message.to),
            ", ".join(message.cc),
            message.subject,
            [a.name for a in message.attachments],
        )


class MemoryMailBackend(MailBackend):
    def __init__(self):
        self.outbox: list[EmailMessage] = []
        self._lock = threading.Lock()

    def send(self, message: EmailMessage) -> None:
        with self._lock:
            self.outbox.append(message)


def build_mail_backend(config) -> MailBackend:
    name = str(config.get("MAIL_BACKEND", "graph")).lower()
    if name == "memory":
        return MemoryMailBackend()
    if name == "console":
        return ConsoleMailBackend()
    if name == "graph":
        return GraphMailBackend(
            tenant_id=config.get("AZURE_TENANT_ID", ""),
            client_id=config.get("AZURE_CLIENT_ID", ""),
            client_secret=config.get("AZURE_CLIENT_SECRET", ""),
            sender=config.get("SENDER_EMAIL", ""),
        )
    raise ConfigurationError(f"Unknown MAIL_BACKEND: {name}")
