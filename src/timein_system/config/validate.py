from __future__ import annotations

from typing import Mapping

from ..core.exceptions import ConfigurationError

GRAPH_REQUIRED = (
    "AZURE_CLIENT_ID",
    "AZURE_TENANT_ID",
    "AZURE_CLIENT_SECRET",
    "SENDER_EMAIL",
)
ALWAYS_REQUIRED = ("ADMIN_EMAIL", "CC_EMAIL")


def validate_environment(config: Mapping) -> None:
    required = list(ALWAYS_REQUIRED)
    if str(config.get("MAIL_BACKEND", "graph")).lower() == "graph":
        required = list(GRAPH_REQUIRED) + required

    missing = [name for name in required if not config.get(name)]
    if missing:
        raise ConfigurationError(f"Missing env vars: {', '.join(missing)}")
