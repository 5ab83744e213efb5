"""Runtime settings for the back-office engine.

Values come from environment variables so the same build can point at a
local backend, a staging server, or the in-memory fake gateway.
"""

import os
from dataclasses import dataclass


class GatewayKind:
    FAKE = "fake"
    REST = "rest"


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value in (None, ""):
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


@dataclass(frozen=True)
class BackofficeSettings:
    """Connection and timer settings for one engine instance."""

    api_url: str = "http://localhost:3001"
    api_timeout: float = 10.0
    gateway: str = GatewayKind.FAKE

    # Session liveness poll (seconds) and the delay before a forced logout
    liveness_interval: float = 3.0
    logout_grace: float = 1.0

    # Activity heartbeat (seconds)
    activity_interval: float = 30.0

    @classmethod
    def from_env(cls) -> "BackofficeSettings":
        gateway = os.getenv("BACKOFFICE_GATEWAY", GatewayKind.FAKE).lower()
        if gateway not in (GatewayKind.FAKE, GatewayKind.REST):
            raise ValueError(f"Unknown gateway kind: {gateway}")

        return cls(
            api_url=os.getenv("BACKOFFICE_API_URL", cls.api_url).rstrip("/"),
            api_timeout=_float_env("BACKOFFICE_API_TIMEOUT", cls.api_timeout),
            gateway=gateway,
            liveness_interval=_float_env("BACKOFFICE_LIVENESS_INTERVAL", cls.liveness_interval),
            logout_grace=_float_env("BACKOFFICE_LOGOUT_GRACE", cls.logout_grace),
            activity_interval=_float_env("BACKOFFICE_ACTIVITY_INTERVAL", cls.activity_interval),
        )
