"""Client configuration, loadable from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidArgumentError

DEFAULT_PORT = 8001
DEFAULT_TIMEOUT = 10.0
PROTOCOLS = ("http", "https")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for one SRM client.

    Attributes:
        hostname: Router IP address or hostname.
        username: Account used to log in (e.g. ``admin``).
        password: Account password.
        port: Web API port (SRM listens on 8001 for HTTPS by default).
        protocol: ``"http"`` or ``"https"``.
        keep_session_alive: Skip logout when the client is closed.
        session_id: Session id from a previous login; skips login when set.
        verify_ssl: Verify the router certificate and hostname.
        timeout: HTTP timeout in seconds.
    """

    hostname: str
    username: str
    password: str
    port: int = DEFAULT_PORT
    protocol: str = "https"
    keep_session_alive: bool = False
    session_id: Optional[str] = None
    verify_ssl: bool = False
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if self.protocol not in PROTOCOLS:
            raise InvalidArgumentError(f"Invalid protocol: {self.protocol}")

    @property
    def is_https(self) -> bool:
        return self.protocol == "https"

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Create configuration from environment variables.

        Reads ``SRM_HOST``, ``SRM_PORT``, ``SRM_USERNAME``, ``SRM_PASSWORD``,
        ``SRM_HTTPS``, ``SRM_KEEP_SESSION``, ``SRM_SESSION_ID``,
        ``SRM_VERIFY_SSL`` and ``SRM_TIMEOUT``.

        Returns:
            ClientConfig with values from environment.
        """
        return cls(
            hostname=os.getenv("SRM_HOST", "192.168.1.1"),
            username=os.getenv("SRM_USERNAME", "admin"),
            password=os.getenv("SRM_PASSWORD", ""),
            port=int(os.getenv("SRM_PORT", str(DEFAULT_PORT))),
            protocol="https" if _env_flag("SRM_HTTPS", True) else "http",
            keep_session_alive=_env_flag("SRM_KEEP_SESSION", False),
            session_id=os.getenv("SRM_SESSION_ID") or None,
            verify_ssl=_env_flag("SRM_VERIFY_SSL", False),
            timeout=float(os.getenv("SRM_TIMEOUT", str(DEFAULT_TIMEOUT))),
        )
