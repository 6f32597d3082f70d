"""Session state shared by the request executor and login/logout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlencode


@dataclass
class SessionState:
    """Where the router lives and which session is currently held."""

    hostname: str
    port: int
    protocol: str
    session_id: Optional[str] = None

    @property
    def base_url(self) -> str:
        """Root of the web API, e.g. ``https://10.0.0.1:8001/webapi``."""
        return f"{self.protocol}://{self.hostname}:{self.port}/webapi"

    @property
    def cookie(self) -> Optional[str]:
        """Cookie header value for the current session, if any."""
        if self.session_id:
            return f"id={self.session_id}"
        return None

    def url_for(self, path: str, params: Mapping[str, Any]) -> str:
        """Build the full URL of an API call with an encoded query string."""
        return f"{self.base_url}/{path}?{urlencode(params)}"
