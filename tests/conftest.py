"""Shared fixtures: a fake SRM router behind httpx.MockTransport."""

from typing import Any, Callable, Dict, Iterator, List, Optional

import httpx
import pytest

from mcp_synology_srm.srm_client import SRMClient

Handler = Callable[[httpx.Request], httpx.Response]


class FakeRouter:
    """Records requests and answers with queued or per-API responses."""

    def __init__(self, sid: str = "abc123") -> None:
        self.sid = sid
        self.requests: List[httpx.Request] = []
        self.responses: Dict[str, Any] = {}
        self.handler: Optional[Handler] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)

        params = request.url.params
        if params.get("api") == "SYNO.API.Auth":
            if params.get("method") == "Login":
                return httpx.Response(200, json={"success": True, "data": {"sid": self.sid}})
            return httpx.Response(200, json={"success": True})

        body = self.responses.get(params.get("api"), {"success": True, "data": {}})
        if isinstance(body, (bytes, str)):
            return httpx.Response(200, content=body)
        return httpx.Response(200, json=body)

    def calls(self, api: str, method: Optional[str] = None) -> List[httpx.Request]:
        """Return recorded requests for ``api`` (and ``method``)."""
        return [
            r for r in self.requests
            if r.url.params.get("api") == api
            and (method is None or r.url.params.get("method") == method)
        ]

    @property
    def logins(self) -> List[httpx.Request]:
        return self.calls("SYNO.API.Auth", "Login")

    @property
    def logouts(self) -> List[httpx.Request]:
        return self.calls("SYNO.API.Auth", "Logout")


@pytest.fixture
def router() -> FakeRouter:
    return FakeRouter()


@pytest.fixture
def http_client(router: FakeRouter) -> Iterator[httpx.Client]:
    client = httpx.Client(transport=httpx.MockTransport(router))
    yield client
    client.close()


@pytest.fixture
def make_client(http_client: httpx.Client) -> Callable[..., SRMClient]:
    """Factory creating SRMClient instances wired to the fake router."""

    def factory(**kwargs: Any) -> SRMClient:
        kwargs.setdefault("http_client", http_client)
        return SRMClient("10.0.0.1", "admin", "secret", **kwargs)

    return factory
