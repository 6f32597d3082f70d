"""Synology SRM web API client.

The client logs in when it is created and logs out when it is closed, unless
the session should be kept alive for a later run:

    >>> from mcp_synology_srm import SRMClient
    >>> with SRMClient('10.0.0.1', 'admin', 'my_password') as client:
    ...     if client.get_wan_status():
    ...         print(client.get_traffic('day'))

Every API call goes through :meth:`SRMClient.request`, which attaches the
session cookie and turns the response envelope into an :class:`ApiResponse`
or an :class:`~mcp_synology_srm.errors.SRMError`.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Dict, Generator, List, Mapping, Optional, Type

import httpx

from . import endpoints
from .config import DEFAULT_PORT, DEFAULT_TIMEOUT, ClientConfig
from .errors import (
    ApiError,
    InvalidArgumentError,
    InvalidResponseError,
    LoginError,
    MissingSessionError,
    SRMError,
    TransportError,
)
from .session import SessionState

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class ApiResponse:
    """Decoded SRM response envelope."""

    success: bool
    data: Any = None
    error_code: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Any) -> ApiResponse:
        """Validate a decoded JSON body and build the envelope.

        Args:
            payload: Value decoded from the response body.

        Returns:
            The envelope of a successful call.

        Raises:
            InvalidResponseError: If the body is not an envelope.
            ApiError: If the router reported a failure.
        """
        if not isinstance(payload, dict) or not isinstance(payload.get("success"), bool):
            raise InvalidResponseError("Invalid response, missing success attribute")

        error = payload.get("error")
        code = error.get("code") if isinstance(error, dict) else None
        if not payload["success"]:
            raise ApiError.from_code(code)
        return cls(success=True, data=payload.get("data"), error_code=code)

    def require(self, field: str, message: str) -> Any:
        """Return ``data[field]``, or raise InvalidResponseError(message)."""
        if not isinstance(self.data, dict) or field not in self.data:
            raise InvalidResponseError(message)
        return self.data[field]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


class SRMClient:
    """Client for the Synology SRM web API.

    Creating the client logs in, unless ``session_id`` is given. Use it as a
    context manager, or call :meth:`close` in a ``finally`` block, so that the
    session is logged out exactly once.

    The client is not thread-safe: it owns one session and one HTTP client.

    Attributes:
        config: Immutable connection settings.
    """

    def __init__(
        self,
        hostname: str,
        username: str,
        password: str,
        *,
        port: int = DEFAULT_PORT,
        https: bool = True,
        keep_session_alive: bool = False,
        session_id: Optional[str] = None,
        verify_ssl: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize the client and log in to the router.

        Args:
            hostname: Router IP address or hostname.
            username: Account name (e.g. ``admin``).
            password: Account password.
            port: Web API port.
            https: Use HTTPS instead of HTTP.
            keep_session_alive: Do not log out on close, so the session id
                can be reused later.
            session_id: Session id from a previous login; login is skipped.
            verify_ssl: Verify the router certificate (SRM ships self-signed).
            timeout: HTTP request timeout in seconds.
            http_client: HTTP client to use instead of creating one. The
                caller remains responsible for closing it.
            log: Logger to use instead of the module logger.

        Raises:
            LoginError: If login fails. No client is returned in that case.
        """
        self.config = ClientConfig(
            hostname=hostname,
            username=username,
            password=password,
            port=port,
            protocol="https" if https else "http",
            keep_session_alive=keep_session_alive,
            session_id=session_id,
            verify_ssl=verify_ssl,
            timeout=timeout,
        )
        self._log = log or logger
        self._session = SessionState(
            hostname=hostname,
            port=port,
            protocol=self.config.protocol,
            session_id=session_id,
        )
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(verify=verify_ssl, timeout=timeout)
        self._closed = False

        if self._session.session_id is None:
            try:
                self.login()
            except Exception:
                # No session was established, so there is nothing to log out
                self._close_transport()
                raise
        self._log.debug("Client created")

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> SRMClient:
        """Create a client from a :class:`ClientConfig`.

        Args:
            config: Connection settings.
            **kwargs: ``http_client`` or ``log``.
        """
        return cls(
            config.hostname,
            config.username,
            config.password,
            port=config.port,
            https=config.is_https,
            keep_session_alive=config.keep_session_alive,
            session_id=config.session_id,
            verify_ssl=config.verify_ssl,
            timeout=config.timeout,
            **kwargs,
        )

    def __enter__(self) -> SRMClient:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    @property
    def session_id(self) -> Optional[str]:
        """Current session id, for reuse in a later client."""
        return self._session.session_id

    @property
    def closed(self) -> bool:
        return self._closed

    def request(
        self,
        path: str,
        api: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse:
        """Execute an API call.

        Args:
            path: CGI path of the API (e.g. ``entry.cgi``).
            api: API name (e.g. ``SYNO.Core.NGFW.Traffic``).
            params: Query parameters; ``api`` is reserved.

        Returns:
            The envelope of the successful call.

        Raises:
            MissingSessionError: If the API needs a session and none is held.
            TransportError: If the HTTP request fails.
            InvalidResponseError: If the body is not a valid envelope.
            ApiError: If the router reported an error.
        """
        is_auth = path == endpoints.AUTH_PATH
        if not is_auth and self._session.session_id is None:
            raise MissingSessionError("This API require login")

        query: Dict[str, Any] = {"api": api}
        query.update((k, v) for k, v in (params or {}).items() if k != "api")

        headers: Dict[str, str] = {}
        cookie = self._session.cookie
        if cookie:
            headers["Cookie"] = cookie

        url = self._session.url_for(path, query)
        if not is_auth:
            self._log.debug("HTTP request: %s", url)

        try:
            resp = self._http.get(url, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"HTTP error: {e}") from e

        if not is_auth:
            self._log.debug("HTTP code: %d - response: %s", resp.status_code, resp.text)

        try:
            payload = resp.json()
        except ValueError as e:
            raise InvalidResponseError("Invalid JSON response") from e

        return ApiResponse.from_payload(payload)

    def login(self) -> None:
        """Login to the router and store the session id.

        Raises:
            LoginError: If the call fails or no session id is returned.
        """
        params = {
            "account": self.config.username,
            "passwd": self.config.password,
            "method": "Login",
            "version": endpoints.AUTH_VERSION,
        }
        try:
            response = self.request(endpoints.AUTH_PATH, endpoints.AUTH_API, params)
        except SRMError as e:
            raise LoginError(f"Could not login ({e})") from e

        sid = response.data.get("sid") if isinstance(response.data, dict) else None
        if not sid:
            raise LoginError("No session id returned")
        self._session.session_id = sid
        self._log.info("Login successful")

    def logout(self) -> None:
        """Logout from the router and clear the session id.

        The call is sent even when no session is held. The session id is
        cleared whether or not the router accepted it.
        """
        try:
            with self._operation("Could not logout"):
                self.request(endpoints.AUTH_PATH, endpoints.AUTH_API, {"method": "Logout"})
        finally:
            self._session.session_id = None
        self._log.debug("Logout")

    def close(self) -> None:
        """Logout (unless keeping the session alive) and release resources.

        Only the first call has an effect. Logout errors are logged, never
        raised.
        """
        if self._closed:
            return
        self._closed = True
        try:
            if not self.config.keep_session_alive:
                self.logout()
        except Exception as e:
            self._log.error("Error during client close: %s", e)
        finally:
            self._close_transport()
        self._log.debug("Client closed")

    def _close_transport(self) -> None:
        if self._owns_http:
            self._http.close()

    @contextmanager
    def _operation(self, description: str) -> Generator[None, None, None]:
        """Prefix errors raised inside the block with ``description``."""
        try:
            yield
        except SRMError as e:
            raise e.with_context(description) from e

    def get_wan_status(self) -> bool:
        """Return True when the WAN connection is up.

        Raises:
            SRMError: If the call fails or the status is missing.
        """
        params = {"method": "get", "version": 1}
        with self._operation("Could not get WAN status"):
            response = self.request(endpoints.ENTRY_PATH, endpoints.WAN_STATUS_API, params)
        connected = response.require("wan_connected", "WAN status not returned")
        self._log.info("Get WAN status successful")
        return bool(connected)

    def get_traffic(self, interval: str = "live") -> List[Dict[str, Any]]:
        """Return traffic usage (download/upload, packets) by device.

        Args:
            interval: One of ``live``, ``day``, ``week`` or ``month``.

        Returns:
            List of per-device traffic records.

        Raises:
            InvalidArgumentError: If ``interval`` is not supported.
            SRMError: If the call fails.
        """
        if interval not in endpoints.TRAFFIC_INTERVALS:
            raise InvalidArgumentError(f"Invalid interval: {interval}")
        params = {"method": "get", "version": 1, "mode": "net", "interval": interval}
        with self._operation("Could not get traffic"):
            response = self.request(endpoints.ENTRY_PATH, endpoints.TRAFFIC_API, params)
        if response.data is None:
            raise InvalidResponseError("Traffic not returned")
        self._log.info("Get traffic successful")
        return response.data

    def get_network_utilization(self) -> List[Dict[str, Any]]:
        """Return received/transmitted counters by network interface."""
        params = {
            "method": "get",
            "version": 1,
            "resource": json.dumps(["network"]),
        }
        with self._operation("Could not get network utilization"):
            response = self.request(endpoints.ENTRY_PATH, endpoints.UTILIZATION_API, params)
        network = response.require("network", "Network utilization not returned")
        self._log.info("Get network utilization successful")
        return network

    def get_devices(self, conntype: str = "all") -> List[Dict[str, Any]]:
        """Return devices known by the router (IP, signal, etc.).

        Args:
            conntype: Connection type filter; only ``all`` is supported.

        Raises:
            InvalidArgumentError: If ``conntype`` is not supported.
            SRMError: If the call fails or no devices are returned.
        """
        if conntype not in endpoints.DEVICE_CONNECTION_TYPES:
            raise InvalidArgumentError(f"Invalid connection type: {conntype}")
        params = {"method": "get", "version": 4, "conntype": conntype}
        with self._operation("Could not get devices"):
            response = self.request(endpoints.ENTRY_PATH, endpoints.DEVICE_API, params)
        devices = response.require("devices", "No devices returned")
        self._log.info("Get devices successful")
        return devices

    def get_wifi_devices(self) -> List[Dict[str, Any]]:
        """Return devices connected to Wi-Fi (max rate, signal, etc.)."""
        params = {"method": "get", "version": 1}
        with self._operation("Could not get wifi devices"):
            response = self.request(endpoints.ENTRY_PATH, endpoints.WIFI_DEVICE_API, params)
        devices = response.require("devices", "No devices returned")
        self._log.info("Get Wifi devices successful")
        return devices

    def get_mesh_nodes(self) -> List[Dict[str, Any]]:
        """Return mesh nodes (status, max rate, connected devices, etc.)."""
        params = {"method": "get", "version": 3}
        with self._operation("Could not get mesh nodes"):
            response = self.request(endpoints.ENTRY_PATH, endpoints.MESH_NODE_API, params)
        nodes = response.require("nodes", "No mesh node returned")
        self._log.info("Get mesh nodes successful")
        return nodes

    def get_wake_on_lan_devices(self) -> Any:
        """Return devices where wake on LAN is configured."""
        params = {
            "method": "get_devices",
            "version": 1,
            "findhost": "false",
            "client_list": json.dumps([]),
        }
        with self._operation("Could not get wake on lan devices"):
            response = self.request(endpoints.ENTRY_PATH, endpoints.WOL_API, params)
        self._log.info("Get wake on lan devices successful")
        return response.data

    def add_wake_on_lan_device(self, mac: str, host: Optional[str] = None) -> bool:
        """Configure wake on LAN for a device.

        Args:
            mac: Device MAC address.
            host: Optional device hostname.

        Returns:
            The success flag of the response.
        """
        params: Dict[str, Any] = {"method": "add_device", "version": 1, "mac": json.dumps(mac)}
        if host is not None:
            params["host"] = json.dumps(host)
        with self._operation(f"Could not add wake on lan to device {mac}"):
            response = self.request(endpoints.ENTRY_PATH, endpoints.WOL_API, params)
        self._log.info("Add wake on lan on device %s successful", mac)
        return response.success

    def wake_on_lan_device(self, mac: str) -> bool:
        """Send a wake on LAN packet to a device.

        Args:
            mac: Device MAC address.

        Returns:
            The success flag of the response.
        """
        params = {"method": "wake", "version": 1, "mac": json.dumps(mac)}
        with self._operation(f"Could not wake on lan device {mac}"):
            response = self.request(endpoints.ENTRY_PATH, endpoints.WOL_API, params)
        self._log.info("Wake on lan on device %s successful", mac)
        return response.success
