"""Client and MCP server for Synology SRM routers.

This package provides a client for the Synology Router Manager (SRM) web
API, with session handling and vendor error mapping, and exposes its
endpoints as tools over the MCP (Model Context Protocol) for AI assistant
integration.

Example usage:
    >>> from mcp_synology_srm import SRMClient
    >>> with SRMClient('10.0.0.1', 'admin', 'my_password') as client:
    ...     devices = client.get_devices()
    ...     print(f"Found {len(devices)} devices")

For MCP server usage, run:
    $ mcp-synology-srm
"""

import logging

from .config import ClientConfig
from .errors import (
    ERROR_CODES,
    ApiError,
    InvalidArgumentError,
    InvalidResponseError,
    LoginError,
    MissingSessionError,
    SRMError,
    TransportError,
    describe_error_code,
)
from .session import SessionState
from .srm_client import ApiResponse, SRMClient

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # High-level client
    "SRMClient",
    "ClientConfig",
    # Data classes
    "ApiResponse",
    "SessionState",
    # Error catalog
    "ERROR_CODES",
    "describe_error_code",
    # Exceptions
    "SRMError",
    "MissingSessionError",
    "TransportError",
    "InvalidResponseError",
    "ApiError",
    "LoginError",
    "InvalidArgumentError",
]
