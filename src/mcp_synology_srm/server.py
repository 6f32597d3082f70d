"""MCP Server for Synology SRM Router Management.

This module provides an MCP (Model Context Protocol) server for monitoring
Synology SRM routers through AI assistants. It exposes the SRM client
endpoints as MCP tools.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .config import ClientConfig
from .endpoints import TRAFFIC_INTERVALS
from .errors import SRMError
from .srm_client import SRMClient

# Load environment variables
load_dotenv()

# Configure module logger
logger = logging.getLogger(__name__)


class ClientManager:
    """Manages the SRM client lifecycle.

    This class provides serialized access to a shared SRMClient instance,
    with lazy initialization (and login) on first use.

    Attributes:
        config: Client configuration.
    """

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        """Initialize the client manager.

        Args:
            config: Optional client configuration. If not provided,
                    configuration is loaded from environment variables.
        """
        self._config = config or ClientConfig.from_env()
        self._client: Optional[SRMClient] = None
        self._lock = asyncio.Lock()

    @property
    def config(self) -> ClientConfig:
        """Get the client configuration."""
        return self._config

    async def get_client(self) -> SRMClient:
        """Get or create the SRM client.

        Only one client instance is created; creating it logs in unless
        a session id is configured.

        Returns:
            Logged-in SRMClient instance.

        Raises:
            LoginError: If login fails.
        """
        async with self._lock:
            return await self._ensure_client()

    async def _ensure_client(self) -> SRMClient:
        # caller holds self._lock
        if self._client is None:
            logger.debug("Creating new SRMClient for %s", self._config.hostname)
            self._client = await asyncio.to_thread(SRMClient.from_config, self._config)
        return self._client

    async def execute(self, func: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking client call in a worker thread, one call at a time.

        Args:
            func: Callable receiving the client as first argument.
            *args: Extra arguments for ``func``.

        Returns:
            The result of ``func``.
        """
        async with self._lock:
            client = await self._ensure_client()
            return await asyncio.to_thread(func, client, *args)

    async def reset_client(self) -> None:
        """Close the client, forcing a new login on next use."""
        async with self._lock:
            if self._client:
                await asyncio.to_thread(self._client.close)
                self._client = None
            logger.debug("Client reset")


# Global client manager instance
_client_manager: Optional[ClientManager] = None


def get_client_manager() -> ClientManager:
    """Get the global client manager.

    Returns:
        The global ClientManager instance.
    """
    global _client_manager
    if _client_manager is None:
        _client_manager = ClientManager()
    return _client_manager


# Initialize MCP server
server = Server("mcp-synology-srm")

_NO_ARGUMENTS: Dict[str, Any] = {
    "type": "object",
    "properties": {},
    "required": [],
}


def _get_tool_definitions() -> List[Tool]:
    """Get the list of available tool definitions.

    Returns:
        List of Tool definitions for the MCP server.
    """
    return [
        Tool(
            name="srm_session",
            description="Get the current SRM session id and connection settings",
            inputSchema=_NO_ARGUMENTS,
        ),
        Tool(
            name="srm_wan_status",
            description="Check whether the router WAN connection is up",
            inputSchema=_NO_ARGUMENTS,
        ),
        Tool(
            name="srm_traffic",
            description="Get download/upload traffic and packets by device",
            inputSchema={
                "type": "object",
                "properties": {
                    "interval": {
                        "type": "string",
                        "description": "Time window (default: live)",
                        "enum": list(TRAFFIC_INTERVALS),
                    }
                },
                "required": [],
            },
        ),
        Tool(
            name="srm_network_utilization",
            description="Get received/transmitted counters by network interface",
            inputSchema=_NO_ARGUMENTS,
        ),
        Tool(
            name="srm_devices",
            description="List all devices known by the router (IP, signal, etc.)",
            inputSchema=_NO_ARGUMENTS,
        ),
        Tool(
            name="srm_wifi_devices",
            description="List devices connected to Wi-Fi with rate and signal",
            inputSchema=_NO_ARGUMENTS,
        ),
        Tool(
            name="srm_mesh_nodes",
            description="List mesh nodes with status and connected devices",
            inputSchema=_NO_ARGUMENTS,
        ),
        Tool(
            name="srm_wake_on_lan_devices",
            description="List devices configured for wake on LAN",
            inputSchema=_NO_ARGUMENTS,
        ),
        Tool(
            name="srm_add_wake_on_lan_device",
            description="Configure wake on LAN for a device",
            inputSchema={
                "type": "object",
                "properties": {
                    "mac": {
                        "type": "string",
                        "description": "MAC address of the device"
                    },
                    "host": {
                        "type": "string",
                        "description": "Optional hostname of the device"
                    }
                },
                "required": ["mac"],
            },
        ),
        Tool(
            name="srm_wake_on_lan_device",
            description="Wake a device using wake on LAN",
            inputSchema={
                "type": "object",
                "properties": {
                    "mac": {
                        "type": "string",
                        "description": "MAC address of the device to wake"
                    }
                },
                "required": ["mac"],
            },
        ),
    ]


def _handle_tool_call(
    client: SRMClient,
    name: str,
    arguments: Dict[str, Any]
) -> Any:
    """Handle a tool call and return the result.

    Args:
        client: The SRMClient instance.
        name: The tool name.
        arguments: The tool arguments.

    Returns:
        The JSON-serializable result of the tool call.

    Raises:
        ValueError: If the tool name is unknown.
        SRMError: If the router call fails.
    """
    if name == "srm_session":
        return {
            "hostname": client.config.hostname,
            "port": client.config.port,
            "protocol": client.config.protocol,
            "session_id": client.session_id,
        }

    elif name == "srm_wan_status":
        return {"wan_connected": client.get_wan_status()}

    elif name == "srm_traffic":
        return client.get_traffic(arguments.get("interval", "live"))

    elif name == "srm_network_utilization":
        return client.get_network_utilization()

    elif name == "srm_devices":
        return client.get_devices()

    elif name == "srm_wifi_devices":
        return client.get_wifi_devices()

    elif name == "srm_mesh_nodes":
        return client.get_mesh_nodes()

    elif name == "srm_wake_on_lan_devices":
        return client.get_wake_on_lan_devices()

    elif name == "srm_add_wake_on_lan_device":
        return {
            "success": client.add_wake_on_lan_device(
                arguments["mac"],
                host=arguments.get("host"),
            )
        }

    elif name == "srm_wake_on_lan_device":
        return {"success": client.wake_on_lan_device(arguments["mac"])}

    else:
        raise ValueError(f"Unknown tool: {name}")


def _text_result(result: Any) -> List[TextContent]:
    return [TextContent(type="text", text=json.dumps(result, indent=2))]


@server.list_tools()
async def list_tools() -> List[Tool]:
    """List available tools.

    Returns:
        List of available Tool definitions.
    """
    return _get_tool_definitions()


@server.call_tool()
async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
    """Handle tool calls.

    Args:
        name: The tool name to call.
        arguments: The arguments for the tool.

    Returns:
        List containing a single TextContent with the JSON result.
    """
    manager = get_client_manager()
    try:
        result = await manager.execute(_handle_tool_call, name, arguments or {})
        return _text_result(result)
    except ValueError as e:
        logger.warning("Invalid tool call: %s", e)
        return _text_result({"error": str(e)})
    except SRMError as e:
        logger.error("Tool call error for %s: %s", name, e)
        return _text_result({"error": str(e)})
    except Exception as e:
        logger.exception("Tool call error for %s: %s", name, e)
        return _text_result({"error": str(e)})


def main() -> None:
    """Main entry point for the MCP server."""
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # httpx logs full URLs, which carry the login password
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async def run() -> None:
        """Run the MCP server."""
        logger.info("Starting MCP Synology SRM server")
        try:
            async with stdio_server() as (read_stream, write_stream):
                await server.run(
                    read_stream,
                    write_stream,
                    server.create_initialization_options()
                )
        finally:
            await get_client_manager().reset_client()

    asyncio.run(run())


if __name__ == "__main__":
    main()
