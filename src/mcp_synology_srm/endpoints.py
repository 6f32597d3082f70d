"""SRM web API paths, API names and accepted argument values.

Each API is reached through a CGI path relative to ``/webapi``. Extend this
module when new APIs are wrapped by the client.
"""

from __future__ import annotations

from typing import Tuple

# CGI paths
AUTH_PATH: str = "auth.cgi"
ENTRY_PATH: str = "entry.cgi"

# Authentication
AUTH_API: str = "SYNO.API.Auth"
AUTH_VERSION: int = 2

# Monitoring
WAN_STATUS_API: str = "SYNO.Mesh.Network.WANStatus"
TRAFFIC_API: str = "SYNO.Core.NGFW.Traffic"
UTILIZATION_API: str = "SYNO.Core.System.Utilization"

# Devices and mesh
DEVICE_API: str = "SYNO.Core.Network.NSM.Device"
WIFI_DEVICE_API: str = "SYNO.Mesh.Network.WifiDevice"
MESH_NODE_API: str = "SYNO.Mesh.Node.List"

# Wake on LAN
WOL_API: str = "SYNO.Core.Network.WOL"

TRAFFIC_INTERVALS: Tuple[str, ...] = ("live", "day", "week", "month")
DEVICE_CONNECTION_TYPES: Tuple[str, ...] = ("all",)
