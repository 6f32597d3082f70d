#!/usr/bin/env python3
"""Print a status report of a Synology SRM router.

Reads SRM_HOST, SRM_USERNAME, SRM_PASSWORD (and the other SRM_* settings)
from the environment or a .env file. Set SRM_KEEP_SESSION=true and reuse
the printed session id as SRM_SESSION_ID to skip login on the next run.
"""

import json
import logging

from dotenv import load_dotenv

from mcp_synology_srm import ClientConfig, SRMClient, SRMError

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger("router_report")


def main():
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # httpx logs full URLs, which carry the login password
    logging.getLogger("httpx").setLevel(logging.WARNING)
    config = ClientConfig.from_env()
    if not config.password and not config.session_id:
        print("Error: SRM_PASSWORD not set in environment or .env file")
        print("Create a .env file with:")
        print("  SRM_HOST=10.0.0.1")
        print("  SRM_USERNAME=admin")
        print("  SRM_PASSWORD=your_password")
        return

    try:
        with SRMClient.from_config(config) as client:
            logger.info("sid: %s", client.session_id)
            logger.info("WAN status: %s", client.get_wan_status())

            for traffic in client.get_traffic("live"):
                logger.info("%s => down: %s, up: %s",
                            traffic.get("deviceID"), traffic.get("download"), traffic.get("upload"))

            for network in client.get_network_utilization():
                logger.info("%s => rx: %s, tx: %s",
                            network.get("device"), network.get("rx"), network.get("tx"))

            logger.info(json.dumps(client.get_wifi_devices()))
            logger.info(json.dumps(client.get_mesh_nodes()))
            logger.info(json.dumps(client.get_devices()))
            logger.info(json.dumps(client.get_wake_on_lan_devices()))
    except SRMError as e:
        logger.error("%s", e)


if __name__ == "__main__":
    main()
