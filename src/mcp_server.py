"""
MCP server exposing the smart-home context processor.

Tools interpret commands and plan the hub call; executing the call is left to
the caller's transport.
"""
import logging
import os
from dataclasses import dataclass

import uvicorn
from mcp.server.fastmcp import FastMCP

from context_processor.device_types import DEVICE_CATEGORIES, filter_devices
from context_processor.dispatch import plan_dispatch
from context_processor.inventory import load_inventory
from context_processor.processor import ContextProcessor, ProcessorConfig
from context_processor.rendering import summarize_context, summarize_devices

logger = logging.getLogger(__name__)


@dataclass
class ServerSettings:
    inventory_path: str | None = None
    host: str = "0.0.0.0"
    port: int = 8002
    log_level: str = "INFO"
    did_you_mean: bool = False

    @classmethod
    def from_env(cls) -> "ServerSettings":
        return cls(
            inventory_path=os.getenv("SMART_HOME_INVENTORY") or None,
            host=os.getenv("MCP_HOST", "0.0.0.0"),
            port=int(os.getenv("MCP_PORT", "8002")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            did_you_mean=os.getenv("ENABLE_DID_YOU_MEAN") == "1",
        )


settings = ServerSettings.from_env()
processor = ContextProcessor(config=ProcessorConfig(did_you_mean=settings.did_you_mean))

mcp = FastMCP("smart-home-context")


def reload_from_file(path: str | None = None) -> str:
    """Reload the processor snapshot from the inventory file."""
    path = path or settings.inventory_path
    if not path:
        return "No inventory file configured (set SMART_HOME_INVENTORY)"
    devices, rooms = load_inventory(path)
    processor.update_inventory(devices, rooms)
    return f"Loaded {len(devices)} devices and {len(rooms)} rooms from {path}"


@mcp.tool()
def smart_device_control(command: str, force_device_id: int | None = None) -> str:
    """
    Interpret a natural-language device command (English or Vietnamese).

    Args:
        command: e.g. "turn on bedroom lights", "đóng rèm phòng khách"
        force_device_id: target this device id instead of the best match
    """
    context = processor.process_context(command)
    try:
        plan = plan_dispatch(context, processor.snapshot.devices, force_device_id=force_device_id)
    except ValueError as e:
        logger.warning("dispatch_failed command=%s error=%s", command, e)
        return f"Error: {e}"
    return summarize_context(context, plan)


@mcp.tool()
def discover_devices(
    filter_type: str = "all",
    room_id: int | None = None,
    include_hidden: bool = False,
) -> str:
    """
    List known devices, optionally by category and room.

    Args:
        filter_type: all, lights, switches, sensors, covers, climate, security or unknown
        room_id: only devices in this room
        include_hidden: also list devices marked invisible or disabled
    """
    if filter_type != "all" and filter_type not in DEVICE_CATEGORIES:
        return f"Error: unknown filter_type {filter_type!r}"
    snapshot = processor.snapshot
    devices = filter_devices(snapshot.devices, filter_type, room_id, include_hidden)
    return summarize_devices(devices, dict(snapshot.rooms))


@mcp.tool()
def reload_inventory() -> str:
    """Reload devices and rooms from the configured inventory file."""
    try:
        return reload_from_file()
    except (OSError, ValueError) as e:
        logger.error("inventory_reload_failed error=%s", e)
        return f"Error: {e}"


def main():
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if settings.inventory_path:
        logger.info(reload_from_file())
    app = mcp.streamable_http_app()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
