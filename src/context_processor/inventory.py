"""Inventory adapter.

Turns raw hub records (as returned by /api/devices and /api/rooms) into the
Device snapshot and room map the processor consumes.
"""

from __future__ import annotations

import logging
import unicodedata
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from context_processor.device_types import detect_device_type, get_device_capabilities
from context_processor.models import Device

logger = logging.getLogger(__name__)


def _to_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be an integer, got {value!r}") from exc


def _name(value: Any) -> str:
    return unicodedata.normalize("NFC", str(value or ""))


def device_from_raw(record: Mapping[str, Any]) -> Device:
    """Build a Device from a raw hub record.

    Args:
        record: mapping with id, name, type, roomID and optional
            enabled/visible/properties

    Returns:
        Device with its category and capabilities resolved

    Raises:
        ValueError: record is not a mapping, or id is missing or not an integer
    """
    if not isinstance(record, Mapping):
        raise ValueError(f"device record must be a mapping, got {record!r}")
    if "id" not in record:
        raise ValueError("device record has no id")
    device_id = _to_int(record["id"], "id")

    room_id = record.get("roomID")
    raw_type = str(record.get("type") or "")
    device_type = detect_device_type(raw_type)

    properties = record.get("properties")
    return Device(
        id=device_id,
        name=_name(record.get("name")),
        device_type=device_type,
        room_id=_to_int(room_id, "roomID") if room_id is not None else None,
        capabilities=get_device_capabilities(device_type),
        raw_type=raw_type,
        enabled=bool(record.get("enabled", True)),
        visible=bool(record.get("visible", True)),
        properties=dict(properties) if isinstance(properties, Mapping) else {},
    )


def rooms_from_raw(records: Iterable[Mapping[str, Any]]) -> dict[int, str]:
    """Build the room id to name map from raw room records."""
    rooms: dict[int, str] = {}
    for record in records:
        if not isinstance(record, Mapping):
            raise ValueError(f"room record must be a mapping, got {record!r}")
        room_id = _to_int(record.get("id"), "room id")
        rooms[room_id] = _name(record.get("name"))
    return rooms


def load_inventory(path: str | Path) -> tuple[list[Device], dict[int, str]]:
    """Load devices and rooms from a YAML (or JSON) inventory file.

    The file holds two lists, `devices` and `rooms`, in the hub's raw format.

    Args:
        path: inventory file path

    Returns:
        (devices, rooms)

    Raises:
        OSError: the file cannot be read
        ValueError: the file is not valid YAML or a record is malformed
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"inventory file {path} is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"inventory file {path} must contain a mapping")

    devices = [device_from_raw(r) for r in data.get("devices") or []]
    rooms = rooms_from_raw(data.get("rooms") or [])
    logger.info("inventory_loaded path=%s devices=%s rooms=%s", path, len(devices), len(rooms))
    return devices, rooms
