"""Core data models.

Devices, intents, device matches and the processed context returned for one
command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from context_processor.device_types import DeviceCapabilities, DeviceType


class DeviceIntent(str, Enum):
    """Action category a command is classified into."""

    TURN_ON = "turn_on"
    TURN_OFF = "turn_off"
    SET_BRIGHTNESS = "set_brightness"
    SET_COLOR = "set_color"
    CONTROL_COVER = "control_cover"
    SET_TEMPERATURE = "set_temperature"
    LOCK = "lock"
    UNLOCK = "unlock"
    GET_STATUS = "get_status"
    GET_SENSOR_DATA = "get_sensor_data"
    BATCH_CONTROL = "batch_control"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Device:
    """A hub device, with its category and capabilities already resolved."""

    id: int
    name: str
    device_type: DeviceType = DeviceType.UNKNOWN
    room_id: int | None = None
    capabilities: DeviceCapabilities | None = None
    raw_type: str = ""
    enabled: bool = True
    visible: bool = True
    properties: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class DeviceMatch:
    """A scored hypothesis that a device is the target of a command.

    confidence is additive over the match reasons and is not clamped.
    """

    device: Device
    confidence: float
    matched_by: tuple[str, ...] = ()
    suggested_actions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "device_id": self.device.id,
            "name": self.device.name,
            "confidence": round(self.confidence, 3),
            "matched_by": list(self.matched_by),
            "suggested_actions": list(self.suggested_actions),
        }


@dataclass(frozen=True)
class ProcessedContext:
    """Result of processing one command."""

    intent: DeviceIntent
    device_matches: tuple[DeviceMatch, ...] = ()
    parameters: dict[str, Any] = field(default_factory=dict)
    confidence: float = 0.0
    suggestions: tuple[str, ...] | None = None

    @property
    def top_match(self) -> DeviceMatch | None:
        return self.device_matches[0] if self.device_matches else None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "intent": self.intent.value,
            "confidence": round(self.confidence, 3),
            "parameters": dict(self.parameters),
            "device_matches": [m.to_dict() for m in self.device_matches],
        }
        if self.suggestions is not None:
            data["suggestions"] = list(self.suggestions)
        return data
