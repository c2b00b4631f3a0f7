"""Dispatch planning.

Turns a ProcessedContext into the hub call a transport would issue: which
device, which action method, which arguments. Nothing here talks to the hub.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from context_processor.models import Device, DeviceIntent, ProcessedContext

logger = logging.getLogger(__name__)

DEFAULT_CLOSE_THRESHOLD = 0.1

COLOR_RGB: dict[str, tuple[int, int, int]] = {
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "purple": (128, 0, 128),
    "pink": (255, 192, 203),
    "orange": (255, 165, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "white": (255, 255, 255),
    "black": (0, 0, 0),
    "lime": (50, 205, 50),
    "violet": (238, 130, 238),
    "đỏ": (255, 0, 0),
    "xanh lá": (0, 255, 0),
    "xanh dương": (0, 0, 255),
    "vàng": (255, 255, 0),
    "tím": (128, 0, 128),
    "hồng": (255, 192, 203),
    "cam": (255, 165, 0),
    "trắng": (255, 255, 255),
    "đen": (0, 0, 0),
}

_SIMPLE_METHODS = {
    DeviceIntent.TURN_ON: "turnOn",
    DeviceIntent.TURN_OFF: "turnOff",
    DeviceIntent.LOCK: "secure",
    DeviceIntent.UNLOCK: "unsecure",
}
_READ_INTENTS = {DeviceIntent.GET_STATUS, DeviceIntent.GET_SENSOR_DATA}


@dataclass
class DispatchPlan:
    """A hub call, or the reason none could be planned."""

    intent: DeviceIntent
    device_id: int | None = None
    method: str | None = None
    arguments: list[Any] = field(default_factory=list)
    hint: str | None = None
    alternatives: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "intent": self.intent.value,
            "device_id": self.device_id,
            "method": self.method,
            "arguments": list(self.arguments),
            "hint": self.hint,
            "alternatives": list(self.alternatives),
        }


def color_to_rgb(color: str | None) -> tuple[int, int, int]:
    """Resolve a colour name to RGB, defaulting to white."""
    if not color:
        return COLOR_RGB["white"]
    return COLOR_RGB.get(color.lower().strip(), COLOR_RGB["white"])


def _method_for(intent: DeviceIntent, parameters: dict[str, Any]) -> tuple[str | None, list[Any]]:
    if intent in _SIMPLE_METHODS:
        return _SIMPLE_METHODS[intent], []
    if intent == DeviceIntent.SET_BRIGHTNESS:
        if "brightness" not in parameters:
            return None, []
        return "setValue", [parameters["brightness"]]
    if intent == DeviceIntent.SET_COLOR:
        r, g, b = color_to_rgb(parameters.get("color"))
        return "setColor", [r, g, b, 0]
    if intent == DeviceIntent.SET_TEMPERATURE:
        if "temperature" not in parameters:
            return None, []
        return "setTargetTemperature", [parameters["temperature"]]
    if intent == DeviceIntent.CONTROL_COVER:
        action = parameters.get("action")
        if action:
            return action, []
        if "position" in parameters:
            return "setValue", [parameters["position"]]
    return None, []


def _close_alternatives(context: ProcessedContext, threshold: float) -> list[int]:
    matches = context.device_matches
    if len(matches) < 2:
        return []
    top = matches[0].confidence
    return [m.device.id for m in matches[1:] if top - m.confidence < threshold]


def plan_dispatch(
    context: ProcessedContext,
    devices: Iterable[Device],
    force_device_id: int | None = None,
    close_threshold: float = DEFAULT_CLOSE_THRESHOLD,
) -> DispatchPlan:
    """Plan the hub call for a processed command.

    Args:
        context: processed command
        devices: device snapshot, used to resolve a forced id
        force_device_id: target this device instead of the top match
        close_threshold: matches scoring within this of the top match are
            reported as alternatives

    Returns:
        DispatchPlan; hint explains a missing method or an ambiguous target

    Raises:
        ValueError: force_device_id is not in the snapshot
    """
    plan = DispatchPlan(intent=context.intent)

    if force_device_id is not None:
        target = next((d for d in devices if d.id == force_device_id), None)
        if target is None:
            raise ValueError(f"device {force_device_id} not found")
    else:
        top = context.top_match
        if top is None:
            plan.hint = "no_device_match"
            return plan
        target = top.device
        plan.alternatives = _close_alternatives(context, close_threshold)
        if plan.alternatives:
            plan.hint = "multiple_close_matches"

    plan.device_id = target.id

    if context.intent == DeviceIntent.UNKNOWN:
        plan.hint = plan.hint or "unknown_intent"
        return plan
    if context.intent in _READ_INTENTS:
        readable = target.capabilities is None or target.capabilities.can_read_value
        plan.hint = "unsupported_action" if not readable else plan.hint or "read_only"
        return plan

    method, arguments = _method_for(context.intent, context.parameters)
    if method is None:
        plan.hint = plan.hint or "missing_parameters"
        return plan

    supported = target.capabilities.supported_actions if target.capabilities else ()
    if method not in supported:
        logger.info(
            "unsupported_action device_id=%s method=%s supported=%s",
            target.id,
            method,
            list(supported),
        )
        plan.hint = "unsupported_action"
        return plan

    plan.method = method
    plan.arguments = arguments
    logger.info(
        "dispatch_plan device_id=%s method=%s arguments=%s hint=%s",
        plan.device_id,
        plan.method,
        plan.arguments,
        plan.hint,
    )
    return plan
