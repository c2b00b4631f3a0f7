"""Device category taxonomy.

Read-only lookup tables keyed by the hub's device category tag: capability
flags, display names and the bilingual (English/Vietnamese) keywords used when
matching free text against a category.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class DeviceType(str, Enum):
    """Hub device category tags."""

    # Lighting
    LIGHT = "com.fibaro.light"
    DIMMER = "com.fibaro.multilevelSwitch"
    RGB_LIGHT = "com.fibaro.colorController"
    LED_STRIP = "com.fibaro.ledStrip"

    # Switches and outlets
    WALL_PLUG = "com.fibaro.wallPlug"
    RELAY_SWITCH = "com.fibaro.relaySwitch"
    BINARY_SWITCH = "com.fibaro.binarySwitch"

    # Sensors
    MOTION_SENSOR = "com.fibaro.motionSensor"
    DOOR_WINDOW_SENSOR = "com.fibaro.doorWindowSensor"
    TEMPERATURE_SENSOR = "com.fibaro.temperatureSensor"
    HUMIDITY_SENSOR = "com.fibaro.humiditySensor"
    LIGHT_SENSOR = "com.fibaro.lightSensor"
    FLOOD_SENSOR = "com.fibaro.floodSensor"
    SMOKE_SENSOR = "com.fibaro.smokeSensor"
    CO_SENSOR = "com.fibaro.coSensor"

    # Climate
    THERMOSTAT = "com.fibaro.thermostat"
    HVAC = "com.fibaro.hvac"

    # Covers
    ROLLER_SHUTTER = "com.fibaro.rollerShutter"
    VENETIAN_BLIND = "com.fibaro.venetianBlind"
    GARAGE_DOOR = "com.fibaro.garageDoor"

    # Security
    LOCK = "com.fibaro.doorLock"
    SIREN = "com.fibaro.siren"

    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DeviceCapabilities:
    """What a device category can do."""

    can_turn_on: bool = False
    can_turn_off: bool = False
    can_set_brightness: bool = False
    can_set_color: bool = False
    can_set_position: bool = False
    can_set_temperature: bool = False
    can_read_value: bool = True
    supported_properties: tuple[str, ...] = ("value",)
    supported_actions: tuple[str, ...] = ()


def _switchable(properties: tuple[str, ...], actions: tuple[str, ...] = ("turnOn", "turnOff"), **flags) -> DeviceCapabilities:
    return DeviceCapabilities(
        can_turn_on=True,
        can_turn_off=True,
        supported_properties=properties,
        supported_actions=actions,
        **flags,
    )


def _sensor(reading: str) -> DeviceCapabilities:
    return DeviceCapabilities(supported_properties=("value", reading, "battery"))


_CLIMATE_PROPERTIES = ("value", "targetTemperature", "currentTemperature", "mode")
_CLIMATE_ACTIONS = ("turnOn", "turnOff", "setTargetTemperature", "setMode")

DEVICE_CAPABILITIES: Mapping[DeviceType, DeviceCapabilities] = MappingProxyType({
    DeviceType.LIGHT: _switchable(("value", "state")),
    DeviceType.DIMMER: _switchable(
        ("value", "state", "brightness"),
        ("turnOn", "turnOff", "setValue"),
        can_set_brightness=True,
    ),
    DeviceType.RGB_LIGHT: _switchable(
        ("value", "state", "brightness", "color"),
        ("turnOn", "turnOff", "setValue", "setColor"),
        can_set_brightness=True,
        can_set_color=True,
    ),
    DeviceType.LED_STRIP: _switchable(
        ("value", "state", "brightness", "color"),
        ("turnOn", "turnOff", "setValue", "setColor"),
        can_set_brightness=True,
        can_set_color=True,
    ),
    DeviceType.WALL_PLUG: _switchable(("value", "state", "power")),
    DeviceType.RELAY_SWITCH: _switchable(("value", "state")),
    DeviceType.BINARY_SWITCH: _switchable(("value", "state")),
    DeviceType.MOTION_SENSOR: _sensor("motion"),
    DeviceType.DOOR_WINDOW_SENSOR: DeviceCapabilities(supported_properties=("value", "state", "battery")),
    DeviceType.TEMPERATURE_SENSOR: _sensor("temperature"),
    DeviceType.HUMIDITY_SENSOR: _sensor("humidity"),
    DeviceType.LIGHT_SENSOR: _sensor("lux"),
    DeviceType.FLOOD_SENSOR: _sensor("flood"),
    DeviceType.SMOKE_SENSOR: _sensor("smoke"),
    DeviceType.CO_SENSOR: _sensor("co"),
    DeviceType.THERMOSTAT: _switchable(_CLIMATE_PROPERTIES, _CLIMATE_ACTIONS, can_set_temperature=True),
    DeviceType.HVAC: _switchable(_CLIMATE_PROPERTIES, _CLIMATE_ACTIONS, can_set_temperature=True),
    DeviceType.ROLLER_SHUTTER: _switchable(
        ("value", "position", "state"),
        ("open", "close", "stop", "setValue"),
        can_set_position=True,
    ),
    DeviceType.VENETIAN_BLIND: _switchable(
        ("value", "position", "slat", "state"),
        ("open", "close", "stop", "setValue", "setSlat"),
        can_set_position=True,
    ),
    DeviceType.GARAGE_DOOR: _switchable(("value", "state"), ("open", "close", "stop")),
    DeviceType.LOCK: _switchable(("value", "state", "battery"), ("secure", "unsecure")),
    DeviceType.SIREN: _switchable(("value", "state")),
    DeviceType.UNKNOWN: DeviceCapabilities(),
})

DEVICE_TYPE_NAMES: Mapping[DeviceType, str] = MappingProxyType({
    DeviceType.LIGHT: "Light",
    DeviceType.DIMMER: "Dimmer",
    DeviceType.RGB_LIGHT: "RGB Light",
    DeviceType.LED_STRIP: "LED Strip",
    DeviceType.WALL_PLUG: "Wall Plug",
    DeviceType.RELAY_SWITCH: "Relay Switch",
    DeviceType.BINARY_SWITCH: "Switch",
    DeviceType.MOTION_SENSOR: "Motion Sensor",
    DeviceType.DOOR_WINDOW_SENSOR: "Door/Window Sensor",
    DeviceType.TEMPERATURE_SENSOR: "Temperature Sensor",
    DeviceType.HUMIDITY_SENSOR: "Humidity Sensor",
    DeviceType.LIGHT_SENSOR: "Light Sensor",
    DeviceType.FLOOD_SENSOR: "Flood Sensor",
    DeviceType.SMOKE_SENSOR: "Smoke Sensor",
    DeviceType.CO_SENSOR: "CO Sensor",
    DeviceType.THERMOSTAT: "Thermostat",
    DeviceType.HVAC: "HVAC",
    DeviceType.ROLLER_SHUTTER: "Roller Shutter",
    DeviceType.VENETIAN_BLIND: "Venetian Blind",
    DeviceType.GARAGE_DOOR: "Garage Door",
    DeviceType.LOCK: "Lock",
    DeviceType.SIREN: "Siren",
    DeviceType.UNKNOWN: "Unknown Device",
})

DEVICE_TYPE_KEYWORDS: Mapping[DeviceType, tuple[str, ...]] = MappingProxyType({
    DeviceType.LIGHT: ("light", "lamp", "bulb", "đèn"),
    DeviceType.DIMMER: ("dimmer", "light", "đèn điều chỉnh"),
    DeviceType.RGB_LIGHT: ("rgb", "color light", "đèn màu"),
    DeviceType.LED_STRIP: ("led strip", "led", "strip"),
    DeviceType.WALL_PLUG: ("plug", "outlet", "socket", "ổ cắm"),
    DeviceType.BINARY_SWITCH: ("binary switch", "switch", "công tắc"),
    DeviceType.RELAY_SWITCH: ("relay", "relay switch", "công tắc relay"),
    DeviceType.MOTION_SENSOR: ("motion", "chuyển động", "cảm biến chuyển động"),
    DeviceType.DOOR_WINDOW_SENSOR: ("door", "window", "cửa", "cửa sổ"),
    DeviceType.TEMPERATURE_SENSOR: ("temperature", "nhiệt độ", "cảm biến nhiệt độ"),
    DeviceType.HUMIDITY_SENSOR: ("humidity", "độ ẩm"),
    DeviceType.LIGHT_SENSOR: ("light sensor", "lux", "brightness sensor"),
    DeviceType.FLOOD_SENSOR: ("flood", "water", "nước"),
    DeviceType.SMOKE_SENSOR: ("smoke", "khói"),
    DeviceType.CO_SENSOR: ("carbon monoxide", "co"),
    DeviceType.THERMOSTAT: ("thermostat", "nhiệt độ"),
    DeviceType.HVAC: ("hvac", "air conditioning", "điều hòa"),
    DeviceType.ROLLER_SHUTTER: ("roller", "shutter", "rèm cuốn"),
    DeviceType.VENETIAN_BLIND: ("blind", "venetian", "rèm"),
    DeviceType.GARAGE_DOOR: ("garage", "cửa garage"),
    DeviceType.LOCK: ("lock", "khóa"),
    DeviceType.SIREN: ("siren", "alarm", "còi báo"),
    DeviceType.UNKNOWN: (),
})

# Discovery groups
DEVICE_CATEGORIES: Mapping[str, frozenset[DeviceType]] = MappingProxyType({
    "lights": frozenset({DeviceType.LIGHT, DeviceType.DIMMER, DeviceType.RGB_LIGHT, DeviceType.LED_STRIP}),
    "switches": frozenset({DeviceType.WALL_PLUG, DeviceType.RELAY_SWITCH, DeviceType.BINARY_SWITCH}),
    "sensors": frozenset({
        DeviceType.MOTION_SENSOR,
        DeviceType.DOOR_WINDOW_SENSOR,
        DeviceType.TEMPERATURE_SENSOR,
        DeviceType.HUMIDITY_SENSOR,
        DeviceType.LIGHT_SENSOR,
        DeviceType.FLOOD_SENSOR,
        DeviceType.SMOKE_SENSOR,
        DeviceType.CO_SENSOR,
    }),
    "covers": frozenset({DeviceType.ROLLER_SHUTTER, DeviceType.VENETIAN_BLIND, DeviceType.GARAGE_DOOR}),
    "climate": frozenset({DeviceType.THERMOSTAT, DeviceType.HVAC}),
    "security": frozenset({DeviceType.LOCK, DeviceType.SIREN}),
    "unknown": frozenset({DeviceType.UNKNOWN}),
})

_TAG_LOOKUP = {member.value.lower(): member for member in DeviceType}


@dataclass(frozen=True)
class DeviceTaxonomy:
    """Display names and keyword lists, injected into the device matcher."""

    names: Mapping[DeviceType, str] = field(default_factory=lambda: DEVICE_TYPE_NAMES)
    keywords: Mapping[DeviceType, tuple[str, ...]] = field(default_factory=lambda: DEVICE_TYPE_KEYWORDS)

    def name_of(self, device_type: DeviceType | None) -> str:
        return self.names.get(device_type or DeviceType.UNKNOWN, "Unknown Device")

    def keywords_of(self, device_type: DeviceType | None) -> tuple[str, ...]:
        return tuple(self.keywords.get(device_type or DeviceType.UNKNOWN, ()))


DEFAULT_TAXONOMY = DeviceTaxonomy()


def detect_device_type(raw_type: str | None) -> DeviceType:
    """Resolve a hub type string into a DeviceType.

    Exact tag matches win; otherwise falls back to substring heuristics on the
    lower-cased type (for example "com.fibaro.FGRGBW441M" stays unknown, while
    "com.fibaro.dimmerLight" resolves to a dimmer).
    """
    value = (raw_type or "").lower()
    if not value:
        return DeviceType.UNKNOWN

    exact = _TAG_LOOKUP.get(value)
    if exact is not None:
        return exact

    if "light" in value or "bulb" in value:
        if "color" in value or "rgb" in value:
            return DeviceType.RGB_LIGHT
        if "dimmer" in value or "multilevel" in value:
            return DeviceType.DIMMER
        return DeviceType.LIGHT

    if "switch" in value:
        if "dimmer" in value or "multilevel" in value:
            return DeviceType.DIMMER
        return DeviceType.BINARY_SWITCH

    if "sensor" in value:
        if "motion" in value:
            return DeviceType.MOTION_SENSOR
        if "door" in value or "window" in value:
            return DeviceType.DOOR_WINDOW_SENSOR
        if "temperature" in value:
            return DeviceType.TEMPERATURE_SENSOR
        if "humidity" in value:
            return DeviceType.HUMIDITY_SENSOR
        if "light" in value or "lux" in value:
            return DeviceType.LIGHT_SENSOR
        if "flood" in value or "water" in value:
            return DeviceType.FLOOD_SENSOR
        if "smoke" in value:
            return DeviceType.SMOKE_SENSOR
        if "co" in value:
            return DeviceType.CO_SENSOR

    if "thermostat" in value:
        return DeviceType.THERMOSTAT
    if "hvac" in value:
        return DeviceType.HVAC
    if "roller" in value or "shutter" in value:
        return DeviceType.ROLLER_SHUTTER
    if "blind" in value:
        return DeviceType.VENETIAN_BLIND
    if "garage" in value:
        return DeviceType.GARAGE_DOOR
    if "lock" in value:
        return DeviceType.LOCK
    if "siren" in value or "alarm" in value:
        return DeviceType.SIREN
    if "plug" in value or "outlet" in value:
        return DeviceType.WALL_PLUG

    return DeviceType.UNKNOWN


def get_device_capabilities(device_type: DeviceType) -> DeviceCapabilities:
    return DEVICE_CAPABILITIES[device_type]


def can_device_perform_action(device_type: DeviceType, action: str) -> bool:
    return action in DEVICE_CAPABILITIES[device_type].supported_actions


def get_device_type_name(device_type: DeviceType) -> str:
    return DEFAULT_TAXONOMY.name_of(device_type)


def device_category(device_type: DeviceType) -> str:
    """Return the discovery group ("lights", "sensors", ...) of a device type."""
    for category, members in DEVICE_CATEGORIES.items():
        if device_type in members:
            return category
    return "unknown"


def filter_devices(
    devices: Iterable,
    category: str = "all",
    room_id: int | None = None,
    include_hidden: bool = False,
) -> list:
    """Filter devices by discovery group and optional room id.

    Args:
        devices: Device records
        category: "all" or one of the DEVICE_CATEGORIES keys
        room_id: keep only devices in this room when given
        include_hidden: also keep devices marked invisible or disabled

    Returns:
        Matching devices in their original order
    """
    selected = []
    for device in devices:
        if not include_hidden and not (device.visible and device.enabled):
            continue
        if category != "all" and device_category(device.device_type) != category:
            continue
        if room_id is not None and device.room_id != room_id:
            continue
        selected.append(device)
    return selected
