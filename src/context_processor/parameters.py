"""Control parameter extraction.

Pulls brightness, position, temperature, colour, room and cover action values
out of normalized command text. Which values are read depends on the intent.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from context_processor.models import DeviceIntent
from context_processor.text import contains_substring

_NUMBER_RE = re.compile(r"(\d+)%?")

_COVER_OPEN_RE = re.compile(r"\b(open|mở)\b")
_COVER_CLOSE_RE = re.compile(r"\b(close|đóng)\b")
_COVER_STOP_RE = re.compile(r"\b(stop|dừng)\b")

# keyword -> canonical colour, scanned in order
COLOR_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("red", "red"),
    ("đỏ", "red"),
    ("green", "green"),
    ("xanh lá", "green"),
    ("blue", "blue"),
    ("xanh dương", "blue"),
    ("yellow", "yellow"),
    ("vàng", "yellow"),
    ("purple", "purple"),
    ("tím", "purple"),
    ("pink", "pink"),
    ("hồng", "pink"),
    ("orange", "orange"),
    ("cam", "orange"),
    ("white", "white"),
    ("trắng", "white"),
    ("cyan", "cyan"),
    ("magenta", "magenta"),
)

ROOM_KEYWORDS: tuple[str, ...] = (
    "living room",
    "bedroom",
    "kitchen",
    "bathroom",
    "phòng khách",
    "phòng ngủ",
    "nhà bếp",
    "phòng tắm",
)


def _clamp_percent(value: int) -> int:
    return min(100, max(0, value))


def extract_number(text: str) -> int | None:
    """Return the first run of digits in text, if any."""
    match = _NUMBER_RE.search(text)
    if not match:
        return None
    return int(match.group(1))


def extract_color(text: str) -> str | None:
    """Return the canonical colour of the first colour keyword found."""
    for keyword, color in COLOR_KEYWORDS:
        if keyword in text:
            return color
    return None


def extract_room(text: str, rooms: Mapping[int, str]) -> str | None:
    """Find the room a command refers to.

    Known room names are tried first, in ascending room id; common room words
    are the fallback.

    Args:
        text: normalized command text
        rooms: room id to display name

    Returns:
        the room display name, a fallback room keyword, or None
    """
    for room_id in sorted(rooms):
        room_name = rooms[room_id]
        if contains_substring(text, (room_name or "").lower()):
            return room_name

    for keyword in ROOM_KEYWORDS:
        if keyword in text:
            return keyword

    return None


def extract_cover_action(text: str) -> str | None:
    """Return the cover action named in text.

    Each keyword test overwrites the previous one, so with several present the
    result is stop over close over open.
    """
    action = None
    if _COVER_OPEN_RE.search(text):
        action = "open"
    if _COVER_CLOSE_RE.search(text):
        action = "close"
    if _COVER_STOP_RE.search(text):
        action = "stop"
    return action


def extract_parameters(
    text: str,
    intent: DeviceIntent,
    rooms: Mapping[int, str] | None = None,
) -> dict[str, Any]:
    """Extract the control parameters for an intent.

    Args:
        text: normalized command text
        intent: resolved intent
        rooms: room id to display name

    Returns:
        parameter name to value; empty when nothing was found
    """
    params: dict[str, Any] = {}

    value = extract_number(text)
    if value is not None:
        if intent == DeviceIntent.SET_BRIGHTNESS:
            params["brightness"] = _clamp_percent(value)
        elif intent == DeviceIntent.SET_TEMPERATURE:
            params["temperature"] = value
        elif intent == DeviceIntent.CONTROL_COVER:
            params["position"] = _clamp_percent(value)

    if intent == DeviceIntent.SET_COLOR:
        params["color"] = extract_color(text)

    room = extract_room(text, rooms or {})
    if room:
        params["room"] = room

    if intent == DeviceIntent.CONTROL_COVER:
        action = extract_cover_action(text)
        if action:
            params["action"] = action

    return params
