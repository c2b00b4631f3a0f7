"""Device matching.

Scores every device in the snapshot against the normalized command text using
name, id, category and room signals.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping

from context_processor.device_types import DEFAULT_TAXONOMY, DeviceCapabilities, DeviceTaxonomy
from context_processor.models import Device, DeviceMatch
from context_processor.text import contains_any, contains_substring, fuzzy_word_match

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5
DEFAULT_MIN_CONFIDENCE = 0.1

_DEVICE_ID_RE = re.compile(r"\b(?:number|số|id|device|thiết bị)\s*(\d+)\b")


def extract_device_id(text: str) -> int | None:
    """Return the device id referenced as "id 12", "số 12" or "device 12"."""
    match = _DEVICE_ID_RE.search(text)
    if not match:
        return None
    return int(match.group(1))


def suggested_actions(capabilities: DeviceCapabilities | None) -> tuple[str, ...]:
    """Derive the action names a device supports from its capability flags."""
    if capabilities is None:
        return ()

    actions: list[str] = []
    if capabilities.can_turn_on:
        actions.append("turn_on")
    if capabilities.can_turn_off:
        actions.append("turn_off")
    if capabilities.can_set_brightness:
        actions.append("set_brightness")
    if capabilities.can_set_color:
        actions.append("set_color")
    if capabilities.can_set_position:
        actions.append("set_position")
    if capabilities.can_set_temperature:
        actions.append("set_temperature")
    return tuple(actions)


class DeviceMatcher:
    """Multi-signal device matcher.

    Signal weights add up without an upper bound, so a device named in the
    text and sitting in the named room outranks one that only shares a room.
    """

    WEIGHT_EXACT_NAME = 0.8
    WEIGHT_FUZZY_NAME = 0.6
    WEIGHT_ID = 0.9
    WEIGHT_TYPE = 0.4
    WEIGHT_ROOM = 0.5

    def __init__(
        self,
        devices: Iterable[Device],
        rooms: Mapping[int, str],
        taxonomy: DeviceTaxonomy = DEFAULT_TAXONOMY,
    ):
        """Initialize the matcher.

        Args:
            devices: device snapshot
            rooms: room id to display name
            taxonomy: category names and keywords
        """
        self.devices = tuple(devices)
        self.rooms = rooms
        self.taxonomy = taxonomy

    def match(
        self,
        text: str,
        top_k: int = DEFAULT_TOP_K,
        min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    ) -> list[DeviceMatch]:
        """Score all devices against normalized text.

        Args:
            text: normalized command text
            top_k: maximum number of matches returned
            min_confidence: devices at or below this score are dropped

        Returns:
            matches by descending confidence, ties in snapshot order
        """
        referenced_id = extract_device_id(text)
        matches: list[DeviceMatch] = []

        for device in self.devices:
            match = self.score_device(device, text, referenced_id)
            if match.confidence > min_confidence:
                matches.append(match)

        # sorted() is stable, equal scores keep snapshot order
        matches = sorted(matches, key=lambda m: m.confidence, reverse=True)
        return matches[:top_k]

    def score_device(
        self,
        device: Device,
        text: str,
        referenced_id: int | None = None,
    ) -> DeviceMatch:
        """Compute the additive score and reason tags for one device."""
        confidence = 0.0
        matched_by: list[str] = []

        # 1. name
        device_name = (device.name or "").lower()
        if contains_substring(text, device_name):
            confidence += self.WEIGHT_EXACT_NAME
            matched_by.append("exact_name")
        elif fuzzy_word_match(device_name, text):
            confidence += self.WEIGHT_FUZZY_NAME
            matched_by.append("fuzzy_name")

        # 2. explicit id
        if referenced_id is not None and referenced_id == device.id:
            confidence += self.WEIGHT_ID
            matched_by.append("id")

        # 3. category
        type_name = self.taxonomy.name_of(device.device_type).lower()
        if contains_substring(text, type_name) or contains_any(
            text, self.taxonomy.keywords_of(device.device_type)
        ):
            confidence += self.WEIGHT_TYPE
            matched_by.append("type")

        # 4. room
        room_name = (self.rooms.get(device.room_id) or "").lower() if device.room_id is not None else ""
        if contains_substring(text, room_name):
            confidence += self.WEIGHT_ROOM
            matched_by.append("room")

        if matched_by:
            logger.debug(
                "device_id=%s confidence=%.2f matched_by=%s",
                device.id,
                confidence,
                matched_by,
            )

        return DeviceMatch(
            device=device,
            confidence=confidence,
            matched_by=tuple(matched_by),
            suggested_actions=suggested_actions(device.capabilities),
        )
