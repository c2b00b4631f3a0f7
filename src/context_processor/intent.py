"""Intent classification.

An ordered table of intent rules, evaluated top to bottom. The first rule with
a matching pattern decides the intent, so rule order is also the tie-break
between overlapping keywords ("mở" opens a device before it opens a blind).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from context_processor.models import DeviceIntent


@dataclass(frozen=True)
class IntentRule:
    """One intent and its alternative trigger patterns."""

    intent: DeviceIntent
    patterns: tuple[re.Pattern[str], ...]

    def matches(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.patterns)


def _rule(intent: DeviceIntent, *patterns: str) -> IntentRule:
    return IntentRule(intent=intent, patterns=tuple(re.compile(p) for p in patterns))


INTENT_RULES: tuple[IntentRule, ...] = (
    _rule(
        DeviceIntent.TURN_ON,
        r"\b(turn on|switch on|bật|mở)\b",
        r"\b(start|khởi động)\b.*\b(light|đèn|switch|công tắc)\b",
    ),
    _rule(
        DeviceIntent.TURN_OFF,
        r"\b(turn off|switch off|tắt|đóng)\b",
        r"\b(stop|dừng)\b.*\b(light|đèn|switch|công tắc)\b",
    ),
    _rule(
        DeviceIntent.SET_BRIGHTNESS,
        r"\b(brightness|độ sáng|dim|brighten)\b",
        r"\b(set|chỉnh|điều chỉnh)\b.*\b(\d+%|\d+ percent|level)\b",
    ),
    _rule(
        DeviceIntent.SET_COLOR,
        r"\b(color|màu|colour)\b",
        r"\b(red|green|blue|yellow|purple|pink|orange|đỏ|xanh|vàng|tím|hồng|cam)\b",
    ),
    _rule(
        DeviceIntent.CONTROL_COVER,
        r"\b(open|close|mở|đóng)\b.*\b(blind|curtain|shutter|rèm|cửa sổ)\b",
        r"\b(roller|venetian|garage)\b",
    ),
    _rule(
        DeviceIntent.SET_TEMPERATURE,
        r"\b(temperature|nhiệt độ|thermostat)\b",
        r"\b(heat|cool|warm|cold|nóng|lạnh)\b",
    ),
    _rule(DeviceIntent.LOCK, r"\b(lock|khóa|secure)\b"),
    _rule(DeviceIntent.UNLOCK, r"\b(unlock|mở khóa|unsecure)\b"),
    _rule(
        DeviceIntent.GET_STATUS,
        r"\b(status|trạng thái|state|check|kiểm tra)\b",
        r"\b(show|hiển thị|display|list)\b.*\b(all|tất cả)\b",
    ),
    _rule(
        DeviceIntent.GET_SENSOR_DATA,
        r"\b(sensor|cảm biến|reading|đọc)\b",
        r"\b(temperature|humidity|motion|nhiệt độ|độ ẩm|chuyển động)\b",
    ),
)


def classify_intent(text: str, rules: tuple[IntentRule, ...] = INTENT_RULES) -> DeviceIntent:
    """Map normalized text to exactly one intent.

    Args:
        text: normalized command text
        rules: ordered intent rules

    Returns:
        the intent of the first matching rule, or DeviceIntent.UNKNOWN
    """
    for rule in rules:
        if rule.matches(text):
            return rule.intent
    return DeviceIntent.UNKNOWN
