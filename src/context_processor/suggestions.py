"""Hints for commands the processor could not resolve confidently."""

from __future__ import annotations

from context_processor.matcher import DEFAULT_MIN_CONFIDENCE, DeviceMatcher
from context_processor.text import partial_match_score

NO_MATCH_HINTS: tuple[str, ...] = (
    'Try using device ID like "turn on device 5"',
    'Specify room name like "living room lights"',
    'Use device type like "all sensors" or "bedroom lights"',
)
ACTIONS_HINT = "Available actions: turn on/off, set brightness, change color, open/close"

DEFAULT_DID_YOU_MEAN_THRESHOLD = 85.0


def closest_device_name(text: str, matcher: DeviceMatcher, threshold: float) -> str | None:
    """Return the device name that best fuzzy-matches text, if above threshold.

    Args:
        text: normalized command text
        matcher: matcher holding the device snapshot
        threshold: minimum rapidfuzz partial_ratio, 0-100

    Returns:
        the best device name, or None
    """
    best_name = None
    best_score = 0.0
    for device in matcher.devices:
        name = (device.name or "").lower()
        score = partial_match_score(text, name) * 100
        if score > best_score:
            best_name, best_score = device.name, score
    if best_name is None or best_score < threshold:
        return None
    return best_name


def generate_suggestions(
    text: str,
    matcher: DeviceMatcher,
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    did_you_mean: bool = False,
    did_you_mean_threshold: float = DEFAULT_DID_YOU_MEAN_THRESHOLD,
) -> list[str]:
    """Build hints for a low-confidence command.

    Matches are recomputed from the text rather than reused.

    Args:
        text: normalized command text
        matcher: matcher over the same snapshot the command was processed with
        min_confidence: match score a device needs to count as matched
        did_you_mean: add a near-miss device name hint when nothing matched
        did_you_mean_threshold: rapidfuzz score needed for that hint

    Returns:
        hint strings, always ending with the available actions hint
    """
    suggestions: list[str] = []

    if not matcher.match(text, min_confidence=min_confidence):
        suggestions.extend(NO_MATCH_HINTS)
        if did_you_mean:
            name = closest_device_name(text, matcher, did_you_mean_threshold)
            if name:
                suggestions.append(f'Did you mean "{name}"?')

    suggestions.append(ACTIONS_HINT)
    return suggestions
