"""Overall confidence for a processed command."""

from typing import Any, Mapping, Sequence

from context_processor.models import DeviceIntent, DeviceMatch

INTENT_WEIGHT = 0.3
MAX_MATCH_CONTRIBUTION = 0.5
PARAMETERS_WEIGHT = 0.2


def calculate_confidence(
    intent: DeviceIntent,
    device_matches: Sequence[DeviceMatch],
    parameters: Mapping[str, Any],
) -> float:
    """Combine intent, device match and parameter signals.

    Only the top match counts, capped at MAX_MATCH_CONTRIBUTION; the result is
    clamped to [0, 1]. This is the only place confidence gets bounded.

    Args:
        intent: resolved intent
        device_matches: matches by descending confidence
        parameters: extracted parameters

    Returns:
        confidence in [0, 1]
    """
    confidence = 0.0

    if intent != DeviceIntent.UNKNOWN:
        confidence += INTENT_WEIGHT

    if device_matches:
        confidence += min(MAX_MATCH_CONTRIBUTION, device_matches[0].confidence)

    if parameters:
        confidence += PARAMETERS_WEIGHT

    return min(1.0, max(0.0, confidence))
