"""Tests for confidence aggregation."""

import unittest

from context_processor.models import Device, DeviceIntent, DeviceMatch
from context_processor.scoring import calculate_confidence


def match(confidence):
    return DeviceMatch(device=Device(id=1, name="Lamp"), confidence=confidence)


class TestCalculateConfidence(unittest.TestCase):
    """calculate_confidence."""

    def test_nothing(self):
        """No signals give zero confidence."""
        self.assertEqual(calculate_confidence(DeviceIntent.UNKNOWN, [], {}), 0.0)

    def test_intent_only(self):
        """A known intent alone contributes 0.3."""
        self.assertAlmostEqual(calculate_confidence(DeviceIntent.TURN_ON, [], {}), 0.3)

    def test_match_contribution_capped(self):
        """A strong match contributes at most 0.5."""
        self.assertAlmostEqual(calculate_confidence(DeviceIntent.UNKNOWN, [match(1.7)], {}), 0.5)

    def test_small_match_used_as_is(self):
        """A weak match contributes its own score."""
        self.assertAlmostEqual(calculate_confidence(DeviceIntent.TURN_ON, [match(0.2)], {}), 0.5)

    def test_only_top_match_counts(self):
        """Only the first match is counted."""
        score = calculate_confidence(DeviceIntent.UNKNOWN, [match(0.3), match(0.2)], {})
        self.assertAlmostEqual(score, 0.3)

    def test_parameters(self):
        """Any extracted parameter contributes 0.2."""
        self.assertAlmostEqual(
            calculate_confidence(DeviceIntent.UNKNOWN, [], {"room": "kitchen"}),
            0.2,
        )

    def test_none_valued_parameter_counts(self):
        """A parameter key with a None value still counts."""
        self.assertAlmostEqual(
            calculate_confidence(DeviceIntent.SET_COLOR, [], {"color": None}),
            0.5,
        )

    def test_all_signals_clamped_to_one(self):
        """The combined score never exceeds 1.0."""
        score = calculate_confidence(DeviceIntent.TURN_ON, [match(2.6)], {"room": "x"})
        self.assertLessEqual(score, 1.0)
        self.assertAlmostEqual(score, 1.0)


if __name__ == "__main__":
    unittest.main()
