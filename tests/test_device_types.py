"""Tests for the device category taxonomy."""

import unittest

from context_processor.device_types import (
    DEFAULT_TAXONOMY,
    DEVICE_CAPABILITIES,
    DEVICE_CATEGORIES,
    DEVICE_TYPE_KEYWORDS,
    DEVICE_TYPE_NAMES,
    DeviceType,
    can_device_perform_action,
    detect_device_type,
    device_category,
    filter_devices,
    get_device_capabilities,
    get_device_type_name,
)
from context_processor.models import Device


class TestTables(unittest.TestCase):
    """Every category is described in every table."""

    def test_all_types_covered(self):
        """Every DeviceType has capabilities, a name and keywords."""
        for device_type in DeviceType:
            self.assertIn(device_type, DEVICE_CAPABILITIES)
            self.assertIn(device_type, DEVICE_TYPE_NAMES)
            self.assertIn(device_type, DEVICE_TYPE_KEYWORDS)

    def test_tables_are_read_only(self):
        """The shared tables reject writes."""
        with self.assertRaises(TypeError):
            DEVICE_CAPABILITIES[DeviceType.LIGHT] = None

    def test_every_type_in_one_category(self):
        """Each type sits in exactly one discovery group."""
        for device_type in DeviceType:
            groups = [name for name, members in DEVICE_CATEGORIES.items() if device_type in members]
            self.assertEqual(len(groups), 1, msg=device_type)


class TestDetectDeviceType(unittest.TestCase):
    """detect_device_type."""

    def test_exact_tags(self):
        """Exact tags resolve case-insensitively."""
        self.assertEqual(detect_device_type("com.fibaro.multilevelSwitch"), DeviceType.DIMMER)
        self.assertEqual(detect_device_type("com.fibaro.doorLock"), DeviceType.LOCK)
        self.assertEqual(detect_device_type("COM.FIBARO.ROLLERSHUTTER"), DeviceType.ROLLER_SHUTTER)

    def test_light_heuristics(self):
        """Light and bulb tags split into RGB, dimmer and plain light."""
        self.assertEqual(detect_device_type("com.fibaro.philipsHueColorLight"), DeviceType.RGB_LIGHT)
        self.assertEqual(detect_device_type("com.fibaro.dimmerLight"), DeviceType.DIMMER)
        self.assertEqual(detect_device_type("com.fibaro.ceilingBulb"), DeviceType.LIGHT)

    def test_switch_heuristics(self):
        """Switch tags split into dimmer and binary switch."""
        self.assertEqual(detect_device_type("com.fibaro.remoteSwitch"), DeviceType.BINARY_SWITCH)
        self.assertEqual(detect_device_type("com.fibaro.multilevelRemoteSwitch"), DeviceType.DIMMER)

    def test_sensor_heuristics(self):
        """Sensor tags resolve by their reading."""
        self.assertEqual(detect_device_type("com.fibaro.motionDetectorSensor"), DeviceType.MOTION_SENSOR)
        self.assertEqual(detect_device_type("com.fibaro.windowContactSensor"), DeviceType.DOOR_WINDOW_SENSOR)
        self.assertEqual(detect_device_type("com.fibaro.waterLeakSensor"), DeviceType.FLOOD_SENSOR)

    def test_other_heuristics(self):
        """Plug, siren and thermostat substrings."""
        self.assertEqual(detect_device_type("com.fibaro.smartPlugOutlet"), DeviceType.WALL_PLUG)
        self.assertEqual(detect_device_type("com.fibaro.alarmBell"), DeviceType.SIREN)
        self.assertEqual(detect_device_type("com.fibaro.FGT001thermostat"), DeviceType.THERMOSTAT)

    def test_unknown(self):
        """Unrecognized or empty tags are UNKNOWN."""
        self.assertEqual(detect_device_type("com.fibaro.FGD212"), DeviceType.UNKNOWN)
        self.assertEqual(detect_device_type(""), DeviceType.UNKNOWN)
        self.assertEqual(detect_device_type(None), DeviceType.UNKNOWN)


class TestLookups(unittest.TestCase):
    """Capability, action and name lookups."""

    def test_capabilities(self):
        """Capability flags for an RGB light."""
        caps = get_device_capabilities(DeviceType.RGB_LIGHT)
        self.assertTrue(caps.can_set_color)
        self.assertTrue(caps.can_set_brightness)
        self.assertFalse(caps.can_set_position)

    def test_can_perform_action(self):
        """Action support follows supported_actions."""
        self.assertTrue(can_device_perform_action(DeviceType.LOCK, "secure"))
        self.assertFalse(can_device_perform_action(DeviceType.LIGHT, "setColor"))

    def test_type_names(self):
        """Display names come from the name table."""
        self.assertEqual(get_device_type_name(DeviceType.BINARY_SWITCH), "Switch")
        self.assertEqual(get_device_type_name(DeviceType.UNKNOWN), "Unknown Device")

    def test_taxonomy_handles_missing_type(self):
        """A missing type falls back to the unknown entry."""
        self.assertEqual(DEFAULT_TAXONOMY.name_of(None), "Unknown Device")
        self.assertEqual(DEFAULT_TAXONOMY.keywords_of(None), ())


class TestCategories(unittest.TestCase):
    """Discovery groups."""

    def setUp(self):
        self.devices = [
            Device(id=1, name="Lamp", device_type=DeviceType.LIGHT, room_id=1),
            Device(id=2, name="Blind", device_type=DeviceType.VENETIAN_BLIND, room_id=1),
            Device(id=3, name="Desk Lamp", device_type=DeviceType.DIMMER, room_id=2),
            Device(id=4, name="Motion", device_type=DeviceType.MOTION_SENSOR, room_id=2),
        ]

    def test_device_category(self):
        """Types map to their discovery group."""
        self.assertEqual(device_category(DeviceType.DIMMER), "lights")
        self.assertEqual(device_category(DeviceType.HVAC), "climate")
        self.assertEqual(device_category(DeviceType.SIREN), "security")

    def test_filter_by_category(self):
        """Filtering by group keeps inventory order."""
        self.assertEqual([d.id for d in filter_devices(self.devices, "lights")], [1, 3])

    def test_filter_by_room(self):
        """Filtering by room id."""
        self.assertEqual([d.id for d in filter_devices(self.devices, "all", room_id=2)], [3, 4])

    def test_filter_combined(self):
        """Group and room filters combine."""
        self.assertEqual([d.id for d in filter_devices(self.devices, "lights", room_id=2)], [3])

    def test_hidden_and_disabled_left_out(self):
        """Invisible or disabled devices are skipped unless include_hidden is set."""
        devices = self.devices + [
            Device(id=5, name="Old Lamp", device_type=DeviceType.LIGHT, visible=False),
            Device(id=6, name="Spare Lamp", device_type=DeviceType.LIGHT, enabled=False),
        ]
        self.assertEqual([d.id for d in filter_devices(devices, "lights")], [1, 3])
        self.assertEqual(
            [d.id for d in filter_devices(devices, "lights", include_hidden=True)],
            [1, 3, 5, 6],
        )


if __name__ == "__main__":
    unittest.main()
