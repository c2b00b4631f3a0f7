"""Tests for the inventory adapter."""

import os
import tempfile
import unicodedata
import unittest

from context_processor.device_types import DeviceType
from context_processor.inventory import device_from_raw, load_inventory, rooms_from_raw

INVENTORY_YAML = """\
devices:
  - id: 12
    name: Đèn trần
    type: com.fibaro.multilevelSwitch
    roomID: 3
  - id: 13
    name: Kitchen Blind
    type: com.fibaro.venetianBlind
    roomID: 4
    visible: false
    properties:
      value: 40
rooms:
  - id: 3
    name: Phòng khách
  - id: 4
    name: Kitchen
"""


class TestDeviceFromRaw(unittest.TestCase):
    """device_from_raw."""

    def test_resolves_type_and_capabilities(self):
        """The hub type tag resolves to a DeviceType and its capabilities."""
        device = device_from_raw(
            {"id": 12, "name": "Ceiling", "type": "com.fibaro.multilevelSwitch", "roomID": 3}
        )
        self.assertEqual(device.id, 12)
        self.assertEqual(device.device_type, DeviceType.DIMMER)
        self.assertTrue(device.capabilities.can_set_brightness)
        self.assertEqual(device.room_id, 3)
        self.assertEqual(device.raw_type, "com.fibaro.multilevelSwitch")

    def test_string_ids(self):
        """Numeric strings are accepted for id and roomID."""
        device = device_from_raw({"id": "7", "name": "Plug", "roomID": "2"})
        self.assertEqual(device.id, 7)
        self.assertEqual(device.room_id, 2)
        self.assertEqual(device.device_type, DeviceType.UNKNOWN)

    def test_optional_fields(self):
        """Missing optional fields fall back to defaults."""
        device = device_from_raw({"id": 1})
        self.assertEqual(device.name, "")
        self.assertIsNone(device.room_id)
        self.assertTrue(device.enabled)
        self.assertTrue(device.visible)
        self.assertEqual(device.properties, {})

    def test_flags(self):
        """enabled and visible are carried from the record."""
        device = device_from_raw({"id": 1, "enabled": False, "visible": False})
        self.assertFalse(device.enabled)
        self.assertFalse(device.visible)

    def test_name_composed(self):
        """Decomposed names are stored in composed form."""
        device = device_from_raw({"id": 1, "name": unicodedata.normalize("NFD", "Đèn ngủ")})
        self.assertEqual(device.name, "Đèn ngủ")

    def test_invalid_ids(self):
        """Missing or non-integer ids raise ValueError."""
        with self.assertRaises(ValueError):
            device_from_raw({"name": "no id"})
        with self.assertRaises(ValueError):
            device_from_raw({"id": "abc"})
        with self.assertRaises(ValueError):
            device_from_raw({"id": True})
        with self.assertRaises(ValueError):
            device_from_raw({"id": 1, "roomID": "kitchen"})

    def test_not_a_mapping(self):
        """A record that is not a mapping raises ValueError."""
        with self.assertRaises(ValueError):
            device_from_raw("lamp")
        with self.assertRaises(ValueError):
            device_from_raw([1, 2])


class TestRoomsFromRaw(unittest.TestCase):
    """rooms_from_raw."""

    def test_rooms(self):
        """Room records become an id to name map."""
        rooms = rooms_from_raw([{"id": 1, "name": "Kitchen"}, {"id": "2", "name": "Bedroom"}])
        self.assertEqual(rooms, {1: "Kitchen", 2: "Bedroom"})

    def test_invalid_room(self):
        """A room without an id raises ValueError."""
        with self.assertRaises(ValueError):
            rooms_from_raw([{"name": "Nowhere"}])

    def test_room_not_a_mapping(self):
        """A room record that is not a mapping raises ValueError."""
        with self.assertRaises(ValueError):
            rooms_from_raw(["Kitchen"])


class TestLoadInventory(unittest.TestCase):
    """load_inventory."""

    def _write(self, content):
        fd, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        self.addCleanup(os.remove, path)
        return path

    def test_load_yaml(self):
        """A YAML inventory loads devices and rooms."""
        devices, rooms = load_inventory(self._write(INVENTORY_YAML))
        self.assertEqual([d.id for d in devices], [12, 13])
        self.assertEqual(devices[0].name, "Đèn trần")
        self.assertEqual(devices[1].device_type, DeviceType.VENETIAN_BLIND)
        self.assertFalse(devices[1].visible)
        self.assertEqual(devices[1].properties, {"value": 40})
        self.assertEqual(rooms, {3: "Phòng khách", 4: "Kitchen"})

    def test_load_json(self):
        """JSON is read through the YAML loader."""
        devices, rooms = load_inventory(
            self._write('{"devices": [{"id": 1, "name": "Lamp"}], "rooms": []}')
        )
        self.assertEqual(len(devices), 1)
        self.assertEqual(rooms, {})

    def test_empty_file(self):
        """An empty file is an empty inventory."""
        self.assertEqual(load_inventory(self._write("")), ([], {}))

    def test_not_a_mapping(self):
        """A top-level list raises ValueError."""
        with self.assertRaises(ValueError):
            load_inventory(self._write("- just\n- a list\n"))

    def test_broken_yaml(self):
        """Unparseable YAML raises ValueError."""
        with self.assertRaises(ValueError):
            load_inventory(self._write("devices: [ {id: 1\n"))

    def test_scalar_records(self):
        """Scalar entries in the device or room list raise ValueError."""
        with self.assertRaises(ValueError):
            load_inventory(self._write("devices:\n  - lamp\n"))
        with self.assertRaises(ValueError):
            load_inventory(self._write("rooms:\n  - kitchen\n"))

    def test_missing_file(self):
        """A missing file raises OSError."""
        with self.assertRaises(OSError):
            load_inventory(self._write("") + ".missing")


if __name__ == "__main__":
    unittest.main()
