import unittest
from dataclasses import dataclass, field
from typing import Optional

from appconfig.convert import assign, from_mapping, to_mapping
from appconfig.errors import DeserializationError, SerializationError


@dataclass
class Theme:
    name: str = "light"
    scale: float = 1.0


@dataclass
class WindowSettings:
    window_pos: tuple[int, int] = (320, 280)
    recent_files: list[str] = field(default_factory=list)
    theme: Theme = field(default_factory=Theme)
    shortcuts: dict[str, str] = field(default_factory=dict)
    last_file: Optional[str] = None


@dataclass
class Canvas:
    width: int = 10
    height: int = 10
    area: int = field(init=False)

    def __post_init__(self):
        self.area = self.width * self.height


@dataclass
class Layout:
    window_pos: tuple[int, int] = (0, 0)
    scale: float = 1.0
    visible: bool = True
    columns: dict[int, str] = field(default_factory=dict)


class LegacySettings:
    def __init__(self, volume: int = 5):
        self.volume = volume

    def to_dict(self):
        return {"volume": self.volume}

    @classmethod
    def from_dict(cls, data):
        return cls(volume=int(data["volume"]))


class ToMappingTests(unittest.TestCase):
    def test_dataclass_becomes_plain_tables(self):
        settings = WindowSettings(recent_files=["a.txt"], theme=Theme(name="dark"))

        data = to_mapping(settings)

        self.assertEqual([320, 280], data["window_pos"])
        self.assertEqual(["a.txt"], data["recent_files"])
        self.assertEqual({"name": "dark", "scale": 1.0}, data["theme"])
        self.assertIsNone(data["last_file"])

    def test_mapping_is_copied(self):
        source = {"volume": (1, 2)}

        data = to_mapping(source)

        self.assertEqual({"volume": [1, 2]}, data)
        self.assertIsNot(source, data)

    def test_init_false_fields_are_not_written(self):
        self.assertEqual({"width": 4, "height": 5}, to_mapping(Canvas(width=4, height=5)))

    def test_to_dict_object(self):
        self.assertEqual({"volume": 7}, to_mapping(LegacySettings(7)))

    def test_unsupported_type_raises(self):
        with self.assertRaises(SerializationError):
            to_mapping(42)


class FromMappingTests(unittest.TestCase):
    def test_rebuilds_nested_dataclass(self):
        data = {
            "window_pos": [640, 480],
            "recent_files": ["b.txt"],
            "theme": {"name": "dark", "scale": 2.0},
            "shortcuts": {"save": "Ctrl+S"},
            "last_file": "b.txt",
        }

        settings = from_mapping(WindowSettings, data)

        self.assertEqual(
            WindowSettings(
                window_pos=(640, 480),
                recent_files=["b.txt"],
                theme=Theme(name="dark", scale=2.0),
                shortcuts={"save": "Ctrl+S"},
                last_file="b.txt",
            ),
            settings,
        )

    def test_missing_keys_use_defaults(self):
        settings = from_mapping(WindowSettings, {"window_pos": [1, 2]})

        self.assertEqual((1, 2), settings.window_pos)
        self.assertEqual(Theme(), settings.theme)

    def test_unknown_keys_raise(self):
        with self.assertRaises(DeserializationError):
            from_mapping(WindowSettings, {"window_size": [1, 2]})

    def test_wrong_tuple_length_raises(self):
        with self.assertRaises(DeserializationError):
            from_mapping(WindowSettings, {"window_pos": [1, 2, 3]})

    def test_scalar_where_table_expected_raises(self):
        with self.assertRaises(DeserializationError):
            from_mapping(WindowSettings, {"theme": "dark"})

    def test_dict_settings(self):
        self.assertEqual({"a": 1}, from_mapping(dict, {"a": 1}))

    def test_from_dict_object(self):
        self.assertEqual(9, from_mapping(LegacySettings, {"volume": "9"}).volume)

    def test_from_dict_failure_raises(self):
        with self.assertRaises(DeserializationError):
            from_mapping(LegacySettings, {})

    def test_init_false_fields_round_trip(self):
        settings = from_mapping(Canvas, to_mapping(Canvas(width=42)))

        self.assertEqual(42, settings.width)
        self.assertEqual(420, settings.area)

    def test_string_where_int_expected_raises(self):
        with self.assertRaises(DeserializationError):
            from_mapping(Layout, {"window_pos": ["x", "y"]})

    def test_bool_is_not_accepted_as_int(self):
        with self.assertRaises(DeserializationError):
            from_mapping(Layout, {"window_pos": [True, 1]})

    def test_int_is_not_accepted_as_bool(self):
        with self.assertRaises(DeserializationError):
            from_mapping(Layout, {"visible": 1})

    def test_int_is_accepted_as_float(self):
        settings = from_mapping(Layout, {"scale": 2})

        self.assertEqual(2.0, settings.scale)
        self.assertIsInstance(settings.scale, float)

    def test_int_keys_round_trip(self):
        layout = Layout(columns={1: "name", 2: "size"})

        settings = from_mapping(Layout, to_mapping(layout))

        self.assertEqual({1: "name", 2: "size"}, settings.columns)

    def test_non_numeric_int_key_raises(self):
        with self.assertRaises(DeserializationError):
            from_mapping(Layout, {"columns": {"first": "name"}})


class AssignTests(unittest.TestCase):
    def test_dataclass_updated_in_place(self):
        target = WindowSettings()
        alias = target

        assign(target, WindowSettings(window_pos=(1, 1)))

        self.assertIs(alias, target)
        self.assertEqual((1, 1), alias.window_pos)

    def test_mapping_updated_in_place(self):
        target = {"stale": True}

        assign(target, {"fresh": True})

        self.assertEqual({"fresh": True}, target)

    def test_plain_object_updated_in_place(self):
        target = LegacySettings(1)

        assign(target, LegacySettings(3))

        self.assertEqual(3, target.volume)


if __name__ == "__main__":
    unittest.main()
