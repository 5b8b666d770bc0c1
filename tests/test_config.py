"""
Tests for generator configuration.
"""

import pytest
from plykit import examples
from plykit.config import GeneratorConfig, config_from_dict, config_from_yaml, load_config
from plykit.errors import ConfigError
from plykit.readers import BufferedElementReader


class TestConfigFromDict:
    """Test building configs from mappings."""

    def test_defaults(self):
        config = config_from_dict({})
        assert config == GeneratorConfig()
        assert config.counter_clockwise is True
        assert config.index_property is None

    def test_none_is_default(self):
        assert config_from_dict(None) == GeneratorConfig()

    def test_values(self):
        config = config_from_dict({"counter_clockwise": False, "index_property": "vertex_index"})
        assert config.counter_clockwise is False
        assert config.index_property == "vertex_index"

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="winding"):
            config_from_dict({"winding": "cw"})

    def test_wrong_types(self):
        with pytest.raises(ConfigError):
            config_from_dict({"counter_clockwise": "no"})
        with pytest.raises(ConfigError):
            config_from_dict({"index_property": 3})

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError):
            config_from_dict(["counter_clockwise"])


class TestConfigFromYaml:
    """Test YAML loading."""

    def test_yaml_string(self):
        config = config_from_yaml("counter_clockwise: false\n")
        assert config.counter_clockwise is False

    def test_empty_document(self):
        assert config_from_yaml("") == GeneratorConfig()

    def test_invalid_yaml(self):
        with pytest.raises(ConfigError):
            config_from_yaml("counter_clockwise: [unclosed\n")

    def test_load_file(self, tmp_path):
        path = tmp_path / "normals.yaml"
        path.write_text("counter_clockwise: false\nindex_property: vertex_index\n")
        config = load_config(path)
        assert config == GeneratorConfig(counter_clockwise=False, index_property="vertex_index")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")


def test_create_generator_uses_config():
    """A clockwise config flips the normals of the example triangle."""
    generator = GeneratorConfig(counter_clockwise=False).create_generator()
    vertex_reader, face_reader = examples.build_single_triangle()
    vertices = BufferedElementReader(vertex_reader)
    generator.generate_normals(vertices, face_reader)
    assert vertices[0].get_double("nz") == -1.0
