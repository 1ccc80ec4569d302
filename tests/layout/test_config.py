"""
Unit tests for AtlasConfig.
"""

import json
import logging

import pytest

from layer_atlas.layout import AtlasConfig, load_config


class TestAtlasConfig:
    """Tests for AtlasConfig dataclass."""

    def test_init_when_defaults_then_creates_valid_config(self):
        config = AtlasConfig()

        assert config.safety_margin == 1
        assert config.include_background is False
        assert config.atlas_suffix == ""
        assert config.write_json and config.write_xml

    def test_init_when_negative_margin_then_raises(self):
        with pytest.raises(ValueError, match="safety_margin"):
            AtlasConfig(safety_margin=-1)

    def test_init_when_zero_size_cap_then_raises(self):
        with pytest.raises(ValueError, match="max_atlas_size"):
            AtlasConfig(max_atlas_size=0)

    @pytest.mark.parametrize("field, value", [
        ("safety_margin", "2"),
        ("safety_margin", 1.5),
        ("safety_margin", True),
        ("max_atlas_size", "4096"),
        ("max_atlas_size", 2048.0),
    ])
    def test_init_when_size_not_integer_then_raises(self, field, value):
        with pytest.raises(ValueError, match=f"{field} must be an integer"):
            AtlasConfig(**{field: value})

    def test_init_when_packer_not_string_then_raises(self):
        with pytest.raises(ValueError, match="packer must be a string"):
            AtlasConfig(packer=["maxrects-bl"])

    def test_init_when_unknown_packer_then_raises(self):
        with pytest.raises(ValueError, match="Unknown packer"):
            AtlasConfig(packer="nope")

    def test_names_when_suffixes_then_appended(self):
        config = AtlasConfig(atlas_suffix="-atlas", metadata_suffix="-meta")

        assert config.atlas_name("menu") == "menu-atlas"
        assert config.metadata_name("menu") == "menu-meta"

    def test_from_dict_when_unknown_keys_then_ignored_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = AtlasConfig.from_dict({"safety_margin": 3, "colour": "red"})

        assert config.safety_margin == 3
        assert "colour" in caplog.text


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_when_valid_file_then_returns_config(self, tmp_path):
        path = tmp_path / "atlas.json"
        path.write_text(json.dumps({"atlas_suffix": "@atlas", "include_background": True}))

        config = load_config(path)

        assert config.atlas_suffix == "@atlas"
        assert config.include_background is True

    def test_load_when_not_json_then_raises_value_error(self, tmp_path):
        path = tmp_path / "atlas.json"
        path.write_text("{nope")

        with pytest.raises(ValueError, match="not valid JSON"):
            load_config(path)

    def test_load_when_not_object_then_raises_value_error(self, tmp_path):
        path = tmp_path / "atlas.json"
        path.write_text("[1, 2]")

        with pytest.raises(ValueError, match="JSON object"):
            load_config(path)

    def test_load_when_margin_is_string_then_raises_value_error(self, tmp_path):
        path = tmp_path / "atlas.json"
        path.write_text(json.dumps({"safety_margin": "2"}))

        with pytest.raises(ValueError, match="safety_margin must be an integer"):
            load_config(path)

    def test_load_when_missing_then_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")
