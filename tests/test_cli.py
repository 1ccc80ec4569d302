"""
Tests for the layer-atlas command line.
"""

import json

from layer_atlas.cli import _attach_suffix_values, main


class TestMain:
    """Tests for main()."""

    def test_main_when_defaults_then_outputs_beside_manifest(self, layered_manifest):
        code = main([str(layered_manifest)])

        root = layered_manifest.parent
        assert code == 0
        assert (root / "menu.png").exists()
        assert (root / "menu.json").exists()
        assert (root / "menu.xml").exists()

    def test_main_when_flags_then_override_defaults(self, layered_manifest, tmp_path):
        out = tmp_path / "build"

        code = main([
            str(layered_manifest), "-o", str(out),
            "--atlas-suffix", "@atlas", "--metadata-suffix", "-meta",
            "--margin", "0", "--no-xml",
        ])

        assert code == 0
        assert sorted(p.name for p in out.iterdir()) == ["menu-meta.json", "menu@atlas.png"]
        data = json.loads((out / "menu-meta.json").read_text(encoding="utf-8"))
        assert data["atlas"] == {"width": 32, "height": 16, "margin": 0}

    def test_main_when_config_file_then_flags_win(self, layered_manifest, tmp_path):
        config_path = tmp_path / "atlas.config.json"
        config_path.write_text(json.dumps({"safety_margin": 4, "write_xml": False}))
        out = tmp_path / "build"

        code = main([str(layered_manifest), "-o", str(out), "--config", str(config_path),
                     "--margin", "2"])

        assert code == 0
        data = json.loads((out / "menu.json").read_text(encoding="utf-8"))
        assert data["atlas"]["margin"] == 2
        assert not (out / "menu.xml").exists()

    def test_main_when_include_background_then_background_placed(self, layered_manifest, tmp_path):
        out = tmp_path / "build"

        code = main([str(layered_manifest), "-o", str(out), "--include-background"])

        assert code == 0
        data = json.loads((out / "menu.json").read_text(encoding="utf-8"))
        assert data["parts"][0]["mode"] == "atlas"
        assert data["parts"][0]["placed"] is not None

    def test_main_when_manifest_missing_then_returns_one(self, tmp_path):
        assert main([str(tmp_path / "missing.json")]) == 1

    def test_main_when_config_invalid_then_returns_one(self, layered_manifest, tmp_path):
        config_path = tmp_path / "bad.json"
        config_path.write_text("{not json")

        assert main([str(layered_manifest), "--config", str(config_path)]) == 1

    def test_main_when_config_margin_not_integer_then_returns_one(self, layered_manifest, tmp_path):
        config_path = tmp_path / "atlas.config.json"
        config_path.write_text(json.dumps({"safety_margin": "2"}))

        assert main([str(layered_manifest), "--config", str(config_path)]) == 1

    def test_main_when_max_size_too_small_then_returns_one(self, layered_manifest, tmp_path):
        assert main([str(layered_manifest), "-o", str(tmp_path), "--max-size", "16"]) == 1

    def test_main_when_suffixes_start_with_dash_then_used_in_names(
        self, layered_manifest, tmp_path
    ):
        out = tmp_path / "build"

        code = main([
            str(layered_manifest), "-o", str(out),
            "--atlas-suffix", "-x", "--metadata-suffix", "--data",
        ])

        assert code == 0
        assert sorted(p.name for p in out.iterdir()) == [
            "menu--data.json", "menu--data.xml", "menu-x.png",
        ]
        assert 'imagePath="menu-x.png"' in (out / "menu--data.xml").read_text(encoding="utf-8")


class TestAttachSuffixValues:
    """Tests for _attach_suffix_values()."""

    def test_attach_when_suffix_flag_then_value_joined(self):
        argv = ["m.json", "--atlas-suffix", "-x", "--margin", "2"]

        assert _attach_suffix_values(argv) == ["m.json", "--atlas-suffix=-x", "--margin", "2"]

    def test_attach_when_equals_form_then_unchanged(self):
        argv = ["m.json", "--metadata-suffix=-meta"]

        assert _attach_suffix_values(argv) == argv

    def test_attach_when_flag_is_last_then_left_for_argparse(self):
        assert _attach_suffix_values(["m.json", "--atlas-suffix"]) == ["m.json", "--atlas-suffix"]
