"""Tests for configuration defaults and project config discovery."""

import json

import pytest

from setfmt.config import CONFIG_FILENAME, FormatConfig, build_config, load_project_config


class TestFormatConfig:
    """Test config validation."""

    def test_defaults(self):
        """Test default layout values."""
        cfg = FormatConfig()
        assert (cfg.indent, cfg.depth, cfg.max_lines, cfg.max_line_length) == (4, 1, 15, 120)
        assert cfg.indent_unit == "    "

    @pytest.mark.parametrize(
        "kwargs",
        [{"indent": -1}, {"depth": -2}, {"max_lines": 0}, {"max_line_length": 0}],
    )
    def test_rejects_invalid_values(self, kwargs):
        """Test that out-of-range settings raise ValueError."""
        with pytest.raises(ValueError):
            FormatConfig(**kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [{"indent": 2.5}, {"depth": "1"}, {"max_lines": True}, {"max_line_length": 80.0}],
    )
    def test_rejects_non_integer_values(self, kwargs):
        """Test that floats, strings and booleans are rejected."""
        with pytest.raises(TypeError):
            FormatConfig(**kwargs)


class TestLoadProjectConfig:
    """Test config file discovery."""

    def test_found_in_parent_directory(self, tmp_path):
        """Test that the nearest config above the start dir is used."""
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"depth": 3}), encoding="utf-8")
        sub = tmp_path / "a" / "b"
        sub.mkdir(parents=True)

        assert load_project_config(sub) == {"depth": 3}

    def test_unknown_keys_dropped_with_warning(self, tmp_path, capsys):
        """Test that unknown keys are ignored and reported."""
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"indent": 2, "colour": "red"}), encoding="utf-8")

        assert load_project_config(tmp_path) == {"indent": 2}
        assert "colour" in capsys.readouterr().err

    def test_malformed_file_ignored_with_warning(self, tmp_path, capsys):
        """Test that invalid JSON is reported and ignored."""
        (tmp_path / CONFIG_FILENAME).write_text("{not json", encoding="utf-8")

        assert load_project_config(tmp_path) == {}
        assert "warning" in capsys.readouterr().err

    def test_non_object_ignored(self, tmp_path, capsys):
        """Test that a JSON value other than an object is ignored."""
        (tmp_path / CONFIG_FILENAME).write_text("[1, 2]", encoding="utf-8")

        assert load_project_config(tmp_path) == {}
        assert "expected a JSON object" in capsys.readouterr().err


class TestBuildConfig:
    """Test layering of defaults, project file and overrides."""

    def test_overrides_win_over_file(self, tmp_path):
        """Test that explicit overrides beat the project file, None is skipped."""
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"depth": 3, "max_lines": 7}), encoding="utf-8")

        cfg = build_config({"depth": None, "max_lines": 4}, start_dir=tmp_path)

        assert (cfg.depth, cfg.max_lines, cfg.indent) == (3, 4, 4)

    def test_invalid_file_value_raises(self, tmp_path):
        """Test that out-of-range values from the file are rejected."""
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"max_lines": 0}), encoding="utf-8")

        with pytest.raises(ValueError):
            build_config(start_dir=tmp_path)
