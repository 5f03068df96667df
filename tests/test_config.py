"""Tests for config loading."""

from geomap.config import Config, load_config


class TestLoadConfig:
    def test_missing_file_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.yaml")
        assert config == Config()
        assert config.layout.column_fractions == (0.15, 0.5, 0.85)

    def test_partial_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("layout:\n  canvas_width: 1400\nrender:\n  label_max_chars: 12\n")
        config = load_config(path)
        assert config.layout.canvas_width == 1400
        assert config.layout.canvas_height == 600
        assert config.render.label_max_chars == 12

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_relative_db_path_resolved(self):
        config = Config(db_path="data/x.db")
        assert config.resolved_db_path.is_absolute()
        assert config.resolved_db_path.name == "x.db"

    def test_absolute_db_path_kept(self, tmp_path):
        config = Config(db_path=str(tmp_path / "a.db"))
        assert config.resolved_db_path == tmp_path / "a.db"
