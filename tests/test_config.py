from pathlib import Path

from config import parse_config


class TestParseConfig:
    """Tests for parse_config."""

    def test_defaults(self):
        """Test that an empty file yields the defaults."""
        config = parse_config({"base_dir": "/tmp/monthwise"})

        assert config.db_path == Path("/tmp/monthwise/db/monthwise.db")
        assert config.log_dir == Path("/tmp/monthwise/logs")
        assert config.log_level == "INFO"
        assert config.default_user == ""
        assert config.recent_limit == 5
        assert config.enable_reset is False

    def test_sections(self):
        """Test that every section is read."""
        config = parse_config(
            {
                "base_dir": "/data",
                "database": {"data_dir": "/db", "filename": "x.db"},
                "logging": {"level": "DEBUG", "log_dir": "/logs"},
                "session": {"default_user": "me@example.com"},
                "dashboard": {"recent_limit": 10},
                "maintenance": {"enable_reset": True},
            }
        )

        assert config.db_path == Path("/db/x.db")
        assert config.log_level == "DEBUG"
        assert config.log_dir == Path("/logs")
        assert config.default_user == "me@example.com"
        assert config.recent_limit == 10
        assert config.enable_reset is True
