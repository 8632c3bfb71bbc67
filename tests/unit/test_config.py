"""
Tests for Application Configuration.
"""

import sys
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

# Add src to path
_src_path = Path(__file__).parent.parent.parent / "src"
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from orchestration.config import ApplicationConfig


class TestApplicationConfig:
    """Tests for ApplicationConfig."""

    def test_create_config_with_all_fields(self):
        """Should create config with all fields."""
        config = ApplicationConfig(
            robot_host="10.0.0.5",
            control_port=1111,
            program_port=2222,
            connect_timeout=2.0,
            cycle_time=4.0,
            stop_on_failure=True
        )

        assert config.robot_host == "10.0.0.5"
        assert config.control_port == 1111
        assert config.program_port == 2222
        assert config.connect_timeout == 2.0
        assert config.cycle_time == 4.0
        assert config.stop_on_failure is True

    def test_create_config_with_defaults(self):
        """Should use default values for optional fields."""
        config = ApplicationConfig()

        assert config.robot_host == "localhost"
        assert config.control_port == 29999
        assert config.program_port == 30002
        assert config.cycle_time == 9.5
        assert config.stop_on_failure is False

    def test_from_defaults_factory(self):
        assert ApplicationConfig.from_defaults() == ApplicationConfig()

    def test_for_testing_factory(self):
        """Should create config suitable for testing."""
        config = ApplicationConfig.for_testing()

        assert config.robot_host == "127.0.0.1"
        assert config.cycle_time == 0.0
        assert config.connect_timeout < 1

    def test_config_is_immutable(self):
        config = ApplicationConfig()
        with pytest.raises(FrozenInstanceError):
            config.robot_host = "other"

    @pytest.mark.parametrize("field,value", [
        ("control_port", 0),
        ("program_port", 70000),
        ("cycle_time", -1.0),
        ("connect_timeout", 0),
        ("robot_host", ""),
    ])
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            ApplicationConfig(**{field: value})


class TestFromEnvFile:
    """Tests for loading settings from a KEY=VALUE file."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = ApplicationConfig.from_env_file(tmp_path / "missing.env")
        assert config == ApplicationConfig.from_defaults()

    def test_reads_all_keys(self, tmp_path):
        env = tmp_path / "robot.env"
        env.write_text(
            "# robot settings\n"
            "\n"
            "ROBOT_HOST=\"192.168.1.20\"\n"
            "ROBOT_CONTROL_PORT=29998\n"
            "ROBOT_PROGRAM_PORT = 30003\n"
            "ROBOT_CONNECT_TIMEOUT=1.5\n"
            "ROBOT_CYCLE_TIME='7.25'\n"
            "ROBOT_STOP_ON_FAILURE=yes\n",
            encoding="utf-8"
        )

        config = ApplicationConfig.from_env_file(env)

        assert config.robot_host == "192.168.1.20"
        assert config.control_port == 29998
        assert config.program_port == 30003
        assert config.connect_timeout == 1.5
        assert config.cycle_time == 7.25
        assert config.stop_on_failure is True

    def test_partial_file_keeps_defaults(self, tmp_path):
        env = tmp_path / "robot.env"
        env.write_text("ROBOT_HOST=robot.local\nnot a setting\n", encoding="utf-8")

        config = ApplicationConfig.from_env_file(env)

        assert config.robot_host == "robot.local"
        assert config.program_port == 30002
        assert config.cycle_time == 9.5

    def test_invalid_number_raises(self, tmp_path):
        env = tmp_path / "robot.env"
        env.write_text("ROBOT_CONTROL_PORT=abc\n", encoding="utf-8")

        with pytest.raises(ValueError, match="robot.env"):
            ApplicationConfig.from_env_file(env)

    def test_invalid_bool_raises(self, tmp_path):
        env = tmp_path / "robot.env"
        env.write_text("ROBOT_STOP_ON_FAILURE=maybe\n", encoding="utf-8")

        with pytest.raises(ValueError):
            ApplicationConfig.from_env_file(env)

    def test_defaults_to_robot_env_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "robot.env").write_text("ROBOT_HOST=from-cwd\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert ApplicationConfig.from_env_file().robot_host == "from-cwd"
