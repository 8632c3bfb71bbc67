"""
Application Configuration.

Centralized configuration for the fulfillment application.
"""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_ENV_FILE = "robot.env"


@dataclass(frozen=True)
class ApplicationConfig:
    """
    Central configuration for the application.

    All robot connection and pacing settings are configurable through
    this object.
    """
    # Robot controller
    robot_host: str = "localhost"
    control_port: int = 29999
    program_port: int = 30002
    connect_timeout: float = 5.0

    # Pacing
    cycle_time: float = 9.5
    stop_on_failure: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.robot_host:
            raise ValueError("robot_host must not be empty")
        for name in ("control_port", "program_port"):
            port = getattr(self, name)
            if not 0 < port < 65536:
                raise ValueError(f"{name} must be between 1 and 65535, got {port}")
        if self.cycle_time < 0:
            raise ValueError(f"cycle_time must be >= 0, got {self.cycle_time}")
        if self.connect_timeout <= 0:
            raise ValueError(f"connect_timeout must be > 0, got {self.connect_timeout}")

    @classmethod
    def from_defaults(cls) -> "ApplicationConfig":
        """
        Create configuration with default values.

        Returns:
            ApplicationConfig pointing at a local robot simulator
        """
        return cls(
            robot_host="localhost",
            control_port=29999,
            program_port=30002,
            connect_timeout=5.0,
            cycle_time=9.5,
            stop_on_failure=False
        )

    @classmethod
    def for_testing(cls) -> "ApplicationConfig":
        """
        Create configuration for testing environment.

        Returns:
            ApplicationConfig with no pacing delay and short timeouts
        """
        return cls(
            robot_host="127.0.0.1",
            control_port=29999,
            program_port=30002,
            connect_timeout=0.5,
            cycle_time=0.0,
            stop_on_failure=False
        )

    @classmethod
    def from_env_file(cls, env_path: Path | str | None = None) -> "ApplicationConfig":
        """
        Load configuration from a KEY=VALUE settings file.

        Recognized keys: ROBOT_HOST, ROBOT_CONTROL_PORT, ROBOT_PROGRAM_PORT,
        ROBOT_CONNECT_TIMEOUT, ROBOT_CYCLE_TIME, ROBOT_STOP_ON_FAILURE.
        Missing keys keep their defaults; a missing file gives the defaults.

        Args:
            env_path: Path to settings file (default: robot.env in cwd)

        Returns:
            ApplicationConfig

        Raises:
            ValueError: If a value cannot be parsed or is out of range
        """
        if env_path is None:
            env_path = Path.cwd() / DEFAULT_ENV_FILE
        env_path = Path(env_path)

        defaults = cls.from_defaults()
        if not env_path.exists():
            return defaults

        values = _parse_env_file(env_path)

        try:
            return cls(
                robot_host=values.get("ROBOT_HOST", defaults.robot_host),
                control_port=int(values.get("ROBOT_CONTROL_PORT", defaults.control_port)),
                program_port=int(values.get("ROBOT_PROGRAM_PORT", defaults.program_port)),
                connect_timeout=float(values.get("ROBOT_CONNECT_TIMEOUT", defaults.connect_timeout)),
                cycle_time=float(values.get("ROBOT_CYCLE_TIME", defaults.cycle_time)),
                stop_on_failure=_parse_bool(
                    values.get("ROBOT_STOP_ON_FAILURE", str(defaults.stop_on_failure))
                )
            )
        except ValueError as e:
            raise ValueError(f"Invalid setting in {env_path}: {e}") from e


def _parse_env_file(path: Path) -> dict[str, str]:
    """
    Parse a simple .env file into a dict.

    Handles:
        - KEY=VALUE lines
        - Comments (# ...) and blank lines
        - Quoted values (strips surrounding quotes)

    Args:
        path: Path to .env file

    Returns:
        Dict of key-value pairs
    """
    result: dict[str, str] = {}

    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()

        # Skip comments and blanks
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip()

        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]

        result[key] = value

    return result


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off", ""}:
        return False
    raise ValueError(f"not a boolean: {value!r}")
