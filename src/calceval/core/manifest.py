import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_FILENAME = "calceval.toml"
LOG_LEVEL_ENV = "CALCEVAL_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ReplConfig:
    """Interactive loop configuration."""

    prompt: str = " > "
    exit_command: str = ".exit"
    error_message: str = "There was an error evaluating your input."
    show_errors: bool = False  # Print the error itself instead of error_message
    banner: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class CalcConfig:
    repl: ReplConfig = field(default_factory=ReplConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Path | None = None  # File the settings came from, if any

    @property
    def log_level(self) -> str:
        """Effective log level: environment first, then the config file."""
        env_level = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
        if env_level in _LOG_LEVELS:
            return env_level
        return self.logging.level


def _get(section: dict[str, Any], key: str, expected: type, default: Any, where: str) -> Any:
    value = section.get(key, default)
    if not isinstance(value, expected):
        raise ConfigError(
            f"{where}.{key} must be of type {expected.__name__}, got {type(value).__name__}"
        )
    return value


def load_config(path: Path) -> CalcConfig:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    repl_data = data.get("repl", {})
    logging_data = data.get("logging", {})

    defaults = ReplConfig()
    repl_config = ReplConfig(
        prompt=_get(repl_data, "prompt", str, defaults.prompt, "repl"),
        exit_command=_get(repl_data, "exit_command", str, defaults.exit_command, "repl"),
        error_message=_get(repl_data, "error_message", str, defaults.error_message, "repl"),
        show_errors=_get(repl_data, "show_errors", bool, defaults.show_errors, "repl"),
        banner=_get(repl_data, "banner", bool, defaults.banner, "repl"),
    )

    level = _get(logging_data, "level", str, LoggingConfig().level, "logging").upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(_LOG_LEVELS)}, got {level!r}")

    return CalcConfig(
        repl=repl_config,
        logging=LoggingConfig(level=level),
        path=path,
    )


def find_config(start: Path | None = None) -> CalcConfig:
    """Load calceval.toml from ``start`` (default: cwd), or return defaults."""
    candidate = (start or Path.cwd()) / CONFIG_FILENAME
    if candidate.is_file():
        return load_config(candidate)
    return CalcConfig()
