"""
studiofs Configuration

Settings are grouped into dataclass sections (content, shell, logging,
workspace). A JSON file may override any subset of them:

    {"content": {"preview_chars": 200}, "logging": {"level": "DEBUG"}}

Keys that no section declares are rejected instead of being ignored.

Author: YSNRFD
Version: 1.0.0
"""

import json
import threading
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional

from studiofs.exceptions import ConfigurationError


@dataclass
class ContentConfig:
    """Content loading settings."""
    max_text_bytes: int = 5 * 1024 * 1024  # 5 MiB
    too_large_message: str = "File is too large to display in editor."
    preview_chars: int = 500


@dataclass
class ShellConfig:
    prompt_suffix: str = "$ "
    history_size: int = 1000
    npm_install_message: str = "added 142 packages in 2s"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True


@dataclass
class WorkspaceConfig:
    """Names given to the root folder."""
    default_project_name: str = "Project"
    opened_project_name: str = "Opened Project"


@dataclass
class Config:
    content: ContentConfig = field(default_factory=ContentConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)


def _apply_section(config: Config, name: str, values: Any) -> None:
    """Overlay one JSON section onto the defaults of that section."""
    if not isinstance(values, dict):
        raise ConfigurationError(f"Section '{name}' must be a JSON object", key=name)

    current = getattr(config, name)
    unknown = set(values) - {f.name for f in fields(current)}
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys in '{name}': {', '.join(sorted(unknown))}",
            key=name
        )

    setattr(config, name, replace(current, **values))


class ConfigLoader:
    """
    Process-wide configuration holder.

    Until a file is loaded every section has its defaults.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('studiofs.json')
        >>> config.content.preview_chars
        500
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._config = Config()
                instance._loaded = False
                cls._instance = instance
            return cls._instance

    @property
    def config(self) -> Config:
        return self._config

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self, config_path: str) -> Config:
        """
        Replace the active configuration with defaults overlaid by a file.

        The active configuration is unchanged when loading fails.

        Raises:
            ConfigurationError: If the file is missing, unreadable, not JSON,
                or names unknown sections or keys
        """
        path = Path(config_path)
        if not path.is_file():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_path} must contain a JSON object")

        config = Config()
        sections = {f.name for f in fields(config)}
        for name, values in data.items():
            if name not in sections:
                raise ConfigurationError(f"Unknown configuration section '{name}'", key=name)
            _apply_section(config, name, values)

        self._config = config
        self._loaded = True
        return config

    def _resolve(self, key: str) -> tuple[Any, str]:
        """Split 'section.option' into the owning object and the option name."""
        *path, option = key.split('.')
        owner: Any = self._config
        for part in path:
            if not hasattr(owner, part):
                raise ConfigurationError(f"Invalid configuration key: {key}", key=key)
            owner = getattr(owner, part)
        return owner, option

    def get(self, key: str, default: Any = None) -> Any:
        """Value at a dotted key such as 'content.preview_chars', or ``default``."""
        try:
            owner, option = self._resolve(key)
        except ConfigurationError:
            return default
        return getattr(owner, option, default)

    def set(self, key: str, value: Any) -> None:
        """
        Change one value at runtime; nothing is written back to disk.

        Raises:
            ConfigurationError: If the key does not name an existing option
        """
        owner, option = self._resolve(key)
        if not hasattr(owner, option):
            raise ConfigurationError(f"Invalid configuration key: {key}", key=key)
        setattr(owner, option, value)

    def reset(self) -> None:
        """Go back to defaults."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self._config)


def get_config() -> Config:
    """The active configuration (defaults when nothing was loaded)."""
    return ConfigLoader().config
