"""
Configuration management for ffbookmarks.

Settings come from dataclass defaults, then TOML files
(~/.config/ffbookmarks/config.toml, ./ffbookmarks.toml, an explicit file),
then FFBOOKMARKS_* environment variables.
"""
import os
import tomli
import tomli_w
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field, asdict


@dataclass
class FFBookmarksConfig:
    """
    ffbookmarks configuration with sensible defaults.

    Configuration hierarchy (highest to lowest priority):
    1. Command-line arguments
    2. Environment variables (FFBOOKMARKS_*)
    3. Explicit config file (--config)
    4. Local config file (./ffbookmarks.toml)
    5. User config file (~/.config/ffbookmarks/config.toml)
    6. Defaults
    """

    # Export defaults
    export_format: str = field(default="html")
    html_escape: bool = field(default=False)  # Escape cell values in HTML output
    html_title: str = field(default="ffbookmarks")
    dedup: bool = field(default=False)  # Drop duplicate URIs before export

    # Display settings
    color_output: bool = field(default=True)
    page_size: int = field(default=20)

    log_level: str = field(default="WARNING")

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "FFBookmarksConfig":
        """
        Load configuration from files and environment.

        Args:
            config_file: Specific config file to load after the standard ones

        Returns:
            Merged configuration object
        """
        config = cls()

        user_config_path = Path.home() / ".config" / "ffbookmarks" / "config.toml"
        if user_config_path.exists():
            config._merge(cls._load_toml(user_config_path))

        local_config_path = Path.cwd() / "ffbookmarks.toml"
        if local_config_path.exists():
            config._merge(cls._load_toml(local_config_path))

        if config_file:
            # An explicitly requested file must exist
            config._merge(cls._load_toml(Path(config_file)))

        config._apply_env_vars()

        return config

    @staticmethod
    def _load_toml(path: Path) -> Dict[str, Any]:
        """Load TOML configuration file."""
        with open(path, "rb") as f:
            return tomli.load(f)

    def _merge(self, data: Dict[str, Any]):
        """Merge configuration data into this instance, ignoring unknown keys."""
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def _apply_env_vars(self):
        """Apply environment variables with FFBOOKMARKS_ prefix."""
        prefix = "FFBOOKMARKS_"
        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()
                if hasattr(self, config_key):
                    # Convert string values to appropriate types
                    current_value = getattr(self, config_key)
                    if isinstance(current_value, bool):
                        setattr(self, config_key, value.lower() in ("true", "1", "yes"))
                    elif isinstance(current_value, int):
                        setattr(self, config_key, int(value))
                    else:
                        setattr(self, config_key, value)

    def save(self, path: Optional[Path] = None):
        """
        Save current configuration to TOML file.

        Args:
            path: Path to save to (defaults to user config)
        """
        if path is None:
            path = Path.home() / ".config" / "ffbookmarks" / "config.toml"

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as f:
            tomli_w.dump(asdict(self), f)


# Global configuration instance
_config: Optional[FFBookmarksConfig] = None


def get_config(reload: bool = False, config_file: Optional[Path] = None) -> FFBookmarksConfig:
    """
    Get the global configuration instance.

    Args:
        reload: Force reload configuration from files
        config_file: Specific config file to load

    Returns:
        Global configuration instance
    """
    global _config
    if _config is None or reload:
        _config = FFBookmarksConfig.load(config_file)
    return _config


def init_config(config_file: Optional[Path] = None, **kwargs) -> FFBookmarksConfig:
    """
    Initialize configuration with command-line overrides.

    Args:
        config_file: Config file given on the command line
        **kwargs: Configuration overrides; None values are ignored

    Returns:
        Configured instance
    """
    config = get_config(reload=config_file is not None, config_file=config_file)

    for key, value in kwargs.items():
        if hasattr(config, key) and value is not None:
            setattr(config, key, value)

    return config
