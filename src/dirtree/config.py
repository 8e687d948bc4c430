"""Configuration management for dirtree."""

import json
import os
from pathlib import Path
from typing import Literal, Optional

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dirtree.utils import setup_logging

DATA_DIR_NAME = ".dirtree"
CONFIG_FILE_NAME = "config.json"

Environment = Literal["test", "dev", "user"]
Collation = Literal["unicode", "locale", "ordinal"]


class DirTreeConfig(BaseSettings):
    """Pydantic model for dirtree global configuration."""

    env: Environment = Field(default="dev", description="Environment name")

    # overridden by ~/.dirtree/config.json
    log_level: str = "INFO"

    log_to_file: bool = Field(
        default=True,
        description="Write CLI logs to ~/.dirtree/dirtree.log. Ignored in the test environment.",
    )

    indent_width: int = Field(
        default=2,
        description="Number of spaces per depth level in LIST output",
        ge=1,
    )

    collation: Collation = Field(
        default="unicode",
        description="Sibling ordering for LIST: unicode (locale-like), locale (LC_COLLATE), ordinal",
    )

    echo_commands: bool = Field(
        default=True,
        description="Echo every command line before processing it",
    )

    model_config = SettingsConfigDict(
        env_prefix="DIRTREE_",
        extra="ignore",
    )

    @property
    def is_test_env(self) -> bool:
        """Check if running in a test environment.

        Returns True if env is "test" or if pytest is running (detected via
        PYTEST_CURRENT_TEST environment variable).
        """
        return self.env == "test" or os.getenv("PYTEST_CURRENT_TEST") is not None


# Module-level cache for configuration
_CONFIG_CACHE: Optional[DirTreeConfig] = None


class ConfigManager:
    """Manages dirtree configuration."""

    def __init__(self) -> None:
        home = os.getenv("HOME", Path.home())
        if isinstance(home, str):
            home = Path(home)

        # Allow override via environment variable
        if config_dir := os.getenv("DIRTREE_CONFIG_DIR"):
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = home / DATA_DIR_NAME

        self.config_file = self.config_dir / CONFIG_FILE_NAME

    @property
    def config(self) -> DirTreeConfig:
        """Get configuration, loading it lazily if needed."""
        return self.load_config()

    def load_config(self) -> DirTreeConfig:
        """Load configuration from file or fall back to defaults.

        Environment variables take precedence over file config values.
        """
        global _CONFIG_CACHE

        if _CONFIG_CACHE is not None:
            return _CONFIG_CACHE

        if not self.config_file.exists():
            _CONFIG_CACHE = DirTreeConfig()
            return _CONFIG_CACHE

        try:
            file_data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file {self.config_file}: {e}")
            raise SystemExit(
                f"Error: config file is not valid JSON: {self.config_file}\n"
                f"  {e}\n"
                f"Fix or delete the file and re-run."
            )

        # File data is the base; fields set through DIRTREE_* env vars win
        env_dict = DirTreeConfig().model_dump()
        merged_data = dict(file_data)
        for field_name in DirTreeConfig.model_fields.keys():
            if f"DIRTREE_{field_name.upper()}" in os.environ:
                merged_data[field_name] = env_dict[field_name]

        _CONFIG_CACHE = DirTreeConfig(**merged_data)
        return _CONFIG_CACHE

    def save_config(self, config: DirTreeConfig) -> None:
        """Save configuration to file and invalidate cache."""
        global _CONFIG_CACHE
        save_dirtree_config(self.config_file, config)
        _CONFIG_CACHE = None


def save_dirtree_config(file_path: Path, config: DirTreeConfig) -> None:
    """Save configuration to file."""
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(json.dumps(config.model_dump(mode="json"), indent=2))
    except OSError as e:  # pragma: no cover
        logger.error(f"Failed to save config: {e}")


def reset_config_cache() -> None:
    global _CONFIG_CACHE
    _CONFIG_CACHE = None


def init_cli_logging(config: Optional[DirTreeConfig] = None) -> None:  # pragma: no cover
    """Initialize logging for CLI commands - file only.

    CLI commands should not log to stdout to avoid interfering with
    command output.
    """
    config = config or ConfigManager().config
    log_to_file = config.log_to_file and not config.is_test_env
    setup_logging(
        log_level=config.log_level,
        log_to_file=log_to_file,
        log_dir=ConfigManager().config_dir,
    )
