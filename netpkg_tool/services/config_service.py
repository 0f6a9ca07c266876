"""Settings loading service"""

import logging
import os
import shlex
from dataclasses import fields, replace
from pathlib import Path
from typing import Mapping, Optional

import yaml

from ..api.exceptions import ConfigError
from ..constants import (
    ENV_APPIMAGETOOL,
    ENV_DOTNET,
    ENV_TEMP_ROOT,
    ENV_TRANSFER,
    SETTINGS_FILE,
)
from ..models.config import ToolSettings, default_config_dir

logger = logging.getLogger(__name__)

KNOWN_KEYS = {f.name for f in fields(ToolSettings)} - {'config_dir'}


class ConfigService:
    """Loads ToolSettings from config.yaml and the environment"""

    def __init__(self, config_dir: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None):
        """Initialize config service

        Args:
            config_dir: Configuration directory (default: $HOME/.netpkg-tool)
            environ: Environment mapping (default: os.environ)
        """
        self.environ = os.environ if environ is None else environ
        self.config_dir = Path(config_dir) if config_dir else default_config_dir(self.environ)
        self.config_path = self.config_dir / SETTINGS_FILE

    def load_settings(self) -> ToolSettings:
        """Load settings, file first then environment overrides

        Returns:
            Loaded settings

        Raises:
            ConfigError: If the settings file is malformed
        """
        data = self._read_file()
        settings = ToolSettings.from_dict(data, self.config_dir)
        return self._apply_environment(settings)

    def _read_file(self) -> dict:
        if not self.config_path.exists():
            return {}

        with open(self.config_path, 'r') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid settings file {self.config_path}: {e}\n")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {self.config_path} must contain a mapping\n")

        unknown = set(data) - KNOWN_KEYS
        if unknown:
            raise ConfigError(
                f"Unknown settings in {self.config_path}: {', '.join(sorted(unknown))}\n"
            )

        logger.debug(f"Loaded settings from {self.config_path}")
        return data

    def _apply_environment(self, settings: ToolSettings) -> ToolSettings:
        overrides = {}

        if self.environ.get(ENV_DOTNET):
            overrides['dotnet'] = self.environ[ENV_DOTNET]
        if self.environ.get(ENV_APPIMAGETOOL):
            overrides['appimagetool'] = self.environ[ENV_APPIMAGETOOL]
        if self.environ.get(ENV_TRANSFER):
            overrides['transfer_helper'] = tuple(shlex.split(self.environ[ENV_TRANSFER]))
        if self.environ.get(ENV_TEMP_ROOT):
            overrides['temp_root'] = Path(self.environ[ENV_TEMP_ROOT])

        if overrides:
            logger.debug(f"Environment overrides: {', '.join(sorted(overrides))}")
            settings = replace(settings, **overrides)

        return settings


def load_settings(config_dir: Optional[Path] = None) -> ToolSettings:
    """Load settings with the default service"""
    return ConfigService(config_dir).load_settings()
