# netpkg_tool/models/config.py
"""Configuration models"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..constants import (
    CONFIG_DIR_NAME,
    DEFAULT_APPIMAGETOOL,
    DEFAULT_BUILD_CONFIGURATION,
    DEFAULT_DOTNET,
    DEFAULT_MANIFEST_EXTENSIONS,
    DEFAULT_RUNTIME_IDENTIFIER,
    DEFAULT_TEMP_ROOT,
    ENV_HOME,
    STAGING_SUFFIX,
)


@dataclass(frozen=True)
class Configuration:
    """Immutable snapshot of one invocation

    Both paths are canonical and were validated as existing directories
    before the value was built.
    """
    project_path: Path
    destination_path: Path
    app_name: Optional[str] = None
    verbose: bool = False
    skip_restore: bool = False
    self_contained: bool = False
    keep_temp_files: bool = False
    raw_args: Tuple[str, ...] = ()

    @property
    def has_custom_name(self) -> bool:
        """Whether the output name was given with --name"""
        return bool(self.app_name)

    def with_app_name(self, app_name: str) -> 'Configuration':
        """Return a copy carrying the resolved output name"""
        return replace(self, app_name=app_name)

    def output_path(self) -> Path:
        """Final image location"""
        return self.destination_path / self.app_name


def default_config_dir(environ=None) -> Path:
    """Per-user configuration directory, located through $HOME"""
    environ = os.environ if environ is None else environ
    home = environ.get(ENV_HOME) or str(Path.home())
    return Path(home) / CONFIG_DIR_NAME


@dataclass(frozen=True)
class ToolSettings:
    """Environment level settings that do not change per invocation"""
    config_dir: Path = field(default_factory=default_config_dir)
    temp_root: Path = Path(DEFAULT_TEMP_ROOT)
    dotnet: str = DEFAULT_DOTNET
    appimagetool: str = DEFAULT_APPIMAGETOOL
    transfer_helper: Optional[Tuple[str, ...]] = None
    manifest_extensions: Tuple[str, ...] = DEFAULT_MANIFEST_EXTENSIONS
    runtime_identifier: str = DEFAULT_RUNTIME_IDENTIFIER
    build_configuration: str = DEFAULT_BUILD_CONFIGURATION

    def staging_dir(self, app_name: str) -> Path:
        """Temporary AppDir for an output name"""
        return self.temp_root / f"{app_name}{STAGING_SUFFIX}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_dir: Path) -> 'ToolSettings':
        """Create from a settings mapping

        Args:
            data: Parsed settings document
            config_dir: Directory the document was loaded from

        Returns:
            ToolSettings instance
        """
        transfer = data.get('transfer_helper')
        if isinstance(transfer, str):
            transfer = (transfer,)

        extensions = data.get('manifest_extensions', DEFAULT_MANIFEST_EXTENSIONS)
        if isinstance(extensions, str):
            extensions = (extensions,)

        return cls(
            config_dir=config_dir,
            temp_root=Path(data.get('temp_root', DEFAULT_TEMP_ROOT)),
            dotnet=data.get('dotnet', DEFAULT_DOTNET),
            appimagetool=data.get('appimagetool', DEFAULT_APPIMAGETOOL),
            transfer_helper=tuple(transfer) if transfer else None,
            manifest_extensions=tuple(
                ext if ext.startswith('.') else f".{ext}" for ext in extensions
            ),
            runtime_identifier=data.get('runtime_identifier', DEFAULT_RUNTIME_IDENTIFIER),
            build_configuration=data.get('build_configuration', DEFAULT_BUILD_CONFIGURATION),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'temp_root': str(self.temp_root),
            'dotnet': self.dotnet,
            'appimagetool': self.appimagetool,
            'transfer_helper': list(self.transfer_helper) if self.transfer_helper else None,
            'manifest_extensions': list(self.manifest_extensions),
            'runtime_identifier': self.runtime_identifier,
            'build_configuration': self.build_configuration,
        }
