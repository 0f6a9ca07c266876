# netpkg_tool/services/__init__.py
"""Business logic services for netpkg-tool"""

from .config_service import ConfigService, load_settings
from .pipeline import Pipeline, PipelineEvents, Stage, configure

__all__ = [
    "ConfigService",
    "load_settings",
    "Pipeline",
    "PipelineEvents",
    "Stage",
    "configure",
]
