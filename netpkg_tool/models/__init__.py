# netpkg_tool/models/__init__.py
"""Data models for netpkg-tool"""

from .config import Configuration, ToolSettings
from .project import ProjectDescriptor
from .result import StageResult, StageOutcome, StageRecord, PipelineState, PipelineResult

__all__ = [
    # Config models
    "Configuration",
    "ToolSettings",

    # Project models
    "ProjectDescriptor",

    # Result models
    "StageResult",
    "StageOutcome",
    "StageRecord",
    "PipelineState",
    "PipelineResult",
]
