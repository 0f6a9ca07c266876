# netpkg_tool/models/project.py
"""Project information models"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict


@dataclass(frozen=True)
class ProjectDescriptor:
    """The single project manifest found in a project directory"""
    manifest_file_name: str
    project_directory: Path
    assembly_name: str
    target_runtime_version: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'manifest_file_name': self.manifest_file_name,
            'project_directory': str(self.project_directory),
            'assembly_name': self.assembly_name,
            'target_runtime_version': self.target_runtime_version,
        }
