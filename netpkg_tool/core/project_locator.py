"""Project manifest discovery"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .path_resolver import PathResolver
from ..api.exceptions import AmbiguousProjectError, ManifestParseError, ProjectNotFoundError
from ..constants import DEFAULT_MANIFEST_EXTENSIONS, TARGET_FRAMEWORK_PATH
from ..models.project import ProjectDescriptor

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    """Strip an XML namespace from a tag"""
    if tag.startswith('{'):
        return tag.split('}', 1)[1]
    return tag


class ProjectLocator:
    """Finds and reads the single project manifest of a directory"""

    def __init__(
        self,
        extensions: Sequence[str] = DEFAULT_MANIFEST_EXTENSIONS,
        path_resolver: Optional[PathResolver] = None
    ):
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.path_resolver = path_resolver or PathResolver()

    def find_manifests(self, directory: Union[str, Path]) -> List[Path]:
        """List manifest candidates directly inside a directory

        Subdirectories are not searched.
        """
        directory = Path(directory)
        return sorted(
            entry for entry in directory.iterdir()
            if entry.is_file() and entry.suffix.lower() in self.extensions
        )

    def locate(self, directory: Union[str, Path]) -> ProjectDescriptor:
        """Locate and parse the project manifest

        Args:
            directory: Project directory

        Returns:
            Descriptor of the single manifest found

        Raises:
            ProjectNotFoundError: No manifest in the directory
            AmbiguousProjectError: More than one manifest in the directory
            ManifestParseError: Manifest unreadable or without target framework
        """
        directory = Path(directory)
        shown = self.path_resolver.display(directory)
        manifests = self.find_manifests(directory)

        if not manifests:
            raise ProjectNotFoundError(shown, self.extensions)
        if len(manifests) > 1:
            raise AmbiguousProjectError(
                shown,
                [m.name for m in manifests],
                self.extensions,
            )

        manifest = manifests[0]
        logger.debug(f"Found project manifest: {manifest}")

        return ProjectDescriptor(
            manifest_file_name=manifest.name,
            project_directory=directory,
            assembly_name=manifest.stem,
            target_runtime_version=self.read_target_framework(manifest),
        )

    def read_target_framework(self, manifest: Path) -> str:
        """Read /Project/PropertyGroup/TargetFramework from a manifest"""
        try:
            root = ET.parse(str(manifest)).getroot()
        except (ET.ParseError, OSError) as e:
            raise ManifestParseError(f"Unable to read {manifest.name}: {e}\n")

        if _local_name(root.tag) == "Project":
            group_tag, field_tag = TARGET_FRAMEWORK_PATH
            for group in root:
                if _local_name(group.tag) != group_tag:
                    continue
                for element in group:
                    if _local_name(element.tag) == field_tag and element.text and element.text.strip():
                        return element.text.strip()

        raise ManifestParseError(
            f"No {'/'.join(('Project',) + TARGET_FRAMEWORK_PATH)} found in {manifest.name}\n"
        )
