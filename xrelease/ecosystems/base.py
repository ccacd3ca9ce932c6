"""Abstract base class for project manifest operations.

Ecosystems encapsulate the manifest a project keeps its version in:
- Detection of the manifest
- Version reading/writing
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar


class Ecosystem(ABC):
    """Abstract base class for ecosystem implementations.

    Each ecosystem implements this interface so the bump stage can read and
    write the project version without knowing the manifest format.
    """

    name: ClassVar[str]
    display_name: ClassVar[str]
    manifest_file: ClassVar[str]

    def __init__(self, project_root: Path) -> None:
        """Initialize ecosystem with project root.

        Args:
            project_root: Path to the project root directory
        """
        self.project_root = project_root

    @property
    def manifest_path(self) -> Path:
        return self.project_root / self.manifest_file

    def detect(self) -> bool:
        """Detect if project uses this ecosystem.

        Returns:
            True if the manifest file exists
        """
        return self.manifest_path.exists()

    @abstractmethod
    def get_version(self) -> str:
        """Get current version from the manifest.

        Returns:
            Version string (e.g., "1.0.0")

        Raises:
            NoVersionFieldError: If the manifest has no version
            EcosystemError: If the manifest cannot be read
        """

    @abstractmethod
    def set_version(self, version: str) -> None:
        """Set version in the manifest, preserving all other fields.

        Args:
            version: New version string

        Raises:
            EcosystemError: If version cannot be set
        """
