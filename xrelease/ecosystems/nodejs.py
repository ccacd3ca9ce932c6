"""Node.js ecosystem: the version lives in package.json.

package.json is rewritten with 2-space indentation and a trailing newline
(Node.js convention); every field other than "version" is preserved in order.
"""

import json
from typing import Any

from xrelease.ecosystems.base import Ecosystem
from xrelease.exceptions import EcosystemError, NoVersionFieldError


class NodeJSEcosystem(Ecosystem):
    """Node.js ecosystem backed by package.json."""

    name = "nodejs"
    display_name = "Node.js"
    manifest_file = "package.json"

    def _read(self) -> dict[str, Any]:
        package_json = self.manifest_path

        if not package_json.exists():
            raise EcosystemError(
                "package.json not found",
                details=f"Expected at: {package_json}",
                fix_hint="Run 'xrelease init' or create package.json with a version field",
            )

        try:
            with open(package_json, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise EcosystemError(
                "Invalid JSON in package.json",
                details=str(e),
                fix_hint="Fix JSON syntax errors in package.json",
            ) from e
        except OSError as e:
            raise EcosystemError("Failed to read package.json", details=str(e)) from e

        if not isinstance(data, dict):
            raise EcosystemError(
                "Invalid package.json",
                details=f"Expected a JSON object, got {type(data).__name__}",
            )
        return data

    def _write(self, data: dict[str, Any]) -> None:
        with open(self.manifest_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")

    def get_version(self) -> str:
        """Get current version from package.json.

        Returns:
            Version string (e.g., "1.0.0")

        Raises:
            NoVersionFieldError: If package.json has no version field
            EcosystemError: If package.json is missing or unreadable
        """
        version = self._read().get("version")
        if not version or not isinstance(version, str):
            raise NoVersionFieldError(
                "No version field found in package.json",
                fix_hint='Add "version": "0.1.0" to package.json',
            )
        return version

    def set_version(self, version: str) -> None:
        """Set version in package.json.

        Args:
            version: New version string (e.g., "1.0.1")

        Raises:
            EcosystemError: If package.json cannot be updated
        """
        data = self._read()
        data["version"] = version

        try:
            self._write(data)
        except OSError as e:
            raise EcosystemError(
                f"Failed to update package.json version to {version}", details=str(e)
            ) from e

    def create_manifest(self, name: str, version: str = "0.1.0") -> bool:
        """Create a minimal private package.json if none exists.

        Args:
            name: Package name
            version: Initial version

        Returns:
            True if the file was created, False if it already existed
        """
        if self.detect():
            return False
        try:
            self._write({"name": name, "version": version, "private": True})
        except OSError as e:
            raise EcosystemError("Failed to create package.json", details=str(e)) from e
        return True
