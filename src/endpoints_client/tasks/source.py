"""Extraction of Java sources from generated client library packages."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional

from endpoints_client.archives import extract_zip
from endpoints_client.exceptions import ConfigError, RegistrationError
from endpoints_client.project import Project, Task

logger = logging.getLogger(__name__)

JAVA_SOURCE_PATH = Path("src", "main", "java")


class GenerateClientLibrarySourceTask(Task):
    """Copies the ``src/main/java`` tree of every client library into one directory.

    Client library packages are the ``*.zip`` files in the client library
    directory; packages that are already unpacked as directories are taken
    as they are. The generated source directory is deleted first, so it
    holds nothing but sources derived from the current packages.
    """

    def __init__(self, name: str, project: Project) -> None:
        super().__init__(name, project)
        self.client_lib_dir: Optional[Path] = None
        self.generated_src_dir: Optional[Path] = None
        self.packages: list[str] = []

    def run(self) -> None:
        if self.client_lib_dir is None or self.generated_src_dir is None:
            raise ConfigError(f"Task '{self.name}' is not configured")
        if not self.client_lib_dir.is_dir():
            raise RegistrationError(
                f"Client library directory does not exist: {self.client_lib_dir}"
            )

        self.packages = []
        self.project.delete(self.generated_src_dir)
        self.generated_src_dir.mkdir(parents=True)

        scratch = self.project.temporary_dir(self.name) / "endpoints-tmp"
        self.project.delete(scratch)
        scratch.mkdir(parents=True)

        for package in sorted(self.client_lib_dir.iterdir()):
            if package.is_file() and package.suffix == ".zip":
                unpacked = scratch / package.stem
                extract_zip(package, unpacked, error=RegistrationError)
                java_root = _find_java_root(unpacked, package)
            elif package.is_dir():
                java_root = _find_java_root(package, package)
            else:
                logger.debug("Ignoring %s: not a client library package", package)
                continue
            shutil.copytree(java_root, self.generated_src_dir, dirs_exist_ok=True)
            self.packages.append(package.name)

        logger.info(
            "Copied Java sources of %d client librar%s into %s",
            len(self.packages),
            "y" if len(self.packages) == 1 else "ies",
            self.generated_src_dir,
        )


def _find_java_root(unpacked: Path, package: Path) -> Path:
    """Locate ``src/main/java`` at the top of *unpacked* or one directory down."""
    candidates = [unpacked / JAVA_SOURCE_PATH]
    candidates.extend(
        child / JAVA_SOURCE_PATH for child in sorted(unpacked.iterdir()) if child.is_dir()
    )
    found = [c for c in candidates if c.is_dir()]
    if not found:
        raise RegistrationError(f"No {JAVA_SOURCE_PATH.as_posix()} tree in client library {package}")
    if len(found) > 1:
        raise RegistrationError(
            f"Ambiguous client library {package}: several {JAVA_SOURCE_PATH.as_posix()} trees"
        )
    return found[0]
