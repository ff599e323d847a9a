"""Extraction of discovery doc archives published by endpoints server projects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from endpoints_client.archives import extract_zip
from endpoints_client.exceptions import ConfigError
from endpoints_client.project import Project, Task

logger = logging.getLogger(__name__)


class ExtractDiscoveryDocZipsTask(Task):
    """Unpacks every discovery doc archive into one working directory.

    The directory is deleted first, so its contents always reflect exactly
    the current archives. With no archives the directory is left absent.
    """

    def __init__(self, name: str, project: Project) -> None:
        super().__init__(name, project)
        self.discovery_doc_zips: list[Path] = []
        self.discovery_docs_dir: Optional[Path] = None

    def run(self) -> None:
        if self.discovery_docs_dir is None:
            raise ConfigError(f"Task '{self.name}' has no discovery docs directory")

        self.project.delete(self.discovery_docs_dir)
        if not self.discovery_doc_zips:
            logger.debug("No discovery doc archives to extract")
            return

        for archive in self.discovery_doc_zips:
            extract_zip(archive, self.discovery_docs_dir)
        logger.info(
            "Extracted %d discovery doc archive(s) into %s",
            len(self.discovery_doc_zips), self.discovery_docs_dir,
        )
