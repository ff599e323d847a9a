"""Client library generation, one generator invocation per discovery doc."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from endpoints_client.discovery import find_discovery_docs_in_directory
from endpoints_client.exceptions import ConfigError, GenerationError
from endpoints_client.generator import ClientLibGenerator, EndpointsToolGenerator
from endpoints_client.output import debug, warning
from endpoints_client.project import Project, Task

logger = logging.getLogger(__name__)

LANGUAGE = "java"
BUILD_SYSTEM = "gradle"


class GenerateClientLibrariesTask(Task):
    """Generates a client library for every discovery doc into one directory.

    Discovery docs come from two places, processed in two passes: the
    user-declared docs first, then whatever the extraction task left in the
    generated discovery docs directory. That directory is scanned when the
    task runs, not when it is configured.

    The output directory is deleted and recreated on every run. The first
    generator failure aborts the task; documents after it are not processed.
    """

    def __init__(self, name: str, project: Project) -> None:
        super().__init__(name, project)
        self.client_library_dir: Optional[Path] = None
        self.discovery_docs: list[Path] = []
        self.generated_discovery_docs_dir: Optional[Path] = None
        self.generator: ClientLibGenerator = EndpointsToolGenerator()
        self.generated: list[Path] = []

    def run(self) -> None:
        if self.client_library_dir is None or self.generated_discovery_docs_dir is None:
            raise ConfigError(f"Task '{self.name}' is not configured")

        self.generated = []
        self.project.delete(self.client_library_dir)
        self.client_library_dir.mkdir(parents=True)

        for doc in self.discovery_docs:
            self._generate(doc)

        extracted = find_discovery_docs_in_directory(
            self.generated_discovery_docs_dir, missing_ok=True
        )
        declared_names = {doc.name for doc in self.discovery_docs}
        for doc in extracted:
            if doc.name in declared_names:
                warning(
                    f"Discovery doc {doc.name} is both declared and extracted from "
                    "an endpointsServer archive; generating it twice"
                )
            self._generate(doc)

    def _generate(self, doc: Path) -> None:
        assert self.client_library_dir is not None
        debug(f"Generating client library for {doc}")
        try:
            self.generator.generate(
                LANGUAGE, BUILD_SYSTEM, self.client_library_dir, doc.absolute()
            )
        except GenerationError:
            raise
        except Exception as exc:
            raise GenerationError(f"Generator failed for {doc}: {exc}") from exc
        self.generated.append(doc)
