"""Client library generators.

The generation step talks to the code generator through
:class:`ClientLibGenerator`: given a discovery document, write one client
library package into an output directory. The internals of the generator are
opaque to this package.

:class:`EndpointsToolGenerator` is the production implementation. It runs the
Endpoints Framework tool's ``gen-client-lib`` action as a subprocess::

    endpoints-framework-tool gen-client-lib -l java -bs gradle -o <out> <doc>

or, when a tools jar is configured::

    java -cp endpoints-framework-tools.jar \\
        com.google.api.server.spi.tools.EndpointsTool gen-client-lib ...

With ``-bs gradle`` the tool writes one ``<api>-<version>-java.zip`` package
per document.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from endpoints_client.exceptions import GenerationError
from endpoints_client.models import GeneratorConfig

logger = logging.getLogger(__name__)

GEN_CLIENT_LIB_ACTION = "gen-client-lib"
ENDPOINTS_TOOL_MAIN_CLASS = "com.google.api.server.spi.tools.EndpointsTool"

_STDERR_TAIL_LINES = 20


class ClientLibGenerator(ABC):
    """Produces a client library package from one discovery document."""

    @abstractmethod
    def generate(
        self,
        language: str,
        build_system: str,
        output_dir: Path,
        discovery_doc: Path,
    ) -> None:
        """Write the client library for *discovery_doc* into *output_dir*.

        Args:
            language: Target language of the client library (e.g. ``java``).
            build_system: Build system the package is laid out for
                (e.g. ``gradle``).
            output_dir: Shared output directory; must already exist.
            discovery_doc: Absolute path of the discovery document.

        Raises:
            GenerationError: If the library could not be generated.
        """


class EndpointsToolGenerator(ClientLibGenerator):
    """Runs the Endpoints Framework tool in a subprocess.

    Args:
        config: How to launch the tool. Defaults to
            :class:`~endpoints_client.models.GeneratorConfig` defaults.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()

    def base_command(self) -> list[str]:
        """The tool's command line up to (not including) the action name."""
        if self.config.tools_jar:
            return [
                self.config.java,
                *self.config.java_opts,
                "-cp",
                self.config.tools_jar,
                ENDPOINTS_TOOL_MAIN_CLASS,
            ]
        return list(self.config.command)

    def build_command(
        self,
        language: str,
        build_system: str,
        output_dir: Path,
        discovery_doc: Path,
    ) -> list[str]:
        return [
            *self.base_command(),
            GEN_CLIENT_LIB_ACTION,
            "-l",
            language,
            "-bs",
            build_system,
            "-o",
            str(Path(output_dir).absolute()),
            str(Path(discovery_doc).absolute()),
        ]

    def generate(
        self,
        language: str,
        build_system: str,
        output_dir: Path,
        discovery_doc: Path,
    ) -> None:
        cmd = self.build_command(language, build_system, output_dir, discovery_doc)
        logger.debug("Running %s", shlex.join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except subprocess.TimeoutExpired:
            raise GenerationError(
                f"Client library generation for {discovery_doc.name} timed out "
                f"after {self.config.timeout}s"
            ) from None
        except FileNotFoundError:
            raise GenerationError(
                f"Endpoints tool not found: {cmd[0]!r}. Install endpoints-framework-tools "
                "or set generator.tools_jar / ENDPOINTS_TOOLS_JAR."
            ) from None

        if result.returncode != 0:
            tail = "\n".join(
                (result.stderr or result.stdout or "").splitlines()[-_STDERR_TAIL_LINES:]
            )
            message = (
                f"Endpoints tool exited with code {result.returncode} "
                f"for {discovery_doc}"
            )
            if tail:
                message = f"{message}:\n{tail}"
            raise GenerationError(message)
