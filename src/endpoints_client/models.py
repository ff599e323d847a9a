"""Canonical Pydantic models shared across endpoints_client modules.

The models fall into two groups:

**Configuration models** -- deserialised from the project-local
``endpoints-client.yaml`` file:
    :class:`GeneratorConfig` and :class:`ProjectConfig`.

**Resolved settings** -- produced once the declaration phase of a project
has finished and consumed by the internal tasks:
    :class:`ClientSettings`.

``ProjectConfig`` uses ``extra="allow"`` so that variant plugins can keep
their own sections in the same file; unknown keys are preserved in
``model_extra``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_CLIENT_LIB_DIR = "build/endpointsClientLibs"
DEFAULT_GEN_SRC_DIR = "build/endpointsGenSrc"
DEFAULT_GEN_DISCOVERY_DOCS_DIR = "build/endpointsGenDiscoveryDocs"


class GeneratorConfig(BaseModel):
    """How to invoke the Endpoints Framework tool.

    When ``tools_jar`` is set the tool is launched through ``java`` with the
    jar on the classpath; otherwise ``command`` is executed as given.

    Example::

        GeneratorConfig(tools_jar="/opt/endpoints/endpoints-framework-tools.jar")
    """

    command: list[str] = Field(
        default_factory=lambda: ["endpoints-framework-tool"],
        description="Executable (plus leading arguments) of the Endpoints tool",
    )
    tools_jar: Optional[str] = Field(
        default=None, description="Path to the endpoints-framework-tools jar"
    )
    java: str = Field(default="java", description="Java launcher used with tools_jar")
    java_opts: list[str] = Field(
        default_factory=list, description="Extra JVM options used with tools_jar"
    )
    timeout: int = Field(default=300, description="Per-document timeout in seconds")


class ProjectConfig(BaseModel):
    """Project-local configuration stored in ``endpoints-client.yaml``.

    Paths are kept as strings exactly as the user wrote them and are
    resolved against the project directory by
    :mod:`endpoints_client.config`. Unset directories fall back to the
    ``build/endpoints*`` defaults.
    """

    model_config = ConfigDict(extra="allow")

    discovery_docs: list[str] = Field(
        default_factory=list,
        description="Discovery doc files or directories to scan for *.discovery",
    )
    client_lib_dir: Optional[str] = Field(
        default=None, description="Output directory for generated client libraries"
    )
    gen_src_dir: Optional[str] = Field(
        default=None, description="Output directory for generated Java sources"
    )
    gen_discovery_docs_dir: Optional[str] = Field(
        default=None,
        description="Working directory for discovery docs extracted from archives",
    )
    endpoints_server: list[str] = Field(
        default_factory=list,
        description="Discovery doc archives published by endpoints server projects",
    )
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    capabilities: list[str] = Field(
        default_factory=lambda: ["java"],
        description="Declared project capabilities, e.g. java or android",
    )


class ClientSettings(BaseModel):
    """Resolved, immutable settings of the ``endpointsClient`` extension.

    Created by :meth:`~endpoints_client.extension.ClientExtension.resolve`
    after every user declaration has been recorded. All paths are absolute.

    See Also:
        :class:`~endpoints_client.extension.ClientExtension`: The mutable
        declaration-phase counterpart.
    """

    model_config = ConfigDict(frozen=True)

    discovery_docs: tuple[Path, ...] = ()
    client_lib_dir: Path
    gen_src_dir: Path
    gen_discovery_docs_dir: Path
