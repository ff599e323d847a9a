"""Plugin definition for Endpoints clients.

All tasks of this plugin are internal. Applying it to a project generates
Java sources into ``build/endpointsGenSrc`` (see
:class:`~endpoints_client.extension.ClientExtension`) from the discovery
docs the user points at. There are two ways to supply discovery docs, and
they can be combined:

1. Declare the files, or directories holding them, on the extension::

       project.extensions["endpointsClient"].discovery_docs = ["api/echo.discovery"]

2. Add discovery doc archives built by an endpoints server project to the
   ``endpointsServer`` configuration::

       server = project.get_configuration("endpointsServer")
       server.add("../server/build/endpoints-discovery-docs.zip")
       server.build_dependencies.append("server:discoveryDocsZip")

Task chain, each step depending on the previous one::

    _extractServerDiscoveryDocs -> _endpointsClientLibs -> _endpointsClientGenSrc

Nothing is read from the extension while the plugin is applied; settings are
bound to the tasks in :meth:`EndpointsClientPlugin.resolve`, when the
project is evaluated.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from endpoints_client.extension import ClientExtension
from endpoints_client.generator import ClientLibGenerator, EndpointsToolGenerator
from endpoints_client.models import ProjectConfig
from endpoints_client.plugins import PluginManager, ProjectPlugin
from endpoints_client.project import Project
from endpoints_client.registration import SourceRegistrar, select_registrar
from endpoints_client.tasks import (
    ExtractDiscoveryDocZipsTask,
    GenerateClientLibrariesTask,
    GenerateClientLibrarySourceTask,
)

logger = logging.getLogger(__name__)

GENERATE_CLIENT_LIBRARY_TASK = "_endpointsClientLibs"
GENERATE_CLIENT_LIBRARY_SRC_TASK = "_endpointsClientGenSrc"
EXTRACT_SERVER_DISCOVERY_DOCS_TASK = "_extractServerDiscoveryDocs"

ENDPOINTS_CLIENT_EXTENSION = "endpointsClient"
ENDPOINTS_SERVER_CONFIGURATION = "endpointsServer"

INTERNAL_TASK_DESCRIPTION = "_internal"


class EndpointsClientPlugin(ProjectPlugin):
    """Orchestrates discovery doc extraction, client generation and source registration.

    Args:
        generator: Generator used by the client library task. Defaults to an
            :class:`~endpoints_client.generator.EndpointsToolGenerator`.
        plugin_manager: Used to load a variant plugin for Android projects.
    """

    def __init__(
        self,
        generator: Optional[ClientLibGenerator] = None,
        plugin_manager: Optional[PluginManager] = None,
    ) -> None:
        self.generator = generator or EndpointsToolGenerator()
        self.plugin_manager = plugin_manager
        self.extension: Optional[ClientExtension] = None
        self.registrar: Optional[SourceRegistrar] = None

    @property
    def name(self) -> str:
        return "endpoints-framework-client"

    @property
    def description(self) -> str:
        return "Generates Endpoints client libraries from discovery docs"

    # ------------------------------------------------------------------
    # Declaration phase
    # ------------------------------------------------------------------

    def apply(self, project: Project) -> None:
        self.extension = ClientExtension(project)
        project.extensions[ENDPOINTS_CLIENT_EXTENSION] = self.extension

        project.create_configuration(
            ENDPOINTS_SERVER_CONFIGURATION,
            description="Discovery doc archives built by an endpoints server project",
            visible=False,
        )

        def _internal(task):
            task.description = INTERNAL_TASK_DESCRIPTION

        project.tasks.create(
            EXTRACT_SERVER_DISCOVERY_DOCS_TASK, ExtractDiscoveryDocZipsTask, _internal
        )

        gen_libs = project.tasks.create(
            GENERATE_CLIENT_LIBRARY_TASK, GenerateClientLibrariesTask, _internal
        )
        gen_libs.depends(EXTRACT_SERVER_DISCOVERY_DOCS_TASK)
        gen_libs.generator = self.generator

        gen_src = project.tasks.create(
            GENERATE_CLIENT_LIBRARY_SRC_TASK, GenerateClientLibrarySourceTask, _internal
        )
        gen_src.depends(GENERATE_CLIENT_LIBRARY_TASK)

        self.registrar = select_registrar(project, self.plugin_manager)
        self.registrar.apply(project, GENERATE_CLIENT_LIBRARY_SRC_TASK)
        logger.debug(
            "Declared endpoints client tasks with %s", type(self.registrar).__name__
        )

    # ------------------------------------------------------------------
    # Resolution phase
    # ------------------------------------------------------------------

    def resolve(self, project: Project) -> None:
        assert self.extension is not None and self.registrar is not None
        settings = self.extension.resolve()
        server = project.get_configuration(ENDPOINTS_SERVER_CONFIGURATION)

        extract = project.tasks.get_by_name(EXTRACT_SERVER_DISCOVERY_DOCS_TASK)
        assert isinstance(extract, ExtractDiscoveryDocZipsTask)
        extract.discovery_doc_zips = [project.file(f) for f in server.files]
        extract.discovery_docs_dir = settings.gen_discovery_docs_dir
        # Archives must be built before they can be extracted.
        extract.depends(server.build_dependencies)

        gen_libs = project.tasks.get_by_name(GENERATE_CLIENT_LIBRARY_TASK)
        assert isinstance(gen_libs, GenerateClientLibrariesTask)
        gen_libs.client_library_dir = settings.client_lib_dir
        gen_libs.discovery_docs = list(settings.discovery_docs)
        gen_libs.generated_discovery_docs_dir = settings.gen_discovery_docs_dir

        gen_src = project.tasks.get_by_name(GENERATE_CLIENT_LIBRARY_SRC_TASK)
        assert isinstance(gen_src, GenerateClientLibrarySourceTask)
        gen_src.client_lib_dir = settings.client_lib_dir
        gen_src.generated_src_dir = settings.gen_src_dir

        self.registrar.resolve(project, settings)


def create_project(
    project_dir: Union[str, Path],
    config: ProjectConfig,
    generator: Optional[ClientLibGenerator] = None,
    plugin_manager: Optional[PluginManager] = None,
) -> tuple[Project, EndpointsClientPlugin]:
    """Assemble a project from a resolved config and apply the client plugin.

    The project is left in its declaration phase; it is evaluated by the
    :class:`~endpoints_client.project.TaskExecutor` (or an explicit
    :meth:`~endpoints_client.project.Project.evaluate`).

    Args:
        project_dir: Project root directory.
        config: Effective configuration, see
            :func:`~endpoints_client.config.resolve_config`.
        generator: Overrides the generator built from ``config.generator``.
        plugin_manager: Used to load variant plugins.
    """
    project = Project(project_dir, capabilities=config.capabilities)
    plugin = EndpointsClientPlugin(
        generator=generator or EndpointsToolGenerator(config.generator),
        plugin_manager=plugin_manager,
    )
    project.apply(plugin)

    ext = project.extensions[ENDPOINTS_CLIENT_EXTENSION]
    ext.discovery_docs = config.discovery_docs
    if config.client_lib_dir:
        ext.client_lib_dir = config.client_lib_dir
    if config.gen_src_dir:
        ext.gen_src_dir = config.gen_src_dir
    if config.gen_discovery_docs_dir:
        ext.gen_discovery_docs_dir = config.gen_discovery_docs_dir

    project.get_configuration(ENDPOINTS_SERVER_CONFIGURATION).add(*config.endpoints_server)
    return project, plugin
