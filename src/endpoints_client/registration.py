"""Registration of generated Java sources with the consuming project.

Two strategies exist, and the orchestrator picks one when it is applied,
based on the project's declared capabilities:

* :class:`StandardSourceRegistrar` -- plain Java projects. The generated
  source directory becomes a source root of the ``main`` source set and every
  compile task depends on the source generation task.
* :class:`VariantPluginRegistrar` -- Android projects. Source handling is
  delegated to an external variant plugin, applied by name; nothing is
  registered here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from endpoints_client.models import ClientSettings
from endpoints_client.plugins import PluginManager
from endpoints_client.project import CompileTask, Project

logger = logging.getLogger(__name__)

ANDROID_CAPABILITY = "android"
ANDROID_CLIENT_PLUGIN = "endpoints-framework-android-client"


class SourceRegistrar(ABC):
    """Makes generated sources visible to the project's compilation."""

    @abstractmethod
    def apply(self, project: Project, source_task: str) -> None:
        """Declaration-phase wiring; *source_task* names the source generation task."""

    def resolve(self, project: Project, settings: ClientSettings) -> None:
        """Resolution-phase wiring, once settings are known."""


class StandardSourceRegistrar(SourceRegistrar):
    """Adds the generated source directory to the ``main`` Java source set."""

    def apply(self, project: Project, source_task: str) -> None:
        project.tasks.with_type(CompileTask, lambda compile_task: compile_task.depends(source_task))

    def resolve(self, project: Project, settings: ClientSettings) -> None:
        project.source_sets["main"].src_dir(settings.gen_src_dir)
        logger.debug("Registered %s as a main Java source root", settings.gen_src_dir)


class VariantPluginRegistrar(SourceRegistrar):
    """Hands source registration to an external variant plugin.

    Args:
        plugin_name: Entry-point name of the variant plugin.
        manager: Plugin manager used to load it. A fresh
            :class:`~endpoints_client.plugins.PluginManager` by default.
    """

    def __init__(self, plugin_name: str, manager: Optional[PluginManager] = None) -> None:
        self.plugin_name = plugin_name
        self.manager = manager or PluginManager()

    def apply(self, project: Project, source_task: str) -> None:
        if not project.has_plugin(self.plugin_name):
            project.apply(self.manager.load(self.plugin_name))


def select_registrar(
    project: Project, manager: Optional[PluginManager] = None
) -> SourceRegistrar:
    """Pick the registrar matching *project*'s capabilities."""
    if project.has_capability(ANDROID_CAPABILITY):
        return VariantPluginRegistrar(ANDROID_CLIENT_PLUGIN, manager)
    return StandardSourceRegistrar()
