"""Example variant plugin that registers generated sources for an Android project."""

from __future__ import annotations

from endpoints_client.plugins.base import ProjectPlugin
from endpoints_client.project import CompileTask, Project, SourceSet

ANDROID_SOURCE_SET = "androidMain"


class ExampleAndroidClientPlugin(ProjectPlugin):
    """Adds the generated sources to an ``androidMain`` source set.

    Register it under the name the client plugin looks up::

        [project.entry-points."endpoints_client.plugins"]
        endpoints-framework-android-client = "plugins.example_android_plugin.plugin:ExampleAndroidClientPlugin"
    """

    def __init__(self) -> None:
        self.source_set: SourceSet | None = None

    @property
    def name(self) -> str:
        return "endpoints-framework-android-client"

    @property
    def description(self) -> str:
        return "Example Android source registration for generated Endpoints clients"

    def apply(self, project: Project) -> None:
        self.source_set = project.source_sets.setdefault(
            ANDROID_SOURCE_SET, SourceSet(ANDROID_SOURCE_SET)
        )
        project.tasks.with_type(
            CompileTask, lambda task: task.depends("_endpointsClientGenSrc")
        )

    def resolve(self, project: Project) -> None:
        assert self.source_set is not None
        settings = project.extensions["endpointsClient"].settings
        self.source_set.src_dir(settings.gen_src_dir)
