"""Abstract base class for endpoints_client project plugins.

Every plugin must subclass :class:`ProjectPlugin` and implement the
:attr:`name` property and :meth:`apply`. :meth:`resolve` is optional; the
default implementation is a no-op so plugins only override it when they read
user settings.

Example:
    Minimal plugin implementation::

        class MyPlugin(ProjectPlugin):
            @property
            def name(self) -> str:
                return "my-plugin"

            def apply(self, project):
                project.tasks.create("hello", HelloTask)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from endpoints_client.project import Project


class ProjectPlugin(ABC):
    """Base class for all project plugins.

    The plugin lifecycle is:

    1. Instantiation -- directly, or by the :class:`PluginManager` calling
       the no-arg constructor.
    2. :meth:`apply` -- called once by
       :meth:`~endpoints_client.project.Project.apply` during the
       declaration phase. Declare extensions, configurations and tasks here;
       do not read user settings yet.
    3. :meth:`resolve` -- called once by
       :meth:`~endpoints_client.project.Project.evaluate` after all user
       settings have been recorded. Read settings and bind them to tasks.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique plugin name used for discovery and logging."""
        ...

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def description(self) -> str:
        return ""

    @abstractmethod
    def apply(self, project: Project) -> None:
        """Declare this plugin's extensions, configurations and tasks on *project*."""

    def resolve(self, project: Project) -> None:
        """Bind resolved user settings once the declaration phase is over.

        Args:
            project: The project being evaluated.
        """
