"""Plugin system for endpoints_client -- project plugins and their discovery.

A *project plugin* attaches extensions, configurations and tasks to a
:class:`~endpoints_client.project.Project`. The client-generation
orchestrator (:class:`~endpoints_client.plugin.EndpointsClientPlugin`) is one;
variant plugins that take over source registration for a mobile build are
others. Third-party packages register variant plugins by declaring an entry
point in the ``endpoints_client.plugins`` group, and :class:`PluginManager`
loads them by name.

Key classes:

* :class:`ProjectPlugin` -- Abstract base class that all plugins extend.
* :class:`PluginManager` -- Discovers and instantiates entry-point plugins.

Example:
    Applying a variant plugin by name::

        from endpoints_client.plugins import PluginManager

        manager = PluginManager()
        project.apply(manager.load("endpoints-framework-android-client"))
"""

from endpoints_client.plugins.base import ProjectPlugin
from endpoints_client.plugins.manager import PluginManager

__all__ = ["ProjectPlugin", "PluginManager"]
