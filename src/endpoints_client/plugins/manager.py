"""Plugin manager -- entry-point discovery and loading of project plugins.

The entry-point group used for discovery is ``endpoints_client.plugins``.
Third-party packages register plugins by declaring an entry point under this
group in their ``pyproject.toml``::

    [project.entry-points."endpoints_client.plugins"]
    endpoints-framework-android-client = "my_package.plugin:AndroidClientPlugin"
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any

from endpoints_client.exceptions import PluginError
from endpoints_client.plugins.base import ProjectPlugin

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "endpoints_client.plugins"
"""The entry-point group name used for plugin discovery."""


class PluginManager:
    """Discovers and instantiates project plugins registered as entry points.

    Example:
        Typical usage::

            manager = PluginManager()
            print(manager.available())
            plugin = manager.load("endpoints-framework-android-client")
    """

    def __init__(self) -> None:
        self._entry_points: dict[str, Any] | None = None

    def _discover(self) -> dict[str, Any]:
        if self._entry_points is None:
            group = importlib.metadata.entry_points().select(group=ENTRY_POINT_GROUP)
            self._entry_points = {ep.name: ep for ep in group}
            logger.debug(
                "Discovered %d plugin(s) in '%s'", len(self._entry_points), ENTRY_POINT_GROUP
            )
        return self._entry_points

    def available(self) -> list[str]:
        """Return the names of all discoverable plugins, sorted."""
        return sorted(self._discover())

    def load(self, name: str) -> ProjectPlugin:
        """Load and instantiate the plugin registered under *name*.

        Raises:
            PluginError: If no plugin is registered under *name*, or the entry
                point cannot be loaded or does not produce a
                :class:`ProjectPlugin`.
        """
        ep = self._discover().get(name)
        if ep is None:
            raise PluginError(
                f"Plugin '{name}' is not installed "
                f"(no entry point in group '{ENTRY_POINT_GROUP}')"
            )
        try:
            plugin_cls = ep.load()
            plugin = plugin_cls()
        except Exception as exc:
            raise PluginError(f"Failed to load plugin '{name}': {exc}") from exc
        if not isinstance(plugin, ProjectPlugin):
            raise PluginError(f"Plugin '{name}' is not a ProjectPlugin")
        logger.info("Loaded plugin '%s' v%s", name, plugin.version)
        return plugin
