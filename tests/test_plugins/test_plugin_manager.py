"""Tests for plugin discovery, loading, and the example Android plugin."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from endpoints_client.exceptions import PluginError
from endpoints_client.plugins.base import ProjectPlugin
from endpoints_client.plugins.manager import ENTRY_POINT_GROUP, PluginManager
from endpoints_client.project import CompileTask, Project


# ---------------------------------------------------------------------------
# Test plugins
# ---------------------------------------------------------------------------


class MinimalPlugin(ProjectPlugin):
    @property
    def name(self) -> str:
        return "minimal"

    def apply(self, project: Project) -> None:
        pass


class NotAPlugin:
    pass


def _make_entry_point(name: str, target: Any) -> Any:
    class MockEP:
        def __init__(self) -> None:
            self.name = name

        def load(self) -> Any:
            return target

    return MockEP()


def _make_entry_points_result(eps: list[Any]) -> Any:
    class MockEPs:
        def __init__(self, items: list[Any]) -> None:
            self._items = items

        def select(self, group: str) -> list[Any]:
            if group == ENTRY_POINT_GROUP:
                return self._items
            return []

    return MockEPs(eps)


def _patched(eps: list[Any]) -> Any:
    return patch(
        "endpoints_client.plugins.manager.importlib.metadata.entry_points",
        return_value=_make_entry_points_result(eps),
    )


# ---------------------------------------------------------------------------
# PluginManager
# ---------------------------------------------------------------------------


class TestPluginManager:

    def test_available_sorted(self) -> None:
        eps = [_make_entry_point("zeta", MinimalPlugin), _make_entry_point("alpha", MinimalPlugin)]
        with _patched(eps):
            assert PluginManager().available() == ["alpha", "zeta"]

    def test_load_instantiates_plugin(self) -> None:
        with _patched([_make_entry_point("minimal", MinimalPlugin)]):
            plugin = PluginManager().load("minimal")
        assert isinstance(plugin, MinimalPlugin)
        assert plugin.version == "0.1.0"

    def test_load_unknown_plugin(self) -> None:
        with _patched([]):
            with pytest.raises(PluginError, match="is not installed"):
                PluginManager().load("endpoints-framework-android-client")

    def test_load_broken_entry_point(self) -> None:
        class BrokenEP:
            name = "broken"

            def load(self) -> type:
                raise ImportError("missing dependency")

        with _patched([BrokenEP()]):
            with pytest.raises(PluginError, match="missing dependency"):
                PluginManager().load("broken")

    def test_load_rejects_non_plugin(self) -> None:
        with _patched([_make_entry_point("odd", NotAPlugin)]):
            with pytest.raises(PluginError, match="not a ProjectPlugin"):
                PluginManager().load("odd")

    def test_discovery_cached(self) -> None:
        manager = PluginManager()
        with _patched([_make_entry_point("minimal", MinimalPlugin)]) as mocked:
            manager.available()
            manager.load("minimal")
        assert mocked.call_count == 1


# ---------------------------------------------------------------------------
# ExampleAndroidClientPlugin
# ---------------------------------------------------------------------------


class TestExampleAndroidClientPlugin:

    def test_metadata(self) -> None:
        from plugins.example_android_plugin.plugin import ExampleAndroidClientPlugin

        plugin = ExampleAndroidClientPlugin()
        assert plugin.name == "endpoints-framework-android-client"
        assert "android" in plugin.description.lower()

    def test_apply_declares_source_set(self, project_dir: Path) -> None:
        from plugins.example_android_plugin.plugin import ExampleAndroidClientPlugin

        project = Project(project_dir, capabilities=["android"])
        project.apply(ExampleAndroidClientPlugin())

        assert "androidMain" in project.source_sets
        compile_task = project.tasks.create("compileDebugJava", CompileTask)
        assert "_endpointsClientGenSrc" in compile_task.depends_on
