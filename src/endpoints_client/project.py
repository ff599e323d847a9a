"""Minimal host build model: projects, configurations, source sets, and tasks.

The client-generation pipeline is expressed as a chain of tasks wired into a
:class:`Project`. This module provides just enough of a build host for that:

* :class:`Configuration` -- a named dependency grouping resolving to files
  (e.g. the ``endpointsServer`` archives) plus the tasks that build them.
* :class:`SourceSet` -- the Java source roots of a compilation unit.
* :class:`Task` / :class:`TaskContainer` -- named units of work with explicit
  ``depends_on`` ordering.
* :class:`TaskExecutor` -- runs a set of tasks and their dependencies in
  order, strictly sequentially, failing fast on the first error.

A project is configured in two phases. During the *declaration* phase
plugins are applied and users record settings in any order. :meth:`Project.evaluate`
then ends the declaration phase and asks every applied plugin to
:meth:`~endpoints_client.plugins.base.ProjectPlugin.resolve` its settings,
once, in application order.
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar, Union

from endpoints_client.exceptions import (
    ConfigError,
    EndpointsClientError,
    TaskExecutionError,
    TaskGraphError,
)

if TYPE_CHECKING:
    from endpoints_client.plugins.base import ProjectPlugin

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Task")


# --- Tasks ---


class Task(ABC):
    """Base class for a named unit of work inside a :class:`Project`.

    Subclasses implement :meth:`run`. Ordering between tasks is declared
    with :meth:`depends` and is the only ordering the executor honours;
    there is no inference from inputs and outputs.
    """

    def __init__(self, name: str, project: Project) -> None:
        self.name = name
        self.project = project
        self.description = ""
        self.depends_on: list[str] = []

    def depends(self, *dependencies: Union[str, Task, Iterable[Union[str, Task]]]) -> None:
        """Declare that this task runs after *dependencies*.

        Accepts task names, task instances, or iterables of either.
        """
        for dep in dependencies:
            if isinstance(dep, (str, Task)):
                items: Iterable[Union[str, Task]] = [dep]
            else:
                items = dep
            for item in items:
                name = item.name if isinstance(item, Task) else item
                if name not in self.depends_on:
                    self.depends_on.append(name)

    @abstractmethod
    def run(self) -> None:
        """Perform the task's action."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class CompileTask(Task):
    """Compile-like task over the Java source roots of a source set.

    Compilation itself belongs to the host toolchain; this task collects the
    ``.java`` files the compiler would see, so that source registration can
    be observed and ordered against.
    """

    def __init__(self, name: str, project: Project, source_set: str = "main") -> None:
        super().__init__(name, project)
        self.source_set = source_set
        self.compiled_sources: list[Path] = []

    def run(self) -> None:
        roots = self.project.source_sets[self.source_set].java_src_dirs
        self.compiled_sources = sorted(
            path for root in roots if root.is_dir() for path in root.rglob("*.java")
        )
        logger.debug(
            "%s: %d Java sources from %d source roots",
            self.name, len(self.compiled_sources), len(roots),
        )


class TaskContainer:
    """Ordered registry of the tasks declared on a project."""

    def __init__(self, project: Project) -> None:
        self._project = project
        self._tasks: dict[str, Task] = {}
        self._type_actions: list[tuple[type, Callable[[Any], None]]] = []

    def create(
        self,
        name: str,
        task_type: type[T],
        configure: Optional[Callable[[T], None]] = None,
        **kwargs: Any,
    ) -> T:
        """Create, register, and optionally configure a task.

        Raises:
            TaskGraphError: If a task named *name* already exists.
        """
        if name in self._tasks:
            raise TaskGraphError(f"Task '{name}' already exists")
        task = task_type(name, self._project, **kwargs)
        self._tasks[name] = task
        if configure is not None:
            configure(task)
        for wanted, action in self._type_actions:
            if isinstance(task, wanted):
                action(task)
        return task

    def find_by_name(self, name: str) -> Optional[Task]:
        return self._tasks.get(name)

    def get_by_name(self, name: str) -> Task:
        """Return the task called *name*.

        Raises:
            TaskGraphError: If no such task is registered.
        """
        try:
            return self._tasks[name]
        except KeyError:
            raise TaskGraphError(f"Task '{name}' not found in project") from None

    def with_type(self, task_type: type[T], action: Callable[[T], None]) -> None:
        """Run *action* on every task of *task_type*, now and when created later."""
        self._type_actions.append((task_type, action))
        for task in list(self._tasks.values()):
            if isinstance(task, task_type):
                action(task)

    def names(self) -> list[str]:
        return list(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)


# --- Configurations and source sets ---


@dataclass
class Configuration:
    """A named dependency grouping that resolves to a set of files.

    Attributes:
        name: Configuration name, e.g. ``endpointsServer``.
        description: Usage hint shown in listings.
        visible: Whether the configuration is user-facing.
        files: Resolved artifact files.
        build_dependencies: Names of tasks producing those files.
    """

    name: str
    description: str = ""
    visible: bool = True
    files: list[Path] = field(default_factory=list)
    build_dependencies: list[str] = field(default_factory=list)

    def add(self, *files: Union[str, Path]) -> None:
        for f in files:
            self.files.append(Path(f))


@dataclass
class SourceSet:
    """The Java source roots of one compilation unit."""

    name: str
    java_src_dirs: list[Path] = field(default_factory=list)

    def src_dir(self, path: Union[str, Path]) -> None:
        """Add *path* as a Java source root (ignored if already present)."""
        path = Path(path)
        if path not in self.java_src_dirs:
            self.java_src_dirs.append(path)


# --- Project ---


class Project:
    """A build project that plugins attach extensions, configurations and tasks to.

    Args:
        project_dir: Root directory; relative paths resolve against it.
        build_dir: Build output directory. Defaults to ``<project_dir>/build``.
        capabilities: Declared project capabilities (``"java"``,
            ``"android"``, ...). Plugins use them to pick behaviour once, at
            assembly time.
    """

    def __init__(
        self,
        project_dir: Union[str, Path],
        build_dir: Optional[Union[str, Path]] = None,
        capabilities: Iterable[str] = ("java",),
    ) -> None:
        self.project_dir = Path(project_dir).resolve()
        self.build_dir = self.file(build_dir) if build_dir else self.project_dir / "build"
        self.capabilities = frozenset(capabilities)
        self.extensions: dict[str, Any] = {}
        self.configurations: dict[str, Configuration] = {}
        self.source_sets: dict[str, SourceSet] = {
            "main": SourceSet("main", [self.project_dir / "src" / "main" / "java"])
        }
        self.tasks = TaskContainer(self)
        self._plugins: dict[str, ProjectPlugin] = {}
        self._evaluated = False
        self._evaluation_error: Optional[BaseException] = None

    @property
    def evaluated(self) -> bool:
        return self._evaluated

    def has_capability(self, name: str) -> bool:
        return name in self.capabilities

    def file(self, path: Union[str, Path]) -> Path:
        """Resolve *path* against the project directory."""
        return (self.project_dir / Path(path).expanduser()).resolve()

    def temporary_dir(self, task_name: str) -> Path:
        """Scratch directory owned by a task, ``<build_dir>/tmp/<task_name>``."""
        path = self.build_dir / "tmp" / task_name
        path.mkdir(parents=True, exist_ok=True)
        return path

    def delete(self, path: Path) -> None:
        """Remove a file or directory tree if it exists."""
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()

    def create_configuration(
        self, name: str, description: str = "", visible: bool = True
    ) -> Configuration:
        if name in self.configurations:
            raise ConfigError(f"Configuration '{name}' already exists")
        configuration = Configuration(name=name, description=description, visible=visible)
        self.configurations[name] = configuration
        return configuration

    def get_configuration(self, name: str) -> Configuration:
        try:
            return self.configurations[name]
        except KeyError:
            raise ConfigError(f"Configuration '{name}' not found in project") from None

    # ------------------------------------------------------------------
    # Plugins and evaluation
    # ------------------------------------------------------------------

    def apply(self, plugin: ProjectPlugin) -> ProjectPlugin:
        """Apply *plugin* to this project during the declaration phase.

        Applying a plugin whose name is already applied returns the existing
        instance.

        Raises:
            ConfigError: If the project has already been evaluated.
        """
        if plugin.name in self._plugins:
            return self._plugins[plugin.name]
        if self._evaluated:
            raise ConfigError(
                f"Cannot apply plugin '{plugin.name}' after the project was evaluated"
            )
        # Plugins applied from inside apply() must resolve after this one.
        self._plugins[plugin.name] = plugin
        try:
            plugin.apply(self)
        except Exception:
            del self._plugins[plugin.name]
            raise
        logger.debug("Applied plugin '%s'", plugin.name)
        return plugin

    def has_plugin(self, name: str) -> bool:
        return name in self._plugins

    def evaluate(self) -> None:
        """End the declaration phase and let each plugin resolve its settings.

        Calling it again has no effect. If a plugin fails to resolve, the
        project stays unevaluated and every later call raises the same error.
        """
        if self._evaluation_error is not None:
            raise self._evaluation_error
        if self._evaluated:
            return
        try:
            for plugin in list(self._plugins.values()):
                plugin.resolve(self)
        except Exception as exc:
            self._evaluation_error = exc
            raise
        self._evaluated = True


class TaskExecutor:
    """Runs tasks of a project with their dependencies, in dependency order.

    Execution is strictly sequential and fail-fast: the first failing task
    stops the run and is reported as a :class:`TaskExecutionError`.

    Args:
        project: The project whose tasks are run.
        on_task_start: Called with each task just before it runs.
    """

    def __init__(
        self, project: Project, on_task_start: Optional[Callable[[Task], None]] = None
    ) -> None:
        self.project = project
        self.on_task_start = on_task_start

    def execution_order(self, task_names: Iterable[str]) -> list[Task]:
        """Return the dependency closure of *task_names*, dependencies first.

        Dependencies are visited in the order they were declared, which
        makes the order deterministic.

        Raises:
            TaskGraphError: On an unknown task or a dependency cycle.
        """
        ordered: list[Task] = []
        done: set[str] = set()
        visiting: list[str] = []

        def _visit(name: str) -> None:
            if name in done:
                return
            if name in visiting:
                cycle = " -> ".join(visiting[visiting.index(name):] + [name])
                raise TaskGraphError(f"Circular dependency between tasks: {cycle}")
            task = self.project.tasks.get_by_name(name)
            visiting.append(name)
            for dep in task.depends_on:
                _visit(dep)
            visiting.pop()
            done.add(name)
            ordered.append(task)

        for name in task_names:
            _visit(name)
        return ordered

    def run(self, *task_names: str) -> list[str]:
        """Evaluate the project if needed, then execute *task_names*.

        Returns:
            Names of the executed tasks, in execution order.

        Raises:
            TaskExecutionError: Wrapping the first exception raised by a task.
        """
        self.project.evaluate()
        executed: list[str] = []
        for task in self.execution_order(task_names):
            logger.info("> Task :%s", task.name)
            if self.on_task_start is not None:
                self.on_task_start(task)
            try:
                task.run()
            except (EndpointsClientError, OSError) as exc:
                raise TaskExecutionError(task.name, exc) from exc
            executed.append(task.name)
        return executed
