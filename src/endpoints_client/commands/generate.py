"""Pipeline commands -- run and inspect client library generation.

Implements the top-level ``generate``, ``tasks`` and ``docs`` commands. All
three build a :class:`~endpoints_client.project.Project` from the effective
configuration (see :func:`~endpoints_client.config.resolve_config`) with the
client plugin applied.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer

from endpoints_client.exceptions import EndpointsClientError
from endpoints_client.output import (
    error,
    hint,
    info,
    render,
    render_table,
    success,
    task_progress,
)


def _project_dir_option() -> Any:
    return typer.Option(
        Path("."),
        "--project-dir",
        "-C",
        help="Project directory (holds endpoints-client.yaml).",
        file_okay=False,
    )


def generate_command(
    project_dir: Path = _project_dir_option(),
    discovery_docs: Optional[list[str]] = typer.Option(
        None,
        "--discovery-doc",
        "-d",
        help="Discovery doc file or directory (repeatable). Replaces the configured list.",
    ),
    client_lib_dir: Optional[str] = typer.Option(
        None, "--client-lib-dir", help="Output directory for client libraries."
    ),
    gen_src_dir: Optional[str] = typer.Option(
        None, "--gen-src-dir", help="Output directory for generated Java sources."
    ),
    gen_discovery_docs_dir: Optional[str] = typer.Option(
        None,
        "--gen-discovery-docs-dir",
        help="Working directory for discovery docs extracted from archives.",
    ),
    server_archives: Optional[list[str]] = typer.Option(
        None,
        "--server-archive",
        "-a",
        help="Discovery doc archive from an endpoints server (repeatable).",
    ),
    tools_jar: Optional[str] = typer.Option(
        None, "--tools-jar", help="Path to the endpoints-framework-tools jar."
    ),
) -> None:
    """Generate client libraries and their Java sources.

    Runs the whole task chain: extract server discovery doc archives,
    generate one client library per discovery doc, then copy the Java
    sources into the generated source directory and register it.

    Example::

        endpoints-client generate -d src/endpoints/echo.discovery
        endpoints-client generate -a ../server/build/discovery-docs.zip --json
    """
    from endpoints_client.config import resolve_config
    from endpoints_client.plugin import (
        GENERATE_CLIENT_LIBRARY_SRC_TASK,
        GENERATE_CLIENT_LIBRARY_TASK,
        create_project,
    )
    from endpoints_client.project import TaskExecutor
    from endpoints_client.tasks import (
        GenerateClientLibrariesTask,
        GenerateClientLibrarySourceTask,
    )

    try:
        config = resolve_config(
            project_dir,
            cli_discovery_docs=discovery_docs,
            cli_client_lib_dir=client_lib_dir,
            cli_gen_src_dir=gen_src_dir,
            cli_gen_discovery_docs_dir=gen_discovery_docs_dir,
            cli_server_archives=server_archives,
            cli_tools_jar=tools_jar,
        )
        project, plugin = create_project(project_dir, config)
        TaskExecutor(project, on_task_start=lambda task: task_progress(task.name)).run(
            GENERATE_CLIENT_LIBRARY_SRC_TASK
        )
    except EndpointsClientError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    settings = plugin.extension.settings
    gen_libs = project.tasks.get_by_name(GENERATE_CLIENT_LIBRARY_TASK)
    gen_src = project.tasks.get_by_name(GENERATE_CLIENT_LIBRARY_SRC_TASK)
    assert isinstance(gen_libs, GenerateClientLibrariesTask)
    assert isinstance(gen_src, GenerateClientLibrarySourceTask)

    if not gen_libs.generated:
        info("No discovery docs found; nothing was generated.")
        hint("Declare discovery_docs in endpoints-client.yaml or pass --discovery-doc.")

    success(
        f"Generated {len(gen_libs.generated)} client librar"
        f"{'y' if len(gen_libs.generated) == 1 else 'ies'} into {settings.client_lib_dir}"
    )
    render(
        {
            "discovery_docs": [str(d) for d in gen_libs.generated],
            "client_libraries": gen_src.packages,
            "gen_src_dir": str(settings.gen_src_dir),
            "source_roots": [str(d) for d in project.source_sets["main"].java_src_dirs],
        }
    )


def tasks_command(project_dir: Path = _project_dir_option()) -> None:
    """List the internal tasks in execution order.

    Example::

        endpoints-client tasks
    """
    from endpoints_client.config import load_project_config
    from endpoints_client.plugin import create_project
    from endpoints_client.project import TaskExecutor

    try:
        project, _ = create_project(project_dir, load_project_config(project_dir))
        ordered = TaskExecutor(project).execution_order(project.tasks.names())
    except EndpointsClientError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    rows = [[t.name, ", ".join(t.depends_on) or "-", t.description] for t in ordered]
    render_table(["Task", "Depends on", "Description"], rows, title="Endpoints client tasks")


def docs_command(
    project_dir: Path = _project_dir_option(),
    discovery_docs: Optional[list[str]] = typer.Option(
        None, "--discovery-doc", "-d", help="Discovery doc file or directory (repeatable)."
    ),
) -> None:
    """List the discovery docs and archives that generation would use.

    Declared directories are expanded into the discovery docs they contain.
    Archives are listed as they are; their contents are only known after
    extraction.

    Example::

        endpoints-client docs
        endpoints-client docs -d shared/discovery --plain
    """
    from endpoints_client.config import resolve_config
    from endpoints_client.plugin import create_project

    try:
        config = resolve_config(project_dir, cli_discovery_docs=discovery_docs)
        project, plugin = create_project(project_dir, config)
        project.evaluate()
    except EndpointsClientError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    rows = [[str(doc), "declared"] for doc in plugin.extension.settings.discovery_docs]
    rows.extend(
        [str(project.file(archive)), "endpointsServer archive"]
        for archive in config.endpoints_server
    )
    render_table(["Path", "Source"], rows, title="Discovery docs")
