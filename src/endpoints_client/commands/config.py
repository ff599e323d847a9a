"""Config commands -- view the effective settings and write a starter config.

Provides the ``endpoints-client config`` sub-command group.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from endpoints_client.exceptions import EndpointsClientError
from endpoints_client.output import error, hint, info, render, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    project_dir: Path = typer.Option(
        Path("."), "--project-dir", "-C", help="Project directory.", file_okay=False
    ),
) -> None:
    """Show the effective configuration.

    Environment overrides are applied on top of the project config file.

    Example::

        endpoints-client config show --json
    """
    from endpoints_client.config import find_project_config, resolve_config

    try:
        config = resolve_config(project_dir)
    except EndpointsClientError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    path = find_project_config(project_dir)
    info(f"Config file: {path if path else '(none, using defaults)'}")
    render(config.model_dump(mode="json"))


@config_app.command("init")
def config_init(
    project_dir: Path = typer.Option(
        Path("."), "--project-dir", "-C", help="Project directory.", file_okay=False
    ),
    discovery_docs: Optional[list[str]] = typer.Option(
        None, "--discovery-doc", "-d", help="Discovery doc file or directory (repeatable)."
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config."),
) -> None:
    """Write a starter endpoints-client.yaml with the default directories.

    Example::

        endpoints-client config init -d src/endpoints
    """
    from endpoints_client.config import find_project_config, save_project_config
    from endpoints_client.exit_codes import EXIT_CONFIG_ERROR
    from endpoints_client.models import (
        DEFAULT_CLIENT_LIB_DIR,
        DEFAULT_GEN_DISCOVERY_DOCS_DIR,
        DEFAULT_GEN_SRC_DIR,
        ProjectConfig,
    )

    existing = find_project_config(project_dir)
    if existing is not None and not force:
        error(f"Config already exists: {existing}")
        hint("Use --force to overwrite it.")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    config = ProjectConfig(
        discovery_docs=list(discovery_docs or []),
        client_lib_dir=DEFAULT_CLIENT_LIB_DIR,
        gen_src_dir=DEFAULT_GEN_SRC_DIR,
        gen_discovery_docs_dir=DEFAULT_GEN_DISCOVERY_DOCS_DIR,
    )
    path = save_project_config(project_dir, config)
    success(f"Wrote {path}")
    hint("Run: endpoints-client generate")
