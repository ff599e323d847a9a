"""``endpoints-client`` command line entry point.

Commands:

* ``generate`` -- run the task chain and produce Java sources.
* ``tasks`` -- list the internal tasks in execution order.
* ``docs`` -- show which discovery docs and archives generation would use.
* ``config show|init`` -- inspect or create ``endpoints-client.yaml``.

Output flags (``--json``, ``--plain``, ``--no-color``, ``--quiet``,
``--verbose``) are global and go before the command name::

    endpoints-client --json generate -d src/endpoints

:func:`main` is the console script. A known failure
(:class:`~endpoints_client.exceptions.EndpointsClientError`) exits with its
own exit code; anything else leaves a crash report in the data directory
and exits with 1.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from endpoints_client import __version__
from endpoints_client.commands.config import config_app
from endpoints_client.commands.generate import docs_command, generate_command, tasks_command
from endpoints_client.exit_codes import EXIT_GENERIC_FAILURE

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="endpoints-client",
    help="Generate Java client libraries from Endpoints discovery docs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)
app.command("generate")(generate_command)
app.command("tasks")(tasks_command)
app.command("docs")(docs_command)
app.add_typer(config_app, name="config", help="Show or create endpoints-client.yaml.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"endpoints-client {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show version and exit."
    ),
    json_output: bool = typer.Option(False, "--json", help="Write results as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Write results as plain text."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colour."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only show results, warnings and errors."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug messages and log records."
    ),
) -> None:
    """Generate Java client libraries from Endpoints discovery docs."""
    from endpoints_client.output import (
        OutputFormat,
        OutputManager,
        configure_logging,
        set_output,
    )

    if json_output and plain_output:
        raise typer.BadParameter("--json and --plain cannot be combined")
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = OutputFormat.AUTO

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    configure_logging(verbose)


def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _write_crash_report(exc: BaseException) -> Path:
    """Save the traceback of *exc* under ``<data dir>/logs`` and return the file."""
    from endpoints_client.config import get_data_dir

    logs = get_data_dir() / "logs"
    logs.mkdir(parents=True, exist_ok=True)
    report = logs / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    report.write_text(
        f"endpoints-client {__version__}\n"
        f"argv: {' '.join(sys.argv)}\n\n"
        f"{type(exc).__name__}: {exc}\n\n"
        f"{traceback.format_exc()}"
    )
    return report


def main() -> None:
    """Console script entry point; always ends in :class:`SystemExit`."""
    signal.signal(signal.SIGINT, _on_sigint)
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from endpoints_client.exceptions import EndpointsClientError
        from endpoints_client.output import error

        if isinstance(exc, EndpointsClientError):
            error(str(exc))
            sys.exit(exc.exit_code)
        report = _write_crash_report(exc)
        error(f"Unexpected error ({type(exc).__name__}). Crash report: {report}")
        sys.exit(EXIT_GENERIC_FAILURE)
