"""Console output for the endpoints-client CLI.

Two streams, two purposes:

* **stdout** carries results only: the generation report, the task list, the
  resolved discovery docs, the effective settings. ``--json`` output on
  stdout is always parseable.
* **stderr** carries everything else: ``> Task :name`` progress lines,
  warnings about duplicated discovery docs, errors, and hints.

Rich is used when stdout is a terminal and colour is allowed (``NO_COLOR``,
``TERM=dumb`` and ``--no-color`` all turn it off). Otherwise output is plain
text with no wrapping, so paths in messages stay intact.

Commands and tasks do not hold an :class:`OutputManager`; they call the
module-level helpers (:func:`info`, :func:`warning`, :func:`task_progress`,
...), which go through the instance installed by
:func:`~endpoints_client.app.main_callback`.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Result formats. ``AUTO`` picks ``RICH`` on a colour terminal, else ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# Diagnostic kinds: (plain prefix, Rich style, silenced by --quiet)
_DIAGNOSTICS: dict[str, tuple[str, str, bool]] = {
    "info": ("", "", True),
    "task": ("", "bold", True),
    "success": ("", "green", True),
    "hint": ("→ ", "dim", True),
    "warning": ("Warning: ", "yellow", False),
    "error": ("Error: ", "bold red", False),
    "debug": ("[debug] ", "dim", False),
}


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _colour_disabled_by_env() -> bool:
    """``NO_COLOR`` (any value, even empty) or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


class OutputManager:
    """Routes results to stdout and diagnostics to stderr.

    Args:
        format: Result format; ``AUTO`` is resolved here, once.
        no_color: Disable colour and Rich markup entirely.
        quiet: Drop progress, info, success and hint messages. Warnings and
            errors are always shown.
        verbose: Show debug messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _colour_disabled_by_env()
        self._quiet = quiet
        self._verbose = verbose
        if format is OutputFormat.AUTO:
            format = OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
        self._format = format

        self._out = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format is OutputFormat.RICH,
        )
        self._err = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # --- results (stdout) ---

    def write_line(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def render(self, data: Any) -> None:
        """Write a result mapping or list in the active format.

        Plain output is one ``key<TAB>value`` line per mapping entry, or one
        line per list item.
        """
        if self._format is OutputFormat.JSON:
            self.write_line(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        elif self._format is OutputFormat.PLAIN:
            if isinstance(data, dict):
                lines = [f"{key}\t{value}" for key, value in data.items()]
            elif isinstance(data, list):
                lines = [str(item) for item in data]
            else:
                lines = [str(data)]
            for line in lines:
                self.write_line(line)
        else:
            text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
            self._out.print(Syntax(text, "json", theme="monokai", word_wrap=True))

    def render_table(
        self, headers: list[str], rows: list[list[str]], title: Optional[str] = None
    ) -> None:
        """Write rows as a Rich table, TSV (plain) or a list of objects (JSON)."""
        if self._format is OutputFormat.JSON:
            self.write_line(
                json.dumps([dict(zip(headers, row)) for row in rows], indent=2, ensure_ascii=False)
            )
            return
        if self._format is OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self.write_line("\t".join(row))
            return
        table = Table(title=title, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._out.print(table)

    # --- diagnostics (stderr) ---

    def diagnostic(self, kind: str, message: str) -> None:
        """Write *message* to stderr as a diagnostic of *kind* (see ``_DIAGNOSTICS``)."""
        prefix, style, quietable = _DIAGNOSTICS[kind]
        if quietable and self._quiet:
            return
        if kind == "debug" and not self._verbose:
            return
        if self._no_color:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
            return
        # Paths such as build/[variant] must not be read as markup.
        body = escape(f"{prefix}{message}")
        self._err.print(f"[{style}]{body}[/{style}]" if style else body)

    def info(self, message: str) -> None:
        self.diagnostic("info", message)

    def task_progress(self, task_name: str) -> None:
        self.diagnostic("task", f"> Task :{task_name}")

    def success(self, message: str) -> None:
        self.diagnostic("success", message)

    def hint(self, message: str) -> None:
        self.diagnostic("hint", message)

    def warning(self, message: str) -> None:
        self.diagnostic("warning", message)

    def error(self, message: str) -> None:
        self.diagnostic("error", message)

    def debug(self, message: str) -> None:
        self.diagnostic("debug", message)


def configure_logging(verbose: bool) -> None:
    """With *verbose*, send ``logging`` records at DEBUG and up to stderr via Rich.

    Without it nothing is configured and library loggers stay at WARNING.
    """
    if not verbose:
        return
    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=Console(stderr=True), show_path=False, markup=False))
    root.setLevel(logging.DEBUG)


# --- global instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """The installed :class:`OutputManager`; a default one is created on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed instance. Tests call this between CLI invocations."""
    global _output
    _output = None


def render(data: Any) -> None:
    get_output().render(data)


def render_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().render_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def task_progress(task_name: str) -> None:
    get_output().task_progress(task_name)


def success(message: str) -> None:
    get_output().success(message)


def hint(message: str) -> None:
    get_output().hint(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
