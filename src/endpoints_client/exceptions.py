"""Exception hierarchy for endpoints_client.

All exceptions inherit from :class:`EndpointsClientError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`endpoints_client.exit_codes`. The top-level error handler in
:func:`endpoints_client.app.main` catches ``EndpointsClientError`` and exits
with the appropriate code, while unexpected exceptions produce a crash log
and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    EndpointsClientError (exit 1)
    +-- ConfigError          (exit 2)
    +-- ExtractionError      (exit 3)
    +-- GenerationError      (exit 4)
    +-- RegistrationError    (exit 5)
    +-- TaskGraphError       (exit 6)
    +-- PluginError          (exit 10)
    +-- TaskExecutionError   (exit code of the wrapped cause)
"""

from __future__ import annotations

from endpoints_client.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_EXTRACTION_ERROR,
    EXIT_GENERATION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_PLUGIN_ERROR,
    EXIT_REGISTRATION_ERROR,
    EXIT_TASK_GRAPH_ERROR,
)


class EndpointsClientError(Exception):
    """Base exception for all endpoints_client errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`endpoints_client.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(EndpointsClientError):
    """Raised for configuration problems (missing discovery doc paths, invalid config files)."""

    exit_code = EXIT_CONFIG_ERROR


class ExtractionError(EndpointsClientError):
    """Raised when a discovery document archive cannot be unpacked."""

    exit_code = EXIT_EXTRACTION_ERROR


class GenerationError(EndpointsClientError):
    """Raised when the code generator fails for a discovery document."""

    exit_code = EXIT_GENERATION_ERROR


class RegistrationError(EndpointsClientError):
    """Raised when generated client-library output is missing or malformed."""

    exit_code = EXIT_REGISTRATION_ERROR


class TaskGraphError(EndpointsClientError):
    """Raised for unknown task names and dependency cycles."""

    exit_code = EXIT_TASK_GRAPH_ERROR


class PluginError(EndpointsClientError):
    """Raised when a plugin fails to load, apply, or resolve."""

    exit_code = EXIT_PLUGIN_ERROR


class TaskExecutionError(EndpointsClientError):
    """Raised by the task executor when a task action fails.

    Carries the failing task's name and reuses the exit code of the
    underlying :class:`EndpointsClientError` so that the process exit code
    still identifies the failure class.

    Args:
        task_name: Name of the task whose action raised.
        cause: The exception raised by the task action.
    """

    def __init__(self, task_name: str, cause: BaseException):
        exit_code = getattr(cause, "exit_code", EXIT_GENERIC_FAILURE)
        super().__init__(
            f"Execution failed for task ':{task_name}': {cause}", exit_code=exit_code
        )
        self.task_name = task_name
        self.cause = cause
