"""Numeric process exit codes, one per failure class.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~endpoints_client.exceptions.EndpointsClientError`
subclass. CI scripts can inspect the exit code to tell a bad configuration
apart from a generator failure without parsing stderr.

Example::

    $ endpoints-client generate -d missing/
    $ echo $?
    2   # EXIT_CONFIG_ERROR -- the declared directory does not exist
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_CONFIG_ERROR = 2
"""Invalid configuration: a declared path is missing or a config file is malformed."""

EXIT_EXTRACTION_ERROR = 3
"""A discovery document archive could not be unpacked."""

EXIT_GENERATION_ERROR = 4
"""The external code generator failed for a discovery document."""

EXIT_REGISTRATION_ERROR = 5
"""Generated client-library output was missing or malformed."""

EXIT_TASK_GRAPH_ERROR = 6
"""A task was unknown or the task dependencies form a cycle."""

EXIT_PLUGIN_ERROR = 10
"""A plugin failed to load, apply, or resolve."""
